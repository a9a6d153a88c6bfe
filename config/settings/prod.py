"""Production settings for GoWheels project.

This module extends the base settings with production specific
configuration. Ensure that sensitive values are provided via
environment variables and that security settings are appropriate for
production use.
"""

from django.core.exceptions import ImproperlyConfigured  # type: ignore

from .base import *  # noqa: F401,F403

# Never run with debug enabled in production
DEBUG = False

# Allowed hosts should be defined explicitly via environment variable
ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', '').split(',')  # noqa: F405

# Configure secure proxies and cookies
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True

# Token keys must come from the environment in production
for _name in ('ACCESS_TOKEN_SECRET', 'REFRESH_TOKEN_SECRET'):
    if not os.environ.get(_name):  # noqa: F405
        raise ImproperlyConfigured(f"{_name} must be set in production.")
