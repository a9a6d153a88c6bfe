"""Users app package.

Holds the email-login user model, the access/refresh token issuer, the
DRF authentication class that turns bearer tokens into identities and
the registration/login/refresh flows.
"""
