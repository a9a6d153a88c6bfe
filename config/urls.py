"""URL configuration for GoWheels project.

The `urlpatterns` list routes URLs to views. It includes the Django admin
and the application‑level routes of each app.
"""
from django.conf import settings  # type: ignore
from django.conf.urls.static import static  # type: ignore
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView  # type: ignore

urlpatterns = [
    path('admin/', admin.site.urls),
    # Application URLs
    path('api/auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('api/', include('apps.cars.urls')),
    path('api/', include('apps.bookings.urls')),
    path('api/payments/', include(('apps.payments.urls', 'payments'), namespace='payments')),
    # API schema
    path('api/schema', SpectacularAPIView.as_view(), name='schema'),
]

# Serve uploaded booking images while developing
urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
