# services/starter-service/src/config/urls.py
"""
URL configuration for Starter Service
"""

from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView

from shared.common.health import get_health_urlpatterns

urlpatterns = [
    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]

# Health checks
urlpatterns += get_health_urlpatterns()

# API
urlpatterns += [
    path('', include('apps.core.urls')),
]
