# services/starter-service/src/apps/core/urls.py
"""
URL configuration for Starter Service API

Endpoints:
    /Users          - User management, registration, verification, passwords
    /Types          - Generic type records
    /Roles          - Role management
    /Permissions    - Permission management
    /auth/token     - Password login, returns a Bearer access token
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.core.views import (
    UserViewSet,
    TypeViewSet,
    RoleViewSet,
    PermissionViewSet,
    AuthViewSet,
)

router = DefaultRouter(trailing_slash=False)
router.register(r'Users', UserViewSet, basename='user')
router.register(r'Types', TypeViewSet, basename='type')
router.register(r'Roles', RoleViewSet, basename='role')
router.register(r'Permissions', PermissionViewSet, basename='permission')
router.register(r'auth', AuthViewSet, basename='auth')

urlpatterns = [
    path('', include(router.urls)),
]
