# services/starter-service/src/apps/core/views/rbac.py
"""
Role and Permission ViewSets - RBAC management

- /Roles        - CRUD on roles; ``permissions`` holds permission ids
- /Permissions  - CRUD on permission names
"""

from apps.core.filters import RoleFilter, PermissionFilter
from apps.core.serializers import RoleSerializer, PermissionSerializer
from apps.core.services import RoleService, PermissionService
from .base import GenericEntityViewSet


class RoleViewSet(GenericEntityViewSet):
    service_class = RoleService
    serializer_class = RoleSerializer
    filterset_class = RoleFilter


class PermissionViewSet(GenericEntityViewSet):
    service_class = PermissionService
    serializer_class = PermissionSerializer
    filterset_class = PermissionFilter
