# services/starter-service/src/apps/core/services/role_service.py
"""
Role and Permission Services - RBAC layer

Roles group named permissions; a user is authorized for an operation
when their role holds ``<type>.<operation>``.
"""

import logging
from typing import Optional, Set

from apps.core.models import User, Role, Permission, GenericOperation
from .base import GenericEntityService

logger = logging.getLogger(__name__)


class RoleService(GenericEntityService):
    model = Role

    def find_all(self):
        return Role.objects.prefetch_related('permissions')


class PermissionService(GenericEntityService):
    model = Permission

    def get_user_permissions(self, user: Optional[User]) -> Set[str]:
        """Lower-cased permission names granted through the user's role"""
        if not user or not getattr(user, 'role_id', None):
            return set()
        names = user.role.permissions.values_list('name', flat=True)
        return {name.lower() for name in names}

    def has_permission(self, user: Optional[User], permission_name: str) -> bool:
        """
        Check if user has a specific permission.

        Disabled and anonymous users have none.
        """
        if not user or not user.is_authenticated or not user.is_active:
            return False
        return permission_name.lower() in self.get_user_permissions(user)

    def can(self, user: Optional[User], type_name: str, operation: GenericOperation) -> bool:
        return self.has_permission(user, operation.permission_name(type_name))
