# services/starter-service/src/apps/core/permissions.py
"""
DRF Permission Classes

Maps viewset actions on generic entity collections to the
``<type>.<operation>`` permissions held by the caller's role.
"""

import logging

from rest_framework import permissions

from apps.core.models import GenericOperation
from apps.core.services import PermissionService

logger = logging.getLogger(__name__)


class HasGenericPermission(permissions.BasePermission):
    """
    Requires an authenticated caller whose role holds the permission for
    the current action.

    The view provides ``entity_type_name`` and may extend
    ``action_operations`` with its own actions.
    """

    message = 'You do not have permission to perform this action.'

    action_operations = {
        'list': GenericOperation.READ,
        'retrieve': GenericOperation.READ,
        'create': GenericOperation.CREATE,
        'update': GenericOperation.UPDATE,
        'partial_update': GenericOperation.UPDATE,
        'destroy': GenericOperation.DELETE,
    }

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not user.is_authenticated:
            return False

        operations = {**self.action_operations, **getattr(view, 'action_operations', {})}
        operation = operations.get(view.action)
        if operation is None:
            return False

        allowed = PermissionService().can(user, view.entity_type_name, operation)
        if not allowed:
            logger.warning(
                f"Permission denied: {user} {operation.permission_name(view.entity_type_name)}"
            )
        return allowed
