# services/starter-service/src/apps/core/models/role.py
"""
Role and Permission models.

Permissions are plain names of the form ``<type>.<operation>`` and are
granted to users only through their role.
"""

from enum import Enum
from typing import List

from django.db import models

from .base import AbstractGenericEntity


class GenericOperation(str, Enum):
    """Operations guarded on every generic entity collection"""
    CREATE = 'create'
    READ = 'read'
    UPDATE = 'update'
    DELETE = 'delete'

    def permission_name(self, type_name: str) -> str:
        return f"{type_name.lower()}.{self.value}"

    @classmethod
    def all_permission_names(cls, type_name: str) -> List[str]:
        return [operation.permission_name(type_name) for operation in cls]


class Permission(AbstractGenericEntity):
    """
    Named permission, e.g. ``users.read``.
    """

    TYPE_NAME = 'Permissions'

    name = models.CharField(
        max_length=100,
        unique=True,
        help_text='Permission name (e.g., users.create, types.read)'
    )

    class Meta(AbstractGenericEntity.Meta):
        db_table = 'permissions'


class Role(AbstractGenericEntity):
    """
    Named group of permissions assigned to users.
    """

    TYPE_NAME = 'Roles'

    ADMIN = 'Admin'
    USER = 'User'

    name = models.CharField(max_length=100, unique=True)
    permissions = models.ManyToManyField(
        Permission,
        blank=True,
        related_name='roles'
    )

    class Meta(AbstractGenericEntity.Meta):
        db_table = 'roles'

    def has_permission(self, permission_name: str) -> bool:
        return self.permissions.filter(name__iexact=permission_name).exists()
