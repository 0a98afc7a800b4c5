# services/starter-service/src/apps/core/serializers/role.py
"""
Role and Permission Serializers - RBAC management

Includes:
- PermissionSerializer: permission names such as ``users.read``
- RoleSerializer: role with the ids of its permissions
"""

from rest_framework import serializers

from apps.core.models import Role, Permission
from .base import GenericEntitySerializer


class PermissionSerializer(GenericEntitySerializer):
    """
    Serializer for Permission model.
    """

    name = serializers.CharField(max_length=100)

    class Meta(GenericEntitySerializer.Meta):
        model = Permission
        fields = GenericEntitySerializer.Meta.fields + ['name']

    def validate_name(self, value):
        """Permission names are stored lower case."""
        return value.strip().lower()


class RoleSerializer(GenericEntitySerializer):
    """
    Serializer for Role model with its permissions.
    """

    name = serializers.CharField(max_length=100)
    permissions = serializers.PrimaryKeyRelatedField(
        queryset=Permission.objects.all(),
        many=True,
        required=False
    )

    class Meta(GenericEntitySerializer.Meta):
        model = Role
        fields = GenericEntitySerializer.Meta.fields + ['name', 'permissions']

    def validate_name(self, value):
        return value.strip()
