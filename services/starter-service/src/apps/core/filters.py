# services/starter-service/src/apps/core/filters.py
"""
django-filter FilterSets for the entity collections.

``?name=`` matches the entity's natural name (``username`` for users)
by case-insensitive containment.
"""

import django_filters

from apps.core.models import User, Role, Permission, Type


class GenericEntityFilterSet(django_filters.FilterSet):
    name = django_filters.CharFilter(method='filter_name')
    owner = django_filters.UUIDFilter(field_name='owner_id')

    def filter_name(self, queryset, name, value):
        return queryset.find_all_containing_name_ignore_case(value)


class UserFilter(GenericEntityFilterSet):
    email = django_filters.CharFilter(lookup_expr='icontains')
    enabled = django_filters.BooleanFilter()
    verified = django_filters.BooleanFilter()
    role = django_filters.UUIDFilter(field_name='role_id')

    class Meta:
        model = User
        fields = ['name', 'owner', 'email', 'enabled', 'verified', 'role']


class TypeFilter(GenericEntityFilterSet):

    class Meta:
        model = Type
        fields = ['name', 'owner']


class RoleFilter(GenericEntityFilterSet):

    class Meta:
        model = Role
        fields = ['name', 'owner']


class PermissionFilter(GenericEntityFilterSet):

    class Meta:
        model = Permission
        fields = ['name', 'owner']
