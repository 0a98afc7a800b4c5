# services/starter-service/src/apps/core/serializers/base.py
"""
Generic entity serializer.

Audit and ownership fields are exposed in camelCase. Fields are declared
explicitly so uniqueness is decided by the service (409) rather than by
serializer validators (400).
"""

from rest_framework import serializers

from apps.core.models import User


class UserReferenceField(serializers.PrimaryKeyRelatedField):
    """Reference to a user by id; unknown ids fail validation"""

    def __init__(self, **kwargs):
        kwargs.setdefault('queryset', User.objects.all())
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_null', True)
        super().__init__(**kwargs)


class GenericEntitySerializer(serializers.ModelSerializer):
    """
    Base serializer for every generic entity.

    ``id`` may be supplied on create; ``createdAt`` and ``modifiedAt`` are
    set by the server.
    """

    id = serializers.UUIDField(required=False)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    createdBy = UserReferenceField(source='created_by')
    modifiedAt = serializers.DateTimeField(source='modified_at', read_only=True)
    modifiedBy = UserReferenceField(source='modified_by')
    owner = UserReferenceField()

    class Meta:
        fields = [
            'id',
            'createdAt',
            'createdBy',
            'modifiedAt',
            'modifiedBy',
            'owner',
        ]
