# services/starter-service/src/apps/core/serializers/type.py
from rest_framework import serializers

from apps.core.models import Type
from .base import GenericEntitySerializer


class TypeSerializer(GenericEntitySerializer):
    """Serializer for Type records."""

    name = serializers.CharField(max_length=255)

    class Meta(GenericEntitySerializer.Meta):
        model = Type
        fields = GenericEntitySerializer.Meta.fields + ['name']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name may not be blank.")
        return value
