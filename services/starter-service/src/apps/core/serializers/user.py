# services/starter-service/src/apps/core/serializers/user.py
"""
User Serializers

Includes:
- UserSerializer: generic entity representation of a user
- RegisterSerializer: self-service registration
- PasswordChangeSerializer: new password with confirmation
- PasswordResetConfirmSerializer: reset with an emailed code
- ActivateSerializer: enable or disable an account
"""

from rest_framework import serializers

from apps.core.models import User, Role
from .base import GenericEntitySerializer


class UserSerializer(GenericEntitySerializer):
    """
    User representation used for CRUD.
    The password is never exposed or accepted here.
    """

    username = serializers.CharField(max_length=150)
    email = serializers.EmailField(max_length=255)
    enabled = serializers.BooleanField(required=False)
    verified = serializers.BooleanField(required=False)
    role = serializers.PrimaryKeyRelatedField(
        queryset=Role.objects.all(),
        required=False,
        allow_null=True
    )

    class Meta(GenericEntitySerializer.Meta):
        model = User
        fields = GenericEntitySerializer.Meta.fields + [
            'username',
            'email',
            'enabled',
            'verified',
            'role',
        ]

    def validate_username(self, value):
        return value.strip()

    def validate_email(self, value):
        """Normalize email to lowercase."""
        return value.lower().strip()


class PasswordConfirmationMixin(serializers.Serializer):
    """Password pair that must match"""

    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
    matchingPassword = serializers.CharField(
        source='matching_password',
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs.get('password') != attrs.get('matching_password'):
            raise serializers.ValidationError({
                'matchingPassword': "Passwords do not match."
            })
        return attrs


class RegisterSerializer(PasswordConfirmationMixin):
    """
    Serializer for user registration.
    """

    username = serializers.CharField(required=True, max_length=150)
    email = serializers.EmailField(required=True, max_length=255)

    def validate_email(self, value):
        return value.lower().strip()


class PasswordChangeSerializer(PasswordConfirmationMixin):
    """Serializer for setting a user's password."""


class PasswordResetConfirmSerializer(PasswordConfirmationMixin):
    """
    Serializer for password reset confirmation.
    """

    email = serializers.EmailField(required=True)
    token = serializers.CharField(required=True)

    def validate_email(self, value):
        return value.lower().strip()


class ActivateSerializer(serializers.Serializer):
    enabled = serializers.BooleanField(required=True)
