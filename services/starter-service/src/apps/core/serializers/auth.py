# services/starter-service/src/apps/core/serializers/auth.py
"""
Authentication Serializers
"""

from rest_framework import serializers


class TokenObtainSerializer(serializers.Serializer):
    """
    Serializer for the token request.
    ``username`` may also be the account email.
    """

    username = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class TokenResponseSerializer(serializers.Serializer):
    """
    Serializer for authentication token response.
    """

    access_token = serializers.CharField()
    token_type = serializers.CharField(default='Bearer')
    expires_in = serializers.IntegerField()
