# services/starter-service/src/apps/core/views/user.py
"""
User ViewSet - user management and self-service workflows

Provides endpoints for:
- User CRUD operations (see GenericEntityViewSet)
- Lookup by username or email
- Registration and email verification
- Password reset and change
- Enabling and disabling accounts
"""

import logging

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from apps.core.filters import UserFilter
from apps.core.models import GenericOperation
from apps.core.parsers import PlainTextParser, PlainTextContentNegotiation
from apps.core.serializers import (
    UserSerializer,
    RegisterSerializer,
    PasswordChangeSerializer,
    PasswordResetConfirmSerializer,
    ActivateSerializer,
)
from apps.core.services import UserService, ServiceError
from .base import GenericEntityViewSet

logger = logging.getLogger(__name__)


class UserViewSet(GenericEntityViewSet):
    """
    ViewSet for User management.

    Endpoints:
    - GET /Users/get?username=&email= - Find one user
    - POST /Users/register - Register (anonymous)
    - PUT /Users/verify/{id} - Verify email with the code in the body (anonymous)
    - POST /Users/send_verification - Resend verification for the email in the body
    - POST /Users/reset_password - Request a reset code for the email in the body (anonymous)
    - PUT /Users/reset_password - Set a new password with a reset code (anonymous)
    - PUT /Users/change_password/{id} - Set a user's password
    - PUT /Users/{id}/activate - Enable or disable a user
    """

    service_class = UserService
    serializer_class = UserSerializer
    filterset_class = UserFilter
    parser_classes = [JSONParser, PlainTextParser]
    content_negotiation_class = PlainTextContentNegotiation

    action_operations = {
        'get_by_username_or_email': GenericOperation.READ,
        'change_password': GenericOperation.UPDATE,
        'activate': GenericOperation.UPDATE,
    }

    def get_serializer_class(self):
        if self.action == 'register':
            return RegisterSerializer
        if self.action == 'change_password':
            return PasswordChangeSerializer
        if self.action == 'reset_password' and self.request.method == 'PUT':
            return PasswordResetConfirmSerializer
        if self.action == 'activate':
            return ActivateSerializer
        return UserSerializer

    def get_queryset(self):
        return super().get_queryset().select_related('role')

    @staticmethod
    def _body_value(request, key: str):
        """A single-value body: plain text, a JSON scalar, or ``{key: value}``"""
        data = request.data
        if isinstance(data, dict):
            return data.get(key)
        return data

    @classmethod
    def _body_text(cls, request, key: str):
        """Like ``_body_value`` but None unless the value is a string"""
        value = cls._body_value(request, key)
        return value if isinstance(value, str) else None

    # ==================== LOOKUP ====================

    @action(detail=False, methods=['get'], url_path='get')
    def get_by_username_or_email(self, request):
        """Return the single user matching ``username`` or ``email``."""
        user = self.service.find_by_username_or_email(
            username=request.query_params.get('username'),
            email=request.query_params.get('email'),
        )
        if user is None:
            return Response(status=status.HTTP_404_NOT_FOUND)
        return Response(UserSerializer(user, context=self.get_serializer_context()).data)

    # ==================== REGISTRATION ====================

    @action(detail=False, methods=['post'], permission_classes=[AllowAny])
    def register(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            self.service.register(
                username=serializer.validated_data['username'],
                email=serializer.validated_data['email'],
                password=serializer.validated_data['password'],
            )
        except ServiceError as e:
            return self._error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(
        detail=False,
        methods=['put'],
        url_path=r'verify/(?P<user_id>[^/.]+)',
        permission_classes=[AllowAny],
    )
    def verify(self, request, user_id=None):
        code = self._body_text(request, 'token')

        try:
            self.service.verify(user_id, code)
        except ServiceError as e:
            return self._error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['post'], permission_classes=[IsAuthenticated])
    def send_verification(self, request):
        """204 when a new code was sent, 200 when the user is already verified."""
        email = self._body_text(request, 'email')

        try:
            token = self.service.send_verification(email)
        except ServiceError as e:
            return self._error_response(e)

        if token is None:
            return Response(status=status.HTTP_200_OK)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ==================== PASSWORD MANAGEMENT ====================

    @action(detail=False, methods=['post', 'put'], permission_classes=[AllowAny])
    def reset_password(self, request):
        """
        POST: request a reset code for an email; always 204.
        PUT: set the password with ``{email, token, password, matchingPassword}``.
        """
        if request.method == 'POST':
            self.service.request_password_reset(self._body_text(request, 'email'))
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            self.service.reset_password(
                email=serializer.validated_data['email'],
                code=serializer.validated_data['token'],
                new_password=serializer.validated_data['password'],
            )
        except ServiceError as e:
            return self._error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['put'], url_path=r'change_password/(?P<user_id>[^/.]+)')
    def change_password(self, request, user_id=None):
        if self.service.find_by_id(user_id) is None:
            return Response(status=status.HTTP_404_NOT_FOUND)

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            self.service.change_password(user_id, serializer.validated_data['password'])
        except ServiceError as e:
            return self._error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    # ==================== STATUS ====================

    @action(detail=True, methods=['put'])
    def activate(self, request, pk=None):
        if self.service.find_by_id(pk) is None:
            return Response(status=status.HTTP_404_NOT_FOUND)

        serializer = self.get_serializer(data={'enabled': self._body_value(request, 'enabled')})
        serializer.is_valid(raise_exception=True)

        try:
            self.service.activate(pk, serializer.validated_data['enabled'])
        except ServiceError as e:
            return self._error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)
