# services/starter-service/src/apps/core/views/auth.py
"""
Authentication ViewSet

- POST /auth/token - Exchange username (or email) and password for an access token
"""

import logging
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from drf_spectacular.utils import extend_schema

from apps.core.serializers import TokenObtainSerializer, TokenResponseSerializer
from apps.core.services import AuthService, AuthenticationError

logger = logging.getLogger(__name__)


class AuthViewSet(viewsets.ViewSet):
    """
    ViewSet for authentication operations.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.auth_service = AuthService()

    def _error_response(self, error: AuthenticationError, status_code: int) -> Response:
        """Create standardized error response."""
        return Response({
            'success': False,
            'error': {
                'code': error.code,
                'message': error.message,
                'details': error.details,
                'request_id': getattr(self.request, 'request_id', None),
            }
        }, status=status_code)

    @extend_schema(request=TokenObtainSerializer, responses={200: TokenResponseSerializer})
    @action(
        detail=False,
        methods=['post'],
        url_path='token',
        permission_classes=[AllowAny],
        authentication_classes=[],
    )
    def token(self, request):
        """
        Login endpoint.

        401 for unknown users, wrong passwords and disabled accounts.
        """
        serializer = TokenObtainSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = self.auth_service.obtain_token(
                username=serializer.validated_data['username'],
                password=serializer.validated_data['password'],
            )
        except AuthenticationError as e:
            return self._error_response(e, status.HTTP_401_UNAUTHORIZED)

        return Response(TokenResponseSerializer(result).data)
