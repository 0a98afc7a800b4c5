# services/starter-service/src/apps/core/views/base.py
"""
Generic Entity ViewSet

CRUD endpoints shared by every entity collection:

- GET    /<Type>        - List (filter with ?name=)
- POST   /<Type>        - Create; 409 when the id or name exists
- GET    /<Type>/{id}   - Retrieve; 404 when unknown
- PUT    /<Type>/{id}   - Update the given fields; 404 when unknown
- DELETE /<Type>/{id}   - Delete; 404 when unknown

Not-found and conflict responses carry no body.
"""

import logging

from rest_framework import status, viewsets
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from apps.core.permissions import HasGenericPermission
from apps.core.services import (
    ServiceError,
    EntityNotFoundError,
    EntityExistsError,
)

logger = logging.getLogger(__name__)


class GenericEntityViewSet(viewsets.GenericViewSet):
    """
    Base ViewSet over a ``GenericEntityService``.

    Subclasses set ``service_class``, ``serializer_class`` and
    ``filterset_class``.
    """

    service_class = None
    filter_backends = [DjangoFilterBackend]
    permission_classes = [HasGenericPermission]

    # Extra action -> GenericOperation, merged into HasGenericPermission's map
    action_operations = {}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.service = self.service_class()

    @property
    def entity_type_name(self) -> str:
        return self.service.type_name

    def get_queryset(self):
        return self.service.find_all()

    def _error_response(self, error: Exception) -> Response:
        """Translate a service error into a response."""
        if isinstance(error, EntityNotFoundError):
            return Response(status=status.HTTP_404_NOT_FOUND)

        if isinstance(error, EntityExistsError):
            return Response(status=status.HTTP_409_CONFLICT)

        if isinstance(error, ServiceError):
            return Response({
                'success': False,
                'error': {
                    'code': error.code,
                    'message': error.message,
                    'details': error.details,
                    'request_id': getattr(self.request, 'request_id', None),
                }
            }, status=status.HTTP_400_BAD_REQUEST)

        raise error

    # ==================== CRUD ====================

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response(serializer.data)

    def retrieve(self, request, pk=None, *args, **kwargs):
        entity = self.service.find_by_id(pk)
        if entity is None:
            return Response(status=status.HTTP_404_NOT_FOUND)
        return Response(self.get_serializer(entity).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            entity = self.service.create(serializer.validated_data)
        except ServiceError as e:
            return self._error_response(e)

        return Response(self.get_serializer(entity).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None, *args, **kwargs):
        entity = self.service.find_by_id(pk)
        if entity is None:
            return Response(status=status.HTTP_404_NOT_FOUND)

        serializer = self.get_serializer(entity, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            entity = self.service.update(pk, serializer.validated_data)
        except ServiceError as e:
            return self._error_response(e)

        return Response(self.get_serializer(entity).data)

    def destroy(self, request, pk=None, *args, **kwargs):
        try:
            self.service.delete_by_id(pk)
        except ServiceError as e:
            return self._error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)
