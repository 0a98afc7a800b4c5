# services/starter-service/src/apps/core/views/type.py
from apps.core.filters import TypeFilter
from apps.core.serializers import TypeSerializer
from apps.core.services import TypeService
from .base import GenericEntityViewSet


class TypeViewSet(GenericEntityViewSet):
    """CRUD on /Types"""

    service_class = TypeService
    serializer_class = TypeSerializer
    filterset_class = TypeFilter
