# services/starter-service/src/apps/core/services/type_service.py
from apps.core.models import Type
from .base import GenericEntityService


class TypeService(GenericEntityService):
    """CRUD over generic Type records"""

    model = Type
