# services/starter-service/src/apps/core/services/base.py
"""
Generic Entity Service

CRUD operations shared by every managed entity, and the service-level
exceptions the views translate into HTTP responses.
"""

import logging
from typing import Any, Dict, List, Optional

from django.db import IntegrityError, transaction

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for service errors"""
    def __init__(self, message: str, code: str = 'service_error', details: Dict = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class EntityNotFoundError(ServiceError):
    """Entity not found"""
    def __init__(self, type_name: str, identifier: Any = None):
        super().__init__(
            f"{type_name} not found" + (f": {identifier}" if identifier else ""),
            'not_found'
        )


class EntityExistsError(ServiceError):
    """Entity with the same id or name already exists"""
    def __init__(self, type_name: str, identifier: Any = None):
        super().__init__(
            f"{type_name} already exists" + (f": {identifier}" if identifier else ""),
            'already_exists',
            {'identifier': str(identifier)} if identifier else None
        )


class InvalidTokenError(ServiceError):
    """Verification or reset token is invalid, expired or already used"""
    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, 'invalid_token')


class PasswordPolicyError(ServiceError):
    """Password does not meet the configured validators"""
    def __init__(self, violations: List[str]):
        super().__init__(
            "Password does not meet requirements",
            'password_policy',
            {'violations': violations}
        )


class GenericEntityService:
    """
    CRUD over one generic entity model.

    ``data`` dictionaries hold model field names; many-to-many values are
    applied after the entity is saved. Update keeps fields missing from
    ``data`` and stamps ``modified_at``.
    """

    model = None

    @property
    def type_name(self) -> str:
        return self.model.TYPE_NAME

    # ==================== QUERIES ====================

    def find_all(self):
        return self.model.objects.all()

    def find_by_id(self, pk):
        return self.model.objects.find_by_id(pk)

    def get(self, pk):
        entity = self.find_by_id(pk)
        if entity is None:
            raise EntityNotFoundError(self.type_name, pk)
        return entity

    def find_by_name(self, name):
        return self.model.objects.find_by_name_ignore_case(name)

    def find_all_containing_name(self, fragment):
        return self.model.objects.find_all_containing_name_ignore_case(fragment)

    def exists(self, pk=None, name=None) -> bool:
        return self.model.objects.exists_by_id_or_name(pk, name)

    # ==================== COMMANDS ====================

    @transaction.atomic
    def create(self, data: Dict):
        data = dict(data)
        related = self._pop_many_to_many(data)

        entity = self.model(**data)
        self.prepare_new(entity)

        if not self.model.objects.add(entity):
            raise EntityExistsError(self.type_name, entity.display_name or entity.pk)

        self._set_many_to_many(entity, related)

        logger.info(f"{self.type_name} created: {entity.pk} ({entity.display_name})")
        return entity

    @transaction.atomic
    def update(self, pk, data: Dict):
        entity = self.get(pk)

        data = dict(data)
        data.pop('id', None)
        related = self._pop_many_to_many(data)

        for field, value in data.items():
            setattr(entity, field, value)
        entity.touch()

        if self.model.objects.exclude(pk=entity.pk).exists_like(entity):
            raise EntityExistsError(self.type_name, entity.display_name)

        try:
            with transaction.atomic():
                entity.save()
        except IntegrityError:
            raise EntityExistsError(self.type_name, entity.display_name)

        self._set_many_to_many(entity, related)

        logger.info(f"{self.type_name} updated: {entity.pk}")
        return entity

    @transaction.atomic
    def delete_by_id(self, pk) -> None:
        entity = self.get(pk)
        entity.delete()
        logger.info(f"{self.type_name} deleted: {pk}")

    # ==================== HOOKS ====================

    def prepare_new(self, entity) -> None:
        """Called on a new, unsaved entity before it is added"""

    def _pop_many_to_many(self, data: Dict) -> Dict[str, Optional[list]]:
        return {
            field.name: data.pop(field.name)
            for field in self.model._meta.many_to_many
            if field.name in data
        }

    def _set_many_to_many(self, entity, related: Dict) -> None:
        for name, values in related.items():
            getattr(entity, name).set(values or [])
