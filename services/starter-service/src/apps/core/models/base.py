# services/starter-service/src/apps/core/models/base.py
"""
Generic entity base model and its repository-style queryset.

Every managed entity (users, roles, permissions, types) shares the same
identity, audit and ownership columns and the same lookup operations.
"""

import uuid
from typing import Optional

from django.db import IntegrityError, models, transaction

from shared.common.mixins import AuditMixin, OwnedMixin, UUIDPrimaryKeyMixin


def parse_uuid(value) -> Optional[uuid.UUID]:
    """Return ``value`` as a UUID, or None when it is empty or malformed."""
    if value is None or value == '':
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


class GenericEntityQuerySet(models.QuerySet):
    """
    Repository operations shared by all generic entities.

    Name lookups use ``model.NAME_FIELD``; uniqueness checks use every field
    in ``model.UNIQUE_NAME_FIELDS``.
    """

    def _name_field(self) -> str:
        return self.model.NAME_FIELD

    def _identity_query(self, pk=None, **values) -> models.Q:
        query = models.Q()
        pk = parse_uuid(pk)
        if pk is not None:
            query |= models.Q(pk=pk)
        for field, value in values.items():
            if value:
                query |= models.Q(**{f'{field}__iexact': value})
        return query

    def find_by_id(self, pk):
        pk = parse_uuid(pk)
        if pk is None:
            return None
        return self.filter(pk=pk).first()

    def find_by_name_ignore_case(self, name):
        """
        Return the single entity whose name equals ``name`` ignoring case.

        None when ``name`` is None, nothing matches, or the match is not unique.
        """
        if name is None:
            return None
        matches = list(self.filter(**{f'{self._name_field()}__iexact': name})[:2])
        if len(matches) != 1:
            return None
        return matches[0]

    def find_all_containing_name_ignore_case(self, fragment):
        return self.filter(**{f'{self._name_field()}__icontains': fragment or ''})

    def exists_by_id_or_name(self, pk=None, name=None) -> bool:
        """True when an entity has this id, or any unique name field equals ``name``."""
        values = {field: name for field in self.model.UNIQUE_NAME_FIELDS}
        query = self._identity_query(pk, **values)
        if not query:
            return False
        return self.filter(query).exists()

    def exists_like(self, entity) -> bool:
        """True when a stored entity clashes with ``entity`` on id or a unique name."""
        values = {field: getattr(entity, field) for field in self.model.UNIQUE_NAME_FIELDS}
        query = self._identity_query(entity.pk, **values)
        if not query:
            return False
        return self.filter(query).exists()

    def add(self, entity) -> bool:
        """Insert ``entity`` unless it clashes with a stored one. Returns whether it was saved."""
        if self.exists_like(entity):
            return False
        try:
            with transaction.atomic(using=self.db):
                entity.save(force_insert=True, using=self.db)
        except IntegrityError:
            return False
        return True


GenericEntityManager = models.Manager.from_queryset(GenericEntityQuerySet)


class AbstractGenericEntity(UUIDPrimaryKeyMixin, AuditMixin, OwnedMixin):
    """
    Base for every managed entity.

    ``TYPE_NAME`` is the public collection name used for permission names
    (``<type>.<operation>``).
    """

    TYPE_NAME = None
    NAME_FIELD = 'name'
    UNIQUE_NAME_FIELDS = ('name',)

    objects = GenericEntityManager()

    class Meta:
        abstract = True
        ordering = ['created_at']

    @property
    def display_name(self) -> str:
        return getattr(self, self.NAME_FIELD, '') or ''

    def __str__(self):
        return self.display_name

