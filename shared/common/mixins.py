# shared/common/mixins.py
"""
Reusable Model Mixins
"""

import uuid
from django.conf import settings
from django.db import models
from django.utils import timezone


class UUIDPrimaryKeyMixin(models.Model):
    """
    Mixin that provides UUID as primary key instead of auto-increment integer.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for this record"
    )

    class Meta:
        abstract = True


class AuditMixin(models.Model):
    """
    Mixin that tracks who created and last modified a record, and when.

    ``modified_at`` stays empty until the record is first updated.
    """

    created_at = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        help_text="When this record was created"
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        help_text="User who created this record"
    )
    modified_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When this record was last updated"
    )
    modified_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        help_text="User who last updated this record"
    )

    class Meta:
        abstract = True

    def touch(self, modified_by=None):
        """Stamp the modification time and, when given, the modifying user"""
        self.modified_at = timezone.now()
        if modified_by is not None:
            self.modified_by = modified_by


class OwnedMixin(models.Model):
    """
    Mixin for records that belong to a user.
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        help_text="User owning this record"
    )

    class Meta:
        abstract = True
