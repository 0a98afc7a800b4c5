# services/starter-service/src/apps/core/models/type.py
from django.db import models

from .base import AbstractGenericEntity


class Type(AbstractGenericEntity):
    """A named, owned type record"""

    TYPE_NAME = 'Types'

    name = models.CharField(max_length=255)

    class Meta(AbstractGenericEntity.Meta):
        db_table = 'types'
