# services/starter-service/src/apps/core/models/user.py
"""
User model for the starter service.
"""

from django.db import models
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager

from .base import AbstractGenericEntity, GenericEntityQuerySet


class UserManager(BaseUserManager.from_queryset(GenericEntityQuerySet)):
    """User manager with the generic repository lookups"""

    def create_user(self, username, email, password=None, **extra_fields):
        """Create and return a user. Without a password the account gets an unusable one."""
        if not username:
            raise ValueError('Username is required')
        if not email:
            raise ValueError('Email is required')

        user = self.model(
            username=username,
            email=self.normalize_email(email).lower(),
            **extra_fields
        )
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, username, email, password=None, **extra_fields):
        """Create an enabled, verified user holding the administrator role"""
        from .role import Role

        extra_fields.setdefault('enabled', True)
        extra_fields.setdefault('verified', True)
        extra_fields.setdefault('role', Role.objects.find_by_name_ignore_case(Role.ADMIN))
        return self.create_user(username, email, password, **extra_fields)

    def find_by_username_or_email(self, username=None, email=None):
        """
        Return the single user whose username or email matches, ignoring case.

        Blank values are ignored. None when nothing or more than one user matches.
        """
        query = self.get_queryset()._identity_query(username=username, email=email)
        if not query:
            return None
        matches = list(self.filter(query)[:2])
        if len(matches) != 1:
            return None
        return matches[0]

    def find_by_email(self, email):
        if not email:
            return None
        return self.filter(email__iexact=email.strip()).first()


class User(AbstractBaseUser, AbstractGenericEntity):
    """
    Account of a person using the API.

    Authorization comes from ``role``; the password stays unusable until
    the user registers or resets it.
    """

    TYPE_NAME = 'Users'
    NAME_FIELD = 'username'
    UNIQUE_NAME_FIELDS = ('username', 'email')

    username = models.CharField(
        max_length=150,
        unique=True,
        help_text='Login name, unique ignoring case'
    )
    email = models.EmailField(
        max_length=255,
        unique=True,
        help_text='Email address, unique ignoring case'
    )

    # Status
    enabled = models.BooleanField(default=True)
    verified = models.BooleanField(default=False)

    role = models.ForeignKey(
        'core.Role',
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='users'
    )

    objects = UserManager()

    USERNAME_FIELD = 'username'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['email']

    class Meta(AbstractGenericEntity.Meta):
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'

    def __str__(self):
        return self.username

    @property
    def is_active(self):
        return self.enabled

    @property
    def role_name(self):
        return self.role.name if self.role_id else None

    def has_permission(self, permission_name: str) -> bool:
        """Check the user's role for a permission, ignoring case"""
        if not self.role_id:
            return False
        return self.role.permissions.filter(name__iexact=permission_name).exists()
