# services/starter-service/src/apps/core/services/initial_data.py
"""
Initial data seeding

Creates the permissions of every managed type, the default roles, the
administrator account and the configured types. Running it again only
adds what is missing.
"""

import logging
from typing import Dict, List

from django.conf import settings
from django.db import transaction

from apps.core.models import User, Role, Permission, Type, GenericOperation

logger = logging.getLogger(__name__)

MANAGED_MODELS = (User, Role, Permission, Type)


class InitialDataLoader:
    """
    Seeds the database from ``settings.INITIAL_DATA``.

    ``permissions``, ``roles``, ``users`` and ``types`` describe what
    ``load`` guarantees to exist afterwards.
    """

    def __init__(self, config: Dict = None):
        config = config if config is not None else getattr(settings, 'INITIAL_DATA', {})

        self.permissions: List[str] = [
            name
            for model in MANAGED_MODELS
            for name in GenericOperation.all_permission_names(model.TYPE_NAME)
        ]
        self.roles: Dict[str, List[str]] = {
            Role.ADMIN: list(self.permissions),
            Role.USER: [
                GenericOperation.READ.permission_name(model.TYPE_NAME)
                for model in MANAGED_MODELS
            ],
        }
        self.users: List[Dict] = []
        if config.get('ADMIN_USERNAME'):
            self.users.append({
                'username': config['ADMIN_USERNAME'],
                'email': config.get('ADMIN_EMAIL') or f"{config['ADMIN_USERNAME']}@localhost",
                'password': config.get('ADMIN_PASSWORD'),
                'role': Role.ADMIN,
            })
        self.types: List[str] = list(config.get('TYPES', []))

    @transaction.atomic
    def load(self) -> Dict[str, int]:
        """Create missing initial records. Returns how many of each kind were created."""
        created = {
            'permissions': self._load_permissions(),
            'roles': self._load_roles(),
            'users': self._load_users(),
            'types': self._load_types(),
        }
        if any(created.values()):
            logger.info(f"Initial data loaded: {created}")
        return created

    def _load_permissions(self) -> int:
        count = 0
        for name in self.permissions:
            if not Permission.objects.exists_by_id_or_name(name=name):
                Permission.objects.create(name=name)
                count += 1
        return count

    def _load_roles(self) -> int:
        count = 0
        for role_name, permission_names in self.roles.items():
            role = Role.objects.find_by_name_ignore_case(role_name)
            if role is None:
                role = Role.objects.create(name=role_name)
                count += 1
            role.permissions.add(*Permission.objects.filter(name__in=permission_names))
        return count

    def _load_users(self) -> int:
        count = 0
        for user_data in self.users:
            if (User.objects.exists_by_id_or_name(name=user_data['username'])
                    or User.objects.exists_by_id_or_name(name=user_data['email'])):
                continue
            User.objects.create_user(
                username=user_data['username'],
                email=user_data['email'],
                password=user_data['password'],
                enabled=True,
                verified=True,
                role=Role.objects.find_by_name_ignore_case(user_data['role']),
            )
            count += 1
        return count

    def _load_types(self) -> int:
        count = 0
        for name in self.types:
            if not Type.objects.exists_by_id_or_name(name=name):
                Type.objects.create(name=name)
                count += 1
        return count


def seed_initial_data(sender=None, **kwargs):
    """``post_migrate`` receiver; honours ``INITIAL_DATA['ENABLED']``"""
    if not getattr(settings, 'INITIAL_DATA', {}).get('ENABLED', False):
        return
    InitialDataLoader().load()
