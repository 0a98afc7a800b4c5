# services/starter-service/src/apps/core/tests/test_initial_data.py
"""
Tests for seeding of permissions, roles, the administrator and types.
"""

import pytest
from io import StringIO

from django.core.management import call_command

from apps.core.models import User, Role, Permission, Type
from apps.core.services import InitialDataLoader, seed_initial_data


pytestmark = pytest.mark.django_db


class TestInitialDataLoader:

    def test_permissions_cover_every_type(self, initial_data):
        assert len(initial_data.permissions) == 16
        assert 'users.create' in initial_data.permissions
        assert 'permissions.delete' in initial_data.permissions

    def test_seeded_on_migrate(self, initial_data):
        assert Permission.objects.count() == len(initial_data.permissions)
        assert set(Role.objects.values_list('name', flat=True)) == {Role.ADMIN, Role.USER}
        assert Type.objects.count() == len(initial_data.types)

    def test_admin_role_has_all_permissions(self, admin_role, initial_data):
        names = set(admin_role.permissions.values_list('name', flat=True))

        assert names == set(initial_data.permissions)

    def test_user_role_reads_only(self, user_role):
        names = set(user_role.permissions.values_list('name', flat=True))

        assert names == {'users.read', 'roles.read', 'permissions.read', 'types.read'}

    def test_admin_account(self):
        admin = User.objects.get(username='admin')

        assert admin.email == 'admin@example.com'
        assert admin.check_password('admin-password')
        assert admin.enabled
        assert admin.verified
        assert admin.role.name == Role.ADMIN

    def test_load_again_creates_nothing(self, initial_data):
        assert initial_data.load() == {'permissions': 0, 'roles': 0, 'users': 0, 'types': 0}

    def test_load_restores_missing_records(self, initial_data):
        Type.objects.filter(name='Other').delete()
        Permission.objects.filter(name='types.read').delete()

        created = initial_data.load()

        assert created['types'] == 1
        assert created['permissions'] == 1
        assert Role.objects.get(name=Role.USER).has_permission('types.read')

    def test_custom_config(self):
        loader = InitialDataLoader({'ADMIN_USERNAME': 'boss', 'TYPES': ['Extra']})

        created = loader.load()

        assert created['users'] == 1
        assert created['types'] == 1
        boss = User.objects.get(username='boss')
        assert boss.email == 'boss@localhost'
        assert not boss.has_usable_password()

    def test_without_admin(self):
        assert InitialDataLoader({'TYPES': []}).users == []

    def test_seed_disabled(self, settings):
        settings.INITIAL_DATA = {'ENABLED': False, 'TYPES': ['Skipped']}

        seed_initial_data()

        assert not Type.objects.filter(name='Skipped').exists()


class TestLoadInitialDataCommand:

    def test_command(self):
        Type.objects.all().delete()
        out = StringIO()

        call_command('load_initial_data', stdout=out)

        assert Type.objects.count() == 2
        assert 'Initial data loaded' in out.getvalue()
