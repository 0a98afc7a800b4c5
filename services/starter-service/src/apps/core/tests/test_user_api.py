# services/starter-service/src/apps/core/tests/test_user_api.py
"""
Tests for the /Users endpoints.
"""

import pytest
from uuid import uuid4

from django.core import mail
from rest_framework import status

from apps.core.models import User, Role, VerificationToken, PasswordResetToken


pytestmark = pytest.mark.django_db

NEW_PASSWORD = 'BrandNewPassword9'


def _password_pair(password=NEW_PASSWORD, matching=None):
    return {'password': password, 'matchingPassword': matching or password}


class TestUserCrud:
    """Tests for the generic entity endpoints on users."""

    def test_list(self, admin_client, regular_user):
        response = admin_client.get('/Users')

        assert response.status_code == status.HTTP_200_OK
        usernames = {user['username'] for user in response.json()}
        assert {'admin', 'root', 'reader'} <= usernames

    def test_list_filter_by_name(self, admin_client, regular_user):
        response = admin_client.get('/Users', {'name': 'READ'})

        assert response.status_code == status.HTTP_200_OK
        assert [user['username'] for user in response.json()] == ['reader']

    def test_retrieve(self, admin_client, regular_user, user_role):
        response = admin_client.get(f'/Users/{regular_user.id}')

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data['id'] == str(regular_user.id)
        assert data['username'] == 'reader'
        assert data['email'] == 'reader@test.com'
        assert data['enabled'] is True
        assert data['verified'] is True
        assert data['role'] == str(user_role.id)
        assert data['createdAt'] is not None
        assert data['modifiedAt'] is None
        assert 'password' not in data

    def test_retrieve_unknown(self, admin_client):
        response = admin_client.get(f'/Users/{uuid4()}')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.content == b''

    def test_retrieve_malformed_id(self, admin_client):
        response = admin_client.get('/Users/not-a-uuid')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_create(self, admin_client):
        response = admin_client.post(
            '/Users',
            {'username': 'newbie', 'email': 'NewBie@Test.com'},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()['email'] == 'newbie@test.com'

        user = User.objects.get(username='newbie')
        assert not user.has_usable_password()
        assert not user.verified

    def test_create_with_id(self, admin_client):
        user_id = uuid4()

        response = admin_client.post(
            '/Users',
            {'id': str(user_id), 'username': 'newbie', 'email': 'newbie@test.com'},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()['id'] == str(user_id)

    def test_create_existing_username(self, admin_client, regular_user):
        response = admin_client.post(
            '/Users',
            {'username': 'READER', 'email': 'other@test.com'},
            format='json'
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.content == b''

    def test_create_existing_email(self, admin_client, regular_user):
        response = admin_client.post(
            '/Users',
            {'username': 'other', 'email': 'reader@test.com'},
            format='json'
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_create_existing_id(self, admin_client, regular_user):
        response = admin_client.post(
            '/Users',
            {'id': str(regular_user.id), 'username': 'other', 'email': 'other@test.com'},
            format='json'
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_create_invalid_email(self, admin_client):
        response = admin_client.post(
            '/Users',
            {'username': 'newbie', 'email': 'not-an-email'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['success'] is False
        assert 'email' in response.json()['error']['details']

    def test_update_sets_modification_audit(self, admin_client, admin_user, regular_user):
        response = admin_client.put(
            f'/Users/{regular_user.id}',
            {'email': 'renamed@test.com', 'modifiedBy': str(admin_user.id)},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data['email'] == 'renamed@test.com'
        assert data['username'] == 'reader'
        assert data['modifiedBy'] == str(admin_user.id)
        assert data['modifiedAt'] is not None

        regular_user.refresh_from_db()
        assert regular_user.email == 'renamed@test.com'
        assert regular_user.modified_by_id == admin_user.id

    def test_update_to_existing_username(self, admin_client, regular_user, unverified_user):
        response = admin_client.put(
            f'/Users/{unverified_user.id}',
            {'username': 'Reader'},
            format='json'
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        unverified_user.refresh_from_db()
        assert unverified_user.username == 'pending'

    def test_update_unknown(self, admin_client):
        response = admin_client.put(f'/Users/{uuid4()}', {'username': 'ghost'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.content == b''

    def test_delete(self, admin_client, regular_user):
        response = admin_client.delete(f'/Users/{regular_user.id}')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not User.objects.filter(id=regular_user.id).exists()
        assert admin_client.get(f'/Users/{regular_user.id}').status_code == status.HTTP_404_NOT_FOUND

    def test_delete_unknown(self, admin_client):
        response = admin_client.delete(f'/Users/{uuid4()}')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.content == b''


class TestUserPermissions:
    """Tests for role based access to /Users."""

    def test_anonymous_is_unauthorized(self, api_client):
        response = api_client.get('/Users')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()['success'] is False

    def test_reader_can_list(self, user_client):
        assert user_client.get('/Users').status_code == status.HTTP_200_OK

    def test_reader_cannot_create(self, user_client):
        response = user_client.post(
            '/Users',
            {'username': 'newbie', 'email': 'newbie@test.com'},
            format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not User.objects.filter(username='newbie').exists()

    def test_reader_cannot_delete(self, user_client, unverified_user):
        response = user_client.delete(f'/Users/{unverified_user.id}')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_reader_cannot_change_password(self, user_client, unverified_user):
        response = user_client.put(
            f'/Users/change_password/{unverified_user.id}',
            _password_pair(),
            format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_user_without_role_is_forbidden(self, api_client, create_user, auth_service, user_password):
        user = create_user(username='norole')
        token = auth_service.obtain_token(username='norole', password=user_password)['access_token']
        api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

        response = api_client.get(f'/Users/{user.id}')

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestGetByUsernameOrEmail:
    """Tests for GET /Users/get."""

    def test_by_username(self, admin_client, regular_user):
        response = admin_client.get('/Users/get', {'username': 'Reader'})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['id'] == str(regular_user.id)

    def test_by_email(self, admin_client, regular_user):
        response = admin_client.get('/Users/get', {'email': 'READER@test.com'})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['username'] == 'reader'

    def test_by_both(self, admin_client, regular_user):
        response = admin_client.get('/Users/get', {'username': 'reader', 'email': 'reader@test.com'})

        assert response.status_code == status.HTTP_200_OK

    def test_unknown(self, admin_client):
        response = admin_client.get('/Users/get', {'username': 'nobody'})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.content == b''

    def test_without_query(self, admin_client):
        assert admin_client.get('/Users/get').status_code == status.HTTP_404_NOT_FOUND

    def test_matching_two_users(self, admin_client, regular_user, unverified_user):
        response = admin_client.get('/Users/get', {'username': 'reader', 'email': 'pending@test.com'})

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestRegistration:
    """Tests for POST /Users/register and PUT /Users/verify/{id}."""

    def _register(self, client, username='joiner', email='joiner@test.com', **overrides):
        payload = {'username': username, 'email': email, **_password_pair()}
        payload.update(overrides)
        return client.post('/Users/register', payload, format='json')

    def test_register(self, api_client, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            response = self._register(api_client)

        assert response.status_code == status.HTTP_204_NO_CONTENT

        user = User.objects.get(username='joiner')
        assert user.check_password(NEW_PASSWORD)
        assert user.enabled
        assert not user.verified
        assert user.role.name == Role.USER

        assert VerificationToken.objects.filter(user=user).count() == 1

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['joiner@test.com']
        token = VerificationToken.objects.get(user=user)
        assert token.code in mail.outbox[0].body
        assert f'/verify/{user.id}' in mail.outbox[0].body

    def test_register_twice(self, api_client):
        self._register(api_client)

        response = self._register(api_client)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert User.objects.filter(username='joiner').count() == 1
        assert VerificationToken.objects.count() == 1

    def test_register_existing_email(self, api_client, regular_user):
        response = self._register(api_client, username='someone', email='Reader@test.com')

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_register_mismatched_passwords(self, api_client):
        response = self._register(api_client, matchingPassword='SomethingElse1')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'matchingPassword' in response.json()['error']['details']
        assert not User.objects.filter(username='joiner').exists()

    def test_register_short_password(self, api_client):
        response = self._register(api_client, password='short', matchingPassword='short')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['error']['code'] == 'password_policy'
        assert not User.objects.filter(username='joiner').exists()

    def test_verify(self, api_client):
        self._register(api_client)
        user = User.objects.get(username='joiner')
        token = VerificationToken.objects.get(user=user)
        expiry_before = token.expiry_date

        response = api_client.put(f'/Users/verify/{user.id}', token.code, content_type='text/plain')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        user.refresh_from_db()
        assert user.verified
        token.refresh_from_db()
        assert token.expiry_date < expiry_before

    def test_verify_json_body(self, api_client):
        self._register(api_client)
        user = User.objects.get(username='joiner')
        token = VerificationToken.objects.get(user=user)

        response = api_client.put(f'/Users/verify/{user.id}', {'token': token.code}, format='json')

        assert response.status_code == status.HTTP_204_NO_CONTENT

    def test_verify_twice(self, api_client):
        self._register(api_client)
        user = User.objects.get(username='joiner')
        code = VerificationToken.objects.get(user=user).code
        api_client.put(f'/Users/verify/{user.id}', code, content_type='text/plain')

        response = api_client.put(f'/Users/verify/{user.id}', code, content_type='text/plain')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_verify_wrong_code(self, api_client):
        self._register(api_client)
        user = User.objects.get(username='joiner')

        response = api_client.put(f'/Users/verify/{user.id}', 'wrong', content_type='text/plain')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['error']['code'] == 'invalid_token'
        user.refresh_from_db()
        assert not user.verified

    def test_verify_unknown_user(self, api_client):
        response = api_client.put(f'/Users/verify/{uuid4()}', 'code', content_type='text/plain')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.content == b''


class TestSendVerification:
    """Tests for POST /Users/send_verification."""

    def test_already_verified(self, user_client, regular_user):
        response = user_client.post(
            '/Users/send_verification', 'reader@test.com', content_type='text/plain'
        )

        assert response.status_code == status.HTTP_200_OK
        assert not VerificationToken.objects.filter(user=regular_user).exists()
        assert len(mail.outbox) == 0

    def test_unverified(self, user_client, unverified_user, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            response = user_client.post(
                '/Users/send_verification', 'pending@test.com', content_type='text/plain'
            )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert VerificationToken.objects.filter(user=unverified_user).exists()
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['pending@test.com']

    def test_resend_replaces_code(self, user_client, unverified_user):
        user_client.post('/Users/send_verification', 'pending@test.com', content_type='text/plain')
        first_code = VerificationToken.objects.get(user=unverified_user).code

        user_client.post('/Users/send_verification', 'pending@test.com', content_type='text/plain')

        assert VerificationToken.objects.filter(user=unverified_user).count() == 1
        assert VerificationToken.objects.get(user=unverified_user).code != first_code

    def test_unknown_email(self, user_client):
        response = user_client.post(
            '/Users/send_verification', 'nobody@test.com', content_type='text/plain'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_anonymous(self, api_client, unverified_user):
        response = api_client.post(
            '/Users/send_verification', 'pending@test.com', content_type='text/plain'
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert not VerificationToken.objects.exists()


class TestPasswordReset:
    """Tests for POST and PUT /Users/reset_password."""

    def _request(self, client, email='reader@test.com'):
        return client.post('/Users/reset_password', email, content_type='text/plain')

    def _confirm(self, client, email='reader@test.com', token='', **overrides):
        payload = {'email': email, 'token': token, **_password_pair()}
        payload.update(overrides)
        return client.put('/Users/reset_password', payload, format='json')

    def test_request(self, api_client, regular_user, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            response = self._request(api_client)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        token = PasswordResetToken.objects.get(user=regular_user)
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['reader@test.com']
        assert token.code in mail.outbox[0].body

    def test_request_unknown_email(self, api_client):
        response = self._request(api_client, 'nobody@test.com')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not PasswordResetToken.objects.exists()
        assert len(mail.outbox) == 0

    def test_request_disabled_user(self, api_client, create_user):
        create_user(username='gone', email='gone@test.com', enabled=False)

        response = self._request(api_client, 'gone@test.com')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert len(mail.outbox) == 0

    def test_confirm(self, api_client, regular_user, auth_service):
        self._request(api_client)
        token = PasswordResetToken.objects.get(user=regular_user)
        expiry_before = token.expiry_date

        response = self._confirm(api_client, token=token.code)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        regular_user.refresh_from_db()
        assert regular_user.check_password(NEW_PASSWORD)
        token.refresh_from_db()
        assert token.expiry_date < expiry_before
        assert auth_service.obtain_token('reader', NEW_PASSWORD)['access_token']

    def test_confirm_token_used_once(self, api_client, regular_user):
        self._request(api_client)
        code = PasswordResetToken.objects.get(user=regular_user).code
        self._confirm(api_client, token=code)

        response = self._confirm(api_client, token=code, password='AnotherPass99', matchingPassword='AnotherPass99')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        regular_user.refresh_from_db()
        assert regular_user.check_password(NEW_PASSWORD)

    def test_confirm_wrong_token(self, api_client, regular_user, user_password):
        self._request(api_client)

        response = self._confirm(api_client, token='wrong')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        regular_user.refresh_from_db()
        assert regular_user.check_password(user_password)

    def test_confirm_without_request(self, api_client, regular_user):
        response = self._confirm(api_client, token='anything')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_confirm_unknown_email(self, api_client):
        response = self._confirm(api_client, email='nobody@test.com', token='anything')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_confirm_mismatched_passwords(self, api_client, regular_user):
        self._request(api_client)
        code = PasswordResetToken.objects.get(user=regular_user).code

        response = self._confirm(api_client, token=code, matchingPassword='Different123')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert PasswordResetToken.objects.get(user=regular_user).is_valid


class TestChangePassword:
    """Tests for PUT /Users/change_password/{id}."""

    def test_change(self, admin_client, regular_user):
        response = admin_client.put(
            f'/Users/change_password/{regular_user.id}',
            _password_pair(),
            format='json'
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        regular_user.refresh_from_db()
        assert regular_user.check_password(NEW_PASSWORD)
        assert regular_user.modified_at is not None

    def test_unknown_user(self, admin_client):
        response = admin_client.put(
            f'/Users/change_password/{uuid4()}',
            _password_pair(),
            format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.content == b''

    def test_mismatched_passwords(self, admin_client, regular_user, user_password):
        response = admin_client.put(
            f'/Users/change_password/{regular_user.id}',
            _password_pair(matching='Different123'),
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        regular_user.refresh_from_db()
        assert regular_user.check_password(user_password)

    def test_short_password(self, admin_client, regular_user):
        response = admin_client.put(
            f'/Users/change_password/{regular_user.id}',
            _password_pair('short'),
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['error']['code'] == 'password_policy'


class TestActivate:
    """Tests for PUT /Users/{id}/activate."""

    def test_disable(self, admin_client, regular_user, auth_service, user_password):
        response = admin_client.put(
            f'/Users/{regular_user.id}/activate', 'false', content_type='application/json'
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        regular_user.refresh_from_db()
        assert not regular_user.enabled

    def test_disabled_user_cannot_call_api(self, admin_client, regular_user, user_client):
        admin_client.put(f'/Users/{regular_user.id}/activate', 'false', content_type='application/json')

        response = user_client.get('/Users')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_enable(self, admin_client, create_user):
        user = create_user(enabled=False)

        response = admin_client.put(
            f'/Users/{user.id}/activate', {'enabled': True}, format='json'
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        user.refresh_from_db()
        assert user.enabled

    def test_plain_text_body(self, admin_client, regular_user):
        response = admin_client.put(
            f'/Users/{regular_user.id}/activate', 'false', content_type='text/plain'
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        regular_user.refresh_from_db()
        assert not regular_user.enabled

    def test_unknown_user(self, admin_client):
        response = admin_client.put(
            f'/Users/{uuid4()}/activate', 'true', content_type='application/json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_reader_forbidden(self, user_client, unverified_user):
        response = user_client.put(
            f'/Users/{unverified_user.id}/activate', 'false', content_type='application/json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestSingleValueBodies:
    """Tests for endpoints whose body is one email or code."""

    @pytest.mark.parametrize('body, content_type', [
        ('123', 'application/json'),
        ('["reader@test.com"]', 'application/json'),
        ('{"email": 5}', 'application/json'),
    ])
    def test_reset_request_non_string_email(self, api_client, regular_user, body, content_type):
        response = api_client.post('/Users/reset_password', body, content_type=content_type)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not PasswordResetToken.objects.exists()

    @pytest.mark.parametrize('body', ['123', '["pending@test.com"]', '{"email": 5}'])
    def test_send_verification_non_string_email(self, user_client, unverified_user, body):
        response = user_client.post('/Users/send_verification', body, content_type='application/json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert not VerificationToken.objects.exists()

    def test_verify_non_string_code(self, api_client, unverified_user, verification_token_service):
        verification_token_service.issue(unverified_user)

        response = api_client.put(f'/Users/verify/{unverified_user.id}', '42', content_type='application/json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_verify_non_ascii_code(self, api_client, unverified_user, verification_token_service):
        verification_token_service.issue(unverified_user)

        response = api_client.put(f'/Users/verify/{unverified_user.id}', 'café', content_type='text/plain')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        unverified_user.refresh_from_db()
        assert not unverified_user.verified

    def test_reset_confirm_non_ascii_token(self, api_client, regular_user, reset_token_service, user_password):
        reset_token_service.issue(regular_user)

        response = api_client.put(
            '/Users/reset_password',
            {'email': 'reader@test.com', 'token': 'café', **_password_pair()},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        regular_user.refresh_from_db()
        assert regular_user.check_password(user_password)

    def test_invalid_utf8_text(self, api_client, regular_user):
        response = api_client.post('/Users/reset_password', b'\xff\xfe', content_type='text/plain')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['success'] is False

    def test_body_without_content_type(self, api_client, regular_user):
        response = api_client.generic('POST', '/Users/reset_password', 'reader@test.com', content_type='')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert PasswordResetToken.objects.filter(user=regular_user).exists()


class TestEmailDispatch:
    """Emails are queued only once the request's transaction commits."""

    def test_register_waits_for_commit(self, api_client, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            response = api_client.post(
                '/Users/register',
                {'username': 'joiner', 'email': 'joiner@test.com', **_password_pair()},
                format='json'
            )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert len(callbacks) == 1
        assert len(mail.outbox) == 0

        callbacks[0]()

        assert mail.outbox[0].to == ['joiner@test.com']

    def test_reset_request_waits_for_commit(self, api_client, regular_user, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            api_client.post('/Users/reset_password', 'reader@test.com', content_type='text/plain')

        assert len(callbacks) == 1
        assert len(mail.outbox) == 0

    def test_failed_registration_queues_nothing(self, api_client, regular_user, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            api_client.post(
                '/Users/register',
                {'username': 'reader', 'email': 'reader@test.com', **_password_pair()},
                format='json'
            )

        assert callbacks == []
