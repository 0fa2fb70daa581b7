"""
Login contract tests and credential provider behaviour
"""
import pytest

from stock_ledger import create_app
from stock_ledger.buisness.auth.credential_provider import (
    AdminIdentity,
    CredentialProvider,
    StaticCredentialProvider,
)
from stock_ledger.config import TestingConfig


def login(client, username='admin', password='stock2025'):
    """Helper function to login the administrator"""
    return client.post('/api/login', json={'username': username, 'password': password})


def test_login_success_returns_token(client):
    response = login(client)
    assert response.status_code == 200
    assert response.get_json() == {
        'success': True,
        'message': 'Login successful',
        'token': 'test-api-token',
    }


@pytest.mark.parametrize("username, password", [
    ('admin', 'wrong'),
    ('root', 'stock2025'),
    ('', ''),
    ('admin', ' stock2025'),
])
def test_login_failure_is_401(client, username, password):
    response = login(client, username, password)
    assert response.status_code == 401
    body = response.get_json()
    assert body['success'] is False
    assert 'token' not in body


def test_login_with_non_json_body_is_401(client):
    response = client.post('/api/login', data='username=admin', content_type='application/x-www-form-urlencoded')
    assert response.status_code == 401


def test_login_sets_session_and_logout_clears_it(client):
    login(client)
    with client.session_transaction() as session:
        assert session.get('_user_id') == 'admin'

    response = client.post('/api/logout')
    assert response.status_code == 200
    with client.session_transaction() as session:
        assert '_user_id' not in session


def test_login_requires_post(client):
    assert client.get('/api/login').status_code == 405


def test_static_provider_disabled_without_password():
    provider = StaticCredentialProvider('admin', None, 'token')
    assert provider.is_enabled is False
    assert provider.authenticate('admin', '') is None
    assert provider.authenticate('admin', 'anything') is None
    assert provider.load_identity('admin') is None


def test_static_provider_round_trip():
    provider = StaticCredentialProvider('admin', 'stock2025', 'opaque')
    identity = provider.authenticate('admin', 'stock2025')
    assert isinstance(identity, AdminIdentity)
    assert identity.get_id() == 'admin'
    assert provider.issue_token(identity) == 'opaque'
    assert provider.load_identity('admin').username == 'admin'
    assert provider.load_identity('someone') is None


class DirectoryProvider(CredentialProvider):
    """Stand-in for an external identity source"""

    def __init__(self, users):
        self.users = users

    def authenticate(self, username, password):
        if self.users.get(username) == password:
            return AdminIdentity(username)
        return None

    def issue_token(self, identity):
        return f"token-for-{identity.username}"

    def load_identity(self, identity_id):
        return AdminIdentity(identity_id) if identity_id in self.users else None


def test_custom_credential_provider_is_used():
    app = create_app(TestingConfig, credential_provider=DirectoryProvider({'gerant': 'magasin'}))
    client = app.test_client()

    response = login(client, 'gerant', 'magasin')
    assert response.status_code == 200
    assert response.get_json()['token'] == 'token-for-gerant'

    assert login(client).status_code == 401, "The configured static pair is no longer consulted"
