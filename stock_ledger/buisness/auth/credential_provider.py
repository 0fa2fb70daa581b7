"""
Credential providers for the dashboard login

The login route only talks to the CredentialProvider interface, so the single
configured administrator can be swapped for a real identity source without
touching the presentation layer.
"""

import hmac
from abc import ABC, abstractmethod

from flask_login import UserMixin


class AdminIdentity(UserMixin):
    """Authenticated principal stored in the Flask-Login session"""

    def __init__(self, username: str):
        self.id = username
        self.username = username

    def __repr__(self):
        return f'<AdminIdentity {self.username}>'


class CredentialProvider(ABC):

    @property
    def is_enabled(self) -> bool:
        return True

    @abstractmethod
    def authenticate(self, username: str, password: str) -> AdminIdentity | None:
        """Return the identity for a valid credential pair, None otherwise."""

    @abstractmethod
    def issue_token(self, identity: AdminIdentity) -> str:
        """Return the opaque token handed to the front-end after login."""

    @abstractmethod
    def load_identity(self, identity_id: str) -> AdminIdentity | None:
        """Rebuild an identity from the id kept in the session."""


class StaticCredentialProvider(CredentialProvider):
    """
    One fixed username/password pair and a static token, taken from configuration.

    With no password configured every login attempt is rejected.
    """

    def __init__(self, username: str, password: str | None, token: str | None):
        self.username = username
        self.password = password
        self.token = token

    @classmethod
    def from_config(cls, config) -> 'StaticCredentialProvider':
        return cls(
            username=config.get('ADMIN_USERNAME', 'admin'),
            password=config.get('ADMIN_PASSWORD'),
            token=config.get('API_TOKEN'),
        )

    @property
    def is_enabled(self) -> bool:
        return bool(self.username and self.password)

    def authenticate(self, username, password):
        if not self.is_enabled or not username or not password:
            return None
        # Constant-time comparison on both fields
        username_ok = hmac.compare_digest(str(username).encode(), self.username.encode())
        password_ok = hmac.compare_digest(str(password).encode(), self.password.encode())
        if username_ok and password_ok:
            return AdminIdentity(self.username)
        return None

    def issue_token(self, identity):
        return self.token or ''

    def load_identity(self, identity_id):
        if self.is_enabled and identity_id == self.username:
            return AdminIdentity(self.username)
        return None
