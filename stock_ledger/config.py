"""
Configuration objects for the Stock Ledger application

create_app() accepts one of these classes (or any mapping) so that the
database, credentials and logging are injected instead of hardcoded.
"""

import os
from pathlib import Path


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


BASE_DIR = Path(__file__).parent.parent
INSTANCE_DIR = BASE_DIR / 'instance'


class Config:
    """Production defaults, read from the environment at import time"""

    SECRET_KEY = os.environ.get('SECRET_KEY')

    # Prefer an explicit DATABASE_URL; otherwise keep the SQLite file in instance/
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        f"sqlite:///{(INSTANCE_DIR / 'stock_ledger.db').resolve()}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Single administrator credential pair used by the dashboard login
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')
    API_TOKEN = os.environ.get('API_TOKEN')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR', 'logs')

    RATELIMIT_ENABLED = _env_flag('RATELIMIT_ENABLED', 'True')
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    LOGIN_RATE_LIMIT = os.environ.get('LOGIN_RATE_LIMIT', '10 per minute')

    SESSION_COOKIE_SECURE = _env_flag('SESSION_COOKIE_SECURE', 'True')
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = int(os.environ.get('PERMANENT_SESSION_LIFETIME', '3600'))

    TESTING = False


class DevelopmentConfig(Config):
    SESSION_COOKIE_SECURE = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    SESSION_COOKIE_SECURE = False

    ADMIN_USERNAME = 'admin'
    ADMIN_PASSWORD = 'stock2025'
    API_TOKEN = 'test-api-token'

    LOG_LEVEL = 'WARNING'
    LOG_DIR = ''
