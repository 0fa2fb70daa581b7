"""
Pytest configuration and fixtures for the stock ledger tests
"""
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from stock_ledger import create_app
from stock_ledger import db as _db
from stock_ledger.buisness.catalog.catalog_store import CatalogStore
from stock_ledger.buisness.dashboard.query_facade import QueryFacade
from stock_ledger.buisness.ledger.ledger_engine import LedgerEngine
from stock_ledger.config import TestingConfig


class TickingClock:
    """Deterministic clock: every call returns one minute later than the previous one"""

    def __init__(self, start=datetime(2025, 3, 1, 9, 0, 0)):
        self.now = start

    def __call__(self):
        self.now = self.now + timedelta(minutes=1)
        return self.now


@pytest.fixture(scope='function')
def app():
    """Create Flask application with a fresh in-memory database"""
    app = create_app(TestingConfig)

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture
def catalog(app):
    return CatalogStore()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def ledger(app, clock):
    return LedgerEngine(clock=clock)


@pytest.fixture
def facade(catalog, ledger):
    return QueryFacade(catalog=catalog, ledger=ledger)


@pytest.fixture
def supplier_id(catalog):
    """Default supplier most tests attach products to"""
    return catalog.create_supplier("Atlas Distribution", "12 Rue du Port", "0522000111", "contact@atlas.example")


@pytest.fixture
def make_product(catalog, supplier_id):
    """Factory creating a product with the default supplier"""
    def _make(name="Widget", quantity=20, price=Decimal("2.50"), supplier=None):
        return catalog.create_product(name, quantity, price, supplier or supplier_id)
    return _make
