"""
HTTP contract tests for /api/dashboard?action=...
"""
from datetime import datetime

import pytest

from stock_ledger import db
from stock_ledger.data.catalog.product import Product
from stock_ledger.data.ledger.purchase_record import PurchaseRecord

API = '/api/dashboard'


def url(action):
    return f'{API}?action={action}'


@pytest.fixture
def supplier(client):
    response = client.post(url('add_supplier'), json={
        'nom': 'Atlas Distribution',
        'adresse': '12 Rue du Port',
        'telephone': '0522000111',
        'email': 'contact@atlas.example',
    })
    assert response.status_code == 200
    return response.get_json()['id']


@pytest.fixture
def product(client, supplier):
    response = client.post(url('add_quick_product'), json={
        'name': 'Widget', 'quantity': 20, 'price': 2.5, 'supplierId': supplier,
    })
    assert response.status_code == 200
    return response.get_json()['id']


def test_unknown_or_missing_action_is_400(client):
    for target in [API, url('drop_tables')]:
        response = client.get(target)
        assert response.status_code == 400
        assert response.get_json() == {'success': False, 'message': 'No action specified or invalid action.'}


@pytest.mark.parametrize("method, action", [
    ('get', 'add_supplier'),
    ('post', 'update_supplier'),
    ('get', 'delete_supplier'),
    ('post', 'update_product'),
    ('put', 'delete_product'),
    ('get', 'record_quick_sale'),
    ('post', 'get_stats'),
])
def test_wrong_method_is_405(client, method, action):
    response = getattr(client, method)(url(action), json={})
    assert response.status_code == 405
    assert response.get_json()['success'] is False


def test_get_stats(client, product):
    response = client.get(url('get_stats'))
    assert response.status_code == 200
    assert response.get_json() == {
        'success': True,
        'data': {'totalProducts': 1, 'totalQuantity': 20, 'lowStockProducts': 0},
    }


def test_add_quick_product_validation(client, supplier):
    for body in [
        {'name': '', 'quantity': 1, 'price': 1, 'supplierId': supplier},
        {'name': 'X', 'quantity': 0, 'price': 1, 'supplierId': supplier},
        {'name': 'X', 'quantity': 1, 'price': -1, 'supplierId': supplier},
        {'name': 'X', 'quantity': 1, 'price': 1},
        {'name': 'X', 'quantity': 'lots', 'price': 1, 'supplierId': supplier},
        {'name': 'X', 'quantity': True, 'price': 1, 'supplierId': supplier},
    ]:
        response = client.post(url('add_quick_product'), json=body)
        assert response.status_code == 400, body
        assert response.get_json()['success'] is False
    assert Product.query.count() == 0


def test_add_quick_product_accepts_numeric_strings(client, supplier):
    response = client.post(url('add_quick_product'), json={
        'name': 'Cahier', 'quantity': '12', 'price': '2.50', 'supplierId': str(supplier),
    })
    body = response.get_json()
    assert response.status_code == 200
    assert body['success'] is True
    assert db.session.get(Product, body['id']).quantity == 12


def test_add_quick_product_unknown_supplier(client):
    response = client.post(url('add_quick_product'), json={
        'name': 'Widget', 'quantity': 1, 'price': 1, 'supplierId': 77,
    })
    assert response.status_code == 400


def test_dropdowns_and_details(client, supplier, product):
    products = client.get(url('get_products_for_dropdown')).get_json()['data']
    assert products == [{'id_produit': product, 'nom': 'Widget'}]

    suppliers = client.get(url('get_suppliers_for_dropdown')).get_json()['data']
    assert suppliers == [{'id_fournisseur': supplier, 'nom': 'Atlas Distribution'}]

    details = client.get(url('get_all_products_details')).get_json()['data']
    assert details == [{
        'id_produit': product,
        'nom': 'Widget',
        'description': None,
        'quantite': 20,
        'prix_unitaire': 2.5,
        'nom_fournisseur': 'Atlas Distribution',
        'id_fournisseur_produit': supplier,
    }]

    supplier_rows = client.get(url('get_all_suppliers_details')).get_json()['data']
    assert supplier_rows == [{
        'id_fournisseur': supplier,
        'nom': 'Atlas Distribution',
        'adresse': '12 Rue du Port',
        'telephone': '0522000111',
        'email': 'contact@atlas.example',
    }]


def test_record_purchase_and_sale(client, supplier, product):
    response = client.post(url('record_quick_purchase'), json={
        'productId': product, 'quantity': 10, 'supplierId': supplier,
    })
    assert response.status_code == 200
    assert response.get_json()['success'] is True
    assert db.session.get(Product, product).quantity == 30
    assert PurchaseRecord.query.count() == 1

    response = client.post(url('record_quick_sale'), json={
        'productId': product, 'quantity': 5, 'salePrice': 9.99,
    })
    assert response.status_code == 200
    assert db.session.get(Product, product).quantity == 25


def test_record_sale_insufficient_stock(client, product):
    response = client.post(url('record_quick_sale'), json={
        'productId': product, 'quantity': 25, 'salePrice': 9.99,
    })
    assert response.status_code == 400
    assert response.get_json() == {'success': False, 'message': 'Insufficient stock for this product.'}
    assert db.session.get(Product, product).quantity == 20


def test_record_purchase_requires_supplier(client, product):
    response = client.post(url('record_quick_purchase'), json={'productId': product, 'quantity': 3})
    assert response.status_code == 400
    assert PurchaseRecord.query.count() == 0


def test_recent_movements_and_top_products(client, supplier, product):
    for qty in [1, 2, 3]:
        client.post(url('record_quick_purchase'), json={'productId': product, 'quantity': qty, 'supplierId': supplier})
    for qty in [1, 1, 1]:
        client.post(url('record_quick_sale'), json={'productId': product, 'quantity': qty, 'salePrice': 1})

    movements = client.get(url('get_recent_movements')).get_json()['data']
    assert len(movements) == 5
    dates = [datetime.fromisoformat(m['date']) for m in movements]
    assert dates == sorted(dates, reverse=True)
    assert set(movements[0]) == {'type', 'date', 'nom_produit', 'quantite', 'id_produit'}
    assert {m['type'] for m in movements} <= {'Entrée', 'Sortie'}

    top = client.get(url('get_most_purchased_products')).get_json()['data']
    assert top == [{'id_produit': product, 'nom_produit': 'Widget', 'total_quantite_achetee': 6}]


def test_update_and_delete_product(client, supplier, product):
    response = client.put(url('update_product'), json={
        'id_produit': product, 'nom': 'Widget XL', 'description': 'Large',
        'quantite': 0, 'prix_unitaire': 3, 'id_fournisseur': supplier,
    })
    assert response.status_code == 200
    assert db.session.get(Product, product).name == 'Widget XL'

    response = client.put(url('update_product'), json={
        'id_produit': product + 1, 'nom': 'Ghost', 'quantite': 0, 'prix_unitaire': 3, 'id_fournisseur': supplier,
    })
    assert response.status_code == 404

    assert client.delete(url('delete_product'), json={'id_produit': product}).status_code == 200
    response = client.delete(url('delete_product'), json={'id_produit': product})
    assert response.status_code == 404
    assert response.get_json()['success'] is False

    assert client.delete(url('delete_product'), json={}).status_code == 400


def test_update_and_delete_supplier(client, supplier, product):
    response = client.put(url('update_supplier'), json={'id_fournisseur': supplier, 'nom': 'Atlas SA'})
    assert response.status_code == 200

    assert client.put(url('update_supplier'), json={'id_fournisseur': supplier, 'nom': ''}).status_code == 400
    assert client.put(url('update_supplier'), json={'id_fournisseur': 999, 'nom': 'X'}).status_code == 404

    assert client.delete(url('delete_supplier'), json={'id_fournisseur': supplier}).status_code == 200
    assert client.delete(url('delete_supplier'), json={'id_fournisseur': supplier}).status_code == 404

    details = client.get(url('get_all_products_details')).get_json()['data']
    assert details[0]['nom_fournisseur'] is None
    assert details[0]['id_fournisseur_produit'] == supplier


def test_non_object_body_is_treated_as_empty(client):
    response = client.post(url('add_supplier'), data='[1, 2]', content_type='application/json')
    assert response.status_code == 400


def test_unknown_route_returns_envelope(client):
    response = client.get('/api/does-not-exist')
    assert response.status_code == 404
    assert response.get_json()['success'] is False


def test_security_headers(client):
    response = client.get(url('get_stats'))
    assert response.headers['X-Content-Type-Options'] == 'nosniff'
    assert response.headers['Cache-Control'] == 'no-store'


@pytest.mark.parametrize("action, body", [
    ('record_quick_purchase', {'quantity': 2**63}),
    ('record_quick_purchase', {'quantity': 2**31}),
    ('record_quick_sale', {'quantity': 2**70, 'salePrice': 1}),
    ('record_quick_sale', {'quantity': 1, 'salePrice': 10**12}),
])
def test_oversized_ledger_values_are_400(client, supplier, product, action, body):
    payload = {'productId': product, 'supplierId': supplier, **body}
    response = client.post(url(action), json=payload)
    assert response.status_code == 400
    assert 'cannot exceed' in response.get_json()['message']
    assert db.session.get(Product, product).quantity == 20
    assert PurchaseRecord.query.count() == 0


def test_oversized_product_values_are_400(client, supplier):
    for body in [
        {'name': 'Big', 'quantity': 2**70, 'price': 1, 'supplierId': supplier},
        {'name': 'Dear', 'quantity': 1, 'price': '123456789.00', 'supplierId': supplier},
        {'name': 'Far', 'quantity': 1, 'price': 1, 'supplierId': 2**64},
    ]:
        response = client.post(url('add_quick_product'), json=body)
        assert response.status_code == 400, body
    assert Product.query.count() == 0


def test_unexpected_error_hides_internal_detail(client, monkeypatch):
    from stock_ledger.buisness.dashboard.query_facade import QueryFacade

    def explode(self):
        raise RuntimeError("Python int too large to convert to SQLite INTEGER")

    monkeypatch.setattr(QueryFacade, 'dashboard_stats', explode)

    response = client.get(url('get_stats'))
    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'message': 'Unexpected error.'}
