"""
Dashboard API
Single action-dispatched endpoint consumed by the dashboard front-end:
    /api/dashboard?action=<name>
"""

from flask import Blueprint, request

from stock_ledger import db
from stock_ledger.buisness.catalog.catalog_store import CatalogStore
from stock_ledger.buisness.dashboard.query_facade import QueryFacade
from stock_ledger.buisness.errors import StockLedgerError
from stock_ledger.buisness.ledger.ledger_engine import LedgerEngine
from stock_ledger.logger import get_logger
from stock_ledger.presentation import serializers
from stock_ledger.presentation.responses import error_response, success_response
from stock_ledger.presentation.schemas import (
    AddProductRequest,
    DeleteProductRequest,
    DeleteSupplierRequest,
    PurchaseRequest,
    SaleRequest,
    SupplierRequest,
    UpdateProductRequest,
)

logger = get_logger("stock_ledger.routes.dashboard_api")
bp = Blueprint('dashboard_api', __name__)

# action name -> (HTTP method, handler(payload))
ACTIONS = {}


def action(name, method='GET'):
    """Register a handler for ?action=<name>"""
    def decorator(func):
        ACTIONS[name] = (method, func)
        return func
    return decorator


@bp.route('/dashboard', methods=['GET', 'POST', 'PUT', 'DELETE'])
def dashboard_api():
    name = request.args.get('action', '')
    entry = ACTIONS.get(name)
    if entry is None:
        logger.warning(f"Unknown dashboard action: {name!r}")
        return error_response("No action specified or invalid action.", 400)

    method, handler = entry
    if request.method != method:
        logger.warning(f"Action {name} called with {request.method}, expected {method}")
        return error_response("Method not allowed for this action.", 405)

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}

    try:
        return handler(payload)
    except StockLedgerError as e:
        if e.status_code >= 500:
            logger.error(f"Action {name} failed: {e.message}")
        else:
            logger.warning(f"Action {name} rejected: {e.message}")
        return error_response(e.message, e.status_code)
    except Exception as e:
        logger.error(f"Unexpected error in action {name}: {e}", exc_info=True)
        db.session.rollback()
        return error_response("Unexpected error.", 500)


# ----------------------------------------------------------------------
# Reads
# ----------------------------------------------------------------------

@action('get_stats')
def get_stats(payload):
    return success_response(QueryFacade().dashboard_stats())


@action('get_products_for_dropdown')
def get_products_for_dropdown(payload):
    products = QueryFacade().products_for_dropdown()
    return success_response([serializers.product_option(p) for p in products])


@action('get_suppliers_for_dropdown')
def get_suppliers_for_dropdown(payload):
    suppliers = QueryFacade().suppliers_for_dropdown()
    return success_response([serializers.supplier_option(s) for s in suppliers])


@action('get_all_products_details')
def get_all_products_details(payload):
    details = QueryFacade().product_details()
    return success_response([serializers.product_detail(d) for d in details])


@action('get_all_suppliers_details')
def get_all_suppliers_details(payload):
    suppliers = QueryFacade().supplier_details()
    return success_response([serializers.supplier_detail(s) for s in suppliers])


@action('get_recent_movements')
def get_recent_movements(payload):
    movements = QueryFacade().recent_movements()
    return success_response([serializers.movement(m) for m in movements])


@action('get_most_purchased_products')
def get_most_purchased_products(payload):
    totals = QueryFacade().most_purchased_products()
    return success_response([serializers.purchase_total(t) for t in totals])


# ----------------------------------------------------------------------
# Ledger writes
# ----------------------------------------------------------------------

@action('record_quick_purchase', 'POST')
def record_quick_purchase(payload):
    req = PurchaseRequest.from_payload(payload)
    LedgerEngine().record_purchase(req.product_id, req.supplier_id, req.quantity)
    return success_response(message="Purchase recorded and stock updated.")


@action('record_quick_sale', 'POST')
def record_quick_sale(payload):
    req = SaleRequest.from_payload(payload)
    LedgerEngine().record_sale(req.product_id, req.quantity, req.sale_price)
    return success_response(message="Sale recorded and stock updated.")


# ----------------------------------------------------------------------
# Catalog writes
# ----------------------------------------------------------------------

@action('add_quick_product', 'POST')
def add_quick_product(payload):
    req = AddProductRequest.from_payload(payload)
    product_id = CatalogStore().create_product(
        req.name, req.quantity, req.price, req.supplier_id, description=req.description
    )
    return success_response(message="Product added successfully.", id=product_id)


@action('update_product', 'PUT')
def update_product(payload):
    req = UpdateProductRequest.from_payload(payload)
    CatalogStore().update_product(
        req.product_id, req.name, req.description, req.quantity, req.price, req.supplier_id
    )
    return success_response(message="Product updated successfully.")


@action('delete_product', 'DELETE')
def delete_product(payload):
    req = DeleteProductRequest.from_payload(payload)
    CatalogStore().delete_product(req.product_id)
    return success_response(message="Product deleted successfully.")


@action('add_supplier', 'POST')
def add_supplier(payload):
    req = SupplierRequest.from_payload(payload)
    supplier_id = CatalogStore().create_supplier(req.name, req.address, req.phone, req.email)
    return success_response(message="Supplier added successfully.", id=supplier_id)


@action('update_supplier', 'PUT')
def update_supplier(payload):
    req = SupplierRequest.from_payload(payload, require_identifier=True)
    CatalogStore().update_supplier(req.supplier_id, req.name, req.address, req.phone, req.email)
    return success_response(message="Supplier updated successfully.")


@action('delete_supplier', 'DELETE')
def delete_supplier(payload):
    req = DeleteSupplierRequest.from_payload(payload)
    CatalogStore().delete_supplier(req.supplier_id)
    return success_response(message="Supplier deleted successfully.")
