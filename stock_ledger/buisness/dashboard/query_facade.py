from __future__ import annotations

from stock_ledger import db
from stock_ledger.buisness.catalog.catalog_store import CatalogStore, ProductDetail
from stock_ledger.buisness.ledger.ledger_engine import (
    DEFAULT_LIST_LIMIT,
    LedgerEngine,
    Movement,
    PurchaseTotal,
)
from stock_ledger.data.catalog.product import Product
from stock_ledger.data.catalog.supplier import Supplier

# Products with fewer units than this count as low stock on the dashboard
LOW_STOCK_THRESHOLD = 10


class QueryFacade:
    """Read-only aggregation backing the dashboard widgets"""

    def __init__(self, catalog: CatalogStore | None = None, ledger: LedgerEngine | None = None):
        self.catalog = catalog or CatalogStore()
        self.ledger = ledger or LedgerEngine()

    def dashboard_stats(self) -> dict:
        total_products, total_quantity = db.session.execute(
            db.select(
                db.func.count(Product.id),
                db.func.coalesce(db.func.sum(Product.quantity), 0),
            )
        ).one()
        low_stock = db.session.execute(
            db.select(db.func.count(Product.id)).where(Product.quantity < LOW_STOCK_THRESHOLD)
        ).scalar_one()

        return {
            'totalProducts': int(total_products),
            'totalQuantity': int(total_quantity),
            'lowStockProducts': int(low_stock),
        }

    def products_for_dropdown(self) -> list[Product]:
        return self.catalog.list_products()

    def suppliers_for_dropdown(self) -> list[Supplier]:
        return self.catalog.list_suppliers()

    def product_details(self) -> list[ProductDetail]:
        return self.catalog.list_product_details()

    def supplier_details(self) -> list[Supplier]:
        return self.catalog.list_suppliers()

    def recent_movements(self, limit: int = DEFAULT_LIST_LIMIT) -> list[Movement]:
        return self.ledger.list_recent_movements(limit)

    def most_purchased_products(self, limit: int = DEFAULT_LIST_LIMIT) -> list[PurchaseTotal]:
        return self.ledger.top_purchased_products(limit)
