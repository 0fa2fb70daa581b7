from datetime import datetime

from stock_ledger import db
from stock_ledger.buisness.core.data_insertion_mixin import DataInsertionMixin


class SaleRecord(db.Model, DataInsertionMixin):
    """Outbound stock movement. Rows are appended by the ledger engine and never updated."""
    __tablename__ = 'sales'

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)
    sale_price = db.Column(db.Numeric(10, 2), nullable=False)
    sold_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    __table_args__ = (
        db.CheckConstraint('quantity > 0', name='ck_sales_quantity_positive'),
        db.CheckConstraint('sale_price >= 0', name='ck_sales_sale_price_non_negative'),
    )

    MOVEMENT_TYPE = 'Sortie'

    def __repr__(self):
        return f'<SaleRecord {self.id}: Product {self.product_id}, Qty {self.quantity}>'
