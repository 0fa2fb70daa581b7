from datetime import datetime

from stock_ledger import db
from stock_ledger.buisness.core.data_insertion_mixin import DataInsertionMixin


class PurchaseRecord(db.Model, DataInsertionMixin):
    """Inbound stock movement. Rows are appended by the ledger engine and never updated."""
    __tablename__ = 'purchases'

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, nullable=False, index=True)
    supplier_id = db.Column(db.Integer, nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    purchased_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    __table_args__ = (
        db.CheckConstraint('quantity > 0', name='ck_purchases_quantity_positive'),
    )

    MOVEMENT_TYPE = 'Entrée'

    def __repr__(self):
        return f'<PurchaseRecord {self.id}: Product {self.product_id}, Qty {self.quantity}>'
