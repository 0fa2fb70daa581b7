from datetime import datetime

from stock_ledger import db
from stock_ledger.buisness.core.data_insertion_mixin import DataInsertionMixin

# this class holds master data about a product and its current stock level
# stock changes are recorded in the ledger module; quantity here is the running total


class Product(db.Model, DataInsertionMixin):
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    quantity = db.Column(db.Integer, nullable=False, default=0)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    # Plain id reference: deleting a supplier leaves the value dangling
    supplier_id = db.Column(db.Integer, nullable=True, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint('quantity >= 0', name='ck_products_quantity_non_negative'),
        db.CheckConstraint('unit_price >= 0', name='ck_products_unit_price_non_negative'),
    )

    def __repr__(self):
        return f'<Product {self.id}: {self.name} (qty {self.quantity})>'
