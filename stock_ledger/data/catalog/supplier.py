from stock_ledger import db
from stock_ledger.buisness.core.data_insertion_mixin import DataInsertionMixin


class Supplier(db.Model, DataInsertionMixin):
    __tablename__ = 'suppliers'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    address = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    email = db.Column(db.String(200), nullable=True)

    def __repr__(self):
        return f'<Supplier {self.id}: {self.name}>'
