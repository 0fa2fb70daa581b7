"""
Database build for the Stock Ledger application
Creates the tables and optionally loads a small demo catalog
"""

from decimal import Decimal

from stock_ledger import db
from stock_ledger.logger import get_logger

logger = get_logger("stock_ledger.build")

DEMO_SUPPLIERS = [
    {'name': 'Atlas Distribution', 'address': '12 Rue du Port, Casablanca', 'phone': '+212 522 000 111', 'email': 'contact@atlas-distribution.example'},
    {'name': 'Nord Fournitures', 'address': '4 Avenue de la Gare, Lille', 'phone': '+33 3 20 00 00 00', 'email': 'ventes@nord-fournitures.example'},
]

DEMO_PRODUCTS = [
    {'name': 'Cahier A4', 'description': '96 pages, grands carreaux', 'quantity': 120, 'unit_price': Decimal('2.50'), 'supplier': 'Nord Fournitures'},
    {'name': 'Stylo bille bleu', 'description': None, 'quantity': 8, 'unit_price': Decimal('0.80'), 'supplier': 'Nord Fournitures'},
    {'name': 'Ramette papier', 'description': '500 feuilles 80g', 'quantity': 35, 'unit_price': Decimal('5.90'), 'supplier': 'Atlas Distribution'},
]


def build_database(app, seed_demo_data=False):
    """
    Create all tables for the registered models

    Args:
        app: Flask application created by create_app()
        seed_demo_data (bool): Insert the demo catalog when the product table is empty
    """
    from stock_ledger.data.catalog.product import Product
    from stock_ledger.data.catalog.supplier import Supplier

    with app.app_context():
        logger.info("Creating database tables")
        db.create_all()

        if not seed_demo_data:
            return

        if db.session.execute(db.select(Product.id).limit(1)).first() is not None:
            logger.info("Products already present - skipping demo data")
            return

        suppliers = {}
        for row in DEMO_SUPPLIERS:
            supplier = Supplier.from_dict(row)
            db.session.add(supplier)
            suppliers[supplier.name] = supplier
        db.session.flush()

        for row in DEMO_PRODUCTS:
            product = Product.from_dict(row, skip_fields=['supplier'])
            product.supplier_id = suppliers[row['supplier']].id
            db.session.add(product)

        db.session.commit()
        logger.info(f"Inserted {len(DEMO_SUPPLIERS)} demo suppliers and {len(DEMO_PRODUCTS)} demo products")
