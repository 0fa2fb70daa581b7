from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError

from stock_ledger import db
from stock_ledger.buisness.core.validators import (
    clean_optional_str,
    require_id,
    require_non_negative_decimal,
    require_non_negative_int,
    require_positive_int,
    require_text,
)
from stock_ledger.buisness.errors import NotFoundError, PersistenceError, ValidationError
from stock_ledger.data.catalog.product import Product
from stock_ledger.data.catalog.supplier import Supplier
from stock_ledger.logger import get_logger

logger = get_logger("stock_ledger.buisness.catalog")


@dataclass(frozen=True)
class ProductDetail:
    """Product row left-joined with its supplier's name (None when absent or dangling)"""
    id: int
    name: str
    description: str | None
    quantity: int
    unit_price: Decimal
    supplier_id: int | None
    supplier_name: str | None


class CatalogStore:
    """
    Product and supplier master data.

    Every write runs in its own transaction: it commits on success and rolls
    the session back before raising PersistenceError on database failure.
    Product quantities are only set here on create and on explicit edits;
    purchases and sales go through the LedgerEngine.
    """

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def create_product(
        self,
        name: str,
        quantity: int,
        price: Decimal,
        supplier_id: int | None,
        description: str | None = None,
    ) -> int:
        name = require_text(name, "Product name")
        quantity = require_positive_int(quantity, "Quantity")
        price = require_non_negative_decimal(price, "Unit price")
        supplier_id = self._require_existing_supplier(supplier_id)

        product = Product(
            name=name,
            description=clean_optional_str(description),
            quantity=quantity,
            unit_price=price,
            supplier_id=supplier_id,
        )
        db.session.add(product)
        self._commit("adding the product")
        logger.info(f"Created product {product.id} ({product.name}) with initial stock {quantity}")
        return product.id

    def update_product(
        self,
        product_id: int,
        name: str,
        description: str | None,
        quantity: int,
        price: Decimal,
        supplier_id: int | None,
    ) -> None:
        """Replace every mutable field. Setting quantity here bypasses the ledger."""
        product_id = require_id(product_id, "Product ID")
        name = require_text(name, "Product name")
        quantity = require_non_negative_int(quantity, "Quantity")
        price = require_non_negative_decimal(price, "Unit price")
        supplier_id = self._require_existing_supplier(supplier_id)

        product = db.session.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product not found.")

        if product.quantity != quantity:
            logger.warning(
                f"Product {product_id} stock edited directly from {product.quantity} to {quantity}"
            )

        product.name = name
        product.description = clean_optional_str(description)
        product.quantity = quantity
        product.unit_price = price
        product.supplier_id = supplier_id
        self._commit("updating the product")
        logger.info(f"Updated product {product_id}")

    def delete_product(self, product_id: int) -> None:
        product_id = require_id(product_id, "Product ID")
        self._delete_by_id(Product, product_id, "Product not found.", "deleting the product")
        logger.info(f"Deleted product {product_id}")

    def list_products(self) -> list[Product]:
        """All products sorted by name, used for dropdowns and totals."""
        return db.session.execute(
            db.select(Product).order_by(Product.name.asc(), Product.id.asc())
        ).scalars().all()

    def list_product_details(self) -> list[ProductDetail]:
        rows = db.session.execute(
            db.select(Product, Supplier.name)
            .outerjoin(Supplier, Supplier.id == Product.supplier_id)
            .order_by(Product.name.asc(), Product.id.asc())
        ).all()
        return [
            ProductDetail(
                id=product.id,
                name=product.name,
                description=product.description,
                quantity=product.quantity,
                unit_price=product.unit_price,
                supplier_id=product.supplier_id,
                supplier_name=supplier_name,
            )
            for product, supplier_name in rows
        ]

    # ------------------------------------------------------------------
    # Suppliers
    # ------------------------------------------------------------------

    def create_supplier(
        self,
        name: str,
        address: str | None = None,
        phone: str | None = None,
        email: str | None = None,
    ) -> int:
        supplier = Supplier(
            name=require_text(name, "Supplier name"),
            address=clean_optional_str(address),
            phone=clean_optional_str(phone),
            email=clean_optional_str(email),
        )
        db.session.add(supplier)
        self._commit("adding the supplier")
        logger.info(f"Created supplier {supplier.id} ({supplier.name})")
        return supplier.id

    def update_supplier(
        self,
        supplier_id: int,
        name: str,
        address: str | None = None,
        phone: str | None = None,
        email: str | None = None,
    ) -> None:
        supplier_id = require_id(supplier_id, "Supplier ID")
        name = require_text(name, "Supplier name")

        supplier = db.session.get(Supplier, supplier_id)
        if supplier is None:
            raise NotFoundError("Supplier not found.")

        supplier.name = name
        supplier.address = clean_optional_str(address)
        supplier.phone = clean_optional_str(phone)
        supplier.email = clean_optional_str(email)
        self._commit("updating the supplier")
        logger.info(f"Updated supplier {supplier_id}")

    def delete_supplier(self, supplier_id: int) -> None:
        """Remove the supplier. Products keep their (now dangling) supplier_id."""
        supplier_id = require_id(supplier_id, "Supplier ID")
        self._delete_by_id(Supplier, supplier_id, "Supplier not found.", "deleting the supplier")

        orphaned = db.session.execute(
            db.select(db.func.count(Product.id)).where(Product.supplier_id == supplier_id)
        ).scalar_one()
        if orphaned:
            logger.warning(f"Deleted supplier {supplier_id} is still referenced by {orphaned} product(s)")
        else:
            logger.info(f"Deleted supplier {supplier_id}")

    def list_suppliers(self) -> list[Supplier]:
        return db.session.execute(
            db.select(Supplier).order_by(Supplier.name.asc(), Supplier.id.asc())
        ).scalars().all()

    def get_supplier(self, supplier_id: int) -> Supplier | None:
        return db.session.get(Supplier, supplier_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_existing_supplier(self, supplier_id) -> int:
        if supplier_id is None or supplier_id == '':
            raise ValidationError("A valid supplier is required")
        supplier_id = require_id(supplier_id, "Supplier ID")
        if self.get_supplier(supplier_id) is None:
            raise ValidationError(f"Supplier {supplier_id} does not exist")
        return supplier_id

    def _delete_by_id(self, model, identifier: int, not_found_message: str, action: str) -> None:
        try:
            result = db.session.execute(db.delete(model).where(model.id == identifier))
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Database error while {action} {identifier}: {e}", exc_info=True)
            raise PersistenceError(f"Error while {action}: {e}") from e

        if result.rowcount == 0:
            db.session.rollback()
            raise NotFoundError(not_found_message)
        self._commit(action)

    def _commit(self, action: str) -> None:
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Database error while {action}: {e}", exc_info=True)
            raise PersistenceError(f"Error while {action}: {e}") from e
