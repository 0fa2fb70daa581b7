from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError

from stock_ledger import db
from stock_ledger.buisness.core.validators import (
    MAX_QUANTITY,
    require_id,
    require_non_negative_decimal,
    require_positive_int,
)
from stock_ledger.buisness.errors import InsufficientStockError, PersistenceError, ValidationError
from stock_ledger.data.catalog.product import Product
from stock_ledger.data.ledger.purchase_record import PurchaseRecord
from stock_ledger.data.ledger.sale_record import SaleRecord
from stock_ledger.logger import get_logger

logger = get_logger("stock_ledger.buisness.ledger")

DEFAULT_LIST_LIMIT = 5


@dataclass(frozen=True)
class Movement:
    movement_type: str
    occurred_at: datetime
    product_name: str
    quantity: int
    product_id: int
    record_id: int


@dataclass(frozen=True)
class PurchaseTotal:
    product_id: int
    product_name: str
    total_quantity: int


class LedgerEngine:
    """
    Records purchases and sales and keeps Product.quantity in step with them.

    Each write is one transaction: the ledger row and the stock change are
    committed together or rolled back together.
    - Purchases increment stock with a single `quantity = quantity + n` UPDATE
      guarded by `quantity <= MAX_QUANTITY - n`
    - Sales lock the product row, check stock, then decrement with an UPDATE
      guarded by `quantity >= n` so stock can never go negative even when the
      backend ignores FOR UPDATE (SQLite)
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.utcnow):
        self._clock = clock

    def record_purchase(self, product_id: int, supplier_id: int, quantity: int) -> PurchaseRecord:
        product_id = require_id(product_id, "Product ID")
        quantity = require_positive_int(quantity, "Quantity")
        if supplier_id is None or supplier_id == '':
            raise ValidationError("A valid supplier is required for the purchase")
        supplier_id = require_id(supplier_id, "Supplier ID")

        try:
            record = PurchaseRecord(
                product_id=product_id,
                supplier_id=supplier_id,
                quantity=quantity,
                purchased_at=self._clock(),
            )
            db.session.add(record)
            db.session.flush()

            updated = self._increment_stock(product_id, quantity)
            if updated == 0 and self._product_exists(product_id):
                db.session.rollback()
                logger.warning(
                    f"Purchase of {quantity} x product {product_id} refused: stock would exceed {MAX_QUANTITY}"
                )
                raise ValidationError(f"Stock for this product cannot exceed {MAX_QUANTITY}")
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Purchase of {quantity} x product {product_id} rolled back: {e}", exc_info=True)
            raise PersistenceError(f"Error while recording the purchase: {e}") from e

        if updated == 0:
            logger.warning(f"Purchase {record.id} references unknown product {product_id}; no stock updated")
        logger.info(f"Recorded purchase {record.id}: +{quantity} product {product_id} from supplier {supplier_id}")
        return record

    def record_sale(self, product_id: int, quantity: int, sale_price: Decimal) -> SaleRecord:
        product_id = require_id(product_id, "Product ID")
        quantity = require_positive_int(quantity, "Quantity")
        sale_price = require_non_negative_decimal(sale_price, "Sale price")

        try:
            current_stock = db.session.execute(
                db.select(Product.quantity)
                .where(Product.id == product_id)
                .with_for_update()
            ).scalar_one_or_none()

            if current_stock is None or current_stock < quantity:
                db.session.rollback()
                logger.warning(
                    f"Sale of {quantity} x product {product_id} refused: stock is {current_stock}"
                )
                raise InsufficientStockError()

            record = SaleRecord(
                product_id=product_id,
                quantity=quantity,
                sale_price=sale_price,
                sold_at=self._clock(),
            )
            db.session.add(record)
            db.session.flush()

            if self._decrement_stock(product_id, quantity) == 0:
                # A concurrent writer consumed the stock after our read
                db.session.rollback()
                logger.warning(f"Sale of {quantity} x product {product_id} lost a race for stock")
                raise InsufficientStockError()

            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Sale of {quantity} x product {product_id} rolled back: {e}", exc_info=True)
            raise PersistenceError(f"Error while recording the sale: {e}") from e

        logger.info(f"Recorded sale {record.id}: -{quantity} product {product_id} at {sale_price}")
        return record

    def list_recent_movements(self, limit: int = DEFAULT_LIST_LIMIT) -> list[Movement]:
        """Purchases and sales merged, newest first."""
        limit = require_positive_int(limit, "Limit")

        purchases = db.session.execute(
            db.select(PurchaseRecord, Product.name)
            .join(Product, Product.id == PurchaseRecord.product_id)
            .order_by(PurchaseRecord.purchased_at.desc(), PurchaseRecord.id.desc())
            .limit(limit)
        ).all()
        sales = db.session.execute(
            db.select(SaleRecord, Product.name)
            .join(Product, Product.id == SaleRecord.product_id)
            .order_by(SaleRecord.sold_at.desc(), SaleRecord.id.desc())
            .limit(limit)
        ).all()

        movements = [
            Movement(
                movement_type=PurchaseRecord.MOVEMENT_TYPE,
                occurred_at=record.purchased_at,
                product_name=name,
                quantity=record.quantity,
                product_id=record.product_id,
                record_id=record.id,
            )
            for record, name in purchases
        ] + [
            Movement(
                movement_type=SaleRecord.MOVEMENT_TYPE,
                occurred_at=record.sold_at,
                product_name=name,
                quantity=record.quantity,
                product_id=record.product_id,
                record_id=record.id,
            )
            for record, name in sales
        ]
        movements.sort(key=lambda m: (m.occurred_at, m.record_id), reverse=True)
        return movements[:limit]

    def top_purchased_products(self, limit: int = DEFAULT_LIST_LIMIT) -> list[PurchaseTotal]:
        limit = require_positive_int(limit, "Limit")

        total = db.func.sum(PurchaseRecord.quantity).label('total_quantity')
        rows = db.session.execute(
            db.select(Product.id, Product.name, total)
            .select_from(PurchaseRecord)
            .join(Product, Product.id == PurchaseRecord.product_id)
            .group_by(Product.id, Product.name)
            .order_by(total.desc(), Product.name.asc())
            .limit(limit)
        ).all()
        return [
            PurchaseTotal(product_id=pid, product_name=name, total_quantity=int(qty))
            for pid, name, qty in rows
        ]

    def _increment_stock(self, product_id: int, quantity: int) -> int:
        result = db.session.execute(
            db.update(Product)
            .where(Product.id == product_id, Product.quantity <= MAX_QUANTITY - quantity)
            .values(quantity=Product.quantity + quantity),
            execution_options={"synchronize_session": False},
        )
        return result.rowcount

    def _product_exists(self, product_id: int) -> bool:
        return db.session.execute(
            db.select(Product.id).where(Product.id == product_id)
        ).first() is not None

    def _decrement_stock(self, product_id: int, quantity: int) -> int:
        result = db.session.execute(
            db.update(Product)
            .where(Product.id == product_id, Product.quantity >= quantity)
            .values(quantity=Product.quantity - quantity),
            execution_options={"synchronize_session": False},
        )
        return result.rowcount
