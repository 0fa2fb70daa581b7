"""
Typed request structs for the dashboard API

Each struct parses the decoded JSON body with the wire keys the dashboard
front-end sends and raises ValidationError before anything reaches the
business layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from stock_ledger.buisness.core.validators import (
    clean_optional_str,
    require_id,
    require_non_negative_decimal,
    require_non_negative_int,
    require_positive_int,
    require_text,
)
from stock_ledger.buisness.errors import ValidationError


def _optional_id(payload: dict, key: str, field: str) -> int | None:
    value = payload.get(key)
    if value is None or value == '':
        return None
    return require_id(value, field)


@dataclass(frozen=True)
class AddProductRequest:
    name: str
    quantity: int
    price: Decimal
    supplier_id: int
    description: str | None = None

    @classmethod
    def from_payload(cls, payload: dict) -> 'AddProductRequest':
        supplier_id = _optional_id(payload, 'supplierId', "Supplier ID")
        if supplier_id is None:
            raise ValidationError("Name, quantity, unit price and a valid supplier are required.")
        return cls(
            name=require_text(payload.get('name'), "Product name"),
            quantity=require_positive_int(payload.get('quantity'), "Quantity"),
            price=require_non_negative_decimal(payload.get('price'), "Unit price"),
            supplier_id=supplier_id,
            description=clean_optional_str(payload.get('description')),
        )


@dataclass(frozen=True)
class UpdateProductRequest:
    product_id: int
    name: str
    description: str | None
    quantity: int
    price: Decimal
    supplier_id: int

    @classmethod
    def from_payload(cls, payload: dict) -> 'UpdateProductRequest':
        supplier_id = _optional_id(payload, 'id_fournisseur', "Supplier ID")
        if supplier_id is None:
            raise ValidationError("A valid supplier is required to update the product.")
        return cls(
            product_id=require_id(payload.get('id_produit'), "Product ID"),
            name=require_text(payload.get('nom'), "Product name"),
            description=clean_optional_str(payload.get('description')),
            quantity=require_non_negative_int(payload.get('quantite'), "Quantity"),
            price=require_non_negative_decimal(payload.get('prix_unitaire'), "Unit price"),
            supplier_id=supplier_id,
        )


@dataclass(frozen=True)
class DeleteProductRequest:
    product_id: int

    @classmethod
    def from_payload(cls, payload: dict) -> 'DeleteProductRequest':
        return cls(product_id=require_id(payload.get('id_produit'), "Product ID"))


@dataclass(frozen=True)
class PurchaseRequest:
    product_id: int
    supplier_id: int
    quantity: int

    @classmethod
    def from_payload(cls, payload: dict) -> 'PurchaseRequest':
        supplier_id = _optional_id(payload, 'supplierId', "Supplier ID")
        if supplier_id is None:
            raise ValidationError("Product ID, quantity and a valid supplier are required for the purchase.")
        return cls(
            product_id=require_id(payload.get('productId'), "Product ID"),
            supplier_id=supplier_id,
            quantity=require_positive_int(payload.get('quantity'), "Quantity"),
        )


@dataclass(frozen=True)
class SaleRequest:
    product_id: int
    quantity: int
    sale_price: Decimal

    @classmethod
    def from_payload(cls, payload: dict) -> 'SaleRequest':
        return cls(
            product_id=require_id(payload.get('productId'), "Product ID"),
            quantity=require_positive_int(payload.get('quantity'), "Quantity"),
            sale_price=require_non_negative_decimal(payload.get('salePrice'), "Sale price"),
        )


@dataclass(frozen=True)
class SupplierRequest:
    name: str
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    supplier_id: int | None = None

    @classmethod
    def from_payload(cls, payload: dict, require_identifier: bool = False) -> 'SupplierRequest':
        supplier_id = None
        if require_identifier:
            supplier_id = require_id(payload.get('id_fournisseur'), "Supplier ID")
        return cls(
            name=require_text(payload.get('nom'), "Supplier name"),
            address=clean_optional_str(payload.get('adresse')),
            phone=clean_optional_str(payload.get('telephone')),
            email=clean_optional_str(payload.get('email')),
            supplier_id=supplier_id,
        )


@dataclass(frozen=True)
class DeleteSupplierRequest:
    supplier_id: int

    @classmethod
    def from_payload(cls, payload: dict) -> 'DeleteSupplierRequest':
        return cls(supplier_id=require_id(payload.get('id_fournisseur'), "Supplier ID"))


@dataclass(frozen=True)
class LoginRequest:
    username: str
    password: str

    @classmethod
    def from_payload(cls, payload: dict) -> 'LoginRequest':
        username = payload.get('username')
        password = payload.get('password')
        # Passwords are compared verbatim, never stripped
        return cls(
            username=username.strip() if isinstance(username, str) else '',
            password=password if isinstance(password, str) else '',
        )
