"""
Wire-format views of the domain objects

Keys follow the contract the dashboard front-end already consumes.
"""

from __future__ import annotations

from decimal import Decimal


def _money(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


def product_option(product) -> dict:
    return {'id_produit': product.id, 'nom': product.name}


def supplier_option(supplier) -> dict:
    return {'id_fournisseur': supplier.id, 'nom': supplier.name}


def product_detail(detail) -> dict:
    return {
        'id_produit': detail.id,
        'nom': detail.name,
        'description': detail.description,
        'quantite': detail.quantity,
        'prix_unitaire': _money(detail.unit_price),
        'nom_fournisseur': detail.supplier_name,
        'id_fournisseur_produit': detail.supplier_id,
    }


def supplier_detail(supplier) -> dict:
    data = supplier.to_dict(include_fields=['id', 'name', 'address', 'phone', 'email'])
    return {
        'id_fournisseur': data['id'],
        'nom': data['name'],
        'adresse': data['address'],
        'telephone': data['phone'],
        'email': data['email'],
    }


def movement(item) -> dict:
    return {
        'type': item.movement_type,
        'date': item.occurred_at.isoformat() if item.occurred_at else None,
        'nom_produit': item.product_name,
        'quantite': item.quantity,
        'id_produit': item.product_id,
    }


def purchase_total(item) -> dict:
    return {
        'id_produit': item.product_id,
        'nom_produit': item.product_name,
        'total_quantite_achetee': item.total_quantity,
    }
