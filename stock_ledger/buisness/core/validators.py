"""
Input coercion and range checks shared by the request structs and the business layer

Each helper returns the cleaned value or raises ValidationError with a message
that can be shown to the dashboard user as-is.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from stock_ledger.buisness.errors import ValidationError

# Storage limits: INTEGER quantities, 64-bit ids, Numeric(10, 2) prices
MAX_QUANTITY = 2**31 - 1
MAX_ID = 2**63 - 1
MAX_PRICE = Decimal("99999999.99")


def clean_optional_str(value: object) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def require_text(value: object, field: str) -> str:
    s = clean_optional_str(value)
    if s is None:
        raise ValidationError(f"{field} is required")
    return s


def to_int(value: object, field: str) -> int:
    """Accept ints and integral numeric strings; reject booleans, floats with a fraction and junk."""
    if value is None or value == '':
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValidationError(f"{field} must be an integer")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field} must be an integer") from None


def to_decimal(value: object, field: str) -> Decimal:
    if value is None or value == '':
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number") from None
    if not number.is_finite():
        raise ValidationError(f"{field} must be a number")
    return number


def require_id(value: object, field: str) -> int:
    identifier = to_int(value, field)
    if identifier <= 0 or identifier > MAX_ID:
        raise ValidationError(f"{field} must be a valid identifier")
    return identifier


def require_positive_int(value: object, field: str) -> int:
    number = to_int(value, field)
    if number <= 0:
        raise ValidationError(f"{field} must be greater than 0")
    if number > MAX_QUANTITY:
        raise ValidationError(f"{field} cannot exceed {MAX_QUANTITY}")
    return number


def require_non_negative_int(value: object, field: str) -> int:
    number = to_int(value, field)
    if number < 0:
        raise ValidationError(f"{field} cannot be negative")
    if number > MAX_QUANTITY:
        raise ValidationError(f"{field} cannot exceed {MAX_QUANTITY}")
    return number


def require_non_negative_decimal(value: object, field: str) -> Decimal:
    number = to_decimal(value, field)
    if number < 0:
        raise ValidationError(f"{field} cannot be negative")
    if number > MAX_PRICE:
        raise ValidationError(f"{field} cannot exceed {MAX_PRICE}")
    return number
