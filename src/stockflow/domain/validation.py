"""Field-level checks run before any catalog, account or order mutation.

Every helper is a pure function: it either returns ``None`` or raises
``ValidationError`` whose message names the offending field.
"""

from __future__ import annotations

import re
from decimal import Decimal

from stockflow.domain.exceptions import ValidationError

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")

# prices are stored as NUMERIC(12, 2)
CENT = Decimal("0.01")
MAX_PRICE = Decimal("9999999999.99")


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_product_fields(
    name: str | None,
    price: Decimal | None,
    stock: int | None,
) -> None:
    if _is_blank(name):
        raise ValidationError("Product name is required.")
    if price is None or price < 0:
        raise ValidationError("Product price cannot be negative.")
    if price > MAX_PRICE:
        raise ValidationError(f"Product price cannot exceed {MAX_PRICE}.")
    if price != price.quantize(CENT):
        raise ValidationError("Product price cannot have more than 2 decimal places.")
    if stock is None or stock < 0:
        raise ValidationError("Product stock cannot be negative.")


def validate_user_fields(username: str | None, email: str | None) -> None:
    if _is_blank(username):
        raise ValidationError("Username is required.")
    if _is_blank(email):
        raise ValidationError("Email is required.")
    if not is_valid_email(email):  # type: ignore[arg-type]
        raise ValidationError("Invalid email format.")


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_quantity(quantity: int) -> None:
    # bool is an int subclass; reject it explicitly
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(
            f"Quantity must be an integer, got {type(quantity).__name__}"
        )
    if quantity <= 0:
        raise ValidationError("Quantity must be positive")
