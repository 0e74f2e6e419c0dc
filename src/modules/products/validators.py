"""Field-level business rules for the Product aggregate.

Each ``validate_*`` function returns the list of messages for one value
(empty when the value is acceptable).  ``collect_errors`` runs the rule
of every supplied field and merges the results, so a caller always
sees every offending field at once instead of only the first.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Mapping, Optional


NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
PRICE_MAX_DIGITS = 10
PRICE_DECIMAL_PLACES = 2
PRICE_INTEGER_DIGITS = PRICE_MAX_DIGITS - PRICE_DECIMAL_PLACES
# stock and id are 32-bit signed integers
INT_MAX = 2_147_483_647


def validate_name(value: Optional[str]) -> List[str]:
    if value is None or not value.strip():
        return ["Name is required."]
    length = len(value.strip())
    if length < NAME_MIN_LENGTH or length > NAME_MAX_LENGTH:
        return [
            f"Name must be between {NAME_MIN_LENGTH} and "
            f"{NAME_MAX_LENGTH} characters."
        ]
    return []


def validate_description(value: Optional[str]) -> List[str]:
    if value is None:
        return ["Description cannot be null."]
    if len(value.strip()) > DESCRIPTION_MAX_LENGTH:
        return [
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters."
        ]
    return []


def _integer_digits_and_scale(value: Decimal) -> tuple[int, int]:
    """Digits before and after the point, ignoring trailing zeros."""
    _, digits, exponent = value.normalize().as_tuple()
    scale = max(-exponent, 0)
    return max(len(digits) + exponent, 0), scale


def validate_price(value: Optional[Decimal]) -> List[str]:
    if value is None:
        return ["Price is required."]
    try:
        price = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return ["Price must be a valid decimal number."]
    if not price.is_finite() or price <= 0:
        return ["Price must be greater than zero."]
    integer_digits, scale = _integer_digits_and_scale(price)
    if (
        integer_digits > PRICE_INTEGER_DIGITS
        or scale > PRICE_DECIMAL_PLACES
    ):
        return [
            f"Price must have at most {PRICE_DECIMAL_PLACES} decimal places "
            f"and {PRICE_INTEGER_DIGITS} integer digits."
        ]
    return []


def validate_stock(value: Optional[int]) -> List[str]:
    if value is None:
        return ["Stock is required."]
    if value < 0:
        return ["Stock cannot be negative."]
    if value > INT_MAX:
        return [f"Stock must be at most {INT_MAX}."]
    return []


def validate_id(value: int) -> List[str]:
    if value <= 0:
        return ["Id must be greater than zero."]
    if value > INT_MAX:
        return [f"Id must be at most {INT_MAX}."]
    return []


FIELD_RULES: Dict[str, Callable[[Any], List[str]]] = {
    "name": validate_name,
    "description": validate_description,
    "price": validate_price,
    "stock": validate_stock,
}


def collect_errors(fields: Mapping[str, Any]) -> Dict[str, List[str]]:
    """Run the rule of every field in ``fields`` and merge the failures."""
    errors: Dict[str, List[str]] = {}
    for field, value in fields.items():
        messages = FIELD_RULES[field](value)
        if messages:
            errors[field] = messages
    return errors
