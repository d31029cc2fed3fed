"""Best-effort numeric coercion and flexible field resolution for untrusted rows"""

import math
import numbers
import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation, getcontext
from typing import Any, Sequence

ZERO = Decimal("0")
MAX_ADJUSTED_EXPONENT = getcontext().Emax // 2

AMOUNT_KEYS = ("amount", "Amount")
CATEGORY_KEYS = ("category", "Category")
UNCATEGORIZED = "Uncategorized"

_CURRENCY_SYMBOLS = "$€£¥"
_GROUPED_NUMBER = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")


def _is_missing(value: Any) -> bool:
    """None, NaN (pandas blank cells) and empty strings count as absent"""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and value == "":
        return True
    return False


def resolve_field(row: Any, keys: Sequence[str], default: Any) -> Any:
    """
    Return the first present value among candidate keys, else default.

    Works against mappings (uploaded rows) and plain objects (domain records).
    """
    for key in keys:
        if isinstance(row, Mapping):
            value = row.get(key)
        else:
            value = getattr(row, key, None)
        if not _is_missing(value):
            return value
    return default


def resolve_amount(row: Any, keys: Sequence[str] = AMOUNT_KEYS) -> Decimal:
    """
    Coerced amount from the first candidate key holding a value.

    Only None (or an absent key) falls through to the next key; an empty or
    garbled "amount" cell yields 0 rather than borrowing "Amount".
    """
    for key in keys:
        if isinstance(row, Mapping):
            value = row.get(key)
        else:
            value = getattr(row, key, None)
        if value is not None:
            return coerce_amount(value)
    return ZERO


def _parse_text(text: str) -> Decimal:
    text = text.strip()
    negative = False
    if text.startswith("(") and text.endswith(")"):
        negative = True
        text = text[1:-1].strip()
    if text[:1] in ("-", "+") and text[1:2] in tuple(_CURRENCY_SYMBOLS):
        # "-$5" -> "-5"
        text = text[0] + text[2:]
    text = text.strip(_CURRENCY_SYMBOLS).strip()
    if _GROUPED_NUMBER.match(text):
        text = text.replace(",", "")
    if not text:
        return ZERO

    amount = Decimal(text)
    return amount.copy_negate() if negative else amount


def coerce_amount(value: Any) -> Decimal:
    """
    Convert an arbitrary cell value to a Decimal amount.

    Missing, unparsable or non-finite input yields 0; this never raises, so one
    bad cell cannot abort an aggregation.

    Examples:
        " 12.50 "   -> Decimal("12.50")
        "$1,234.50" -> Decimal("1234.50")
        "(5.00)"    -> Decimal("-5.00")
        "abc", None -> Decimal("0")
    """
    if _is_missing(value):
        return ZERO

    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, bool):
            amount = Decimal(int(value))
        elif isinstance(value, int):
            amount = Decimal(value)
        elif isinstance(value, float):
            # str() keeps the shortest repr, so 12.5 stays 12.5
            amount = Decimal(str(value))
        elif isinstance(value, str):
            amount = _parse_text(value)
        elif isinstance(value, numbers.Integral):
            # numpy integer scalars
            amount = Decimal(int(value))
        elif isinstance(value, numbers.Real):
            amount = Decimal(str(float(value)))
        else:
            return ZERO
    except (InvalidOperation, ValueError, TypeError):
        return ZERO

    if not amount.is_finite():
        return ZERO
    # Running sums must stay clear of the context's Overflow trap
    if amount and amount.adjusted() > MAX_ADJUSTED_EXPONENT:
        return ZERO
    return amount
