"""Tolerant parsing of raw calculator form input.

Form fields arrive as text typed by a user ("£250,000", "5.5%", "") or as
plain JSON scalars. Nothing here raises: anything that does not parse becomes
zero, or the field's fallback when one is declared.

Pure functions. No I/O.
"""

import math
import re
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeVar

ZERO = Decimal("0")

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d+\.?\d*|\.\d+")

_TRUE_WORDS = frozenset({"true", "yes", "on", "1", "y"})

E = TypeVar("E", bound=Enum)


def _from_scalar(value: int | float | Decimal) -> Decimal | None:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Decimal) and not value.is_finite():
        return None
    return abs(Decimal(str(value)))


def parse_number(value: Any, fallback: Decimal = ZERO) -> Decimal:
    """Parse a raw field into a non-negative Decimal.

    Text is stripped of everything except digits and dots, then the leading
    number is taken ("1.2.3" -> 1.2). A parsed zero is replaced by
    ``fallback``, so a field declared with fallback 145 treats "" and "0"
    alike.
    """
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float, Decimal)):
        number = _from_scalar(value)
    else:
        match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", str(value)))
        number = None
        if match:
            try:
                number = Decimal(match.group(0))
            except InvalidOperation:
                number = None
    if number is None or number == 0:
        return fallback
    return number


def parse_count(value: Any, fallback: int = 0) -> int:
    """Parse a whole-number field (units, rooms, storeys). Fractions truncate."""
    number = int(parse_number(value))
    return number if number else fallback


def parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float, Decimal)):
        return value != 0
    return str(value).strip().lower() in _TRUE_WORDS


def parse_choice(enum_cls: type[E], value: Any, default: E) -> E:
    """Resolve a select value to its enum member, or ``default`` if unknown."""
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip().lower()
    for member in enum_cls:
        if str(member.value).lower() == text:
            return member
    return default
