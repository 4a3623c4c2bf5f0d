"""Base type for calculator form inputs.

A calculator's input is a frozen dataclass whose defaults are the form's
initial values. ``from_raw`` builds one from a raw record of user text,
accepting either snake_case or the camelCase keys the web forms post.
"""

import dataclasses
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, get_type_hints

from propcalc.engine.parsing import ZERO, parse_choice, parse_count, parse_flag, parse_number


def number(default: str = "0", fallback: str | None = None) -> Any:
    """A numeric form field.

    ``fallback`` replaces an empty, unparseable or zero entry, the way the
    forms treat e.g. ICR requirement as 145 when left blank.
    """
    metadata = {"fallback": Decimal(fallback)} if fallback is not None else {}
    return dataclasses.field(default=Decimal(default), metadata=metadata)


def count(default: int = 0, fallback: int | None = None) -> Any:
    """A whole-number form field (units, rooms, storeys)."""
    metadata = {"fallback": fallback} if fallback is not None else {}
    return dataclasses.field(default=default, metadata=metadata)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _coerce(field: dataclasses.Field, hint: Any, value: Any) -> Any:
    if hint is Decimal:
        return parse_number(value, field.metadata.get("fallback", ZERO))
    if hint is bool:
        return parse_flag(value)
    if hint is int:
        return parse_count(value, field.metadata.get("fallback", 0))
    if isinstance(hint, type) and issubclass(hint, Enum):
        return parse_choice(hint, value, field.default)
    if hint is str:
        return "" if value is None else str(value)
    return value


class FormInput:
    """Mixin for calculator input dataclasses."""

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any] | None = None):
        raw = raw or {}
        hints = get_type_hints(cls)
        values = {}
        for field in dataclasses.fields(cls):
            for key in (field.name, _camel(field.name)):
                if key in raw:
                    values[field.name] = _coerce(field, hints[field.name], raw[key])
                    break
        return cls(**values)

    @classmethod
    def field_defaults(cls) -> dict[str, Any]:
        """Field name -> default value, for describing the form."""
        defaults = {}
        for field in dataclasses.fields(cls):
            if field.default is not dataclasses.MISSING:
                defaults[field.name] = field.default
            elif field.default_factory is not dataclasses.MISSING:
                defaults[field.name] = field.default_factory()
        return defaults
