"""The development deal draft carried across the PD -> GDV -> build cost ->
finance calculators.

Sections reuse the form parsing so a section can be stored straight from a
posted payload (snake_case or camelCase keys). Archived drafts are restored
value for value.
"""

import dataclasses
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional, get_type_hints

from propcalc.models.form import FormInput, count, number

FIRST_STEP = 1
PD_STEP = 2
GDV_STEP = 3
BUILD_COST_STEP = 4
FINANCE_STEP = 5


@dataclass(frozen=True)
class PdSection(FormInput):
    existing_use: str = ""
    proposed_use: str = ""
    gia: Decimal = number()
    storeys: int = count()
    target_units: int = count()
    article_four: bool = False
    heritage: bool = False
    pd_route: str = ""
    reasoning: str = ""


@dataclass(frozen=True)
class GdvSection(FormInput):
    postcode: str = ""
    property_type: str = ""
    bedrooms: int = count()
    total_units: int = count()
    avg_sqft: Decimal = number()
    new_build_premium: Decimal = number()
    total_gdv: Decimal = number()
    gdv_per_unit: Decimal = number()
    gdv_per_sqft: Decimal = number()
    reasoning: str = ""


@dataclass(frozen=True)
class BuildCostSection(FormInput):
    total_gia: Decimal = number()
    build_type: str = ""
    spec_level: str = ""
    region: str = ""
    storeys: int = count()
    contingency: Decimal = number()
    professional_fees: Decimal = number()
    total_cost: Decimal = number()
    cost_per_sqm: Decimal = number()
    reasoning: str = ""


@dataclass(frozen=True)
class FinanceSection(FormInput):
    purchase_price: Decimal = number()
    build_cost: Decimal = number()
    gdv: Decimal = number()
    term_months: int = count()
    target_ltc: Decimal = number()
    require_mezzanine: bool = False
    senior_debt_amount: Decimal = number()
    equity_required: Decimal = number()
    total_ltc: Decimal = number()
    profit_on_cost: Decimal = number()
    lender_appetite: str = ""
    reasoning: str = ""


SECTION_TYPES: dict[str, type[FormInput]] = {
    "pd": PdSection,
    "gdv": GdvSection,
    "build_cost": BuildCostSection,
    "finance": FinanceSection,
}


def _restore(section_cls: type[FormInput], data: Mapping[str, Any]) -> FormInput:
    # stored values are exact, so skip the form parser (it drops signs)
    hints = get_type_hints(section_cls)
    values = {}
    for field in dataclasses.fields(section_cls):
        if field.name not in data:
            continue
        value, hint = data[field.name], hints[field.name]
        if hint is Decimal:
            value = Decimal(str(value))
        elif hint is int:
            value = int(value)
        elif hint is bool:
            value = bool(value)
        else:
            value = str(value)
        values[field.name] = value
    return section_cls(**values)


@dataclass(frozen=True)
class DealDraft:
    address: str
    local_authority: str
    current_step: int = FIRST_STEP
    id: Optional[str] = None
    pd: Optional[PdSection] = None
    gdv: Optional[GdvSection] = None
    build_cost: Optional[BuildCostSection] = None
    finance: Optional[FinanceSection] = None

    @property
    def is_complete(self) -> bool:
        return all(getattr(self, name) is not None for name in SECTION_TYPES)

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DealDraft":
        """Rebuild a draft from ``to_dict`` output (numbers may arrive as strings)."""
        sections = {
            name: _restore(section_cls, data[name]) if data.get(name) else None
            for name, section_cls in SECTION_TYPES.items()
        }
        return cls(
            address=str(data.get("address", "")),
            local_authority=str(data.get("local_authority", "")),
            current_step=int(data.get("current_step", FIRST_STEP)),
            id=data.get("id"),
            **sections,
        )
