"""Development appraisal inputs and results: the PD -> GDV -> build cost ->
finance journey plus CIL, profit on cost and residual land value."""

import dataclasses
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from propcalc.engine.parsing import parse_count, parse_number
from propcalc.models.form import FormInput, count, number


class BuildType(Enum):
    NEW_BUILD = "new_build"
    CONVERSION = "conversion"
    REFURBISHMENT = "refurbishment"
    EXTENSION = "extension"


class SpecLevel(Enum):
    BASIC = "basic"
    STANDARD = "standard"
    PREMIUM = "premium"


class Region(Enum):
    LONDON = "london"
    SOUTH_EAST = "south_east"
    SOUTH_WEST = "south_west"
    MIDLANDS = "midlands"
    NORTH = "north"
    SCOTLAND = "scotland"


class LenderAppetite(Enum):
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


# ---- Permitted development ----

@dataclass(frozen=True)
class PermittedDevelopmentInput(FormInput):
    address: str = "45-53 Red Lion Street, London WC1"
    local_authority: str = "Camden"
    existing_use: str = "E (Commercial)"
    proposed_use: str = "C3 (Residential)"
    gia: Decimal = number("820")  # sqm
    storeys: int = count(4)
    target_units: int = count(18)
    market_psf: Decimal = number("715")
    article_four: bool = False
    heritage: bool = False


@dataclass(frozen=True)
class PermittedDevelopmentResult:
    total_sqft: Decimal
    gdv: Decimal
    build_cost_per_sqm: Decimal
    build_cost: Decimal
    leverage: Decimal  # % loan to cost
    pd_route: str
    summary: str


# ---- GDV ----

DEFAULT_UNIT_SQFT: dict[int, Decimal] = {
    0: Decimal("400"),
    1: Decimal("550"),
    2: Decimal("750"),
    3: Decimal("950"),
}
LARGE_UNIT_SQFT = Decimal("1200")
DEFAULT_UNIT_PSF = Decimal("500")


@dataclass(frozen=True)
class UnitMix:
    bedrooms: int = 2
    quantity: int = 1
    avg_sqft: Decimal = Decimal("750")
    price_per_sqft: Decimal = DEFAULT_UNIT_PSF

    @classmethod
    def for_bedrooms(cls, bedrooms: int) -> "UnitMix":
        return cls(bedrooms=bedrooms, avg_sqft=DEFAULT_UNIT_SQFT.get(bedrooms, LARGE_UNIT_SQFT))

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "UnitMix":
        bedrooms = parse_count(raw.get("bedrooms"), 0) if "bedrooms" in raw else 2
        base = cls.for_bedrooms(bedrooms)
        values = {"bedrooms": bedrooms}
        for name, camel in (("quantity", "quantity"), ("avg_sqft", "avgSqft"), ("price_per_sqft", "pricePerSqft")):
            key = name if name in raw else camel
            if key not in raw:
                continue
            if name == "quantity":
                values[name] = parse_count(raw[key])
            else:
                values[name] = parse_number(raw[key])
        return dataclasses.replace(base, **values)


@dataclass(frozen=True)
class GdvInput(FormInput):
    postcode: str = ""
    property_type: str = "apartment"
    new_build_premium: Decimal = number("15")
    units: tuple[UnitMix, ...] = field(default=(UnitMix(),))

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any] | None = None) -> "GdvInput":
        raw = raw or {}
        base = super().from_raw(raw)
        if "units" not in raw:
            return base
        rows = raw["units"] if isinstance(raw["units"], (list, tuple)) else ()
        units = tuple(
            row if isinstance(row, UnitMix) else UnitMix.from_raw(row)
            for row in rows
            if isinstance(row, (UnitMix, Mapping))
        )
        return dataclasses.replace(base, units=units)


@dataclass(frozen=True)
class GdvResult:
    total_gdv: Decimal
    total_units: int
    total_sqft: Decimal
    gdv_per_unit: Decimal
    gdv_per_sqft: Decimal
    weighted_bedrooms: int
    avg_sqft: Decimal


# ---- Build cost ----

@dataclass(frozen=True)
class BuildCostInput(FormInput):
    total_gia: Decimal = number("820")
    build_type: BuildType = BuildType.CONVERSION
    spec_level: SpecLevel = SpecLevel.STANDARD
    region: Region = Region.LONDON
    storeys: int = count(4)
    contingency: Decimal = number("10")
    professional_fees: Decimal = number("12")


@dataclass(frozen=True)
class BuildCostResult:
    base_cost_per_sqm: Decimal
    region_multiplier: Decimal
    adjusted_cost_per_sqm: Decimal
    base_build_cost: Decimal
    contingency_amount: Decimal
    professional_fees_amount: Decimal
    total_cost: Decimal
    cost_per_sqm: Decimal
    cost_per_sqft: Decimal
    summary: str


# ---- Development finance ----

@dataclass(frozen=True)
class DevelopmentFinanceInput(FormInput):
    purchase_price: Decimal = number("1850000")
    build_cost: Decimal = number("2012000")
    gdv: Decimal = number("6210000")
    term_months: int = count(18)
    target_ltc: Decimal = number("65")
    require_mezzanine: bool = False


@dataclass(frozen=True)
class DevelopmentFinanceResult:
    total_cost: Decimal
    senior_debt_amount: Decimal
    senior_rate: Decimal
    arrangement_fee: Decimal
    senior_ltgdv: Decimal
    mezzanine_amount: Decimal
    mezzanine_rate: Decimal
    total_debt: Decimal
    equity_required: Decimal
    total_ltc: Decimal
    total_ltgdv: Decimal
    profit: Decimal
    profit_on_cost: Decimal
    profit_on_gdv: Decimal
    lender_appetite: LenderAppetite
    term_months: int
    summary: str


# ---- CIL ----

@dataclass(frozen=True)
class CilInput(FormInput):
    local_authority: str = "london-mayoral"
    development_type: str = "residential"
    charging_zone: str = "zone-2"
    gross_floor_area: Decimal = number("500")
    existing_floor_area: Decimal = number("0")
    existing_use_lawful: bool = False
    social_housing_relief: Decimal = number("0")  # %
    self_build_exemption: bool = False
    indexation_year: str = "2024"


@dataclass(frozen=True)
class CilInstalment:
    stage: str
    percentage: Decimal
    amount: Decimal


@dataclass(frozen=True)
class CilResult:
    gross_floor_area: Decimal
    existing_floor_area: Decimal
    net_floor_area: Decimal
    chargeable_area: Decimal
    base_rate: Decimal
    indexation_multiplier: Decimal
    indexed_rate: Decimal
    cil_liability: Decimal
    cil_per_sqm: Decimal
    social_housing_relief: Decimal
    self_build_exemption: bool
    payment_schedule: tuple[CilInstalment, ...]


# ---- Profit on cost ----

@dataclass(frozen=True)
class ProfitOnCostInput(FormInput):
    gdv: Decimal = number("2500000")
    land_cost: Decimal = number("500000")
    build_cost: Decimal = number("1200000")
    professional_fees: Decimal = number("120000")
    finance_costs: Decimal = number("150000")
    sales_costs: Decimal = number("50000")
    contingency: Decimal = number("60000")
    other_costs: Decimal = number("20000")


@dataclass(frozen=True)
class ProfitOnCostResult:
    total_costs: Decimal
    gross_profit: Decimal
    profit_on_cost: Decimal
    profit_on_gdv: Decimal
    equity_required: Decimal
    return_on_equity: Decimal
    land_percent: Decimal
    build_percent: Decimal
    other_percent: Decimal
    poc_status: str


# ---- Residual land value ----

@dataclass(frozen=True)
class ResidualLandValueInput(FormInput):
    gdv: Decimal = number("2500000")
    build_cost: Decimal = number("1200000")
    professional_fees: Decimal = number("10")  # % of build
    finance_costs: Decimal = number("8")  # % a year on average build exposure
    sales_costs: Decimal = number("3")  # % of GDV
    contingency: Decimal = number("5")  # % of build
    other_costs: Decimal = number("50000")
    target_profit_percent: Decimal = number("20")


@dataclass(frozen=True)
class ResidualLandValueResult:
    professional_fees: Decimal
    finance_costs: Decimal
    sales_costs: Decimal
    contingency: Decimal
    total_non_land_costs: Decimal
    max_total_costs: Decimal
    residual_land_value: Decimal
    target_profit: Decimal
    target_profit_percent: Decimal
    land_to_gdv_percent: Decimal
    land_to_costs_percent: Decimal
    is_viable: bool
    rlv_at_15: Decimal
    rlv_at_25: Decimal


# ---- New-build appraisal ----

@dataclass(frozen=True)
class DevelopmentAppraisalInput(FormInput):
    land_cost: Decimal = number("500000")
    num_units: int = count(4)
    avg_unit_sqft: Decimal = number("850")
    sale_value_per_sqft: Decimal = number("400")
    build_cost_per_sqft: Decimal = number("180")
    professional_fees: Decimal = number("10")  # % of build
    contingency: Decimal = number("7.5")  # % of build
    sales_costs: Decimal = number("3")  # % of GDV
    finance_rate: Decimal = number("10")  # % a year
    build_period: int = count(12)  # months
    sale_period: int = count(6)  # months


@dataclass(frozen=True)
class DevelopmentAppraisalResult:
    total_sqft: Decimal
    gdv: Decimal
    total_build_cost: Decimal
    professional_fees: Decimal
    contingency: Decimal
    sales_costs: Decimal
    land_finance: Decimal
    build_finance: Decimal
    finance_cost: Decimal
    total_costs: Decimal
    profit: Decimal
    profit_on_cost: Decimal
    profit_on_gdv: Decimal
    build_cost_total: Decimal  # build, fees and contingency
    build_cost_total_per_sqft: Decimal
    poc_status: str
    project_irr: Decimal  # annualised, unlevered
    project_npv: Decimal  # at the finance rate
    equity_multiple: Decimal
