"""Commercial investment inputs and results."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from propcalc.models.bands import CostRange
from propcalc.models.form import FormInput, number


class CommercialUse(Enum):
    RETAIL_HIGH_STREET = "retail-high-street"
    RETAIL_SECONDARY = "retail-secondary"
    OFFICE_PRIME = "office-prime"
    OFFICE_SECONDARY = "office-secondary"
    INDUSTRIAL_PRIME = "industrial-prime"
    INDUSTRIAL_SECONDARY = "industrial-secondary"
    WAREHOUSE = "warehouse"
    LEISURE = "leisure"


class LocationGrade(Enum):
    PRIME = "prime"
    SECONDARY = "secondary"
    TERTIARY = "tertiary"


@dataclass(frozen=True)
class CommercialYieldInput(FormInput):
    purchase_price: Decimal = number("1500000")
    annual_rent: Decimal = number("100000")
    annual_running_costs: Decimal = number("5000")
    void_period_months: Decimal = number("3")
    lease_years_remaining: Decimal = number("10")
    target_yield: Decimal = number("7")


@dataclass(frozen=True)
class CommercialYieldResult:
    gross_yield: Decimal
    net_rent: Decimal
    net_yield: Decimal
    effective_rent: Decimal
    equivalent_yield: Decimal
    cap_rate: Decimal
    years_purchase: Decimal
    value_at_target_yield: Decimal
    value_difference: Decimal
    wault_factor: Decimal
    adjusted_value: Decimal
    monthly_rent: Decimal
    price_per_sq_ft: Decimal
    rent_per_sq_ft: Decimal
    yield_status: str


@dataclass(frozen=True)
class ErvInput(FormInput):
    property_type: CommercialUse = CommercialUse.OFFICE_SECONDARY
    total_sq_ft: Decimal = number("2500")
    net_to_gross_ratio: Decimal = number("85", fallback="85")
    current_rent_psf: Decimal = number("22")
    location: LocationGrade = LocationGrade.SECONDARY
    comp1_rent_psf: Decimal = number("25")
    comp2_rent_psf: Decimal = number("23")
    comp3_rent_psf: Decimal = number("24")
    quality_adjustment: Decimal = number("0")  # %
    size_adjustment: Decimal = number("0")
    terms_adjustment: Decimal = number("0")
    lease_length: Decimal = number("10", fallback="10")  # years
    break_clause: Decimal = number("5")
    rent_free_months: Decimal = number("6")


@dataclass(frozen=True)
class ErvResult:
    net_lettable_area: Decimal
    benchmark: CostRange
    average_comp_rent: Decimal
    adjusted_comp_rent: Decimal
    estimated_erv: Decimal  # £ psf
    annual_rent_at_erv: Decimal
    current_annual_rent: Decimal
    rent_reversionary: Decimal
    reversionary_potential_pct: Decimal
    effective_rent_after_free: Decimal
    rent_free_value: Decimal
    is_under_rented: bool
    is_over_rented: bool
    erv_status: str
