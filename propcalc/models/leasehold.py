"""Leasehold inputs and results: ground rent, lease extension, marriage value
and service charges."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from propcalc.models.form import FormInput, number


class Escalation(Enum):
    FIXED = "fixed"
    RPI = "rpi"
    PERCENTAGE = "percentage"
    DOUBLING = "doubling"
    MARKET = "market"


class GroundRentRisk(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    ONEROUS = "onerous"


# ---- Ground rent ----

@dataclass(frozen=True)
class GroundRentInput(FormInput):
    current_ground_rent: Decimal = number("300")
    escalation_type: Escalation = Escalation.FIXED
    escalation_rate: Decimal = number("0")  # % per review, percentage escalation only
    escalation_period: Decimal = number("25")  # years between reviews
    years_remaining: Decimal = number("90")
    property_value: Decimal = number("350000")


@dataclass(frozen=True)
class RentProjection:
    year: int
    rent: Decimal


@dataclass(frozen=True)
class GroundRentResult:
    current_rent: Decimal
    rent_in_10_years: Decimal
    rent_in_25_years: Decimal
    rent_in_50_years: Decimal
    total_over_25_years: Decimal
    total_over_lease: Decimal
    rent_as_percentage: Decimal
    capitalised_value: Decimal
    risk_level: GroundRentRisk
    projections: tuple[RentProjection, ...]


# ---- Lease extension ----

@dataclass(frozen=True)
class LeaseExtensionInput(FormInput):
    flat_value: Decimal = number("350000")
    current_lease_years: Decimal = number("82")
    ground_rent: Decimal = number("250")
    related_parties: bool = False


@dataclass(frozen=True)
class LeaseExtensionResult:
    current_relativity: Decimal
    extended_relativity: Decimal
    current_lease_value: Decimal
    extended_lease_value: Decimal
    capitalised_ground_rent: Decimal
    diminution: Decimal
    marriage_value: Decimal
    premium: Decimal
    surveyor_fees: Decimal
    legal_fees: Decimal
    freeholder_costs: Decimal
    total_professional_costs: Decimal
    total_cost: Decimal
    value_uplift: Decimal
    net_gain: Decimal
    roi: Decimal
    years_to_80: Decimal
    is_marriage_value_zone: bool
    is_critical: bool


# ---- Marriage value ----

@dataclass(frozen=True)
class MarriageValueInput(FormInput):
    freehold_value: Decimal = number("400000")
    current_lease_years: Decimal = number("72")
    extension_years: Decimal = number("90", fallback="90")
    ground_rent: Decimal = number("250")
    capitalisation_rate: Decimal = number("5", fallback="5")
    deferment_rate: Decimal = number("5", fallback="5")
    marriage_value_share: Decimal = number("50", fallback="50")


@dataclass(frozen=True)
class MarriageValueResult:
    new_lease_years: Decimal
    current_lease_relativity: Decimal
    extended_lease_relativity: Decimal
    current_lease_value: Decimal
    extended_lease_value: Decimal
    value_uplift: Decimal
    marriage_value_total: Decimal
    landlord_marriage_share: Decimal
    capitalised_ground_rent: Decimal
    present_value_reversion: Decimal
    total_premium: Decimal
    value_gain_to_leaseholder: Decimal
    is_under_80_years: bool
    years_until_80: Decimal


# ---- Service charge ----

@dataclass(frozen=True)
class ServiceChargeInput(FormInput):
    number_of_units: Decimal = number("12")
    your_share: Decimal = number("8.33")  # % of building costs
    building_insurance: Decimal = number("15000")
    management_fees: Decimal = number("8000")
    cleaning_gardening: Decimal = number("3000")
    lift_maintenance: Decimal = number("2500")
    communal_electricity: Decimal = number("1500")
    repairs_reserve: Decimal = number("5000")
    major_works_reserve: Decimal = number("10000")
    other_costs: Decimal = number("0")


@dataclass(frozen=True)
class ChargeShare:
    category: str
    building_cost: Decimal
    your_share: Decimal


@dataclass(frozen=True)
class ServiceChargeResult:
    total_building_costs: Decimal
    your_annual_charge: Decimal
    your_monthly_charge: Decimal
    your_quarterly_charge: Decimal
    your_share_percent: Decimal
    breakdown: tuple[ChargeShare, ...]
    reserve_percentage: Decimal
    average_cost_per_unit: Decimal
