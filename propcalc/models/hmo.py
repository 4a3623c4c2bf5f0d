"""HMO (house in multiple occupation) inputs and results."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from propcalc.models.form import FormInput, count, number


class BuildingAge(Enum):
    POST_2000 = "post-2000"
    FROM_1990_TO_2000 = "1990-2000"
    PRE_1990 = "pre-1990"
    PRE_1970 = "pre-1970"


class DoorSpec(Enum):
    FD30 = "FD30"
    FD60 = "FD60"


class AlarmType(Enum):
    BATTERY = "battery"
    MAINS = "mains"
    ADDRESSABLE = "addressable"


class ComplianceLevel(Enum):
    BASIC = "basic"
    STANDARD = "standard"
    ENHANCED = "enhanced"


class LicenceType(Enum):
    MANDATORY = "mandatory"
    ADDITIONAL = "additional"
    SELECTIVE = "selective"


class ApplicationType(Enum):
    NEW = "new"
    RENEWAL = "renewal"


# ---- HMO finance ----

@dataclass(frozen=True)
class HmoFinanceInput(FormInput):
    property_value: Decimal = number("350000")
    deposit: Decimal = number("87500")
    number_of_rooms: Decimal = number("5")
    rent_per_room: Decimal = number("650")
    interest_rate: Decimal = number("6.5")
    loan_term: Decimal = number("25", fallback="25")
    stress_test_rate: Decimal = number("8.5", fallback="8.5")
    icr_requirement: Decimal = number("145", fallback="145")
    management_fee: Decimal = number("15")
    void_allowance: Decimal = number("8")


@dataclass(frozen=True)
class HmoFinanceResult:
    loan_amount: Decimal
    ltv: Decimal
    gross_rent: Decimal
    net_rent: Decimal
    monthly_interest: Decimal
    monthly_payment: Decimal
    monthly_capital_repayment: Decimal
    first_year_capital_repaid: Decimal
    icr: Decimal
    stressed_icr: Decimal
    max_loan_by_icr: Decimal
    passes_stress_test: bool
    monthly_cashflow: Decimal
    annual_cashflow: Decimal
    cash_on_cash_return: Decimal
    icr_status: str
    ltv_status: str


# ---- Fire safety ----

@dataclass(frozen=True)
class HmoFireSafetyInput(FormInput):
    property_storeys: int = count(2, fallback=2)
    number_of_rooms: int = count(5, fallback=5)
    has_basement: bool = False
    building_age: BuildingAge = BuildingAge.PRE_1990
    existing_fire_doors: int = count(0)
    has_interlinked_alarms: bool = False
    has_emergency_lighting: bool = False
    has_fire_alarm_panel: bool = False
    has_fire_extinguishers: bool = False
    has_fire_risk_assessment: bool = False
    door_specification: DoorSpec = DoorSpec.FD30
    alarm_type: AlarmType = AlarmType.MAINS
    use_high_estimates: bool = False


@dataclass(frozen=True)
class HmoFireSafetyResult:
    total_doors_required: int
    doors_to_install: int
    doors_cost: Decimal
    smoke_seals_closers_cost: Decimal
    alarms_cost: Decimal
    emergency_lighting_cost: Decimal
    extinguishers_cost: Decimal
    signage_cost: Decimal
    fire_panel_cost: Decimal
    fra_cost: Decimal
    other_cost: Decimal
    total_cost: Decimal
    cost_per_room: Decimal
    compliance_level: ComplianceLevel
    mandatory_items: tuple[str, ...]
    recommended_items: tuple[str, ...]


# ---- Licence fee ----

@dataclass(frozen=True)
class CouncilFees:
    mandatory: Decimal
    additional: Decimal
    renewal: Decimal
    duration_years: int = 5


@dataclass(frozen=True)
class HmoLicenceFeeInput(FormInput):
    council: str = "average-uk"
    licence_type: LicenceType = LicenceType.MANDATORY
    application_type: ApplicationType = ApplicationType.NEW
    number_of_properties: int = count(1, fallback=1)
    number_of_rooms: int = count(5, fallback=5)
    number_of_occupants: int = count(5, fallback=5)
    is_accredited_landlord: bool = False
    early_bird_discount: bool = False
    multi_property_discount: bool = False
    custom_fee: Decimal = number("0")  # zero means use the council table


@dataclass(frozen=True)
class HmoLicenceFeeResult:
    base_fee: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    fee_per_property: Decimal
    total_fee: Decimal
    fee_per_room: Decimal
    annual_cost: Decimal
    monthly_equivalent: Decimal
    licence_duration: int
    is_mandatory_hmo: bool
    notes: tuple[str, ...]


# ---- Viability ----

@dataclass(frozen=True)
class HmoViabilityInput(FormInput):
    purchase_price: Decimal = number("250000")
    refurb_cost: Decimal = number("40000")
    number_of_rooms: Decimal = number("6")
    average_room_rent: Decimal = number("550")
    deposit_percent: Decimal = number("25")
    interest_rate: Decimal = number("6.5")
    management_fee: Decimal = number("12")
    license_cost: Decimal = number("1200")
    insurance_cost: Decimal = number("1500")  # annual
    utilities_cost: Decimal = number("400")  # monthly
    cleaning_cost: Decimal = number("200")  # monthly
    maintenance_percent: Decimal = number("8")
    void_percent: Decimal = number("6")


@dataclass(frozen=True)
class HmoViabilityResult:
    total_investment: Decimal
    deposit: Decimal
    mortgage_amount: Decimal
    monthly_gross_rent: Decimal
    annual_gross_rent: Decimal
    effective_rent: Decimal
    annual_management: Decimal
    annual_maintenance: Decimal
    annual_utilities: Decimal
    annual_cleaning: Decimal
    annual_licence: Decimal
    total_operating_costs: Decimal
    noi: Decimal
    monthly_mortgage: Decimal
    annual_mortgage: Decimal
    monthly_cashflow: Decimal
    annual_cashflow: Decimal
    per_room_cashflow: Decimal
    gross_yield: Decimal
    net_yield: Decimal
    cash_on_cash: Decimal
    dscr: Decimal
    icr: Decimal  # ratio, not percentage
    cost_per_room: Decimal
    hmo_vs_btl_multiplier: Decimal
