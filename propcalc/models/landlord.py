"""Buy-to-let landlord inputs and results: BRRR, lender stress tests,
rent-to-rent, Section 24 and stamp duty."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from propcalc.engine.tax import BandCharge
from propcalc.models.bands import RateBand
from propcalc.models.form import FormInput, number


class TaxBandChoice(Enum):
    BASIC = "basic"
    HIGHER = "higher"
    ADDITIONAL = "additional"


class Ownership(Enum):
    PERSONAL_BASIC = "personal-basic"
    PERSONAL_HIGHER = "personal-higher"
    LIMITED_COMPANY = "limited-company"


class MarginalRate(Enum):
    BASIC = "20"
    HIGHER = "40"
    ADDITIONAL = "45"


class BuyerType(Enum):
    FIRST_TIME = "first-time"
    HOME_MOVER = "home-mover"
    ADDITIONAL = "additional"
    NON_RESIDENT = "non-resident"
    COMPANY = "company"


class PropertyUse(Enum):
    RESIDENTIAL = "residential"
    NON_RESIDENTIAL = "non-residential"
    MIXED = "mixed"


# ---- BRRR ----

@dataclass(frozen=True)
class BrrrInput(FormInput):
    purchase_price: Decimal = number("150000")
    refurb_cost: Decimal = number("30000")
    after_repair_value: Decimal = number("220000")
    monthly_rent: Decimal = number("950")
    refinance_ltv: Decimal = number("75")
    refinance_rate: Decimal = number("5.5")
    bridging_rate: Decimal = number("0.85")  # monthly
    bridging_term: Decimal = number("6")  # months
    stamp_duty: Decimal = number("5000")
    legal_fees: Decimal = number("2500")
    survey_fees: Decimal = number("500")
    management_fee: Decimal = number("10")


@dataclass(frozen=True)
class BrrrResult:
    total_investment: Decimal
    bridging_interest: Decimal
    total_with_bridging: Decimal
    refinance_amount: Decimal
    monthly_mortgage: Decimal
    annual_mortgage: Decimal
    money_left_in: Decimal
    recycled_capital: Decimal
    value_added: Decimal
    equity_gain: Decimal
    annual_rent: Decimal
    effective_rent: Decimal
    monthly_cashflow: Decimal
    annual_cashflow: Decimal
    gross_yield: Decimal
    cash_on_cash: Decimal
    all_money_out: bool
    return_on_investment: Decimal
    dscr: Decimal


# ---- BTL DSCR ----

@dataclass(frozen=True)
class LenderCriterion:
    name: str
    icr: Decimal
    stress_rate: Decimal
    description: str


@dataclass(frozen=True)
class LenderCheck:
    criterion: LenderCriterion
    icr_at_stress: Decimal
    passes: bool


@dataclass(frozen=True)
class BtlDscrInput(FormInput):
    property_value: Decimal = number("300000")
    loan_amount: Decimal = number("225000")
    interest_rate: Decimal = number("5.5")
    stress_test_rate: Decimal = number("5.5")
    monthly_rent: Decimal = number("1500")
    void_allowance: Decimal = number("0")
    icr_requirement: Decimal = number("0")  # zero derives it from ownership and tax band
    is_limited_company: bool = False
    tax_band: TaxBandChoice = TaxBandChoice.HIGHER


@dataclass(frozen=True)
class BtlDscrResult:
    icr_requirement: Decimal
    ltv: Decimal
    annual_rent: Decimal
    net_annual_rent: Decimal
    monthly_interest_at_actual: Decimal
    annual_interest_at_actual: Decimal
    monthly_interest_at_stress: Decimal
    annual_interest_at_stress: Decimal
    icr_at_actual_rate: Decimal
    icr_at_stress_rate: Decimal
    dscr: Decimal
    passes_stress_test: bool
    max_loan_at_icr: Decimal
    shortfall_or_surplus: Decimal
    required_rent_at_max_loan: Decimal
    rent_multiple: Decimal
    icr_status: str
    lender_checks: tuple[LenderCheck, ...]


# ---- BTL ICR ----

@dataclass(frozen=True)
class BtlIcrInput(FormInput):
    property_value: Decimal = number("300000")
    loan_amount: Decimal = number("225000")
    monthly_rent: Decimal = number("1500")
    actual_rate: Decimal = number("5.5")
    stress_test_rate: Decimal = number("5.5")
    ownership_type: Ownership = Ownership.PERSONAL_HIGHER


@dataclass(frozen=True)
class BtlIcrResult:
    ltv: Decimal
    annual_rent: Decimal
    annual_interest_actual: Decimal
    monthly_interest_actual: Decimal
    annual_interest_stress: Decimal
    monthly_interest_stress: Decimal
    icr_at_actual_rate: Decimal
    icr_at_stress_rate: Decimal
    required_icr: Decimal
    passes_stress_test: bool
    max_loan_at_icr: Decimal
    loan_headroom: Decimal
    required_rent_monthly: Decimal
    rent_headroom: Decimal
    rental_coverage_ratio: Decimal
    margin_of_safety: Decimal


# ---- Buy to let ----

@dataclass(frozen=True)
class BuyToLetInput(FormInput):
    purchase_price: Decimal = number("250000")
    monthly_rent: Decimal = number("1200")
    deposit_percent: Decimal = number("25")
    interest_rate: Decimal = number("5.5")
    mortgage_term: Decimal = number("25")
    management_fee: Decimal = number("10")
    insurance_cost: Decimal = number("300")  # annual
    maintenance_percent: Decimal = number("5")
    void_percent: Decimal = number("4")
    other_costs: Decimal = number("0")  # monthly


@dataclass(frozen=True)
class BuyToLetResult:
    deposit: Decimal
    mortgage_amount: Decimal
    annual_rent: Decimal
    monthly_mortgage: Decimal
    annual_mortgage: Decimal
    repayment_monthly_payment: Decimal
    annual_management: Decimal
    annual_maintenance: Decimal
    annual_void_loss: Decimal
    annual_other_costs: Decimal
    total_operating_costs: Decimal
    net_operating_income: Decimal
    gross_yield: Decimal
    net_yield: Decimal
    monthly_cashflow: Decimal
    annual_cashflow: Decimal
    cash_on_cash: Decimal
    dscr: Decimal
    icr: Decimal  # ratio at the 5.5% stress rate
    ltv: Decimal
    rate_band: RateBand


# ---- Rent to rent ----

@dataclass(frozen=True)
class RentToRentInput(FormInput):
    monthly_rent_to_landlord: Decimal = number("1200")
    lease_length_years: Decimal = number("3")
    deposit_to_landlord: Decimal = number("2400")
    rent_free_months: Decimal = number("1")
    number_of_rooms: Decimal = number("4")
    average_rent_per_room: Decimal = number("650")
    occupancy_rate: Decimal = number("95", fallback="100")
    utilities_bills: Decimal = number("250")
    wifi_tv: Decimal = number("50")
    cleaning_maintenance: Decimal = number("150")
    insurance: Decimal = number("40")
    management_fee: Decimal = number("0")
    other_costs: Decimal = number("50")
    furniture_package: Decimal = number("3000")
    decor_refurb: Decimal = number("1500")
    legal_fees: Decimal = number("500")
    other_setup_costs: Decimal = number("500")


@dataclass(frozen=True)
class RentToRentResult:
    gross_monthly_income: Decimal
    effective_monthly_income: Decimal
    monthly_operating_costs: Decimal
    total_monthly_costs: Decimal
    monthly_profit: Decimal
    annual_profit: Decimal
    total_lease_months: Decimal
    paying_months: Decimal
    total_lease_value: Decimal
    profit_over_lease: Decimal
    total_setup_costs: Decimal
    profit_margin: Decimal
    roi_on_setup: Decimal
    payback_months: Decimal
    break_even_occupancy: Decimal
    cashflow_per_room: Decimal
    profit_status: str


# ---- Section 24 ----

@dataclass(frozen=True)
class Section24Input(FormInput):
    annual_rent: Decimal = number("24000")
    mortgage_interest: Decimal = number("12000")
    other_expenses: Decimal = number("3000")
    other_income: Decimal = number("50000")
    tax_band: MarginalRate = MarginalRate.HIGHER


@dataclass(frozen=True)
class Section24Result:
    old_net_profit: Decimal
    old_tax_due: Decimal
    old_net_income: Decimal
    new_net_profit: Decimal
    new_tax_due: Decimal
    tax_credit: Decimal
    new_actual_tax: Decimal
    new_net_income: Decimal
    additional_tax: Decimal
    percentage_increase: Decimal
    income_reduction: Decimal
    ltd_profit: Decimal
    corporation_tax: Decimal
    ltd_retained_profit: Decimal
    dividend_tax: Decimal
    ltd_net_after_dividend: Decimal
    personal_effective_rate: Decimal
    ltd_effective_rate: Decimal
    ltd_saving: Decimal  # positive when a company leaves more in hand
    total_income_tax: Decimal  # all income under current rules, after the interest credit
    marginal_rate_on_total: Decimal


# ---- Stamp duty ----

@dataclass(frozen=True)
class StampDutyInput(FormInput):
    purchase_price: Decimal = number("350000")
    buyer_type: BuyerType = BuyerType.ADDITIONAL
    property_type: PropertyUse = PropertyUse.RESIDENTIAL


@dataclass(frozen=True)
class StampDutyResult:
    price: Decimal
    tax: Decimal
    breakdown: tuple[BandCharge, ...]
    effective_rate: Decimal
    surcharge: Decimal  # percentage points
    explanation: str
    warnings: tuple[str, ...]


# ---- Rental yield ----

@dataclass(frozen=True)
class RentalYieldInput(FormInput):
    purchase_price: Decimal = number("200000")
    monthly_rent: Decimal = number("950")
    purchase_costs: Decimal = number("8000")  # SDLT, legal, survey
    annual_expenses: Decimal = number("2000")
    void_weeks: Decimal = number("2")  # a year


@dataclass(frozen=True)
class RentalYieldResult:
    annual_rent: Decimal
    total_investment: Decimal
    void_cost: Decimal
    effective_rent: Decimal
    net_operating_income: Decimal
    gross_yield: Decimal
    net_yield: Decimal
    cap_rate: Decimal
