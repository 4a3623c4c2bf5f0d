"""Serviced accommodation and holiday let inputs and results."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from propcalc.models.bands import RateBand
from propcalc.models.form import FormInput, number
from propcalc.models.landlord import TaxBandChoice


# ---- SA finance ----

@dataclass(frozen=True)
class SaFinanceInput(FormInput):
    property_value: Decimal = number("350000")
    deposit: Decimal = number("87500")
    average_daily_rate: Decimal = number("150")
    occupancy_rate: Decimal = number("65")
    interest_rate: Decimal = number("6.5")
    stress_test_rate: Decimal = number("7.5")
    icr_requirement: Decimal = number("145", fallback="145")
    occupancy_stress_test: Decimal = number("50")
    platform_fees: Decimal = number("15")
    management_fee: Decimal = number("20")
    cleaning_per_night: Decimal = number("50")
    utilities: Decimal = number("300")  # monthly
    insurance: Decimal = number("150")  # monthly
    maintenance: Decimal = number("5")  # % of gross


@dataclass(frozen=True)
class SaFinanceResult:
    loan_amount: Decimal
    ltv: Decimal
    monthly_payment: Decimal
    annual_interest: Decimal
    booked_nights: int
    gross_annual_income: Decimal
    platform_fee_amount: Decimal
    management_fee_amount: Decimal
    cleaning_costs: Decimal
    maintenance_cost: Decimal
    total_operating_costs: Decimal
    net_operating_income: Decimal
    icr: Decimal
    stressed_icr: Decimal
    passes_stress_test: bool
    max_loan_by_icr: Decimal
    monthly_cashflow: Decimal
    annual_cashflow: Decimal
    cash_on_cash_return: Decimal
    break_even_occupancy: Decimal
    effective_yield: Decimal
    stressed_occupancy_cashflow: Decimal  # annual, at occupancy_stress_test
    rate_band: Optional[RateBand]
    rate_guidance: str


# ---- SA occupancy ----

@dataclass(frozen=True)
class SaOccupancyInput(FormInput):
    adr: Decimal = number("120")
    fixed_costs_monthly: Decimal = number("800")
    variable_cost_per_night: Decimal = number("15")
    mortgage_monthly: Decimal = number("1200")
    target_monthly_profit: Decimal = number("500")
    cleaning_fee: Decimal = number("50")
    cleaning_cost: Decimal = number("35")
    platform_fee_percent: Decimal = number("15")
    average_stay_length: Decimal = number("2.5")


@dataclass(frozen=True)
class OccupancyScenario:
    occupancy: int
    nights_per_month: Decimal
    nights_per_year: Decimal
    gross_revenue_monthly: Decimal
    net_revenue_monthly: Decimal
    cashflow_monthly: Decimal
    cashflow_annual: Decimal


@dataclass(frozen=True)
class SaOccupancyResult:
    net_adr_after_platform: Decimal
    cleaning_profit_per_night: Decimal
    net_revenue_per_night: Decimal
    total_fixed_costs_monthly: Decimal
    breakeven_nights_monthly: Decimal
    breakeven_occupancy_monthly: Decimal
    breakeven_nights_annual: Decimal
    breakeven_occupancy_annual: Decimal
    target_nights_monthly: Decimal
    target_occupancy: Decimal
    scenarios: tuple[OccupancyScenario, ...]
    revpar_at_50: Decimal
    revpar_at_65: Decimal
    revpar_at_80: Decimal
    safety_margin_nights: Decimal


# ---- SA profit ----

@dataclass(frozen=True)
class SaProfitInput(FormInput):
    purchase_price: Decimal = number("250000")
    refurb_cost: Decimal = number("25000")
    deposit_percent: Decimal = number("25")
    interest_rate: Decimal = number("6")
    average_nightly_rate: Decimal = number("120")
    occupancy_percent: Decimal = number("65")
    cleaning_fee: Decimal = number("50")
    cleaning_cost: Decimal = number("35")
    management_percent: Decimal = number("20")
    platform_fees: Decimal = number("15")
    utilities: Decimal = number("250")  # monthly from here down
    insurance: Decimal = number("100")
    maintenance: Decimal = number("150")
    consumables: Decimal = number("100")
    council_tax: Decimal = number("150")


@dataclass(frozen=True)
class SaProfitResult:
    total_investment: Decimal
    deposit: Decimal
    mortgage_amount: Decimal
    nights_per_year: Decimal
    bookings_per_year: Decimal
    gross_accommodation_revenue: Decimal
    gross_cleaning_revenue: Decimal
    gross_revenue: Decimal
    platform_fees_amount: Decimal
    management_amount: Decimal
    cleaning_costs_amount: Decimal
    fixed_running_costs: Decimal
    total_operating_costs: Decimal
    noi: Decimal
    monthly_mortgage: Decimal
    annual_mortgage: Decimal
    monthly_cashflow: Decimal
    annual_cashflow: Decimal
    gross_yield: Decimal
    net_yield: Decimal
    cash_on_cash: Decimal
    adr: Decimal
    revpar: Decimal
    breakeven_occupancy: Decimal
    sa_vs_btl_multiplier: Decimal


# ---- Holiday let tax ----

@dataclass(frozen=True)
class HolidayLetTaxInput(FormInput):
    gross_income: Decimal = number("30000")
    days_available: Decimal = number("220")
    days_let: Decimal = number("120")
    mortgage_interest: Decimal = number("8000")
    insurance: Decimal = number("600")
    utilities: Decimal = number("2400")
    cleaning: Decimal = number("1500")
    management: Decimal = number("0")
    maintenance: Decimal = number("1000")
    council_tax: Decimal = number("1800")
    advertising: Decimal = number("500")
    other_expenses: Decimal = number("500")
    capital_allowances: Decimal = number("2000")
    tax_bracket: TaxBandChoice = TaxBandChoice.HIGHER


@dataclass(frozen=True)
class HolidayLetTaxResult:
    qualifies_as_fhl: bool
    total_expenses: Decimal
    net_profit_before_ca: Decimal
    taxable_profit: Decimal
    income_tax_on_profit: Decimal
    class_4_ni: Decimal
    total_tax_liability: Decimal
    post_tax_profit: Decimal
    effective_tax_rate: Decimal
    btl_tax_after_relief: Decimal
    btl_post_tax_profit: Decimal
    fhl_tax_saving: Decimal
    revenue_per_day_let: Decimal
    expense_ratio: Decimal
