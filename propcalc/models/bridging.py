"""Bridging finance calculator inputs and results."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from propcalc.models.bands import RateBand
from propcalc.models.form import FormInput, number


class ExitStrategy(Enum):
    SELL = "sell"
    REFINANCE = "refinance"
    HOLD = "hold"


class InterestType(Enum):
    RETAINED = "retained"
    ROLLED = "rolled"
    SERVICED = "serviced"


class RefurbType(Enum):
    LIGHT = "light"
    HEAVY = "heavy"


class DrawdownStructure(Enum):
    UPFRONT = "upfront"
    STAGED = "staged"
    ARREARS = "arrears"


# ---- Auction bridge ----

@dataclass(frozen=True)
class AuctionBridgeInput(FormInput):
    winning_bid: Decimal = number("180000")
    auction_fees: Decimal = number("2")  # % of bid
    current_value: Decimal = number("200000")
    completion_days: Decimal = number("28", fallback="28")
    exit_strategy: ExitStrategy = ExitStrategy.REFINANCE
    planned_refurb: Decimal = number("20000")
    exit_value: Decimal = number("260000")
    expected_holding_period: Decimal = number("6")  # months
    bridging_ltv: Decimal = number("75")
    interest_rate: Decimal = number("0.95")  # % per month
    arrangement_fee: Decimal = number("2")
    exit_fee: Decimal = number("1")
    valuation_fee: Decimal = number("1200")
    legal_fees: Decimal = number("2000")
    interest_retention: Decimal = number("6")  # months retained
    deposit_paid: Decimal = number("18000")


@dataclass(frozen=True)
class AuctionBridgeResult:
    auction_fee_amount: Decimal
    total_purchase_cost: Decimal
    bridge_loan_amount: Decimal
    day_one_ltv: Decimal
    gdltv: Decimal
    arrangement_fee_amount: Decimal
    exit_fee_amount: Decimal
    monthly_interest: Decimal
    retained_interest: Decimal
    total_interest_cost: Decimal
    total_finance_cost: Decimal
    net_day_one_advance: Decimal
    cash_required: Decimal
    total_project_cost: Decimal
    expected_profit: Decimal
    profit_on_cost: Decimal
    return_on_cash: Decimal
    days_to_complete: Decimal
    is_viable: bool
    completion_status: str


# ---- Bridge to let ----

@dataclass(frozen=True)
class BridgeToLetInput(FormInput):
    purchase_price: Decimal = number("250000")
    current_value: Decimal = number("250000")
    target_value: Decimal = number("300000")
    refurb_cost: Decimal = number("30000")
    monthly_rent: Decimal = number("1400")
    bridging_ltv: Decimal = number("75")
    bridging_rate: Decimal = number("0.85")
    bridging_term: Decimal = number("9")
    bridging_arrangement_fee: Decimal = number("2")
    bridging_exit_fee: Decimal = number("1")
    bridging_legal_fees: Decimal = number("2500")
    btl_ltv: Decimal = number("75")
    btl_rate: Decimal = number("5.5")
    btl_arrangement_fee: Decimal = number("1000")
    btl_legal_fees: Decimal = number("1000")
    btl_valuation_fee: Decimal = number("500")
    icr_requirement: Decimal = number("145", fallback="145")


@dataclass(frozen=True)
class BridgeToLetResult:
    bridging_loan_amount: Decimal
    bridging_day_one_ltv: Decimal
    bridging_arrangement_fee_amount: Decimal
    bridging_exit_fee_amount: Decimal
    bridging_total_interest: Decimal
    bridging_total_cost: Decimal
    btl_loan_amount: Decimal
    btl_ltv_actual: Decimal
    btl_monthly_payment: Decimal
    btl_annual_interest: Decimal
    btl_setup_cost: Decimal
    annual_rent: Decimal
    icr: Decimal
    passes_icr: bool
    total_finance_cost: Decimal
    total_investment: Decimal
    cash_released: Decimal
    money_left_in_deal: Decimal
    capital_recycled: Decimal
    monthly_cashflow: Decimal
    annual_cashflow: Decimal
    cash_on_cash_return: Decimal
    recycle_status: str


# ---- Bridging loan ----

@dataclass(frozen=True)
class BridgingLoanInput(FormInput):
    loan_amount: Decimal = number("200000")
    property_value: Decimal = number("300000")
    monthly_rate: Decimal = number("0.85")
    term_months: Decimal = number("12")
    arrangement_fee: Decimal = number("2")
    exit_fee: Decimal = number("1")
    valuation_fee: Decimal = number("500")
    legal_fees: Decimal = number("2000")
    interest_type: InterestType = InterestType.RETAINED


@dataclass(frozen=True)
class BridgingLoanResult:
    ltv: Decimal
    monthly_interest: Decimal
    total_interest: Decimal
    arrangement_fee: Decimal
    exit_fee: Decimal
    total_fees: Decimal
    total_cost: Decimal
    net_advance: Decimal
    gross_redemption: Decimal
    effective_annual_rate: Decimal
    daily_rate_pct: Decimal
    term_months: Decimal
    rate_band: Optional[RateBand]


# ---- Refurbishment bridge ----

@dataclass(frozen=True)
class RefurbishmentBridgeInput(FormInput):
    purchase_price: Decimal = number("200000")
    current_value: Decimal = number("200000")
    refurb_cost: Decimal = number("50000")
    after_refurb_value: Decimal = number("300000")
    refurb_type: RefurbType = RefurbType.LIGHT
    drawdown_structure: DrawdownStructure = DrawdownStructure.STAGED
    interest_rate: Decimal = number("0.95")
    loan_term: Decimal = number("12")
    arrangement_fee: Decimal = number("2")
    exit_fee: Decimal = number("1")
    valuation_fee: Decimal = number("1500")
    legal_fees: Decimal = number("2500")
    purchase_ltv: Decimal = number("75")
    refurb_funding_percent: Decimal = number("100")


@dataclass(frozen=True)
class RefurbishmentBridgeResult:
    purchase_loan_amount: Decimal
    refurb_funding_amount: Decimal
    total_facility: Decimal
    day_one_ltv: Decimal
    gdltv: Decimal
    ltv_on_arv: Decimal
    average_balance: Decimal
    monthly_interest_cost: Decimal
    total_interest_cost: Decimal
    average_interest: Decimal
    arrangement_fee_amount: Decimal
    exit_fee_amount: Decimal
    total_fees: Decimal
    gross_cost_of_funds: Decimal
    retained_interest: Decimal
    net_day_one_advance: Decimal
    total_project_cost: Decimal
    equity_required: Decimal
    potential_profit: Decimal
    return_on_equity: Decimal
    profit_on_cost: Decimal
    max_ltv: Decimal
    rate_band: RateBand
    gdltv_status: str


# ---- Retained vs rolled ----

@dataclass(frozen=True)
class RetainedVsRolledInput(FormInput):
    loan_amount: Decimal = number("200000")
    property_value: Decimal = number("300000")
    monthly_rate: Decimal = number("0.85")
    term_months: Decimal = number("12")
    arrangement_fee: Decimal = number("2")
    exit_fee: Decimal = number("1")
    valuation_fee: Decimal = number("500")
    legal_fees: Decimal = number("2000")


@dataclass(frozen=True)
class RetainedVsRolledResult:
    ltv: Decimal
    monthly_rate: Decimal
    arrangement_fee: Decimal
    exit_fee: Decimal
    other_fees: Decimal
    retained_total_interest: Decimal
    retained_net_advance: Decimal
    retained_gross_redemption: Decimal
    retained_total_cost: Decimal
    rolled_total_interest: Decimal
    rolled_net_advance: Decimal
    rolled_gross_redemption: Decimal
    rolled_total_cost: Decimal
    day_one_difference: Decimal
    redemption_difference: Decimal
    total_cost_difference: Decimal
    better_option: InterestType
