"""Bridging finance: auction purchases, bridge-to-let exits, refurbishment
facilities and the retained vs rolled interest comparison.

Bridging rates are monthly percentages (0.95 = 0.95% a month).

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

from decimal import Decimal

from propcalc.engine.debt import (
    annualised_cost_rate,
    bridging_monthly_interest,
    day_one_net_loan,
    interest_cover,
    interest_only_payment,
    loan_to_value,
    retained_interest,
    rolled_balance,
)
from propcalc.engine.formulas import TWELVE, ZERO, as_pct, money, pct_of, ratio
from propcalc.models.bands import RateBand, band_for
from propcalc.models.bridging import (
    AuctionBridgeInput,
    AuctionBridgeResult,
    BridgeToLetInput,
    BridgeToLetResult,
    BridgingLoanInput,
    BridgingLoanResult,
    DrawdownStructure,
    InterestType,
    RefurbishmentBridgeInput,
    RefurbishmentBridgeResult,
    RefurbType,
    RetainedVsRolledInput,
    RetainedVsRolledResult,
)

AUCTION_MAX_DAY_ONE_LTV = Decimal("80")

BRIDGING_RATE_BANDS: tuple[RateBand, ...] = (
    RateBand(Decimal("50"), Decimal("0.55"), Decimal("0.75"), "50% LTV or less"),
    RateBand(Decimal("60"), Decimal("0.65"), Decimal("0.85"), "51-60% LTV"),
    RateBand(Decimal("65"), Decimal("0.70"), Decimal("0.90"), "61-65% LTV"),
    RateBand(Decimal("70"), Decimal("0.75"), Decimal("0.95"), "66-70% LTV"),
    RateBand(Decimal("75"), Decimal("0.85"), Decimal("1.10"), "71-75% LTV"),
    RateBand(None, Decimal("0.95"), Decimal("1.25"), "75%+ LTV"),
)

# max_ltv here is the lender's GDLTV ceiling for the refurb type
REFURB_BRIDGE_RATES: dict[RefurbType, RateBand] = {
    RefurbType.LIGHT: RateBand(Decimal("75"), Decimal("0.75"), Decimal("1.10"), "Light Refurb"),
    RefurbType.HEAVY: RateBand(Decimal("70"), Decimal("0.85"), Decimal("1.25"), "Heavy Refurb"),
}


def completion_status(days: Decimal) -> str:
    if days <= 20:
        return "Very Tight"
    if days <= 28:
        return "Standard"
    return "Comfortable"


def recycle_status(capital_recycled: Decimal) -> str:
    if capital_recycled >= 100:
        return "All Money Out"
    if capital_recycled >= 75:
        return "Most Money Out"
    return "Money In Deal"


def gdltv_status(gdltv: Decimal, max_ltv: Decimal) -> str:
    if gdltv <= max_ltv - 5:
        return "Low GDLTV"
    if gdltv <= max_ltv:
        return "Near Max"
    return "Over Max"


def evaluate_auction_bridge(inp: AuctionBridgeInput) -> AuctionBridgeResult:
    """Bridge an auction purchase funded on current value, exiting on ``exit_value``."""
    auction_fee = pct_of(inp.winning_bid, inp.auction_fees)
    purchase_cost = inp.winning_bid + auction_fee

    loan = pct_of(inp.current_value, inp.bridging_ltv)
    day_one_ltv = loan_to_value(loan, inp.current_value)
    gdltv = as_pct(loan + inp.planned_refurb, inp.exit_value)

    arrangement = pct_of(loan, inp.arrangement_fee)
    exit_fee = pct_of(loan, inp.exit_fee)
    monthly = bridging_monthly_interest(loan, inp.interest_rate)
    retained = retained_interest(loan, inp.interest_rate, inp.interest_retention)
    interest_cost = monthly * inp.expected_holding_period

    finance_cost = arrangement + exit_fee + interest_cost + inp.valuation_fee + inp.legal_fees
    net_advance = day_one_net_loan(
        loan,
        inp.arrangement_fee,
        inp.interest_retention,
        inp.interest_rate,
        inp.legal_fees,
        inp.valuation_fee,
    )
    balance_to_pay = purchase_cost - inp.deposit_paid
    cash_required = max(ZERO, balance_to_pay - net_advance + inp.planned_refurb)

    project_cost = purchase_cost + inp.planned_refurb + finance_cost
    profit = inp.exit_value - project_cost

    return AuctionBridgeResult(
        auction_fee_amount=money(auction_fee),
        total_purchase_cost=money(purchase_cost),
        bridge_loan_amount=money(loan),
        day_one_ltv=ratio(day_one_ltv),
        gdltv=ratio(gdltv),
        arrangement_fee_amount=money(arrangement),
        exit_fee_amount=money(exit_fee),
        monthly_interest=money(monthly),
        retained_interest=money(retained),
        total_interest_cost=money(interest_cost),
        total_finance_cost=money(finance_cost),
        net_day_one_advance=money(net_advance),
        cash_required=money(cash_required),
        total_project_cost=money(project_cost),
        expected_profit=money(profit),
        profit_on_cost=ratio(as_pct(profit, project_cost)),
        return_on_cash=ratio(as_pct(profit, cash_required)),
        days_to_complete=inp.completion_days,
        is_viable=(
            profit > 0
            and day_one_ltv <= AUCTION_MAX_DAY_ONE_LTV
            and cash_required <= inp.deposit_paid + inp.planned_refurb
        ),
        completion_status=completion_status(inp.completion_days),
    )


def evaluate_bridge_to_let(inp: BridgeToLetInput) -> BridgeToLetResult:
    """Bridge on current value, refinance onto an interest-only BTL at target value."""
    bridge_loan = pct_of(inp.current_value, inp.bridging_ltv)
    bridge_arrangement = pct_of(bridge_loan, inp.bridging_arrangement_fee)
    bridge_exit = pct_of(bridge_loan, inp.bridging_exit_fee)
    bridge_interest = retained_interest(bridge_loan, inp.bridging_rate, inp.bridging_term)
    bridge_cost = bridge_arrangement + bridge_exit + bridge_interest + inp.bridging_legal_fees

    btl_loan = pct_of(inp.target_value, inp.btl_ltv)
    btl_payment = interest_only_payment(btl_loan, inp.btl_rate)
    btl_interest = btl_payment * TWELVE
    btl_setup = inp.btl_arrangement_fee + inp.btl_legal_fees + inp.btl_valuation_fee

    annual_rent = inp.monthly_rent * TWELVE
    icr = interest_cover(annual_rent, btl_interest)

    finance_cost = bridge_cost + btl_setup
    deposit = inp.purchase_price - bridge_loan
    investment = deposit + inp.refurb_cost + finance_cost
    cash_released = btl_loan - bridge_loan
    money_left = investment - cash_released
    capital_recycled = as_pct(cash_released, investment)

    monthly_cashflow = inp.monthly_rent - btl_payment
    annual_cashflow = monthly_cashflow * TWELVE

    return BridgeToLetResult(
        bridging_loan_amount=money(bridge_loan),
        bridging_day_one_ltv=ratio(loan_to_value(bridge_loan, inp.current_value)),
        bridging_arrangement_fee_amount=money(bridge_arrangement),
        bridging_exit_fee_amount=money(bridge_exit),
        bridging_total_interest=money(bridge_interest),
        bridging_total_cost=money(bridge_cost),
        btl_loan_amount=money(btl_loan),
        btl_ltv_actual=ratio(loan_to_value(btl_loan, inp.target_value)),
        btl_monthly_payment=money(btl_payment),
        btl_annual_interest=money(btl_interest),
        btl_setup_cost=money(btl_setup),
        annual_rent=money(annual_rent),
        icr=ratio(icr),
        passes_icr=icr >= inp.icr_requirement,
        total_finance_cost=money(finance_cost),
        total_investment=money(investment),
        cash_released=money(cash_released),
        money_left_in_deal=money(money_left),
        capital_recycled=ratio(capital_recycled),
        monthly_cashflow=money(monthly_cashflow),
        annual_cashflow=money(annual_cashflow),
        cash_on_cash_return=ratio(as_pct(annual_cashflow, money_left)),
        recycle_status=recycle_status(capital_recycled),
    )


def evaluate_bridging_loan(inp: BridgingLoanInput) -> BridgingLoanResult:
    ltv = loan_to_value(inp.loan_amount, inp.property_value)
    monthly = bridging_monthly_interest(inp.loan_amount, inp.monthly_rate)
    interest = monthly * inp.term_months
    arrangement = pct_of(inp.loan_amount, inp.arrangement_fee)
    exit_fee = pct_of(inp.loan_amount, inp.exit_fee)
    fees = arrangement + exit_fee + inp.valuation_fee + inp.legal_fees
    cost = interest + fees

    if inp.interest_type is InterestType.RETAINED:
        net_advance = inp.loan_amount - interest - arrangement
        redemption = inp.loan_amount + exit_fee
    elif inp.interest_type is InterestType.ROLLED:
        net_advance = inp.loan_amount - arrangement
        redemption = inp.loan_amount + interest + exit_fee
    else:
        net_advance = inp.loan_amount - arrangement
        redemption = inp.loan_amount + exit_fee

    return BridgingLoanResult(
        ltv=ratio(ltv),
        monthly_interest=money(monthly),
        total_interest=money(interest),
        arrangement_fee=money(arrangement),
        exit_fee=money(exit_fee),
        total_fees=money(fees),
        total_cost=money(cost),
        net_advance=money(net_advance),
        gross_redemption=money(redemption),
        effective_annual_rate=ratio(annualised_cost_rate(cost, inp.loan_amount, inp.term_months)),
        daily_rate_pct=ratio(inp.monthly_rate / 30),
        term_months=inp.term_months,
        rate_band=band_for(BRIDGING_RATE_BANDS, ltv),
    )


def _average_balance(structure: DrawdownStructure, purchase_loan: Decimal, refurb_funding: Decimal) -> Decimal:
    if structure is DrawdownStructure.UPFRONT:
        return purchase_loan + refurb_funding
    if structure is DrawdownStructure.STAGED:
        # refurb tranches drawn evenly, so half the funding is out on average
        return purchase_loan + refurb_funding * Decimal("0.5")
    return purchase_loan


def evaluate_refurbishment_bridge(inp: RefurbishmentBridgeInput) -> RefurbishmentBridgeResult:
    purchase_loan = pct_of(inp.purchase_price, inp.purchase_ltv)
    refurb_funding = pct_of(inp.refurb_cost, inp.refurb_funding_percent)
    facility = purchase_loan + refurb_funding
    gdltv = as_pct(facility, inp.after_refurb_value)

    average_balance = _average_balance(inp.drawdown_structure, purchase_loan, refurb_funding)
    monthly = bridging_monthly_interest(average_balance, inp.interest_rate)
    interest = monthly * inp.loan_term

    arrangement = pct_of(facility, inp.arrangement_fee)
    exit_fee = pct_of(facility, inp.exit_fee)
    fees = arrangement + exit_fee + inp.valuation_fee + inp.legal_fees
    cost_of_funds = interest + fees

    retained = interest if inp.drawdown_structure is DrawdownStructure.UPFRONT else ZERO
    net_advance = purchase_loan - arrangement - inp.valuation_fee - inp.legal_fees - retained

    project_cost = inp.purchase_price + inp.refurb_cost + cost_of_funds
    equity = (inp.purchase_price - purchase_loan) + (inp.refurb_cost - refurb_funding) + fees
    profit = inp.after_refurb_value - project_cost

    band = REFURB_BRIDGE_RATES[inp.refurb_type]
    return RefurbishmentBridgeResult(
        purchase_loan_amount=money(purchase_loan),
        refurb_funding_amount=money(refurb_funding),
        total_facility=money(facility),
        day_one_ltv=ratio(loan_to_value(purchase_loan, inp.current_value)),
        gdltv=ratio(gdltv),
        ltv_on_arv=ratio(loan_to_value(purchase_loan, inp.after_refurb_value)),
        average_balance=money(average_balance),
        monthly_interest_cost=money(monthly),
        total_interest_cost=money(interest),
        average_interest=ratio(as_pct(interest, facility)),
        arrangement_fee_amount=money(arrangement),
        exit_fee_amount=money(exit_fee),
        total_fees=money(fees),
        gross_cost_of_funds=money(cost_of_funds),
        retained_interest=money(retained),
        net_day_one_advance=money(net_advance),
        total_project_cost=money(project_cost),
        equity_required=money(equity),
        potential_profit=money(profit),
        return_on_equity=ratio(as_pct(profit, equity)),
        profit_on_cost=ratio(as_pct(profit, project_cost)),
        max_ltv=band.max_ltv,
        rate_band=band,
        gdltv_status=gdltv_status(gdltv, band.max_ltv),
    )


def evaluate_retained_vs_rolled(inp: RetainedVsRolledInput) -> RetainedVsRolledResult:
    """Compare deducting flat interest up front with compounding it into the redemption."""
    loan = inp.loan_amount
    arrangement = pct_of(loan, inp.arrangement_fee)
    exit_fee = pct_of(loan, inp.exit_fee)
    other_fees = inp.valuation_fee + inp.legal_fees

    retained = retained_interest(loan, inp.monthly_rate, inp.term_months)
    retained_net = loan - retained - arrangement
    retained_redemption = loan + exit_fee
    retained_cost = retained + arrangement + exit_fee + other_fees

    balance = rolled_balance(loan, inp.monthly_rate, inp.term_months)
    rolled = balance - loan
    rolled_net = loan - arrangement
    rolled_redemption = balance + exit_fee
    rolled_cost = rolled + arrangement + exit_fee + other_fees

    cost_difference = rolled_cost - retained_cost
    return RetainedVsRolledResult(
        ltv=ratio(loan_to_value(loan, inp.property_value)),
        monthly_rate=inp.monthly_rate,
        arrangement_fee=money(arrangement),
        exit_fee=money(exit_fee),
        other_fees=money(other_fees),
        retained_total_interest=money(retained),
        retained_net_advance=money(retained_net),
        retained_gross_redemption=money(retained_redemption),
        retained_total_cost=money(retained_cost),
        rolled_total_interest=money(rolled),
        rolled_net_advance=money(rolled_net),
        rolled_gross_redemption=money(rolled_redemption),
        rolled_total_cost=money(rolled_cost),
        day_one_difference=money(rolled_net - retained_net),
        redemption_difference=money(rolled_redemption - retained_redemption),
        total_cost_difference=money(cost_difference),
        better_option=InterestType.RETAINED if cost_difference > 0 else InterestType.ROLLED,
    )
