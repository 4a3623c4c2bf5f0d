"""Cash flow analysis: cashflow, cash-on-cash, DSCR, break-even occupancy.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal

from propcalc.engine.formulas import HUNDRED, as_pct, safe_div

WEEKS_PER_MONTH = Decimal("4.33")


def monthly_cashflow(monthly_rent: Decimal, monthly_mortgage: Decimal, monthly_expenses: Decimal) -> Decimal:
    return monthly_rent - monthly_mortgage - monthly_expenses


def annual_cashflow(annual_rent: Decimal, annual_mortgage: Decimal, annual_expenses: Decimal) -> Decimal:
    return annual_rent - annual_mortgage - annual_expenses


def cash_on_cash(annual_cash_flow: Decimal, total_cash_invested: Decimal) -> Decimal:
    """Cash-on-cash return as a percentage of cash invested."""
    return as_pct(annual_cash_flow, total_cash_invested)


def dscr(noi_amount: Decimal, annual_debt_service: Decimal) -> Decimal:
    """Debt Service Coverage Ratio = NOI / annual debt service."""
    return safe_div(noi_amount, annual_debt_service)


def break_even_occupancy(total_expenses: Decimal, potential_gross_rent: Decimal) -> Decimal:
    """Occupancy needed to cover expenses; 100 when there is no rent to cover them."""
    if potential_gross_rent <= 0:
        return HUNDRED
    return total_expenses / potential_gross_rent * HUNDRED


def void_cost(monthly_rent: Decimal, void_weeks: Decimal) -> Decimal:
    return monthly_rent / WEEKS_PER_MONTH * void_weeks
