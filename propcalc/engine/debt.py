"""Mortgage and bridging debt maths.

Rates are percentages as entered on the forms: annual for mortgages
(5.5 = 5.5% a year), monthly for bridging (0.85 = 0.85% a month).

Pure functions: Decimal in, Decimal or dataclass out. No I/O.
"""

import math
from dataclasses import dataclass
from decimal import Decimal

from propcalc.engine.formulas import ONE, TWELVE, ZERO, as_pct, growth_factor, money, pct, pct_of, safe_div


@dataclass(frozen=True)
class RepaymentRow:
    month: int
    payment: Decimal
    capital: Decimal
    interest: Decimal
    balance: Decimal


# ---- Term mortgages ----

def loan_to_value(loan_amount: Decimal, property_value: Decimal) -> Decimal:
    return as_pct(loan_amount, property_value)


def interest_only_payment(loan_amount: Decimal, annual_rate_pct: Decimal) -> Decimal:
    """Monthly interest-only payment."""
    return pct_of(loan_amount, annual_rate_pct) / TWELVE


def monthly_payment(principal: Decimal, annual_rate_pct: Decimal, term_years: Decimal) -> Decimal:
    """Fixed monthly repayment (capital and interest)."""
    n = term_years * TWELVE
    if principal <= 0 or n <= 0:
        return ZERO
    if annual_rate_pct <= 0:
        return principal / n

    r = pct(annual_rate_pct) / TWELVE
    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = growth_factor(r, n)
    return principal * (r * factor) / (factor - ONE)


def repayment_schedule(
    principal: Decimal,
    annual_rate_pct: Decimal,
    term_years: Decimal,
    months: int | None = None,
) -> list[RepaymentRow]:
    """Month-by-month split of a repayment mortgage.

    Args:
        principal: Loan amount
        annual_rate_pct: Annual rate as a percentage (5.5 for 5.5%)
        term_years: Loan term in years
        months: If provided, only schedule this many months
    """
    payment = monthly_payment(principal, annual_rate_pct, term_years)
    r = pct(annual_rate_pct) / TWELVE
    n_periods = months if months is not None else int(term_years * TWELVE)

    rows: list[RepaymentRow] = []
    balance = principal
    for month in range(1, n_periods + 1):
        if balance <= 0:
            break
        interest = balance * r
        capital = payment - interest
        if capital > balance:
            # final payment clears the balance
            capital = balance
        balance -= capital
        rows.append(RepaymentRow(
            month=month,
            payment=money(capital + interest),
            capital=money(capital),
            interest=money(interest),
            balance=money(balance),
        ))
    return rows


def interest_cover(annual_rent: Decimal, annual_interest: Decimal) -> Decimal:
    """ICR as a percentage: 145 means rent covers interest 1.45 times."""
    return as_pct(annual_rent, annual_interest)


def stressed_interest_cover(
    annual_rent: Decimal, loan_amount: Decimal, stress_rate_pct: Decimal = Decimal("5.5")
) -> Decimal:
    return interest_cover(annual_rent, pct_of(loan_amount, stress_rate_pct))


def max_loan_from_icr(
    annual_rent: Decimal, stress_rate_pct: Decimal, required_icr: Decimal
) -> Decimal:
    """Largest loan whose stressed interest the rent covers at ``required_icr``."""
    max_interest = safe_div(annual_rent * 100, required_icr)
    return safe_div(max_interest, pct(stress_rate_pct))


# ---- Bridging ----

def bridging_monthly_interest(loan_amount: Decimal, monthly_rate_pct: Decimal) -> Decimal:
    return pct_of(loan_amount, monthly_rate_pct)


def retained_interest(loan_amount: Decimal, monthly_rate_pct: Decimal, term_months: Decimal) -> Decimal:
    """Flat (non-compounding) interest deducted from the advance."""
    return bridging_monthly_interest(loan_amount, monthly_rate_pct) * term_months


def rolled_balance(loan_amount: Decimal, monthly_rate_pct: Decimal, term_months: Decimal) -> Decimal:
    """Balance after compounding monthly for every started month of the term."""
    months = math.ceil(term_months) if term_months > 0 else 0
    return loan_amount * growth_factor(pct(monthly_rate_pct), Decimal(months))


def rolled_interest(loan_amount: Decimal, monthly_rate_pct: Decimal, term_months: Decimal) -> Decimal:
    return rolled_balance(loan_amount, monthly_rate_pct, term_months) - loan_amount


def day_one_net_loan(
    gross_loan: Decimal,
    arrangement_fee_pct: Decimal,
    retained_months: Decimal,
    monthly_rate_pct: Decimal,
    legal_fees: Decimal,
    valuation_fee: Decimal,
) -> Decimal:
    """Cash actually advanced on completion after fees and retained interest."""
    return (
        gross_loan
        - pct_of(gross_loan, arrangement_fee_pct)
        - retained_interest(gross_loan, monthly_rate_pct, retained_months)
        - legal_fees
        - valuation_fee
    )


def effective_annual_rate(monthly_rate_pct: Decimal) -> Decimal:
    """Monthly rate compounded over twelve months, as a percentage."""
    return (growth_factor(pct(monthly_rate_pct), TWELVE) - ONE) * 100


def annualised_cost_rate(total_cost: Decimal, loan_amount: Decimal, term_months: Decimal) -> Decimal:
    """Total cost of the loan as a simple yearly percentage of the advance."""
    return safe_div(safe_div(total_cost, loan_amount), term_months / TWELVE) * 100


def loan_from_ltgdv(gdv: Decimal, ltgdv_pct: Decimal) -> Decimal:
    return pct_of(gdv, ltgdv_pct)
