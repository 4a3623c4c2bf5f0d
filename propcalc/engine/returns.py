"""Investment returns: ROI, ROCE, NPV, IRR and equity multiple.

IRR is solved with scipy's Brent method on the NPV function.

Pure functions. No I/O.
"""

import math
from decimal import Decimal, ROUND_HALF_UP

from scipy.optimize import brentq

from propcalc.engine.formulas import ZERO, as_pct, growth_factor, pct, safe_div

FOUR_PLACES = Decimal("0.0001")


def roi(total_return: Decimal, total_investment: Decimal) -> Decimal:
    return as_pct(total_return, total_investment)


def roce(operating_profit: Decimal, capital_employed: Decimal) -> Decimal:
    return as_pct(operating_profit, capital_employed)


def npv(cash_flows: list[Decimal], discount_rate_pct: Decimal) -> Decimal:
    """Net present value; cash_flows[0] is undiscounted."""
    rate = pct(discount_rate_pct)
    return sum((cf / growth_factor(rate, Decimal(t)) for t, cf in enumerate(cash_flows)), ZERO)


def compute_irr(cash_flows: list[Decimal]) -> Decimal:
    """IRR of periodic cash flows, as a percentage.

    cash_flows[0] should be negative (initial investment). Returns 0 when the
    NPV has no root between -50% and 1000%.
    """
    if not cash_flows or len(cash_flows) < 2:
        return Decimal("0")

    # Convert to float for scipy
    cf_float = [float(cf) for cf in cash_flows]
    if not all(math.isfinite(cf) for cf in cf_float):
        return Decimal("0")

    def _npv(rate: float) -> float:
        return sum(cf / (1 + rate) ** t for t, cf in enumerate(cf_float))

    try:
        irr = brentq(_npv, -0.5, 10.0, xtol=1e-8, maxiter=1000)
    except (ValueError, RuntimeError, OverflowError):
        return Decimal("0")
    if not math.isfinite(irr):
        return Decimal("0")
    return (Decimal(str(irr)) * 100).quantize(FOUR_PLACES, ROUND_HALF_UP)


def equity_multiple(total_distributions: Decimal, total_equity_invested: Decimal) -> Decimal:
    """Equity multiple = total cash out / total cash in."""
    return safe_div(total_distributions, total_equity_invested)
