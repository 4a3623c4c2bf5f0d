"""Shared formula primitives: guarded division, rounding, yields, development
appraisal, HMO running costs and simple risk scores.

Every division goes through ``safe_div``: a non-positive denominator yields
zero, never an exception or a negative-ratio artifact.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal, Overflow, ROUND_HALF_UP, localcontext
from enum import Enum
from typing import Iterable

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")
TWELVE = Decimal("12")
TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
SQFT_PER_SQM = Decimal("10.764")
MAX_GROWTH = Decimal("1e40")


def safe_div(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator <= 0:
        return ZERO
    return numerator / denominator


def growth_factor(rate: Decimal, periods: Decimal) -> Decimal:
    """``(1 + rate) ** periods`` for a non-negative fractional rate, capped at
    ``MAX_GROWTH``.

    Every compounding and discounting formula goes through here, so a
    factor that would overflow the decimal context reads as the cap.
    """
    try:
        factor = (ONE + rate) ** periods
    except Overflow:
        return MAX_GROWTH
    return min(factor, MAX_GROWTH)


def pct(value: Decimal) -> Decimal:
    """Percentage figure to fraction: 75 -> 0.75."""
    return value / HUNDRED


def pct_of(base: Decimal, percent: Decimal) -> Decimal:
    return base * percent / HUNDRED


def as_pct(part: Decimal, whole: Decimal) -> Decimal:
    """``part`` as a percentage of ``whole``, zero when ``whole`` is not positive."""
    return safe_div(part, whole) * HUNDRED


def _quantize(value: Decimal, places: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 8)
        return value.quantize(places, ROUND_HALF_UP)


def money(value: Decimal) -> Decimal:
    return _quantize(Decimal(value), TWO_PLACES)


def ratio(value: Decimal) -> Decimal:
    return _quantize(Decimal(value), FOUR_PLACES)


def whole(value: Decimal) -> Decimal:
    """Round half-up to an integral Decimal (JS ``Math.round`` for positives)."""
    return _quantize(Decimal(value), ONE)


def total(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


# ---- Yields ----

def gross_yield(annual_rent: Decimal, purchase_price: Decimal) -> Decimal:
    return as_pct(annual_rent, purchase_price)


def net_yield(annual_rent: Decimal, annual_costs: Decimal, total_investment: Decimal) -> Decimal:
    return as_pct(annual_rent - annual_costs, total_investment)


def true_net_yield(
    annual_rent: Decimal,
    void_rate: Decimal,
    management_fee: Decimal,
    maintenance_reserve: Decimal,
    insurance: Decimal,
    other_costs: Decimal,
    total_investment: Decimal,
) -> Decimal:
    """Net yield after voids, management and a maintenance reserve.

    ``void_rate``, ``management_fee`` and ``maintenance_reserve`` are fractions
    (0.05 for 5%); management and maintenance apply to rent after voids.
    """
    effective_rent = annual_rent * (ONE - void_rate)
    net_income = (
        effective_rent
        - effective_rent * management_fee
        - effective_rent * maintenance_reserve
        - insurance
        - other_costs
    )
    return as_pct(net_income, total_investment)


def cap_rate(net_operating_income: Decimal, market_value: Decimal) -> Decimal:
    return as_pct(net_operating_income, market_value)


def years_purchase(yield_percent: Decimal) -> Decimal:
    return safe_div(HUNDRED, yield_percent)


# ---- Development appraisal ----

def gdv_from_units(units: Iterable[tuple[Decimal, Decimal]]) -> Decimal:
    """GDV from (sqft, price per sqft) pairs."""
    return total(sqft * psf for sqft, psf in units)


def development_total_costs(
    land_cost: Decimal,
    build_cost: Decimal,
    professional_fees: Decimal,
    contingency: Decimal,
    finance_cost: Decimal,
) -> Decimal:
    """Land + build + fees and contingency (fractions of build) + finance."""
    return (
        land_cost
        + build_cost
        + build_cost * professional_fees
        + build_cost * contingency
        + finance_cost
    )


def profit_on_cost(gdv: Decimal, total_costs: Decimal) -> Decimal:
    return as_pct(gdv - total_costs, total_costs)


def profit_on_gdv(gdv: Decimal, total_costs: Decimal) -> Decimal:
    return as_pct(gdv - total_costs, gdv)


def residual_land_value(
    gdv: Decimal,
    build_cost: Decimal,
    professional_fees: Decimal,
    contingency: Decimal,
    finance_cost: Decimal,
    sales_costs: Decimal,
    target_profit: Decimal,
) -> Decimal:
    """Land value left after costs and a profit taken as a fraction of GDV."""
    return (
        gdv
        - build_cost
        - build_cost * professional_fees
        - build_cost * contingency
        - finance_cost
        - gdv * sales_costs
        - gdv * target_profit
    )


def build_cost_per_sqft(total_build_cost: Decimal, total_sqft: Decimal) -> Decimal:
    return safe_div(total_build_cost, total_sqft)


def development_finance_interest(
    land_loan: Decimal,
    build_loan: Decimal,
    monthly_rate_pct: Decimal,
    build_period_months: Decimal,
) -> Decimal:
    """Rolled interest: land drawn day one, build at 50% average exposure."""
    growth = growth_factor(pct(monthly_rate_pct), build_period_months) - ONE
    return land_loan * growth + build_loan * Decimal("0.5") * growth


# ---- HMO running costs ----

class CouncilTier(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


LICENCE_BASE_FEE: dict[CouncilTier, Decimal] = {
    CouncilTier.LOW: Decimal("500"),
    CouncilTier.MEDIUM: Decimal("900"),
    CouncilTier.HIGH: Decimal("1500"),
}

LICENCE_PER_BED_FEE: dict[CouncilTier, Decimal] = {
    CouncilTier.LOW: Decimal("30"),
    CouncilTier.MEDIUM: Decimal("50"),
    CouncilTier.HIGH: Decimal("80"),
}


def hmo_gross_rent(room_rents: Iterable[Decimal]) -> Decimal:
    """Annual gross rent from monthly room rents."""
    return total(room_rents) * TWELVE


def hmo_operating_costs(
    council_tax: Decimal,
    utilities: Decimal,
    broadband: Decimal,
    cleaning_weekly: Decimal,
    insurance: Decimal,
    management: Decimal,
    maintenance: Decimal,
    void_allowance: Decimal,
    gross_rent: Decimal,
) -> Decimal:
    """Annual HMO costs; management, maintenance and voids are fractions of rent."""
    return (
        council_tax
        + utilities
        + broadband
        + cleaning_weekly * 52
        + insurance
        + gross_rent * management
        + gross_rent * maintenance
        + gross_rent * void_allowance
    )


def room_profitability(room_rent: Decimal, allocated_costs: Decimal) -> Decimal:
    return room_rent * TWELVE - allocated_costs


def hmo_licensing_fee(beds: int, tier: CouncilTier = CouncilTier.MEDIUM) -> Decimal:
    """Estimated fee per licence period."""
    return LICENCE_BASE_FEE[tier] + LICENCE_PER_BED_FEE[tier] * beds


def fire_safety_upgrade(
    storeys: int,
    beds: int,
    has_fire_doors: bool,
    has_alarm_system: bool,
    has_emergency_lighting: bool,
) -> Decimal:
    cost = ZERO
    if not has_fire_doors:
        cost += beds * Decimal("350") + Decimal("500")
    if not has_alarm_system:
        cost += storeys * Decimal("400") + Decimal("500")
    if not has_emergency_lighting:
        cost += storeys * Decimal("200")
    if storeys >= 3:
        # protected staircase
        cost += Decimal("1500")
    return cost


# ---- Risk ----

VOID_RISK_BY_TYPE = {"house": 20, "flat": 30, "hmo": 40, "sa": 50}
VOID_RISK_BY_LOCATION = {"prime": 10, "secondary": 30, "tertiary": 50}
VOID_RISK_BY_CONDITION = {"excellent": 10, "good": 20, "fair": 40, "poor": 60}


def stress_test(
    annual_rent: Decimal,
    loan_amount: Decimal,
    current_rate_pct: Decimal,
    stress_rate_pct: Decimal,
    expenses: Decimal,
) -> tuple[Decimal, Decimal, bool]:
    """Return (current cashflow, stressed cashflow, survives)."""
    current = annual_rent - pct_of(loan_amount, current_rate_pct) - expenses
    stressed = annual_rent - pct_of(loan_amount, stress_rate_pct) - expenses
    return current, stressed, stressed > 0


def void_risk_score(property_type: str, location: str, condition: str) -> Decimal:
    """0-100 score; unknown keys score as the riskiest row."""
    score = (
        VOID_RISK_BY_TYPE.get(property_type, max(VOID_RISK_BY_TYPE.values()))
        + VOID_RISK_BY_LOCATION.get(location, max(VOID_RISK_BY_LOCATION.values()))
        + VOID_RISK_BY_CONDITION.get(condition, max(VOID_RISK_BY_CONDITION.values()))
    )
    return Decimal(min(100, score)) / 3


def refinance_risk(
    current_ltv: Decimal,
    projected_value: Decimal,
    loan_amount: Decimal,
    months_to_refinance: Decimal,
) -> int:
    projected_ltv = as_pct(loan_amount, projected_value)
    score = 0
    if projected_ltv > 80:
        score += 40
    elif projected_ltv > 75:
        score += 20
    if months_to_refinance < 6:
        score += 30
    elif months_to_refinance < 12:
        score += 15
    if current_ltv > 85:
        score += 30
    return min(100, score)


# ---- Growth ----

def compound_growth(principal: Decimal, rate_pct: Decimal, years: Decimal) -> Decimal:
    return principal * growth_factor(pct(rate_pct), years)


def present_value(future_value: Decimal, rate_pct: Decimal, years: Decimal) -> Decimal:
    return safe_div(future_value, growth_factor(pct(rate_pct), years))


def round_to(value: Decimal, nearest: Decimal) -> Decimal:
    if nearest <= 0:
        return value
    return whole(value / nearest) * nearest
