"""Leasehold valuation: relativity curves, marriage value and ground rent capitalisation.

Relativity is the value of a lease as a percentage of the freehold (or a
very long lease) value, as a function of unexpired years.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal

from propcalc.engine.formulas import HUNDRED, ONE, ZERO, growth_factor, pct, safe_div, whole

MARRIAGE_VALUE_THRESHOLD = Decimal("80")
FREEHOLDER_SHARE = Decimal("0.5")

# (years, relativity %) control points, longest lease first.
RELATIVITY_TABLE: tuple[tuple[int, Decimal], ...] = (
    (100, Decimal("99.5")),
    (95, Decimal("98.5")),
    (90, Decimal("97.0")),
    (85, Decimal("95.0")),
    (80, Decimal("92.5")),
    (79, Decimal("91.5")),
    (78, Decimal("90.5")),
    (77, Decimal("89.5")),
    (76, Decimal("88.0")),
    (75, Decimal("86.5")),
    (70, Decimal("82.0")),
    (65, Decimal("77.0")),
    (60, Decimal("72.0")),
    (55, Decimal("66.0")),
    (50, Decimal("60.0")),
    (45, Decimal("53.0")),
    (40, Decimal("46.0")),
    (35, Decimal("38.0")),
    (30, Decimal("30.0")),
    (25, Decimal("22.0")),
    (20, Decimal("15.0")),
)

# (minimum years, relativity %) steps used for quick lease extension estimates.
RELATIVITY_STEPS: tuple[tuple[int, Decimal], ...] = (
    (100, Decimal("99")),
    (95, Decimal("97")),
    (90, Decimal("95")),
    (85, Decimal("92")),
    (80, Decimal("88")),
    (75, Decimal("82")),
    (70, Decimal("75")),
    (65, Decimal("68")),
    (60, Decimal("60")),
    (55, Decimal("52")),
    (50, Decimal("45")),
    (45, Decimal("38")),
    (40, Decimal("32")),
)
RELATIVITY_STEP_FLOOR = Decimal("25")


def interpolated_relativity(years: Decimal) -> Decimal:
    """Linear interpolation over RELATIVITY_TABLE, clamped at 20 and 100 years."""
    longest_years, longest_pct = RELATIVITY_TABLE[0]
    shortest_years, shortest_pct = RELATIVITY_TABLE[-1]
    if years >= longest_years:
        return longest_pct
    if years <= shortest_years:
        return shortest_pct

    for (upper_years, upper_pct), (lower_years, lower_pct) in zip(RELATIVITY_TABLE, RELATIVITY_TABLE[1:]):
        if lower_years <= years <= upper_years:
            fraction = (years - lower_years) / (upper_years - lower_years)
            return lower_pct + fraction * (upper_pct - lower_pct)
    return shortest_pct


def stepped_relativity(years: Decimal) -> Decimal:
    for minimum, relativity in RELATIVITY_STEPS:
        if years >= minimum:
            return relativity
    return RELATIVITY_STEP_FLOOR


def curve_relativity(years: Decimal) -> Decimal:
    """Piecewise-linear market curve used for rough premium estimates."""
    if years >= 99:
        return Decimal("99")
    if years >= 90:
        return Decimal("95")
    if years >= 80:
        return Decimal("90") + (years - 80) * Decimal("0.5")
    if years >= 70:
        return Decimal("82") + (years - 70) * Decimal("0.8")
    if years >= 60:
        return Decimal("72") + (years - 60)
    if years >= 50:
        return Decimal("60") + (years - 50) * Decimal("1.2")
    if years >= 40:
        return Decimal("45") + (years - 40) * Decimal("1.5")
    return max(ZERO, years * Decimal("1.125"))


def years_purchase(rate: Decimal, years: Decimal) -> Decimal:
    """Present value of 1 a year for ``years`` at ``rate`` (a fraction)."""
    if rate <= 0:
        return years
    return (ONE - ONE / growth_factor(rate, years)) / rate


def marriage_value(current_value: Decimal, extended_value: Decimal, remaining_years: Decimal) -> Decimal:
    """Freeholder's half of the uplift; nil at 80 years or more."""
    if remaining_years >= MARRIAGE_VALUE_THRESHOLD:
        return ZERO
    return (extended_value - current_value) * FREEHOLDER_SHARE


def lease_extension_premium(flat_value: Decimal, remaining_years: Decimal, ground_rent: Decimal) -> Decimal:
    """Rounded premium from the market curve, a 6% ground rent YP and marriage value."""
    relativity = pct(curve_relativity(remaining_years))
    current_value = flat_value * relativity
    capitalised_ground_rent = ground_rent * min(HUNDRED / 6, remaining_years)
    marriage = marriage_value(current_value, flat_value, remaining_years)
    diminution = flat_value * (ONE - relativity) * Decimal("0.3")
    return whole(capitalised_ground_rent + marriage + diminution)


def ground_rent_capitalisation(ground_rent: Decimal, yield_pct: Decimal, years_remaining: Decimal) -> Decimal:
    return ground_rent * years_purchase(pct(yield_pct), years_remaining)


def reversion_value(freehold_value: Decimal, deferment_rate_pct: Decimal, years: Decimal) -> Decimal:
    """Present value of the freehold falling back in after ``years``."""
    return safe_div(freehold_value, growth_factor(pct(deferment_rate_pct), years))
