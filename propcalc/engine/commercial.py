"""Commercial property: investment yields and estimated rental value (ERV).

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

from decimal import Decimal

from propcalc.engine.formulas import (
    ONE,
    TWELVE,
    ZERO,
    as_pct,
    gross_yield,
    money,
    net_yield,
    pct,
    pct_of,
    ratio,
    safe_div,
    total,
)
from propcalc.models.bands import CostRange
from propcalc.models.commercial import (
    CommercialUse,
    CommercialYieldInput,
    CommercialYieldResult,
    ErvInput,
    ErvResult,
    LocationGrade,
)

ASSUMED_FLOOR_AREA_SQFT = Decimal("2000")
WAULT_FULL_TERM_YEARS = Decimal("15")
WAULT_NEUTRAL = Decimal("0.67")
COMPARABLE_WEIGHT = Decimal("0.7")

# £ per sq ft per annum
ERV_BENCHMARKS: dict[CommercialUse, CostRange] = {
    CommercialUse.RETAIL_HIGH_STREET: CostRange(Decimal("40"), Decimal("150")),
    CommercialUse.RETAIL_SECONDARY: CostRange(Decimal("15"), Decimal("40")),
    CommercialUse.OFFICE_PRIME: CostRange(Decimal("35"), Decimal("80")),
    CommercialUse.OFFICE_SECONDARY: CostRange(Decimal("15"), Decimal("35")),
    CommercialUse.INDUSTRIAL_PRIME: CostRange(Decimal("8"), Decimal("15")),
    CommercialUse.INDUSTRIAL_SECONDARY: CostRange(Decimal("5"), Decimal("10")),
    CommercialUse.WAREHOUSE: CostRange(Decimal("5"), Decimal("12")),
    CommercialUse.LEISURE: CostRange(Decimal("15"), Decimal("40")),
}

LOCATION_MULTIPLIER: dict[LocationGrade, Decimal] = {
    LocationGrade.PRIME: Decimal("1.2"),
    LocationGrade.SECONDARY: Decimal("1.0"),
    LocationGrade.TERTIARY: Decimal("0.75"),
}


def yield_status(net_yield_pct: Decimal) -> str:
    if net_yield_pct >= 8:
        return "High Yield"
    if net_yield_pct >= 6:
        return "Good Yield"
    if net_yield_pct >= 4:
        return "Standard"
    return "Low Yield"


def evaluate_commercial_yield(inp: CommercialYieldInput) -> CommercialYieldResult:
    price = inp.purchase_price
    rent = inp.annual_rent
    net_rent = rent - inp.annual_running_costs

    lease_months = inp.lease_years_remaining * TWELVE
    effective_rent = rent * safe_div(lease_months - inp.void_period_months, lease_months)
    net = net_yield(rent, inp.annual_running_costs, price)

    value_at_target = safe_div(rent, pct(inp.target_yield))
    wault = min(ONE, inp.lease_years_remaining / WAULT_FULL_TERM_YEARS)

    return CommercialYieldResult(
        gross_yield=ratio(gross_yield(rent, price)),
        net_rent=money(net_rent),
        net_yield=ratio(net),
        effective_rent=money(effective_rent),
        equivalent_yield=ratio(as_pct(effective_rent, price)),
        cap_rate=ratio(net),
        years_purchase=ratio(safe_div(price, rent)),
        value_at_target_yield=money(value_at_target),
        value_difference=money(value_at_target - price),
        wault_factor=ratio(wault),
        adjusted_value=money(price * (ONE + (wault - WAULT_NEUTRAL) * Decimal("0.1"))),
        monthly_rent=money(rent / TWELVE),
        price_per_sq_ft=money(price / ASSUMED_FLOOR_AREA_SQFT),
        rent_per_sq_ft=money(rent / ASSUMED_FLOOR_AREA_SQFT),
        yield_status=yield_status(net),
    )


def blended_erv(adjusted_comp_rent: Decimal, benchmark_mid: Decimal) -> Decimal:
    """Comparables carry 70% of the weight when there are any."""
    if adjusted_comp_rent == 0:
        return benchmark_mid
    return adjusted_comp_rent * COMPARABLE_WEIGHT + benchmark_mid * (ONE - COMPARABLE_WEIGHT)


def evaluate_erv(inp: ErvInput) -> ErvResult:
    nla = pct_of(inp.total_sq_ft, inp.net_to_gross_ratio)
    benchmark = ERV_BENCHMARKS[inp.property_type]

    comps = [c for c in (inp.comp1_rent_psf, inp.comp2_rent_psf, inp.comp3_rent_psf) if c > 0]
    average_comp = safe_div(total(comps), Decimal(len(comps)))
    adjustment = inp.quality_adjustment + inp.size_adjustment + inp.terms_adjustment
    adjusted_comp = average_comp * (ONE + pct(adjustment))

    benchmark_mid = benchmark.mid * LOCATION_MULTIPLIER[inp.location]
    erv = blended_erv(adjusted_comp, benchmark_mid)

    annual_at_erv = erv * nla
    current_annual = inp.current_rent_psf * nla
    reversion = annual_at_erv - current_annual

    lease_months = inp.lease_length * TWELVE
    effective_multiplier = safe_div(lease_months - inp.rent_free_months, lease_months) if lease_months > 0 else ONE

    under_rented = ZERO < inp.current_rent_psf < erv * Decimal("0.95")
    over_rented = inp.current_rent_psf > erv * Decimal("1.05")
    if under_rented:
        status = "Under-Rented"
    elif over_rented:
        status = "Over-Rented"
    else:
        status = "At Market"

    return ErvResult(
        net_lettable_area=ratio(nla),
        benchmark=benchmark,
        average_comp_rent=money(average_comp),
        adjusted_comp_rent=money(adjusted_comp),
        estimated_erv=money(erv),
        annual_rent_at_erv=money(annual_at_erv),
        current_annual_rent=money(current_annual),
        rent_reversionary=money(reversion),
        reversionary_potential_pct=ratio(as_pct(reversion, current_annual)),
        effective_rent_after_free=money(erv * effective_multiplier),
        rent_free_value=money(annual_at_erv / TWELVE * inp.rent_free_months),
        is_under_rented=under_rented,
        is_over_rented=over_rented,
        erv_status=status,
    )
