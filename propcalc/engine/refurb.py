"""Refurbishment calculators.

EPC upgrade planning by SAP points, loft conversion cost against value
added, and a whole-house refurb cost estimate by level and region.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

import math
from decimal import Decimal

from propcalc.engine.formulas import (
    SQFT_PER_SQM,
    ZERO,
    as_pct,
    money,
    pct,
    ratio,
    safe_div,
    total,
)
from propcalc.models.bands import CostRange
from propcalc.models.refurb import (
    EpcMeasure,
    EpcRating,
    EpcUpgradeInput,
    EpcUpgradeResult,
    LoftConversionInput,
    LoftConversionResult,
    LoftConversionType,
    LoftRegion,
    RefurbCostInput,
    RefurbCostResult,
    RefurbLevel,
    RefurbRegion,
)

# ---- EPC upgrade ----

EPC_MEASURES: tuple[EpcMeasure, ...] = (
    EpcMeasure("loft_insulation", "Loft Insulation (300mm)", CostRange(Decimal("300"), Decimal("600")), 8),
    EpcMeasure("cavity_wall", "Cavity Wall Insulation", CostRange(Decimal("800"), Decimal("1500")), 10),
    EpcMeasure("external_wall", "External Wall Insulation", CostRange(Decimal("8000"), Decimal("15000")), 15),
    EpcMeasure("internal_wall", "Internal Wall Insulation", CostRange(Decimal("5000"), Decimal("10000")), 12),
    EpcMeasure("floor_insulation", "Floor Insulation", CostRange(Decimal("1000"), Decimal("2500")), 5),
    EpcMeasure("double_glazing", "Double Glazing", CostRange(Decimal("3000"), Decimal("8000")), 6),
    EpcMeasure("triple_glazing", "Triple Glazing", CostRange(Decimal("6000"), Decimal("15000")), 10),
    EpcMeasure("condensing_boiler", "Condensing Boiler", CostRange(Decimal("2000"), Decimal("4000")), 12),
    EpcMeasure("heat_pump", "Air Source Heat Pump", CostRange(Decimal("8000"), Decimal("15000")), 25),
    EpcMeasure("solar_pv", "Solar PV (4kW)", CostRange(Decimal("5000"), Decimal("8000")), 12),
    EpcMeasure("solar_thermal", "Solar Thermal Hot Water", CostRange(Decimal("3000"), Decimal("5000")), 8),
    EpcMeasure("led_lighting", "LED Lighting Throughout", CostRange(Decimal("200"), Decimal("500")), 3),
    EpcMeasure("heating_controls", "Smart Heating Controls", CostRange(Decimal("300"), Decimal("600")), 4),
    EpcMeasure("draught_proofing", "Draught Proofing", CostRange(Decimal("150"), Decimal("400")), 2),
)

# SAP score range per rating, best first
EPC_BANDS: dict[EpcRating, tuple[Decimal, Decimal]] = {
    EpcRating.A: (Decimal("92"), Decimal("100")),
    EpcRating.B: (Decimal("81"), Decimal("91")),
    EpcRating.C: (Decimal("69"), Decimal("80")),
    EpcRating.D: (Decimal("55"), Decimal("68")),
    EpcRating.E: (Decimal("39"), Decimal("54")),
    EpcRating.F: (Decimal("21"), Decimal("38")),
    EpcRating.G: (Decimal("1"), Decimal("20")),
}
MAX_SAP = Decimal("100")
SAVINGS_PER_SAP_POINT = Decimal("30")  # £ a year
CO2_PER_SAP_POINT = Decimal("200")  # kg a year


def sap_from_rating(rating: EpcRating) -> Decimal:
    low, high = EPC_BANDS[rating]
    return (low + high) / 2


def rating_from_sap(sap: Decimal) -> EpcRating:
    """Best rating whose floor ``sap`` reaches. Fractional scores between
    bands (80.5) take the lower band."""
    for rating, (low, _) in EPC_BANDS.items():
        if sap >= low:
            return rating
    return EpcRating.G


def recommend_measures(
    candidates: list[EpcMeasure], sap_needed: Decimal, high_estimate: bool
) -> tuple[str, ...]:
    """Cheapest SAP points first until the shortfall is covered."""
    ranked = sorted(
        candidates,
        key=lambda m: Decimal(m.sap_points) / m.cost.pick(high_estimate),
        reverse=True,
    )
    names = []
    remaining = sap_needed
    for measure in ranked:
        if remaining <= 0:
            break
        names.append(measure.name)
        remaining -= measure.sap_points
    return tuple(names)


def evaluate_epc_upgrade(inp: EpcUpgradeInput) -> EpcUpgradeResult:
    high = inp.use_high_estimates
    selected = [m for m in EPC_MEASURES if getattr(inp, m.key)]
    unselected = [m for m in EPC_MEASURES if not getattr(inp, m.key)]

    current_sap = sap_from_rating(inp.current_rating)
    target_sap = EPC_BANDS[inp.target_rating][0]
    improvement = sum(m.sap_points for m in selected)
    cost = total(m.cost.pick(high) for m in selected)

    new_sap = min(MAX_SAP, current_sap + improvement)
    meets_target = new_sap >= target_sap

    grant = max(inp.grant_amount, ZERO) if inp.has_grant_funding else ZERO
    net_cost = max(ZERO, cost - grant)
    savings = improvement * SAVINGS_PER_SAP_POINT
    payback = net_cost / savings if net_cost > 0 and savings > 0 else ZERO

    recommended: tuple[str, ...] = ()
    if not meets_target:
        recommended = recommend_measures(unselected, target_sap - new_sap, high)

    return EpcUpgradeResult(
        current_sap=current_sap,
        target_sap=target_sap,
        sap_improvement=improvement,
        estimated_new_sap=new_sap,
        estimated_new_rating=rating_from_sap(new_sap),
        meets_target=meets_target,
        total_cost=money(cost),
        grant=money(grant),
        net_cost=money(net_cost),
        annual_energy_savings=money(savings),
        payback_years=ratio(payback),
        co2_reduction_kg=improvement * CO2_PER_SAP_POINT,
        selected_measures=tuple(m.name for m in selected),
        recommended_measures=recommended,
    )


# ---- Loft conversion ----

# £ per sqm (low, mid, high) and description
LOFT_CONVERSION_COSTS: dict[LoftConversionType, tuple[Decimal, Decimal, Decimal, str]] = {
    LoftConversionType.VELUX: (
        Decimal("1100"), Decimal("1300"), Decimal("1600"), "Roof windows only, no structural changes"),
    LoftConversionType.DORMER_REAR: (
        Decimal("1400"), Decimal("1700"), Decimal("2100"), "Single rear dormer extension"),
    LoftConversionType.DORMER_L_SHAPED: (
        Decimal("1600"), Decimal("2000"), Decimal("2500"), "L-shaped dormer on rear and side"),
    LoftConversionType.HIP_TO_GABLE: (
        Decimal("1800"), Decimal("2200"), Decimal("2700"), "Hip roof converted to gable end"),
    LoftConversionType.MANSARD: (
        Decimal("2200"), Decimal("2700"), Decimal("3300"), "Full mansard with new roof structure"),
}

# (cost multiplier, fraction of value added per bedroom)
LOFT_REGIONS: dict[LoftRegion, tuple[Decimal, Decimal]] = {
    LoftRegion.LONDON_PRIME: (Decimal("1.40"), Decimal("0.12")),
    LoftRegion.LONDON_OUTER: (Decimal("1.25"), Decimal("0.10")),
    LoftRegion.SOUTH_EAST: (Decimal("1.10"), Decimal("0.09")),
    LoftRegion.SOUTH_WEST: (Decimal("1.00"), Decimal("0.08")),
    LoftRegion.MIDLANDS: (Decimal("0.90"), Decimal("0.08")),
    LoftRegion.NORTH_WEST: (Decimal("0.85"), Decimal("0.07")),
    LoftRegion.NORTH_EAST: (Decimal("0.80"), Decimal("0.07")),
    LoftRegion.SCOTLAND: (Decimal("0.85"), Decimal("0.07")),
    LoftRegion.WALES: (Decimal("0.80"), Decimal("0.07")),
}
EN_SUITE_COST = Decimal("8000")
EN_SUITE_VALUE_UPLIFT = Decimal("0.02")


def loft_roi_label(roi: Decimal) -> str:
    if roi >= 50:
        return "Excellent ROI"
    if roi >= 25:
        return "Good ROI"
    if roi >= 0:
        return "Marginal ROI"
    return "Negative ROI"


def evaluate_loft_conversion(inp: LoftConversionInput) -> LoftConversionResult:
    low_rate, mid_rate, high_rate, description = LOFT_CONVERSION_COSTS[inp.conversion_type]
    multiplier, value_add_per_bedroom = LOFT_REGIONS[inp.region]

    en_suite = EN_SUITE_COST * multiplier if inp.include_en_suite else ZERO
    cost_low, cost_mid, cost_high = (
        inp.loft_size * rate * multiplier + en_suite for rate in (low_rate, mid_rate, high_rate)
    )

    value_add = inp.current_value * value_add_per_bedroom * inp.bedrooms_added
    if inp.include_en_suite:
        value_add += inp.current_value * EN_SUITE_VALUE_UPLIFT

    profit = value_add - cost_mid
    roi = as_pct(profit, cost_mid)

    return LoftConversionResult(
        conversion_description=description,
        region_multiplier=multiplier,
        cost_low=money(cost_low),
        cost_mid=money(cost_mid),
        cost_high=money(cost_high),
        en_suite_cost=money(en_suite),
        value_add=money(value_add),
        roi=ratio(roi),
        profit_loss=money(profit),
        new_value=money(inp.current_value + value_add),
        cost_per_sqm=money(safe_div(cost_mid, inp.loft_size)),
        value_per_sqm=money(safe_div(value_add, inp.loft_size)),
        roi_label=loft_roi_label(roi),
    )


# ---- Refurb cost ----

BASE_COSTS_PER_SQM: dict[RefurbLevel, Decimal] = {
    RefurbLevel.LIGHT: Decimal("250"),  # cosmetic
    RefurbLevel.MEDIUM: Decimal("500"),
    RefurbLevel.HEAVY: Decimal("800"),
    RefurbLevel.STRUCTURAL: Decimal("1200"),
}

REFURB_REGION_MULTIPLIERS: dict[RefurbRegion, Decimal] = {
    RefurbRegion.LONDON: Decimal("1.40"),
    RefurbRegion.SOUTH_EAST: Decimal("1.20"),
    RefurbRegion.MIDLANDS: Decimal("1.00"),
    RefurbRegion.NORTH: Decimal("0.90"),
    RefurbRegion.SCOTLAND: Decimal("0.95"),
    RefurbRegion.WALES: Decimal("0.92"),
}

REFURB_LEVEL_LABELS = {
    RefurbLevel.LIGHT: "Light Cosmetic",
    RefurbLevel.MEDIUM: "Medium Refurb",
    RefurbLevel.HEAVY: "Heavy Refurb",
    RefurbLevel.STRUCTURAL: "Structural",
}

# (light, medium, heavy and structural)
KITCHEN_COSTS = (Decimal("5000"), Decimal("12000"), Decimal("25000"))
BATHROOM_COSTS = (Decimal("3000"), Decimal("6000"), Decimal("12000"))
REWIRE_BASE, REWIRE_PER_SQM = Decimal("4000"), Decimal("40")
REPLUMB_BASE, REPLUMB_PER_SQM = Decimal("3000"), Decimal("35")
HEATING_BASE, HEATING_PER_SQM = Decimal("4500"), Decimal("45")
WINDOW_COST = Decimal("500")
SQM_PER_WINDOW = 8
ROOF_PER_SQM = Decimal("80")
EXTENSION_PER_SQM = Decimal("1800")
MEDIUM_REWIRE_SHARE = Decimal("0.5")


def _tier(costs: tuple[Decimal, Decimal, Decimal], level: RefurbLevel) -> Decimal:
    if level is RefurbLevel.LIGHT:
        return costs[0]
    if level is RefurbLevel.MEDIUM:
        return costs[1]
    return costs[2]


def evaluate_refurb_cost(inp: RefurbCostInput) -> RefurbCostResult:
    """Base cost per sqm by level, plus the items the level does not cover.

    Light refurbs add every selected item. Medium covers kitchen and
    bathroom and half the rewire. Heavy and structural cover everything
    except an extension.
    """
    sqm = inp.property_size
    level = inp.refurb_level
    multiplier = REFURB_REGION_MULTIPLIERS[inp.region]

    base = sqm * BASE_COSTS_PER_SQM[level] * multiplier
    kitchen = _tier(KITCHEN_COSTS, level) * multiplier if inp.kitchen else ZERO
    bathroom = _tier(BATHROOM_COSTS, level) * inp.bathrooms * multiplier if inp.bathroom else ZERO
    rewire = (REWIRE_BASE + sqm * REWIRE_PER_SQM) * multiplier if inp.rewire else ZERO
    replumb = (REPLUMB_BASE + sqm * REPLUMB_PER_SQM) * multiplier if inp.replumb else ZERO
    heating = (HEATING_BASE + sqm * HEATING_PER_SQM) * multiplier if inp.heating else ZERO
    windows = ZERO
    if inp.windows and sqm > 0:
        windows = math.ceil(sqm / SQM_PER_WINDOW) * WINDOW_COST * multiplier
    roof = sqm * ROOF_PER_SQM * multiplier if inp.roof else ZERO
    extension = ZERO
    if inp.extension and inp.extension_size > 0:
        extension = inp.extension_size * EXTENSION_PER_SQM * multiplier

    if level is RefurbLevel.LIGHT:
        subtotal = base + kitchen + bathroom + rewire + replumb + heating + windows + roof + extension
    elif level is RefurbLevel.MEDIUM:
        subtotal = base + rewire * MEDIUM_REWIRE_SHARE + replumb + heating + windows + roof + extension
    else:
        subtotal = base + extension

    contingency = subtotal * pct(inp.contingency_percent)
    with_contingency = subtotal + contingency
    per_sqm = safe_div(with_contingency, sqm)

    return RefurbCostResult(
        sqm=sqm,
        sqft=ratio(sqm * SQFT_PER_SQM),
        region_multiplier=multiplier,
        base_refurb_cost=money(base),
        kitchen_cost=money(kitchen),
        bathroom_cost=money(bathroom),
        rewire_cost=money(rewire),
        replumb_cost=money(replumb),
        heating_cost=money(heating),
        windows_cost=money(windows),
        roof_cost=money(roof),
        extension_cost=money(extension),
        total_before_contingency=money(subtotal),
        contingency_amount=money(contingency),
        total_with_contingency=money(with_contingency),
        cost_per_sqm=money(per_sqm),
        cost_per_sqft=money(per_sqm / SQFT_PER_SQM),
        level_label=REFURB_LEVEL_LABELS[level],
    )
