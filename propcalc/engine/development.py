"""Development appraisal.

The journey calculators (permitted development, GDV, build cost and
development finance) produce a templated summary alongside their metrics;
that text becomes the ``reasoning`` stored on the deal draft.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

import logging
from decimal import Decimal

from propcalc.engine.formulas import (
    HUNDRED,
    ONE,
    SQFT_PER_SQM,
    TWELVE,
    ZERO,
    as_pct,
    build_cost_per_sqft,
    development_finance_interest,
    development_total_costs,
    gdv_from_units,
    growth_factor,
    money,
    pct,
    pct_of,
    profit_on_cost,
    profit_on_gdv,
    ratio,
    safe_div,
    total,
    whole,
)
from propcalc.engine.returns import compute_irr, equity_multiple, npv
from propcalc.formatting import currency, format_months, plain_number
from propcalc.models.development import (
    BuildCostInput,
    BuildCostResult,
    BuildType,
    CilInput,
    CilInstalment,
    CilResult,
    DevelopmentAppraisalInput,
    DevelopmentAppraisalResult,
    DevelopmentFinanceInput,
    DevelopmentFinanceResult,
    GdvInput,
    GdvResult,
    LenderAppetite,
    PermittedDevelopmentInput,
    PermittedDevelopmentResult,
    ProfitOnCostInput,
    ProfitOnCostResult,
    Region,
    ResidualLandValueInput,
    ResidualLandValueResult,
    SpecLevel,
)

logger = logging.getLogger(__name__)

# ---- Permitted development ----

PD_COST_PER_SQM = Decimal("1780")
ARTICLE_FOUR_COST_PER_SQM = Decimal("1950")
MAX_LEVERAGE = Decimal("72")


def pd_leverage(article_four: bool, heritage: bool, units: int) -> Decimal:
    base = Decimal("60") if article_four else Decimal("68")
    if units > 12:
        base += 4
    if heritage:
        base -= 2
    return min(MAX_LEVERAGE, base)


def pd_route(article_four: bool) -> str:
    return "Full planning – PD impacted by Article 4" if article_four else "Class MA permitted"


def evaluate_permitted_development(inp: PermittedDevelopmentInput) -> PermittedDevelopmentResult:
    total_sqft = inp.gia * SQFT_PER_SQM
    gdv = total_sqft * inp.market_psf
    cost_per_sqm = ARTICLE_FOUR_COST_PER_SQM if inp.article_four else PD_COST_PER_SQM
    build_cost = inp.gia * cost_per_sqm
    leverage = pd_leverage(inp.article_four, inp.heritage, inp.target_units)

    article_four = (
        "is in place, so we will run the scheme via a full planning submission"
        if inp.article_four else "does not apply"
    )
    heritage = (
        "needs facade retention, so external works stay minimal"
        if inp.heritage else "does not restrict the envelope"
    )
    summary = (
        f"Convert {inp.address or 'the property'} in {inp.local_authority or 'the target borough'} "
        f"into {inp.target_units or 'multiple'} {inp.proposed_use or 'C3'} units. "
        f"Article 4 {article_four}, and heritage {heritage}. "
        f"Expect GDV of {currency(gdv)} with build costs near {currency(build_cost)}. "
        f"Structure finance at roughly {leverage}% loan-to-cost with mezzanine ready if equity is tight."
    )
    return PermittedDevelopmentResult(
        total_sqft=ratio(total_sqft),
        gdv=money(gdv),
        build_cost_per_sqm=cost_per_sqm,
        build_cost=money(build_cost),
        leverage=leverage,
        pd_route=pd_route(inp.article_four),
        summary=summary,
    )


# ---- GDV ----

def evaluate_gdv(inp: GdvInput) -> GdvResult:
    uplift = ONE + pct(inp.new_build_premium)
    gdv = total(unit.avg_sqft * unit.price_per_sqft * uplift * unit.quantity for unit in inp.units)
    units = sum(unit.quantity for unit in inp.units)
    sqft = total(unit.avg_sqft * unit.quantity for unit in inp.units)

    if units > 0:
        bedrooms = whole(Decimal(sum(unit.bedrooms * unit.quantity for unit in inp.units)) / units)
        avg_sqft = sqft / units
    else:
        bedrooms, avg_sqft = Decimal("2"), Decimal("750")

    return GdvResult(
        total_gdv=money(gdv),
        total_units=units,
        total_sqft=ratio(sqft),
        gdv_per_unit=money(safe_div(gdv, Decimal(units))),
        gdv_per_sqft=money(safe_div(gdv, sqft)),
        weighted_bedrooms=int(bedrooms),
        avg_sqft=ratio(avg_sqft),
    )


# ---- Build cost ----

# £ per sqm, BCIS-style mid-points
BASE_BUILD_COSTS: dict[BuildType, dict[SpecLevel, Decimal]] = {
    BuildType.NEW_BUILD: {SpecLevel.BASIC: Decimal("1650"), SpecLevel.STANDARD: Decimal("2100"), SpecLevel.PREMIUM: Decimal("2850")},
    BuildType.CONVERSION: {SpecLevel.BASIC: Decimal("1450"), SpecLevel.STANDARD: Decimal("1780"), SpecLevel.PREMIUM: Decimal("2350")},
    BuildType.REFURBISHMENT: {SpecLevel.BASIC: Decimal("1200"), SpecLevel.STANDARD: Decimal("1550"), SpecLevel.PREMIUM: Decimal("2100")},
    BuildType.EXTENSION: {SpecLevel.BASIC: Decimal("1800"), SpecLevel.STANDARD: Decimal("2250"), SpecLevel.PREMIUM: Decimal("3000")},
}

REGION_MULTIPLIERS: dict[Region, Decimal] = {
    Region.LONDON: Decimal("1.25"),
    Region.SOUTH_EAST: Decimal("1.10"),
    Region.SOUTH_WEST: Decimal("1.05"),
    Region.MIDLANDS: Decimal("1.00"),
    Region.NORTH: Decimal("0.95"),
    Region.SCOTLAND: Decimal("0.98"),
}

BUILD_TYPE_LABELS = {
    BuildType.NEW_BUILD: "New Build",
    BuildType.CONVERSION: "Conversion",
    BuildType.REFURBISHMENT: "Refurbishment",
    BuildType.EXTENSION: "Extension",
}
SPEC_LEVEL_LABELS = {
    SpecLevel.BASIC: "Basic (social housing)",
    SpecLevel.STANDARD: "Standard (mid-market)",
    SpecLevel.PREMIUM: "Premium (high-end)",
}
REGION_LABELS = {
    Region.LONDON: "Greater London",
    Region.SOUTH_EAST: "South East",
    Region.SOUTH_WEST: "South West",
    Region.MIDLANDS: "Midlands",
    Region.NORTH: "North",
    Region.SCOTLAND: "Scotland",
}


def evaluate_build_cost(inp: BuildCostInput) -> BuildCostResult:
    base_rate = BASE_BUILD_COSTS[inp.build_type][inp.spec_level]
    multiplier = REGION_MULTIPLIERS[inp.region]
    rate = base_rate * multiplier

    base = inp.total_gia * rate
    contingency = pct_of(base, inp.contingency)
    fees = pct_of(base + contingency, inp.professional_fees)
    total_cost = base + contingency + fees
    per_sqm = safe_div(total_cost, inp.total_gia)

    region = REGION_LABELS[inp.region]
    summary = (
        f"For a {plain_number(inp.total_gia)} sqm {BUILD_TYPE_LABELS[inp.build_type].lower()} "
        f"to {SPEC_LEVEL_LABELS[inp.spec_level].lower()} specification in {region}, "
        f"the estimated build cost is {currency(total_cost)}. "
        f"Base construction costs are {currency(base)} ({currency(per_sqm)}/sqm). "
        f"This includes {plain_number(inp.contingency)}% contingency and "
        f"{plain_number(inp.professional_fees)}% professional fees covering architects, engineers, "
        f"and project management. BCIS Q4 2024 data shows {region} costs trending +3.2% YoY. "
        f"Recommend budgeting for potential inflation adjustments over a 12-18 month build programme."
    )
    return BuildCostResult(
        base_cost_per_sqm=base_rate,
        region_multiplier=multiplier,
        adjusted_cost_per_sqm=money(rate),
        base_build_cost=money(base),
        contingency_amount=money(contingency),
        professional_fees_amount=money(fees),
        total_cost=money(total_cost),
        cost_per_sqm=money(per_sqm),
        cost_per_sqft=money(per_sqm / SQFT_PER_SQM),
        summary=summary,
    )


# ---- Development finance ----

MAX_TOTAL_LTC = Decimal("0.85")
MAX_MEZZANINE_LTC = Decimal("0.15")


def senior_terms(senior_ltgdv: Decimal) -> tuple[Decimal, Decimal]:
    """(rate %, arrangement fee %) priced off senior LTGDV."""
    if senior_ltgdv > 65:
        return Decimal("12.5"), Decimal("2")
    if senior_ltgdv > 60:
        return Decimal("11.5"), Decimal("1.5")
    return Decimal("10.5"), Decimal("1.5")


def lender_appetite(profit_on_cost: Decimal, senior_ltgdv: Decimal) -> LenderAppetite:
    if profit_on_cost > 25 and senior_ltgdv < 65:
        return LenderAppetite.STRONG
    if profit_on_cost > 18 and senior_ltgdv < 70:
        return LenderAppetite.MODERATE
    return LenderAppetite.WEAK


APPETITE_SENTENCES = {
    LenderAppetite.STRONG: (
        "Lender appetite is STRONG. Expect competitive terms from multiple lenders "
        "and package the scheme for immediate review."
    ),
    LenderAppetite.MODERATE: (
        "Lender appetite is MODERATE. A solid deal, but shop around the lender "
        "panel for the best positioning."
    ),
    LenderAppetite.WEAK: (
        "Lender appetite is WEAK. Margins are tight. Consider value engineering "
        "or increased equity to improve terms."
    ),
}


def evaluate_development_finance(inp: DevelopmentFinanceInput) -> DevelopmentFinanceResult:
    cost = inp.purchase_price + inp.build_cost
    target_ltc = pct(inp.target_ltc)
    senior = cost * target_ltc
    senior_ltgdv = as_pct(senior, inp.gdv)

    mezzanine = mezzanine_rate = ZERO
    if inp.require_mezzanine:
        additional = max(ZERO, min(MAX_MEZZANINE_LTC, MAX_TOTAL_LTC - target_ltc))
        mezzanine = cost * additional
        mezzanine_rate = Decimal("18") if additional > Decimal("0.10") else Decimal("15")

    debt = senior + mezzanine
    total_ltc = as_pct(debt, cost)
    profit = inp.gdv - cost
    poc = as_pct(profit, cost)
    senior_rate, arrangement = senior_terms(senior_ltgdv)
    appetite = lender_appetite(poc, senior_ltgdv)

    summary = (
        f"Recommended structure: Senior debt of {currency(senior)} at {senior_rate}% with "
        f"{arrangement}% arrangement fee ({plain_number(inp.target_ltc)}% LTC, {senior_ltgdv:.1f}% LTGDV). "
    )
    if mezzanine > 0:
        summary += (
            f"Mezzanine layer of {currency(mezzanine)} at {mezzanine_rate}% to boost total "
            f"leverage to {total_ltc:.1f}% LTC. "
        )
    summary += f"Equity requirement: {currency(cost - debt)}. "
    summary += f"Project shows {poc:.1f}% profit on cost over {format_months(inp.term_months)}. "
    summary += APPETITE_SENTENCES[appetite]

    return DevelopmentFinanceResult(
        total_cost=money(cost),
        senior_debt_amount=money(senior),
        senior_rate=senior_rate,
        arrangement_fee=arrangement,
        senior_ltgdv=ratio(senior_ltgdv),
        mezzanine_amount=money(mezzanine),
        mezzanine_rate=mezzanine_rate,
        total_debt=money(debt),
        equity_required=money(cost - debt),
        total_ltc=ratio(total_ltc),
        total_ltgdv=ratio(as_pct(debt, inp.gdv)),
        profit=money(profit),
        profit_on_cost=ratio(poc),
        profit_on_gdv=ratio(as_pct(profit, inp.gdv)),
        lender_appetite=appetite,
        term_months=inp.term_months,
        summary=summary,
    )


# ---- Community infrastructure levy ----

# £ per sqm at adoption, by charging authority and zone
CIL_RATES: dict[str, dict[str, Decimal]] = {
    "london-mayoral": {"zone-1": Decimal("80"), "zone-2": Decimal("60"), "zone-3": Decimal("25")},
    "westminster": {
        "residential-prime": Decimal("550"),
        "residential-core": Decimal("400"),
        "residential-other": Decimal("200"),
    },
    "tower-hamlets": {"zone-1": Decimal("200"), "zone-2": Decimal("120"), "zone-3": Decimal("65")},
    "manchester": {"city-centre": Decimal("50"), "inner": Decimal("30"), "outer": Decimal("10")},
    "birmingham": {"city-centre": Decimal("69"), "outer": Decimal("35")},
    "other": {"high": Decimal("150"), "medium": Decimal("100"), "low": Decimal("50")},
}
DEFAULT_CIL_RATE = Decimal("100")

# BCIS all-in tender price index
BCIS_INDEX: dict[str, Decimal] = {
    "2012": Decimal("286"),
    "2020": Decimal("334"),
    "2021": Decimal("353"),
    "2022": Decimal("388"),
    "2023": Decimal("399"),
    "2024": Decimal("412"),
}
ADOPTION_YEAR = "2020"
LATEST_INDEX_YEAR = "2024"


def cil_base_rate(authority: str, zone: str) -> Decimal:
    rates = CIL_RATES.get(authority)
    if rates is None:
        logger.warning("Unknown CIL charging authority %r, using 'other' rates", authority)
        rates = CIL_RATES["other"]
    rate = rates.get(zone)
    if rate is None:
        logger.warning("Unknown CIL zone %r for %s, using %s/sqm", zone, authority, DEFAULT_CIL_RATE)
        return DEFAULT_CIL_RATE
    return rate


def instalment_schedule(liability: Decimal) -> tuple[CilInstalment, ...]:
    """Payment instalments by size of liability; empty when nothing is due."""
    if liability <= 0:
        return ()
    if liability < 50_000:
        stages = (("On commencement", Decimal("100")),)
    elif liability < 500_000:
        stages = (("On commencement", Decimal("50")), ("60 days", Decimal("50")))
    else:
        stages = (
            ("On commencement", Decimal("25")),
            ("60 days", Decimal("25")),
            ("120 days", Decimal("25")),
            ("180 days", Decimal("25")),
        )
    return tuple(
        CilInstalment(stage=stage, percentage=share, amount=money(pct_of(liability, share)))
        for stage, share in stages
    )


def evaluate_cil(inp: CilInput) -> CilResult:
    base_rate = cil_base_rate(inp.local_authority, inp.charging_zone)

    net_area = inp.gross_floor_area
    if inp.existing_use_lawful and inp.existing_floor_area > 0:
        net_area = max(ZERO, inp.gross_floor_area - inp.existing_floor_area)
    chargeable = net_area - pct_of(net_area, inp.social_housing_relief)

    current_index = BCIS_INDEX.get(inp.indexation_year, BCIS_INDEX[LATEST_INDEX_YEAR])
    multiplier = current_index / BCIS_INDEX[ADOPTION_YEAR]
    indexed_rate = base_rate * multiplier

    liability = ZERO if inp.self_build_exemption else chargeable * indexed_rate
    return CilResult(
        gross_floor_area=inp.gross_floor_area,
        existing_floor_area=inp.existing_floor_area,
        net_floor_area=ratio(net_area),
        chargeable_area=ratio(chargeable),
        base_rate=base_rate,
        indexation_multiplier=ratio(multiplier),
        indexed_rate=money(indexed_rate),
        cil_liability=money(liability),
        cil_per_sqm=money(safe_div(liability, inp.gross_floor_area)),
        social_housing_relief=inp.social_housing_relief,
        self_build_exemption=inp.self_build_exemption,
        payment_schedule=instalment_schedule(liability),
    )


# ---- Profit on cost ----

DEVELOPER_EQUITY_SHARE = Decimal("0.30")


def poc_status(profit_on_cost: Decimal) -> str:
    if profit_on_cost >= 25:
        return "Excellent"
    if profit_on_cost >= 20:
        return "Good"
    if profit_on_cost >= 15:
        return "Acceptable"
    return "Marginal"


def evaluate_profit_on_cost(inp: ProfitOnCostInput) -> ProfitOnCostResult:
    soft_costs = (
        inp.professional_fees + inp.finance_costs + inp.sales_costs + inp.contingency + inp.other_costs
    )
    costs = inp.land_cost + inp.build_cost + soft_costs
    profit = inp.gdv - costs
    poc = as_pct(profit, costs)
    equity = costs * DEVELOPER_EQUITY_SHARE

    return ProfitOnCostResult(
        total_costs=money(costs),
        gross_profit=money(profit),
        profit_on_cost=ratio(poc),
        profit_on_gdv=ratio(as_pct(profit, inp.gdv)),
        equity_required=money(equity),
        return_on_equity=ratio(as_pct(profit, equity)),
        land_percent=ratio(as_pct(inp.land_cost, costs)),
        build_percent=ratio(as_pct(inp.build_cost, costs)),
        other_percent=ratio(as_pct(soft_costs, costs)),
        poc_status=poc_status(poc),
    )


# ---- Residual land value ----

BUILD_EXPOSURE = Decimal("0.5")
BUILD_PERIOD_YEARS = Decimal("1.5")


def max_total_costs(gdv: Decimal, target_profit_pct: Decimal) -> Decimal:
    """Largest total cost that still leaves ``target_profit_pct`` profit on cost."""
    return gdv / (ONE + pct(target_profit_pct))


def evaluate_residual_land_value(inp: ResidualLandValueInput) -> ResidualLandValueResult:
    fees = pct_of(inp.build_cost, inp.professional_fees)
    contingency = pct_of(inp.build_cost, inp.contingency)
    finance = inp.build_cost * BUILD_EXPOSURE * pct(inp.finance_costs) * BUILD_PERIOD_YEARS
    sales = pct_of(inp.gdv, inp.sales_costs)
    non_land = inp.build_cost + fees + finance + sales + contingency + inp.other_costs

    ceiling = max_total_costs(inp.gdv, inp.target_profit_percent)
    rlv = ceiling - non_land

    return ResidualLandValueResult(
        professional_fees=money(fees),
        finance_costs=money(finance),
        sales_costs=money(sales),
        contingency=money(contingency),
        total_non_land_costs=money(non_land),
        max_total_costs=money(ceiling),
        residual_land_value=money(rlv),
        target_profit=money(inp.gdv - ceiling),
        target_profit_percent=inp.target_profit_percent,
        land_to_gdv_percent=ratio(as_pct(rlv, inp.gdv)),
        land_to_costs_percent=ratio(as_pct(rlv, ceiling)),
        is_viable=rlv > 0,
        rlv_at_15=money(max_total_costs(inp.gdv, Decimal("15")) - non_land),
        rlv_at_25=money(max_total_costs(inp.gdv, Decimal("25")) - non_land),
    )


# ---- New-build appraisal ----

# Monthly cashflows are only laid out for programmes up to ten years.
MAX_TIMELINE_MONTHS = 120


def appraisal_cash_flows(
    land_cost: Decimal, build_cost_total: Decimal, net_sales: Decimal, build_period: int, sale_period: int
) -> list[Decimal]:
    """Unlevered monthly flows: land on day one, build spread evenly over the
    build period, net sale proceeds in the final month."""
    months = build_period + sale_period
    flows = [ZERO] * (months + 1)
    flows[0] -= land_cost
    if build_period > 0:
        monthly_build = build_cost_total / build_period
        for month in range(1, build_period + 1):
            flows[month] -= monthly_build
    else:
        flows[0] -= build_cost_total
    flows[months] += net_sales
    return flows


def evaluate_development_appraisal(inp: DevelopmentAppraisalInput) -> DevelopmentAppraisalResult:
    """Full new-build appraisal.

    Finance rolls up at the monthly rate: land is drawn on day one for the
    whole programme, build costs at 50% average exposure over the build
    period. IRR and NPV come from the unlevered monthly cashflow and are
    reported as 0 for programmes longer than ``MAX_TIMELINE_MONTHS``.
    """
    total_sqft = inp.avg_unit_sqft * inp.num_units
    gdv = gdv_from_units([(total_sqft, inp.sale_value_per_sqft)])
    build = total_sqft * inp.build_cost_per_sqft
    fees = pct_of(build, inp.professional_fees)
    contingency = pct_of(build, inp.contingency)
    sales = pct_of(gdv, inp.sales_costs)
    build_total = build + fees + contingency

    monthly_rate_pct = max(inp.finance_rate, ZERO) / TWELVE
    build_period = max(inp.build_period, 0)
    sale_period = max(inp.sale_period, 0)
    months = build_period + sale_period
    land_finance = inp.land_cost * (growth_factor(pct(monthly_rate_pct), Decimal(months)) - ONE)
    build_finance = development_finance_interest(
        ZERO, build_total, monthly_rate_pct, Decimal(build_period)
    )
    finance = land_finance + build_finance

    costs = development_total_costs(
        inp.land_cost, build, pct(inp.professional_fees), pct(inp.contingency), finance
    ) + sales
    profit = gdv - costs
    poc = profit_on_cost(gdv, costs)

    net_sales = gdv - sales
    project_irr = project_npv = ZERO
    if months <= MAX_TIMELINE_MONTHS:
        flows = appraisal_cash_flows(inp.land_cost, build_total, net_sales, build_period, sale_period)
        monthly_irr = compute_irr(flows)
        if monthly_irr:
            project_irr = (growth_factor(pct(monthly_irr), TWELVE) - ONE) * HUNDRED
        project_npv = npv(flows, monthly_rate_pct)
    else:
        logger.debug("Appraisal timeline of %d months not laid out", months)

    return DevelopmentAppraisalResult(
        total_sqft=ratio(total_sqft),
        gdv=money(gdv),
        total_build_cost=money(build),
        professional_fees=money(fees),
        contingency=money(contingency),
        sales_costs=money(sales),
        land_finance=money(land_finance),
        build_finance=money(build_finance),
        finance_cost=money(finance),
        total_costs=money(costs),
        profit=money(profit),
        profit_on_cost=ratio(poc),
        profit_on_gdv=ratio(profit_on_gdv(gdv, costs)),
        build_cost_total=money(build_total),
        build_cost_total_per_sqft=money(build_cost_per_sqft(build_total, total_sqft)),
        poc_status=poc_status(poc),
        project_irr=ratio(project_irr),
        project_npv=money(project_npv),
        equity_multiple=ratio(equity_multiple(net_sales, inp.land_cost + build_total)),
    )
