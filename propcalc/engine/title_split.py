"""Title split: break one freehold into separately saleable leasehold units.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

from decimal import Decimal

from propcalc.engine.formulas import ZERO, as_pct, money, ratio, safe_div
from propcalc.models.bands import CostRange
from propcalc.models.title_split import TitleSplitFees, TitleSplitInput, TitleSplitResult

TITLE_SPLIT_COSTS: dict[str, CostRange] = {
    "legal": CostRange(Decimal("2000"), Decimal("4000")),
    "land_registry": CostRange(Decimal("300"), Decimal("600")),  # per unit
    "planning_consultant": CostRange(Decimal("500"), Decimal("1500")),
    "surveyor": CostRange(Decimal("400"), Decimal("800")),
    "lease_creation": CostRange(Decimal("1500"), Decimal("3000")),  # per unit
}
EQUITY_SHARE_OF_PURCHASE = Decimal("0.25")
TARGET_PROFIT_ON_COST = Decimal("15")


def viability_status(profit_on_cost: Decimal) -> str:
    if profit_on_cost >= 20:
        return "Strong Deal"
    if profit_on_cost >= TARGET_PROFIT_ON_COST:
        return "Viable"
    return "Marginal"


def title_split_fees(inp: TitleSplitInput) -> TitleSplitFees:
    units = inp.number_of_units

    def cost(item: str) -> Decimal:
        return TITLE_SPLIT_COSTS[item].pick(inp.use_high_estimates)

    return TitleSplitFees(
        legal=cost("legal"),
        land_registry=cost("land_registry") * units,
        surveyor=cost("surveyor"),
        lease_creation=ZERO if inp.existing_leases else cost("lease_creation") * units,
        planning_consultant=ZERO if inp.has_planning else cost("planning_consultant"),
        planning=ZERO if inp.has_planning else inp.planning_costs,
    )


def evaluate_title_split(inp: TitleSplitInput) -> TitleSplitResult:
    unit_values = inp.unit_1_value + inp.unit_2_value + inp.unit_3_value + inp.unit_4_value
    uplift = unit_values - inp.current_value

    fees = title_split_fees(inp)
    fee_total = (
        fees.legal + fees.land_registry + fees.surveyor
        + fees.lease_creation + fees.planning_consultant + fees.planning
    )
    conversion = inp.conversion_costs + fee_total
    project_cost = inp.purchase_price + inp.stamp_duty + conversion + inp.finance_costs
    profit = unit_values - project_cost
    poc = as_pct(profit, project_cost)
    # 75% LTV on the purchase; conversion is funded from equity
    equity = inp.purchase_price * EQUITY_SHARE_OF_PURCHASE + conversion

    return TitleSplitResult(
        total_unit_values=money(unit_values),
        value_uplift=money(uplift),
        uplift_percent=ratio(as_pct(uplift, inp.current_value)),
        fees=TitleSplitFees(*(money(value) for value in (
            fees.legal, fees.land_registry, fees.surveyor,
            fees.lease_creation, fees.planning_consultant, fees.planning,
        ))),
        legal_and_prof_fees=money(fee_total),
        total_conversion_costs=money(conversion),
        total_project_cost=money(project_cost),
        gross_profit=money(profit),
        net_profit=money(profit),
        profit_on_cost=ratio(poc),
        equity_required=money(equity),
        return_on_investment=ratio(as_pct(profit, equity)),
        is_viable=profit > 0 and poc >= TARGET_PROFIT_ON_COST,
        cost_per_unit=money(safe_div(project_cost, Decimal(inp.number_of_units))),
        viability_status=viability_status(poc),
    )
