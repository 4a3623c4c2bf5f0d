"""Title split inputs and results."""

from dataclasses import dataclass
from decimal import Decimal

from propcalc.models.form import FormInput, count, number


@dataclass(frozen=True)
class TitleSplitInput(FormInput):
    current_value: Decimal = number("600000")
    number_of_units: int = count(2, fallback=2)
    existing_leases: bool = False
    unit_1_value: Decimal = number("350000")
    unit_2_value: Decimal = number("320000")
    unit_3_value: Decimal = number("0")
    unit_4_value: Decimal = number("0")
    conversion_costs: Decimal = number("30000")
    use_high_estimates: bool = False
    has_planning: bool = True
    planning_costs: Decimal = number("2000")  # only incurred without consent
    purchase_price: Decimal = number("550000")
    stamp_duty: Decimal = number("33750")
    finance_costs: Decimal = number("25000")


@dataclass(frozen=True)
class TitleSplitFees:
    legal: Decimal
    land_registry: Decimal
    surveyor: Decimal
    lease_creation: Decimal
    planning_consultant: Decimal
    planning: Decimal


@dataclass(frozen=True)
class TitleSplitResult:
    total_unit_values: Decimal
    value_uplift: Decimal
    uplift_percent: Decimal
    fees: TitleSplitFees
    legal_and_prof_fees: Decimal
    total_conversion_costs: Decimal
    total_project_cost: Decimal
    gross_profit: Decimal
    net_profit: Decimal
    profit_on_cost: Decimal
    equity_required: Decimal
    return_on_investment: Decimal
    is_viable: bool
    cost_per_unit: Decimal
    viability_status: str
