"""HMO finance, fire safety, licensing and viability.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

import logging
from decimal import Decimal

from propcalc.engine.cashflow import cash_on_cash, dscr
from propcalc.engine.debt import (
    interest_cover,
    interest_only_payment,
    loan_to_value,
    max_loan_from_icr,
    monthly_payment,
    repayment_schedule,
)
from propcalc.engine.formulas import (
    ONE,
    TWELVE,
    ZERO,
    as_pct,
    gross_yield,
    money,
    pct,
    pct_of,
    ratio,
    safe_div,
    total,
)
from propcalc.models.bands import CostRange
from propcalc.models.hmo import (
    AlarmType,
    ApplicationType,
    BuildingAge,
    ComplianceLevel,
    CouncilFees,
    DoorSpec,
    HmoFinanceInput,
    HmoFinanceResult,
    HmoFireSafetyInput,
    HmoFireSafetyResult,
    HmoLicenceFeeInput,
    HmoLicenceFeeResult,
    HmoViabilityInput,
    HmoViabilityResult,
    LicenceType,
)

logger = logging.getLogger(__name__)


# ---- Finance ----

def icr_status(stressed_icr: Decimal, requirement: Decimal) -> str:
    if stressed_icr >= requirement:
        return "Passes ICR"
    if stressed_icr >= requirement * Decimal("0.9"):
        return "Near Threshold"
    return "Below ICR"


def ltv_status(ltv: Decimal) -> str:
    if ltv <= 65:
        return "Low LTV"
    if ltv <= 75:
        return "Standard LTV"
    return "High LTV"


def evaluate_hmo_finance(inp: HmoFinanceInput) -> HmoFinanceResult:
    loan = inp.property_value - inp.deposit
    ltv = loan_to_value(loan, inp.property_value)

    gross_rent = inp.number_of_rooms * inp.rent_per_room * TWELVE
    net_rent = gross_rent - pct_of(gross_rent, inp.void_allowance) - pct_of(gross_rent, inp.management_fee)

    interest = interest_only_payment(loan, inp.interest_rate)
    # a zero-rate repayment quote is left blank rather than straight-lined
    payment = monthly_payment(loan, inp.interest_rate, inp.loan_term) if inp.interest_rate > 0 else ZERO
    first_year = repayment_schedule(loan, inp.interest_rate, inp.loan_term, months=12) if payment > 0 else []

    stressed_icr = interest_cover(gross_rent, pct_of(loan, inp.stress_test_rate))
    monthly_cashflow = net_rent / TWELVE - interest
    annual_cashflow = monthly_cashflow * TWELVE

    return HmoFinanceResult(
        loan_amount=money(loan),
        ltv=ratio(ltv),
        gross_rent=money(gross_rent),
        net_rent=money(net_rent),
        monthly_interest=money(interest),
        monthly_payment=money(payment),
        monthly_capital_repayment=money(payment - interest),
        first_year_capital_repaid=total(row.capital for row in first_year),
        icr=ratio(interest_cover(gross_rent, interest * TWELVE)),
        stressed_icr=ratio(stressed_icr),
        max_loan_by_icr=money(max_loan_from_icr(gross_rent, inp.stress_test_rate, inp.icr_requirement)),
        passes_stress_test=stressed_icr >= inp.icr_requirement,
        monthly_cashflow=money(monthly_cashflow),
        annual_cashflow=money(annual_cashflow),
        cash_on_cash_return=ratio(cash_on_cash(annual_cashflow, inp.deposit)),
        icr_status=icr_status(stressed_icr, inp.icr_requirement),
        ltv_status=ltv_status(ltv),
    )


# ---- Fire safety ----

# 2024 supply-and-fit prices
FIRE_SAFETY_COSTS: dict[str, CostRange] = {
    "fire_door_fd30": CostRange(Decimal("250"), Decimal("450")),
    "fire_door_fd60": CostRange(Decimal("450"), Decimal("800")),
    "smoke_seals_closers": CostRange(Decimal("40"), Decimal("80")),
    "interlinked_alarm": CostRange(Decimal("80"), Decimal("150")),
    "heat_detector": CostRange(Decimal("60"), Decimal("120")),
    "emergency_light": CostRange(Decimal("150"), Decimal("300")),
    "fire_extinguisher": CostRange(Decimal("30"), Decimal("60")),
    "fire_blanket": CostRange(Decimal("15"), Decimal("35")),
    "fire_alarm_panel": CostRange(Decimal("400"), Decimal("1200")),
    "escape_sign": CostRange(Decimal("15"), Decimal("40")),
    "fire_risk_assessment": CostRange(Decimal("150"), Decimal("400")),
    "fire_retardant_treatment": CostRange(Decimal("200"), Decimal("500")),
}

ADDRESSABLE_ALARM_UPLIFT = Decimal("1.5")

RETARDANT_SHARE_BY_AGE: dict[BuildingAge, Decimal] = {
    BuildingAge.PRE_1990: Decimal("0.5"),
    BuildingAge.PRE_1970: ONE,
}


def compliance_level(doors: DoorSpec, alarm: AlarmType) -> ComplianceLevel:
    if doors is DoorSpec.FD60 and alarm is AlarmType.ADDRESSABLE:
        return ComplianceLevel.ENHANCED
    if doors is DoorSpec.FD30 and alarm is AlarmType.MAINS:
        return ComplianceLevel.STANDARD
    return ComplianceLevel.BASIC


def evaluate_hmo_fire_safety(inp: HmoFireSafetyInput) -> HmoFireSafetyResult:
    """Fire safety works for an HMO, priced at the low or high end of each range.

    Doors cover every bedroom plus the kitchen and one escape-route door per
    storey; alarms one per room and landing plus a common area.
    """
    storeys = inp.property_storeys
    rooms = inp.number_of_rooms
    high = inp.use_high_estimates

    def cost(item: str) -> Decimal:
        return FIRE_SAFETY_COSTS[item].pick(high)

    doors_required = rooms + 1 + storeys
    doors_to_install = max(0, doors_required - inp.existing_fire_doors)
    door_item = "fire_door_fd60" if inp.door_specification is DoorSpec.FD60 else "fire_door_fd30"
    doors = doors_to_install * cost(door_item)
    seals = doors_required * cost("smoke_seals_closers")

    alarms = ZERO
    if not inp.has_interlinked_alarms:
        per_alarm = cost("interlinked_alarm")
        if inp.alarm_type is AlarmType.ADDRESSABLE:
            per_alarm *= ADDRESSABLE_ALARM_UPLIFT
        alarms = (rooms + storeys + 1) * per_alarm + cost("heat_detector")

    lighting = ZERO
    if not inp.has_emergency_lighting and (storeys >= 3 or inp.has_basement):
        lights = storeys * 2 + (2 if inp.has_basement else 0)
        lighting = lights * cost("emergency_light")

    extinguishers = ZERO
    if not inp.has_fire_extinguishers:
        extinguishers = storeys * cost("fire_extinguisher") + cost("fire_blanket")

    signage = storeys * 2 * cost("escape_sign")

    panel = ZERO
    if not inp.has_fire_alarm_panel and (inp.alarm_type is AlarmType.ADDRESSABLE or storeys >= 3):
        panel = cost("fire_alarm_panel")

    fra = ZERO if inp.has_fire_risk_assessment else cost("fire_risk_assessment")
    other = cost("fire_retardant_treatment") * RETARDANT_SHARE_BY_AGE.get(inp.building_age, ZERO)

    total_cost = doors + seals + alarms + lighting + extinguishers + signage + panel + fra + other

    mandatory = []
    if doors_to_install > 0:
        mandatory.append(f"{doors_to_install} fire doors required")
    if not inp.has_interlinked_alarms:
        mandatory.append("Interlinked smoke alarms required")
    if not inp.has_fire_risk_assessment:
        mandatory.append("Fire Risk Assessment required")
    if storeys >= 3 and not inp.has_emergency_lighting:
        mandatory.append("Emergency lighting required (3+ storeys)")

    recommended = []
    if not inp.has_fire_extinguishers:
        recommended.append("Fire extinguishers recommended")
    if inp.door_specification is DoorSpec.FD30 and storeys >= 3:
        recommended.append("Consider FD60 doors for taller buildings")
    if inp.alarm_type is not AlarmType.ADDRESSABLE and rooms > 6:
        recommended.append("Consider addressable alarm system")

    return HmoFireSafetyResult(
        total_doors_required=doors_required,
        doors_to_install=doors_to_install,
        doors_cost=money(doors),
        smoke_seals_closers_cost=money(seals),
        alarms_cost=money(alarms),
        emergency_lighting_cost=money(lighting),
        extinguishers_cost=money(extinguishers),
        signage_cost=money(signage),
        fire_panel_cost=money(panel),
        fra_cost=money(fra),
        other_cost=money(other),
        total_cost=money(total_cost),
        cost_per_room=money(safe_div(total_cost, Decimal(rooms))),
        compliance_level=compliance_level(inp.door_specification, inp.alarm_type),
        mandatory_items=tuple(mandatory),
        recommended_items=tuple(recommended),
    )


# ---- Licence fee ----

def _fees(mandatory: str, additional: str, renewal: str) -> CouncilFees:
    return CouncilFees(Decimal(mandatory), Decimal(additional), Decimal(renewal))


# 2024 estimates; real schedules vary by council and scheme
COUNCIL_FEES: dict[str, CouncilFees] = {
    "birmingham": _fees("1200", "1100", "950"),
    "manchester": _fees("1350", "1100", "1000"),
    "liverpool": _fees("950", "850", "700"),
    "leeds": _fees("1150", "1050", "850"),
    "sheffield": _fees("1050", "950", "800"),
    "bristol": _fees("1400", "1200", "1050"),
    "newcastle": _fees("1000", "900", "750"),
    "nottingham": _fees("1100", "1000", "850"),
    "southampton": _fees("1250", "1100", "950"),
    "portsmouth": _fees("1300", "1150", "1000"),
    "london-camden": _fees("1500", "1350", "1200"),
    "london-hackney": _fees("1650", "1500", "1350"),
    "london-newham": _fees("1750", "1600", "1400"),
    "london-tower-hamlets": _fees("1600", "1450", "1300"),
    "london-lambeth": _fees("1450", "1300", "1150"),
    "london-southwark": _fees("1550", "1400", "1250"),
    "london-islington": _fees("1700", "1550", "1400"),
    "london-brent": _fees("1500", "1350", "1200"),
    "london-croydon": _fees("1350", "1200", "1050"),
    "london-ealing": _fees("1400", "1250", "1100"),
    "brighton": _fees("1350", "1200", "1000"),
    "oxford": _fees("1450", "1300", "1100"),
    "cambridge": _fees("1400", "1250", "1050"),
    "average-uk": _fees("1150", "1000", "850"),
}
DEFAULT_COUNCIL = "average-uk"
MANDATORY_OCCUPANTS = 5


def council_fees(council: str) -> CouncilFees:
    fees = COUNCIL_FEES.get(council)
    if fees is None:
        logger.warning("No licence fee schedule for council %r, using %s", council, DEFAULT_COUNCIL)
        return COUNCIL_FEES[DEFAULT_COUNCIL]
    return fees


def licence_base_fee(inp: HmoLicenceFeeInput, fees: CouncilFees) -> Decimal:
    if inp.custom_fee > 0:
        return inp.custom_fee
    if inp.application_type is ApplicationType.RENEWAL:
        return fees.renewal
    if inp.licence_type is LicenceType.MANDATORY:
        return fees.mandatory
    return fees.additional


def evaluate_hmo_licence_fee(inp: HmoLicenceFeeInput) -> HmoLicenceFeeResult:
    fees = council_fees(inp.council)
    properties = inp.number_of_properties
    mandatory_hmo = inp.number_of_occupants >= MANDATORY_OCCUPANTS
    base_fee = licence_base_fee(inp, fees)

    discount_pct = ZERO
    if inp.is_accredited_landlord:
        discount_pct += 10
    if inp.early_bird_discount:
        discount_pct += 5
    if inp.multi_property_discount and properties > 1:
        discount_pct += 5

    discount = pct_of(base_fee, discount_pct)
    per_property = base_fee - discount
    total_fee = per_property * properties
    annual = safe_div(total_fee, Decimal(fees.duration_years))

    notes = []
    if mandatory_hmo:
        notes.append("Property qualifies for mandatory HMO licensing")
    if inp.licence_type is LicenceType.ADDITIONAL and not mandatory_hmo:
        notes.append("Check if your council has additional licensing schemes")
    if inp.is_accredited_landlord:
        notes.append("10% discount applied for accredited landlord status")
    if properties > 3:
        notes.append("Consider portfolio licensing schemes if available")
    notes.append(f"Licence valid for {fees.duration_years} years")

    return HmoLicenceFeeResult(
        base_fee=money(base_fee),
        discount_percent=discount_pct,
        discount_amount=money(discount),
        fee_per_property=money(per_property),
        total_fee=money(total_fee),
        fee_per_room=money(safe_div(total_fee, Decimal(inp.number_of_rooms * properties))),
        annual_cost=money(annual),
        monthly_equivalent=money(annual / TWELVE),
        licence_duration=fees.duration_years,
        is_mandatory_hmo=mandatory_hmo,
        notes=tuple(notes),
    )


# ---- Viability ----

LICENCE_TERM_YEARS = Decimal("5")
ICR_STRESS_RATE = Decimal("0.055")
BTL_BENCHMARK_YIELD = Decimal("0.05")


def evaluate_hmo_viability(inp: HmoViabilityInput) -> HmoViabilityResult:
    investment = inp.purchase_price + inp.refurb_cost
    deposit = pct_of(inp.purchase_price, inp.deposit_percent)
    mortgage = inp.purchase_price - deposit

    monthly_gross = inp.number_of_rooms * inp.average_room_rent
    annual_gross = monthly_gross * TWELVE
    effective = annual_gross * (ONE - pct(inp.void_percent))

    management = pct_of(effective, inp.management_fee)
    maintenance = pct_of(effective, inp.maintenance_percent)
    utilities = inp.utilities_cost * TWELVE
    cleaning = inp.cleaning_cost * TWELVE
    licence = inp.license_cost / LICENCE_TERM_YEARS
    operating = management + inp.insurance_cost + maintenance + utilities + cleaning + licence

    noi = effective - operating
    annual_mortgage = pct_of(mortgage, inp.interest_rate)
    annual_cashflow = noi - annual_mortgage
    monthly_cashflow = annual_cashflow / TWELVE
    btl_rent = inp.purchase_price * BTL_BENCHMARK_YIELD / TWELVE

    return HmoViabilityResult(
        total_investment=money(investment),
        deposit=money(deposit),
        mortgage_amount=money(mortgage),
        monthly_gross_rent=money(monthly_gross),
        annual_gross_rent=money(annual_gross),
        effective_rent=money(effective),
        annual_management=money(management),
        annual_maintenance=money(maintenance),
        annual_utilities=money(utilities),
        annual_cleaning=money(cleaning),
        annual_licence=money(licence),
        total_operating_costs=money(operating),
        noi=money(noi),
        monthly_mortgage=money(annual_mortgage / TWELVE),
        annual_mortgage=money(annual_mortgage),
        monthly_cashflow=money(monthly_cashflow),
        annual_cashflow=money(annual_cashflow),
        per_room_cashflow=money(safe_div(monthly_cashflow, inp.number_of_rooms)),
        gross_yield=ratio(gross_yield(annual_gross, investment)),
        net_yield=ratio(as_pct(noi, investment)),
        cash_on_cash=ratio(cash_on_cash(annual_cashflow, deposit)),
        dscr=ratio(dscr(noi, annual_mortgage)),
        icr=ratio(safe_div(annual_gross, mortgage * ICR_STRESS_RATE)),
        cost_per_room=money(safe_div(investment, inp.number_of_rooms)),
        hmo_vs_btl_multiplier=ratio(safe_div(monthly_gross, btl_rent)),
    )
