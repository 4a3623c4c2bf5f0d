"""Leasehold calculators: ground rent escalation, statutory lease extension
premiums, marriage value and service charge apportionment.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

import math
from decimal import Decimal

from propcalc.engine.formulas import HUNDRED, ONE, ZERO, as_pct, growth_factor, money, pct, pct_of, ratio, safe_div
from propcalc.engine.relativity import (
    FREEHOLDER_SHARE,
    MARRIAGE_VALUE_THRESHOLD,
    interpolated_relativity,
    reversion_value,
    stepped_relativity,
    years_purchase,
)
from propcalc.models.leasehold import (
    ChargeShare,
    Escalation,
    GroundRentInput,
    GroundRentResult,
    GroundRentRisk,
    LeaseExtensionInput,
    LeaseExtensionResult,
    MarriageValueInput,
    MarriageValueResult,
    RentProjection,
    ServiceChargeInput,
    ServiceChargeResult,
)

# ---- Ground rent ----

ASSUMED_RPI = Decimal("1.03")
ASSUMED_MARKET_REVIEW = Decimal("1.02")
GROUND_RENT_DISCOUNT = Decimal("1.05")
PROJECTION_CAP_YEARS = 99
PROJECTION_ROWS = 51
ONEROUS_RENT_IN_25 = Decimal("500")


def escalated_rent(inp: GroundRentInput, year: int) -> Decimal:
    """Ground rent payable in ``year`` under the lease's review pattern."""
    rent = inp.current_ground_rent
    period = inp.escalation_period
    if inp.escalation_type is Escalation.FIXED or period <= 0:
        return rent

    periods = Decimal(year) // period
    if inp.escalation_type is Escalation.RPI:
        return rent * ASSUMED_RPI ** (periods * period)
    if inp.escalation_type is Escalation.PERCENTAGE:
        return rent * growth_factor(pct(inp.escalation_rate), periods)
    if inp.escalation_type is Escalation.DOUBLING:
        return rent * growth_factor(ONE, periods)
    return rent * ASSUMED_MARKET_REVIEW ** (periods * period)


def ground_rent_risk(escalation: Escalation, current_rent: Decimal, rent_in_25: Decimal) -> GroundRentRisk:
    if escalation is Escalation.DOUBLING or rent_in_25 > ONEROUS_RENT_IN_25:
        return GroundRentRisk.ONEROUS
    if escalation is not Escalation.FIXED and current_rent > 250:
        return GroundRentRisk.HIGH
    if current_rent > 100 or escalation is not Escalation.FIXED:
        return GroundRentRisk.MEDIUM
    return GroundRentRisk.LOW


def evaluate_ground_rent(inp: GroundRentInput) -> GroundRentResult:
    current = inp.current_ground_rent
    horizon = min(inp.years_remaining, Decimal(PROJECTION_CAP_YEARS))

    projections = [RentProjection(year, escalated_rent(inp, year)) for year in range(int(horizon) + 1)]
    by_year = {row.year: row.rent for row in projections}

    def rent_at(year: int) -> Decimal:
        return by_year.get(year) or current

    total_25 = sum((row.rent for row in projections if row.year < 25), ZERO)
    total_lease = sum((row.rent for row in projections if row.year < inp.years_remaining), ZERO)
    capitalised = sum(
        (rent_at(i) / GROUND_RENT_DISCOUNT ** (i + 1) for i in range(math.ceil(horizon))),
        ZERO,
    )
    rent_in_25 = rent_at(25)

    return GroundRentResult(
        current_rent=money(current),
        rent_in_10_years=money(rent_at(10)),
        rent_in_25_years=money(rent_in_25),
        rent_in_50_years=money(rent_at(50)),
        total_over_25_years=money(total_25),
        total_over_lease=money(total_lease),
        rent_as_percentage=ratio(as_pct(current, inp.property_value)),
        capitalised_value=money(capitalised),
        risk_level=ground_rent_risk(inp.escalation_type, current, rent_in_25),
        projections=tuple(
            RentProjection(row.year, money(row.rent)) for row in projections[:PROJECTION_ROWS]
        ),
    )


# ---- Lease extension ----

GROUND_RENT_CAP_RATE = Decimal("0.065")
EXTENDED_RELATIVITY = Decimal("99")  # 90 years added is treated as near-freehold
CRITICAL_LEASE_YEARS = Decimal("70")


def professional_fees(flat_value: Decimal) -> tuple[Decimal, Decimal, Decimal]:
    """Surveyor, solicitor and the freeholder's costs the leaseholder also pays."""
    surveyor = max(Decimal("1500"), flat_value * Decimal("0.003"))
    legal = max(Decimal("1500"), flat_value * Decimal("0.002"))
    freeholder = max(Decimal("1000"), flat_value * Decimal("0.002"))
    return surveyor, legal, freeholder


def evaluate_lease_extension(inp: LeaseExtensionInput) -> LeaseExtensionResult:
    """Statutory lease extension premium.

    The freeholder's diminution is the capitalised ground rent. Marriage value
    is shared 50:50 below 80 years unless the parties are related.
    """
    years = inp.current_lease_years
    capitalised = inp.ground_rent * years_purchase(GROUND_RENT_CAP_RATE, years)

    current_relativity = stepped_relativity(years)
    current_value = inp.flat_value * pct(current_relativity)
    extended_value = inp.flat_value * pct(EXTENDED_RELATIVITY)
    diminution = capitalised

    marriage = ZERO
    if years < MARRIAGE_VALUE_THRESHOLD and not inp.related_parties:
        marriage = (extended_value - current_value - diminution) * FREEHOLDER_SHARE
    premium = diminution + max(ZERO, marriage)

    surveyor, legal, freeholder = professional_fees(inp.flat_value)
    professional = surveyor + legal + freeholder
    total_cost = premium + professional
    uplift = extended_value - current_value
    net_gain = uplift - total_cost

    return LeaseExtensionResult(
        current_relativity=current_relativity,
        extended_relativity=EXTENDED_RELATIVITY,
        current_lease_value=money(current_value),
        extended_lease_value=money(extended_value),
        capitalised_ground_rent=money(capitalised),
        diminution=money(diminution),
        marriage_value=money(marriage),
        premium=money(premium),
        surveyor_fees=money(surveyor),
        legal_fees=money(legal),
        freeholder_costs=money(freeholder),
        total_professional_costs=money(professional),
        total_cost=money(total_cost),
        value_uplift=money(uplift),
        net_gain=money(net_gain),
        roi=ratio(as_pct(net_gain, total_cost)),
        years_to_80=ratio(years - MARRIAGE_VALUE_THRESHOLD),
        is_marriage_value_zone=years < MARRIAGE_VALUE_THRESHOLD,
        is_critical=years < CRITICAL_LEASE_YEARS,
    )


# ---- Marriage value ----

def evaluate_marriage_value(inp: MarriageValueInput) -> MarriageValueResult:
    """Premium for extending ``current_lease_years`` by ``extension_years``.

    Premium = capitalised ground rent + reversion PV + the landlord's share of
    marriage value, with relativities read off the interpolated graph.
    """
    years = inp.current_lease_years
    new_years = years + inp.extension_years

    current_relativity = interpolated_relativity(years)
    extended_relativity = interpolated_relativity(new_years)
    current_value = inp.freehold_value * pct(current_relativity)
    extended_value = inp.freehold_value * pct(extended_relativity)
    uplift = extended_value - current_value

    under_80 = years < MARRIAGE_VALUE_THRESHOLD
    capitalised = inp.ground_rent * years_purchase(pct(inp.capitalisation_rate), years)
    reversion = reversion_value(inp.freehold_value, inp.deferment_rate, years)

    marriage = uplift if under_80 else ZERO
    landlord_share = pct_of(marriage, inp.marriage_value_share)
    premium = capitalised + reversion + landlord_share

    return MarriageValueResult(
        new_lease_years=new_years,
        current_lease_relativity=ratio(current_relativity),
        extended_lease_relativity=ratio(extended_relativity),
        current_lease_value=money(current_value),
        extended_lease_value=money(extended_value),
        value_uplift=money(uplift),
        marriage_value_total=money(marriage),
        landlord_marriage_share=money(landlord_share),
        capitalised_ground_rent=money(capitalised),
        present_value_reversion=money(reversion),
        total_premium=money(premium),
        value_gain_to_leaseholder=money(uplift - premium),
        is_under_80_years=under_80,
        years_until_80=max(ZERO, MARRIAGE_VALUE_THRESHOLD - years),
    )


# ---- Service charge ----

SERVICE_CHARGE_HEADS: tuple[tuple[str, str], ...] = (
    ("insurance", "building_insurance"),
    ("management", "management_fees"),
    ("cleaning", "cleaning_gardening"),
    ("lift", "lift_maintenance"),
    ("electricity", "communal_electricity"),
    ("repairs", "repairs_reserve"),
    ("major_works", "major_works_reserve"),
    ("other", "other_costs"),
)


def evaluate_service_charge(inp: ServiceChargeInput) -> ServiceChargeResult:
    share = pct(inp.your_share)
    costs = [(category, getattr(inp, field)) for category, field in SERVICE_CHARGE_HEADS]
    building_total = sum((cost for _, cost in costs), ZERO)
    annual = building_total * share
    reserves = inp.repairs_reserve + inp.major_works_reserve

    return ServiceChargeResult(
        total_building_costs=money(building_total),
        your_annual_charge=money(annual),
        your_monthly_charge=money(annual / 12),
        your_quarterly_charge=money(annual / 4),
        your_share_percent=ratio(share * HUNDRED),
        breakdown=tuple(ChargeShare(category, money(cost), money(cost * share)) for category, cost in costs),
        reserve_percentage=ratio(as_pct(reserves, building_total)),
        average_cost_per_unit=money(safe_div(building_total, inp.number_of_units)),
    )
