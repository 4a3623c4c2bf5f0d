"""Serviced accommodation (short lets) and furnished holiday let tax.

Occupancy inputs are percentages of nights available; a month is 30 nights
and a year 365.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

from decimal import Decimal

from propcalc.engine.cashflow import cash_on_cash
from propcalc.engine.debt import interest_cover, interest_only_payment, loan_to_value, max_loan_from_icr
from propcalc.engine.formulas import (
    HUNDRED,
    ONE,
    TWELVE,
    ZERO,
    as_pct,
    money,
    pct,
    pct_of,
    ratio,
    safe_div,
    whole,
)
from propcalc.engine.tax import PERSONAL_ALLOWANCE, SECTION_24_CREDIT_RATE
from propcalc.models.bands import RateBand, band_for
from propcalc.models.landlord import TaxBandChoice
from propcalc.models.serviced import (
    HolidayLetTaxInput,
    HolidayLetTaxResult,
    OccupancyScenario,
    SaFinanceInput,
    SaFinanceResult,
    SaOccupancyInput,
    SaOccupancyResult,
    SaProfitInput,
    SaProfitResult,
)

NIGHTS_PER_YEAR = Decimal("365")
NIGHTS_PER_MONTH = Decimal("30")
BTL_BENCHMARK_YIELD = Decimal("0.05")


# ---- SA finance ----

SA_RATE_BANDS: tuple[RateBand, ...] = (
    RateBand(Decimal("60"), Decimal("5.29"), Decimal("6.19"), "60% LTV or less"),
    RateBand(Decimal("65"), Decimal("5.49"), Decimal("6.49"), "61-65% LTV"),
    RateBand(Decimal("70"), Decimal("5.79"), Decimal("6.79"), "66-70% LTV"),
    RateBand(Decimal("75"), Decimal("6.29"), Decimal("7.49"), "71-75% LTV"),
)
SPECIALIST_RATE_GUIDANCE = "7.5%+ (specialist)"


def booked_nights(occupancy_pct: Decimal) -> int:
    return int(whole(NIGHTS_PER_YEAR * pct(occupancy_pct)))


def _sa_operating_costs(inp: SaFinanceInput, nights: int) -> tuple[Decimal, Decimal, Decimal, Decimal, Decimal]:
    gross = inp.average_daily_rate * nights
    platform = pct_of(gross, inp.platform_fees)
    management = pct_of(gross, inp.management_fee)
    cleaning = inp.cleaning_per_night * nights
    maintenance = pct_of(gross, inp.maintenance)
    return gross, platform, management, cleaning, maintenance


def evaluate_sa_finance(inp: SaFinanceInput) -> SaFinanceResult:
    """Interest-only SA mortgage tested against gross nightly income.

    Break-even occupancy spreads fixed costs (utilities, insurance, interest)
    over the per-night margin; with no positive margin it is 100%.
    """
    loan = inp.property_value - inp.deposit
    ltv = loan_to_value(loan, inp.property_value)
    monthly = interest_only_payment(loan, inp.interest_rate)
    annual_interest = monthly * TWELVE
    fixed_running = (inp.utilities + inp.insurance) * TWELVE

    nights = booked_nights(inp.occupancy_rate)
    gross, platform, management, cleaning, maintenance = _sa_operating_costs(inp, nights)
    operating = platform + management + cleaning + maintenance + fixed_running
    noi = gross - operating
    annual_cashflow = noi - annual_interest
    stressed_icr = interest_cover(gross, pct_of(loan, inp.stress_test_rate))

    stress_gross, *stress_costs = _sa_operating_costs(inp, booked_nights(inp.occupancy_stress_test))
    stressed_cashflow = stress_gross - sum(stress_costs, ZERO) - fixed_running - annual_interest

    variable_per_night = inp.cleaning_per_night + pct_of(
        inp.average_daily_rate, inp.platform_fees + inp.management_fee + inp.maintenance
    )
    margin_per_night = inp.average_daily_rate - variable_per_night
    if margin_per_night > 0:
        break_even = as_pct((fixed_running + annual_interest) / margin_per_night, NIGHTS_PER_YEAR)
    else:
        break_even = HUNDRED

    band = band_for(SA_RATE_BANDS, ltv)
    if band is not None:
        guidance = f"{band.min_rate}% - {band.max_rate}%"
    else:
        guidance = SPECIALIST_RATE_GUIDANCE

    return SaFinanceResult(
        loan_amount=money(loan),
        ltv=ratio(ltv),
        monthly_payment=money(monthly),
        annual_interest=money(annual_interest),
        booked_nights=nights,
        gross_annual_income=money(gross),
        platform_fee_amount=money(platform),
        management_fee_amount=money(management),
        cleaning_costs=money(cleaning),
        maintenance_cost=money(maintenance),
        total_operating_costs=money(operating),
        net_operating_income=money(noi),
        icr=ratio(interest_cover(gross, annual_interest)),
        stressed_icr=ratio(stressed_icr),
        passes_stress_test=stressed_icr >= inp.icr_requirement,
        max_loan_by_icr=money(max_loan_from_icr(gross, inp.stress_test_rate, inp.icr_requirement)),
        monthly_cashflow=money(annual_cashflow / TWELVE),
        annual_cashflow=money(annual_cashflow),
        cash_on_cash_return=ratio(cash_on_cash(annual_cashflow, inp.deposit)),
        break_even_occupancy=ratio(break_even),
        effective_yield=ratio(as_pct(noi, inp.property_value)),
        stressed_occupancy_cashflow=money(stressed_cashflow),
        rate_band=band,
        rate_guidance=guidance,
    )


# ---- SA occupancy ----

SCENARIO_OCCUPANCIES = (40, 50, 60, 70, 80)
BENCHMARK_OCCUPANCY = Decimal("0.65")


def occupancy_scenario(inp: SaOccupancyInput, occupancy: int, fixed_monthly: Decimal) -> OccupancyScenario:
    share = pct(Decimal(occupancy))
    nights = NIGHTS_PER_MONTH * share
    stays = safe_div(nights, inp.average_stay_length)
    gross = inp.adr * nights + inp.cleaning_fee * stays
    net = (
        gross
        - inp.adr * nights * pct(inp.platform_fee_percent)
        - inp.variable_cost_per_night * nights
        - inp.cleaning_cost * stays
    )
    cashflow = net - fixed_monthly
    return OccupancyScenario(
        occupancy=occupancy,
        nights_per_month=whole(nights),
        nights_per_year=whole(NIGHTS_PER_YEAR * share),
        gross_revenue_monthly=money(gross),
        net_revenue_monthly=money(net),
        cashflow_monthly=money(cashflow),
        cashflow_annual=money(cashflow * TWELVE),
    )


def evaluate_sa_occupancy(inp: SaOccupancyInput) -> SaOccupancyResult:
    net_adr = inp.adr * (ONE - pct(inp.platform_fee_percent))
    cleaning_per_night = safe_div(inp.cleaning_fee - inp.cleaning_cost, inp.average_stay_length)
    net_per_night = net_adr + cleaning_per_night - inp.variable_cost_per_night

    fixed_monthly = inp.fixed_costs_monthly + inp.mortgage_monthly
    fixed_annual = fixed_monthly * TWELVE
    nights_monthly = safe_div(fixed_monthly, net_per_night)
    nights_annual = safe_div(fixed_annual, net_per_night)
    target_nights = safe_div(fixed_monthly + inp.target_monthly_profit, net_per_night)

    return SaOccupancyResult(
        net_adr_after_platform=money(net_adr),
        cleaning_profit_per_night=money(cleaning_per_night),
        net_revenue_per_night=money(net_per_night),
        total_fixed_costs_monthly=money(fixed_monthly),
        breakeven_nights_monthly=ratio(nights_monthly),
        breakeven_occupancy_monthly=ratio(as_pct(nights_monthly, NIGHTS_PER_MONTH)),
        breakeven_nights_annual=ratio(nights_annual),
        breakeven_occupancy_annual=ratio(as_pct(nights_annual, NIGHTS_PER_YEAR)),
        target_nights_monthly=ratio(target_nights),
        target_occupancy=ratio(as_pct(target_nights, NIGHTS_PER_MONTH)),
        scenarios=tuple(occupancy_scenario(inp, occ, fixed_monthly) for occ in SCENARIO_OCCUPANCIES),
        revpar_at_50=money(inp.adr * Decimal("0.5")),
        revpar_at_65=money(inp.adr * Decimal("0.65")),
        revpar_at_80=money(inp.adr * Decimal("0.8")),
        safety_margin_nights=ratio(max(ZERO, BENCHMARK_OCCUPANCY * NIGHTS_PER_MONTH - nights_monthly)),
    )


# ---- SA profit ----

AVERAGE_STAY_NIGHTS = Decimal("2.5")


def evaluate_sa_profit(inp: SaProfitInput) -> SaProfitResult:
    investment = inp.purchase_price + inp.refurb_cost
    deposit = pct_of(inp.purchase_price, inp.deposit_percent)
    mortgage = inp.purchase_price - deposit

    occupancy = pct(inp.occupancy_percent)
    nights = NIGHTS_PER_YEAR * occupancy
    bookings = nights / AVERAGE_STAY_NIGHTS

    accommodation = inp.average_nightly_rate * nights
    cleaning_revenue = inp.cleaning_fee * bookings
    gross = accommodation + cleaning_revenue

    platform = pct_of(accommodation, inp.platform_fees)
    management = pct_of(gross, inp.management_percent)
    cleaning_costs = inp.cleaning_cost * bookings
    fixed_running = (
        inp.utilities + inp.insurance + inp.maintenance + inp.consumables + inp.council_tax
    ) * TWELVE
    operating = platform + management + cleaning_costs + fixed_running
    noi = gross - operating

    annual_mortgage = pct_of(mortgage, inp.interest_rate)
    annual_cashflow = noi - annual_mortgage

    margin_per_night = (
        inp.average_nightly_rate * (ONE - pct(inp.platform_fees) - pct(inp.management_percent))
        + (inp.cleaning_fee - inp.cleaning_cost) / AVERAGE_STAY_NIGHTS
    )
    breakeven_nights = safe_div(fixed_running + annual_mortgage, margin_per_night)
    btl_rent = inp.purchase_price * BTL_BENCHMARK_YIELD / TWELVE

    return SaProfitResult(
        total_investment=money(investment),
        deposit=money(deposit),
        mortgage_amount=money(mortgage),
        nights_per_year=ratio(nights),
        bookings_per_year=ratio(bookings),
        gross_accommodation_revenue=money(accommodation),
        gross_cleaning_revenue=money(cleaning_revenue),
        gross_revenue=money(gross),
        platform_fees_amount=money(platform),
        management_amount=money(management),
        cleaning_costs_amount=money(cleaning_costs),
        fixed_running_costs=money(fixed_running),
        total_operating_costs=money(operating),
        noi=money(noi),
        monthly_mortgage=money(annual_mortgage / TWELVE),
        annual_mortgage=money(annual_mortgage),
        monthly_cashflow=money(annual_cashflow / TWELVE),
        annual_cashflow=money(annual_cashflow),
        gross_yield=ratio(as_pct(gross, investment)),
        net_yield=ratio(as_pct(noi, investment)),
        cash_on_cash=ratio(cash_on_cash(annual_cashflow, deposit)),
        adr=money(inp.average_nightly_rate),
        revpar=money(inp.average_nightly_rate * occupancy),
        breakeven_occupancy=ratio(as_pct(breakeven_nights, NIGHTS_PER_YEAR)),
        sa_vs_btl_multiplier=ratio(safe_div(gross / TWELVE, btl_rent)),
    )


# ---- Holiday let tax ----

FHL_MIN_DAYS_AVAILABLE = Decimal("210")
FHL_MIN_DAYS_LET = Decimal("105")
CLASS_4_NI_RATE = Decimal("0.06")

INCOME_TAX_RATES: dict[TaxBandChoice, Decimal] = {
    TaxBandChoice.BASIC: Decimal("0.20"),
    TaxBandChoice.HIGHER: Decimal("0.40"),
    TaxBandChoice.ADDITIONAL: Decimal("0.45"),
}


def evaluate_holiday_let_tax(inp: HolidayLetTaxInput) -> HolidayLetTaxResult:
    """FHL tax position against the same property taxed as an ordinary BTL.

    As an FHL, mortgage interest is a deductible expense and capital
    allowances reduce profit; as a BTL, interest only earns the 20% credit.
    """
    rate = INCOME_TAX_RATES[inp.tax_bracket]
    expenses = (
        inp.mortgage_interest + inp.insurance + inp.utilities + inp.cleaning + inp.management
        + inp.maintenance + inp.council_tax + inp.advertising + inp.other_expenses
    )
    profit = inp.gross_income - expenses
    taxable = max(ZERO, profit - inp.capital_allowances)

    income_tax_due = taxable * rate
    class_4 = max(ZERO, taxable - PERSONAL_ALLOWANCE) * CLASS_4_NI_RATE
    total_tax = income_tax_due + class_4

    btl_profit = inp.gross_income - (expenses - inp.mortgage_interest)
    btl_tax = btl_profit * rate - inp.mortgage_interest * SECTION_24_CREDIT_RATE
    btl_post_tax = btl_profit - btl_tax - inp.mortgage_interest

    return HolidayLetTaxResult(
        qualifies_as_fhl=(
            inp.days_available >= FHL_MIN_DAYS_AVAILABLE and inp.days_let >= FHL_MIN_DAYS_LET
        ),
        total_expenses=money(expenses),
        net_profit_before_ca=money(profit),
        taxable_profit=money(taxable),
        income_tax_on_profit=money(income_tax_due),
        class_4_ni=money(class_4),
        total_tax_liability=money(total_tax),
        post_tax_profit=money(profit - total_tax),
        effective_tax_rate=ratio(as_pct(total_tax, profit)),
        btl_tax_after_relief=money(btl_tax),
        btl_post_tax_profit=money(btl_post_tax),
        fhl_tax_saving=money(btl_tax - income_tax_due),
        revenue_per_day_let=money(safe_div(inp.gross_income, inp.days_let)),
        expense_ratio=ratio(as_pct(expenses, inp.gross_income)),
    )
