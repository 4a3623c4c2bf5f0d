"""Buy-to-let landlord calculators.

BRRR refinancing, lender ICR/DSCR stress tests, the standard BTL appraisal,
rent-to-rent margins, the Section 24 interest restriction and SDLT.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

import dataclasses
from decimal import Decimal

from propcalc.engine.cashflow import cash_on_cash, dscr
from propcalc.engine.debt import (
    interest_cover,
    interest_only_payment,
    loan_to_value,
    max_loan_from_icr,
    monthly_payment,
)
from propcalc.engine.formulas import (
    HUNDRED,
    ONE,
    TWELVE,
    ZERO,
    as_pct,
    cap_rate,
    gross_yield,
    money,
    net_yield,
    pct,
    pct_of,
    ratio,
    safe_div,
)
from propcalc.engine.hmo import icr_status
from propcalc.engine.returns import roi
from propcalc.engine.tax import (
    FIRST_TIME_BUYER_BANDS,
    FIRST_TIME_BUYER_LIMIT,
    NON_RESIDENTIAL_BANDS,
    SECTION_24_CREDIT_RATE,
    STANDARD_BANDS,
    BandCharge,
    banded_tax,
    income_tax,
)
from propcalc.models.bands import RateBand, band_for
from propcalc.models.landlord import (
    BrrrInput,
    BrrrResult,
    BtlDscrInput,
    BtlDscrResult,
    BtlIcrInput,
    BtlIcrResult,
    BuyerType,
    BuyToLetInput,
    BuyToLetResult,
    LenderCheck,
    LenderCriterion,
    MarginalRate,
    Ownership,
    PropertyUse,
    RentalYieldInput,
    RentalYieldResult,
    RentToRentInput,
    RentToRentResult,
    Section24Input,
    Section24Result,
    StampDutyInput,
    StampDutyResult,
    TaxBandChoice,
)

BASIC_RATE_ICR = Decimal("125")
HIGHER_RATE_ICR = Decimal("145")
LENDER_STRESS_RATE = Decimal("5.5")


# ---- BRRR ----

def evaluate_brrr(inp: BrrrInput) -> BrrrResult:
    """Buy, refurbish, refinance, rent.

    Bridging interest is simple monthly interest on purchase plus refurb for
    the bridging term. The refinance is interest-only at ARV x LTV. When the
    refinance returns every pound put in, cash-on-cash is reported as 0 with
    ``all_money_out`` set.
    """
    total_investment = (
        inp.purchase_price + inp.refurb_cost + inp.stamp_duty + inp.legal_fees + inp.survey_fees
    )
    bridging_interest = pct_of(inp.purchase_price + inp.refurb_cost, inp.bridging_rate) * inp.bridging_term
    total_with_bridging = total_investment + bridging_interest

    refinance = pct_of(inp.after_repair_value, inp.refinance_ltv)
    monthly_mortgage = interest_only_payment(refinance, inp.refinance_rate)
    annual_mortgage = monthly_mortgage * TWELVE

    money_left_in = total_with_bridging - refinance
    value_added = inp.after_repair_value - inp.purchase_price

    annual_rent = inp.monthly_rent * TWELVE
    effective_rent = annual_rent * (ONE - pct(inp.management_fee))
    annual_cashflow = effective_rent - annual_mortgage

    return BrrrResult(
        total_investment=money(total_investment),
        bridging_interest=money(bridging_interest),
        total_with_bridging=money(total_with_bridging),
        refinance_amount=money(refinance),
        monthly_mortgage=money(monthly_mortgage),
        annual_mortgage=money(annual_mortgage),
        money_left_in=money(money_left_in),
        recycled_capital=money(-money_left_in),
        value_added=money(value_added),
        equity_gain=money(inp.after_repair_value - refinance),
        annual_rent=money(annual_rent),
        effective_rent=money(effective_rent),
        monthly_cashflow=money(annual_cashflow / TWELVE),
        annual_cashflow=money(annual_cashflow),
        gross_yield=ratio(gross_yield(annual_rent, inp.after_repair_value)),
        cash_on_cash=ratio(cash_on_cash(annual_cashflow, money_left_in)),
        all_money_out=refinance > 0 and money_left_in <= 0,
        return_on_investment=ratio(roi(value_added + annual_cashflow, total_with_bridging)),
        dscr=ratio(dscr(effective_rent, annual_mortgage)),
    )


# ---- BTL DSCR ----

LENDER_CRITERIA: tuple[LenderCriterion, ...] = (
    LenderCriterion("Standard BTL (Basic Rate)", BASIC_RATE_ICR, LENDER_STRESS_RATE,
                    "Basic rate taxpayers, limited companies"),
    LenderCriterion("Standard BTL (Higher Rate)", HIGHER_RATE_ICR, LENDER_STRESS_RATE,
                    "Higher/additional rate taxpayers"),
    LenderCriterion("Portfolio Landlord (4+ props)", HIGHER_RATE_ICR, LENDER_STRESS_RATE,
                    "Landlords with 4+ mortgaged properties"),
    LenderCriterion("HMO/MUFB", HIGHER_RATE_ICR, LENDER_STRESS_RATE,
                    "HMOs and Multi-Unit Freehold Blocks"),
    LenderCriterion("Holiday Let", HIGHER_RATE_ICR, LENDER_STRESS_RATE,
                    "Furnished Holiday Lets"),
)


def dscr_icr_requirement(inp: BtlDscrInput) -> Decimal:
    if inp.icr_requirement > 0:
        return inp.icr_requirement
    if inp.is_limited_company or inp.tax_band is TaxBandChoice.BASIC:
        return BASIC_RATE_ICR
    return HIGHER_RATE_ICR


def lender_check(criterion: LenderCriterion, annual_rent: Decimal, loan: Decimal) -> LenderCheck:
    icr = interest_cover(annual_rent, pct_of(loan, criterion.stress_rate))
    return LenderCheck(criterion=criterion, icr_at_stress=ratio(icr), passes=icr >= criterion.icr)


def evaluate_btl_dscr(inp: BtlDscrInput) -> BtlDscrResult:
    requirement = dscr_icr_requirement(inp)
    loan = inp.loan_amount

    annual_rent = inp.monthly_rent * TWELVE
    net_rent = annual_rent - pct_of(annual_rent, inp.void_allowance)

    actual_interest = pct_of(loan, inp.interest_rate)
    stress_interest = pct_of(loan, inp.stress_test_rate)
    icr_stress = interest_cover(annual_rent, stress_interest)
    max_loan = max_loan_from_icr(annual_rent, inp.stress_test_rate, requirement)

    checks = tuple(lender_check(c, annual_rent, loan) for c in LENDER_CRITERIA)

    return BtlDscrResult(
        icr_requirement=requirement,
        ltv=ratio(loan_to_value(loan, inp.property_value)),
        annual_rent=money(annual_rent),
        net_annual_rent=money(net_rent),
        monthly_interest_at_actual=money(actual_interest / TWELVE),
        annual_interest_at_actual=money(actual_interest),
        monthly_interest_at_stress=money(stress_interest / TWELVE),
        annual_interest_at_stress=money(stress_interest),
        icr_at_actual_rate=ratio(interest_cover(annual_rent, actual_interest)),
        icr_at_stress_rate=ratio(icr_stress),
        dscr=ratio(safe_div(net_rent, stress_interest)),
        passes_stress_test=icr_stress >= requirement,
        max_loan_at_icr=money(max_loan),
        shortfall_or_surplus=money(loan - max_loan),
        required_rent_at_max_loan=money(stress_interest * requirement / HUNDRED / TWELVE),
        rent_multiple=ratio(safe_div(inp.monthly_rent, stress_interest / TWELVE)),
        icr_status=icr_status(icr_stress, requirement),
        lender_checks=checks,
    )


# ---- BTL ICR ----

def ownership_icr(ownership: Ownership) -> Decimal:
    if ownership is Ownership.PERSONAL_HIGHER:
        return HIGHER_RATE_ICR
    return BASIC_RATE_ICR


def evaluate_btl_icr(inp: BtlIcrInput) -> BtlIcrResult:
    required = ownership_icr(inp.ownership_type)
    loan = inp.loan_amount
    annual_rent = inp.monthly_rent * TWELVE

    actual_interest = pct_of(loan, inp.actual_rate)
    stress_interest = pct_of(loan, inp.stress_test_rate)
    icr_stress = interest_cover(annual_rent, stress_interest)
    max_loan = max_loan_from_icr(annual_rent, inp.stress_test_rate, required)
    required_rent = stress_interest * required / HUNDRED / TWELVE

    return BtlIcrResult(
        ltv=ratio(loan_to_value(loan, inp.property_value)),
        annual_rent=money(annual_rent),
        annual_interest_actual=money(actual_interest),
        monthly_interest_actual=money(actual_interest / TWELVE),
        annual_interest_stress=money(stress_interest),
        monthly_interest_stress=money(stress_interest / TWELVE),
        icr_at_actual_rate=ratio(interest_cover(annual_rent, actual_interest)),
        icr_at_stress_rate=ratio(icr_stress),
        required_icr=required,
        passes_stress_test=icr_stress >= required,
        max_loan_at_icr=money(max_loan),
        loan_headroom=money(max_loan - loan),
        required_rent_monthly=money(required_rent),
        rent_headroom=money(inp.monthly_rent - required_rent),
        rental_coverage_ratio=ratio(safe_div(inp.monthly_rent, stress_interest / TWELVE)),
        margin_of_safety=ratio(as_pct(icr_stress - required, required)),
    )


# ---- Buy to let ----

# Indicative December 2024 pricing; varies by lender, credit and product
BTL_RATE_BANDS: tuple[RateBand, ...] = (
    RateBand(Decimal("50"), Decimal("4.29"), Decimal("4.99"), "50% LTV or less"),
    RateBand(Decimal("60"), Decimal("4.49"), Decimal("5.29"), "51-60% LTV"),
    RateBand(Decimal("65"), Decimal("4.69"), Decimal("5.49"), "61-65% LTV"),
    RateBand(Decimal("70"), Decimal("4.89"), Decimal("5.69"), "66-70% LTV"),
    RateBand(Decimal("75"), Decimal("5.09"), Decimal("5.99"), "71-75% LTV"),
    RateBand(Decimal("80"), Decimal("5.49"), Decimal("6.49"), "76-80% LTV"),
    RateBand(Decimal("85"), Decimal("5.99"), Decimal("6.99"), "81-85% LTV"),
    RateBand(None, Decimal("6.49"), Decimal("7.49"), "85%+ LTV (limited availability)"),
)
ICR_STRESS_RATE = Decimal("5.5")


def evaluate_buy_to_let(inp: BuyToLetInput) -> BuyToLetResult:
    annual_rent = inp.monthly_rent * TWELVE
    deposit = pct_of(inp.purchase_price, inp.deposit_percent)
    mortgage = inp.purchase_price - deposit

    monthly_mortgage = interest_only_payment(mortgage, inp.interest_rate)
    annual_mortgage = monthly_mortgage * TWELVE

    management = pct_of(annual_rent, inp.management_fee)
    maintenance = pct_of(annual_rent, inp.maintenance_percent)
    void_loss = pct_of(annual_rent, inp.void_percent)
    other = inp.other_costs * TWELVE
    operating = management + inp.insurance_cost + maintenance + void_loss + other
    noi = annual_rent - operating
    annual_cashflow = noi - annual_mortgage

    ltv = HUNDRED - inp.deposit_percent
    return BuyToLetResult(
        deposit=money(deposit),
        mortgage_amount=money(mortgage),
        annual_rent=money(annual_rent),
        monthly_mortgage=money(monthly_mortgage),
        annual_mortgage=money(annual_mortgage),
        repayment_monthly_payment=money(monthly_payment(mortgage, inp.interest_rate, inp.mortgage_term)),
        annual_management=money(management),
        annual_maintenance=money(maintenance),
        annual_void_loss=money(void_loss),
        annual_other_costs=money(other),
        total_operating_costs=money(operating),
        net_operating_income=money(noi),
        gross_yield=ratio(gross_yield(annual_rent, inp.purchase_price)),
        net_yield=ratio(as_pct(noi, inp.purchase_price)),
        monthly_cashflow=money(annual_cashflow / TWELVE),
        annual_cashflow=money(annual_cashflow),
        cash_on_cash=ratio(cash_on_cash(annual_cashflow, deposit)),
        dscr=ratio(dscr(noi, annual_mortgage)),
        icr=ratio(safe_div(annual_rent, pct_of(mortgage, ICR_STRESS_RATE))),
        ltv=ratio(ltv),
        rate_band=band_for(BTL_RATE_BANDS, ltv),
    )


# ---- Rent to rent ----

def rent_to_rent_status(monthly_profit: Decimal) -> str:
    if monthly_profit >= 500:
        return "Strong Profit"
    if monthly_profit > 0:
        return "Marginal"
    return "Loss Making"


def evaluate_rent_to_rent(inp: RentToRentInput) -> RentToRentResult:
    """Profit from leasing a property and sub-letting it by the room.

    The operator keeps earning during rent-free months, so those months count
    toward profit over the lease without the landlord rent.
    """
    gross_income = inp.number_of_rooms * inp.average_rent_per_room
    effective_income = pct_of(gross_income, inp.occupancy_rate)

    operating = (
        inp.utilities_bills + inp.wifi_tv + inp.cleaning_maintenance
        + inp.insurance + inp.management_fee + inp.other_costs
    )
    monthly_costs = inp.monthly_rent_to_landlord + operating
    monthly_profit = effective_income - monthly_costs
    annual_profit = monthly_profit * TWELVE

    lease_months = inp.lease_length_years * TWELVE
    paying_months = lease_months - inp.rent_free_months
    lease_value = inp.monthly_rent_to_landlord * paying_months + inp.deposit_to_landlord
    profit_over_lease = (
        inp.rent_free_months * (effective_income - operating) + paying_months * monthly_profit
    )

    setup = (
        inp.furniture_package + inp.decor_refurb + inp.legal_fees
        + inp.other_setup_costs + inp.deposit_to_landlord
    )

    return RentToRentResult(
        gross_monthly_income=money(gross_income),
        effective_monthly_income=money(effective_income),
        monthly_operating_costs=money(operating),
        total_monthly_costs=money(monthly_costs),
        monthly_profit=money(monthly_profit),
        annual_profit=money(annual_profit),
        total_lease_months=ratio(lease_months),
        paying_months=ratio(paying_months),
        total_lease_value=money(lease_value),
        profit_over_lease=money(profit_over_lease),
        total_setup_costs=money(setup),
        profit_margin=ratio(as_pct(monthly_profit, effective_income)),
        roi_on_setup=ratio(as_pct(annual_profit, setup)),
        payback_months=ratio(safe_div(setup, monthly_profit)),
        break_even_occupancy=ratio(as_pct(monthly_costs, gross_income)),
        cashflow_per_room=money(safe_div(monthly_profit, inp.number_of_rooms)),
        profit_status=rent_to_rent_status(monthly_profit),
    )


# ---- Section 24 ----

CORPORATION_TAX_SMALL = Decimal("0.19")
CORPORATION_TAX_MAIN = Decimal("0.25")
SMALL_PROFITS_LIMIT = Decimal("50000")
DIVIDEND_ALLOWANCE = Decimal("500")

DIVIDEND_RATES: dict[MarginalRate, Decimal] = {
    MarginalRate.BASIC: Decimal("0.0875"),
    MarginalRate.HIGHER: Decimal("0.3375"),
    MarginalRate.ADDITIONAL: Decimal("0.3935"),
}


def evaluate_section_24(inp: Section24Input) -> Section24Result:
    """Personal tax before and after the finance-cost restriction, against a
    limited company that pays corporation tax and extracts everything as
    dividends."""
    rate = pct(Decimal(inp.tax_band.value))
    rent, interest, expenses = inp.annual_rent, inp.mortgage_interest, inp.other_expenses

    old_profit = rent - interest - expenses
    old_tax = max(ZERO, old_profit) * rate
    old_net = old_profit - old_tax

    new_profit = rent - expenses
    new_tax_due = max(ZERO, new_profit) * rate
    credit = interest * SECTION_24_CREDIT_RATE
    new_tax = max(ZERO, new_tax_due - credit)
    new_net = rent - expenses - interest - new_tax

    additional = new_tax - old_tax

    ltd_profit = old_profit
    corp_rate = CORPORATION_TAX_MAIN if ltd_profit > SMALL_PROFITS_LIMIT else CORPORATION_TAX_SMALL
    corp_tax = max(ZERO, ltd_profit * corp_rate)
    retained = ltd_profit - corp_tax
    dividend_tax = max(ZERO, retained - DIVIDEND_ALLOWANCE) * DIVIDEND_RATES[inp.tax_band]
    ltd_net = retained - dividend_tax

    combined = income_tax(max(ZERO, new_profit), inp.other_income)

    return Section24Result(
        old_net_profit=money(old_profit),
        old_tax_due=money(old_tax),
        old_net_income=money(old_net),
        new_net_profit=money(new_profit),
        new_tax_due=money(new_tax_due),
        tax_credit=money(credit),
        new_actual_tax=money(new_tax),
        new_net_income=money(new_net),
        additional_tax=money(additional),
        percentage_increase=ratio(as_pct(additional, old_tax)),
        income_reduction=money(old_net - new_net),
        ltd_profit=money(ltd_profit),
        corporation_tax=money(corp_tax),
        ltd_retained_profit=money(retained),
        dividend_tax=money(dividend_tax),
        ltd_net_after_dividend=money(ltd_net),
        personal_effective_rate=ratio(as_pct(new_tax, rent - expenses - interest)),
        ltd_effective_rate=ratio(as_pct(corp_tax + dividend_tax, ltd_profit)),
        ltd_saving=money(ltd_net - new_net),
        total_income_tax=money(max(ZERO, combined.tax - credit)),
        marginal_rate_on_total=combined.marginal_rate,
    )


# ---- Stamp duty ----

ADDITIONAL_SURCHARGE = Decimal("0.05")
NON_RESIDENT_SURCHARGE = Decimal("0.02")
ATED_THRESHOLD = Decimal("500000")


def _rounded(rows: tuple[BandCharge, ...]) -> tuple[BandCharge, ...]:
    return tuple(
        dataclasses.replace(row, taxable=money(row.taxable), rate=ratio(row.rate), tax=money(row.tax))
        for row in rows
    )


def evaluate_stamp_duty(inp: StampDutyInput) -> StampDutyResult:
    """SDLT in England and Northern Ireland at the rates in force from October 2024."""
    price = inp.purchase_price
    surcharge = ZERO
    warnings: list[str] = []

    if inp.property_type is not PropertyUse.RESIDENTIAL:
        bands = NON_RESIDENTIAL_BANDS
        explanation = "Non-residential/mixed use SDLT rates apply"
    elif inp.buyer_type is BuyerType.FIRST_TIME:
        if price <= FIRST_TIME_BUYER_LIMIT:
            bands = FIRST_TIME_BUYER_BANDS
            explanation = "First-time buyer relief applies"
        else:
            bands = STANDARD_BANDS
            explanation = "Property over £625k - standard rates apply"
            warnings.append("First-time buyer relief not available for properties over £625,000")
    elif inp.buyer_type is BuyerType.HOME_MOVER:
        bands = STANDARD_BANDS
        explanation = "Standard residential SDLT rates"
    elif inp.buyer_type is BuyerType.ADDITIONAL:
        bands = STANDARD_BANDS
        surcharge = ADDITIONAL_SURCHARGE
        explanation = "Additional property 5% surcharge applies (from Oct 2024)"
        warnings.append("This is your second+ property - 5% surcharge applies")
    elif inp.buyer_type is BuyerType.NON_RESIDENT:
        bands = STANDARD_BANDS
        surcharge = ADDITIONAL_SURCHARGE + NON_RESIDENT_SURCHARGE
        explanation = "Additional property 5% + non-resident 2% surcharges apply"
        warnings.append("Non-UK resident additional 2% surcharge applies")
    else:
        bands = STANDARD_BANDS
        surcharge = ADDITIONAL_SURCHARGE
        if price > ATED_THRESHOLD:
            warnings.append("For properties over £500k purchased by companies, consider ATED implications")
        explanation = "Company purchase - 5% surcharge applies"

    tax, rows = banded_tax(price, bands, surcharge)
    return StampDutyResult(
        price=money(price),
        tax=money(tax),
        breakdown=_rounded(rows),
        effective_rate=ratio(as_pct(tax, price)),
        surcharge=ratio(surcharge * HUNDRED),
        explanation=explanation,
        warnings=tuple(warnings),
    )


# ---- Rental yield ----

WEEKS_PER_MONTH = Decimal("4.33")


def evaluate_rental_yield(inp: RentalYieldInput) -> RentalYieldResult:
    """Gross yield on price; net yield after running costs and voids on
    price plus purchase costs."""
    annual_rent = inp.monthly_rent * TWELVE
    investment = inp.purchase_price + inp.purchase_costs
    void_cost = inp.monthly_rent / WEEKS_PER_MONTH * inp.void_weeks
    effective_rent = annual_rent - void_cost
    noi = effective_rent - inp.annual_expenses

    return RentalYieldResult(
        annual_rent=money(annual_rent),
        total_investment=money(investment),
        void_cost=money(void_cost),
        effective_rent=money(effective_rent),
        net_operating_income=money(noi),
        gross_yield=ratio(gross_yield(annual_rent, inp.purchase_price)),
        net_yield=ratio(net_yield(annual_rent, inp.annual_expenses + void_cost, investment)),
        cap_rate=ratio(cap_rate(noi, inp.purchase_price)),
    )
