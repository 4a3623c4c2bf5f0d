"""UK property taxes: SDLT, CGT, income tax and the Section 24 interest restriction.

Pure functions: dataclasses in, dataclasses out. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal

from propcalc.engine.formulas import ZERO, safe_div, whole

PERSONAL_ALLOWANCE = Decimal("12570")
ALLOWANCE_TAPER_THRESHOLD = Decimal("100000")
BASIC_BAND = Decimal("37700")
HIGHER_BAND = Decimal("125140")
CGT_ANNUAL_EXEMPTION = Decimal("3000")
SECTION_24_CREDIT_RATE = Decimal("0.20")


@dataclass(frozen=True)
class TaxBand:
    threshold: Decimal
    rate: Decimal  # fraction, e.g. 0.05


@dataclass(frozen=True)
class BandCharge:
    band: str
    taxable: Decimal
    rate: Decimal  # percentage including any surcharge
    tax: Decimal


@dataclass(frozen=True)
class IncomeTax:
    tax: Decimal
    effective_rate: Decimal
    marginal_rate: Decimal


@dataclass(frozen=True)
class Section24Impact:
    old_tax: Decimal
    new_tax: Decimal
    additional_tax: Decimal


STANDARD_BANDS: tuple[TaxBand, ...] = (
    TaxBand(Decimal("0"), Decimal("0")),
    TaxBand(Decimal("250000"), Decimal("0.05")),
    TaxBand(Decimal("925000"), Decimal("0.10")),
    TaxBand(Decimal("1500000"), Decimal("0.12")),
)

FIRST_TIME_BUYER_BANDS: tuple[TaxBand, ...] = (
    TaxBand(Decimal("0"), Decimal("0")),
    TaxBand(Decimal("425000"), Decimal("0.05")),
)
FIRST_TIME_BUYER_LIMIT = Decimal("625000")

NON_RESIDENTIAL_BANDS: tuple[TaxBand, ...] = (
    TaxBand(Decimal("0"), Decimal("0")),
    TaxBand(Decimal("150000"), Decimal("0.02")),
    TaxBand(Decimal("250000"), Decimal("0.05")),
)


def _band_label(lower: Decimal, upper: Decimal | None) -> str:
    if upper is None:
        return f"£{lower:,.0f}+"
    return f"£{lower:,.0f} - £{upper:,.0f}"


def banded_tax(
    price: Decimal,
    bands: tuple[TaxBand, ...],
    surcharge: Decimal = ZERO,
) -> tuple[Decimal, tuple[BandCharge, ...]]:
    """Slice ``price`` across ``bands``, adding ``surcharge`` to every band's rate.

    Returns the total tax and one BandCharge per band the price reaches.
    """
    tax = ZERO
    rows: list[BandCharge] = []
    for i, band in enumerate(bands):
        upper = bands[i + 1].threshold if i + 1 < len(bands) else None
        if price <= band.threshold:
            break
        top = price if upper is None else min(price, upper)
        taxable = top - band.threshold
        rate = band.rate + surcharge
        band_tax = taxable * rate
        tax += band_tax
        rows.append(BandCharge(
            band=_band_label(band.threshold, upper),
            taxable=taxable,
            rate=rate * 100,
            tax=band_tax,
        ))
    return tax, tuple(rows)


def sdlt_residential(purchase_price: Decimal, additional_property: bool = False) -> Decimal:
    """Residential SDLT rounded to the pound, with the legacy 3% surcharge."""
    surcharge = Decimal("0.03") if additional_property else ZERO
    tax, _ = banded_tax(purchase_price, STANDARD_BANDS, surcharge)
    return whole(tax)


def sdlt_commercial(purchase_price: Decimal) -> Decimal:
    tax, _ = banded_tax(purchase_price, NON_RESIDENTIAL_BANDS)
    return whole(tax)


def capital_gains_tax(
    gain: Decimal,
    is_residential: bool,
    is_higher_rate_taxpayer: bool,
    annual_exemption: Decimal = CGT_ANNUAL_EXEMPTION,
) -> Decimal:
    taxable_gain = max(ZERO, gain - annual_exemption)
    if is_residential:
        rate = Decimal("0.24") if is_higher_rate_taxpayer else Decimal("0.18")
    else:
        rate = Decimal("0.20") if is_higher_rate_taxpayer else Decimal("0.10")
    return taxable_gain * rate


def section_24_impact(
    rental_income: Decimal,
    mortgage_interest: Decimal,
    other_expenses: Decimal,
    marginal_rate: Decimal,
) -> Section24Impact:
    """Tax before and after finance costs stopped being deductible.

    ``marginal_rate`` is a fraction. Under the current rules interest earns a
    basic-rate credit instead of a deduction.
    """
    old_tax = (rental_income - mortgage_interest - other_expenses) * marginal_rate
    new_tax = (
        (rental_income - other_expenses) * marginal_rate
        - mortgage_interest * SECTION_24_CREDIT_RATE
    )
    return Section24Impact(
        old_tax=max(ZERO, old_tax),
        new_tax=max(ZERO, new_tax),
        additional_tax=max(ZERO, new_tax - old_tax),
    )


def income_tax(
    profit: Decimal,
    other_income: Decimal,
    personal_allowance: Decimal = PERSONAL_ALLOWANCE,
) -> IncomeTax:
    """England income tax on profit plus other income; rates as percentages."""
    total_income = profit + other_income
    allowance = personal_allowance
    if total_income > ALLOWANCE_TAPER_THRESHOLD:
        allowance = max(ZERO, personal_allowance - (total_income - ALLOWANCE_TAPER_THRESHOLD) / 2)
    taxable = max(ZERO, total_income - allowance)

    if taxable <= BASIC_BAND:
        tax = taxable * Decimal("0.2")
        marginal = Decimal("20")
    elif taxable <= HIGHER_BAND:
        tax = BASIC_BAND * Decimal("0.2") + (taxable - BASIC_BAND) * Decimal("0.4")
        marginal = Decimal("40")
    else:
        tax = (
            BASIC_BAND * Decimal("0.2")
            + (HIGHER_BAND - BASIC_BAND) * Decimal("0.4")
            + (taxable - HIGHER_BAND) * Decimal("0.45")
        )
        marginal = Decimal("45")

    return IncomeTax(
        tax=tax,
        effective_rate=safe_div(tax, total_income) * 100,
        marginal_rate=marginal,
    )
