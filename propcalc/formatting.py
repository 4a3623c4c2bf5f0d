"""Display formatting for reports and templated summaries (en-GB conventions)."""

from decimal import Decimal

from propcalc.engine.formulas import SQFT_PER_SQM, safe_div, whole


def currency(value: Decimal) -> str:
    """£1,234,567 with no pence; negatives as -£1,234."""
    amount = whole(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}£{abs(amount):,.0f}"


def compact_currency(value: Decimal) -> str:
    """£1.23m, £450k, or the full amount below £100k."""
    amount = Decimal(value)
    if amount >= 1_000_000:
        return f"£{amount / 1_000_000:.2f}m"
    if amount >= 100_000:
        return f"£{whole(amount / 1_000):.0f}k"
    return currency(amount)


def percent(value: Decimal, places: int = 1) -> str:
    return f"{Decimal(value):.{places}f}%"


def multiple(value: Decimal, places: int = 2) -> str:
    return f"{Decimal(value):.{places}f}x"


def sqm_to_sqft(sqm: Decimal) -> Decimal:
    return whole(sqm * SQFT_PER_SQM)


def sqft_to_sqm(sqft: Decimal) -> Decimal:
    return whole(safe_div(sqft, SQFT_PER_SQM))


def format_months(months: int) -> str:
    if months == 1:
        return "1 month"
    if months < 12:
        return f"{months} months"
    years, remainder = divmod(months, 12)
    if remainder == 0:
        return "1 year" if years == 1 else f"{years} years"
    return f"{years}y {remainder}m"


def plain_number(value: Decimal) -> str:
    """Echo a form number the way it was typed: 820 stays 820, 12.50 becomes 12.5."""
    text = f"{Decimal(value):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
