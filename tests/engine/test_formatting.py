from decimal import Decimal

from propcalc.formatting import (
    compact_currency,
    currency,
    format_months,
    multiple,
    percent,
    plain_number,
    sqft_to_sqm,
    sqm_to_sqft,
)


class TestCurrency:
    def test_whole_pounds(self):
        assert currency(Decimal("1234567.4")) == "£1,234,567"

    def test_negative(self):
        assert currency(Decimal("-1234")) == "-£1,234"

    def test_compact(self):
        assert compact_currency(Decimal("1230000")) == "£1.23m"
        assert compact_currency(Decimal("450000")) == "£450k"
        assert compact_currency(Decimal("99999")) == "£99,999"


class TestNumbers:
    def test_percent(self):
        assert percent(Decimal("6.6667"), 2) == "6.67%"
        assert percent(Decimal("15")) == "15.0%"

    def test_multiple(self):
        assert multiple(Decimal("1.25")) == "1.25x"

    def test_area_conversion(self):
        assert sqm_to_sqft(Decimal("100")) == Decimal("1076")
        assert sqft_to_sqm(Decimal("1076.4")) == Decimal("100")

    def test_plain_number(self):
        assert plain_number(Decimal("12.50")) == "12.5"
        assert plain_number(Decimal("820")) == "820"


class TestMonths:
    def test_months(self):
        assert format_months(1) == "1 month"
        assert format_months(6) == "6 months"
        assert format_months(12) == "1 year"
        assert format_months(24) == "2 years"
        assert format_months(18) == "1y 6m"
