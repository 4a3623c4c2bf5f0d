from decimal import Decimal

from propcalc.engine.formulas import ratio
from propcalc.engine.tax import (
    NON_RESIDENTIAL_BANDS,
    STANDARD_BANDS,
    banded_tax,
    capital_gains_tax,
    income_tax,
    sdlt_commercial,
    sdlt_residential,
    section_24_impact,
)


class TestStampDuty:
    def test_nil_rate_band(self):
        assert sdlt_residential(Decimal("250000")) == Decimal("0")

    def test_standard_rates(self):
        assert sdlt_residential(Decimal("300000")) == Decimal("2500")
        # 675,000 at 5% + 75,000 at 10%
        assert sdlt_residential(Decimal("1000000")) == Decimal("41250")

    def test_additional_property_surcharge(self):
        # 250,000 at 3% + 50,000 at 8%
        assert sdlt_residential(Decimal("300000"), additional_property=True) == Decimal("11500")

    def test_commercial(self):
        assert sdlt_commercial(Decimal("300000")) == Decimal("4500")
        assert sdlt_commercial(Decimal("150000")) == Decimal("0")


class TestBandedTax:
    def test_rows_per_band_reached(self):
        tax, rows = banded_tax(Decimal("300000"), STANDARD_BANDS)
        assert tax == Decimal("2500")
        assert [row.band for row in rows] == ["£0 - £250,000", "£250,000 - £925,000"]
        assert rows[1].taxable == Decimal("50000")
        assert rows[1].rate == Decimal("5")

    def test_top_band_is_open_ended(self):
        _, rows = banded_tax(Decimal("2000000"), STANDARD_BANDS)
        assert rows[-1].band == "£1,500,000+"
        assert rows[-1].taxable == Decimal("500000")

    def test_surcharge_applies_to_every_band(self):
        _, rows = banded_tax(Decimal("200000"), NON_RESIDENTIAL_BANDS, Decimal("0.02"))
        assert [row.rate for row in rows] == [Decimal("2"), Decimal("4")]


class TestCapitalGainsTax:
    def test_residential_higher_rate(self):
        assert capital_gains_tax(Decimal("53000"), True, True) == Decimal("12000")

    def test_within_exemption(self):
        assert capital_gains_tax(Decimal("2000"), True, True) == Decimal("0")

    def test_other_assets_basic_rate(self):
        assert capital_gains_tax(Decimal("13000"), False, False) == Decimal("1000")


class TestSection24:
    def test_higher_rate_landlord_pays_more(self):
        impact = section_24_impact(Decimal("20000"), Decimal("8000"), Decimal("2000"), Decimal("0.4"))
        assert impact.old_tax == Decimal("4000")
        assert impact.new_tax == Decimal("5600")
        assert impact.additional_tax == Decimal("1600")

    def test_basic_rate_landlord_unaffected(self):
        impact = section_24_impact(Decimal("20000"), Decimal("8000"), Decimal("2000"), Decimal("0.2"))
        assert impact.additional_tax == Decimal("0")


class TestIncomeTax:
    def test_basic_rate(self):
        result = income_tax(Decimal("30000"), Decimal("0"))
        assert result.tax == Decimal("3486")
        assert result.marginal_rate == Decimal("20")
        assert ratio(result.effective_rate) == Decimal("11.62")

    def test_higher_rate(self):
        result = income_tax(Decimal("20000"), Decimal("40000"))
        assert result.tax == Decimal("11432")
        assert result.marginal_rate == Decimal("40")

    def test_allowance_tapered_away(self):
        result = income_tax(Decimal("150000"), Decimal("0"))
        assert result.tax == Decimal("53703")
        assert result.marginal_rate == Decimal("45")

    def test_no_income(self):
        result = income_tax(Decimal("0"), Decimal("0"))
        assert result.tax == Decimal("0")
        assert result.effective_rate == Decimal("0")
