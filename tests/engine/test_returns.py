from decimal import Decimal

from propcalc.engine.returns import compute_irr, equity_multiple, npv, roce, roi


class TestIRR:
    def test_single_period(self):
        assert compute_irr([Decimal("-1000"), Decimal("1100")]) == Decimal("10.0000")

    def test_multi_year(self):
        # -100, then 60 twice: IRR ~13.07%
        irr = compute_irr([Decimal("-100"), Decimal("60"), Decimal("60")])
        assert Decimal("13.0") < irr < Decimal("13.1")

    def test_no_sign_change(self):
        assert compute_irr([Decimal("100"), Decimal("100")]) == Decimal("0")

    def test_too_few_flows(self):
        assert compute_irr([]) == Decimal("0")
        assert compute_irr([Decimal("-100")]) == Decimal("0")


class TestNPV:
    def test_discounts_later_flows(self):
        assert npv([Decimal("-1000"), Decimal("1100")], Decimal("10")) == Decimal("0")

    def test_zero_rate_is_plain_sum(self):
        assert npv([Decimal("-1000"), Decimal("600"), Decimal("600")], Decimal("0")) == Decimal("200")


class TestRatios:
    def test_roi(self):
        assert roi(Decimal("25000"), Decimal("100000")) == Decimal("25")

    def test_roce(self):
        assert roce(Decimal("30000"), Decimal("200000")) == Decimal("15")

    def test_equity_multiple(self):
        assert equity_multiple(Decimal("250000"), Decimal("100000")) == Decimal("2.5")
        assert equity_multiple(Decimal("250000"), Decimal("0")) == Decimal("0")


class TestNonFiniteFlows:
    def test_irr_of_unrepresentable_flows_is_zero(self):
        assert compute_irr([Decimal("-1e400"), Decimal("1e400")]) == Decimal("0")

    def test_npv_with_huge_discount_rate(self):
        assert npv([Decimal("-1000"), Decimal("1100")], Decimal("9" * 40)) == Decimal("-1000")
