from decimal import Decimal

from propcalc.engine.debt import (
    annualised_cost_rate,
    day_one_net_loan,
    effective_annual_rate,
    interest_cover,
    interest_only_payment,
    loan_from_ltgdv,
    loan_to_value,
    max_loan_from_icr,
    monthly_payment,
    repayment_schedule,
    retained_interest,
    rolled_balance,
    rolled_interest,
    stressed_interest_cover,
)
from propcalc.engine.formulas import money, ratio


class TestMortgagePayments:
    def test_repayment_mortgage(self):
        """£100K over 25 years at 6%."""
        assert money(monthly_payment(Decimal("100000"), Decimal("6"), 25)) == Decimal("644.30")

    def test_zero_rate_is_straight_line(self):
        assert monthly_payment(Decimal("360000"), Decimal("0"), 30) == Decimal("1000")

    def test_zero_principal(self):
        assert monthly_payment(Decimal("0"), Decimal("6"), 25) == Decimal("0")

    def test_interest_only(self):
        assert interest_only_payment(Decimal("150000"), Decimal("6")) == Decimal("750")

    def test_ltv(self):
        assert loan_to_value(Decimal("150000"), Decimal("200000")) == Decimal("75")
        assert loan_to_value(Decimal("150000"), Decimal("0")) == Decimal("0")


class TestRepaymentSchedule:
    def test_partial_schedule(self):
        rows = repayment_schedule(Decimal("120000"), Decimal("0"), 10, months=12)
        assert len(rows) == 12
        assert rows[0].capital == Decimal("1000.00")
        assert rows[-1].balance == Decimal("108000.00")

    def test_full_term_clears_balance(self):
        rows = repayment_schedule(Decimal("120000"), Decimal("0"), 10)
        assert len(rows) == 120
        assert rows[-1].balance == Decimal("0.00")

    def test_first_month_mostly_interest(self):
        rows = repayment_schedule(Decimal("100000"), Decimal("6"), 25, months=1)
        assert rows[0].interest == Decimal("500.00")
        assert rows[0].capital == Decimal("144.30")


class TestInterestCover:
    def test_icr(self):
        assert interest_cover(Decimal("14400"), Decimal("9600")) == Decimal("150")

    def test_stressed_icr_default_rate(self):
        # 5.5% of 200,000 = 11,000
        assert interest_cover(Decimal("16500"), Decimal("11000")) == Decimal("150")
        assert stressed_interest_cover(Decimal("16500"), Decimal("200000")) == Decimal("150")

    def test_max_loan_from_icr(self):
        loan = max_loan_from_icr(Decimal("14400"), Decimal("5.5"), Decimal("125"))
        assert money(loan) == Decimal("209454.55")

    def test_max_loan_guards_zero_inputs(self):
        assert max_loan_from_icr(Decimal("14400"), Decimal("5.5"), Decimal("0")) == Decimal("0")
        assert max_loan_from_icr(Decimal("14400"), Decimal("0"), Decimal("125")) == Decimal("0")


class TestBridging:
    def test_retained_interest_is_flat(self):
        assert retained_interest(Decimal("100000"), Decimal("0.75"), 12) == Decimal("9000")

    def test_rolled_interest_compounds(self):
        assert rolled_balance(Decimal("100000"), Decimal("1"), 2) == Decimal("102010")

    def test_part_month_rolls_a_full_month(self):
        assert rolled_interest(Decimal("100000"), Decimal("1"), Decimal("1.5")) == Decimal("2010")

    def test_day_one_net_loan(self):
        net = day_one_net_loan(
            Decimal("100000"), Decimal("2"), Decimal("12"), Decimal("0.75"), Decimal("1500"), Decimal("500")
        )
        assert net == Decimal("87000")

    def test_effective_annual_rate(self):
        assert ratio(effective_annual_rate(Decimal("1"))) == Decimal("12.6825")

    def test_annualised_cost_rate(self):
        assert annualised_cost_rate(Decimal("12000"), Decimal("100000"), Decimal("12")) == Decimal("12")
        assert annualised_cost_rate(Decimal("12000"), Decimal("100000"), Decimal("0")) == Decimal("0")

    def test_loan_from_ltgdv(self):
        assert loan_from_ltgdv(Decimal("1000000"), Decimal("70")) == Decimal("700000")
