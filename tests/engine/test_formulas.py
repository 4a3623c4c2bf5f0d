from decimal import Decimal

from propcalc.engine.formulas import (
    MAX_GROWTH,
    as_pct,
    build_cost_per_sqft,
    compound_growth,
    development_finance_interest,
    development_total_costs,
    fire_safety_upgrade,
    gdv_from_units,
    growth_factor,
    gross_yield,
    hmo_gross_rent,
    hmo_licensing_fee,
    hmo_operating_costs,
    money,
    net_yield,
    pct_of,
    present_value,
    profit_on_cost,
    profit_on_gdv,
    ratio,
    refinance_risk,
    residual_land_value,
    room_profitability,
    round_to,
    safe_div,
    stress_test,
    true_net_yield,
    void_risk_score,
    whole,
    years_purchase,
)


class TestSafeDivision:
    def test_divides(self):
        assert safe_div(Decimal("1"), Decimal("4")) == Decimal("0.25")

    def test_zero_and_negative_denominators(self):
        assert safe_div(Decimal("1"), Decimal("0")) == Decimal("0")
        assert safe_div(Decimal("1"), Decimal("-1")) == Decimal("0")
        assert as_pct(Decimal("5"), Decimal("0")) == Decimal("0")


class TestRounding:
    def test_money_half_up(self):
        assert money(Decimal("2.345")) == Decimal("2.35")
        assert str(money(Decimal("3600"))) == "3600.00"

    def test_ratio(self):
        assert ratio(Decimal("100") / Decimal("15")) == Decimal("6.6667")

    def test_whole(self):
        assert whole(Decimal("2.5")) == Decimal("3")
        assert whole(Decimal("2.49")) == Decimal("2")

    def test_pct_of(self):
        assert pct_of(Decimal("200"), Decimal("15")) == Decimal("30")


class TestYields:
    def test_gross_yield(self):
        assert gross_yield(Decimal("12000"), Decimal("200000")) == Decimal("6")

    def test_net_yield(self):
        assert net_yield(Decimal("12000"), Decimal("2000"), Decimal("200000")) == Decimal("5")

    def test_true_net_yield(self):
        # 12000 rent, 10% voids -> 10800; 10% management + 5% maintenance -> 9180; less 180 insurance
        result = true_net_yield(
            Decimal("12000"), Decimal("0.10"), Decimal("0.10"), Decimal("0.05"),
            Decimal("180"), Decimal("0"), Decimal("200000"),
        )
        assert result == Decimal("4.5")

    def test_years_purchase(self):
        assert years_purchase(Decimal("5")) == Decimal("20")
        assert years_purchase(Decimal("0")) == Decimal("0")


class TestDevelopment:
    def test_profit_on_cost_and_gdv(self):
        assert profit_on_cost(Decimal("1200"), Decimal("1000")) == Decimal("20")
        assert ratio(profit_on_gdv(Decimal("1200"), Decimal("1000"))) == Decimal("16.6667")

    def test_residual_land_value(self):
        rlv = residual_land_value(
            gdv=Decimal("1000000"),
            build_cost=Decimal("400000"),
            professional_fees=Decimal("0.10"),
            contingency=Decimal("0.05"),
            finance_cost=Decimal("30000"),
            sales_costs=Decimal("0.02"),
            target_profit=Decimal("0.20"),
        )
        # 1,000,000 - 400,000 - 40,000 - 20,000 - 30,000 - 20,000 - 200,000
        assert rlv == Decimal("290000")

    def test_gdv_from_units(self):
        units = [(Decimal("850"), Decimal("400")), (Decimal("550"), Decimal("500"))]
        assert gdv_from_units(units) == Decimal("615000")
        assert gdv_from_units([]) == Decimal("0")

    def test_total_costs(self):
        costs = development_total_costs(
            land_cost=Decimal("500000"),
            build_cost=Decimal("612000"),
            professional_fees=Decimal("0.10"),
            contingency=Decimal("0.075"),
            finance_cost=Decimal("50000"),
        )
        # 500,000 + 612,000 + 61,200 + 45,900 + 50,000
        assert costs == Decimal("1269100")

    def test_build_cost_per_sqft(self):
        assert build_cost_per_sqft(Decimal("612000"), Decimal("3400")) == Decimal("180")
        assert build_cost_per_sqft(Decimal("612000"), Decimal("0")) == Decimal("0")

    def test_finance_interest(self):
        # 1% a month over two months compounds to 2.01%; build is half drawn on average
        interest = development_finance_interest(
            Decimal("100000"), Decimal("200000"), Decimal("1"), Decimal("2")
        )
        assert interest == Decimal("4020")

    def test_finance_interest_no_term(self):
        assert development_finance_interest(
            Decimal("100000"), Decimal("200000"), Decimal("1"), Decimal("0")
        ) == Decimal("0")

    def test_finance_interest_is_capped(self):
        huge = Decimal("9" * 40)
        interest = development_finance_interest(Decimal("1"), Decimal("0"), huge, huge)
        assert interest == MAX_GROWTH - 1


class TestHmoCosts:
    def test_gross_rent(self):
        assert hmo_gross_rent([Decimal("600"), Decimal("650")]) == Decimal("15000")

    def test_operating_costs(self):
        costs = hmo_operating_costs(
            council_tax=Decimal("2000"),
            utilities=Decimal("3000"),
            broadband=Decimal("500"),
            cleaning_weekly=Decimal("50"),
            insurance=Decimal("600"),
            management=Decimal("0.10"),
            maintenance=Decimal("0.05"),
            void_allowance=Decimal("0.05"),
            gross_rent=Decimal("40000"),
        )
        # 6100 fixed + 2600 cleaning + 8000 on rent
        assert costs == Decimal("16700")

    def test_room_profitability(self):
        assert room_profitability(Decimal("650"), Decimal("3000")) == Decimal("4800")
        assert room_profitability(Decimal("200"), Decimal("3000")) == Decimal("-600")

    def test_licensing_fee(self):
        assert hmo_licensing_fee(5) == Decimal("1150")

    def test_fire_safety_upgrade_from_scratch(self):
        assert fire_safety_upgrade(3, 5, False, False, False) == Decimal("6050")

    def test_fire_safety_upgrade_compliant_two_storey(self):
        assert fire_safety_upgrade(2, 5, True, True, True) == Decimal("0")


class TestRisk:
    def test_stress_test(self):
        current, stressed, survives = stress_test(
            Decimal("12000"), Decimal("150000"), Decimal("5"), Decimal("7"), Decimal("2000")
        )
        assert current == Decimal("2500")
        assert stressed == Decimal("-500")
        assert survives is False

    def test_void_risk_score(self):
        assert void_risk_score("flat", "prime", "good") == Decimal("20")

    def test_void_risk_unknown_rows_score_worst(self):
        assert ratio(void_risk_score("castle", "moon", "ruin")) == Decimal("33.3333")

    def test_refinance_risk(self):
        assert refinance_risk(Decimal("90"), Decimal("100000"), Decimal("85000"), Decimal("4")) == 100
        assert refinance_risk(Decimal("70"), Decimal("200000"), Decimal("100000"), Decimal("12")) == 0
        assert refinance_risk(Decimal("70"), Decimal("100000"), Decimal("78000"), Decimal("9")) == 35


class TestGrowth:
    def test_compound_growth(self):
        assert compound_growth(Decimal("100000"), Decimal("10"), 2) == Decimal("121000")

    def test_present_value(self):
        assert present_value(Decimal("110000"), Decimal("10"), 1) == Decimal("100000")

    def test_round_to(self):
        assert round_to(Decimal("1234"), Decimal("100")) == Decimal("1200")
        assert round_to(Decimal("1234"), Decimal("0")) == Decimal("1234")

    def test_growth_factor(self):
        assert growth_factor(Decimal("0.05"), Decimal("2")) == Decimal("1.1025")

    def test_growth_factor_is_capped(self):
        assert growth_factor(Decimal("1"), Decimal("1000000")) == MAX_GROWTH
        assert growth_factor(Decimal("9" * 40), Decimal("9" * 40)) == MAX_GROWTH
