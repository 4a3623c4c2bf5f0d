from decimal import Decimal

from propcalc.engine.commercial import blended_erv, evaluate_commercial_yield, evaluate_erv, yield_status
from propcalc.models.commercial import CommercialUse, CommercialYieldInput, ErvInput


class TestCommercialYield:
    def test_yields(self):
        """£1.5M purchase let at £100K with £5K running costs."""
        result = evaluate_commercial_yield(CommercialYieldInput())
        assert result.gross_yield == Decimal("6.6667")
        assert result.net_yield == Decimal("6.3333")
        assert result.years_purchase == Decimal("15.0000")
        assert result.net_rent == Decimal("95000.00")

    def test_void_adjusted_rent(self):
        result = evaluate_commercial_yield(CommercialYieldInput())
        # 3 void months out of 120
        assert result.effective_rent == Decimal("97500.00")
        assert result.equivalent_yield == Decimal("6.5000")

    def test_value_at_target_yield(self):
        result = evaluate_commercial_yield(CommercialYieldInput())
        assert result.value_at_target_yield == Decimal("1428571.43")
        assert result.value_difference == Decimal("-71428.57")

    def test_wault_adjustment(self):
        result = evaluate_commercial_yield(CommercialYieldInput())
        assert result.wault_factor == Decimal("0.6667")
        assert result.adjusted_value == Decimal("1499500.00")

    def test_per_sq_ft(self):
        result = evaluate_commercial_yield(CommercialYieldInput())
        assert result.monthly_rent == Decimal("8333.33")
        assert result.price_per_sq_ft == Decimal("750.00")
        assert result.rent_per_sq_ft == Decimal("50.00")
        assert result.yield_status == "Good Yield"

    def test_no_lease_remaining(self):
        result = evaluate_commercial_yield(CommercialYieldInput.from_raw({"leaseYearsRemaining": "0"}))
        assert result.effective_rent == Decimal("0.00")
        assert result.wault_factor == Decimal("0.0000")

    def test_yield_status(self):
        assert yield_status(Decimal("8")) == "High Yield"
        assert yield_status(Decimal("4.5")) == "Standard"
        assert yield_status(Decimal("3")) == "Low Yield"


class TestErv:
    def test_blend(self):
        """Comparables at £24 psf blended 70/30 with the £25 office benchmark midpoint."""
        result = evaluate_erv(ErvInput())
        assert result.net_lettable_area == Decimal("2125.0000")
        assert result.average_comp_rent == Decimal("24.00")
        assert result.estimated_erv == Decimal("24.30")

    def test_reversion(self):
        result = evaluate_erv(ErvInput())
        assert result.annual_rent_at_erv == Decimal("51637.50")
        assert result.current_annual_rent == Decimal("46750.00")
        assert result.rent_reversionary == Decimal("4887.50")
        assert result.is_under_rented is True
        assert result.erv_status == "Under-Rented"

    def test_rent_free(self):
        result = evaluate_erv(ErvInput())
        assert result.effective_rent_after_free == Decimal("23.09")
        assert result.rent_free_value == Decimal("25818.75")

    def test_benchmark_only_without_comparables(self):
        result = evaluate_erv(ErvInput.from_raw({
            "propertyType": "industrial-prime",
            "location": "prime",
            "comp1RentPsf": "0",
            "comp2RentPsf": "",
            "comp3RentPsf": "0",
            "currentRentPsf": "14",
        }))
        assert result.benchmark.low == Decimal("8")
        # midpoint 11.5 x 1.2 prime
        assert result.estimated_erv == Decimal("13.80")
        assert result.erv_status == "At Market"

    def test_unknown_use_takes_default(self):
        inp = ErvInput.from_raw({"propertyType": "car-park"})
        assert inp.property_type is CommercialUse.OFFICE_SECONDARY

    def test_blended_erv(self):
        assert blended_erv(Decimal("0"), Decimal("25")) == Decimal("25")
        assert blended_erv(Decimal("20"), Decimal("30")) == Decimal("23")
