from decimal import Decimal

from propcalc.engine.formulas import money
from propcalc.engine.leasehold import (
    evaluate_ground_rent,
    evaluate_lease_extension,
    evaluate_marriage_value,
    evaluate_service_charge,
    ground_rent_risk,
    professional_fees,
)
from propcalc.engine.relativity import years_purchase
from propcalc.models.leasehold import (
    ChargeShare,
    Escalation,
    GroundRentInput,
    GroundRentRisk,
    LeaseExtensionInput,
    MarriageValueInput,
    RentProjection,
    ServiceChargeInput,
)


class TestGroundRent:
    def test_default_fixed_rent(self):
        """£300 fixed ground rent, 90 years left on a £350K flat."""
        result = evaluate_ground_rent(GroundRentInput())
        assert result.current_rent == Decimal("300.00")
        assert result.rent_in_10_years == Decimal("300.00")
        assert result.rent_in_25_years == Decimal("300.00")
        assert result.rent_in_50_years == Decimal("300.00")
        assert result.total_over_25_years == Decimal("7500.00")
        assert result.total_over_lease == Decimal("27000.00")
        assert result.rent_as_percentage == Decimal("0.0857")
        assert result.risk_level is GroundRentRisk.MEDIUM

    def test_capitalised_at_five_percent(self):
        result = evaluate_ground_rent(GroundRentInput())
        expected = money(Decimal("300") * years_purchase(Decimal("0.05"), Decimal("90")))
        assert abs(result.capitalised_value - expected) <= Decimal("0.01")

    def test_projection_rows(self):
        result = evaluate_ground_rent(GroundRentInput())
        assert len(result.projections) == 51
        assert result.projections[0] == RentProjection(0, Decimal("300.00"))
        assert result.projections[-1].year == 50

    def test_doubling_every_25_years(self):
        result = evaluate_ground_rent(GroundRentInput.from_raw({"escalationType": "doubling"}))
        assert result.rent_in_10_years == Decimal("300.00")
        assert result.rent_in_25_years == Decimal("600.00")
        assert result.rent_in_50_years == Decimal("1200.00")
        assert result.risk_level is GroundRentRisk.ONEROUS

    def test_percentage_reviews(self):
        inp = GroundRentInput.from_raw({
            "escalationType": "percentage", "escalationRate": "10", "escalationPeriod": "5",
        })
        result = evaluate_ground_rent(inp)
        assert result.rent_in_10_years == Decimal("363.00")
        assert result.rent_in_25_years == Decimal("483.15")
        assert result.rent_in_50_years == Decimal("778.12")
        assert result.risk_level is GroundRentRisk.HIGH

    def test_zero_review_period_never_escalates(self):
        inp = GroundRentInput.from_raw({"escalationType": "rpi", "escalationPeriod": "0"})
        result = evaluate_ground_rent(inp)
        assert result.rent_in_50_years == Decimal("300.00")

    def test_short_lease_holds_current_rent_beyond_term(self):
        inp = GroundRentInput.from_raw({"yearsRemaining": "10", "escalationType": "doubling", "escalationPeriod": "5"})
        result = evaluate_ground_rent(inp)
        assert len(result.projections) == 11
        assert result.rent_in_10_years == Decimal("1200.00")
        assert result.rent_in_25_years == Decimal("300.00")
        # years 0-4 at 300 and 5-9 at 600
        assert result.total_over_lease == Decimal("4500.00")

    def test_risk_levels(self):
        assert ground_rent_risk(Escalation.FIXED, Decimal("50"), Decimal("50")) is GroundRentRisk.LOW
        assert ground_rent_risk(Escalation.FIXED, Decimal("150"), Decimal("150")) is GroundRentRisk.MEDIUM
        assert ground_rent_risk(Escalation.RPI, Decimal("50"), Decimal("100")) is GroundRentRisk.MEDIUM
        assert ground_rent_risk(Escalation.RPI, Decimal("260"), Decimal("400")) is GroundRentRisk.HIGH
        assert ground_rent_risk(Escalation.FIXED, Decimal("600"), Decimal("600")) is GroundRentRisk.ONEROUS


class TestLeaseExtension:
    def test_default_over_80_years(self):
        """82 years left: no marriage value, premium is the capitalised ground rent."""
        result = evaluate_lease_extension(LeaseExtensionInput())
        assert result.current_relativity == Decimal("88")
        assert result.extended_relativity == Decimal("99")
        assert result.current_lease_value == Decimal("308000.00")
        assert result.extended_lease_value == Decimal("346500.00")
        assert result.marriage_value == Decimal("0.00")
        assert result.premium == result.diminution == result.capitalised_ground_rent
        assert result.value_uplift == Decimal("38500.00")
        assert result.years_to_80 == Decimal("2.0000")
        assert result.is_marriage_value_zone is False
        assert result.is_critical is False

    def test_professional_costs(self):
        result = evaluate_lease_extension(LeaseExtensionInput())
        assert result.surveyor_fees == Decimal("1500.00")
        assert result.legal_fees == Decimal("1500.00")
        assert result.freeholder_costs == Decimal("1000.00")
        assert result.total_professional_costs == Decimal("4000.00")
        assert result.total_cost == result.premium + Decimal("4000.00")
        assert result.net_gain == result.value_uplift - result.total_cost

    def test_no_ground_rent(self):
        result = evaluate_lease_extension(LeaseExtensionInput.from_raw({"groundRent": "0"}))
        assert result.premium == Decimal("0.00")
        assert result.total_cost == Decimal("4000.00")
        assert result.net_gain == Decimal("34500.00")
        assert result.roi == Decimal("862.5000")

    def test_marriage_value_under_80(self):
        result = evaluate_lease_extension(LeaseExtensionInput.from_raw({
            "currentLeaseYears": "72", "groundRent": "0",
        }))
        assert result.current_relativity == Decimal("75")
        assert result.current_lease_value == Decimal("262500.00")
        assert result.marriage_value == Decimal("42000.00")
        assert result.premium == Decimal("42000.00")
        assert result.total_cost == Decimal("46000.00")
        assert result.net_gain == Decimal("38000.00")
        assert result.roi == Decimal("82.6087")
        assert result.years_to_80 == Decimal("-8.0000")
        assert result.is_marriage_value_zone is True
        assert result.is_critical is False

    def test_related_parties_skip_marriage_value(self):
        result = evaluate_lease_extension(LeaseExtensionInput.from_raw({
            "currentLeaseYears": "65", "relatedParties": "yes",
        }))
        assert result.marriage_value == Decimal("0.00")
        assert result.is_critical is True

    def test_fees_scale_with_value(self):
        surveyor, legal, freeholder = professional_fees(Decimal("1000000"))
        assert (surveyor, legal, freeholder) == (Decimal("3000"), Decimal("2000"), Decimal("2000"))


class TestMarriageValue:
    def test_default_72_year_lease(self):
        """£400K freehold value, 72 years left, extended by 90."""
        result = evaluate_marriage_value(MarriageValueInput())
        assert result.new_lease_years == Decimal("162")
        assert result.current_lease_relativity == Decimal("83.8000")
        assert result.extended_lease_relativity == Decimal("99.5000")
        assert result.current_lease_value == Decimal("335200.00")
        assert result.extended_lease_value == Decimal("398000.00")
        assert result.value_uplift == Decimal("62800.00")
        assert result.marriage_value_total == Decimal("62800.00")
        assert result.landlord_marriage_share == Decimal("31400.00")
        assert result.is_under_80_years is True
        assert result.years_until_80 == Decimal("8")

    def test_premium_components(self):
        result = evaluate_marriage_value(MarriageValueInput())
        assert result.capitalised_ground_rent > 0
        assert result.present_value_reversion > 0
        parts = result.capitalised_ground_rent + result.present_value_reversion + result.landlord_marriage_share
        assert abs(result.total_premium - parts) <= Decimal("0.01")
        assert abs(result.value_gain_to_leaseholder - (result.value_uplift - result.total_premium)) <= Decimal("0.01")

    def test_over_80_has_no_marriage_value(self):
        result = evaluate_marriage_value(MarriageValueInput.from_raw({"currentLeaseYears": "85"}))
        assert result.current_lease_relativity == Decimal("95.0000")
        assert result.marriage_value_total == Decimal("0.00")
        assert result.landlord_marriage_share == Decimal("0.00")
        assert result.is_under_80_years is False
        assert result.years_until_80 == 0

    def test_blank_rates_fall_back(self):
        assert MarriageValueInput.from_raw({"deferment_rate": "", "extensionYears": "0"}) == MarriageValueInput()


class TestServiceCharge:
    def test_default_building(self):
        result = evaluate_service_charge(ServiceChargeInput())
        assert result.total_building_costs == Decimal("45000.00")
        assert result.your_annual_charge == Decimal("3748.50")
        assert result.your_monthly_charge == Decimal("312.38")
        assert result.your_quarterly_charge == Decimal("937.13")
        assert result.your_share_percent == Decimal("8.3300")
        assert result.reserve_percentage == Decimal("33.3333")
        assert result.average_cost_per_unit == Decimal("3750.00")

    def test_breakdown(self):
        result = evaluate_service_charge(ServiceChargeInput())
        assert len(result.breakdown) == 8
        assert result.breakdown[0] == ChargeShare("insurance", Decimal("15000.00"), Decimal("1249.50"))
        assert result.breakdown[-1] == ChargeShare("other", Decimal("0.00"), Decimal("0.00"))

    def test_empty_building(self):
        raw = {name: "0" for name in ServiceChargeInput.field_defaults()}
        result = evaluate_service_charge(ServiceChargeInput.from_raw(raw))
        assert result.total_building_costs == Decimal("0.00")
        assert result.reserve_percentage == Decimal("0.0000")
        assert result.average_cost_per_unit == Decimal("0.00")
