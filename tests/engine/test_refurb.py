from decimal import Decimal

from propcalc.engine.refurb import (
    evaluate_epc_upgrade,
    evaluate_loft_conversion,
    evaluate_refurb_cost,
    loft_roi_label,
    rating_from_sap,
    sap_from_rating,
)
from propcalc.models.refurb import (
    EpcRating,
    EpcUpgradeInput,
    LoftConversionInput,
    LoftConversionType,
    LoftRegion,
    RefurbCostInput,
    RefurbLevel,
    RefurbRegion,
)

INSULATION_AND_BOILER = EpcUpgradeInput(loft_insulation=True, cavity_wall=True, condensing_boiler=True)


class TestEpcRatings:
    def test_sap_from_rating(self):
        assert sap_from_rating(EpcRating.E) == Decimal("46.5")
        assert sap_from_rating(EpcRating.A) == Decimal("96")

    def test_rating_from_sap(self):
        assert rating_from_sap(Decimal("92")) == EpcRating.A
        assert rating_from_sap(Decimal("76.5")) == EpcRating.C
        assert rating_from_sap(Decimal("39")) == EpcRating.E

    def test_score_between_bands_takes_lower_band(self):
        assert rating_from_sap(Decimal("80.5")) == EpcRating.C
        assert rating_from_sap(Decimal("91.5")) == EpcRating.B

    def test_below_scale(self):
        assert rating_from_sap(Decimal("0")) == EpcRating.G


class TestEpcUpgrade:
    def test_nothing_selected(self):
        result = evaluate_epc_upgrade(EpcUpgradeInput())
        assert result.current_sap == Decimal("46.5")
        assert result.target_sap == Decimal("69")
        assert result.sap_improvement == 0
        assert result.estimated_new_rating == EpcRating.E
        assert result.meets_target is False
        assert result.total_cost == Decimal("0.00")
        assert result.payback_years == Decimal("0.0000")

    def test_recommends_cheapest_points_first(self):
        result = evaluate_epc_upgrade(EpcUpgradeInput())
        # 22.5 SAP points short of C
        assert result.recommended_measures == (
            "Loft Insulation (300mm)",
            "LED Lighting Throughout",
            "Smart Heating Controls",
            "Draught Proofing",
            "Cavity Wall Insulation",
        )

    def test_selected_measures(self):
        result = evaluate_epc_upgrade(INSULATION_AND_BOILER)
        assert result.sap_improvement == 30
        assert result.total_cost == Decimal("3100.00")
        assert result.estimated_new_sap == Decimal("76.5")
        assert result.estimated_new_rating == EpcRating.C
        assert result.meets_target is True
        assert result.annual_energy_savings == Decimal("900.00")
        assert result.payback_years == Decimal("3.4444")
        assert result.co2_reduction_kg == Decimal("6000")
        assert result.recommended_measures == ()
        assert result.selected_measures == (
            "Loft Insulation (300mm)", "Cavity Wall Insulation", "Condensing Boiler",
        )

    def test_high_estimates(self):
        inp = EpcUpgradeInput(loft_insulation=True, cavity_wall=True, condensing_boiler=True, use_high_estimates=True)
        assert evaluate_epc_upgrade(inp).total_cost == Decimal("6100.00")

    def test_grant_covers_cost(self):
        inp = EpcUpgradeInput(loft_insulation=True, cavity_wall=True, condensing_boiler=True, has_grant_funding=True)
        result = evaluate_epc_upgrade(inp)
        assert result.grant == Decimal("5000.00")
        assert result.net_cost == Decimal("0.00")
        assert result.payback_years == Decimal("0.0000")

    def test_grant_ignored_without_funding(self):
        result = evaluate_epc_upgrade(INSULATION_AND_BOILER)
        assert result.grant == Decimal("0.00")
        assert result.net_cost == Decimal("3100.00")

    def test_sap_capped_at_100(self):
        result = evaluate_epc_upgrade(EpcUpgradeInput(current_rating=EpcRating.A, heat_pump=True))
        assert result.estimated_new_sap == Decimal("100")
        assert result.estimated_new_rating == EpcRating.A

    def test_target_already_met(self):
        result = evaluate_epc_upgrade(EpcUpgradeInput(target_rating=EpcRating.G))
        assert result.meets_target is True
        assert result.recommended_measures == ()

    def test_from_form_values(self):
        inp = EpcUpgradeInput.from_raw({"currentRating": "f", "targetRating": "D", "heatPump": "yes"})
        result = evaluate_epc_upgrade(inp)
        # 29.5 + 25
        assert result.estimated_new_sap == Decimal("54.5")
        assert result.estimated_new_rating == EpcRating.E
        assert result.meets_target is False


class TestLoftConversion:
    def test_defaults(self):
        result = evaluate_loft_conversion(LoftConversionInput())
        assert result.conversion_description == "Single rear dormer extension"
        assert result.region_multiplier == Decimal("1.10")
        assert result.en_suite_cost == Decimal("8800.00")
        assert result.cost_low == Decimal("47300.00")
        assert result.cost_mid == Decimal("55550.00")
        assert result.cost_high == Decimal("66550.00")
        # 9% a bedroom plus 2% for the en-suite
        assert result.value_add == Decimal("44000.00")
        assert result.profit_loss == Decimal("-11550.00")
        assert result.roi == Decimal("-20.7921")
        assert result.new_value == Decimal("444000.00")
        assert result.cost_per_sqm == Decimal("2222.00")
        assert result.value_per_sqm == Decimal("1760.00")
        assert result.roi_label == "Negative ROI"

    def test_prime_london_mansard(self):
        result = evaluate_loft_conversion(LoftConversionInput(
            conversion_type=LoftConversionType.MANSARD,
            region=LoftRegion.LONDON_PRIME,
            loft_size=Decimal("30"),
            bedrooms_added=Decimal("2"),
            include_en_suite=False,
            current_value=Decimal("800000"),
        ))
        assert result.en_suite_cost == Decimal("0.00")
        assert result.cost_low == Decimal("92400.00")
        assert result.cost_mid == Decimal("113400.00")
        assert result.cost_high == Decimal("138600.00")
        assert result.value_add == Decimal("192000.00")
        assert result.roi == Decimal("69.3122")
        assert result.roi_label == "Excellent ROI"

    def test_no_loft(self):
        result = evaluate_loft_conversion(LoftConversionInput(loft_size=Decimal("0")))
        assert result.cost_per_sqm == Decimal("0.00")
        assert result.value_per_sqm == Decimal("0.00")

    def test_roi_labels(self):
        assert loft_roi_label(Decimal("50")) == "Excellent ROI"
        assert loft_roi_label(Decimal("25")) == "Good ROI"
        assert loft_roi_label(Decimal("0")) == "Marginal ROI"
        assert loft_roi_label(Decimal("-0.01")) == "Negative ROI"


class TestRefurbCost:
    def test_defaults(self):
        result = evaluate_refurb_cost(RefurbCostInput())
        assert result.base_refurb_cost == Decimal("50000.00")
        assert result.rewire_cost == Decimal("8000.00")
        assert result.heating_cost == Decimal("9000.00")
        # medium covers kitchen and bathroom and half the rewire
        assert result.total_before_contingency == Decimal("63000.00")
        assert result.contingency_amount == Decimal("6300.00")
        assert result.total_with_contingency == Decimal("69300.00")
        assert result.cost_per_sqm == Decimal("693.00")
        assert result.cost_per_sqft == Decimal("64.38")
        assert result.sqft == Decimal("1076.4")
        assert result.level_label == "Medium Refurb"

    def test_light_adds_every_item(self):
        result = evaluate_refurb_cost(RefurbCostInput(
            property_size=Decimal("50"), refurb_level=RefurbLevel.LIGHT, region=RefurbRegion.LONDON,
        ))
        assert result.kitchen_cost == Decimal("7000.00")
        assert result.bathroom_cost == Decimal("4200.00")
        assert result.total_before_contingency == Decimal("46550.00")
        assert result.total_with_contingency == Decimal("51205.00")

    def test_heavy_only_adds_extension(self):
        result = evaluate_refurb_cost(RefurbCostInput(
            refurb_level=RefurbLevel.HEAVY,
            region=RefurbRegion.NORTH,
            extension=True,
            extension_size=Decimal("20"),
        ))
        assert result.base_refurb_cost == Decimal("72000.00")
        assert result.extension_cost == Decimal("32400.00")
        assert result.total_before_contingency == Decimal("104400.00")
        assert result.total_with_contingency == Decimal("114840.00")

    def test_windows_round_up(self):
        result = evaluate_refurb_cost(RefurbCostInput(windows=True))
        # 100 sqm needs 13 windows
        assert result.windows_cost == Decimal("6500.00")
        assert result.total_before_contingency == Decimal("69500.00")

    def test_extension_needs_a_size(self):
        result = evaluate_refurb_cost(RefurbCostInput(extension=True))
        assert result.extension_cost == Decimal("0.00")

    def test_zero_size(self):
        result = evaluate_refurb_cost(RefurbCostInput(property_size=Decimal("0")))
        assert result.cost_per_sqm == Decimal("0.00")
        assert result.cost_per_sqft == Decimal("0.00")
