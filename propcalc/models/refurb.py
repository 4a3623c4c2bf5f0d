"""Refurbishment inputs and results: EPC upgrades, loft conversions and
whole-house refurb costs."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from propcalc.models.bands import CostRange
from propcalc.models.form import FormInput, number


class EpcRating(Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"


class LoftConversionType(Enum):
    VELUX = "velux"
    DORMER_REAR = "dormer-rear"
    DORMER_L_SHAPED = "dormer-l-shaped"
    HIP_TO_GABLE = "hip-to-gable"
    MANSARD = "mansard"


class LoftRegion(Enum):
    LONDON_PRIME = "london-prime"
    LONDON_OUTER = "london-outer"
    SOUTH_EAST = "south-east"
    SOUTH_WEST = "south-west"
    MIDLANDS = "midlands"
    NORTH_WEST = "north-west"
    NORTH_EAST = "north-east"
    SCOTLAND = "scotland"
    WALES = "wales"


class RefurbLevel(Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    STRUCTURAL = "structural"


class RefurbRegion(Enum):
    LONDON = "london"
    SOUTH_EAST = "southeast"
    MIDLANDS = "midlands"
    NORTH = "north"
    SCOTLAND = "scotland"
    WALES = "wales"


# ---- EPC upgrade ----

@dataclass(frozen=True)
class EpcMeasure:
    key: str
    name: str
    cost: CostRange
    sap_points: int


@dataclass(frozen=True)
class EpcUpgradeInput(FormInput):
    current_rating: EpcRating = EpcRating.E
    target_rating: EpcRating = EpcRating.C
    loft_insulation: bool = False
    cavity_wall: bool = False
    external_wall: bool = False
    internal_wall: bool = False
    floor_insulation: bool = False
    double_glazing: bool = False
    triple_glazing: bool = False
    condensing_boiler: bool = False
    heat_pump: bool = False
    solar_pv: bool = False
    solar_thermal: bool = False
    led_lighting: bool = False
    heating_controls: bool = False
    draught_proofing: bool = False
    use_high_estimates: bool = False
    has_grant_funding: bool = False
    grant_amount: Decimal = number("5000")


@dataclass(frozen=True)
class EpcUpgradeResult:
    current_sap: Decimal
    target_sap: Decimal
    sap_improvement: int
    estimated_new_sap: Decimal
    estimated_new_rating: EpcRating
    meets_target: bool
    total_cost: Decimal
    grant: Decimal
    net_cost: Decimal
    annual_energy_savings: Decimal
    payback_years: Decimal
    co2_reduction_kg: Decimal
    selected_measures: tuple[str, ...]
    recommended_measures: tuple[str, ...]


# ---- Loft conversion ----

@dataclass(frozen=True)
class LoftConversionInput(FormInput):
    conversion_type: LoftConversionType = LoftConversionType.DORMER_REAR
    region: LoftRegion = LoftRegion.SOUTH_EAST
    loft_size: Decimal = number("25")  # sqm
    bedrooms_added: Decimal = number("1")
    include_en_suite: bool = True
    current_value: Decimal = number("400000")


@dataclass(frozen=True)
class LoftConversionResult:
    conversion_description: str
    region_multiplier: Decimal
    cost_low: Decimal
    cost_mid: Decimal
    cost_high: Decimal
    en_suite_cost: Decimal
    value_add: Decimal
    roi: Decimal  # on the mid cost
    profit_loss: Decimal
    new_value: Decimal
    cost_per_sqm: Decimal
    value_per_sqm: Decimal
    roi_label: str


# ---- Refurb cost ----

@dataclass(frozen=True)
class RefurbCostInput(FormInput):
    property_size: Decimal = number("100")  # sqm
    refurb_level: RefurbLevel = RefurbLevel.MEDIUM
    region: RefurbRegion = RefurbRegion.MIDLANDS
    kitchen: bool = True
    bathroom: bool = True
    bathrooms: Decimal = number("1")
    rewire: bool = True
    replumb: bool = False
    heating: bool = True
    windows: bool = False
    roof: bool = False
    extension: bool = False
    extension_size: Decimal = number("0")  # sqm
    contingency_percent: Decimal = number("10")


@dataclass(frozen=True)
class RefurbCostResult:
    sqm: Decimal
    sqft: Decimal
    region_multiplier: Decimal
    base_refurb_cost: Decimal
    kitchen_cost: Decimal
    bathroom_cost: Decimal
    rewire_cost: Decimal
    replumb_cost: Decimal
    heating_cost: Decimal
    windows_cost: Decimal
    roof_cost: Decimal
    extension_cost: Decimal
    total_before_contingency: Decimal
    contingency_amount: Decimal
    total_with_contingency: Decimal
    cost_per_sqm: Decimal
    cost_per_sqft: Decimal
    level_label: str
