"""Calculator registry: slug -> form input type and evaluator.

Every calculator takes a raw record of form values and returns a frozen
result dataclass. ``evaluate`` is the single entry point the API and CLI use.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from propcalc.engine import bridging, commercial, development, hmo, landlord, leasehold, refurb, serviced, title_split
from propcalc.models.bridging import (
    AuctionBridgeInput,
    BridgeToLetInput,
    BridgingLoanInput,
    RefurbishmentBridgeInput,
    RetainedVsRolledInput,
)
from propcalc.models.commercial import CommercialYieldInput, ErvInput
from propcalc.models.development import (
    BuildCostInput,
    CilInput,
    DevelopmentAppraisalInput,
    DevelopmentFinanceInput,
    GdvInput,
    PermittedDevelopmentInput,
    ProfitOnCostInput,
    ResidualLandValueInput,
)
from propcalc.models.form import FormInput
from propcalc.models.hmo import HmoFinanceInput, HmoFireSafetyInput, HmoLicenceFeeInput, HmoViabilityInput
from propcalc.models.landlord import (
    BrrrInput,
    BtlDscrInput,
    BtlIcrInput,
    BuyToLetInput,
    RentToRentInput,
    RentalYieldInput,
    Section24Input,
    StampDutyInput,
)
from propcalc.models.leasehold import GroundRentInput, LeaseExtensionInput, MarriageValueInput, ServiceChargeInput
from propcalc.models.refurb import EpcUpgradeInput, LoftConversionInput, RefurbCostInput
from propcalc.models.serviced import HolidayLetTaxInput, SaFinanceInput, SaOccupancyInput, SaProfitInput
from propcalc.models.title_split import TitleSplitInput

logger = logging.getLogger(__name__)

CATEGORIES = (
    "bridging",
    "commercial",
    "development",
    "hmo",
    "landlord",
    "leasehold",
    "refurb",
    "serviced",
    "title-split",
)


class UnknownCalculatorError(LookupError):
    def __init__(self, slug: str):
        super().__init__(f"Unknown calculator: {slug!r}")
        self.slug = slug


@dataclass(frozen=True)
class CalculatorDefinition:
    slug: str
    category: str
    title: str
    description: str
    input_cls: type[FormInput]
    evaluate: Callable[[Any], Any]
    # Slugs of calculators that feed this one, that it feeds, and that sit alongside it
    upstream: tuple[str, ...] = ()
    downstream: tuple[str, ...] = ()
    related: tuple[str, ...] = ()

    def parse(self, raw: Mapping[str, Any] | None) -> FormInput:
        return self.input_cls.from_raw(raw)

    def run(self, raw: Mapping[str, Any] | None = None) -> Any:
        return self.evaluate(self.parse(raw))


_DEFINITIONS: tuple[CalculatorDefinition, ...] = (
    # Bridging
    CalculatorDefinition(
        "auction-bridge", "bridging", "Auction Bridge",
        "Bridging finance for an auction purchase: day-one advance, fees and cash to complete.",
        AuctionBridgeInput, bridging.evaluate_auction_bridge,
    ),
    CalculatorDefinition(
        "bridge-to-let", "bridging", "Bridge to Let",
        "Bridge, refurbish and refinance onto a buy-to-let mortgage.",
        BridgeToLetInput, bridging.evaluate_bridge_to_let,
    ),
    CalculatorDefinition(
        "bridging-loan", "bridging", "Bridging Loan",
        "Cost of a bridging loan with retained, rolled or serviced interest.",
        BridgingLoanInput, bridging.evaluate_bridging_loan,
        downstream=("bridge-to-let", "brrr"),
        related=("refurbishment-bridge", "development-finance"),
    ),
    CalculatorDefinition(
        "refurbishment-bridge", "bridging", "Refurbishment Bridge",
        "Light or heavy refurbishment bridge with staged works drawdown.",
        RefurbishmentBridgeInput, bridging.evaluate_refurbishment_bridge,
    ),
    CalculatorDefinition(
        "retained-vs-rolled", "bridging", "Retained vs Rolled Interest",
        "Compare retaining interest up front with rolling it up to redemption.",
        RetainedVsRolledInput, bridging.evaluate_retained_vs_rolled,
    ),
    # Commercial
    CalculatorDefinition(
        "commercial-yield", "commercial", "Commercial Yield",
        "Initial, net and reversionary yields with WAULT and vacancy.",
        CommercialYieldInput, commercial.evaluate_commercial_yield,
    ),
    CalculatorDefinition(
        "erv", "commercial", "ERV",
        "Estimated rental value from benchmarks and comparables.",
        ErvInput, commercial.evaluate_erv,
    ),
    # Development
    CalculatorDefinition(
        "permitted-development", "development", "Permitted Development",
        "Quick appraisal of a permitted development conversion.",
        PermittedDevelopmentInput, development.evaluate_permitted_development,
        downstream=("gdv",),
    ),
    CalculatorDefinition(
        "gdv", "development", "GDV",
        "Gross development value from the unit mix.",
        GdvInput, development.evaluate_gdv,
        upstream=("permitted-development",),
        downstream=("build-cost",),
    ),
    CalculatorDefinition(
        "build-cost", "development", "Build Cost",
        "Build cost by type, specification and region.",
        BuildCostInput, development.evaluate_build_cost,
        upstream=("gdv",),
        downstream=("development-finance", "development-appraisal"),
    ),
    CalculatorDefinition(
        "development-finance", "development", "Development Finance",
        "Senior and mezzanine debt sizing against cost and GDV.",
        DevelopmentFinanceInput, development.evaluate_development_finance,
        upstream=("build-cost", "development-appraisal"),
    ),
    CalculatorDefinition(
        "cil", "development", "CIL",
        "Community Infrastructure Levy liability and instalments.",
        CilInput, development.evaluate_cil,
    ),
    CalculatorDefinition(
        "profit-on-cost", "development", "Profit on Cost",
        "Development profit against total cost and GDV.",
        ProfitOnCostInput, development.evaluate_profit_on_cost,
        related=("development-appraisal",),
    ),
    CalculatorDefinition(
        "residual-land-value", "development", "Residual Land Value",
        "Maximum land price for a target profit.",
        ResidualLandValueInput, development.evaluate_residual_land_value,
        downstream=("development-appraisal",),
    ),
    CalculatorDefinition(
        "development-appraisal", "development", "New-Build Development Appraisal",
        "GDV, build, finance and sales costs with profit, IRR and equity multiple.",
        DevelopmentAppraisalInput, development.evaluate_development_appraisal,
        upstream=("residual-land-value", "build-cost"),
        downstream=("development-finance",),
        related=("profit-on-cost",),
    ),
    # HMO
    CalculatorDefinition(
        "hmo-finance", "hmo", "HMO Finance",
        "HMO mortgage affordability and lender stress test.",
        HmoFinanceInput, hmo.evaluate_hmo_finance,
    ),
    CalculatorDefinition(
        "hmo-fire-safety", "hmo", "HMO Fire Safety Cost",
        "Fire doors, alarms, lighting and assessment costs for an HMO.",
        HmoFireSafetyInput, hmo.evaluate_hmo_fire_safety,
    ),
    CalculatorDefinition(
        "hmo-licence-fee", "hmo", "HMO Licence Fee",
        "Council HMO licence fee with discounts.",
        HmoLicenceFeeInput, hmo.evaluate_hmo_licence_fee,
        upstream=("hmo-viability",),
        downstream=("hmo-fire-safety",),
    ),
    CalculatorDefinition(
        "hmo-viability", "hmo", "HMO Viability",
        "Room-by-room HMO income, costs and returns.",
        HmoViabilityInput, hmo.evaluate_hmo_viability,
        downstream=("hmo-finance", "hmo-licence-fee"),
        related=("hmo-fire-safety",),
    ),
    # Landlord
    CalculatorDefinition(
        "brrr", "landlord", "BRRR",
        "Buy, refurbish, refinance, rent: money left in and returns.",
        BrrrInput, landlord.evaluate_brrr,
        upstream=("bridging-loan", "refurb-cost"),
        downstream=("rental-yield", "btl-dscr"),
        related=("bridge-to-let",),
    ),
    CalculatorDefinition(
        "btl-dscr", "landlord", "BTL DSCR",
        "Buy-to-let interest and debt service cover against lender criteria.",
        BtlDscrInput, landlord.evaluate_btl_dscr,
        upstream=("rental-yield",),
        downstream=("section-24",),
    ),
    CalculatorDefinition(
        "btl-icr", "landlord", "BTL ICR",
        "Buy-to-let interest cover by ownership type.",
        BtlIcrInput, landlord.evaluate_btl_icr,
    ),
    CalculatorDefinition(
        "buy-to-let", "landlord", "Buy to Let",
        "Yields, cashflow and indicative mortgage rate for a buy-to-let.",
        BuyToLetInput, landlord.evaluate_buy_to_let,
    ),
    CalculatorDefinition(
        "rent-to-rent", "landlord", "Rent to Rent Profit",
        "Profit from leasing a property and letting it by the room.",
        RentToRentInput, landlord.evaluate_rent_to_rent,
    ),
    CalculatorDefinition(
        "rental-yield", "landlord", "Rental Yield",
        "Gross and net rental yield after running costs and voids.",
        RentalYieldInput, landlord.evaluate_rental_yield,
        downstream=("btl-dscr", "section-24"),
    ),
    CalculatorDefinition(
        "section-24", "landlord", "Section 24 Tax Impact",
        "Tax under the mortgage interest restriction, against a limited company.",
        Section24Input, landlord.evaluate_section_24,
        upstream=("rental-yield", "btl-dscr"),
    ),
    CalculatorDefinition(
        "stamp-duty", "landlord", "Stamp Duty",
        "SDLT with first-time buyer relief and surcharges.",
        StampDutyInput, landlord.evaluate_stamp_duty,
    ),
    # Leasehold
    CalculatorDefinition(
        "ground-rent", "leasehold", "Ground Rent",
        "Ground rent escalation, capitalised value and risk.",
        GroundRentInput, leasehold.evaluate_ground_rent,
    ),
    CalculatorDefinition(
        "lease-extension", "leasehold", "Lease Extension",
        "Statutory lease extension premium and costs.",
        LeaseExtensionInput, leasehold.evaluate_lease_extension,
        downstream=("marriage-value",),
        related=("ground-rent",),
    ),
    CalculatorDefinition(
        "marriage-value", "leasehold", "Marriage Value",
        "Marriage value and premium from the relativity graph.",
        MarriageValueInput, leasehold.evaluate_marriage_value,
    ),
    CalculatorDefinition(
        "service-charge", "leasehold", "Service Charge",
        "Leaseholder share of building running costs.",
        ServiceChargeInput, leasehold.evaluate_service_charge,
    ),
    # Refurb
    CalculatorDefinition(
        "epc-upgrade", "refurb", "EPC Upgrade",
        "Cost and SAP gain of energy measures towards a target EPC rating.",
        EpcUpgradeInput, refurb.evaluate_epc_upgrade,
        related=("refurb-cost",),
    ),
    CalculatorDefinition(
        "loft-conversion", "refurb", "Loft Conversion",
        "Loft conversion cost range against the value it adds.",
        LoftConversionInput, refurb.evaluate_loft_conversion,
        related=("refurb-cost",),
    ),
    CalculatorDefinition(
        "refurb-cost", "refurb", "Refurb Cost",
        "Whole-house refurbishment cost by level, region and works.",
        RefurbCostInput, refurb.evaluate_refurb_cost,
        downstream=("brrr", "refurbishment-bridge"),
        related=("epc-upgrade", "loft-conversion"),
    ),
    # Serviced accommodation
    CalculatorDefinition(
        "sa-finance", "serviced", "SA Finance",
        "Serviced accommodation mortgage stress test and cashflow.",
        SaFinanceInput, serviced.evaluate_sa_finance,
    ),
    CalculatorDefinition(
        "sa-occupancy", "serviced", "SA Occupancy",
        "Break-even and target occupancy with scenarios.",
        SaOccupancyInput, serviced.evaluate_sa_occupancy,
    ),
    CalculatorDefinition(
        "sa-profit", "serviced", "SA Profit",
        "Serviced accommodation revenue, costs and returns.",
        SaProfitInput, serviced.evaluate_sa_profit,
    ),
    CalculatorDefinition(
        "holiday-let-tax", "serviced", "Holiday Let Tax",
        "Furnished holiday let tax against standard buy-to-let treatment.",
        HolidayLetTaxInput, serviced.evaluate_holiday_let_tax,
    ),
    # Title split
    CalculatorDefinition(
        "title-split", "title-split", "Title Split",
        "Profit from splitting a freehold into separate titles.",
        TitleSplitInput, title_split.evaluate_title_split,
    ),
)

CALCULATORS: dict[str, CalculatorDefinition] = {d.slug: d for d in _DEFINITIONS}


def get_calculator(slug: str) -> CalculatorDefinition:
    try:
        return CALCULATORS[slug]
    except KeyError:
        raise UnknownCalculatorError(slug) from None


def list_calculators(category: str | None = None) -> list[CalculatorDefinition]:
    return [d for d in _DEFINITIONS if category is None or d.category == category]


CONNECTION_KINDS = ("upstream", "downstream", "related")


def connections(slug: str) -> dict[str, list[CalculatorDefinition]]:
    """Registered calculators linked to ``slug``, by direction."""
    definition = get_calculator(slug)
    return {
        kind: [CALCULATORS[linked] for linked in getattr(definition, kind) if linked in CALCULATORS]
        for kind in CONNECTION_KINDS
    }


def evaluate(slug: str, raw: Mapping[str, Any] | None = None) -> Any:
    """Parse ``raw`` with the calculator's form and run it."""
    definition = get_calculator(slug)
    logger.debug("Evaluating %s with %d inputs", slug, len(raw or {}))
    return definition.run(raw)
