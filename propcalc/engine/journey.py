"""Submit handlers for the development journey.

Each handler runs its calculator on a raw form record and stores the matching
section on the session's deal draft. Only the permitted development step may
open a draft; later steps do nothing to the store when no deal is in progress
but still return their metrics.
"""

import logging
from typing import Any, Mapping

from propcalc.engine.deal_store import DealStore
from propcalc.engine.development import (
    evaluate_build_cost,
    evaluate_development_finance,
    evaluate_gdv,
    evaluate_permitted_development,
)
from propcalc.models.deal import BuildCostSection, FinanceSection, GdvSection, PdSection
from propcalc.models.development import (
    BuildCostInput,
    BuildCostResult,
    DevelopmentFinanceInput,
    DevelopmentFinanceResult,
    GdvInput,
    GdvResult,
    PermittedDevelopmentInput,
    PermittedDevelopmentResult,
)

logger = logging.getLogger(__name__)


def submit_pd(store: DealStore, raw: Mapping[str, Any] | None = None) -> PermittedDevelopmentResult:
    inp = PermittedDevelopmentInput.from_raw(raw)
    result = evaluate_permitted_development(inp)
    if store.current_deal is None:
        logger.debug("Starting deal for %s", inp.address)
        store.start_new_deal(inp.address, inp.local_authority)
    store.update_pd_data(PdSection(
        existing_use=inp.existing_use,
        proposed_use=inp.proposed_use,
        gia=inp.gia,
        storeys=inp.storeys,
        target_units=inp.target_units,
        article_four=inp.article_four,
        heritage=inp.heritage,
        pd_route=result.pd_route,
        reasoning=result.summary,
    ))
    return result


def submit_gdv(store: DealStore, raw: Mapping[str, Any] | None = None) -> GdvResult:
    inp = GdvInput.from_raw(raw)
    result = evaluate_gdv(inp)
    store.update_gdv_data(GdvSection(
        postcode=inp.postcode,
        property_type=inp.property_type,
        bedrooms=result.weighted_bedrooms,
        total_units=result.total_units,
        avg_sqft=result.avg_sqft,
        new_build_premium=inp.new_build_premium,
        total_gdv=result.total_gdv,
        gdv_per_unit=result.gdv_per_unit,
        gdv_per_sqft=result.gdv_per_sqft,
    ))
    return result


def submit_build_cost(store: DealStore, raw: Mapping[str, Any] | None = None) -> BuildCostResult:
    inp = BuildCostInput.from_raw(raw)
    result = evaluate_build_cost(inp)
    store.update_build_cost_data(BuildCostSection(
        total_gia=inp.total_gia,
        build_type=inp.build_type.value,
        spec_level=inp.spec_level.value,
        region=inp.region.value,
        storeys=inp.storeys,
        contingency=inp.contingency,
        professional_fees=inp.professional_fees,
        total_cost=result.total_cost,
        cost_per_sqm=result.cost_per_sqm,
        reasoning=result.summary,
    ))
    return result


def submit_finance(store: DealStore, raw: Mapping[str, Any] | None = None) -> DevelopmentFinanceResult:
    inp = DevelopmentFinanceInput.from_raw(raw)
    result = evaluate_development_finance(inp)
    store.update_finance_data(FinanceSection(
        purchase_price=inp.purchase_price,
        build_cost=inp.build_cost,
        gdv=inp.gdv,
        term_months=inp.term_months,
        target_ltc=inp.target_ltc,
        require_mezzanine=inp.require_mezzanine,
        senior_debt_amount=result.senior_debt_amount,
        equity_required=result.equity_required,
        total_ltc=result.total_ltc,
        profit_on_cost=result.profit_on_cost,
        lender_appetite=result.lender_appetite.value,
        reasoning=result.summary,
    ))
    return result


SUBMITTERS = {
    "pd": submit_pd,
    "gdv": submit_gdv,
    "build-cost": submit_build_cost,
    "finance": submit_finance,
}
