"""Deal draft routes: the per-session development journey plus the archive."""

from fastapi import APIRouter, Depends, HTTPException

from propcalc.api.deps import get_archive, get_deal_store, get_session_id, sessions
from propcalc.api.schemas import CalculateRequest, DealResponse, SavedDeal, StartDealRequest, SubmitResponse, plain
from propcalc.data.deal_archive import DealArchive, DealNotFoundError
from propcalc.engine.deal_store import DealStore
from propcalc.engine.journey import SUBMITTERS
from propcalc.models.deal import BuildCostSection, FinanceSection, GdvSection, PdSection

router = APIRouter(prefix="/api/v1/deals", tags=["deals"])

SECTIONS = {
    "pd": (PdSection, DealStore.update_pd_data),
    "gdv": (GdvSection, DealStore.update_gdv_data),
    "build-cost": (BuildCostSection, DealStore.update_build_cost_data),
    "finance": (FinanceSection, DealStore.update_finance_data),
}


def _draft(store: DealStore) -> DealResponse:
    deal = store.current_deal
    return DealResponse(draft=plain(deal) if deal is not None else None)


@router.get("/current", response_model=DealResponse)
async def current(store: DealStore = Depends(get_deal_store)):
    return _draft(store)


@router.post("", response_model=DealResponse)
async def start(req: StartDealRequest, store: DealStore = Depends(get_deal_store)):
    """Start a new draft, replacing any deal in progress."""
    store.start_new_deal(req.address, req.local_authority)
    return _draft(store)


@router.delete("/current", response_model=DealResponse)
async def clear(
    session_id: str = Depends(get_session_id),
    store: DealStore = Depends(get_deal_store),
):
    """Discard the draft and forget the session."""
    store.clear_deal()
    sessions.drop(session_id)
    return _draft(store)


@router.post("/current/save", response_model=DealResponse)
async def save(
    store: DealStore = Depends(get_deal_store),
    archive: DealArchive = Depends(get_archive),
):
    """Archive the draft. The saved id sticks to the session's draft."""
    if store.current_deal is None:
        raise HTTPException(status_code=404, detail="No deal in progress")
    store.set_current_deal(archive.save(store.current_deal))
    return _draft(store)


@router.put("/current/{section}", response_model=DealResponse)
async def update_section(section: str, payload: dict, store: DealStore = Depends(get_deal_store)):
    """Store a section as posted. Ignored when no deal is in progress."""
    if section not in SECTIONS:
        raise HTTPException(status_code=404, detail=f"Unknown deal section: {section!r}")
    section_cls, update = SECTIONS[section]
    update(store, section_cls.from_raw(payload))
    return _draft(store)


@router.post("/current/{section}/submit", response_model=SubmitResponse)
async def submit_section(section: str, req: CalculateRequest, store: DealStore = Depends(get_deal_store)):
    """Run the section's calculator and store the outcome on the draft."""
    if section not in SUBMITTERS:
        raise HTTPException(status_code=404, detail=f"Unknown deal section: {section!r}")
    result = SUBMITTERS[section](store, req.inputs)
    deal = store.current_deal
    return SubmitResponse(metrics=plain(result), draft=plain(deal) if deal is not None else None)


@router.get("/saved", response_model=list[SavedDeal])
async def saved(limit: int = 20, archive: DealArchive = Depends(get_archive)):
    return archive.list_recent(limit)


@router.get("/saved/{deal_id}", response_model=DealResponse)
async def saved_deal(deal_id: str, archive: DealArchive = Depends(get_archive)):
    try:
        deal = archive.get(deal_id)
    except DealNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return DealResponse(draft=plain(deal))
