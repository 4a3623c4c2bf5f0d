"""Shared test fixtures.

Deal fixtures follow the default development journey: 820 sqm office to
residential conversion in Camden, 18 units, £1.85M purchase.
"""

import pytest
from fastapi.testclient import TestClient

from propcalc.api.app import create_app
from propcalc.api.deps import get_archive, sessions
from propcalc.data.deal_archive import DealArchive
from propcalc.engine.deal_store import DealStore
from propcalc.models.deal import BuildCostSection, DealDraft, FinanceSection, GdvSection, PdSection


@pytest.fixture
def store() -> DealStore:
    """Empty deal store (no draft in progress)."""
    return DealStore()


@pytest.fixture
def pd_section() -> PdSection:
    return PdSection.from_raw({
        "existingUse": "E (Commercial)",
        "proposedUse": "C3 (Residential)",
        "gia": "820",
        "storeys": "4",
        "targetUnits": "18",
        "pdRoute": "Class MA permitted",
    })


@pytest.fixture
def gdv_section() -> GdvSection:
    return GdvSection.from_raw({
        "postcode": "WC1R 4PS",
        "property_type": "apartment",
        "bedrooms": 2,
        "total_units": 18,
        "total_gdv": "6210000",
    })


@pytest.fixture
def build_cost_section() -> BuildCostSection:
    return BuildCostSection.from_raw({
        "total_gia": "820",
        "build_type": "conversion",
        "total_cost": "2012000",
    })


@pytest.fixture
def finance_section() -> FinanceSection:
    return FinanceSection.from_raw({
        "purchase_price": "1850000",
        "build_cost": "2012000",
        "gdv": "6210000",
        "term_months": "18",
        "target_ltc": "65",
        "lender_appetite": "strong",
    })


@pytest.fixture
def complete_draft(pd_section, gdv_section, build_cost_section, finance_section) -> DealDraft:
    """Draft with every section filled in, as after the full journey."""
    store = DealStore()
    store.start_new_deal("45-53 Red Lion Street, London WC1", "Camden")
    store.update_pd_data(pd_section)
    store.update_gdv_data(gdv_section)
    store.update_build_cost_data(build_cost_section)
    store.update_finance_data(finance_section)
    return store.current_deal


@pytest.fixture
def archive(tmp_path) -> DealArchive:
    """Archive backed by a throwaway SQLite file."""
    return DealArchive(str(tmp_path / "deals.db"))


@pytest.fixture
def client(archive):
    """API client with the archive redirected to a temp database."""
    app = create_app()
    app.dependency_overrides[get_archive] = lambda: archive
    sessions.clear()
    with TestClient(app) as test_client:
        yield test_client
    sessions.clear()

