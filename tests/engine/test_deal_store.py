from decimal import Decimal

from propcalc.engine.deal_store import DealStore
from propcalc.models.deal import DealDraft, FinanceSection, GdvSection, PdSection


class TestDealStore:
    def test_starts_empty(self, store):
        assert store.current_deal is None

    def test_update_without_deal_is_ignored(self, store, gdv_section):
        assert store.update_gdv_data(gdv_section) is None
        assert store.current_deal is None

    def test_start_new_deal(self, store):
        draft = store.start_new_deal("X", "Y")
        assert draft == DealDraft(address="X", local_authority="Y", current_step=1)
        assert store.current_deal is draft

    def test_journey_sequence(self, store, pd_section, finance_section):
        store.start_new_deal("X", "Y")
        store.update_pd_data(pd_section)
        store.update_finance_data(finance_section)

        draft = store.current_deal
        assert draft.current_step == 5
        assert draft.pd == pd_section
        assert draft.finance == finance_section
        assert draft.gdv is None
        assert draft.is_complete is False

    def test_step_never_moves_back(self, store, pd_section, gdv_section):
        store.start_new_deal("X", "Y")
        store.update_gdv_data(gdv_section)
        assert store.current_deal.current_step == 3
        store.update_pd_data(pd_section)
        assert store.current_deal.current_step == 3

    def test_section_replaced_wholesale(self, store):
        store.start_new_deal("X", "Y")
        store.update_pd_data(PdSection(gia=Decimal("820"), heritage=True))
        store.update_pd_data(PdSection(storeys=4))
        assert store.current_deal.pd == PdSection(storeys=4)

    def test_new_deal_overwrites(self, store, pd_section):
        store.start_new_deal("X", "Y")
        store.update_pd_data(pd_section)
        store.start_new_deal("Z", "W")
        assert store.current_deal.pd is None
        assert store.current_deal.current_step == 1

    def test_clear_deal(self, store):
        store.start_new_deal("X", "Y")
        store.clear_deal()
        assert store.current_deal is None

    def test_set_current_deal(self, complete_draft):
        store = DealStore()
        store.set_current_deal(complete_draft)
        assert store.current_deal is complete_draft
        assert store.current_deal.is_complete is True


class TestDealDraft:
    def test_complete_draft(self, complete_draft):
        assert complete_draft.current_step == 5
        assert complete_draft.address == "45-53 Red Lion Street, London WC1"

    def test_dict_round_trip(self, complete_draft):
        assert DealDraft.from_dict(complete_draft.to_dict()) == complete_draft

    def test_restore_from_json_text(self):
        draft = DealDraft(
            address="X",
            local_authority="Y",
            current_step=5,
            finance=FinanceSection(profit_on_cost=Decimal("-4.2500"), require_mezzanine=True, term_months=18),
        )
        data = draft.to_dict()
        data["finance"] = {k: str(v) if not isinstance(v, bool) else v for k, v in data["finance"].items()}
        restored = DealDraft.from_dict(data)
        assert restored.finance.profit_on_cost == Decimal("-4.2500")
        assert restored.finance.term_months == 18
        assert restored.finance.require_mezzanine is True

    def test_sections_accept_camel_case_payloads(self):
        section = GdvSection.from_raw({"totalGdv": "£6,210,000", "totalUnits": "18"})
        assert section.total_gdv == Decimal("6210000")
        assert section.total_units == 18
