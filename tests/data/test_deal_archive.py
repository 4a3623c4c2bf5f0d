import logging

import pytest

from propcalc.data.deal_archive import DealArchive, DealNotFoundError
from propcalc.models.deal import DealDraft


class TestDealArchive:
    def test_save_assigns_id(self, archive):
        saved = archive.save(DealDraft(address="X", local_authority="Y"))
        assert saved.id
        assert len(saved.id) == 32

    def test_round_trip(self, archive, complete_draft):
        saved = archive.save(complete_draft)
        assert archive.get(saved.id) == saved

    def test_save_keeps_existing_id(self, archive):
        draft = DealDraft(address="X", local_authority="Y", id="abc123")
        assert archive.save(draft).id == "abc123"

    def test_resave_replaces(self, archive):
        first = archive.save(DealDraft(address="X", local_authority="Y"))
        archive.save(DealDraft(address="X", local_authority="Y", current_step=3, id=first.id))
        assert archive.get(first.id).current_step == 3
        assert len(archive.list_recent()) == 1

    def test_status(self, archive, complete_draft):
        archive.save(DealDraft(address="Partial", local_authority="Y"))
        archive.save(complete_draft)
        statuses = {row["address"]: row["status"] for row in archive.list_recent()}
        assert statuses == {"Partial": "draft", complete_draft.address: "complete"}

    def test_list_recent_newest_first(self, archive):
        for address in ("first", "second", "third"):
            archive.save(DealDraft(address=address, local_authority="Y"))
        rows = archive.list_recent(limit=2)
        assert [row["address"] for row in rows] == ["third", "second"]
        assert rows[0]["name"] == "Deal: third"
        assert rows[0]["current_step"] == 1

    def test_missing_deal(self, archive):
        with pytest.raises(DealNotFoundError) as exc_info:
            archive.get("nope")
        assert exc_info.value.deal_id == "nope"

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "deals.db"
        DealArchive(str(path))
        assert path.exists()

    def test_save_is_logged(self, archive, caplog):
        with caplog.at_level(logging.INFO, logger="propcalc.data.deal_archive"):
            saved = archive.save(DealDraft(address="X", local_authority="Y"))
        assert saved.id in caplog.text


class TestInMemoryArchive:
    def test_round_trip(self, complete_draft):
        archive = DealArchive(":memory:")
        saved = archive.save(complete_draft)
        assert archive.get(saved.id) == saved
        assert [row["id"] for row in archive.list_recent()] == [saved.id]

    def test_archives_are_separate(self):
        first, second = DealArchive(":memory:"), DealArchive(":memory:")
        first.save(DealDraft(address="X", local_authority="Y"))
        assert second.list_recent() == []
