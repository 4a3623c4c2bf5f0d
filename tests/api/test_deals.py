from decimal import Decimal

import pytest

from propcalc.api.deps import sessions

BASE = "/api/v1/deals"
SESSION = {"X-Session-Id": "alice"}


@pytest.fixture
def started(client):
    resp = client.post(BASE, json={"address": "1 High Street", "local_authority": "Leeds"}, headers=SESSION)
    assert resp.status_code == 200
    return resp.json()["draft"]


class TestCurrentDeal:
    def test_no_deal(self, client):
        assert client.get(f"{BASE}/current", headers=SESSION).json() == {"draft": None}

    def test_start(self, client, started):
        assert started["address"] == "1 High Street"
        assert started["local_authority"] == "Leeds"
        assert started["current_step"] == 1
        assert started["pd"] is None

    def test_sessions_are_separate(self, client, started):
        other = client.get(f"{BASE}/current", headers={"X-Session-Id": "bob"}).json()
        assert other == {"draft": None}
        assert client.get(f"{BASE}/current", headers=SESSION).json()["draft"] == started

    def test_clear(self, client, started):
        assert client.delete(f"{BASE}/current", headers=SESSION).json() == {"draft": None}
        assert "alice" not in sessions
        assert client.get(f"{BASE}/current", headers=SESSION).json() == {"draft": None}

    def test_put_section(self, client, started):
        resp = client.put(
            f"{BASE}/current/gdv",
            json={"totalGdv": "£6,210,000", "totalUnits": 18},
            headers=SESSION,
        )
        draft = resp.json()["draft"]
        assert Decimal(str(draft["gdv"]["total_gdv"])) == Decimal("6210000")
        assert draft["gdv"]["total_units"] == 18
        assert draft["current_step"] == 3

    def test_put_without_deal_is_ignored(self, client):
        resp = client.put(f"{BASE}/current/pd", json={"gia": "820"}, headers=SESSION)
        assert resp.status_code == 200
        assert resp.json() == {"draft": None}

    def test_unknown_section(self, client, started):
        assert client.put(f"{BASE}/current/land", json={}, headers=SESSION).status_code == 404
        assert client.post(f"{BASE}/current/land/submit", json={}, headers=SESSION).status_code == 404

    def test_submit_pd_opens_deal(self, client):
        resp = client.post(f"{BASE}/current/pd/submit", json={"inputs": {}}, headers=SESSION)
        body = resp.json()
        assert body["draft"]["current_step"] == 2
        assert body["draft"]["pd"]["pd_route"] == body["metrics"]["pd_route"]

    def test_submit_later_step_without_deal(self, client):
        body = client.post(f"{BASE}/current/gdv/submit", json={"inputs": {}}, headers=SESSION).json()
        assert body["draft"] is None
        assert Decimal(str(body["metrics"]["total_gdv"])) == Decimal("431250.00")


class TestSavedDeals:
    def test_save_without_deal(self, client):
        assert client.post(f"{BASE}/current/save", headers=SESSION).status_code == 404

    def test_save_and_reload(self, client, started):
        saved = client.post(f"{BASE}/current/save", headers=SESSION).json()["draft"]
        assert saved["id"]
        assert client.get(f"{BASE}/current", headers=SESSION).json()["draft"]["id"] == saved["id"]

        rows = client.get(f"{BASE}/saved").json()
        assert [row["id"] for row in rows] == [saved["id"]]
        assert rows[0]["status"] == "draft"
        assert rows[0]["name"] == "Deal: 1 High Street"

        assert client.get(f"{BASE}/saved/{saved['id']}").json()["draft"] == saved

    def test_resave_keeps_one_row(self, client, started):
        client.post(f"{BASE}/current/save", headers=SESSION)
        client.post(f"{BASE}/current/save", headers=SESSION)
        assert len(client.get(f"{BASE}/saved").json()) == 1

    def test_full_journey_saves_complete(self, client):
        for section in ("pd", "gdv", "build-cost", "finance"):
            client.post(f"{BASE}/current/{section}/submit", json={"inputs": {}}, headers=SESSION)
        saved = client.post(f"{BASE}/current/save", headers=SESSION).json()["draft"]
        assert saved["current_step"] == 5
        assert client.get(f"{BASE}/saved").json()[0]["status"] == "complete"

    def test_missing_saved_deal(self, client):
        resp = client.get(f"{BASE}/saved/nope")
        assert resp.status_code == 404
        assert "nope" in resp.json()["detail"]
