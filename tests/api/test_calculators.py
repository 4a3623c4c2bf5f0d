from decimal import Decimal

from propcalc.engine.registry import CALCULATORS


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
        assert client.get("/api/v1/health").json() == {"status": "ok"}


class TestCalculatorRoutes:
    def test_list_all(self, client):
        resp = client.get("/api/v1/calculators")
        assert resp.status_code == 200
        assert {row["slug"] for row in resp.json()} == set(CALCULATORS)

    def test_list_by_category(self, client):
        rows = client.get("/api/v1/calculators", params={"category": "hmo"}).json()
        assert [row["slug"] for row in rows] == [
            "hmo-finance", "hmo-fire-safety", "hmo-licence-fee", "hmo-viability",
        ]

    def test_describe(self, client):
        body = client.get("/api/v1/calculators/auction-bridge").json()
        assert body["title"] == "Auction Bridge"
        assert body["category"] == "bridging"
        assert Decimal(str(body["inputs"]["winning_bid"])) == Decimal("180000")
        assert body["inputs"]["exit_strategy"] == "refinance"

    def test_calculate(self, client):
        resp = client.post(
            "/api/v1/calculators/auction-bridge",
            json={"inputs": {"winningBid": "£200,000", "auctionFees": "2.5"}},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["slug"] == "auction-bridge"
        assert Decimal(str(body["inputs"]["winning_bid"])) == Decimal("200000")
        assert Decimal(str(body["metrics"]["auction_fee_amount"])) == Decimal("5000.00")
        assert Decimal(str(body["metrics"]["total_purchase_cost"])) == Decimal("205000.00")

    def test_calculate_with_defaults(self, client):
        body = client.post("/api/v1/calculators/stamp-duty", json={}).json()
        assert body["metrics"] == client.post("/api/v1/calculators/stamp-duty", json={"inputs": {}}).json()["metrics"]

    def test_unknown_calculator(self, client):
        assert client.get("/api/v1/calculators/nope").status_code == 404
        resp = client.post("/api/v1/calculators/nope", json={"inputs": {}})
        assert resp.status_code == 404
        assert "nope" in resp.json()["detail"]

    def test_inputs_must_be_an_object(self, client):
        resp = client.post("/api/v1/calculators/gdv", json={"inputs": [1, 2]})
        assert resp.status_code == 422


class TestConnectionRoutes:
    def test_describe_lists_connections(self, client):
        body = client.get("/api/v1/calculators/brrr").json()
        assert body["upstream"] == ["bridging-loan", "refurb-cost"]
        assert body["downstream"] == ["rental-yield", "btl-dscr"]
        assert body["related"] == ["bridge-to-let"]

    def test_unconnected_calculator(self, client):
        body = client.get("/api/v1/calculators/stamp-duty").json()
        assert (body["upstream"], body["downstream"], body["related"]) == ([], [], [])

    def test_list_refurb_category(self, client):
        rows = client.get("/api/v1/calculators", params={"category": "refurb"}).json()
        assert [row["slug"] for row in rows] == ["epc-upgrade", "loft-conversion", "refurb-cost"]

    def test_calculate_epc_upgrade(self, client):
        body = client.post(
            "/api/v1/calculators/epc-upgrade",
            json={"inputs": {"loftInsulation": "yes", "cavityWall": True, "condensingBoiler": "on"}},
        ).json()
        assert body["metrics"]["estimated_new_rating"] == "C"
        assert body["metrics"]["meets_target"] is True
        assert Decimal(str(body["metrics"]["total_cost"])) == Decimal("3100.00")
