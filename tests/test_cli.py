import asyncio
from decimal import Decimal

import pytest

from propcalc import cli


class TestParsePairs:
    def test_pairs(self):
        assert cli.parse_pairs(["winning_bid=180000", "exitStrategy=sale"]) == {
            "winning_bid": "180000",
            "exitStrategy": "sale",
        }

    def test_json_values(self):
        raw = cli.parse_pairs(['units=[{"bedrooms": 2, "quantity": 4}]'])
        assert raw == {"units": [{"bedrooms": 2, "quantity": 4}]}

    def test_value_may_contain_equals(self):
        assert cli.parse_pairs(["note=a=b"]) == {"note": "a=b"}

    @pytest.mark.parametrize("pair", ["winning_bid", "=5"])
    def test_bad_pair(self, pair):
        with pytest.raises(ValueError):
            cli.parse_pairs([pair])


class TestFormatValue:
    def test_money(self):
        assert cli.format_value("total_cost", Decimal("2247784.00")) == "£2,247,784"

    def test_percentage(self):
        assert cli.format_value("gross_yield", Decimal("6.4800")) == "6.48%"
        assert cli.format_value("dscr", Decimal("1.1306")) == "1.13"

    def test_numeric_text_from_api(self):
        assert cli.format_value("total_cost", "3600.00") == "£3,600"

    def test_plain_number(self):
        assert cli.format_value("gia", Decimal("820")) == "820"

    def test_other_values(self):
        assert cli.format_value("is_viable", True) == "Yes"
        assert cli.format_value("rate_band", None) == "-"
        assert cli.format_value("status", "Strong Deal") == "Strong Deal"


class TestMain:
    def test_run_locally(self, capsys):
        asyncio.run(cli.main(["run", "auction-bridge", "winningBid=180000"]))
        out = capsys.readouterr().out
        assert "Auction Bridge" in out
        assert "£3,600" in out
        assert "180000" in out

    def test_list(self, capsys):
        asyncio.run(cli.main(["list", "--category", "bridging"]))
        out = capsys.readouterr().out
        assert "auction-bridge" in out
        assert "stamp-duty" not in out

    def test_unknown_calculator(self):
        with pytest.raises(SystemExit):
            asyncio.run(cli.main(["run", "no-such-calculator"]))

    def test_bad_pair(self):
        with pytest.raises(SystemExit):
            asyncio.run(cli.main(["run", "auction-bridge", "winningBid"]))

    def test_run_against_api(self, monkeypatch, capsys):
        calls = []

        async def fake_remote(api_url, slug, raw):
            calls.append((api_url, slug, raw))
            return {
                "slug": slug,
                "category": "bridging",
                "inputs": {"winning_bid": "180000"},
                "metrics": {"auction_fee_amount": "3600.00"},
            }

        monkeypatch.setattr(cli, "run_remote", fake_remote)
        asyncio.run(cli.main(["run", "auction-bridge", "winningBid=180000", "--api", "http://api"]))
        assert calls == [("http://api", "auction-bridge", {"winningBid": "180000"})]
        assert "£3,600" in capsys.readouterr().out


class TestPercentageInputs:
    def test_two_place_rate_is_not_money(self):
        assert cli.format_value("interest_rate", Decimal("0.95")) == "0.95%"
        assert cli.format_value("monthly_rate", "0.75") == "0.75%"

    def test_money_named_like_a_rate(self):
        assert cli.format_value("average_nightly_rate", Decimal("120.00")) == "£120"
        assert cli.format_value("value_at_target_yield", Decimal("1500000.00")) == "£1,500,000"
        assert cli.format_value("total_conversion_costs", Decimal("4500.00")) == "£4,500"

    def test_explicit_percent_suffix_wins(self):
        assert cli.format_value("land_to_costs_percent", Decimal("39.3900")) == "39.39%"

    def test_run_prints_rate_as_percentage(self, capsys):
        asyncio.run(cli.main(["run", "auction-bridge", "interestRate=0.95"]))
        out = capsys.readouterr().out
        assert "0.95%" in out
        assert "£1\n" not in out
