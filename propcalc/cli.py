"""Command-line runner for the property calculators.

Usage:
    python -m propcalc.cli list --category bridging
    python -m propcalc.cli run auction-bridge winning_bid=150000 bridging_ltv=75
    python -m propcalc.cli run gdv 'units=[{"bedrooms": 2, "quantity": 4}]'
    python -m propcalc.cli run stamp-duty purchase_price=425000 --api http://localhost:8000
"""

import argparse
import asyncio
import json
import logging
import re
import sys
from decimal import Decimal
from typing import Any

import httpx

from propcalc.api.schemas import plain
from propcalc.config import settings
from propcalc.engine.registry import CATEGORIES, UnknownCalculatorError, get_calculator, list_calculators
from propcalc.formatting import currency, plain_number

logger = logging.getLogger(__name__)

_NUMERIC_TEXT = re.compile(r"^-?\d+(\.\d+)?$")
_PERCENT_HINTS = (
    "percent", "pct", "rate", "yield", "ltv", "ltc", "ltgdv", "occupancy",
    "margin", "return", "roi", "roce", "on_cost", "on_gdv", "relativity",
)
# Money fields whose names still carry a percentage hint.
_MONEY_HINTS = ("value", "costs", "cashflow", "amount", "price", "daily_rate", "nightly_rate", "indexed_rate")


def parse_pairs(pairs: list[str]) -> dict[str, Any]:
    """key=value arguments into a raw input record. JSON lists and objects pass through."""
    raw: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"expected key=value, got {pair!r}")
        if value[:1] in ("[", "{"):
            value = json.loads(value)
        raw[key.strip()] = value
    return raw


def _label(name: str) -> str:
    return name.replace("_", " ").capitalize()


def _is_percentage(name: str) -> bool:
    if name.endswith(("pct", "percent")):
        return True
    if any(hint in name for hint in _MONEY_HINTS):
        return False
    return any(hint in name for hint in _PERCENT_HINTS)


def format_value(name: str, value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float):
        value = Decimal(str(value))
    if isinstance(value, str) and _NUMERIC_TEXT.match(value):
        value = Decimal(value)
    if isinstance(value, Decimal):
        exponent = value.as_tuple().exponent
        if exponent == -2 and not _is_percentage(name):
            return currency(value)
        if exponent in (-2, -4):
            suffix = "%" if _is_percentage(name) else ""
            return f"{value:.2f}{suffix}"
        return plain_number(value)
    if value is None:
        return "-"
    return str(value)


def print_section(record: dict[str, Any], indent: int = 2) -> None:
    pad = " " * indent
    for name, value in record.items():
        if isinstance(value, dict):
            print(f"{pad}{_label(name)}:")
            print_section(value, indent + 4)
        elif isinstance(value, list):
            print(f"{pad}{_label(name)}:")
            for row in value:
                if isinstance(row, dict):
                    cells = ", ".join(f"{_label(k)}: {format_value(k, v)}" for k, v in row.items())
                    print(f"{pad}    - {cells}")
                else:
                    print(f"{pad}    - {format_value(name, row)}")
        else:
            print(f"{pad}{_label(name) + ':':<34}{format_value(name, value)}")


def print_report(title: str, inputs: dict[str, Any], metrics: dict[str, Any]) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")
    print("  Inputs")
    print(f"  {'-' * 58}")
    print_section(inputs, indent=4)
    print()
    print("  Results")
    print(f"  {'-' * 58}")
    print_section(metrics, indent=4)
    print()


def print_calculators(category: str | None) -> None:
    print(f"\n{'=' * 60}")
    print(f"  Calculators{f' ({category})' if category else ''}")
    print(f"{'=' * 60}")
    for definition in list_calculators(category):
        print(f"  {definition.slug:<24} {definition.title}")
        print(f"  {'':<24} {definition.description}")
    print()


async def run_remote(api_url: str, slug: str, raw: dict[str, Any]) -> dict[str, Any]:
    logger.debug("Evaluating %s against %s", slug, api_url)
    async with httpx.AsyncClient(base_url=api_url, timeout=15.0) as client:
        try:
            resp = await client.post(f"/api/v1/calculators/{slug}", json={"inputs": raw})
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn propcalc.api.app:app --reload", file=sys.stderr)
            sys.exit(1)
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            sys.exit(1)

        if resp.status_code == 404:
            raise UnknownCalculatorError(slug)
        if resp.status_code != 200:
            print(f"Error: API returned {resp.status_code}", file=sys.stderr)
            print(f"  {resp.text}", file=sys.stderr)
            sys.exit(1)
        return resp.json()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="UK property investment calculators")
    parser.add_argument("--log-level", default=None, help=f"Logging level (default: {settings.log_level})")
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="List calculators")
    list_cmd.add_argument("--category", choices=CATEGORIES, default=None)

    run_cmd = sub.add_parser("run", help="Run a calculator")
    run_cmd.add_argument("slug", help="Calculator slug, e.g. auction-bridge")
    run_cmd.add_argument("inputs", nargs="*", metavar="key=value", help="Form values (missing keys use defaults)")
    run_cmd.add_argument("--api", default=None, metavar="URL", help="Evaluate against a running API instead of locally")
    return parser


async def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=(args.log_level or settings.log_level).upper())

    if args.command == "list":
        print_calculators(args.category)
        return

    try:
        raw = parse_pairs(args.inputs)
    except ValueError as e:
        parser.error(str(e))

    try:
        if args.api:
            body = await run_remote(args.api, args.slug, raw)
            title = get_calculator(body["slug"]).title
            inputs, metrics = body["inputs"], body["metrics"]
        else:
            definition = get_calculator(args.slug)
            parsed = definition.parse(raw)
            title = definition.title
            inputs, metrics = plain(parsed), plain(definition.evaluate(parsed))
    except UnknownCalculatorError as e:
        parser.error(str(e))

    print_report(title, inputs, metrics)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
