"""
Command-line entry point for the housekeeping booking engine.

Usage:
    Console demo:   python main.py console [--scenario tapis]
    Family listing: python main.py list tapis_canapes --lang en
    Classify:       python main.py classify 103
"""

import argparse
import logging
import sys

from menage.classifier import FAMILIES, classify
from menage.config import settings
from menage.errors import CatalogUnavailableError
from menage.tools import catalog

logger = logging.getLogger(__name__)


def _run_console_mode(scenario: str | None, lang: str | None) -> None:
    """Start the offline console demo."""
    from console_demo import ConsoleSession

    session = ConsoleSession(lang=lang)
    if scenario:
        session.run_scenario(scenario)
    else:
        session.run()


def _run_list(family: str, lang: str) -> int:
    from menage.booking import load_listing

    try:
        cards = load_listing(family, lang=lang)
    except CatalogUnavailableError as e:
        logger.error("Catalog unavailable: %s", e)
        return 1
    for card in cards:
        route = card.route or "-"
        print(f"{card.record.id:>5}  {route:<24} {card.title}  {card.price_label or ''}")
    return 0


def _run_classify(record_id: int) -> int:
    try:
        record = catalog.get_record(record_id)
    except CatalogUnavailableError as e:
        logger.error("Catalog unavailable: %s", e)
        return 1
    if record is None:
        print(f"No catalog record {record_id}", file=sys.stderr)
        return 1
    for name, rule_set in FAMILIES.items():
        # A family whose listing drops the record never offers it
        if not rule_set.admits(record):
            continue
        label = classify(record, rule_set)
        if label is not None:
            print(f"{name:<18} {label:<22} {rule_set.route_for(label)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=f"{settings.business.name} booking engine")
    sub = parser.add_subparsers(dest="command", required=True)

    console = sub.add_parser("console", help="Run the offline console demo")
    console.add_argument("--scenario", default=None)
    console.add_argument("--lang", choices=["fr", "ar", "en"], default=None)

    listing = sub.add_parser("list", help="Print a family listing")
    listing.add_argument("family", choices=sorted(FAMILIES))
    listing.add_argument("--lang", choices=["fr", "ar", "en"], default=settings.business.default_language)

    classify_cmd = sub.add_parser("classify", help="Show how each family classifies a record")
    classify_cmd.add_argument("record_id", type=int)

    args = parser.parse_args(argv)
    if args.command == "console":
        _run_console_mode(args.scenario, args.lang)
        return 0
    if args.command == "list":
        return _run_list(args.family, args.lang)
    return _run_classify(args.record_id)


if __name__ == "__main__":
    sys.exit(main())
