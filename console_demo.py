"""
Offline console demo: browse the catalog and book a service from the terminal.

Drives the real classifier, pricing reducer, booking state machine, contact
form and mock storage tools. No network calls.

Usage:
    python console_demo.py
    python console_demo.py --scenario tapis
    python console_demo.py --scenario maison_dhote
"""

import argparse
import shlex
from typing import Optional

from menage.booking import BookingPage, load_listing
from menage.classifier import classify, family_for_label, filter_listing
from menage.config import settings
from menage.errors import (
    CatalogUnavailableError,
    ContactFormIncomplete,
    MenageError,
    ReservationFailedError,
    SelectionNotReservable,
)
from menage.pricing import (
    RemovePiece,
    SetDimension,
    SetPieceCount,
    SetQuantity,
    ToggleFlag,
    ToggleOption,
    format_price,
    option_label,
)
from menage.schemas.catalog_schema import CatalogRecord
from menage.tools import catalog, reservations

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

HELP = """Commands:
  list <family>                 show a family listing (menage, tapis_canapes, piscine, ...)
  open <label>                  open the booking page for a sub-category
  toggle <option>               select or deselect an option
  qty <option> <n>              set a per-piece quantity
  pieces <option> <n>           set how many pieces to measure
  dim <option> <i> <len> <wid>  set one piece's dimensions, in cm
  remove <option> <i>           remove one measured piece
  flag <name>                   toggle a fixed-price add-on
  set <field> <value...>        fill a contact field
  quote                         show the current price
  submit                        send the reservation
  quit"""


def find_record(label: str) -> Optional[CatalogRecord]:
    """First record the family page lists and classifies under ``label``."""
    rule_set = family_for_label(label)
    if rule_set is None:
        return None
    for record in filter_listing(catalog.list_category_records(), rule_set):
        if classify(record, rule_set) == label:
            return record
    return None


class ConsoleSession:
    """Walks one visitor through listing, selection and reservation."""

    def __init__(self, lang: Optional[str] = None) -> None:
        self.lang = lang or settings.business.default_language
        self.page: Optional[BookingPage] = None

    def site_say(self, text: str) -> None:
        print(f"{GREEN}{BOLD}[{settings.business.name}]{RESET} {GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def error(self, text: str) -> None:
        print(f"{RED}  !! {text}{RESET}")

    # Pre-scripted scenarios for --scenario flag
    SCENARIOS: dict[str, list[str]] = {
        "tapis": [
            "list tapis_canapes",
            "open carpet",
            "pieces carpet 2",
            "dim carpet 0 200 300",
            "quote",
            "dim carpet 1 150 0",
            "submit",
            "set firstname Salma",
            "set phone 06 12 34 56 78",
            "set location Rabat, Agdal",
            "submit",
        ],
        "canape": [
            "open sofa",
            "dim sofa 0 400 200",
            "quote",
            "dim sofa 0 401 200",
            "quote",
        ],
        "maison_dhote": [
            "list menage_complet",
            "open guest_house",
            "dim rooms 0 400 300",
            "dim rooms 1 350 300",
            "dim garden 0 1000 800",
            "flag breakfast",
            "flag sheets",
            "quote",
            "set firstname Youssef",
            "set phone +212 661 234 567",
            "set location Marrakech",
            "set preferred_date 2026-11-02",
            "submit",
        ],
        "repassage": [
            "open ironing",
            "qty everyday 12",
            "qty coat 2",
            "dim blanket 0 200 220",
            "quote",
            "set firstname Imane",
            "set phone 0700112233",
            "submit",
        ],
        "failure": [
            "open offices",
            "dim surface 0 1200 800",
            "set firstname Karim",
            "set phone 0522334455",
            "set location Casablanca",
            "!reject",
            "submit",
            "!accept",
            "submit",
        ],
    }

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario for demo purposes."""
        steps = self.SCENARIOS.get(scenario)
        if not steps:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return

        self._banner(f"Scenario: {scenario}")
        for step in steps:
            if step.startswith("!"):
                self._storage_switch(step[1:])
                continue
            print(f"\n{BLUE}[Visitor] {RESET}{step}")
            self.handle(step)
        self._footer(f"Scenario '{scenario}' complete.")

    def run(self) -> None:
        self._banner("Console Demo")
        print(f"{DIM}{HELP}{RESET}")
        while True:
            line = input(f"\n{BLUE}[Visitor] {RESET}").strip()
            if not line:
                continue
            if line.lower() in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                break
            self.handle(line)
        self._footer("Session complete.")

    def handle(self, line: str) -> None:
        try:
            words = shlex.split(line)
        except ValueError as e:
            self.error(str(e))
            return
        command, args = words[0].lower(), words[1:]
        handler = getattr(self, f"_cmd_{command}", None)
        if handler is None:
            self.error(f"Unknown command: {command}. Type 'help'.")
            return
        try:
            handler(args)
        except (IndexError, ValueError) as e:
            self.error(f"Bad arguments for {command}: {e}")
        except MenageError as e:
            self.error(str(e))
        if self.page is not None:
            self.system_log(f"State: {self.page.state.value}")

    # ------------------------------------------------------------------ #
    # Listing
    # ------------------------------------------------------------------ #

    def _cmd_help(self, args: list[str]) -> None:
        print(f"{DIM}{HELP}{RESET}")

    def _cmd_list(self, args: list[str]) -> None:
        family = args[0] if args else "menage"
        try:
            cards = load_listing(family, lang=self.lang)
        except CatalogUnavailableError:
            self.error("The catalog could not be loaded. Please try again later.")
            return
        except KeyError as e:
            self.error(str(e))
            return
        for card in cards:
            price = f" - {card.price_label}" if card.price_label else ""
            target = f" -> {card.route}" if card.clickable else " (information only)"
            print(f"  {BOLD}{card.title}{RESET}{price}{DIM}{target}{RESET}")

    # ------------------------------------------------------------------ #
    # Booking page
    # ------------------------------------------------------------------ #

    def _cmd_open(self, args: list[str]) -> None:
        label = args[0]
        record = find_record(label)
        self.page = BookingPage(label, record, lang=self.lang)
        self.page.load()
        title = record.localized_name(self.lang) if record else label
        self.site_say(f"Booking {title}. Options: {', '.join(self.page.options)}")

    def _require_page(self) -> BookingPage:
        if self.page is None:
            raise ValueError("open a booking page first")
        return self.page

    def _cmd_toggle(self, args: list[str]) -> None:
        self._require_page().dispatch(ToggleOption(args[0]))
        self._show_quote()

    def _cmd_qty(self, args: list[str]) -> None:
        self._require_page().dispatch(SetQuantity(args[0], args[1]))
        self._show_quote()

    def _cmd_pieces(self, args: list[str]) -> None:
        self._require_page().dispatch(SetPieceCount(args[0], args[1]))
        self._show_quote()

    def _cmd_dim(self, args: list[str]) -> None:
        page = self._require_page()
        key, index = args[0], int(args[1])
        page.dispatch(SetDimension(key, index, "length", args[2]))
        page.dispatch(SetDimension(key, index, "width", args[3]))
        self._show_quote()

    def _cmd_remove(self, args: list[str]) -> None:
        self._require_page().dispatch(RemovePiece(args[0], int(args[1])))
        self._show_quote()

    def _cmd_flag(self, args: list[str]) -> None:
        self._require_page().dispatch(ToggleFlag(args[0]))
        self._show_quote()

    def _cmd_set(self, args: list[str]) -> None:
        ok, message = self._require_page().set_contact(args[0], " ".join(args[1:]))
        if ok:
            self.system_log(message)
        else:
            self.error(message)

    def _cmd_quote(self, args: list[str]) -> None:
        self._show_quote(always=True)

    def _cmd_submit(self, args: list[str]) -> None:
        page = self._require_page()
        try:
            result = page.submit()
        except SelectionNotReservable:
            missing = ", ".join(option_label(k) for k in page.missing_options())
            self.site_say(f"Please complete your selection first ({missing or 'nothing selected'}).")
            return
        except ContactFormIncomplete as e:
            for name, message in e.errors.items():
                self.error(f"{name}: {message}")
            return
        except ReservationFailedError as e:
            self.site_say(f"Sorry, we could not save your reservation: {e}. Your selection is kept.")
            return
        self.site_say(
            f"Thank you! Reservation #{result.get('id')} received "
            f"for {format_price(page.quote(), settings.business.currency)}."
        )

    def _show_quote(self, always: bool = False) -> None:
        page = self._require_page()
        price = page.quote()
        if price or always:
            label = format_price(price, settings.business.currency) or f"0.00 {settings.business.currency}"
            self.site_say(f"Total: {label}")

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _storage_switch(self, mode: str) -> None:
        if mode == "reject":
            reservations.reject_inserts("storage is temporarily unavailable")
            self.system_log("Storage now rejects inserts")
        else:
            reservations.reject_inserts(None)
            self.system_log("Storage accepts inserts again")

    def _banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {settings.business.name.upper()} - {title}{RESET}")
        print(f"{BOLD}  Language: {self.lang}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def _footer(self, text: str) -> None:
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {text}{RESET}")
        if self.page is not None:
            print(f"{DIM}  State trace: {' -> '.join(self.page.machine.get_state_trace())}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    parser.add_argument("--lang", choices=["fr", "ar", "en"], default=None)
    args = parser.parse_args()

    session = ConsoleSession(lang=args.lang)
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
