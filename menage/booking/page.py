"""
Booking page orchestration for one bookable sub-category.

A page owns exactly one Selection, one ContactForm and one state machine.
Every selection change goes through the pure reducer; the state machine
follows the validity predicate so that SUBMITTING is only ever entered with
a complete selection.

Usage:
    page = BookingPage("carpet", record)
    page.load()
    page.dispatch(ToggleOption("carpet"))
    page.dispatch(SetDimension("carpet", 0, "length", "200"))
    page.dispatch(SetDimension("carpet", 0, "width", "300"))
    page.set_contact("firstname", "Salma")
    page.set_contact("phone", "0612345678")
    page.set_contact("location", "Rabat")
    result = page.submit()
"""

from typing import Optional

from menage.booking.contact_form import ContactForm
from menage.booking.state_machine import BookingState, BookingStateMachine, BookingTrigger
from menage.classifier import RuleSet, family_for_label
from menage.errors import (
    InvalidTransitionError,
    ReservationFailedError,
    SelectionNotReservable,
    UnknownCategoryError,
)
from menage.logging_context import get_booking_logger, new_booking_id, set_booking_id
from menage.pricing.rate_tables import RateTable, rate_table_for
from menage.pricing.selection import (
    Action,
    Selection,
    apply,
    describe,
    incomplete_options,
    is_reservable,
    quote,
    selected_area,
)
from menage.schemas.catalog_schema import CatalogRecord
from menage.schemas.reservation_schema import ReservationRecord
from menage.tools import auth, reservations
from menage.tools.prefill import BookingPrefill, PrefillStore
from menage.tools.reservations import ReservationResult

logger = get_booking_logger(__name__)

# Families whose reservation form cannot be sent without a location
LOCATION_REQUIRED_FAMILIES = frozenset({
    "piscine", "tapis_canapes", "bureaux_usine", "menage_complet", "menage_cuisine",
})


class BookingPage:
    """Selection, pricing and reservation for one category label."""

    def __init__(
        self,
        label: str,
        record: Optional[CatalogRecord] = None,
        prefill_store: Optional[PrefillStore] = None,
        lang: str = "fr",
    ) -> None:
        self.label = label
        self.record = record
        self.lang = lang
        self.rule_set = self._resolve_family(label)
        self.rate_table = self._build_rate_table()
        self.booking_id = new_booking_id()
        self.selection = Selection()
        self.form = ContactForm(require_location=self.rule_set.family in LOCATION_REQUIRED_FAMILIES)
        self.machine = BookingStateMachine(can_submit=self.can_reserve)
        self.prefill_store = prefill_store or PrefillStore()
        self.error: Optional[str] = None
        self.result: Optional[ReservationResult] = None

    @property
    def state(self) -> BookingState:
        return self.machine.current_state

    @property
    def options(self) -> list[str]:
        return list(self.rate_table)

    def can_reserve(self) -> bool:
        return is_reservable(self.selection, self.rate_table)

    def load(self) -> Optional[BookingPrefill]:
        """Start the page: bind the correlation id and read any stored prefill."""
        set_booking_id(self.booking_id)
        prefill = self.prefill_store.get()
        self.form.apply_prefill(prefill)
        logger.info("Booking page opened for %s", self.label)
        return prefill

    def dispatch(self, action: Action) -> Selection:
        """Apply one selection action and move the state machine to match.

        Raises:
            InvalidTransitionError: The page was already submitted.
        """
        self._acknowledge_error()
        self._ensure_open()

        self.selection = apply(self.selection, action)
        self._selection_changed()
        self._sync_state()
        return self.selection

    def set_contact(self, name: str, value: Optional[str]) -> tuple[bool, str]:
        self._acknowledge_error()
        return self.form.set_field(name, value)

    def quote(self) -> float:
        """Current price of the selection, rounded to cents."""
        return quote(self.selection, self.rate_table)

    def missing_options(self) -> list[str]:
        return incomplete_options(self.selection, self.rate_table)

    def build_reservation(self) -> ReservationRecord:
        contact = self.form.to_contact()
        session = auth.get_current_session()
        area = selected_area(self.selection, self.rate_table)
        return ReservationRecord.build(
            contact,
            service_type=self.label,
            record=self.record,
            lang=self.lang,
            selection=describe(self.selection),
            total_area_m2=area or None,
            final_price=self.quote(),
            user_id=session["user_id"] if session else None,
        )

    def submit(self) -> ReservationResult:
        """Validate, write the reservation, and clear the prefill on success.

        Raises:
            SelectionNotReservable: The selection is incomplete; nothing is written.
            ContactFormIncomplete: A required contact field is missing or invalid.
            ReservationFailedError: Storage rejected the insert; the selection is kept.
            InvalidTransitionError: The page was already submitted.
        """
        set_booking_id(self.booking_id)
        self._acknowledge_error()
        self._ensure_open()

        if not self.can_reserve():
            raise SelectionNotReservable(
                f"Selection for {self.label} is incomplete: {self.missing_options() or 'nothing selected'}"
            )
        record = self.build_reservation()

        self.machine.transition(BookingTrigger.SUBMIT)
        logger.info("Submitting %s reservation at %.2f", self.label, record.final_price)
        result = reservations.create_reservation(record, self.rule_set.reservation_table)

        if not result.get("success"):
            self.error = result.get("message", "Reservation failed")
            self.machine.transition(BookingTrigger.INSERT_FAILED)
            logger.warning("Reservation failed: %s", self.error)
            raise ReservationFailedError(self.error)

        self.machine.transition(BookingTrigger.INSERT_SUCCEEDED)
        self.result = result
        self.prefill_store.remove()
        logger.info("Reservation %s confirmed", result.get("id"))
        return result

    def _resolve_family(self, label: str) -> RuleSet:
        rule_set = family_for_label(label)
        if rule_set is None:
            raise UnknownCategoryError(label)
        return rule_set

    def _build_rate_table(self) -> RateTable:
        return rate_table_for(self.label, self.record)

    def _selection_changed(self) -> None:
        """Hook run after every reducer step, before the state machine catches up."""

    def _ensure_open(self) -> None:
        if self.machine.is_terminal():
            raise InvalidTransitionError(
                f"Reservation {self.booking_id} for {self.label} was already submitted"
            )

    def _acknowledge_error(self) -> None:
        if self.state == BookingState.SUBMIT_ERROR:
            self.machine.transition(BookingTrigger.ERROR_ACKNOWLEDGED)
            self.error = None

    def _sync_state(self) -> None:
        if self.selection.is_empty:
            target = BookingState.BROWSING
        elif self.can_reserve():
            target = BookingState.RESERVABLE
        else:
            target = BookingState.OPTION_SELECTED

        if self.state == target:
            return
        if target == BookingState.BROWSING:
            self.machine.transition(BookingTrigger.SELECTION_CLEARED)
            return
        if self.state == BookingState.BROWSING:
            self.machine.transition(BookingTrigger.OPTION_ADDED)
        if target == BookingState.RESERVABLE and self.state != target:
            self.machine.transition(BookingTrigger.SELECTION_COMPLETED)
        elif target == BookingState.OPTION_SELECTED and self.state != target:
            self.machine.transition(BookingTrigger.SELECTION_INCOMPLETE)
