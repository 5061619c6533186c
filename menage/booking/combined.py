"""
Housekeeping booked together with cooking.

The visitor picks exactly one housekeeping type (radio behaviour) and at
least one cooking type. Area options and add-ons follow the chosen
housekeeping type, so the rate table is rebuilt whenever that choice
changes; options the new type does not offer are dropped from the
selection.

Usage:
    page = MenageCuisinePage(catalog.list_category_records(3), catalog.list_cuisine_types())
    page.load()
    page.choose_menage(302)
    page.toggle_cuisine(901)
    page.dispatch(SetDimension("rooms", 0, "length", "400"))
"""

from typing import Iterable, Optional

from menage.booking.page import BookingPage
from menage.classifier import RuleSet, classify, filter_listing
from menage.classifier.families import MENAGE_CUISINE
from menage.errors import UnknownCategoryError
from menage.logging_context import get_booking_logger
from menage.pricing.rate_tables import (
    CUISINE_CHOICE,
    MENAGE_CHOICE,
    RateTable,
    choice_key,
    menage_cuisine_table,
)
from menage.pricing.selection import Selection, ToggleChoice, ToggleFlag, ToggleOption, apply
from menage.schemas.catalog_schema import CatalogRecord
from menage.schemas.reservation_schema import ReservationRecord
from menage.tools.prefill import PrefillStore

logger = get_booking_logger(__name__)


class MenageCuisinePage(BookingPage):
    """One housekeeping type plus one or more cooking types, priced together."""

    def __init__(
        self,
        menage_records: Iterable[CatalogRecord],
        cuisine_types: Iterable[CatalogRecord],
        prefill_store: Optional[PrefillStore] = None,
        lang: str = "fr",
    ) -> None:
        self.menage_records = {r.id: r for r in filter_listing(menage_records, MENAGE_CUISINE)}
        self.cuisine_types = {t.id: t for t in cuisine_types}
        super().__init__(MENAGE_CUISINE.family, None, prefill_store, lang)

    @property
    def menage_type(self) -> Optional[str]:
        """Housekeeping label of the chosen type, or None."""
        if self.record is None:
            return None
        return classify(self.record, MENAGE_CUISINE)

    def chosen(self, group: str) -> list[str]:
        return [key for key in self.selection.options if key.startswith(group)]

    def choose_menage(self, record_id: int) -> Selection:
        """Choose a housekeeping type, or clear it when it is already chosen."""
        record = self.menage_records.get(record_id)
        if record is None:
            raise UnknownCategoryError(f"{MENAGE_CHOICE}{record_id}")
        return self.dispatch(ToggleChoice(choice_key(MENAGE_CHOICE, record), MENAGE_CHOICE))

    def toggle_cuisine(self, type_id: int) -> Selection:
        cuisine = self.cuisine_types.get(type_id)
        if cuisine is None:
            raise UnknownCategoryError(f"{CUISINE_CHOICE}{type_id}")
        return self.dispatch(ToggleOption(choice_key(CUISINE_CHOICE, cuisine)))

    def can_reserve(self) -> bool:
        """Exactly one housekeeping type, at least one cooking type, every option complete."""
        if len(self.chosen(MENAGE_CHOICE)) != 1 or not self.chosen(CUISINE_CHOICE):
            return False
        return super().can_reserve()

    def missing_options(self) -> list[str]:
        missing = []
        if len(self.chosen(MENAGE_CHOICE)) != 1:
            missing.append("menage")
        if not self.chosen(CUISINE_CHOICE):
            missing.append("cuisine")
        return missing + super().missing_options()

    def build_reservation(self) -> ReservationRecord:
        reservation = super().build_reservation()
        cuisine_names = [
            cuisine.localized_name(self.lang)
            for cuisine in self.cuisine_types.values()
            if choice_key(CUISINE_CHOICE, cuisine) in self.selection.options
        ]
        return reservation.model_copy(
            update={"menage_type": self.menage_type, "cuisine_types": cuisine_names}
        )

    def _resolve_family(self, label: str) -> RuleSet:
        return MENAGE_CUISINE

    def _build_rate_table(self) -> RateTable:
        return menage_cuisine_table(
            self.menage_records.values(), self.cuisine_types.values(), self.menage_type
        )

    def _chosen_record(self, key: str) -> Optional[CatalogRecord]:
        suffix = key[len(MENAGE_CHOICE):]
        return self.menage_records.get(int(suffix)) if suffix.isdigit() else None

    def _selection_changed(self) -> None:
        chosen = self.chosen(MENAGE_CHOICE)
        record = self._chosen_record(chosen[0]) if chosen else None
        if record is self.record:
            return

        self.record = record
        self.rate_table = self._build_rate_table()
        selection = self.selection
        for key in selection.options:
            if key not in self.rate_table:
                selection = apply(selection, ToggleOption(key))
        for flag in selection.flags:
            if flag not in self.rate_table:
                selection = apply(selection, ToggleFlag(flag))
        self.selection = selection
        logger.info("Housekeeping type set to %s", self.menage_type)
