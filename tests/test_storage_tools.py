"""Tests for the mock catalog, reservation, auth and prefill tools."""

import json

import pytest

from menage.booking.listing import build_cards, load_listing, resolve_menage_id
from menage.errors import CatalogUnavailableError
from menage.schemas.reservation_schema import ContactDetails, ReservationRecord
from menage.tools import auth, catalog, reservations
from menage.tools.prefill import BookingPrefill, PrefillStore
from tests.conftest import make_record


class TestCatalog:
    def test_records_newest_first(self):
        records = catalog.list_category_records()
        stamps = [r.created_at for r in records]
        assert stamps == sorted(stamps, reverse=True)

    def test_filter_by_parent_category(self):
        records = catalog.list_category_records(menage_id=2)
        assert {r.id for r in records} == {201, 202}

    def test_unavailable_raises(self):
        catalog.set_unavailable()
        with pytest.raises(CatalogUnavailableError):
            catalog.list_category_records()
        with pytest.raises(CatalogUnavailableError):
            catalog.list_menage_categories()

    def test_reset_restores_seed(self):
        catalog.add_record(make_record("Tapis persan", record_id=999, menage_id=1))
        catalog.set_unavailable()
        catalog.reset()
        assert catalog.get_record(999) is None
        assert catalog.get_record(101) is not None

    def test_missing_record(self):
        assert catalog.get_record(424242) is None


class TestListing:
    def test_top_level_listing_routes_every_category(self):
        cards = load_listing("menage")
        assert len(cards) == 8
        assert all(card.clickable for card in cards)

    def test_family_listing_uses_parent_category(self):
        cards = load_listing("tapis_canapes")
        assert {card.label for card in cards} == {"carpet", "sofa", "carpet_and_sofa"}
        assert {card.route for card in cards} == {"/tapis", "/canapes", "/tapis-et-canape"}

    def test_resolve_menage_id(self):
        assert resolve_menage_id("piscine") == 2
        assert resolve_menage_id("voiture") == 8

    def test_unclassified_record_is_inert(self):
        cards = build_cards([make_record("Jardinage", price=80)], "tapis_canapes")
        assert len(cards) == 1
        assert not cards[0].clickable
        assert cards[0].price_label == "80.00 DH"

    def test_localized_titles_fall_back(self):
        record = make_record("Tapis", name_en=None, description_fr="Shampooing")
        card = build_cards([record], "tapis_canapes", lang="en")[0]
        assert card.title == "Tapis"
        assert card.description == "Shampooing"

    def test_unavailable_catalog(self):
        catalog.set_unavailable()
        with pytest.raises(CatalogUnavailableError):
            load_listing("piscine")

    def test_unknown_family(self):
        with pytest.raises(KeyError):
            load_listing("jardinage")


def _reservation(**overrides) -> ReservationRecord:
    contact = ContactDetails(firstname="Salma", phone="0612345678", location="Rabat")
    fields = {"service_type": "carpet", "record": None, "final_price": 150.0}
    fields.update(overrides)
    return ReservationRecord.build(contact, **fields)


class TestReservations:
    def test_create_and_get(self):
        result = reservations.create_reservation(_reservation(), "tapis_canapes_reservations")
        assert result["success"]
        stored = reservations.get_reservation(result["id"])
        assert stored.firstname == "Salma"
        assert stored.table == "tapis_canapes_reservations"
        assert stored.created_at is not None

    def test_ids_increment(self):
        first = reservations.create_reservation(_reservation(), "piscine_reservations")
        second = reservations.create_reservation(_reservation(), "piscine_reservations")
        assert second["id"] == first["id"] + 1

    def test_unknown_table(self):
        result = reservations.create_reservation(_reservation(), "jardinage_reservations")
        assert not result["success"]

    def test_missing_required_fields(self):
        record = _reservation()
        blank = record.model_copy(update={"firstname": " "})
        result = reservations.create_reservation(blank, "airbnb_reservations")
        assert not result["success"]
        assert "firstname" in result["message"]

    def test_rejected_insert(self):
        reservations.reject_inserts("Database error")
        result = reservations.create_reservation(_reservation(), "airbnb_reservations")
        assert result == {"success": False, "message": "Database error", "table": "airbnb_reservations"}

    def test_list_by_table(self):
        reservations.create_reservation(_reservation(), "airbnb_reservations")
        reservations.create_reservation(_reservation(), "voiture_reservations")
        assert len(reservations.list_reservations("voiture_reservations")) == 1
        assert len(reservations.list_reservations()) == 2

    def test_reset(self):
        reservations.create_reservation(_reservation(), "airbnb_reservations")
        reservations.reset()
        assert reservations.list_reservations() == []

    def test_snapshot_from_record(self):
        record = make_record("Villa", name_en="Villa cleaning", price=1500, menage_id=3, image="villa.jpg")
        built = _reservation(service_type="villa", record=record, lang="en")
        assert built.type_menage_id == record.id
        assert built.item_name == "Villa cleaning"
        assert built.item_image == "villa.jpg"
        assert built.item_description is None


class TestAuth:
    def test_anonymous_by_default(self):
        assert auth.get_current_session() is None

    def test_sign_in_and_out(self):
        auth.sign_in("user-1")
        assert auth.get_current_session()["user_id"] == "user-1"
        auth.sign_out()
        assert auth.get_current_session() is None


class TestPrefillStore:
    def test_round_trip(self, prefill_store):
        value = BookingPrefill(message="Deux tapis", location="Rabat")
        prefill_store.set(value)
        assert prefill_store.get() == value
        prefill_store.remove()
        assert prefill_store.get() is None

    def test_accepts_plain_dict(self, prefill_store):
        prefill_store.set({"location": "Fès"})
        assert prefill_store.get().location == "Fès"

    def test_round_trip_keeps_service_hints(self, prefill_store):
        payload = {
            "serviceTitle": "Piscine",
            "message": "Nettoyage profond, 40 m²",
            "type": "profond",
            "size": "40",
            "totalPrice": 600,
        }
        prefill_store.set(payload)
        stored = prefill_store.get()
        assert stored.model_dump(by_alias=True, exclude_none=True) == payload
        assert stored.service_title == "Piscine"
        assert stored.variant == "profond"
        assert stored.total_price == 600

    def test_unknown_keys_survive(self, prefill_store):
        prefill_store.set({"message": "Villa", "preferredSlot": "matin"})
        assert prefill_store.get().model_extra == {"preferredSlot": "matin"}

    def test_file_uses_storefront_keys(self, prefill_store):
        prefill_store.set(BookingPrefill(service_title="Tapis", total_price=150))
        raw = json.loads(prefill_store.path.read_text(encoding="utf-8"))
        assert raw == {"serviceTitle": "Tapis", "totalPrice": 150}

    def test_remove_when_empty(self, prefill_store):
        prefill_store.remove()
        assert prefill_store.get() is None

    def test_corrupt_file_reads_as_none(self, prefill_store):
        prefill_store.path.parent.mkdir(parents=True, exist_ok=True)
        prefill_store.path.write_text("{not json", encoding="utf-8")
        assert prefill_store.get() is None

    def test_key_names_the_file(self, tmp_path):
        store = PrefillStore(directory=tmp_path, key="booking_prefill")
        assert store.path == tmp_path / "booking_prefill.json"
