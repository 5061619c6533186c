"""Shared test fixtures and helpers."""

from typing import Optional

import pytest

from menage.booking.combined import MenageCuisinePage
from menage.booking.contact_form import ContactForm
from menage.booking.page import BookingPage
from menage.booking.state_machine import BookingStateMachine
from menage.schemas.catalog_schema import CatalogRecord
from menage.tools import auth, catalog, reservations
from menage.tools.prefill import PrefillStore


@pytest.fixture(autouse=True)
def _reset_tools():
    catalog.reset()
    reservations.reset()
    auth.reset()
    yield
    catalog.reset()
    reservations.reset()
    auth.reset()


@pytest.fixture
def state_machine():
    return BookingStateMachine()


@pytest.fixture
def contact_form():
    return ContactForm()


@pytest.fixture
def prefill_store(tmp_path):
    return PrefillStore(directory=tmp_path / "prefill")


@pytest.fixture
def make_page(prefill_store):
    """Factory for booking pages that keep their prefill under tmp_path."""
    def _make(label: str, record: Optional[CatalogRecord] = None) -> BookingPage:
        page = BookingPage(label, record, prefill_store=prefill_store)
        page.load()
        return page
    return _make


@pytest.fixture
def menage_cuisine_page(prefill_store):
    """Combined housekeeping + cooking page over the seeded catalog."""
    page = MenageCuisinePage(
        catalog.list_category_records(menage_id=3),
        catalog.list_cuisine_types(),
        prefill_store=prefill_store,
    )
    page.load()
    return page


_next_id = iter(range(10_000, 20_000))


def make_record(
    name_fr: Optional[str] = None,
    name_en: Optional[str] = None,
    name_ar: Optional[str] = None,
    price: Optional[float] = None,
    record_id: Optional[int] = None,
    **kwargs,
) -> CatalogRecord:
    """Helper to create a CatalogRecord with a generic French name when none is given."""
    if not (name_fr or name_en or name_ar):
        name_fr = "Service"
    return CatalogRecord(
        id=record_id if record_id is not None else next(_next_id),
        name_fr=name_fr,
        name_en=name_en,
        name_ar=name_ar,
        price=price,
        **kwargs,
    )


def fill_contact(page: BookingPage, location: Optional[str] = "Rabat") -> None:
    """Fill the contact form with valid details."""
    page.set_contact("firstname", "Salma")
    page.set_contact("phone", "06 12 34 56 78")
    if location:
        page.set_contact("location", location)
