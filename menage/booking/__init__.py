from menage.booking.combined import MenageCuisinePage
from menage.booking.contact_form import ContactForm, FieldStatus
from menage.booking.listing import ListingCard, load_listing
from menage.booking.page import BookingPage
from menage.booking.state_machine import (
    BookingState,
    BookingStateMachine,
    BookingTrigger,
)

__all__ = [
    "BookingPage",
    "MenageCuisinePage",
    "BookingStateMachine",
    "BookingState",
    "BookingTrigger",
    "ContactForm",
    "FieldStatus",
    "ListingCard",
    "load_listing",
]
