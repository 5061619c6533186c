"""Exception hierarchy for the booking engine.

All failures are scoped to a single page or request and recoverable by the
user; nothing here is fatal to the process.
"""


class MenageError(Exception):
    """Base class for booking engine errors."""


class CatalogUnavailableError(MenageError):
    """Raised when catalog records cannot be read from storage."""


class ReservationFailedError(MenageError):
    """Raised when a reservation insert is rejected by storage."""


class SelectionNotReservable(MenageError):
    """Raised when a submit is attempted on an incomplete selection."""


class UnknownCategoryError(MenageError, KeyError):
    """Raised when no rate table exists for a category label."""


class InvalidTransitionError(MenageError):
    """Raised when a booking page event is not valid from its current state."""


class ContactFormIncomplete(MenageError, ValueError):
    """Raised when a submit is attempted with missing or invalid contact fields."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(f"Contact form incomplete: {', '.join(errors)}")
        self.errors = errors
