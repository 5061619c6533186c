"""
Mock reservation storage.

In production, each family writes to its own table on the hosted Postgres
backend. Failures come back as a result dict instead of raising, so the
booking page can show an inline message and keep the customer's selection.
"""

import logging
from datetime import datetime, timezone
from itertools import count
from typing import Optional, TypedDict

from menage.schemas.reservation_schema import ReservationRecord, ReservationRow

logger = logging.getLogger(__name__)

RESERVATION_TABLES: frozenset[str] = frozenset({
    "tapis_canapes_reservations",
    "piscine_reservations",
    "menage_complet_reservations",
    "menage_cuisine_reservations",
    "lavage_ropassage_reservations",
    "bureaux_usin_reservations",
    "airbnb_reservations",
    "chaussures_reservations",
    "voiture_reservations",
})

REQUIRED_FIELDS = ("firstname", "phone")


class ReservationResult(TypedDict, total=False):
    """Result from create_reservation."""

    success: bool
    message: str
    id: int
    table: str


_reservations: dict[int, ReservationRow] = {}
_ids = count(1)
_rejecting: Optional[str] = None


def create_reservation(record: ReservationRecord, table: str) -> ReservationResult:
    """Insert a reservation into a family's table."""
    if table not in RESERVATION_TABLES:
        return {"success": False, "message": f"Unknown reservation table: {table}."}

    if _rejecting is not None:
        logger.error("Insert into %s rejected: %s", table, _rejecting)
        return {"success": False, "message": _rejecting, "table": table}

    missing = [name for name in REQUIRED_FIELDS if not (getattr(record, name) or "").strip()]
    if missing:
        return {
            "success": False,
            "message": f"Cannot create reservation - missing required fields: {', '.join(missing)}.",
            "table": table,
        }

    reservation_id = next(_ids)
    row = ReservationRow(
        **record.model_dump(),
        id=reservation_id,
        table=table,
        created_at=datetime.now(timezone.utc),
    )
    _reservations[reservation_id] = row
    logger.info(
        "Reservation %d stored in %s: %s, %.2f",
        reservation_id, table, record.service_type, record.final_price,
    )
    return {
        "success": True,
        "id": reservation_id,
        "table": table,
        "message": f"Reservation {reservation_id} received.",
    }


def get_reservation(reservation_id: int) -> Optional[ReservationRow]:
    """Retrieve a stored reservation by id."""
    return _reservations.get(reservation_id)


def list_reservations(table: Optional[str] = None) -> list[ReservationRow]:
    """Return stored reservations, optionally for one table."""
    return [r for r in _reservations.values() if table is None or r.table == table]


def reject_inserts(message: Optional[str] = "Database error") -> None:
    """Make every insert fail with ``message``; pass None to accept again. Used by tests."""
    global _rejecting
    _rejecting = message


def reset() -> None:
    """Clear all reservations. Used by test fixtures for isolation."""
    global _ids, _rejecting
    _reservations.clear()
    _ids = count(1)
    _rejecting = None
