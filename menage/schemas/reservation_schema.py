"""Reservation data models."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from menage.schemas.catalog_schema import CatalogRecord


class ContactDetails(BaseModel):
    """Customer contact block collected by the reservation form."""
    firstname: str
    phone: str
    email: Optional[str] = None
    location: Optional[str] = None
    preferred_date: Optional[str] = None
    message: Optional[str] = None


class ReservationRecord(BaseModel):
    """Row written to a family's reservation table.

    ``final_price`` is the client-computed quote and is stored as-is.
    """
    firstname: str
    phone: str
    email: Optional[str] = None
    location: Optional[str] = None
    preferred_date: Optional[str] = None
    message: Optional[str] = None
    service_type: str
    type_menage_id: Optional[int] = None
    menage_id: Optional[int] = None
    item_name: Optional[str] = None
    item_description: Optional[str] = None
    item_price: Optional[float] = None
    item_image: Optional[str] = None
    selection: dict[str, Any] = Field(default_factory=dict)
    total_area_m2: Optional[float] = None
    final_price: float = 0.0
    status: str = "pending"
    user_id: Optional[str] = None
    # Set only by the combined housekeeping + cooking booking
    menage_type: Optional[str] = None
    cuisine_types: list[str] = Field(default_factory=list)

    @classmethod
    def build(
        cls,
        contact: ContactDetails,
        service_type: str,
        record: Optional[CatalogRecord],
        lang: str = "fr",
        **extra: Any,
    ) -> "ReservationRecord":
        """Assemble a reservation from the form, the chosen label and a catalog snapshot."""
        snapshot: dict[str, Any] = {}
        if record is not None:
            snapshot = {
                "type_menage_id": record.id,
                "menage_id": record.menage_id,
                "item_name": record.localized_name(lang) or None,
                "item_description": record.localized_description(lang) or None,
                "item_price": record.price,
                "item_image": record.image,
            }
        return cls(**contact.model_dump(), service_type=service_type, **snapshot, **extra)


class ReservationRow(ReservationRecord):
    """A stored reservation, as returned by the reservation tool."""
    id: int
    table: str
    created_at: datetime
