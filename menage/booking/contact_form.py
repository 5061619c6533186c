"""
Contact form for a reservation: Collect -> Validate.

Each field keeps its raw input and a normalized value; the page refuses to
submit until every required field has validated.

Usage:
    form = ContactForm(require_location=True)
    ok, msg = form.set_field("phone", "06 12 34 56 78")
    if form.is_complete():
        contact = form.to_contact()
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from menage.config import settings
from menage.errors import ContactFormIncomplete
from menage.schemas.reservation_schema import ContactDetails
from menage.tools.prefill import BookingPrefill
from menage.utils import normalize_phone

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MIN_PHONE_DIGITS = 7
MAX_PHONE_DIGITS = 15
MIN_LOCATION_LENGTH = 2

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class FieldStatus(str, Enum):
    EMPTY = "empty"
    INVALID = "invalid"
    VALID = "valid"


def _validate_name(value: str) -> bool:
    return len(value.strip()) >= MIN_NAME_LENGTH


def _validate_phone(value: str) -> bool:
    digits = re.sub(r"[^\d]", "", value)
    return MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS


def _validate_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value.strip()))


def _validate_location(value: str) -> bool:
    return len(value.strip()) >= MIN_LOCATION_LENGTH


def _validate_date(value: str) -> bool:
    """Validate date is in YYYY-MM-DD format."""
    try:
        datetime.strptime(value.strip(), "%Y-%m-%d")
        return True
    except ValueError:
        return False


def _validate_message(value: str) -> bool:
    return len(value) <= settings.storage.max_message_length


@dataclass(frozen=True)
class FieldDefinition:
    name: str
    display_name: str
    required: bool = False
    validator: Optional[Callable[[str], bool]] = None


@dataclass
class FieldValue:
    raw_value: Optional[str] = None
    normalized_value: Optional[str] = None
    status: FieldStatus = FieldStatus.EMPTY
    error: Optional[str] = None
    history: list[str] = field(default_factory=list)


class ContactForm:
    """Customer details for one reservation, with per-field validation."""

    FIELD_DEFINITIONS: list[FieldDefinition] = [
        FieldDefinition("firstname", "first name", required=True, validator=_validate_name),
        FieldDefinition("phone", "phone number", required=True, validator=_validate_phone),
        FieldDefinition("email", "email", validator=_validate_email),
        FieldDefinition("location", "location", validator=_validate_location),
        FieldDefinition("preferred_date", "preferred date", validator=_validate_date),
        FieldDefinition("message", "message", validator=_validate_message),
    ]

    def __init__(self, require_location: bool = False) -> None:
        self.require_location = require_location
        self.fields: dict[str, FieldValue] = {
            defn.name: FieldValue() for defn in self.FIELD_DEFINITIONS
        }

    def _get_definition(self, name: str) -> FieldDefinition:
        for defn in self.FIELD_DEFINITIONS:
            if defn.name == name:
                return defn
        raise ValueError(f"Unknown field: {name}")

    def is_required(self, name: str) -> bool:
        if name == "location":
            return self.require_location
        return self._get_definition(name).required

    def _normalize(self, name: str, value: str) -> str:
        value = value.strip()
        if name == "phone":
            return normalize_phone(value)
        if name == "email":
            return value.lower()
        return value

    def set_field(self, name: str, raw_value: Optional[str]) -> tuple[bool, str]:
        """
        Set a field value with validation. Blank input clears the field.

        Returns:
            (success, message)
        """
        defn = self._get_definition(name)
        slot = self.fields[name]
        if slot.raw_value is not None:
            slot.history.append(slot.raw_value)
        slot.raw_value = raw_value

        if raw_value is None or not raw_value.strip():
            slot.normalized_value = None
            slot.status = FieldStatus.EMPTY
            slot.error = None
            return True, f"Cleared {defn.display_name}"

        if defn.validator and not defn.validator(raw_value):
            slot.normalized_value = None
            slot.status = FieldStatus.INVALID
            slot.error = f"The {defn.display_name} '{raw_value}' doesn't look right."
            logger.debug("Field '%s' validation failed", name)
            return False, slot.error

        slot.normalized_value = self._normalize(name, raw_value)
        slot.status = FieldStatus.VALID
        slot.error = None
        return True, f"Got {defn.display_name}: {slot.normalized_value}"

    def apply_prefill(self, prefill: Optional[BookingPrefill]) -> None:
        """Copy a stored message and location into fields the user has not filled."""
        if prefill is None:
            return
        for name in ("message", "location"):
            value = getattr(prefill, name)
            if value and self.fields[name].status == FieldStatus.EMPTY:
                self.set_field(name, value)
        logger.debug("Prefill applied to contact form")

    def get_value(self, name: str) -> Optional[str]:
        return self.fields[name].normalized_value

    def errors(self) -> dict[str, str]:
        """Field name -> message, for every invalid field and every missing required one."""
        problems: dict[str, str] = {}
        for defn in self.FIELD_DEFINITIONS:
            slot = self.fields[defn.name]
            if slot.status == FieldStatus.INVALID:
                problems[defn.name] = slot.error or f"Invalid {defn.display_name}."
            elif slot.status == FieldStatus.EMPTY and self.is_required(defn.name):
                problems[defn.name] = f"The {defn.display_name} is required."
        return problems

    def is_complete(self) -> bool:
        return not self.errors()

    def to_contact(self) -> ContactDetails:
        """Export the validated values.

        Raises:
            ContactFormIncomplete: If a required field is missing or any field is invalid.
        """
        problems = self.errors()
        if problems:
            raise ContactFormIncomplete(problems)
        return ContactDetails(**{
            d.name: self.fields[d.name].normalized_value for d in self.FIELD_DEFINITIONS
        })
