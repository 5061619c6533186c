"""
Device-local prefill storage.

A page earlier in the funnel can leave a message and a location for the
next reservation form. The value lives in one JSON file per key under the
configured prefill directory and is removed once a reservation succeeds.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from menage.config import settings

logger = logging.getLogger(__name__)


class BookingPrefill(BaseModel):
    """Hints left by an earlier page, stored under the keys that page writes.

    Unknown keys are kept so a later reader sees exactly what was stored.
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    message: Optional[str] = None
    location: Optional[str] = None
    service_title: Optional[str] = Field(default=None, alias="serviceTitle")
    variant: Optional[str] = Field(default=None, alias="type")
    size: Union[str, float, None] = None
    total_price: Optional[float] = Field(default=None, alias="totalPrice")


class PrefillStore:
    """Key-value store holding a single BookingPrefill.

    Usage:
        store = PrefillStore()
        store.set(BookingPrefill(message="Deux tapis", location="Rabat"))
        store.get()     # BookingPrefill(message='Deux tapis', location='Rabat')
        store.remove()
    """

    def __init__(self, directory: Union[str, Path, None] = None, key: Optional[str] = None) -> None:
        self._dir = Path(directory if directory is not None else settings.storage.prefill_dir)
        self._key = key or settings.storage.prefill_key

    @property
    def path(self) -> Path:
        return self._dir / f"{self._key}.json"

    def get(self) -> Optional[BookingPrefill]:
        """Read the stored prefill; a missing or unreadable file reads as None."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return BookingPrefill.model_validate(data)
        except (OSError, ValueError, TypeError, ValidationError) as e:
            logger.warning("Ignoring unreadable prefill %s: %s", self.path.name, e)
            return None

    def set(self, value: Union[BookingPrefill, dict]) -> None:
        prefill = value if isinstance(value, BookingPrefill) else BookingPrefill.model_validate(value)
        self._dir.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(prefill.model_dump(by_alias=True, exclude_none=True), f, ensure_ascii=False)
        logger.debug("Prefill stored under %s", self._key)

    def remove(self) -> None:
        self.path.unlink(missing_ok=True)
