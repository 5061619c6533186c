"""Catalog data models and localized display helpers."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, model_validator

# Language fallback chain used whenever a localized field is empty
FALLBACK_CHAINS: dict[str, tuple[str, str, str]] = {
    "fr": ("fr", "en", "ar"),
    "en": ("en", "fr", "ar"),
    "ar": ("ar", "fr", "en"),
}


class CatalogRecord(BaseModel):
    """A purchasable service variant, owned by the admin backend."""
    id: int
    name_fr: Optional[str] = None
    name_ar: Optional[str] = None
    name_en: Optional[str] = None
    description_fr: Optional[str] = None
    description_ar: Optional[str] = None
    description_en: Optional[str] = None
    price: Optional[float] = None
    image: Optional[str] = None
    menage_id: Optional[int] = None
    category: Optional[str] = None
    created_at: Optional[datetime] = None

    @model_validator(mode="after")
    def _require_a_name(self) -> "CatalogRecord":
        if not any((name or "").strip() for name in (self.name_fr, self.name_ar, self.name_en)):
            raise ValueError("catalog record needs a name in at least one language")
        return self

    def names(self) -> dict[str, str]:
        """Lower-cased, trimmed names keyed by language; missing names are ''."""
        return {
            "fr": (self.name_fr or "").lower().strip(),
            "ar": (self.name_ar or "").lower().strip(),
            "en": (self.name_en or "").lower().strip(),
        }

    def localized_name(self, lang: str = "fr") -> str:
        return _first_filled(self, "name", lang)

    def localized_description(self, lang: str = "fr") -> str:
        return _first_filled(self, "description", lang)


def _first_filled(record: CatalogRecord, prefix: str, lang: str) -> str:
    for code in FALLBACK_CHAINS.get(lang, FALLBACK_CHAINS["fr"]):
        value = getattr(record, f"{prefix}_{code}")
        if value:
            return value
    return ""
