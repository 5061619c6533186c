"""
Mock catalog storage.

In production, these reads go to the hosted Postgres backend: the
``menage`` table holds top-level housekeeping categories and the
``types_menage`` table holds the bookable variants under them. Cooking
types sold together with housekeeping come from the ``types`` table.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from menage.errors import CatalogUnavailableError
from menage.schemas.catalog_schema import CatalogRecord

logger = logging.getLogger(__name__)

_EPOCH = datetime(2025, 1, 1, tzinfo=timezone.utc)

# Top-level housekeeping categories (menage table)
_MENAGE_ROWS: list[dict[str, Any]] = [
    {"id": 1, "name_fr": "Tapis et canapés", "name_ar": "سجاد وكنب", "name_en": "Carpets and sofas"},
    {"id": 2, "name_fr": "Piscine", "name_ar": "مسبح", "name_en": "Swimming pool"},
    {"id": 3, "name_fr": "Ménage complet", "name_ar": "تدبير منزلي", "name_en": "Housekeeping"},
    {"id": 4, "name_fr": "Lavage et repassage", "name_ar": "غسيل و كي", "name_en": "Laundry and ironing"},
    {"id": 5, "name_fr": "Bureaux et usine", "name_ar": "مكاتب و مصنع", "name_en": "Office and factory"},
    {"id": 6, "name_fr": "Airbnb", "name_ar": "Airbnb", "name_en": "Airbnb"},
    {"id": 7, "name_fr": "Chaussures", "name_ar": "أحذية", "name_en": "Shoes"},
    {"id": 8, "name_fr": "Lavage de voiture", "name_ar": "غسيل سيارة", "name_en": "Car wash"},
]

# Bookable variants (types_menage table)
_TYPE_ROWS: list[dict[str, Any]] = [
    {"id": 101, "menage_id": 1, "price": 25, "name_fr": "Nettoyage de tapis",
     "name_ar": "تنظيف السجاد", "name_en": "Carpet cleaning",
     "description_fr": "Shampooing et séchage de vos tapis."},
    {"id": 102, "menage_id": 1, "price": 100, "name_fr": "Nettoyage de canapés",
     "name_ar": "تنظيف الكنب", "name_en": "Sofa cleaning",
     "description_fr": "Nettoyage en profondeur des canapés."},
    {"id": 103, "menage_id": 1, "price": 1200, "name_fr": "Tapis et canapés",
     "name_ar": "سجاد وكنب", "name_en": "Carpet and sofa"},
    {"id": 201, "menage_id": 2, "price": 15, "name_fr": "Nettoyage profond",
     "name_ar": "تنظيف عميق", "name_en": "Deep pool cleaning"},
    {"id": 202, "menage_id": 2, "price": 8, "name_fr": "Nettoyage standard",
     "name_ar": "تنظيف عادي", "name_en": "Standard pool cleaning"},
    {"id": 301, "menage_id": 3, "price": 3000, "name_fr": "Resort hôtel",
     "name_ar": "منتجع فندق", "name_en": "Resort hotel"},
    {"id": 302, "menage_id": 3, "price": None, "name_fr": "Maison d'hôte",
     "name_ar": "بيت ضيافة", "name_en": "Guest house"},
    {"id": 303, "menage_id": 3, "price": None, "name_fr": "Maison",
     "name_ar": "منزل", "name_en": "House"},
    {"id": 304, "menage_id": 3, "price": None, "name_fr": "Appartement",
     "name_ar": "شقة", "name_en": "Apartment"},
    {"id": 305, "menage_id": 3, "price": 1500, "name_fr": "Villa",
     "name_ar": "فيلا", "name_en": "Villa"},
    {"id": 306, "menage_id": 3, "price": None, "name_fr": "Hôtel",
     "name_ar": "فندق", "name_en": "Hotel"},
    {"id": 401, "menage_id": 4, "price": None, "name_fr": "Lavage",
     "name_ar": "غسيل", "name_en": "Laundry"},
    {"id": 402, "menage_id": 4, "price": None, "name_fr": "Repassage",
     "name_ar": "كي الملابس", "name_en": "Ironing"},
    {"id": 501, "menage_id": 5, "price": 6, "name_fr": "Nettoyage de bureaux",
     "name_ar": "تنظيف المكاتب", "name_en": "Office cleaning"},
    {"id": 502, "menage_id": 5, "price": 4, "name_fr": "Nettoyage d'usine",
     "name_ar": "تنظيف مصنع", "name_en": "Factory cleaning"},
    {"id": 601, "menage_id": 6, "price": 250, "name_fr": "Airbnb nettoyage rapide",
     "name_ar": "تنظيف سريع", "name_en": "Airbnb quick cleaning"},
    {"id": 602, "menage_id": 6, "price": 450, "name_fr": "Airbnb nettoyage complet",
     "name_ar": "تنظيف كامل", "name_en": "Airbnb complete cleaning"},
    {"id": 701, "menage_id": 7, "price": 30, "name_fr": "Cirage de chaussures",
     "name_ar": "تلميع الأحذية", "name_en": "Shoe polish"},
    {"id": 702, "menage_id": 7, "price": 40, "name_fr": "Nettoyage de chaussures",
     "name_ar": "تنظيف الأحذية", "name_en": "Shoe cleaning"},
    {"id": 801, "menage_id": 8, "price": 80, "name_fr": "Lavage en centre",
     "name_ar": "غسيل في المركز", "name_en": "Car wash center"},
    {"id": 802, "menage_id": 8, "price": 120, "name_fr": "Lavage à domicile",
     "name_ar": "غسيل في المنزل", "name_en": "Car wash at home"},
]

# Cooking types offered next to housekeeping (types table, Cuisine category)
_CUISINE_ROWS: list[dict[str, Any]] = [
    {"id": 901, "price": 200, "name_fr": "Cuisine marocaine",
     "name_ar": "طبخ مغربي", "name_en": "Moroccan cooking"},
    {"id": 902, "price": 250, "name_fr": "Cuisine internationale",
     "name_ar": "طبخ عالمي", "name_en": "International cooking"},
    {"id": 903, "price": 150, "name_fr": "Pâtisserie",
     "name_ar": "حلويات", "name_en": "Pastry"},
]

_records: list[CatalogRecord] = []
_categories: list[CatalogRecord] = []
_cuisine: list[CatalogRecord] = []
_unavailable = False


def _seed() -> None:
    _categories[:] = [
        CatalogRecord(**row, created_at=_EPOCH + timedelta(days=row["id"]))
        for row in _MENAGE_ROWS
    ]
    _records[:] = [
        CatalogRecord(**row, created_at=_EPOCH + timedelta(hours=row["id"]))
        for row in _TYPE_ROWS
    ]
    _cuisine[:] = [CatalogRecord(**row) for row in _CUISINE_ROWS]


def _newest_first(records: list[CatalogRecord]) -> list[CatalogRecord]:
    return sorted(records, key=lambda r: r.created_at or _EPOCH, reverse=True)


def _check_available(table: str) -> None:
    if _unavailable:
        logger.error("Catalog read failed for %s", table)
        raise CatalogUnavailableError(f"Unable to load {table}")


def list_menage_categories() -> list[CatalogRecord]:
    """Return top-level housekeeping categories, newest first."""
    _check_available("menage")
    return _newest_first(_categories)


def list_category_records(menage_id: Optional[int] = None) -> list[CatalogRecord]:
    """Return bookable catalog records, newest first.

    Args:
        menage_id: Restrict to variants of one top-level category.

    Raises:
        CatalogUnavailableError: The catalog could not be read.
    """
    _check_available("types_menage")
    rows = [r for r in _records if menage_id is None or r.menage_id == menage_id]
    logger.debug("Loaded %d catalog records (menage_id=%s)", len(rows), menage_id)
    return _newest_first(rows)


def list_cuisine_types() -> list[CatalogRecord]:
    """Return the cooking types that can be booked with housekeeping."""
    _check_available("types")
    return list(_cuisine)


def get_record(record_id: int) -> Optional[CatalogRecord]:
    """Fetch one catalog record by id."""
    _check_available("types_menage")
    for record in _records:
        if record.id == record_id:
            return record
    return None


def add_record(record: CatalogRecord) -> None:
    """Insert a record, as the admin backend would."""
    _records.append(record)


def set_unavailable(unavailable: bool = True) -> None:
    """Simulate a storage outage. Used by tests."""
    global _unavailable
    _unavailable = unavailable


def reset() -> None:
    """Restore the seeded catalog. Used by test fixtures for isolation."""
    global _unavailable
    _unavailable = False
    _seed()


_seed()
