"""Rate tables: which options a category offers and how each one is priced."""

import logging
from typing import Callable, Iterable, Optional

from menage.config import PricingConfig, settings
from menage.errors import UnknownCategoryError
from menage.pricing.strategies import Flat, PerArea, PerPiece, Strategy, TieredMinimum
from menage.schemas.catalog_schema import CatalogRecord

logger = logging.getLogger(__name__)

RateTable = dict[str, Strategy]

# Options that are add-on flags rather than measured or counted options
FLAG_OPTIONS: frozenset[str] = frozenset({"breakfast", "sheets", "laundry", "towels", "windows"})

# Display labels for option keys, French first like the rest of the site
OPTION_LABELS: dict[str, str] = {
    "carpet": "Tapis",
    "sofa": "Canapé",
    "base": "Forfait",
    "pool": "Piscine",
    "surface": "Surface",
    "pairs": "Paires",
    "rooms": "Chambres",
    "suites": "Suites",
    "garden": "Jardin",
    "bathrooms": "Salles de bain",
    "salons": "Salons",
    "kitchen": "Cuisine",
    "breakfast": "Petit-déjeuner",
    "sheets": "Changement des draps",
    "laundry": "Lessive",
    "towels": "Serviettes",
    "windows": "Vitres",
    "everyday": "Vêtements quotidiens",
    "jacket": "Veste",
    "coat": "Manteau",
    "leather_jacket": "Veste en cuir",
    "bedsheet": "Drap",
    "blanket": "Couverture",
    "quilted_blanket": "Couette",
    "menage": "Type de ménage",
    "cuisine": "Cuisine",
}


def _base_rate(record: Optional[CatalogRecord]) -> float:
    if record is None or record.price is None:
        return 0.0
    return max(record.price, 0.0)


def _housekeeping(pricing: PricingConfig, *areas: str) -> RateTable:
    rate = pricing.housekeeping_rate_per_m2
    return {key: PerArea(rate, round_area=True) for key in areas}


def _guest_house(record: Optional[CatalogRecord], pricing: PricingConfig) -> RateTable:
    table = _housekeeping(pricing, "rooms", "suites", "pool", "garden")
    table["breakfast"] = Flat(pricing.breakfast_price)
    table["sheets"] = Flat(pricing.sheets_price)
    return table


def _house(record: Optional[CatalogRecord], pricing: PricingConfig) -> RateTable:
    return _housekeeping(pricing, "rooms", "bathrooms", "salons", "garden")


def _apartment(record: Optional[CatalogRecord], pricing: PricingConfig) -> RateTable:
    table = _housekeeping(pricing, "rooms", "salons", "bathrooms", "kitchen")
    table["laundry"] = Flat(pricing.laundry_price)
    return table


def _hotel(record: Optional[CatalogRecord], pricing: PricingConfig) -> RateTable:
    table = _housekeeping(pricing, "rooms", "bathrooms")
    table["sheets"] = Flat(pricing.sheets_price)
    table["towels"] = Flat(pricing.towels_price)
    table["windows"] = Flat(pricing.windows_price)
    return table


def _garments(record: Optional[CatalogRecord], pricing: PricingConfig) -> RateTable:
    return {
        "everyday": PerPiece(pricing.everyday_garment_price),
        "jacket": PerPiece(pricing.jacket_price),
        "coat": PerPiece(pricing.coat_price),
        "leather_jacket": PerPiece(pricing.leather_jacket_price),
        "bedsheet": PerArea(pricing.bedsheet_rate_per_m2),
        "blanket": PerArea(pricing.blanket_rate_per_m2),
        "quilted_blanket": PerArea(pricing.quilted_blanket_rate_per_m2),
    }


def _carpet(record: Optional[CatalogRecord], pricing: PricingConfig) -> RateTable:
    return {"carpet": PerArea(_base_rate(record))}


def _sofa(record: Optional[CatalogRecord], pricing: PricingConfig) -> RateTable:
    return {
        "sofa": TieredMinimum(
            threshold_m2=pricing.sofa_threshold_m2,
            minimum=pricing.sofa_minimum_price,
            rate_per_m2=pricing.sofa_rate_per_m2,
        )
    }


def _pool(record: Optional[CatalogRecord], pricing: PricingConfig) -> RateTable:
    return {"pool": PerArea(_base_rate(record))}


def _surface(record: Optional[CatalogRecord], pricing: PricingConfig) -> RateTable:
    return {"surface": PerArea(_base_rate(record))}


def _pairs(record: Optional[CatalogRecord], pricing: PricingConfig) -> RateTable:
    return {"pairs": PerPiece(_base_rate(record))}


def _flat(record: Optional[CatalogRecord], pricing: PricingConfig) -> RateTable:
    return {"base": Flat(_base_rate(record))}


_BUILDERS: dict[str, Callable[[Optional[CatalogRecord], PricingConfig], RateTable]] = {
    "carpet": _carpet,
    "sofa": _sofa,
    "carpet_and_sofa": _flat,
    "pool_deep_clean": _pool,
    "pool_standard_clean": _pool,
    "guest_house": _guest_house,
    "house": _house,
    "apartment": _apartment,
    "hotel": _hotel,
    "villa": _flat,
    "resort_hotel": _flat,
    "laundry": _garments,
    "ironing": _garments,
    "offices": _surface,
    "factory": _surface,
    "shoe_cleaning": _pairs,
    "shoe_polish": _pairs,
    "airbnb_quick": _flat,
    "airbnb_complete": _flat,
    "car_wash_center": _flat,
    "car_wash_home": _flat,
}

PRICED_LABELS: tuple[str, ...] = tuple(_BUILDERS)


def rate_table_for(
    label: str,
    record: Optional[CatalogRecord] = None,
    pricing: Optional[PricingConfig] = None,
) -> RateTable:
    """Build the option -> strategy table for a bookable label.

    Record-priced categories read their base rate from ``record.price``;
    a missing price yields a zero rate rather than an error.

    Raises:
        UnknownCategoryError: the label has no booking page.
    """
    builder = _BUILDERS.get(label)
    if builder is None:
        raise UnknownCategoryError(label)
    table = builder(record, pricing or settings.pricing)
    logger.debug("Rate table for %s: %s", label, sorted(table))
    return table


def option_label(key: str) -> str:
    return OPTION_LABELS.get(key, key.replace("_", " ").capitalize())


# --------------------------------------------------------------------------- #
# Housekeeping booked together with cooking
# --------------------------------------------------------------------------- #

MENAGE_CHOICE = "menage_"
CUISINE_CHOICE = "cuisine_"

# Priced areas shown for each housekeeping type on the combined page
_COMBINED_AREAS: dict[str, tuple[str, ...]] = {
    "hotel": ("rooms", "bathrooms"),
    "apartment": ("rooms", "salons", "bathrooms"),
    "villa": ("rooms", "bathrooms", "salons", "garden", "pool"),
    "house": ("rooms", "bathrooms", "salons", "garden", "pool"),
    "resort_hotel": ("rooms", "bathrooms", "pool"),
    "guest_house": ("rooms", "suites", "pool"),
}


def choice_key(group: str, record: CatalogRecord) -> str:
    return f"{group}{record.id}"


def menage_cuisine_table(
    menage_records: Iterable[CatalogRecord],
    cuisine_types: Iterable[CatalogRecord],
    menage_label: Optional[str] = None,
    pricing: Optional[PricingConfig] = None,
) -> RateTable:
    """Build the rate table for one housekeeping type plus cooking.

    Every housekeeping type and every cooking type is a flat-priced choice
    keyed ``menage_<id>`` / ``cuisine_<id>``. Area options and add-ons
    depend on which housekeeping type is chosen (``menage_label``); with
    none chosen the table offers only the choices.
    """
    pricing = pricing or settings.pricing
    table: RateTable = {choice_key(MENAGE_CHOICE, r): Flat(_base_rate(r)) for r in menage_records}
    if menage_label is not None:
        table.update(_housekeeping(pricing, *_COMBINED_AREAS.get(menage_label, ())))
    if menage_label == "guest_house":
        table["breakfast"] = Flat(pricing.breakfast_price)
        table["sheets"] = Flat(pricing.combined_sheets_price)
    for cuisine in cuisine_types:
        table[choice_key(CUISINE_CHOICE, cuisine)] = Flat(_base_rate(cuisine))
    return table
