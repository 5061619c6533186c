"""Family listing: catalog records turned into clickable or inert cards."""

import logging
from dataclasses import dataclass
from typing import Optional

from menage.classifier import classify, filter_listing, get_family
from menage.classifier.families import MENAGE
from menage.pricing.strategies import format_price
from menage.schemas.catalog_schema import CatalogRecord
from menage.tools import catalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingCard:
    record: CatalogRecord
    title: str
    description: str
    price_label: Optional[str]
    label: Optional[str]
    route: Optional[str]

    @property
    def clickable(self) -> bool:
        return self.route is not None


def build_cards(records: list[CatalogRecord], family: str, lang: str = "fr") -> list[ListingCard]:
    """Filter and classify records for one family listing, keeping backend order."""
    rule_set = get_family(family)
    cards: list[ListingCard] = []
    for record in filter_listing(records, rule_set):
        label = classify(record, rule_set)
        cards.append(ListingCard(
            record=record,
            title=record.localized_name(lang),
            description=record.localized_description(lang),
            price_label=format_price(record.price),
            label=label,
            route=rule_set.route_for(label) if label else None,
        ))
    return cards


def resolve_menage_id(family: str) -> Optional[int]:
    """Find the top-level category whose card routes to this family's page."""
    rule_set = get_family(family)
    route = rule_set.parent_route or rule_set.route
    for category in catalog.list_menage_categories():
        label = classify(category, MENAGE)
        if label and MENAGE.route_for(label) == route:
            return category.id
    logger.warning("No housekeeping category routes to %s", route)
    return None


def load_listing(family: str, menage_id: Optional[int] = None, lang: str = "fr") -> list[ListingCard]:
    """Read the catalog and build the cards for a family page.

    The top-level ``menage`` family lists housekeeping categories; every
    other family lists bookable variants.

    Raises:
        CatalogUnavailableError: The catalog could not be read.
        KeyError: The family is unknown.
    """
    if family == MENAGE.family:
        records = catalog.list_menage_categories()
    else:
        if menage_id is None:
            menage_id = resolve_menage_id(family)
        records = catalog.list_category_records(menage_id)
    cards = build_cards(records, family, lang)
    logger.info("Listing %s: %d cards", family, len(cards))
    return cards
