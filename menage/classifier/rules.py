"""
Keyword rules for classifying catalog records into bookable sub-categories.

The catalog carries no explicit sub-category column, so records are
classified by substring matching on their localized names. Each family
supplies an ordered list of rules; the first rule that matches wins.

Usage:
    label = classify(record, TAPIS_CANAPES)
    if label is None:
        ...  # render as an informational, non-clickable card
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from menage.schemas.catalog_schema import CatalogRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Clause:
    """Matches one language field holding every `all_of` and no `none_of` substring."""
    lang: str
    all_of: tuple[str, ...]
    none_of: tuple[str, ...] = ()

    def matches(self, names: dict[str, str]) -> bool:
        text = names.get(self.lang, "")
        if not text:
            return False
        return all(k in text for k in self.all_of) and not any(k in text for k in self.none_of)


def has(lang: str, *keywords: str, without: Iterable[str] = ()) -> Clause:
    """Shorthand: ``has("fr", "tapis", "canapé")`` needs both words in the French name."""
    return Clause(lang=lang, all_of=tuple(keywords), none_of=tuple(without))


def any_of(lang: str, *keywords: str, without: Iterable[str] = ()) -> list[Clause]:
    """One single-keyword clause per keyword, all on the same language field."""
    return [has(lang, k, without=without) for k in keywords]


@dataclass(frozen=True)
class Rule:
    """A sub-category: positive clauses, plus clauses that veto the match."""
    label: str
    route: str
    match: tuple[Clause, ...]
    exclude: tuple[Clause, ...] = ()
    requires: tuple[Clause, ...] = ()

    def matches(self, names: dict[str, str]) -> bool:
        if not any(c.matches(names) for c in self.match):
            return False
        if self.requires and not any(c.matches(names) for c in self.requires):
            return False
        return not any(c.matches(names) for c in self.exclude)


@dataclass(frozen=True)
class RuleSet:
    """Ordered rules for one product family plus its listing filters."""
    family: str
    route: str
    rules: tuple[Rule, ...]
    include: tuple[Clause, ...] = ()
    exclude: tuple[Clause, ...] = ()
    reservation_route: str = ""
    reservation_table: str = ""
    # Route of the top-level card whose records this family lists, when not its own
    parent_route: str = ""
    labels: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", tuple(r.label for r in self.rules))

    def route_for(self, label: str) -> Optional[str]:
        for rule in self.rules:
            if rule.label == label:
                return rule.route
        return None

    def admits(self, record: CatalogRecord) -> bool:
        """Check the family-level listing filter for one record."""
        names = record.names()
        if self.include and not any(c.matches(names) for c in self.include):
            return False
        return not any(c.matches(names) for c in self.exclude)


def classify(record: CatalogRecord, rule_set: RuleSet) -> Optional[str]:
    """Return the first matching label for a record, or None.

    An explicit ``category`` on the record that belongs to this family
    takes precedence over keyword matching.
    """
    if record.category and record.category in rule_set.labels:
        return record.category

    names = record.names()
    for rule in rule_set.rules:
        if rule.matches(names):
            return rule.label
    logger.debug("No %s category for record %s", rule_set.family, record.id)
    return None


def filter_listing(records: Iterable[CatalogRecord], rule_set: RuleSet) -> list[CatalogRecord]:
    """Apply the family listing filter, dropping duplicate ids and keeping order."""
    seen: set[int] = set()
    kept: list[CatalogRecord] = []
    total = 0
    for record in records:
        total += 1
        if record.id in seen or not rule_set.admits(record):
            continue
        seen.add(record.id)
        kept.append(record)
    logger.debug("[%s] Filtered items: %d out of %d", rule_set.family, len(kept), total)
    return kept
