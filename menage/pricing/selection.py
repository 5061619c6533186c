"""
Immutable selection state for one booking page, and the pure reducer over it.

A page never mutates a Selection in place; each user input is an action
applied with ``apply(selection, action)``, returning a new Selection.

Usage:
    sel = Selection()
    sel = apply(sel, ToggleOption("rooms"))
    sel = apply(sel, SetDimension("rooms", 0, "length", "400"))
    sel = apply(sel, SetDimension("rooms", 0, "width", "300"))
    if is_reservable(sel, table):
        price = quote(sel, table)
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Union

from menage.pricing.strategies import AREA_MODES, Dimension, PricingMode, total_area
from menage.pricing.rate_tables import RateTable
from menage.utils import round_money, sanitize_decimal

logger = logging.getLogger(__name__)

DIMENSION_FIELDS = ("length", "width")


@dataclass(frozen=True)
class Selection:
    options: tuple[str, ...] = ()
    quantities: Mapping[str, int] = field(default_factory=dict)
    dimensions: Mapping[str, tuple[Dimension, ...]] = field(default_factory=dict)
    flags: frozenset[str] = frozenset()

    def is_selected(self, key: str) -> bool:
        return key in self.options or key in self.flags

    def quantity(self, key: str) -> int:
        return self.quantities.get(key, 0)

    def pieces(self, key: str) -> tuple[Dimension, ...]:
        return self.dimensions.get(key, ())

    @property
    def is_empty(self) -> bool:
        return not self.options and not self.flags


# --- Actions ---

@dataclass(frozen=True)
class ToggleOption:
    key: str


@dataclass(frozen=True)
class SetQuantity:
    key: str
    quantity: Any


@dataclass(frozen=True)
class SetPieceCount:
    key: str
    count: Any


@dataclass(frozen=True)
class SetDimension:
    key: str
    index: int
    field: str
    value: Any


@dataclass(frozen=True)
class RemovePiece:
    key: str
    index: int


@dataclass(frozen=True)
class ToggleFlag:
    flag: str


@dataclass(frozen=True)
class ToggleChoice:
    """Radio-style toggle: choosing ``key`` drops every other option starting with ``group``."""
    key: str
    group: str


Action = Union[
    ToggleOption, SetQuantity, SetPieceCount, SetDimension, RemovePiece, ToggleFlag, ToggleChoice,
]


def _count(value: Any) -> int:
    return int(sanitize_decimal(value))


def _select(selection: Selection, key: str) -> tuple[str, ...]:
    if key in selection.options:
        return selection.options
    return selection.options + (key,)


def _without(mapping: Mapping[str, Any], key: str) -> dict[str, Any]:
    return {k: v for k, v in mapping.items() if k != key}


def _deselect(selection: Selection, key: str) -> Selection:
    return replace(
        selection,
        options=tuple(k for k in selection.options if k != key),
        quantities=_without(selection.quantities, key),
        dimensions=_without(selection.dimensions, key),
    )


def apply(selection: Selection, action: Action) -> Selection:
    """Return the Selection that results from one user action.

    Setting a quantity or a dimension on an option also selects it.
    Deselecting an option drops its quantity and dimension entries.
    """
    if isinstance(action, ToggleOption):
        if action.key in selection.options:
            return _deselect(selection, action.key)
        return replace(selection, options=_select(selection, action.key))

    if isinstance(action, ToggleChoice):
        if action.key in selection.options:
            return _deselect(selection, action.key)
        for key in selection.options:
            if key.startswith(action.group):
                selection = _deselect(selection, key)
        return replace(selection, options=_select(selection, action.key))

    if isinstance(action, SetQuantity):
        quantities = dict(selection.quantities)
        quantities[action.key] = _count(action.quantity)
        return replace(selection, options=_select(selection, action.key), quantities=quantities)

    if isinstance(action, SetPieceCount):
        count = _count(action.count)
        current = selection.pieces(action.key)
        if count <= len(current):
            pieces = current[:count]
        else:
            pieces = current + tuple(Dimension() for _ in range(count - len(current)))
        dimensions = dict(selection.dimensions)
        dimensions[action.key] = pieces
        return replace(selection, options=_select(selection, action.key), dimensions=dimensions)

    if isinstance(action, SetDimension):
        if action.field not in DIMENSION_FIELDS:
            raise ValueError(f"Unknown dimension field: {action.field!r}")
        if action.index < 0:
            raise IndexError(f"Negative piece index: {action.index}")
        pieces = list(selection.pieces(action.key))
        while len(pieces) <= action.index:
            pieces.append(Dimension())
        pieces[action.index] = replace(
            pieces[action.index], **{action.field: sanitize_decimal(action.value)}
        )
        dimensions = dict(selection.dimensions)
        dimensions[action.key] = tuple(pieces)
        return replace(selection, options=_select(selection, action.key), dimensions=dimensions)

    if isinstance(action, RemovePiece):
        pieces = selection.pieces(action.key)
        if not 0 <= action.index < len(pieces):
            return selection
        dimensions = dict(selection.dimensions)
        dimensions[action.key] = pieces[: action.index] + pieces[action.index + 1:]
        return replace(selection, dimensions=dimensions)

    if isinstance(action, ToggleFlag):
        return replace(selection, flags=selection.flags ^ {action.flag})

    raise TypeError(f"Unsupported selection action: {type(action).__name__}")


def incomplete_options(selection: Selection, table: RateTable) -> list[str]:
    """List the selected options that still block a reservation."""
    missing: list[str] = []
    for key in selection.options:
        strategy = table.get(key)
        if strategy is None:
            missing.append(key)
        elif strategy.mode in AREA_MODES:
            if not any(d.is_complete for d in selection.pieces(key)):
                missing.append(key)
        elif strategy.mode == PricingMode.PER_PIECE:
            if selection.quantity(key) <= 0:
                missing.append(key)
    for flag in selection.flags:
        if flag not in table:
            missing.append(flag)
    return missing


def is_reservable(selection: Selection, table: RateTable) -> bool:
    """True when something is selected and every selected option is fully specified."""
    if selection.is_empty:
        return False
    return not incomplete_options(selection, table)


def option_subtotals(selection: Selection, table: RateTable) -> dict[str, float]:
    """Price each selected option and flag independently."""
    subtotals: dict[str, float] = {}
    for key in selection.options + tuple(sorted(selection.flags)):
        strategy = table.get(key)
        if strategy is None:
            logger.debug("Ignoring option %r with no rate", key)
            continue
        subtotals[key] = strategy.price(selection.quantity(key), selection.pieces(key))
    return subtotals


def quote(selection: Selection, table: RateTable) -> float:
    """Composite price: the sum of option sub-totals, rounded to cents."""
    return round_money(sum(option_subtotals(selection, table).values()))


def selected_area(selection: Selection, table: RateTable) -> float:
    """Total measured area over every selected area-priced option, in m2."""
    area = 0.0
    for key in selection.options:
        strategy = table.get(key)
        if strategy is not None and strategy.mode in AREA_MODES:
            area += total_area(selection.pieces(key))
    return round_money(area)


def describe(selection: Selection) -> dict[str, Any]:
    """Plain-dict snapshot of a selection, as stored with the reservation."""
    detail: dict[str, Any] = {}
    for key in selection.options:
        entry: dict[str, Any] = {}
        if key in selection.quantities:
            entry["quantity"] = selection.quantities[key]
        pieces = selection.pieces(key)
        if pieces:
            entry["dimensions"] = [
                {"length": d.length, "width": d.width, "area_m2": round_money(d.area_m2)}
                for d in pieces
            ]
        detail[key] = entry
    for flag in sorted(selection.flags):
        detail[flag] = True
    return detail
