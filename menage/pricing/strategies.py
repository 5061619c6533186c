"""
Pricing strategies used by every booking family.

Four named modes cover the catalog:
1. PerPiece:      unit price x quantity (garments, shoe pairs)
2. PerArea:       sum of (length x width / 10000) x rate over entries (carpets, rooms, pools)
3. TieredMinimum: flat minimum up to an area threshold, per-m2 above it (sofas)
4. Flat:          fixed amount (breakfast, sheets change, flat-priced services)

Strategies never raise: missing or non-numeric input is priced as zero.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Sequence, Union

from menage.utils import round_money, sanitize_decimal

CM2_PER_M2 = 10000


class PricingMode(str, Enum):
    PER_PIECE = "per_piece"
    PER_AREA = "per_area"
    TIERED_MINIMUM = "tiered_minimum"
    FLAT = "flat"


@dataclass(frozen=True)
class Dimension:
    """One measured piece, in centimeters."""
    length: float = 0.0
    width: float = 0.0

    @classmethod
    def parse(cls, length: object = 0, width: object = 0) -> "Dimension":
        """Build a Dimension from free-text input."""
        return cls(length=sanitize_decimal(length), width=sanitize_decimal(width))

    @property
    def is_complete(self) -> bool:
        return self.length > 0 and self.width > 0

    @property
    def area_m2(self) -> float:
        if not self.is_complete:
            return 0.0
        return (self.length * self.width) / CM2_PER_M2


def total_area(dimensions: Sequence[Dimension]) -> float:
    """Sum the area of every complete entry, in m2."""
    return sum(d.area_m2 for d in dimensions)


@dataclass(frozen=True)
class PerPiece:
    unit_price: float
    mode: ClassVar[PricingMode] = PricingMode.PER_PIECE

    def price(self, quantity: int = 0, dimensions: Sequence[Dimension] = ()) -> float:
        if quantity <= 0 or self.unit_price <= 0:
            return 0.0
        return self.unit_price * quantity


@dataclass(frozen=True)
class PerArea:
    """Area pricing; with ``round_area`` each entry's area and price are rounded to cents."""
    rate_per_m2: float
    round_area: bool = False
    mode: ClassVar[PricingMode] = PricingMode.PER_AREA

    def price(self, quantity: int = 0, dimensions: Sequence[Dimension] = ()) -> float:
        if self.rate_per_m2 <= 0:
            return 0.0
        if not self.round_area:
            return total_area(dimensions) * self.rate_per_m2
        total = 0.0
        for dim in dimensions:
            if dim.is_complete:
                total += round_money(round_money(dim.area_m2) * self.rate_per_m2)
        return total


@dataclass(frozen=True)
class TieredMinimum:
    threshold_m2: float
    minimum: float
    rate_per_m2: float
    mode: ClassVar[PricingMode] = PricingMode.TIERED_MINIMUM

    def price_for_area(self, area_m2: float) -> float:
        """The threshold itself is billed at the minimum."""
        if area_m2 <= 0:
            return 0.0
        if area_m2 <= self.threshold_m2:
            return self.minimum
        return area_m2 * self.rate_per_m2

    def price(self, quantity: int = 0, dimensions: Sequence[Dimension] = ()) -> float:
        return self.price_for_area(total_area(dimensions))


@dataclass(frozen=True)
class Flat:
    amount: float
    mode: ClassVar[PricingMode] = PricingMode.FLAT

    def price(self, quantity: int = 0, dimensions: Sequence[Dimension] = ()) -> float:
        return max(self.amount, 0.0)


Strategy = Union[PerPiece, PerArea, TieredMinimum, Flat]

AREA_MODES = (PricingMode.PER_AREA, PricingMode.TIERED_MINIMUM)


def format_price(amount: object, currency: str = "DH") -> str | None:
    """Format an amount as ``"80.00 DH"``; None when it is missing or not numeric."""
    if amount is None or isinstance(amount, bool):
        return None
    try:
        value = float(amount)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if value != value or value == 0:
        return None
    return f"{round_money(value):.2f} {currency}"
