from menage.pricing.rate_tables import (
    CUISINE_CHOICE,
    FLAG_OPTIONS,
    MENAGE_CHOICE,
    PRICED_LABELS,
    choice_key,
    menage_cuisine_table,
    option_label,
    rate_table_for,
)
from menage.pricing.selection import (
    RemovePiece,
    Selection,
    SetDimension,
    SetPieceCount,
    SetQuantity,
    ToggleChoice,
    ToggleFlag,
    ToggleOption,
    apply,
    describe,
    incomplete_options,
    is_reservable,
    option_subtotals,
    quote,
    selected_area,
)
from menage.pricing.strategies import (
    Dimension,
    Flat,
    PerArea,
    PerPiece,
    PricingMode,
    TieredMinimum,
    format_price,
)

__all__ = [
    "Dimension",
    "PerPiece",
    "PerArea",
    "TieredMinimum",
    "Flat",
    "PricingMode",
    "format_price",
    "rate_table_for",
    "menage_cuisine_table",
    "choice_key",
    "MENAGE_CHOICE",
    "CUISINE_CHOICE",
    "option_label",
    "FLAG_OPTIONS",
    "PRICED_LABELS",
    "Selection",
    "ToggleOption",
    "SetQuantity",
    "SetPieceCount",
    "SetDimension",
    "RemovePiece",
    "ToggleFlag",
    "ToggleChoice",
    "apply",
    "is_reservable",
    "incomplete_options",
    "option_subtotals",
    "quote",
    "selected_area",
    "describe",
]
