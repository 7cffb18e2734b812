"""
Core math modules для расчёта RMSSD

Операции фиксированной ширины float, округление и редукция RMSSD.
"""

# Width operation tables
from src.core.math.width_ops import (
    EXTENDED_OPS,
    NARROW_OPS,
    STANDARD_OPS,
    WidthOps,
    ops_for,
)

# Rounding
from src.core.math.rounding import (
    round_half_away_from_zero,
    round_to_places,
)

# RMSSD reducer
from src.core.math.rmssd import (
    RMSSD_MIN_SAMPLES,
    mean_left_to_right,
    reduce_rmssd,
    square_in_place,
    successive_differences,
)

__all__ = [
    # Width ops — Types
    "WidthOps",
    # Width ops — Tables
    "NARROW_OPS",
    "STANDARD_OPS",
    "EXTENDED_OPS",
    "ops_for",
    # Rounding
    "round_half_away_from_zero",
    "round_to_places",
    # RMSSD — Constants
    "RMSSD_MIN_SAMPLES",
    # RMSSD — Functions
    "successive_differences",
    "square_in_place",
    "mean_left_to_right",
    "reduce_rmssd",
]
