"""
Domain models and value objects.

Contains the float widths, the rounding policy and the RMSSD result models.
"""

from src.core.domain.result import RMSSDResult, WidthOutcome
from src.core.domain.rounding import RoundingPolicy
from src.core.domain.width import DEFAULT_WIDTH_ORDER, FloatWidth

__all__ = [
    # Width
    "FloatWidth",
    "DEFAULT_WIDTH_ORDER",
    # Rounding
    "RoundingPolicy",
    # Results
    "RMSSDResult",
    "WidthOutcome",
]
