"""
RMSSD — расчёт RMSSD в нескольких ширинах float.

Pipeline: Ingestion → GATE 0 (Sample Count) → Reducer, по одной ширине за раз.
"""

from src.rmssd.config import RMSSDConfig
from src.rmssd.pipeline import (
    compute_across_widths,
    compute_rmssd,
    compute_rmssd_result,
    run_plan,
)

__all__ = [
    "RMSSDConfig",
    "compute_rmssd",
    "compute_rmssd_result",
    "compute_across_widths",
    "run_plan",
]
