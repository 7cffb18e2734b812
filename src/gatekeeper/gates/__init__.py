"""Gates — гейты перед редукцией RMSSD.

- GATE 0: Sample Count (минимум сэмплов для одной разности)
"""

from .gate_00_sample_count import (
    MIN_SAMPLES_DEFAULT,
    Gate00Config,
    Gate00Result,
    Gate00SampleCount,
)

__all__ = [
    "MIN_SAMPLES_DEFAULT",
    "Gate00SampleCount",
    "Gate00Result",
    "Gate00Config",
]
