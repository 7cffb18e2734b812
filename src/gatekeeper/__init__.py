"""Gatekeeper — проверки последовательности сэмплов до редукции.

Заблокированная последовательность не доходит до редуктора RMSSD.
"""

from .gates.gate_00_sample_count import Gate00Config, Gate00Result, Gate00SampleCount

__all__ = [
    "Gate00SampleCount",
    "Gate00Result",
    "Gate00Config",
]
