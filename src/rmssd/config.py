"""
RMSSDConfig — Конфигурация прогона по ширинам

План прогона по умолчанию: каждая ширина без округления, затем каждая ширина
с округлением до ROUND_PLACES_DEFAULT знаков.
"""

import argparse
from dataclasses import dataclass
from typing import Final, Optional

from src.core.domain.width import DEFAULT_WIDTH_ORDER, FloatWidth
from src.gatekeeper.gates.gate_00_sample_count import MIN_SAMPLES_DEFAULT


# =============================================================================
# CONSTANTS
# =============================================================================

# Округление для "rounded" прогонов
ROUND_PLACES_DEFAULT: Final[int] = 3

# Число знаков после точки в текстовом выводе
OUTPUT_PRECISION_DEFAULT: Final[int] = 80

LOG_LEVEL_DEFAULT: Final[str] = "WARNING"


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class RMSSDConfig:
    """Конфигурация прогона RMSSD по ширинам."""

    widths: tuple[FloatWidth, ...] = DEFAULT_WIDTH_ORDER
    round_places: Optional[int] = ROUND_PLACES_DEFAULT
    include_rounded: bool = True
    min_samples: int = MIN_SAMPLES_DEFAULT
    output_precision: int = OUTPUT_PRECISION_DEFAULT
    json_output: bool = False
    log_level: str = LOG_LEVEL_DEFAULT

    def __post_init__(self):
        if not self.widths:
            raise ValueError("widths must not be empty")
        if len(set(self.widths)) != len(self.widths):
            raise ValueError(f"widths must not repeat, got {[w.value for w in self.widths]}")
        if self.round_places is not None and self.round_places < 0:
            raise ValueError(f"round_places must be non-negative, got {self.round_places}")
        if self.include_rounded and self.round_places is None:
            raise ValueError("round_places is required when rounded runs are enabled")
        if self.min_samples < MIN_SAMPLES_DEFAULT:
            raise ValueError(
                f"min_samples must be >= {MIN_SAMPLES_DEFAULT}, got {self.min_samples}"
            )
        if self.output_precision < 0:
            raise ValueError(
                f"output_precision must be non-negative, got {self.output_precision}"
            )

    def plan(self) -> list[tuple[FloatWidth, Optional[int]]]:
        """Упорядоченный список прогонов (ширина, округление)."""
        runs: list[tuple[FloatWidth, Optional[int]]] = [(w, None) for w in self.widths]
        if self.include_rounded:
            runs.extend((w, self.round_places) for w in self.widths)
        return runs

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RMSSDConfig":
        """Построение конфигурации из аргументов CLI."""
        return cls(
            widths=tuple(args.widths),
            round_places=args.round_places,
            include_rounded=not args.no_rounded,
            output_precision=args.precision,
            json_output=args.json,
            log_level=args.log_level,
        )
