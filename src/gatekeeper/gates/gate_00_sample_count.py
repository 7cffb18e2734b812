"""GATE 0: Sample Count

Первый (и единственный) gate перед редукцией RMSSD:
- Пропускает последовательность длины >= min_samples без изменений
- Блокирует короче min_samples: для RMSSD нужна хотя бы одна разность

Редуктор никогда не вызывается с заблокированной последовательностью.
"""

from dataclasses import dataclass
from typing import Final, Sized

from src.core.errors import InsufficientDataError


# =============================================================================
# CONSTANTS
# =============================================================================

# Минимум сэмплов: одна разность
MIN_SAMPLES_DEFAULT: Final[int] = 2


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class Gate00Result:
    """Результат GATE 0."""

    passed: bool
    block_reason: str

    required: int
    actual: int

    # Детали
    details: str


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class Gate00Config:
    """Конфигурация GATE 0."""

    min_samples: int = MIN_SAMPLES_DEFAULT

    def __post_init__(self):
        if self.min_samples < MIN_SAMPLES_DEFAULT:
            raise ValueError(
                f"min_samples must be >= {MIN_SAMPLES_DEFAULT}, got {self.min_samples}"
            )


# =============================================================================
# GATE 0
# =============================================================================


class Gate00SampleCount:
    """GATE 0: проверка числа сэмплов перед редукцией."""

    def __init__(self, config: Gate00Config | None = None):
        """
        Args:
            config: конфигурация gate (опционально, используется default)
        """
        self.config = config or Gate00Config()

    def evaluate(self, samples: Sized) -> Gate00Result:
        """Оценка GATE 0 без исключений.

        Args:
            samples: последовательность сэмплов (любой Sized)

        Returns:
            Gate00Result с решением о допуске
        """
        required = self.config.min_samples
        actual = len(samples)

        if actual < required:
            return Gate00Result(
                passed=False,
                block_reason="insufficient_samples",
                required=required,
                actual=actual,
                details=f"Need at least {required} samples, got {actual}",
            )

        return Gate00Result(
            passed=True,
            block_reason="",
            required=required,
            actual=actual,
            details=f"PASS: {actual} samples, {actual - 1} differences",
        )

    def enforce(self, samples):
        """Пропуск последовательности дальше или InsufficientDataError.

        Returns:
            Тот же объект samples (без копирования)

        Raises:
            InsufficientDataError: если сэмплов меньше min_samples
        """
        result = self.evaluate(samples)
        if not result.passed:
            raise InsufficientDataError(required=result.required, actual=result.actual)
        return samples
