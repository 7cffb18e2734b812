"""
RMSSD — Root Mean Square of Successive Differences

Формула (порядок операций воспроизводится точно, чтобы сохранить поведение
округления конкретной ширины):
    1. diff[i-1] = sample[i] - sample[i-1]         (N-1 разностей)
    2. diff[i]   = diff[i] * diff[i]                (in place)
    3. sum       = ((0 + diff[0]) + diff[1]) + ...  (строго слева направо)
       mean      = sum / (N-1)
    4. rmssd     = sqrt(mean)                       (sqrt своей ширины)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все промежуточные значения имеют dtype выбранной ширины
2. numpy.sum / numpy.mean не используются: они суммируют попарно, а порядок
   суммирования float влияет на результат
3. Вход с N < 2 до редукции не доходит (Gate00SampleCount); редуктор
   повторно проверяет это условие и падает с InsufficientDataError
4. Результат всегда конечен: переполнение ширины на шаге разностей,
   квадратов или суммы даёт ReductionOverflowError
"""

import logging
from typing import Any, Final

import numpy as np

from src.core.domain.width import FloatWidth
from src.core.errors import InsufficientDataError, ReductionOverflowError
from src.core.math.width_ops import WidthOps, ops_for

logger = logging.getLogger(__name__)

# Минимум сэмплов для одной разности
RMSSD_MIN_SAMPLES: Final[int] = 2


def _require_finite(values: Any, width: FloatWidth, stage: str) -> None:
    if not np.isfinite(values).all():
        raise ReductionOverflowError(width, stage)


def _require_width(samples: np.ndarray, ops: WidthOps) -> None:
    if samples.ndim != 1:
        raise ValueError(f"samples must be one-dimensional, got shape {samples.shape}")
    if samples.dtype != np.dtype(ops.dtype):
        raise TypeError(
            f"samples dtype {samples.dtype} does not match width "
            f"{ops.width.value} ({np.dtype(ops.dtype)})"
        )


def successive_differences(samples: np.ndarray, ops: WidthOps) -> np.ndarray:
    """
    Шаг 1: разности соседних сэмплов.

    Returns:
        Новый массив длины N-1 dtype ширины; samples не изменяется.
    """
    _require_width(samples, ops)
    diffs = ops.empty(max(samples.size - 1, 0))
    np.subtract(samples[1:], samples[:-1], out=diffs, dtype=ops.dtype)
    return diffs


def square_in_place(diffs: np.ndarray, ops: WidthOps) -> np.ndarray:
    """Шаг 2: diff = diff * diff без нового буфера."""
    _require_width(diffs, ops)
    np.multiply(diffs, diffs, out=diffs, dtype=ops.dtype)
    return diffs


def mean_left_to_right(values: np.ndarray, ops: WidthOps) -> Any:
    """
    Шаг 3: среднее со строго последовательным накоплением суммы.

    Raises:
        ValueError: если values пустой
    """
    _require_width(values, ops)
    if values.size == 0:
        raise ValueError("cannot take the mean of an empty sequence")

    total = ops.zero
    for value in values:
        total = total + value

    return total / ops.cast(values.size)


def reduce_rmssd(samples: np.ndarray, width: FloatWidth) -> Any:
    """
    RMSSD валидированной последовательности сэмплов.

    Args:
        samples: 1-D массив dtype ширины width, N >= 2
        width: ширина расчёта

    Returns:
        RMSSD как numpy scalar ширины width

    Raises:
        InsufficientDataError: если N < 2
        ReductionOverflowError: если промежуточное значение вышло за ширину
        TypeError: если dtype samples не совпадает с шириной
    """
    ops = ops_for(width)
    _require_width(samples, ops)

    if samples.size < RMSSD_MIN_SAMPLES:
        raise InsufficientDataError(required=RMSSD_MIN_SAMPLES, actual=int(samples.size))

    with np.errstate(over="ignore"):
        # 1. Разности
        diffs = successive_differences(samples, ops)
        _require_finite(diffs, width, ReductionOverflowError.DIFFERENCE)

        # 2. Квадраты
        square_in_place(diffs, ops)
        _require_finite(diffs, width, ReductionOverflowError.SQUARE)

        # 3. Среднее
        mean = mean_left_to_right(diffs, ops)
        _require_finite(mean, width, ReductionOverflowError.SUM)

    # 4. Корень
    root = ops.sqrt(mean)

    logger.debug(
        "rmssd width=%s samples=%d mean_sq=%r rmssd=%r",
        width.value,
        samples.size,
        mean,
        root,
    )
    return root
