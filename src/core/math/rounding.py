"""
Rounding — Округление сэмплов в арифметике выбранной ширины

Алгоритм для r знаков:
    multiplier = 10^r            (в ширине)
    scaled     = value * multiplier
    rounded    = round_half_away_from_zero(scaled)
    result     = rounded / multiplier

Все операции выполняются в dtype ширины. Округление через double для float
или long double изменило бы результаты и запрещено.

ГРАНИЧНЫЕ СЛУЧАИ (большие r, экстремальные значения):
- multiplier или scaled не finite → значение возвращается без изменений
- |scaled| >= 2^mantissa_bits → scaled уже целое в этой ширине, округлять
  нечего → значение возвращается без изменений
Таким образом округление никогда не порождает inf/NaN.
"""

from typing import Any, Optional

import numpy as np

from src.core.math.width_ops import WidthOps


def round_half_away_from_zero(value: Any, ops: WidthOps) -> Any:
    """
    Округление до целого, половины — от нуля (как C round()).

    trunc и value - trunc точны в любой ширине, поэтому сравнение
    остатка с 0.5 не страдает от ошибки floor(x + 0.5) при x = 0.49999...

    Examples:
        2.5 → 3.0, -2.5 → -3.0, 2.4999 → 2.0, -0.5 → -1.0
    """
    if not ops.is_finite(value):
        return value

    truncated = ops.trunc(value)
    remainder = value - truncated

    if abs(remainder) >= ops.half:
        truncated = truncated + ops.copysign(ops.one, value)

    return truncated


def round_to_places(value: Any, places: Optional[int], ops: WidthOps) -> Any:
    """
    Округление значения до places десятичных знаков в ширине ops.

    Args:
        value: numpy scalar ширины ops
        places: число знаков (None — без округления)
        ops: таблица операций ширины

    Returns:
        Округлённый numpy scalar той же ширины

    Raises:
        ValueError: если places < 0
    """
    if places is None:
        return value

    if places < 0:
        raise ValueError(f"places must be non-negative, got {places}")

    multiplier = ops.power(10, places)
    if not ops.is_finite(multiplier):
        return value

    with np.errstate(over="ignore"):
        scaled = value * multiplier
    if not ops.is_finite(scaled) or abs(scaled) >= ops.integral_threshold:
        return value

    return round_half_away_from_zero(scaled, ops) / multiplier
