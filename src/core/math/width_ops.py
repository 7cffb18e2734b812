"""
Width Ops — Таблицы операций для каждой ширины float

Каждая ширина (NARROW / STANDARD / EXTENDED) получает собственную таблицу
операций: парсинг строки, приведение констант, степень, trunc, sqrt.
Таблица выбирается ОДИН раз на вызов pipeline (ops_for), внутри цикла
редукции ветвления по ширине нет.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждая операция принимает и возвращает numpy scalar dtype своей ширины
2. Строка парсится напрямую в ширину (numpy.longdouble("...") сохраняет
   точность long double, а не проходит через double)
3. sqrt вызывается с явным dtype ширины: ufunc loop выбирается по ширине,
   а не по результату type promotion
"""

from dataclasses import dataclass, field
from typing import Any, Final

import numpy as np

from src.core.domain.width import FloatWidth


@dataclass(frozen=True)
class WidthOps:
    """Операции одной ширины float."""

    width: FloatWidth
    dtype: type
    mantissa_bits: int = field(init=False)

    def __post_init__(self):
        if self.dtype is not self.width.dtype:
            raise ValueError(
                f"dtype {self.dtype.__name__} does not belong to width {self.width.value}"
            )
        object.__setattr__(self, "mantissa_bits", int(np.finfo(self.dtype).nmant))

    # -------------------------------------------------------------------------
    # Константы ширины
    # -------------------------------------------------------------------------

    @property
    def zero(self) -> Any:
        return self.dtype(0)

    @property
    def one(self) -> Any:
        return self.dtype(1)

    @property
    def half(self) -> Any:
        return self.dtype("0.5")

    @property
    def integral_threshold(self) -> Any:
        """2^mantissa_bits: начиная с этой величины все значения ширины целые."""
        return self.power(self.dtype(2), self.mantissa_bits)

    # -------------------------------------------------------------------------
    # Операции
    # -------------------------------------------------------------------------

    def parse(self, text: str) -> Any:
        """
        Парсинг десятичной строки напрямую в ширину.

        Лексическая проверка выполняется вызывающим кодом; здесь только
        конверсия. Переполнение даёт ±inf (проверяется через is_finite).

        Raises:
            ValueError: если numpy не смог разобрать строку
        """
        with np.errstate(over="ignore", invalid="ignore"):
            return self.dtype(text)

    def cast(self, value: Any) -> Any:
        """Приведение int/констант к ширине (не для значений другой ширины)."""
        if isinstance(value, np.floating) and type(value) is not self.dtype:
            raise TypeError(
                f"refusing to convert {type(value).__name__} to {self.dtype.__name__}"
            )
        return self.dtype(value)

    def power(self, base: Any, exponent: int) -> Any:
        """base ** exponent в арифметике ширины (переполнение → inf)."""
        with np.errstate(over="ignore"):
            return self.cast(base) ** self.dtype(exponent)

    def trunc(self, value: Any) -> Any:
        return np.trunc(value, dtype=self.dtype)

    def copysign(self, magnitude: Any, sign_source: Any) -> Any:
        return np.copysign(magnitude, sign_source, dtype=self.dtype)

    def sqrt(self, value: Any) -> Any:
        """Квадратный корень через ufunc loop своей ширины."""
        return np.sqrt(value, dtype=self.dtype)

    def is_finite(self, value: Any) -> bool:
        return bool(np.isfinite(value))

    def empty(self, size: int) -> np.ndarray:
        return np.empty(size, dtype=self.dtype)


# =============================================================================
# ТАБЛИЦЫ ПО ШИРИНАМ
# =============================================================================

NARROW_OPS: Final[WidthOps] = WidthOps(FloatWidth.NARROW, np.float32)
STANDARD_OPS: Final[WidthOps] = WidthOps(FloatWidth.STANDARD, np.float64)
EXTENDED_OPS: Final[WidthOps] = WidthOps(FloatWidth.EXTENDED, np.longdouble)

_OPS_BY_WIDTH: Final[dict[FloatWidth, WidthOps]] = {
    FloatWidth.NARROW: NARROW_OPS,
    FloatWidth.STANDARD: STANDARD_OPS,
    FloatWidth.EXTENDED: EXTENDED_OPS,
}


def ops_for(width: FloatWidth) -> WidthOps:
    """
    Таблица операций для ширины.

    Raises:
        ValueError: если width не является FloatWidth
    """
    try:
        return _OPS_BY_WIDTH[FloatWidth(width)]
    except ValueError:
        raise ValueError(f"unsupported float width: {width!r}") from None
