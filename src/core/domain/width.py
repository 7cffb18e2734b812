"""FloatWidth — Ширина представления чисел с плавающей точкой

Три поддерживаемые ширины:
- NARROW   — single precision (numpy.float32, C float)
- STANDARD — double precision (numpy.float64, C double)
- EXTENDED — extended precision (numpy.longdouble, C long double)

Ширина выбирается один раз на вызов pipeline и определяет тип ВСЕХ
промежуточных значений: парсинг, округление, разности, сумма, деление, sqrt.
"""

from enum import Enum

import numpy as np


class FloatWidth(str, Enum):
    """Ширина float для одного прогона pipeline."""

    NARROW = "narrow"
    STANDARD = "standard"
    EXTENDED = "extended"

    @property
    def label(self) -> str:
        """Имя типа в стиле C (используется в отчёте)."""
        return _LABELS[self]

    @property
    def dtype(self) -> type:
        """numpy scalar type ширины."""
        return _DTYPES[self]

    @property
    def bits(self) -> int:
        """Размер хранения в битах (для long double зависит от платформы)."""
        return np.dtype(self.dtype).itemsize * 8

    @classmethod
    def parse(cls, name: str) -> "FloatWidth":
        """Разбор имени ширины (value или label, без учёта регистра).

        Raises:
            ValueError: если имя не соответствует ни одной ширине
        """
        key = name.strip().lower()
        for width in cls:
            if key in (width.value, width.label):
                return width
        valid = ", ".join(w.value for w in cls)
        raise ValueError(f"unknown float width {name!r}, expected one of: {valid}")


_DTYPES = {
    FloatWidth.NARROW: np.float32,
    FloatWidth.STANDARD: np.float64,
    FloatWidth.EXTENDED: np.longdouble,
}

_LABELS = {
    FloatWidth.NARROW: "float",
    FloatWidth.STANDARD: "double",
    FloatWidth.EXTENDED: "long double",
}

# Порядок по умолчанию: от узкой к расширенной
DEFAULT_WIDTH_ORDER: tuple[FloatWidth, ...] = (
    FloatWidth.NARROW,
    FloatWidth.STANDARD,
    FloatWidth.EXTENDED,
)
