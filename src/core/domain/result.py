"""
RMSSDResult / WidthOutcome — Результаты расчёта RMSSD

Immutable Pydantic модели:
- RMSSDResult: скаляр RMSSD той же ширины, что и входные сэмплы
- WidthOutcome: исход одного прогона (ширина + результат ИЛИ ошибка),
  чтобы ошибка одной ширины не скрывала результаты остальных
"""

from typing import Optional

import numpy as np
from pydantic import BaseModel, Field, model_validator

from src.core.domain.width import FloatWidth
from src.core.errors import RMSSDError


class RMSSDResult(BaseModel):
    """
    Результат RMSSD одной ширины.

    value хранится как numpy scalar ширины (без конверсии в Python float,
    которая сузила бы long double).
    """

    width: FloatWidth = Field(..., description="Ширина, в которой выполнен расчёт")
    value: np.floating = Field(..., description="RMSSD (numpy scalar ширины)")
    sample_count: int = Field(..., ge=2, description="Число сэмплов во входе")
    round_places: Optional[int] = Field(
        None, ge=0, description="Округление при загрузке (None — без округления)"
    )

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @model_validator(mode="after")
    def check_value_width(self) -> "RMSSDResult":
        """value обязан иметь dtype своей ширины."""
        if type(self.value) is not self.width.dtype:
            raise ValueError(
                f"value dtype {type(self.value).__name__} does not match "
                f"width {self.width.value} ({self.width.dtype.__name__})"
            )
        if not (np.isfinite(self.value) and self.value >= 0):
            raise ValueError(f"value must be finite and non-negative, got {self.value!r}")
        return self

    @property
    def difference_count(self) -> int:
        return self.sample_count - 1


class WidthOutcome(BaseModel):
    """Исход одного прогона pipeline: ровно одно из result / error."""

    width: FloatWidth = Field(..., description="Ширина прогона")
    round_places: Optional[int] = Field(None, ge=0, description="Округление прогона")
    result: Optional[RMSSDResult] = Field(None, description="Результат (если успех)")
    error: Optional[RMSSDError] = Field(None, description="Ошибка прогона (если неуспех)")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @model_validator(mode="after")
    def check_exactly_one(self) -> "WidthOutcome":
        if (self.result is None) == (self.error is None):
            raise ValueError("exactly one of result or error must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.result is not None

    @property
    def title(self) -> str:
        """Заголовок прогона для отчёта."""
        if self.round_places is None:
            return self.width.label
        return f"{self.width.label} (rounded to {self.round_places} decimal places)"
