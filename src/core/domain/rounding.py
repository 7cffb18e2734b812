"""
RoundingPolicy — Политика округления сэмплов при загрузке

Immutable Pydantic модель. Округление применяется ровно один раз, сразу после
парсинга, в арифметике той же ширины, что и сэмпл.
"""

from typing import Optional

from pydantic import BaseModel, Field


class RoundingPolicy(BaseModel):
    """
    Число знаков после запятой для округления каждого сэмпла.

    places=None означает "без округления".
    """

    places: Optional[int] = Field(
        None, ge=0, description="Число десятичных знаков (None — без округления)"
    )

    model_config = {"frozen": True}

    @property
    def enabled(self) -> bool:
        return self.places is not None

    @classmethod
    def none(cls) -> "RoundingPolicy":
        return cls(places=None)

    @classmethod
    def to_places(cls, places: Optional[int]) -> "RoundingPolicy":
        """Построение политики из Optional[int] (None — без округления)."""
        return cls(places=places)
