"""
Sample Ingestion — Десятичные токены → массив сэмплов одной ширины

Контракт:
- Каждый токен лексически десятичное число: знак (опционально), ASCII цифры 0-9,
  дробная часть (опционально), десятичная экспонента (опционально).
  nan / inf / hex / пустые токены / хвостовой мусор отвергаются.
- Парсинг выполняется напрямую в выбранную ширину.
- Переполнение ширины → ParseError(reason="out_of_range").
- Первая ошибка прерывает загрузку, частичный результат не возвращается.
- Округление (если задано) применяется ровно один раз, сразу после парсинга,
  в арифметике той же ширины.
"""

import logging
import re
from typing import Iterable, Optional, Union

import numpy as np

from src.core.domain.rounding import RoundingPolicy
from src.core.domain.width import FloatWidth
from src.core.errors import ParseError
from src.core.math.rounding import round_to_places
from src.core.math.width_ops import WidthOps, ops_for

logger = logging.getLogger(__name__)

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def is_decimal_token(text: str) -> bool:
    """Лексическая проверка десятичного числа (без окружающих пробелов)."""
    return _DECIMAL_RE.fullmatch(text) is not None


def parse_sample(token: str, position: int, ops: WidthOps):
    """
    Парсинг одного токена в numpy scalar ширины ops.

    Raises:
        ParseError: токен не число или вне диапазона ширины
    """
    text = token.strip()
    if not is_decimal_token(text):
        raise ParseError(token, position, ops.width, ParseError.MALFORMED)

    try:
        value = ops.parse(text)
    except OverflowError:
        raise ParseError(token, position, ops.width, ParseError.OUT_OF_RANGE) from None
    except ValueError:
        raise ParseError(token, position, ops.width, ParseError.MALFORMED) from None

    if not ops.is_finite(value):
        raise ParseError(token, position, ops.width, ParseError.OUT_OF_RANGE)

    return value


def ingest_samples(
    tokens: Iterable[str],
    width: FloatWidth,
    rounding: Union[RoundingPolicy, int, None] = None,
) -> np.ndarray:
    """
    Загрузка последовательности сэмплов заданной ширины.

    Args:
        tokens: десятичные строки в порядке измерения
        width: ширина float
        rounding: RoundingPolicy, число знаков или None (без округления)

    Returns:
        1-D read-only numpy массив dtype ширины, порядок = порядок tokens

    Raises:
        ParseError: первый невалидный токен (частичный результат не возвращается)
        pydantic.ValidationError: отрицательное число знаков округления
    """
    ops = ops_for(width)
    places = _rounding_places(rounding)

    values = []
    for position, token in enumerate(tokens):
        value = parse_sample(token, position, ops)
        values.append(round_to_places(value, places, ops))

    samples = np.array(values, dtype=ops.dtype)
    samples.setflags(write=False)

    logger.debug(
        "ingested %d samples width=%s round_places=%s", samples.size, width.value, places
    )
    return samples


def _rounding_places(rounding: Union[RoundingPolicy, int, None]) -> Optional[int]:
    if isinstance(rounding, RoundingPolicy):
        return rounding.places
    return RoundingPolicy.to_places(rounding).places
