"""
Pipeline — Ingestion → GATE 0 → Reducer для одной ширины

compute_rmssd — основной интерфейс: десятичные строки + ширина + округление
→ RMSSD в этой ширине. Ошибки поднимаются сразу, частичных результатов нет.

compute_across_widths / run_plan — последовательные прогоны по ширинам.
Каждый прогон получает собственный массив сэмплов; ошибка одной ширины
фиксируется в её WidthOutcome и не мешает следующим.
"""

import logging
from typing import Any, Iterable, Optional, Sequence

import numpy as np

from src.core.domain.result import RMSSDResult, WidthOutcome
from src.core.domain.rounding import RoundingPolicy
from src.core.domain.width import FloatWidth
from src.core.errors import RMSSDError
from src.core.math.rmssd import reduce_rmssd
from src.gatekeeper.gates.gate_00_sample_count import Gate00Config, Gate00SampleCount
from src.ingest.samples import ingest_samples
from src.rmssd.config import RMSSDConfig

logger = logging.getLogger(__name__)


def _ingest_and_reduce(
    samples: Iterable[str],
    width: FloatWidth,
    round_to: Optional[int],
    gate: Optional[Gate00SampleCount],
) -> tuple[np.ndarray, Any]:
    gate = gate or Gate00SampleCount()

    values = ingest_samples(samples, width, RoundingPolicy.to_places(round_to))
    gate.enforce(values)
    return values, reduce_rmssd(values, width)


def compute_rmssd(
    samples: Iterable[str],
    width: FloatWidth,
    round_to: Optional[int] = None,
    gate: Optional[Gate00SampleCount] = None,
) -> Any:
    """
    RMSSD последовательности десятичных строк в ширине width.

    Args:
        samples: десятичные строки в порядке измерения
        width: ширина расчёта
        round_to: число знаков округления при загрузке (None — без округления)
        gate: GATE 0 (default: минимум 2 сэмпла)

    Returns:
        RMSSD как numpy scalar ширины width

    Raises:
        ParseError: невалидный токен
        InsufficientDataError: меньше минимума сэмплов
    """
    _, root = _ingest_and_reduce(samples, FloatWidth(width), round_to, gate)
    return root


def compute_rmssd_result(
    samples: Iterable[str],
    width: FloatWidth,
    round_to: Optional[int] = None,
    gate: Optional[Gate00SampleCount] = None,
) -> RMSSDResult:
    """compute_rmssd с результатом в виде RMSSDResult."""
    width = FloatWidth(width)
    values, root = _ingest_and_reduce(samples, width, round_to, gate)
    return RMSSDResult(
        width=width,
        value=root,
        sample_count=values.size,
        round_places=round_to,
    )


def _run_one(
    samples: Sequence[str],
    width: FloatWidth,
    round_to: Optional[int],
    gate: Gate00SampleCount,
) -> WidthOutcome:
    try:
        result = compute_rmssd_result(samples, width, round_to, gate)
    except RMSSDError as e:
        logger.warning("rmssd failed width=%s round_places=%s: %s", width.value, round_to, e)
        return WidthOutcome(width=width, round_places=round_to, error=e)

    logger.info(
        "rmssd width=%s round_places=%s value=%r", width.value, round_to, result.value
    )
    return WidthOutcome(width=width, round_places=round_to, result=result)


def compute_across_widths(
    samples: Sequence[str],
    widths: Iterable[FloatWidth],
    round_to: Optional[int] = None,
    gate: Optional[Gate00SampleCount] = None,
) -> list[WidthOutcome]:
    """
    Прогоны по ширинам строго последовательно, в заданном порядке.

    Returns:
        WidthOutcome на каждую ширину, в порядке widths
    """
    samples = list(samples)
    gate = gate or Gate00SampleCount()

    outcomes = []
    for width in widths:
        outcomes.append(_run_one(samples, FloatWidth(width), round_to, gate))
    return outcomes


def run_plan(samples: Sequence[str], config: Optional[RMSSDConfig] = None) -> list[WidthOutcome]:
    """
    Прогоны по плану конфигурации (config.plan()).

    Returns:
        WidthOutcome на каждый прогон плана, в порядке плана
    """
    config = config or RMSSDConfig()
    samples = list(samples)
    gate = Gate00SampleCount(Gate00Config(min_samples=config.min_samples))

    outcomes = []
    for width, round_to in config.plan():
        outcomes.append(_run_one(samples, width, round_to, gate))
    return outcomes
