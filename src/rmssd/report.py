"""
Report — Текстовый и JSON вывод результатов прогонов

Текстовый формат (на прогон):
    <label>[ (rounded to N decimal places)]
    <bits>-bit float
    <значение с фиксированной точкой>
    <пустая строка>

JSON формат: одна запись rmssd_report на прогон (см. contracts/schema).
"""

import json
import math
from typing import Any, Dict, Final, Optional

import numpy as np

from src.core.contracts.validators import validate_rmssd_report
from src.core.domain.result import WidthOutcome
from src.core.errors import InsufficientDataError, ParseError, ReductionOverflowError

REPORT_SCHEMA_VERSION: Final[str] = "1"


def format_value(value: Any, precision: int) -> str:
    """
    Фиксированная точка с precision знаками (как printf %.Nf).

    Печатаются точные двоичные разряды значения ширины, без
    округления до кратчайшего представления.
    """
    return np.format_float_positional(
        value, precision=precision, unique=False, fractional=True, trim="k"
    )


def format_text(outcome: WidthOutcome, precision: int) -> str:
    """Текстовый блок успешного прогона."""
    if not outcome.ok:
        raise ValueError(f"cannot format failed outcome for {outcome.title}")
    return "\n".join(
        [
            outcome.title,
            f"{outcome.width.bits}-bit float",
            format_value(outcome.result.value, precision),
            "",
        ]
    )


def format_error(outcome: WidthOutcome) -> str:
    return f"ERROR: {outcome.title}: {outcome.error}"


def _error_record(error: Exception) -> Dict[str, Any]:
    record: Dict[str, Any] = {"kind": type(error).__name__, "message": str(error)}
    if isinstance(error, ParseError):
        record.update(token=error.token, position=error.position, reason=error.reason)
    elif isinstance(error, InsufficientDataError):
        record.update(required=error.required, actual=error.actual)
    elif isinstance(error, ReductionOverflowError):
        record.update(stage=error.stage)
    return record


def _as_json_float(value: Any) -> Optional[float]:
    """Значение как double; None, если long double вне диапазона double."""
    with np.errstate(over="ignore"):
        narrowed = float(value)
    return narrowed if math.isfinite(narrowed) else None


def to_record(outcome: WidthOutcome, precision: int) -> Dict[str, Any]:
    """
    Запись отчёта для прогона (проходит validate_rmssd_report).

    Raises:
        ValidationError: если запись не соответствует контракту
    """
    record: Dict[str, Any] = {
        "schema_version": REPORT_SCHEMA_VERSION,
        "width": outcome.width.value,
        "label": outcome.width.label,
        "bits": outcome.width.bits,
        "round_places": outcome.round_places,
    }

    if outcome.ok:
        record.update(
            status="ok",
            sample_count=outcome.result.sample_count,
            rmssd=format_value(outcome.result.value, precision),
            rmssd_float=_as_json_float(outcome.result.value),
        )
    else:
        record.update(status="error", error=_error_record(outcome.error))

    validate_rmssd_report(record)
    return record


def format_json(outcome: WidthOutcome, precision: int) -> str:
    return json.dumps(to_record(outcome, precision), ensure_ascii=False, allow_nan=False)
