"""
Errors — Закрытая таксономия ошибок расчёта RMSSD

Ошибки несут структурированные поля (а не только текст), чтобы вызывающий код
и тесты проверяли вид ошибки и её данные, а не содержимое сообщения.

- ParseError: токен не является десятичным числом в диапазоне ширины
- InsufficientDataError: меньше минимального числа сэмплов для разностей
- ReductionOverflowError: разность, квадрат или сумма переполнили ширину
- DataFileError: файл с интервалами не удалось прочитать (I/O слой)

Ошибки не ретраятся: в предметной области нет транзиентных сбоев.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from src.core.domain.width import FloatWidth


class RMSSDError(Exception):
    """Базовый класс ошибок расчёта RMSSD."""
    pass


class ParseError(RMSSDError):
    """
    Токен не удалось интерпретировать как число выбранной ширины.

    Attributes:
        token: исходный токен (как был передан)
        position: 0-based индекс токена во входной последовательности
        width: ширина, в которую выполнялся парсинг (None если не известна)
        reason: "malformed" (лексически не число) или "out_of_range"
                (переполнение ширины)
    """

    MALFORMED = "malformed"
    OUT_OF_RANGE = "out_of_range"

    def __init__(
        self,
        token: str,
        position: int,
        width: Optional["FloatWidth"] = None,
        reason: str = MALFORMED,
    ):
        self.token = token
        self.position = position
        self.width = width
        self.reason = reason

        where = f" for {width.label}" if width is not None else ""
        if reason == self.OUT_OF_RANGE:
            detail = "value out of range"
        else:
            detail = "not a decimal number"
        super().__init__(f"cannot parse sample {token!r} at position {position}{where}: {detail}")


class InsufficientDataError(RMSSDError):
    """
    Слишком мало сэмплов для расчёта RMSSD.

    Attributes:
        required: минимально необходимое число сэмплов
        actual: фактическое число сэмплов
    """

    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(
            f"too few RR intervals to calculate RMSSD: need at least {required}, got {actual}"
        )


class DataFileError(RMSSDError):
    """
    Файл с интервалами не удалось открыть или прочитать.

    Attributes:
        path: путь к файлу
        reason: текст системной ошибки
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"could not open data file {path}: {reason}")


class ReductionOverflowError(RMSSDError):
    """
    Промежуточное значение редукции вышло за диапазон ширины.

    Конечные сэмплы могут дать ±inf на шаге разностей, квадратов или суммы;
    такой результат не возвращается.

    Attributes:
        width: ширина расчёта
        stage: "difference", "square" или "sum"
    """

    DIFFERENCE = "difference"
    SQUARE = "square"
    SUM = "sum"

    def __init__(self, width: "FloatWidth", stage: str):
        self.width = width
        self.stage = stage
        super().__init__(f"RMSSD overflowed {width.label} range at the {stage} stage")
