"""Чтение файла RR-интервалов: одно десятичное значение на строку."""

import logging
from pathlib import Path
from typing import Union

from src.core.errors import DataFileError

logger = logging.getLogger(__name__)


def read_interval_tokens(path: Union[str, Path]) -> list[str]:
    """
    Токены файла в порядке строк (пустые строки пропускаются).

    Raises:
        DataFileError: файл не существует или не читается
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            tokens = [line.strip() for line in f if line.strip()]
    except (OSError, UnicodeDecodeError) as e:
        raise DataFileError(str(path), str(e)) from e

    logger.debug("read %d interval tokens from %s", len(tokens), path)
    return tokens
