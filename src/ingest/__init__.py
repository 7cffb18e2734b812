"""
Ingest — загрузка сэмплов RR-интервалов.

Токены (строки файла, элементы списка) → numpy массив одной ширины float.
"""

from src.ingest.interval_file import read_interval_tokens
from src.ingest.samples import ingest_samples, is_decimal_token, parse_sample

__all__ = [
    "ingest_samples",
    "parse_sample",
    "is_decimal_token",
    "read_interval_tokens",
]
