"""
Контракт машиночитаемого отчёта RMSSD

Каждый прогон pipeline (ширина + округление) даёт одну JSON запись.
Форма записи зафиксирована в schema/rmssd_report.json (Draft 2020-12),
CLI проверяет каждую запись перед выводом.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator

SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Читает схемы из каталога и кэширует их после meta-validation."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = Path(schema_dir) if schema_dir is not None else SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без расширения.

        Raises:
            FileNotFoundError: файла <schema_name>.json нет в каталоге
            ValueError: файл не является корректной схемой Draft 2020-12
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидатор записей против одной именованной схемы."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.schema = (loader or _SCHEMA_LOADER).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: первое найденное нарушение
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        return self.validator.iter_errors(data)


class RMSSDReportValidator(ContractValidator):
    """Запись отчёта RMSSD (rmssd_report.json)."""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__("rmssd_report", loader)


_REPORT_VALIDATOR: Optional[RMSSDReportValidator] = None


def validate_rmssd_report(data: Dict[str, Any]) -> None:
    """
    Проверка записи отчёта RMSSD.

    Raises:
        jsonschema.ValidationError: запись нарушает контракт
    """
    global _REPORT_VALIDATOR
    if _REPORT_VALIDATOR is None:
        _REPORT_VALIDATOR = RMSSDReportValidator()
    _REPORT_VALIDATOR.validate(data)
