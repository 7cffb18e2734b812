"""
Contracts — JSON Schema записи отчёта RMSSD.
"""

from .validators import (
    ContractValidator,
    RMSSDReportValidator,
    SchemaLoader,
    validate_rmssd_report,
)

__all__ = [
    "SchemaLoader",
    "ContractValidator",
    "RMSSDReportValidator",
    "validate_rmssd_report",
]
