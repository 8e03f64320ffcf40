"""Schema definitions for extracted declaration fields."""

from .models import (
    DocumentResult,
    DocumentStatus,
    ExtractionOutcome,
    FieldColumns,
    FieldRecord,
    ManualFlag,
)

__all__ = [
    'DocumentResult',
    'DocumentStatus',
    'ExtractionOutcome',
    'FieldColumns',
    'FieldRecord',
    'ManualFlag',
]
