"""Tuning parameters for line reconstruction and section windows."""

import os
from typing import Optional

from pydantic import BaseModel, Field


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is not None:
        value = value.strip()
        if value == "":
            return default
        return value
    return default


def _get_int(key: str, default: int) -> int:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer") from exc


def _get_float(key: str, default: float) -> float:
    value = _get_env(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be a number") from exc


class ExtractionSettings(BaseModel):
    """
    Empirical constants tuned on the sampled declaration layout.

    Window sizes are character budgets counted from a section anchor. A window
    also ends at the next known section header when that comes first.
    """

    row_grid: float = Field(
        default=2.0,
        gt=0,
        description="Vertical grid (PDF units) used to merge fragments into one row"
    )
    carrier_document_window: int = Field(default=500, ge=1)
    exporter_name_window: int = Field(default=600, ge=1)
    exporter_country_window: int = Field(default=800, ge=1)
    invoice_window: int = Field(default=1500, ge=1)
    locality_window: int = Field(default=800, ge=1)

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls) -> "ExtractionSettings":
        """Build settings from DVI_* environment variables, falling back to defaults."""
        defaults = cls()
        return cls(
            row_grid=_get_float("DVI_ROW_GRID", defaults.row_grid),
            carrier_document_window=_get_int(
                "DVI_CARRIER_DOCUMENT_WINDOW", defaults.carrier_document_window
            ),
            exporter_name_window=_get_int(
                "DVI_EXPORTER_NAME_WINDOW", defaults.exporter_name_window
            ),
            exporter_country_window=_get_int(
                "DVI_EXPORTER_COUNTRY_WINDOW", defaults.exporter_country_window
            ),
            invoice_window=_get_int("DVI_INVOICE_WINDOW", defaults.invoice_window),
            locality_window=_get_int("DVI_LOCALITY_WINDOW", defaults.locality_window),
        )
