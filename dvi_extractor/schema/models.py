"""Canonical schema for fields extracted from import customs declarations (DVI)."""

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


class ManualFlag(str, Enum):
    """Manual-entry marker. Never derived from text."""

    YES = "YES"
    NO = "NO"


class FieldRecord(BaseModel):
    """
    Fixed-shape record of the fields extracted from one declaration.

    Every key is always present. Unresolved string fields hold "", an
    unresolved amount holds None. Records are frozen: edits go through
    with_updates(), which returns a new validated record.
    """

    # Declaration
    declaration_ref: str = Field(
        default="",
        alias="declarationRef",
        description="MRN: 2 digits, 2 letters, 10-20 alphanumerics"
    )

    declaration_date: str = Field(
        default="",
        alias="declarationDate",
        description="MRN date as DD/MM/YYYY"
    )

    # Transport
    carrier_document: str = Field(
        default="",
        alias="carrierDocument",
        description="Carrier document number (AWB, bill of lading, CMR)"
    )

    # Exporter
    exporter_name: str = Field(
        default="",
        alias="exporterName",
        description="Exporter name"
    )

    exporter_country: str = Field(
        default="",
        alias="exporterCountry",
        description="Exporter country (2-letter code)"
    )

    # Invoice
    currency: str = Field(
        default="",
        alias="currency",
        description="Invoice currency (3-letter code)"
    )

    invoice_amount: Optional[Decimal] = Field(
        default=None,
        alias="invoiceAmount",
        description="Total invoiced amount"
    )

    period_label: str = Field(
        default="",
        alias="periodLabel",
        description="'AWB - <month> <year>' derived from the clearance date"
    )

    invoice_number: str = Field(
        default="",
        alias="invoiceNumber",
        description="Invoice number(s), possibly a comma/semicolon list"
    )

    # Goods
    tariff_code: str = Field(
        default="",
        alias="tariffCode",
        description="Unified TARIC code (6-10 digits)"
    )

    regime_code: str = Field(
        default="",
        alias="regimeCode",
        description="Unified customs regime (4 digits)"
    )

    preference_code: str = Field(
        default="",
        alias="preferenceCode",
        description="Tariff preference code"
    )

    locality: str = Field(
        default="",
        alias="locality",
        description="Importer city"
    )

    manual_flag: ManualFlag = Field(
        default=ManualFlag.NO,
        alias="manualFlag",
        description="Manual-entry flag, defaults to NO"
    )

    @field_validator(
        'declaration_ref', 'declaration_date', 'carrier_document', 'exporter_name',
        'exporter_country', 'currency', 'period_label', 'invoice_number',
        'tariff_code', 'regime_code', 'preference_code', 'locality',
        mode='before'
    )
    @classmethod
    def normalize_text(cls, v) -> str:
        """Store missing text values as the empty string."""
        if v is None:
            return ""
        return str(v).strip()

    @field_validator('invoice_amount', mode='before')
    @classmethod
    def normalize_amount(cls, v) -> Optional[Decimal]:
        """Normalize amounts to Decimal; comma or dot as fractional separator."""
        if v is None:
            return None

        if isinstance(v, str):
            v = v.strip().replace(' ', '').replace(',', '.')
            if not v:
                return None

        try:
            amount = Decimal(str(v))
        except (InvalidOperation, ValueError, TypeError):
            return None
        # Cleared numeric cells come back from the table editor as NaN
        return None if amount.is_nan() else amount

    @field_validator('manual_flag', mode='before')
    @classmethod
    def normalize_manual_flag(cls, v):
        if v is None or v == "":
            return ManualFlag.NO
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @classmethod
    def empty(cls) -> "FieldRecord":
        """Record with every field unresolved."""
        return cls()

    def with_updates(self, **changes: Any) -> "FieldRecord":
        """
        Return a new record with the given fields replaced.

        Keys may be attribute names (invoice_amount) or aliases (invoiceAmount).
        Values are validated exactly like extracted values.
        """
        aliases = FieldColumns.alias_to_attribute()
        data = self.model_dump()
        for key, value in changes.items():
            data[aliases.get(key, key)] = value
        return self.__class__(**data)

    def to_dict(self) -> dict:
        """Convert to a dictionary keyed by alias, Decimal kept as string."""
        result = {}
        for field_name, field_value in self.model_dump(by_alias=True).items():
            if isinstance(field_value, Decimal):
                result[field_name] = str(field_value)
            elif isinstance(field_value, ManualFlag):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value
        return result

    def to_json_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary keyed by alias."""
        result = {}
        for field_name, field_value in self.model_dump(by_alias=True).items():
            if isinstance(field_value, Decimal):
                result[field_name] = float(field_value)
            elif isinstance(field_value, ManualFlag):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value
        return result

    model_config = {
        "frozen": True,
        "extra": "forbid",
        "populate_by_name": True,
    }


class FieldColumns:
    """Column order and display labels for the extracted fields."""

    # (attribute, alias, label) in extraction order
    COLUMNS = [
        ('declaration_ref', 'declarationRef', 'DVI (MRN)'),
        ('declaration_date', 'declarationDate', 'Data MRN'),
        ('carrier_document', 'carrierDocument', 'AWB'),
        ('exporter_name', 'exporterName', 'Exportator'),
        ('exporter_country', 'exporterCountry', 'Țara Exp.'),
        ('currency', 'currency', 'Moneda'),
        ('invoice_amount', 'invoiceAmount', 'Valoare Marfă'),
        ('period_label', 'periodLabel', 'AWB - Luna An'),
        ('invoice_number', 'invoiceNumber', 'Nr. Factură'),
        ('tariff_code', 'tariffCode', 'Cod TARIC'),
        ('regime_code', 'regimeCode', 'Regim unificat'),
        ('preference_code', 'preferenceCode', 'Preferință'),
        ('locality', 'locality', 'Locație'),
        ('manual_flag', 'manualFlag', 'Gratis'),
    ]

    @classmethod
    def get_all_fields(cls) -> List[str]:
        """Get all attribute names in column order."""
        return [attribute for attribute, _, _ in cls.COLUMNS]

    @classmethod
    def get_labels(cls) -> List[str]:
        return [label for _, _, label in cls.COLUMNS]

    @classmethod
    def get_label(cls, field_name: str) -> str:
        """Get the display label for an attribute name or alias."""
        for attribute, alias, label in cls.COLUMNS:
            if field_name in (attribute, alias):
                return label
        raise KeyError(field_name)

    @classmethod
    def alias_to_attribute(cls) -> Dict[str, str]:
        return {alias: attribute for attribute, alias, _ in cls.COLUMNS}


class ExtractionOutcome(BaseModel):
    """FieldRecord plus the ordered warnings for fields that did not resolve."""

    record: FieldRecord
    warnings: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class DocumentStatus(str, Enum):
    """Per-document processing status."""

    DONE = "done"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def from_warnings(cls, warnings: List[str]) -> "DocumentStatus":
        return cls.WARNING if warnings else cls.DONE


class DocumentResult(BaseModel):
    """Result of processing one source document."""

    file_name: str
    status: DocumentStatus
    record: FieldRecord = Field(default_factory=FieldRecord.empty)
    warnings: List[str] = Field(default_factory=list)
    processing_time: float = 0.0
    text_length: int = 0
    page_count: int = 0

    @classmethod
    def from_outcome(
        cls,
        file_name: str,
        outcome: ExtractionOutcome,
        processing_time: float = 0.0,
        text_length: int = 0,
        page_count: int = 0
    ) -> "DocumentResult":
        return cls(
            file_name=file_name,
            status=DocumentStatus.from_warnings(outcome.warnings),
            record=outcome.record,
            warnings=list(outcome.warnings),
            processing_time=processing_time,
            text_length=text_length,
            page_count=page_count
        )

    @classmethod
    def failed(cls, file_name: str, reason: str, processing_time: float = 0.0) -> "DocumentResult":
        """Document-level failure: empty record, one processing warning."""
        return cls(
            file_name=file_name,
            status=DocumentStatus.ERROR,
            record=FieldRecord.empty(),
            warnings=[f"Eroare la procesare: {reason}"],
            processing_time=processing_time
        )

    def with_record(self, record: FieldRecord) -> "DocumentResult":
        """Same document with an edited record."""
        return self.model_copy(update={'record': record})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'file_name': self.file_name,
            'extracted_data': self.record.to_json_dict(),
            'warnings': list(self.warnings),
            'metadata': {
                'status': self.status.value,
                'processing_time_seconds': self.processing_time,
                'text_length': self.text_length,
                'page_count': self.page_count
            }
        }
