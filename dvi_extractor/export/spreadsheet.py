"""Spreadsheet export of extracted declaration records."""

import io
from decimal import Decimal
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from dvi_extractor.schema import DocumentResult, FieldColumns, FieldRecord, ManualFlag

SHEET_TITLE = "Import DVI"
DEFAULT_XLSX_NAME = "Extract_DVI_AWB.xlsx"

# '#', file name, then one width per FieldColumns entry
COLUMN_WIDTHS = [4, 35, 24, 12, 18, 30, 8, 8, 14, 22, 22, 14, 14, 12, 20, 8]


def header_row() -> List[str]:
    return ['#', 'Fișier'] + FieldColumns.get_labels()


def record_row(index: int, file_name: str, record: FieldRecord) -> List[Any]:
    """One table row: 1-based index, file name, values in column order."""
    row: List[Any] = [index, file_name]
    for field_name in FieldColumns.get_all_fields():
        value = getattr(record, field_name)
        if value is None:
            row.append("")
        elif isinstance(value, Decimal):
            row.append(float(value))
        elif isinstance(value, ManualFlag):
            row.append(value.value)
        else:
            row.append(value)
    return row


def build_workbook(results: Sequence[DocumentResult]) -> Workbook:
    """Build the export workbook: a header row and one row per document."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE

    sheet.append(header_row())
    for i, result in enumerate(results, 1):
        sheet.append(record_row(i, result.file_name, result.record))

    for column, width in enumerate(COLUMN_WIDTHS, 1):
        sheet.column_dimensions[get_column_letter(column)].width = width

    return workbook


def export_xlsx(
    results: Sequence[DocumentResult],
    destination: Optional[Union[str, Path]] = None
) -> bytes:
    """
    Serialize results to XLSX.

    Args:
        results: Processed documents, in table order
        destination: Optional path to also write the file to

    Returns:
        The XLSX file content
    """
    buffer = io.BytesIO()
    build_workbook(results).save(buffer)
    content = buffer.getvalue()

    if destination is not None:
        Path(destination).write_bytes(content)

        from dvi_extractor.utils import get_logger
        get_logger().info(f"Excel exported: {destination} ({len(results)} row(s))")

    return content
