"""Export of extracted records: spreadsheet table and renamed PDF archive."""

from .archive import DEFAULT_ARCHIVE_NAME, archive_names, build_archive
from .spreadsheet import DEFAULT_XLSX_NAME, build_workbook, export_xlsx, header_row, record_row

__all__ = [
    'DEFAULT_ARCHIVE_NAME',
    'archive_names',
    'build_archive',
    'DEFAULT_XLSX_NAME',
    'build_workbook',
    'export_xlsx',
    'header_row',
    'record_row',
]
