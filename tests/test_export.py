"""Tests for spreadsheet and archive export."""

import io
import zipfile

import pytest
from openpyxl import load_workbook

from dvi_extractor.export import (
    archive_names,
    build_archive,
    build_workbook,
    export_xlsx,
    header_row,
)
from dvi_extractor.schema import DocumentResult, FieldRecord


@pytest.fixture
def results(extractor, pdf1_text):
    """One resolved document and one failed document."""
    outcome = extractor.extract_all_fields(pdf1_text)
    return [
        DocumentResult.from_outcome("dhl.pdf", outcome),
        DocumentResult.failed("broken.pdf", "bad xref"),
    ]


def result_with_ref(ref):
    return DocumentResult.failed("x.pdf", "n/a").with_record(FieldRecord(declarationRef=ref))


class TestSpreadsheet:
    """XLSX table layout."""

    def test_header(self):
        """Test index, file name and the fourteen field labels."""
        header = header_row()
        assert header[:3] == ['#', 'Fișier', 'DVI (MRN)']
        assert header[-1] == 'Gratis'
        assert len(header) == 16

    def test_sheet_title_and_rows(self, results):
        """Test one row per document after the header."""
        sheet = build_workbook(results).active
        assert sheet.title == "Import DVI"
        assert sheet.max_row == 3

    def test_round_trip_values(self, results):
        """Test values written to the XLSX file."""
        sheet = load_workbook(io.BytesIO(export_xlsx(results))).active
        rows = list(sheet.iter_rows(values_only=True))

        header, resolved, failed = rows
        assert header[0] == '#'
        assert resolved[0] == 1
        assert resolved[1] == "dhl.pdf"
        assert resolved[2] == "26ROTM87300008A1R5"
        assert resolved[header.index('Valoare Marfă')] == pytest.approx(8802.5)
        assert resolved[header.index('Gratis')] == "NO"

        assert failed[0] == 2
        assert failed[header.index('Valoare Marfă')] in (None, "")
        assert failed[header.index('DVI (MRN)')] in (None, "")

    def test_write_to_destination(self, results, tmp_path):
        """Test the file is also written when a path is given."""
        destination = tmp_path / "Extract_DVI_AWB.xlsx"
        content = export_xlsx(results, destination)
        assert destination.read_bytes() == content

    def test_column_widths(self, results):
        """Test fixed widths are applied."""
        sheet = build_workbook(results).active
        assert sheet.column_dimensions['B'].width == 35

    def test_no_results(self):
        """Test an export with only the header."""
        sheet = build_workbook([]).active
        assert sheet.max_row == 1


class TestArchiveNames:
    """Renamed PDF file names."""

    def test_named_after_reference(self):
        """Test the MRN becomes the file name."""
        assert archive_names([result_with_ref("26ROTM87300008A1R5")]) == ["26ROTM87300008A1R5.pdf"]

    def test_fallback_uses_row_number(self):
        """Test documents without an MRN get a numbered placeholder."""
        names = archive_names([result_with_ref("A"), result_with_ref(""), result_with_ref("")])
        assert names == ["A.pdf", "Unknown_MRN_2.pdf", "Unknown_MRN_3.pdf"]

    def test_duplicates_suffixed(self):
        """Test repeated references get _2, _3."""
        names = archive_names([result_with_ref("A"), result_with_ref("B"), result_with_ref("A"), result_with_ref("A")])
        assert names == ["A.pdf", "B.pdf", "A_2.pdf", "A_3.pdf"]


class TestBuildArchive:
    """ZIP content."""

    def test_entries(self):
        """Test every source PDF is stored under its new name."""
        entries = [(result_with_ref("A"), b"%PDF-a"), (result_with_ref(""), b"%PDF-b")]

        content = build_archive(entries)

        with zipfile.ZipFile(io.BytesIO(content)) as archive:
            assert archive.namelist() == ["A.pdf", "Unknown_MRN_2.pdf"]
            assert archive.read("A.pdf") == b"%PDF-a"
            assert archive.read("Unknown_MRN_2.pdf") == b"%PDF-b"
