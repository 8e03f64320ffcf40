"""Pytest configuration and fixtures."""

import pytest
from decimal import Decimal

from dvi_extractor.config import ExtractionSettings
from dvi_extractor.extractors import DeclarationExtractor
from dvi_extractor.pipeline import ExtractionPipeline

# DHL shipment, comma-below diacritics, N380 invoice with ISO date attached
PDF1_TEXT = """DECLARAȚIE VAMALĂ DE IMPORT
SEGMENT GENERAL
Importatorul - [13 04] Nr: RO16297090
Tip dec. IM Biroul vamal ROTM8730 BV Aeroport Timisoara
Numele HELLA ROMANIA SRL
Tip dec. sup A Punct vamal
Adresa - [13 04 018 000]
Categ. H1 Biroul vamal de sup. [17 10]
Strada și Numărul HELLA NR. 3
Total articole 1 Biroul vamal de prez. [17 09]
Orașul GHIRODA
Total colete 1 MRN 26ROTM87300008A1R5 17/02/2026
Codul poștal 307200
LRN 26RO1590678DHLVOZ947 17/02/2026
Țara RO
Dată liber vamă 17/02/2026

LISTA SEGMENTELOR DE TRANSPORT

SEGMENT TRANSPORT Nr. 1
Documentul precedent - [12 01]
1. NMNS / 125 / 108 / 16.02.2026
Document justificativ - [12 03]
1. N380 / 90022227 / / 2026-02-17 00:00:00.0 /
2. 1049 / TRADUCERE / / 2026-02-17 00:00:00.0 /
3. 1111 / 1612 / / 2026-02-17 00:00:00.0 /
4. N864 / DECL PREF EXP AUT / / /
Documentul de transport - [12 05]
1. N740 / 6646529444
Exportatorul - [13 01] Nr:
Numele PRECI-DIP SA
Adresa - [13 01 018 000]
Strada și Numărul RUE ST-HENRI 11
Orașul DELEMONT
Codul poștal 2800
Țara CH
Moneda de facturare - [14 05] EUR
Cuantumul total facturat - [14 06] 8802.5
Țara de expediere - [16 06] CH

Cod TARIC unificat 8536693000
Regim unificat 4000
Preferințe 100"""

# FedEx shipment, dotted dates glued to document numbers, N325 after N380
PDF2_TEXT = """DECLARAȚIE VAMALĂ DE IMPORT
SEGMENT GENERAL
Importatorul - [13 04] Nr: RO16297090
Tip dec. IM Biroul vamal ROTM8730 BV Aeroport Timisoara
Numele HELLA ROMANIA SRL
Tip dec. sup A Punct vamal
Adresa - [13 04 018 000]
Categ. H1 Biroul vamal de sup. [17 10]
Strada și Numărul HELLA NR. 3
Total articole 1 Biroul vamal de prez. [17 09]
Orașul GHIRODA
Total colete 1 MRN 26ROTM87300008BJR7 17/02/2026
Codul poștal 307200
LRN 26RO1592989FEDEX225Z 17/02/2026
Țara RO
Dată liber vamă 17/02/2026

LISTA SEGMENTELOR DE TRANSPORT

SEGMENT TRANSPORT Nr. 1
Document justificativ - [12 03]
1. 1113 / DA/17.02.2026 / / /
2. 1049 / TRADUCERE/12.02.2026 / / /
3. N380 / CI020226969A/12.02.2026 / / /
4. 1111 / NR. 1612/30.12.2026 / / /
5. N325 / F.TR. 2026667/12.02.2026 / / /
Documentul de transport - [12 05]
1. N741 / 344501879
Exportatorul - [13 01] Nr:
Numele INDIUM CORPORATION EUROPEAN
Adresa - [13 01 018 000]
Strada și Numărul 7 NEWMARKET COURT
Orașul MILTON KEYNES
Codul poștal MK10 0AG
Țara GB
Moneda de facturare - [14 05] USD
Cuantumul total facturat - [14 06] 32205.6
Țara de expediere - [16 06] GB

Cod TARIC unificat 3810100000"""

# Legacy cedilla letters (ş, ţ, Ş, Ţ) throughout
PDF3_CEDILLA_TEXT = """DECLARAŢIE VAMALĂ DE IMPORT
SEGMENT GENERAL
Importatorul - [13 04] Nr: RO16297090
Biroul vamal ROTM8730 BV Aeroport Timişoara
Oraşul TIMIŞOARA
MRN 26ROTM87300009XYZ3 25/03/2026
Dată liber vamă 25/03/2026

SEGMENT TRANSPORT Nr. 1
Document justificativ - [12 03]
1. N380 / INV-2026-001 / / /
Documentul de transport - [12 05]
1. N740 / 9998887776
Exportatorul - [13 01] Nr:
Numele TEST COMPANY GMBH
Ţara DE
Moneda de facturare - [14 05] EUR
Cuantumul total facturat - [14 06] 1234.56
Ţara de expediere - [16 06] DE

Cod TARIC unificat 8471300000
Regim unificat 4000
Preferinţe unificat 300"""

# Adjacent column label merged into the carrier document line
COLUMN_MERGE_TEXT = """SEGMENT TRANSPORT Nr. 1
Documentul de transport - [12 05]
1. N740 / 6646529444 Antrepozit -
Exportatorul - [13 01] Nr:
Numele ORANGE TRADING LTD Adresa STR. 1"""


@pytest.fixture
def settings():
    """Default tuning parameters, independent of the environment."""
    return ExtractionSettings()


@pytest.fixture
def extractor(settings):
    """Create declaration extractor instance."""
    return DeclarationExtractor(settings=settings)


@pytest.fixture
def pipeline(settings):
    """Create extraction pipeline instance."""
    return ExtractionPipeline(settings=settings)


@pytest.fixture
def pdf1_text():
    return PDF1_TEXT


@pytest.fixture
def pdf2_text():
    return PDF2_TEXT


@pytest.fixture
def pdf3_text():
    return PDF3_CEDILLA_TEXT


@pytest.fixture
def column_merge_text():
    return COLUMN_MERGE_TEXT


@pytest.fixture
def expected_pdf1():
    """Expected extraction results for the DHL declaration."""
    return {
        "declaration_ref": "26ROTM87300008A1R5",
        "declaration_date": "17/02/2026",
        "carrier_document": "6646529444",
        "exporter_name": "PRECI-DIP SA",
        "exporter_country": "CH",
        "currency": "EUR",
        "invoice_amount": Decimal("8802.5"),
        "period_label": "AWB - Februarie 2026",
        "invoice_number": "90022227",
        "tariff_code": "8536693000",
        "regime_code": "4000",
        "preference_code": "100",
        "locality": "GHIRODA",
    }


@pytest.fixture
def expected_pdf2():
    """Expected extraction results for the FedEx declaration."""
    return {
        "declaration_ref": "26ROTM87300008BJR7",
        "declaration_date": "17/02/2026",
        "carrier_document": "344501879",
        "exporter_name": "INDIUM CORPORATION EUROPEAN",
        "exporter_country": "GB",
        "currency": "USD",
        "invoice_amount": Decimal("32205.6"),
        "period_label": "AWB - Februarie 2026",
        "invoice_number": "CI020226969A",
        "tariff_code": "3810100000",
        "regime_code": "",
        "preference_code": "",
        "locality": "GHIRODA",
    }


@pytest.fixture
def expected_pdf3():
    """Expected extraction results for the cedilla declaration."""
    return {
        "declaration_ref": "26ROTM87300009XYZ3",
        "declaration_date": "25/03/2026",
        "carrier_document": "9998887776",
        "exporter_name": "TEST COMPANY GMBH",
        "exporter_country": "DE",
        "currency": "EUR",
        "invoice_amount": Decimal("1234.56"),
        "period_label": "AWB - Martie 2026",
        "invoice_number": "INV-2026-001",
        "tariff_code": "8471300000",
        "regime_code": "4000",
        "preference_code": "300",
        "locality": "TIMIŞOARA",
    }


def _pdf_literal(text):
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_text_pdf(pages, width=612, height=792):
    """
    Minimal PDF with a Helvetica text layer.

    Args:
        pages: One list per page of (text, x, baseline_y, font_size) runs

    Returns:
        PDF file content
    """
    page_ids = [4 + 2 * i for i in range(len(pages))]
    kids = " ".join(f"{page_id} 0 R" for page_id in page_ids)
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>",
    ]
    for page_id, runs in zip(page_ids, pages):
        content = "\n".join(
            f"BT /F1 {size} Tf 1 0 0 1 {x} {y} Tm ({_pdf_literal(text)}) Tj ET"
            for text, x, y, size in runs
        ).encode("latin-1")
        objects.append(
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {width} {height}] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {page_id + 1} 0 R >>".encode()
        )
        objects.append(b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream")

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, 1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1, xref_offset)
    return bytes(out)


# Small labels (7pt) and large values (12pt) share baselines. 700.5 and
# 660.5 put the two glyph-box bottoms on different grid rows.
DECLARATION_PDF_PAGES = [
    [
        ("Importatorul - [13 04]", 50, 750.0, 7),
        ("Orasul", 50, 730.5, 7),
        ("GHIRODA", 100, 730.5, 12),
        ("Total colete", 50, 700.5, 7),
        ("1", 120, 700.5, 12),
        ("MRN", 150, 700.5, 7),
        ("26ROTM87300008A1R5 17/02/2026", 180, 700.5, 12),
        ("Cuantumul total facturat - [14 06]", 50, 660.5, 7),
        ("8802.5", 250, 660.5, 12),
    ],
    [
        ("SEGMENT TRANSPORT Nr. 1", 50, 750.0, 12),
        ("Documentul de transport - [12 05]", 50, 720.5, 7),
        ("1. N740 / 6646529444", 50, 701.0, 12),
        ("Moneda de facturare - [14 05]", 50, 681.0, 7),
        ("EUR", 250, 681.0, 12),
    ],
]


@pytest.fixture
def declaration_pdf():
    """Two-page declaration PDF with mixed font sizes on shared baselines."""
    return build_text_pdf(DECLARATION_PDF_PAGES)
