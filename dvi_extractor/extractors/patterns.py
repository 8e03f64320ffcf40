"""Regex patterns for declaration fields, tolerant of both Romanian ș/ț encodings."""

import re
from dataclasses import dataclass
from typing import Tuple

# ș and ț exist as comma-below letters (U+0218..U+021B) and as the legacy
# cedilla letters (U+015E/F, U+0162/3). PDFs use either.
_DIACRITIC_CLASSES = str.maketrans({
    "ș": "[șş]",
    "Ș": "[ȘŞ]",
    "ț": "[țţ]",
    "Ț": "[ȚŢ]",
})


def expand_diacritics(pattern: str) -> str:
    """
    Replace each comma-below ș/Ș/ț/Ț with a class holding both encodings.

    The pattern must not already contain one of these letters inside a
    character class ("Ora[sș]ul"); the expansion would nest classes. Write
    such patterns by hand instead.
    """
    return pattern.translate(_DIACRITIC_CLASSES)


def diacritic_pattern(pattern: str, flags: int = re.IGNORECASE) -> re.Pattern:
    """Compile a pattern written with comma-below letters, case-insensitive by default."""
    return re.compile(expand_diacritics(pattern), flags)


_DATE = r"(\d{1,2})[/.\-](\d{1,2})[/.\-](\d{4})"


@dataclass(frozen=True)
class PatternSet:
    """Compiled patterns shared by every extraction. Build once with build_pattern_set()."""

    transport_segment: re.Pattern

    # Section anchors (bracket-coded headers)
    carrier_document_section: re.Pattern
    exporter_section: re.Pattern
    importer_section: re.Pattern
    supporting_document_section: re.Pattern
    section_headers: re.Pattern

    # Inline markers
    declaration_ref: re.Pattern
    declaration_date: re.Pattern
    carrier_document_line: re.Pattern
    exporter_name: re.Pattern
    exporter_country: re.Pattern
    dispatch_country: re.Pattern
    currency: re.Pattern
    invoice_amount: re.Pattern
    clearance_date: re.Pattern
    acceptance_date: re.Pattern
    tariff_code: re.Pattern
    regime_code: re.Pattern
    preference_code: re.Pattern
    locality: re.Pattern

    # (tag, pattern) pairs in priority order
    invoice_markers: Tuple[Tuple[str, re.Pattern], ...]


def build_pattern_set() -> PatternSet:
    """Compile every declaration pattern."""
    return PatternSet(
        transport_segment=re.compile(r"SEGMENT\s+TRANSPORT", re.IGNORECASE),

        carrier_document_section=diacritic_pattern(
            r"Documentul\s+de\s+transport\s*-\s*\[12\s*05\]"),
        exporter_section=diacritic_pattern(r"Exportatorul\s*-\s*\[13\s*01\]"),
        importer_section=diacritic_pattern(r"Importatorul\s*-\s*\[13\s*04\]"),
        supporting_document_section=diacritic_pattern(
            r"Document\s+justificativ\s*-\s*\[12\s*03\]"),
        section_headers=diacritic_pattern(
            r"Documentul\s+de\s+transport|Document\s+justificativ|Exportatorul"
            r"|Importatorul|Loca(?:ț|t)ia\s+m[aă]rfurilor"),

        declaration_ref=re.compile(r"MRN\s+(\d{2}[A-Z]{2}[A-Z0-9]{10,20})", re.IGNORECASE),
        declaration_date=re.compile(r"MRN\s+\S+\s+" + _DATE, re.IGNORECASE),
        carrier_document_line=re.compile(
            r"N(74[01]|705|730|787)\s*/\s*([A-Z0-9][A-Z0-9\-. ]{2,})", re.IGNORECASE),
        # Case-sensitive: the name is upper case, the next label is not.
        exporter_name=re.compile(r"Numele\s+([A-Z][A-Z0-9\s\-&.,()/]{2,})"),
        exporter_country=diacritic_pattern(r"\b(?:Țara|Tara)\s+([A-Z]{2})\b"),
        dispatch_country=diacritic_pattern(
            r"Țara\s+de\s+expedi(?:ere|ție)\s*-?\s*(?:\[16\s*06\])?\s+([A-Z]{2})\b"),
        currency=diacritic_pattern(
            r"Moneda\s+de\s+facturare\s*-\s*\[14\s*05\]\s+([A-Z]{3})\b"),
        invoice_amount=diacritic_pattern(
            r"Cuantumul\s+total\s+facturat\s*-\s*\[14\s*06\]\s+(\d+(?:[.,]\d+)?)"),
        clearance_date=diacritic_pattern(r"Dat[aăâ]\s+liber\s+vam[aăâ]\s+" + _DATE),
        acceptance_date=diacritic_pattern(
            r"Data\s+accept[aăâ]rii\s*-\s*\[15\s*09\]\s*" + _DATE),
        tariff_code=re.compile(r"Cod\s+TARIC\s+unificat\s+(\d{6,10})", re.IGNORECASE),
        regime_code=re.compile(r"Regim\s+unificat\s+(\d{4})", re.IGNORECASE),
        preference_code=diacritic_pattern(
            r"Preferințe\s+(?:unificat[aăe]?\s+)?(?:-\s*\[14\s*11\]\s*)?(\d{3})\b"),
        # Built by hand: ș sits inside a character class.
        locality=re.compile(r"Ora[sșş]ul\s+(\S+(?:\s+\S+){0,4})", re.IGNORECASE),

        invoice_markers=(
            ("N380", re.compile(
                r"N380\s*/\s*(.*?)(?:\s*/\s*/|\s{2,}|\n|$)", re.IGNORECASE)),
            ("N325", re.compile(
                r"N325\s*/\s*(.*?)(?:\s*/\s*/|\s{2,}|\n|$)", re.IGNORECASE)),
        ),
    )
