"""Section-scoped field extraction for import customs declarations."""

import re
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from dvi_extractor.config import ExtractionSettings
from dvi_extractor.schema import ExtractionOutcome, FieldRecord, ManualFlag

from .cleanup import (
    CARRIER_DOCUMENT_RULES,
    EXPORTER_NAME_RULES,
    INVOICE_NUMBER_RULES,
    LOCALITY_RULES,
    apply_rules,
)
from .patterns import PatternSet, build_pattern_set
from .sections import section_window, transport_scope

MONTHS_RO = [
    'Ianuarie', 'Februarie', 'Martie', 'Aprilie', 'Mai', 'Iunie',
    'Iulie', 'August', 'Septembrie', 'Octombrie', 'Noiembrie', 'Decembrie'
]

PERIOD_PREFIX = "AWB"

# Carrier document codes by rank. N730 (CMR road note) names no specific
# shipment document, so it only wins when nothing else is present.
CARRIER_DOCUMENT_RANKS = {
    '740': 1, '741': 1,
    '705': 2,
    '787': 3,
    '730': 4,
}
_UNRANKED = 9


class FieldCandidate:
    """A value matched for a field, with the marker that produced it."""

    def __init__(self, value: str, tag: str, rank: int, offset: int):
        self.value = value
        self.tag = tag
        self.rank = rank
        self.offset = offset

    def __repr__(self):
        return f"FieldCandidate(value='{self.value}', tag={self.tag}, rank={self.rank})"


def resolve_ranked(candidates: Sequence[FieldCandidate]) -> Optional[FieldCandidate]:
    """Best-ranked non-empty candidate; document order breaks ties."""
    usable = [c for c in candidates if c.value]
    if not usable:
        return None
    return min(usable, key=lambda c: (c.rank, c.offset))


class DeclarationExtractor:
    """
    Extracts the declaration fields from normalized text.

    Every extractor follows the same steps: find the anchor, bound the window,
    match, pick among candidates, clean the value. A field that cannot be
    resolved yields its empty value; extraction never raises for missing data.
    The extractor holds no per-document state and can be reused.
    """

    # (field, warning) in output order; manual_flag is never extracted
    FIELD_WARNINGS: List[Tuple[str, str]] = [
        ('declaration_ref', 'MRN missing'),
        ('declaration_date', 'Data MRN missing'),
        ('carrier_document', 'AWB missing'),
        ('exporter_name', 'Exportator missing'),
        ('exporter_country', 'Țara exportator missing'),
        ('currency', 'Moneda missing'),
        ('invoice_amount', 'Valoare marfă missing'),
        ('period_label', 'Data liber vamă / Data acceptării missing'),
        ('invoice_number', 'Factura missing'),
        ('tariff_code', 'Cod TARIC missing'),
        ('regime_code', 'Regim unificat missing'),
        ('preference_code', 'Preferință missing'),
        ('locality', 'Locație missing'),
    ]

    def __init__(
        self,
        patterns: Optional[PatternSet] = None,
        settings: Optional[ExtractionSettings] = None
    ):
        """
        Args:
            patterns: Compiled pattern set; built here when omitted
            settings: Window budgets; defaults when omitted
        """
        self.patterns = patterns or build_pattern_set()
        self.settings = settings or ExtractionSettings()

        self._extractors: Dict[str, Callable[[str], object]] = {
            'declaration_ref': self.extract_declaration_ref,
            'declaration_date': self.extract_declaration_date,
            'carrier_document': self.extract_carrier_document,
            'exporter_name': self.extract_exporter_name,
            'exporter_country': self.extract_exporter_country,
            'currency': self.extract_currency,
            'invoice_amount': self.extract_invoice_amount,
            'period_label': self.extract_period_label,
            'invoice_number': self.extract_invoice_number,
            'tariff_code': self.extract_tariff_code,
            'regime_code': self.extract_regime_code,
            'preference_code': self.extract_preference_code,
            'locality': self.extract_locality,
        }

    def extract_all_fields(self, text: str) -> ExtractionOutcome:
        """
        Run every field extractor on one normalized text.

        Returns:
            ExtractionOutcome with the record and one warning per unresolved
            field, in field order
        """
        from dvi_extractor.utils import get_logger, log_field_extraction
        logger = get_logger()

        extracted = {}
        warnings = []
        for field_name, warning in self.FIELD_WARNINGS:
            value = self._extractors[field_name](text)
            log_field_extraction(logger, field_name, value)
            if value is None or value == "":
                warnings.append(warning)
            extracted[field_name] = value

        extracted['manual_flag'] = ManualFlag.NO
        return ExtractionOutcome(record=FieldRecord(**extracted), warnings=warnings)

    # ---- inline markers -------------------------------------------------

    def _first_group(self, pattern: re.Pattern, text: str) -> str:
        match = pattern.search(text)
        return match.group(1).strip() if match else ""

    def extract_declaration_ref(self, text: str) -> str:
        return self._first_group(self.patterns.declaration_ref, text).upper()

    def extract_declaration_date(self, text: str) -> str:
        """MRN date as DD/MM/YYYY."""
        match = self.patterns.declaration_date.search(text)
        if not match:
            return ""
        day, month, year = match.groups()
        return f"{day.zfill(2)}/{month.zfill(2)}/{year}"

    def extract_currency(self, text: str) -> str:
        return self._first_group(self.patterns.currency, text).upper()

    def extract_invoice_amount(self, text: str) -> Optional[Decimal]:
        raw = self._first_group(self.patterns.invoice_amount, text)
        if not raw:
            return None
        return Decimal(raw.replace(',', '.'))

    def extract_tariff_code(self, text: str) -> str:
        return self._first_group(self.patterns.tariff_code, text)

    def extract_regime_code(self, text: str) -> str:
        return self._first_group(self.patterns.regime_code, text)

    def extract_preference_code(self, text: str) -> str:
        return self._first_group(self.patterns.preference_code, text)

    def extract_period_label(self, text: str) -> str:
        """
        'AWB - <month> <year>' from the clearance date, else the MRN date,
        else the acceptance date.
        """
        for pattern in (
            self.patterns.clearance_date,
            self.patterns.declaration_date,
            self.patterns.acceptance_date,
        ):
            match = pattern.search(text)
            if not match:
                continue
            month, year = int(match.group(2)), int(match.group(3))
            if 1 <= month <= 12:
                return f"{PERIOD_PREFIX} - {MONTHS_RO[month - 1]} {year}"
        return ""

    # ---- section-scoped fields -----------------------------------------

    def extract_carrier_document(self, text: str) -> str:
        """Carrier document number from the transport document section."""
        scope = transport_scope(text, self.patterns.transport_segment)
        window = section_window(
            scope,
            self.patterns.carrier_document_section,
            self.settings.carrier_document_window,
            self.patterns.section_headers
        )

        if window is None:
            # No section header: first marker line in the transport scope
            match = self.patterns.carrier_document_line.search(scope)
            if not match:
                return ""
            return apply_rules(match.group(2), CARRIER_DOCUMENT_RULES)

        candidates = [
            FieldCandidate(
                value=apply_rules(match.group(2), CARRIER_DOCUMENT_RULES),
                tag=f"N{match.group(1)}",
                rank=CARRIER_DOCUMENT_RANKS.get(match.group(1), _UNRANKED),
                offset=match.start()
            )
            for match in self.patterns.carrier_document_line.finditer(window)
        ]

        from dvi_extractor.utils import get_logger, log_extraction_candidates
        log_extraction_candidates(get_logger(), 'carrier_document', candidates)

        best = resolve_ranked(candidates)
        return best.value if best else ""

    def extract_exporter_name(self, text: str) -> str:
        scope = transport_scope(text, self.patterns.transport_segment)
        window = section_window(
            scope,
            self.patterns.exporter_section,
            self.settings.exporter_name_window,
            self.patterns.section_headers
        )
        if window is None:
            return ""
        match = self.patterns.exporter_name.search(window)
        if not match:
            return ""
        return apply_rules(match.group(1), EXPORTER_NAME_RULES)

    def extract_exporter_country(self, text: str) -> str:
        """
        Exporter country code.

        The exporter window may hold several 'Țara' labels (e.g. 'Țara de
        expediere'); the first one followed by an upper-case two-letter code
        wins. Falls back to the country of dispatch anywhere in the text.
        """
        scope = transport_scope(text, self.patterns.transport_segment)
        window = section_window(
            scope,
            self.patterns.exporter_section,
            self.settings.exporter_country_window,
            self.patterns.section_headers
        )
        if window is not None:
            for match in self.patterns.exporter_country.finditer(window):
                code = match.group(1)
                if code.isascii() and code.isupper():
                    return code

        return self._first_group(self.patterns.dispatch_country, text).upper()

    def extract_invoice_number(self, text: str) -> str:
        """
        Invoice reference from the supporting document section.

        N380 (commercial invoice) is preferred over N325 (proforma). The value
        may list several invoices separated by ',' or ';'.
        """
        scope = transport_scope(text, self.patterns.transport_segment)
        window = section_window(
            scope,
            self.patterns.supporting_document_section,
            self.settings.invoice_window,
            self.patterns.section_headers
        )
        if window is None:
            return ""

        for _tag, pattern in self.patterns.invoice_markers:
            match = pattern.search(window)
            if not match:
                continue
            value = apply_rules(match.group(1), INVOICE_NUMBER_RULES)
            if value:
                return value
        return ""

    def extract_locality(self, text: str) -> str:
        """Importer city, at most five words."""
        window = section_window(
            text,
            self.patterns.importer_section,
            self.settings.locality_window,
            self.patterns.section_headers
        )
        if window is None:
            return ""
        match = self.patterns.locality.search(window)
        if not match:
            return ""
        city = apply_rules(match.group(1), LOCALITY_RULES)
        return city if len(city) >= 2 else ""
