"""Trailing-noise cleanup rules for captured field values.

Line reconstruction merges adjacent visual columns, so a captured value can
end with a fragment of the neighbouring label or an attached date. Each rule
removes one kind of noise; fields apply their own ordered list of rules.
"""

import re
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class CleanupRule:
    """A named substitution followed by a strip."""
    name: str
    pattern: re.Pattern
    replacement: str = ""

    def apply(self, value: str) -> str:
        return self.pattern.sub(self.replacement, value).strip()


def apply_rules(value: str, rules: Sequence[CleanupRule]) -> str:
    """Strip the value, then apply each rule in order."""
    value = value.strip()
    for rule in rules:
        value = rule.apply(value)
    return value


TRAILING_SLASH = CleanupRule("trailing_slash", re.compile(r"\s*/\s*$"))

COLLAPSE_SPACES = CleanupRule("collapse_spaces", re.compile(r"\s{2,}"), " ")

# "6646529444 Antrepozit -": a Title-case label from the next column.
TRAILING_TITLE_LABEL = CleanupRule(
    "trailing_title_label", re.compile(r"(?:\s+[A-Z][a-z]\w*)+\s*-\s*$"))

# "PRECI-DIP SA\nA": first letter of the next label ("Adresa").
SPLIT_LABEL_LETTER = CleanupRule("split_label_letter", re.compile(r"\s+[A-Z]?\s*$"))

GLUED_EXPORTER_LABELS = CleanupRule(
    "glued_exporter_labels",
    re.compile(r"\s+(?:(?:Adresa|Strada|Ora[sșş]ul|Codul|Numele|V[aâ]nz\w*)\b|Nr[:.]).*$",
               re.IGNORECASE))

TRAILING_CAPITAL = CleanupRule("trailing_capital", re.compile(r"\s+[A-Z]$"))

ATTACHED_DOTTED_DATE = CleanupRule(
    "attached_dotted_date", re.compile(r"/\s*\d{2}\.\d{2}\.\d{4}\s*$"))

ATTACHED_ISO_DATE = CleanupRule(
    "attached_iso_date", re.compile(r"/\s*\d{4}-\d{2}-\d{2}[\s\d:.]*$"))

LOCALITY_TRAILING_LABELS = CleanupRule(
    "locality_trailing_labels",
    re.compile(r"\s+(?:Codul|Total|MRN|LRN|Dat[aă]|Biroul|po[sșş]tal)\b[\s\S]*$",
               re.IGNORECASE))


CARRIER_DOCUMENT_RULES = (TRAILING_SLASH, COLLAPSE_SPACES, TRAILING_TITLE_LABEL)

EXPORTER_NAME_RULES = (SPLIT_LABEL_LETTER, GLUED_EXPORTER_LABELS, TRAILING_CAPITAL)

INVOICE_NUMBER_RULES = (TRAILING_SLASH, ATTACHED_DOTTED_DATE, ATTACHED_ISO_DATE)

LOCALITY_RULES = (LOCALITY_TRAILING_LABELS,)
