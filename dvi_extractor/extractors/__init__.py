"""Field extraction logic for declaration text."""

from .declaration_extractor import DeclarationExtractor, FieldCandidate, resolve_ranked
from .patterns import PatternSet, build_pattern_set, diacritic_pattern, expand_diacritics

__all__ = [
    'DeclarationExtractor',
    'FieldCandidate',
    'resolve_ranked',
    'PatternSet',
    'build_pattern_set',
    'diacritic_pattern',
    'expand_diacritics',
]
