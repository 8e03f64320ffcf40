"""Field extraction for import customs declaration (DVI / MRN) PDFs."""

__version__ = "0.1.0"
