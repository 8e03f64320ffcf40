"""PDF text layer: positioned fragments, line reconstruction and normalization."""

from .lines import PositionedFragment, reconstruct_page, reconstruct_text
from .normalizer import normalize_text
from .pdf_client import PdfTextLayerClient, TextExtractionError, TextLayerResult

__all__ = [
    'PositionedFragment',
    'reconstruct_page',
    'reconstruct_text',
    'normalize_text',
    'PdfTextLayerClient',
    'TextExtractionError',
    'TextLayerResult',
]
