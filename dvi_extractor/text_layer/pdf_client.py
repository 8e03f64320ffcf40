"""PDF text-layer client: positioned fragments and reconstructed text via pdfplumber."""

import io
from pathlib import Path
from typing import Any, Dict, List, Union

import pdfplumber

from .lines import PositionedFragment, reconstruct_text

PdfSource = Union[str, Path, bytes]


class TextExtractionError(Exception):
    """The PDF text layer could not be read at all."""


class TextLayerResult:
    """Container for text-layer extraction results."""

    def __init__(
        self,
        full_text: str,
        pages: List[List[PositionedFragment]],
    ):
        """
        Initialize text-layer result.

        Args:
            full_text: Reconstructed (not yet normalized) document text
            pages: Positioned fragments, one list per page
        """
        self.full_text = full_text
        self.pages = pages

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def fragment_count(self) -> int:
        return sum(len(page) for page in self.pages)

    def __repr__(self) -> str:
        return (f"TextLayerResult(full_text_length={len(self.full_text)}, "
                f"pages={self.page_count}, fragments={self.fragment_count})")


class PdfTextLayerClient:
    """Reads the embedded text layer of a PDF. Scanned PDFs yield no text."""

    def __init__(self, row_grid: float = 2.0, x_tolerance: float = 1.5):
        """
        Args:
            row_grid: Vertical grid used by the line reconstructor
            x_tolerance: Horizontal gap (PDF units) pdfplumber still treats as one run
        """
        self.row_grid = row_grid
        self.x_tolerance = x_tolerance

    def extract_pages(self, source: PdfSource) -> List[List[PositionedFragment]]:
        """
        Read positioned fragments, one list per page in page order.

        Raises:
            FileNotFoundError: source is a path that does not exist
            TextExtractionError: the PDF cannot be parsed
        """
        if isinstance(source, bytes):
            handle: Any = io.BytesIO(source)
        else:
            path = Path(source)
            if not path.exists():
                raise FileNotFoundError(f"PDF not found: {path}")
            handle = str(path)

        try:
            with pdfplumber.open(handle) as pdf:
                return [self._page_fragments(page) for page in pdf.pages]
        except Exception as exc:
            raise TextExtractionError(f"cannot read PDF text layer ({exc})") from exc

    def extract_text(self, source: PdfSource) -> TextLayerResult:
        """Read fragments and reconstruct the document text."""
        pages = self.extract_pages(source)
        full_text = reconstruct_text(pages, grid=self.row_grid)

        from dvi_extractor.utils import get_logger, log_text_layer_result
        text_result = TextLayerResult(full_text=full_text, pages=pages)
        log_text_layer_result(get_logger(), text_result, debug=True)
        return text_result

    def _page_fragments(self, page: Any) -> List[PositionedFragment]:
        """Convert pdfplumber word runs to fragments positioned on their baseline."""
        words = page.extract_words(
            keep_blank_chars=True,
            use_text_flow=True,
            x_tolerance=self.x_tolerance,
            return_chars=True,
        ) or []

        fragments = []
        for word in words:
            text = word.get("text", "")
            if not text.strip():
                continue
            fragments.append(PositionedFragment(
                text=text,
                x=float(word["x0"]),
                y=_baseline(word),
            ))
        return fragments


def _baseline(word: Dict[str, Any]) -> float:
    """
    Baseline of the word's first visible glyph, bottom-up in PDF user space.

    Labels and values in different font sizes share a baseline, not a
    glyph-box bottom.
    """
    chars = word["chars"]
    glyph = next((c for c in chars if c.get("text", "").strip()), chars[0])
    return float(glyph["matrix"][5])
