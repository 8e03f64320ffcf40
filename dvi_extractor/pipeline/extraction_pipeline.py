"""Full extraction pipeline: PDF text layer, normalization, field cascade."""

import time
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from dvi_extractor.config import ExtractionSettings
from dvi_extractor.extractors import DeclarationExtractor, build_pattern_set
from dvi_extractor.schema import DocumentResult
from dvi_extractor.text_layer import (
    PdfTextLayerClient,
    PositionedFragment,
    TextExtractionError,
    normalize_text,
    reconstruct_text,
)


class ExtractionPipeline:
    """Processes declaration PDFs one document at a time."""

    def __init__(self, settings: Optional[ExtractionSettings] = None):
        """
        Initialize extraction pipeline.

        Args:
            settings: Tuning parameters. If None, read from DVI_* env vars.
        """
        self.settings = settings or ExtractionSettings.from_env()

        # Built once and shared by every document
        self.patterns = build_pattern_set()
        self.extractor = DeclarationExtractor(patterns=self.patterns, settings=self.settings)
        self.text_client = PdfTextLayerClient(row_grid=self.settings.row_grid)

    def extract(self, pdf_path: Union[str, Path]) -> DocumentResult:
        """
        Run the full pipeline on a PDF file.

        Pipeline steps:
        1. Validate the path
        2. Read positioned fragments and rebuild lines
        3. Normalize text
        4. Field extraction cascade

        Args:
            pdf_path: Path to a PDF file

        Returns:
            DocumentResult; status 'error' when the text layer is unreadable

        Raises:
            FileNotFoundError: pdf_path does not exist
            ValueError: pdf_path is not a .pdf file
        """
        path = Path(pdf_path)
        if not path.exists():
            raise FileNotFoundError(f"PDF not found: {pdf_path}")

        if path.suffix.lower() != '.pdf':
            raise ValueError(f"Unsupported file format: {path.suffix}. Use PDF.")

        return self._run(path.name, path)

    def extract_from_bytes(self, pdf_bytes: bytes, file_name: str = "document.pdf") -> DocumentResult:
        """
        Extract from PDF bytes (for use with uploaded files).

        Args:
            pdf_bytes: PDF file content
            file_name: Name reported in the result

        Returns:
            DocumentResult with extracted data and metadata
        """
        return self._run(file_name, pdf_bytes)

    def extract_from_pages(
        self,
        pages: Sequence[Iterable[PositionedFragment]],
        file_name: str = "document.pdf"
    ) -> DocumentResult:
        """Extract from already-read positioned fragments, one sequence per page."""
        start_time = time.time()
        raw_text = reconstruct_text(pages, grid=self.settings.row_grid)
        return self._extract_fields(file_name, raw_text, len(pages), start_time)

    def extract_text(self, text: str, file_name: str = "document.pdf") -> DocumentResult:
        """Extract from reconstructed (not necessarily normalized) text."""
        return self._extract_fields(file_name, text, 0, time.time())

    def extract_batch(self, pdf_paths: Iterable[Union[str, Path]]) -> List[DocumentResult]:
        """
        Process files sequentially, one result per path in input order.

        Unreadable PDFs, missing paths and non-PDF files are recorded as
        errored results; the rest of the batch still runs.
        """
        results = []
        for pdf_path in pdf_paths:
            try:
                results.append(self.extract(pdf_path))
            except (FileNotFoundError, ValueError) as e:
                from dvi_extractor.utils import get_logger
                get_logger().error(f"Skipping {pdf_path}: {e}")
                results.append(DocumentResult.failed(Path(pdf_path).name, str(e)))
        return results

    def _run(self, file_name: str, source: Union[Path, bytes]) -> DocumentResult:
        start_time = time.time()

        from dvi_extractor.utils import setup_logger, log_document_result
        logger = setup_logger()
        logger.info("=" * 60)
        logger.info(f"EXTRACTION PIPELINE: {file_name}")
        logger.info("=" * 60)

        logger.info("Step 1: Reading PDF text layer...")
        try:
            text_result = self.text_client.extract_text(source)
        except TextExtractionError as e:
            logger.error(f"Text extraction failed for {file_name}: {e}")
            result = DocumentResult.failed(
                file_name, str(e), processing_time=time.time() - start_time
            )
            log_document_result(logger, result)
            return result

        return self._extract_fields(
            file_name, text_result.full_text, text_result.page_count, start_time
        )

    def _extract_fields(
        self,
        file_name: str,
        raw_text: str,
        page_count: int,
        start_time: float
    ) -> DocumentResult:
        from dvi_extractor.utils import setup_logger, log_document_result
        logger = setup_logger()

        logger.info("Step 2: Normalizing text...")
        text = normalize_text(raw_text)

        logger.info("Step 3: Field extraction...")
        outcome = self.extractor.extract_all_fields(text)

        result = DocumentResult.from_outcome(
            file_name,
            outcome,
            processing_time=time.time() - start_time,
            text_length=len(text),
            page_count=page_count
        )
        log_document_result(logger, result)
        return result
