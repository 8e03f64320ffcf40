"""Console logging for the extraction pipeline.

Set EXTRACTION_DEBUG=true to see candidate lists and the reconstructed text.
"""

import os
import logging
from typing import Any, Optional, Sequence

LOGGER_NAME = "dvi_extractor"
TEXT_PREVIEW_CHARS = 2000

DEBUG_MODE = os.getenv("EXTRACTION_DEBUG", "false").lower() == "true"

_DEBUG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_PLAIN_FORMAT = '%(levelname)s - %(message)s'


def _console_handler(level: int, debug: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    if debug:
        handler.setFormatter(logging.Formatter(_DEBUG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
    return handler


def setup_logger(level: int = logging.INFO, debug_mode: Optional[bool] = None) -> logging.Logger:
    """
    Configure the package logger once and return it.

    Args:
        level: Level used outside debug mode
        debug_mode: Overrides EXTRACTION_DEBUG when given

    Returns:
        The 'dvi_extractor' logger
    """
    global DEBUG_MODE

    if debug_mode is not None:
        DEBUG_MODE = debug_mode

    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        effective = logging.DEBUG if DEBUG_MODE else level
        logger.setLevel(effective)
        logger.addHandler(_console_handler(effective, DEBUG_MODE))
        logger.propagate = False
    return logger


def get_logger() -> logging.Logger:
    return setup_logger()


def log_text_layer_result(logger: logging.Logger, text_result: Any, debug: bool = False):
    """
    Summarize what the PDF text layer produced.

    Args:
        logger: Logger instance
        text_result: TextLayerResult object
        debug: Also dump the start of the reconstructed text (debug mode only)
    """
    logger.info(
        f"Text layer: {text_result.page_count} page(s), "
        f"{text_result.fragment_count} fragment(s), {len(text_result.full_text)} characters"
    )
    if text_result.page_count and not text_result.fragment_count:
        logger.warning("No text fragments found; the PDF is probably a scan")

    if debug and DEBUG_MODE:
        text = text_result.full_text
        logger.debug("-" * 60)
        logger.debug(text[:TEXT_PREVIEW_CHARS])
        if len(text) > TEXT_PREVIEW_CHARS:
            logger.debug(f"[... {len(text) - TEXT_PREVIEW_CHARS} more characters]")
        logger.debug("-" * 60)


def log_extraction_candidates(logger: logging.Logger, field_name: str, candidates: Sequence[Any]):
    """Debug listing of the candidates considered for one field."""
    if not DEBUG_MODE:
        return

    if not candidates:
        logger.debug(f"  {field_name}: no candidates in window")
        return

    logger.debug(f"  {field_name}: {len(candidates)} candidate(s)")
    for candidate in candidates:
        logger.debug(f"    {candidate.tag} rank={candidate.rank} "
                     f"at={candidate.offset}: '{candidate.value}'")


def log_field_extraction(logger: logging.Logger, field_name: str, value: Any):
    if value is None or value == "":
        logger.warning(f"  ✗ {field_name:20s}: missing")
    else:
        logger.info(f"  ✓ {field_name:20s}: {value}")


def log_document_result(logger: logging.Logger, result: Any):
    """
    Log the final status of one document.

    Args:
        logger: Logger instance
        result: DocumentResult object
    """
    logger.info(
        f"{result.file_name}: {result.status.value} "
        f"({len(result.warnings)} warning(s), {result.processing_time:.2f}s)"
    )
    for warning in result.warnings:
        logger.warning(f"  - {warning}")
