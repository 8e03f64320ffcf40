"""Utility modules for logging and debugging."""

from .logger import (
    setup_logger,
    get_logger,
    log_text_layer_result,
    log_extraction_candidates,
    log_field_extraction,
    log_document_result,
    DEBUG_MODE,
)

__all__ = [
    'setup_logger',
    'get_logger',
    'log_text_layer_result',
    'log_extraction_candidates',
    'log_field_extraction',
    'log_document_result',
    'DEBUG_MODE',
]
