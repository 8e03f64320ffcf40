"""Pipeline module for orchestrating the full extraction flow."""

from .extraction_pipeline import ExtractionPipeline

__all__ = ['ExtractionPipeline']
