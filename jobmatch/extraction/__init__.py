"""Structured field extraction from job posts."""

from .prompts import EXTRACTION_PROMPT, build_extraction_prompt
from .service import FieldExtractor

__all__ = ["EXTRACTION_PROMPT", "build_extraction_prompt", "FieldExtractor"]
