"""Field normalization: title categories and canonical technology names.

This module provides:
- classify_title: first-match keyword bucketing of a job title
- normalize_technologies: substring-rule canonicalization of technology names
- FieldNormalizer: combines both into a NormalizedFields record
"""

from .classifier import classify_title
from .service import FieldNormalizer
from .techs import canonical_technology, normalize_technologies

__all__ = [
    "FieldNormalizer",
    "classify_title",
    "canonical_technology",
    "normalize_technologies",
]
