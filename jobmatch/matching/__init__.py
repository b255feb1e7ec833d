"""Overlap scoring and verdict assembly.

This module provides:
- ReferenceTechSet, OverlapScore, MatchVerdict: scoring and verdict records
- OverlapScorer: exact, similarity and context overlap scoring
- ReferenceEmbeddingCache: lazily embedded reference technologies
- VerdictAssembler: deterministic or model-authored verdicts with fallback
"""

from .embeddings import ReferenceEmbeddingCache
from .models import MatchVerdict, OverlapScore, ReferenceTechSet, compute_match_percentage
from .scorer import OverlapScorer, score_exact, score_in_context
from .verdict import ModelVerdictPayload, VerdictAssembler, deterministic_reasons

__all__ = [
    "ReferenceTechSet",
    "OverlapScore",
    "MatchVerdict",
    "compute_match_percentage",
    "OverlapScorer",
    "ReferenceEmbeddingCache",
    "score_exact",
    "score_in_context",
    "VerdictAssembler",
    "ModelVerdictPayload",
    "deterministic_reasons",
]
