"""Technology overlap scoring against the candidate's reference set.

Three modes are supported:
- exact: a technology matches when its canonical name is in the reference set
- similarity: a technology matches when its embedding is close enough to any
  reference embedding (cosine >= similarity_threshold)
- context: a technology matches when its name appears in the resume excerpts
  retrieved for the post
"""

import logging
from typing import List, Optional, Sequence

from jobmatch.config.models import MatchingConfig, ScoringMode
from jobmatch.llm.base import Embedder
from jobmatch.llm.similarity import as_matrix, max_similarities
from jobmatch.logging import get_logger

from .embeddings import ReferenceEmbeddingCache
from .models import OverlapScore, ReferenceTechSet

logger = get_logger(__name__, component="scoring")


def score_exact(techs: Sequence[str], reference: ReferenceTechSet) -> OverlapScore:
    """Exact-match overlap score. Pure; performs no I/O.

    Example:
        >>> ref = ReferenceTechSet.from_names(["React", "Node.js", "AWS", "GraphQL"])
        >>> score_exact(["React", "Node.js", "AWS Lambda"], ref).match_percentage
        67
    """
    techs = list(techs)
    return OverlapScore.from_flags(techs, [tech in reference for tech in techs], ScoringMode.EXACT.value)


def score_in_context(techs: Sequence[str], context: str) -> OverlapScore:
    """Overlap score counting technologies mentioned verbatim in ``context``."""
    techs = list(techs)
    return OverlapScore.from_flags(
        techs, [bool(tech) and tech in context for tech in techs], ScoringMode.CONTEXT.value
    )


class OverlapScorer:
    """Computes how many of a post's technologies the candidate knows.

    Attributes:
        reference: The candidate's reference technologies
        mode: Scoring mode
        similarity_threshold: Minimum cosine similarity in similarity mode
    """

    def __init__(
        self,
        reference: ReferenceTechSet,
        mode: ScoringMode = ScoringMode.EXACT,
        similarity_threshold: float = 0.75,
        embedder: Optional[Embedder] = None,
        reference_cache: Optional[ReferenceEmbeddingCache] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize OverlapScorer.

        Args:
            reference: Reference technology set
            mode: exact, similarity or context
            similarity_threshold: Cosine threshold for similarity mode
            embedder: Embedding collaborator (required for similarity mode)
            reference_cache: Shared reference embeddings; built from embedder if omitted
            logger_instance: Logger instance (defaults to module logger)

        Raises:
            ValueError: If similarity mode is requested without an embedder
        """
        self.reference = reference
        self.mode = ScoringMode(mode)
        self.similarity_threshold = similarity_threshold
        self.embedder = embedder
        self.logger = logger_instance or logger

        if self.mode == ScoringMode.SIMILARITY:
            if embedder is None:
                raise ValueError("Similarity scoring requires an embedder")
            self.reference_cache = reference_cache or ReferenceEmbeddingCache(reference, embedder)
        else:
            self.reference_cache = reference_cache

    @classmethod
    def from_config(
        cls,
        reference: ReferenceTechSet,
        config: MatchingConfig,
        embedder: Optional[Embedder] = None,
        reference_cache: Optional[ReferenceEmbeddingCache] = None,
    ) -> "OverlapScorer":
        return cls(
            reference,
            mode=config.scoring_mode,
            similarity_threshold=config.similarity_threshold,
            embedder=embedder,
            reference_cache=reference_cache,
        )

    def score(self, techs: Sequence[str], context: Optional[str] = None) -> OverlapScore:
        """Score a list of canonical technology names.

        Args:
            techs: Normalized technologies (duplicates each count)
            context: Retrieved resume excerpts, used in context mode only

        Returns:
            OverlapScore; 0 matches and 0% when techs or the reference set is empty

        Raises:
            EmbeddingError: In similarity mode, if the embedding collaborator fails
        """
        techs = list(techs)

        if self.mode == ScoringMode.SIMILARITY:
            result = self._score_similarity(techs)
        elif self.mode == ScoringMode.CONTEXT:
            if context is None:
                self.logger.warning(
                    "Context scoring requested without retrieved context",
                    extra={"event": "scoring.context.missing"},
                )
            result = score_in_context(techs, context or "")
        else:
            result = score_exact(techs, self.reference)

        self.logger.info(
            f"Matched {result.tech_match_count}/{result.total_required_techs} technologies "
            f"({result.match_percentage}%)",
            extra={
                "event": "scoring.completed",
                "mode": self.mode.value,
                "tech_match_count": result.tech_match_count,
                "total_required_techs": result.total_required_techs,
                "match_percentage": result.match_percentage,
            },
        )
        return result

    def _score_similarity(self, techs: List[str]) -> OverlapScore:
        if not techs or not len(self.reference):
            return OverlapScore.from_flags(techs, [False] * len(techs), ScoringMode.SIMILARITY.value)

        references = self.reference_cache.get()

        # Embed each distinct name once; duplicates reuse the vector
        unique = list(dict.fromkeys(techs))
        vectors = self.embedder.embed(unique)
        best = max_similarities(as_matrix(vectors), references)
        best_by_tech = dict(zip(unique, (float(s) for s in best)))

        flags = [best_by_tech[tech] >= self.similarity_threshold for tech in techs]

        self.logger.debug(
            "Similarity scores computed",
            extra={
                "event": "scoring.similarity.computed",
                "similarities": {tech: round(sim, 4) for tech, sim in best_by_tech.items()},
                "threshold": self.similarity_threshold,
            },
        )
        return OverlapScore.from_flags(techs, flags, ScoringMode.SIMILARITY.value)
