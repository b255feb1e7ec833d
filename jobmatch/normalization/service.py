"""Field normalization service.

Turns the loosely-typed fields extracted by the language model into a
NormalizedFields record:
1. Missing title becomes "" and missing technologies become []
2. Technologies are mapped to canonical names (order and duplicates kept)
3. The title is classified into a JobCategory
4. Seniority, remote and salary range pass through unchanged
"""

import logging
from typing import List, Optional, Sequence

from jobmatch.config.models import (
    DEFAULT_TECH_RULES,
    DEFAULT_TITLE_BUCKETS,
    NormalizationConfig,
    TechRule,
    TitleBucket,
)
from jobmatch.domain.models import ExtractedFields, NormalizedFields
from jobmatch.logging import get_logger

from .classifier import classify_title
from .techs import normalize_technologies

logger = get_logger(__name__, component="normalization")


class FieldNormalizer:
    """Normalizes ExtractedFields into NormalizedFields.

    Never fails: an empty ExtractedFields yields an empty title, no
    technologies and the Other category.
    """

    def __init__(
        self,
        title_buckets: Sequence[TitleBucket] = DEFAULT_TITLE_BUCKETS,
        tech_rules: Sequence[TechRule] = DEFAULT_TECH_RULES,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize FieldNormalizer.

        Args:
            title_buckets: Ordered title buckets (first match wins)
            tech_rules: Ordered technology rules (first match wins)
            logger_instance: Logger instance (defaults to module logger)
        """
        self.title_buckets = list(title_buckets)
        self.tech_rules = list(tech_rules)
        self.logger = logger_instance or logger

    @classmethod
    def from_config(cls, config: NormalizationConfig) -> "FieldNormalizer":
        return cls(title_buckets=config.title_buckets, tech_rules=config.tech_rules)

    def normalize(self, extracted: ExtractedFields) -> NormalizedFields:
        """Normalize one set of extracted fields.

        Args:
            extracted: Fields from the Extract stage (possibly empty)

        Returns:
            NormalizedFields with a category from the fixed set
        """
        title = extracted.title or ""
        raw_techs = self._string_entries(extracted.technologies)

        techs = normalize_technologies(raw_techs, self.tech_rules)
        category = classify_title(title, self.title_buckets)

        normalized = NormalizedFields(
            title=title,
            techs=techs,
            category=category,
            seniority=extracted.seniority,
            remote=extracted.remote,
            salary_range=extracted.salary_range,
        )

        self.logger.info(
            f"Normalized fields: category={category.value}, {len(techs)} technologies",
            extra={
                "event": "normalization.completed",
                "category": category.value,
                "tech_count": len(techs),
                "rewritten_count": sum(1 for raw, canon in zip(raw_techs, techs) if raw != canon),
                "empty_input": extracted.is_empty(),
            },
        )

        return normalized

    def _string_entries(self, technologies: Optional[Sequence]) -> List[str]:
        """Return the string entries of ``technologies``, skipping anything else."""
        if not technologies:
            return []

        entries = []
        for entry in technologies:
            if isinstance(entry, str):
                entries.append(entry)
            else:
                self.logger.debug(
                    "Skipping non-string technology entry",
                    extra={"event": "normalization.tech.skipped", "entry_type": type(entry).__name__},
                )
        return entries
