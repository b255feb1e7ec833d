"""Field extraction via the language model.

The model's reply is parsed leniently. A reply that yields no JSON object
is not an error: the extractor returns empty fields plus the reason, and the
pipeline carries on with neutral defaults.
"""

import logging
from typing import Optional, Tuple

from jobmatch.domain.models import ExtractedFields, JobPost
from jobmatch.llm.base import LanguageModel
from jobmatch.llm.parsing import Failed, parse_model_json
from jobmatch.logging import get_logger
from jobmatch.utils.text import truncate_text

from .prompts import build_extraction_prompt

logger = get_logger(__name__, component="extraction")


class FieldExtractor:
    """Asks the language model for the structured fields of a job post."""

    def __init__(self, language_model: LanguageModel, logger_instance: Optional[logging.Logger] = None):
        self.language_model = language_model
        self.logger = logger_instance or logger

    def extract(self, post: JobPost) -> Tuple[ExtractedFields, Optional[str]]:
        """Extract fields from ``post``.

        Args:
            post: The fetched job post

        Returns:
            (fields, None) on success, or (empty fields, failure reason) when
            the reply could not be parsed

        Raises:
            LanguageModelError: If the model cannot be reached
        """
        reply = self.language_model.complete(build_extraction_prompt(post.text))
        outcome = parse_model_json(reply)

        if isinstance(outcome, Failed):
            self.logger.warning(
                f"Extraction reply could not be parsed: {outcome.reason}",
                extra={
                    "event": "extraction.parse_failed",
                    "reason": outcome.reason,
                    "raw_output": truncate_text(outcome.raw, 500),
                },
            )
            return ExtractedFields.empty(), outcome.reason

        fields = ExtractedFields.from_mapping(outcome.data)
        self.logger.info(
            f"Extracted fields for '{fields.title or '(untitled)'}'",
            extra={
                "event": "extraction.completed",
                "repaired": outcome.repaired,
                "tech_count": len(fields.technologies or []),
                "has_title": fields.title is not None,
            },
        )
        return fields, None
