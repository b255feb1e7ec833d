"""Verdict assembly: turns an overlap score into a MatchVerdict.

The decision is always ``match_percentage >= threshold``. What varies is who
writes the reasons:
- deterministic: one fixed sentence chosen by the outcome
- model: the language model explains the verdict; if its reply cannot be
  parsed or lacks fields, the deterministic reasons are used plus a note
  about the parse failure
"""

import logging
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator

from jobmatch.config.models import MatchingConfig, VerdictStrategy
from jobmatch.domain.models import NormalizedFields
from jobmatch.llm.base import LanguageModel
from jobmatch.llm.parsing import Failed, parse_model_json
from jobmatch.logging import get_logger
from jobmatch.utils.text import truncate_text

from .models import MatchVerdict, OverlapScore
from .prompts import build_verdict_prompt

logger = get_logger(__name__, component="verdict")


class ModelVerdictPayload(BaseModel):
    """The part of a model-authored verdict that is taken from the model.

    Counts in the reply are ignored; the computed score is authoritative.
    """

    match: bool
    reasons: List[str] = Field(..., min_length=1)

    model_config = {"extra": "ignore"}

    @field_validator("reasons")
    @classmethod
    def non_empty_reasons(cls, v: List[str]) -> List[str]:
        reasons = [r.strip() for r in v if r and r.strip()]
        if not reasons:
            raise ValueError("reasons must contain at least one non-empty string")
        return reasons


def deterministic_reasons(score: OverlapScore, threshold: int) -> List[str]:
    """The single fixed explanation for a threshold decision."""
    counts = (
        f"{score.tech_match_count} of {score.total_required_techs} required technologies known"
    )
    if score.match_percentage >= threshold:
        return [f"Sufficient technology overlap: {counts} ({score.match_percentage}% >= {threshold}% threshold)"]
    return [f"Insufficient technology overlap: {counts} ({score.match_percentage}% < {threshold}% threshold)"]


class VerdictAssembler:
    """Builds the final MatchVerdict for a post.

    Attributes:
        strategy: deterministic or model
        language_model: Collaborator used by the model strategy
        reference_names: Candidate technologies quoted in prompts
    """

    def __init__(
        self,
        strategy: VerdictStrategy = VerdictStrategy.DETERMINISTIC,
        language_model: Optional[LanguageModel] = None,
        reference_names: Sequence[str] = (),
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize VerdictAssembler.

        Raises:
            ValueError: If the model strategy is requested without a language model
        """
        self.strategy = VerdictStrategy(strategy)
        if self.strategy == VerdictStrategy.MODEL and language_model is None:
            raise ValueError("Model-authored verdicts require a language model")
        self.language_model = language_model
        self.reference_names = list(reference_names)
        self.logger = logger_instance or logger

    @classmethod
    def from_config(
        cls,
        config: MatchingConfig,
        language_model: Optional[LanguageModel] = None,
        reference_names: Sequence[str] = (),
    ) -> "VerdictAssembler":
        return cls(
            strategy=config.verdict_strategy,
            language_model=language_model,
            reference_names=reference_names,
        )

    def assemble(
        self,
        score: OverlapScore,
        normalized: NormalizedFields,
        threshold: int,
        context: Optional[str] = None,
    ) -> MatchVerdict:
        """Assemble the verdict.

        Args:
            score: Overlap score for the post
            normalized: Normalized job fields (quoted in the model prompt)
            threshold: Minimum match percentage for a match
            context: Retrieved resume excerpts, quoted in the model prompt

        Returns:
            MatchVerdict satisfying all verdict invariants

        Raises:
            LanguageModelError: If the model strategy cannot reach the model
        """
        if self.strategy == VerdictStrategy.DETERMINISTIC:
            verdict = self._deterministic(score, threshold)
        else:
            verdict = self._model_authored(score, normalized, threshold, context)

        self.logger.info(
            f"Verdict: {'match' if verdict.match else 'no match'} ({verdict.match_percentage}%)",
            extra={
                "event": "verdict.completed",
                "match": verdict.match,
                "strategy": verdict.strategy,
                "match_percentage": verdict.match_percentage,
                "threshold": threshold,
            },
        )
        return verdict

    def _deterministic(
        self,
        score: OverlapScore,
        threshold: int,
        strategy: str = "deterministic",
        extra_reasons: Sequence[str] = (),
    ) -> MatchVerdict:
        return MatchVerdict(
            match=score.match_percentage >= threshold,
            reasons=deterministic_reasons(score, threshold) + list(extra_reasons),
            tech_match_count=score.tech_match_count,
            total_required_techs=score.total_required_techs,
            match_percentage=score.match_percentage,
            strategy=strategy,
        )

    def _fallback(self, score: OverlapScore, threshold: int, failure: str) -> MatchVerdict:
        is_match = score.match_percentage >= threshold
        self.logger.warning(
            f"Falling back to deterministic verdict: {failure}",
            extra={"event": "verdict.fallback", "reason": failure},
        )
        return self._deterministic(
            score,
            threshold,
            strategy="fallback",
            extra_reasons=[f"Could not parse model verdict ({failure}); defaulting to {str(is_match).lower()}"],
        )

    def _model_authored(
        self,
        score: OverlapScore,
        normalized: NormalizedFields,
        threshold: int,
        context: Optional[str],
    ) -> MatchVerdict:
        is_match = score.match_percentage >= threshold
        prompt = build_verdict_prompt(score, normalized, threshold, self.reference_names, context)
        reply = self.language_model.complete(prompt)

        outcome = parse_model_json(reply)
        if isinstance(outcome, Failed):
            self.logger.debug(
                "Unparseable verdict reply",
                extra={"event": "verdict.parse_failed", "raw_output": truncate_text(outcome.raw, 500)},
            )
            return self._fallback(score, threshold, outcome.reason)

        try:
            payload = ModelVerdictPayload.model_validate(outcome.data)
        except ValidationError as e:
            missing = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            return self._fallback(
                score, threshold, f"missing or invalid fields: {', '.join(missing) or 'unknown'}"
            )

        if payload.match != is_match:
            self.logger.warning(
                "Model verdict disagrees with threshold rule; using threshold decision",
                extra={
                    "event": "verdict.override",
                    "model_match": payload.match,
                    "threshold_match": is_match,
                    "match_percentage": score.match_percentage,
                    "threshold": threshold,
                },
            )

        return MatchVerdict(
            match=is_match,
            reasons=payload.reasons,
            tech_match_count=score.tech_match_count,
            total_required_techs=score.total_required_techs,
            match_percentage=score.match_percentage,
            strategy="model",
        )
