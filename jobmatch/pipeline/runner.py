"""Pipeline orchestration for matching one job post."""

import logging
import time
from typing import Any, Callable, Dict, Optional
from uuid import uuid4

from jobmatch.domain.models import JobPost
from jobmatch.exceptions import JobMatchError
from jobmatch.extraction.service import FieldExtractor
from jobmatch.logging import get_logger
from jobmatch.logging.context import log_context
from jobmatch.matching.scorer import OverlapScorer
from jobmatch.matching.verdict import VerdictAssembler
from jobmatch.normalization.service import FieldNormalizer
from jobmatch.notifications.sinks import NotificationSink
from jobmatch.retrieval.index import ResumeRetriever
from jobmatch.sources.base import PostSource
from jobmatch.sources.static import StaticPostSource

from .models import PipelineError, PipelineState

logger = get_logger(__name__, component="pipeline")

StageFn = Callable[[PipelineState], Dict[str, Any]]


class MatchPipeline:
    """
    Runs Fetch -> (Retrieve) -> Extract -> Normalize -> Score -> Assemble -> Notify.

    Stages run strictly in order. Each one reads the current state and
    returns a partial update that is merged before the next stage starts.
    Retrieve runs only when a resume retriever is configured.

    A reply from the language model that cannot be parsed never stops a run.
    A collaborator that cannot be reached does: the run is aborted with a
    PipelineError naming the stage.
    """

    def __init__(
        self,
        extractor: FieldExtractor,
        normalizer: FieldNormalizer,
        scorer: OverlapScorer,
        assembler: VerdictAssembler,
        threshold: int = 50,
        source: Optional[PostSource] = None,
        retriever: Optional[ResumeRetriever] = None,
        sink: Optional[NotificationSink] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """
        Initialize the match pipeline.

        Args:
            extractor: Extract stage (language model)
            normalizer: Normalize stage
            scorer: Score stage
            assembler: Assemble stage
            threshold: Minimum match percentage for a match
            source: Where posts come from when ``run`` is given none
            retriever: Resume retriever; enables the Retrieve stage
            sink: Report destination for the Notify stage; skipped if None
            logger_instance: Logger instance (defaults to module logger)
        """
        self.extractor = extractor
        self.normalizer = normalizer
        self.scorer = scorer
        self.assembler = assembler
        self.threshold = threshold
        self.source = source or StaticPostSource()
        self.retriever = retriever
        self.sink = sink
        self.logger = logger_instance or logger

    def run(self, post: Optional[JobPost] = None) -> PipelineState:
        """
        Execute one run.

        Args:
            post: Post to match; fetched from the configured source if None

        Returns:
            Final PipelineState with a verdict

        Raises:
            PipelineError: If a collaborator fails; ``stage`` names where
        """
        state = PipelineState(run_id=uuid4().hex)
        run_start = time.perf_counter()

        with log_context(run_id=state.run_id):
            self.logger.info("Pipeline run started", extra={"event": "pipeline.run.started"})

            state = self._run_stage("fetch", lambda s: self._fetch(s, post), state)

            with log_context(post_digest=state.post.digest):
                if self.retriever is not None:
                    state = self._run_stage("retrieve", self._retrieve, state)
                state = self._run_stage("extract", self._extract, state)
                state = self._run_stage("normalize", self._normalize, state)
                state = self._run_stage("score", self._score, state)
                state = self._run_stage("assemble", self._assemble, state)
                if self.sink is not None:
                    state = self._run_stage("notify", self._notify, state)

                self.logger.info(
                    "Pipeline run completed",
                    extra={
                        "event": "pipeline.run.completed",
                        "duration_ms": int((time.perf_counter() - run_start) * 1000),
                        "match": state.verdict.match,
                        "match_percentage": state.verdict.match_percentage,
                        "degraded": state.extraction_error is not None,
                    },
                )

        return state

    def _run_stage(self, name: str, stage: StageFn, state: PipelineState) -> PipelineState:
        with log_context(stage=name):
            self.logger.debug(f"Stage {name} started", extra={"event": "stage.started"})
            stage_start = time.perf_counter()

            try:
                updates = stage(state)
            except JobMatchError as e:
                self.logger.error(
                    f"Stage {name} failed: {e}",
                    extra={
                        "event": "stage.failed",
                        "error_type": type(e).__name__,
                        "duration_ms": int((time.perf_counter() - stage_start) * 1000),
                    },
                )
                raise PipelineError(
                    f"Stage '{name}' failed: {e}", stage=name, run_id=state.run_id
                ) from e

            self.logger.info(
                f"Stage {name} completed",
                extra={
                    "event": "stage.completed",
                    "duration_ms": int((time.perf_counter() - stage_start) * 1000),
                    "updated_fields": sorted(updates),
                },
            )
            return state.merge(**updates)

    def _fetch(self, state: PipelineState, post: Optional[JobPost]) -> Dict[str, Any]:
        return {"post": post if post is not None else self.source.fetch()}

    def _retrieve(self, state: PipelineState) -> Dict[str, Any]:
        return {"retrieved_context": self.retriever.retrieve(state.post.text)}

    def _extract(self, state: PipelineState) -> Dict[str, Any]:
        extracted, error = self.extractor.extract(state.post)
        return {"extracted": extracted, "extraction_error": error}

    def _normalize(self, state: PipelineState) -> Dict[str, Any]:
        return {"normalized": self.normalizer.normalize(state.extracted)}

    def _score(self, state: PipelineState) -> Dict[str, Any]:
        return {"score": self.scorer.score(state.normalized.techs, context=state.retrieved_context)}

    def _assemble(self, state: PipelineState) -> Dict[str, Any]:
        verdict = self.assembler.assemble(
            state.score, state.normalized, self.threshold, context=state.retrieved_context
        )
        return {"verdict": verdict}

    def _notify(self, state: PipelineState) -> Dict[str, Any]:
        self.sink.emit(state)
        return {}
