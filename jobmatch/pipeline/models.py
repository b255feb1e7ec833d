"""State and errors for a single pipeline run."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from jobmatch.domain.models import ExtractedFields, JobPost, NormalizedFields
from jobmatch.exceptions import JobMatchError
from jobmatch.matching.models import MatchVerdict, OverlapScore
from jobmatch.utils.timestamps import utc_now

STAGES = ("fetch", "retrieve", "extract", "normalize", "score", "assemble", "notify")


@dataclass(frozen=True)
class PipelineState:
    """Accumulated state of one run.

    Each stage reads the state and returns a partial update; ``merge``
    produces the next state. A field is None until the stage that sets it
    has completed.

    Attributes:
        run_id: Identifier attached to every log line of the run
        started_at: UTC time the run started
        post: Fetched job post (Fetch)
        retrieved_context: Resume excerpts relevant to the post (Retrieve)
        extracted: Fields from the language model (Extract)
        extraction_error: Why extraction fell back to empty fields, if it did
        normalized: Canonical fields and category (Normalize)
        score: Technology overlap (Score)
        verdict: Final match verdict (Assemble)
    """

    run_id: str
    started_at: datetime = field(default_factory=utc_now)
    post: Optional[JobPost] = None
    retrieved_context: Optional[str] = None
    extracted: Optional[ExtractedFields] = None
    extraction_error: Optional[str] = None
    normalized: Optional[NormalizedFields] = None
    score: Optional[OverlapScore] = None
    verdict: Optional[MatchVerdict] = None

    def merge(self, **updates) -> "PipelineState":
        """Return a new state with ``updates`` applied."""
        return replace(self, **updates) if updates else self


class PipelineError(JobMatchError):
    """A stage failed and the run was aborted.

    Attributes:
        stage: Name of the failed stage (one of STAGES)
        run_id: Run that failed
    """

    def __init__(self, message: str, stage: str, run_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.stage = stage
        self.run_id = run_id
