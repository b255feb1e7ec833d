"""Pipeline orchestration for job post matching."""

from .models import STAGES, PipelineError, PipelineState
from .runner import MatchPipeline

__all__ = ["MatchPipeline", "PipelineState", "PipelineError", "STAGES"]
