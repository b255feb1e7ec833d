"""Report context built from a finished pipeline state."""

from typing import Any, Dict

from jobmatch.domain.models import ExtractedFields, NormalizedFields
from jobmatch.utils.timestamps import format_timestamp


def build_report_context(state) -> Dict[str, Any]:
    """Build the template and JSON context for a finished run.

    Args:
        state: PipelineState after the Assemble stage

    Returns:
        Dictionary with:
        - extracted, normalized, matchResult: the three report sections
        - post_source, post_digest: where the post came from
        - extraction_error: parse failure reason, or None
        - matched_techs, unmatched_techs: per-tech breakdown of the score
        - run_id, generated_at: Run identifier and start time
    """
    extracted = state.extracted or ExtractedFields.empty()
    normalized = state.normalized or NormalizedFields()
    verdict = state.verdict
    score = state.score

    return {
        "run_id": state.run_id,
        "generated_at": format_timestamp(state.started_at),
        "post_source": state.post.source if state.post else None,
        "post_digest": state.post.digest if state.post else None,
        "extracted": extracted.to_dict(),
        "normalized": normalized.to_dict(),
        "matchResult": verdict.to_dict() if verdict else None,
        "strategy": verdict.strategy if verdict else None,
        "scoring_mode": score.mode if score else None,
        "matched_techs": list(score.matched_techs) if score else [],
        "unmatched_techs": list(score.unmatched_techs) if score else [],
        "extraction_error": state.extraction_error,
    }
