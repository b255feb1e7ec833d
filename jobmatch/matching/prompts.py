"""Prompt templates for model-authored verdicts."""

import json
from typing import Optional, Sequence

from jobmatch.domain.models import NormalizedFields

from .models import OverlapScore

VERDICT_PROMPT = """You are an expert at matching job posts to a candidate's skills.

{candidate_section}

Job (normalized):
{job_json}

The candidate matches {match_count} out of {total} required technologies ({percentage}%).
Matched: {matched}
Not matched: {unmatched}
The threshold for a match is >= {threshold}%.

Respond with valid JSON only, no markdown:
{{"match": boolean, "reasons": [string, ...], "techMatchCount": {match_count}, "totalRequiredTechs": {total}, "matchPercentage": {percentage}}}
"reasons" must contain at least one short sentence explaining the fit."""


def build_verdict_prompt(
    score: OverlapScore,
    normalized: NormalizedFields,
    threshold: int,
    reference_names: Sequence[str] = (),
    context: Optional[str] = None,
) -> str:
    """Render the verdict prompt.

    Resume excerpts are used as the candidate description when available,
    otherwise the reference technology list.
    """
    if context:
        candidate_section = f"Resume excerpts:\n{context}"
    else:
        known = ", ".join(reference_names) if reference_names else "(none)"
        candidate_section = f"Candidate's known technologies: {known}"

    return VERDICT_PROMPT.format(
        candidate_section=candidate_section,
        job_json=json.dumps(normalized.to_dict(), indent=2, ensure_ascii=False),
        match_count=score.tech_match_count,
        total=score.total_required_techs,
        percentage=score.match_percentage,
        matched=", ".join(score.matched_techs) or "(none)",
        unmatched=", ".join(score.unmatched_techs) or "(none)",
        threshold=threshold,
    )
