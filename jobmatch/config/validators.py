"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check a raw configuration for settings that are legal but probably wrong.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    references = config_dict.get("reference_technologies")
    if not references:
        warning_messages.append(
            "reference_technologies is empty; every post will score 0% overlap"
        )
    elif isinstance(references, list):
        stripped = [r.strip() for r in references if isinstance(r, str)]
        duplicates = sorted({r for r in stripped if r and stripped.count(r) > 1})
        if duplicates:
            warning_messages.append(
                f"Duplicate reference technologies will be deduplicated: {', '.join(duplicates)}"
            )

    matching = config_dict.get("matching", {})
    if isinstance(matching, dict):
        threshold = matching.get("threshold")
        if threshold == 100:
            warning_messages.append(
                "matching.threshold is 100; only posts whose every technology is known will match"
            )

        similarity = matching.get("similarity_threshold")
        if isinstance(similarity, (int, float)) and similarity < 0.5:
            warning_messages.append(
                f"Low similarity_threshold ({similarity}) will match unrelated technologies"
            )

        resume = config_dict.get("resume")
        uses_context = (
            matching.get("scoring_mode") == "context" or matching.get("verdict_strategy") == "model"
        )
        if resume and not uses_context:
            warning_messages.append(
                "resume is configured but only used by scoring_mode 'context' "
                "or verdict_strategy 'model'; it will be ignored"
            )

    normalization = config_dict.get("normalization", {})
    if isinstance(normalization, dict):
        buckets = normalization.get("title_buckets")
        if isinstance(buckets, list) and not buckets:
            warning_messages.append("title_buckets is empty; every title will be classified as Other")

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
