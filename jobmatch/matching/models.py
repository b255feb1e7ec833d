"""Data models for overlap scoring and match verdicts.

This module defines the reference skill set, the overlap score computed for
a post, and the final verdict handed to the notification sink.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Tuple


def compute_match_percentage(match_count: int, total: int) -> int:
    """Integer percentage of ``match_count`` over ``total``, halves rounded up.

    Returns 0 when ``total`` is 0.

    Example:
        >>> compute_match_percentage(2, 3)
        67
        >>> compute_match_percentage(1, 8)
        13
    """
    if total <= 0:
        return 0
    # floor(100 * count / total + 0.5) without float error
    return (200 * match_count + total) // (2 * total)


@dataclass(frozen=True)
class ReferenceTechSet:
    """The candidate's known technologies, by canonical name.

    Immutable and shared by every run in the process. Keeps declaration
    order for prompts and embedding, and a frozenset for membership tests.
    """

    names: Tuple[str, ...] = ()
    _lookup: frozenset = field(default=frozenset(), init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_lookup", frozenset(self.names))

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ReferenceTechSet":
        """Build from names, dropping blanks and later duplicates."""
        ordered: List[str] = []
        for name in names:
            stripped = name.strip()
            if stripped and stripped not in ordered:
                ordered.append(stripped)
        return cls(names=tuple(ordered))

    def __contains__(self, name: object) -> bool:
        return name in self._lookup

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)


@dataclass(frozen=True)
class OverlapScore:
    """How many of a post's technologies the candidate knows.

    Attributes:
        tech_match_count: Entries of the post's technology list that matched
        total_required_techs: Length of the post's technology list
        match_percentage: Rounded percentage, 0 when there are no technologies
        matched_techs: Technologies counted as matched, post order
        unmatched_techs: Technologies not matched, post order
        mode: Scoring mode that produced this score
    """

    tech_match_count: int
    total_required_techs: int
    match_percentage: int
    matched_techs: Tuple[str, ...] = ()
    unmatched_techs: Tuple[str, ...] = ()
    mode: str = "exact"

    def __post_init__(self):
        object.__setattr__(self, "matched_techs", tuple(self.matched_techs))
        object.__setattr__(self, "unmatched_techs", tuple(self.unmatched_techs))

    @classmethod
    def from_flags(cls, techs: List[str], flags: List[bool], mode: str) -> "OverlapScore":
        """Build a score from one matched/unmatched flag per technology."""
        matched = [tech for tech, hit in zip(techs, flags) if hit]
        unmatched = [tech for tech, hit in zip(techs, flags) if not hit]
        return cls(
            tech_match_count=len(matched),
            total_required_techs=len(techs),
            match_percentage=compute_match_percentage(len(matched), len(techs)),
            matched_techs=matched,
            unmatched_techs=unmatched,
            mode=mode,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "techMatchCount": self.tech_match_count,
            "totalRequiredTechs": self.total_required_techs,
            "matchPercentage": self.match_percentage,
            "matchedTechs": list(self.matched_techs),
            "unmatchedTechs": list(self.unmatched_techs),
            "mode": self.mode,
        }


@dataclass(frozen=True)
class MatchVerdict:
    """Final match decision for one job post.

    Construction enforces the verdict invariants, so a malformed verdict can
    never reach the notification sink.

    Attributes:
        match: Whether the post is a match
        reasons: Human-readable explanation, never empty
        tech_match_count: Matched technologies (<= total_required_techs)
        total_required_techs: Technologies required by the post
        match_percentage: Rounded overlap percentage in [0, 100]
        strategy: "deterministic", "model" or "fallback"
    """

    match: bool
    reasons: Tuple[str, ...]
    tech_match_count: int
    total_required_techs: int
    match_percentage: int
    strategy: str = "deterministic"

    def __post_init__(self):
        object.__setattr__(self, "reasons", tuple(self.reasons))
        if not self.reasons or not all(isinstance(r, str) and r.strip() for r in self.reasons):
            raise ValueError("A verdict needs at least one non-empty reason")
        if self.tech_match_count < 0 or self.total_required_techs < 0:
            raise ValueError("Technology counts cannot be negative")
        if self.tech_match_count > self.total_required_techs:
            raise ValueError(
                f"tech_match_count ({self.tech_match_count}) exceeds "
                f"total_required_techs ({self.total_required_techs})"
            )
        expected = compute_match_percentage(self.tech_match_count, self.total_required_techs)
        if self.match_percentage != expected:
            raise ValueError(
                f"match_percentage {self.match_percentage} does not match counts (expected {expected})"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the keys used by reports and model prompts."""
        return {
            "match": self.match,
            "reasons": list(self.reasons),
            "techMatchCount": self.tech_match_count,
            "totalRequiredTechs": self.total_required_techs,
            "matchPercentage": self.match_percentage,
        }
