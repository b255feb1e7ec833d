"""Technology name canonicalization."""

from typing import List, Sequence

from jobmatch.config.models import DEFAULT_TECH_RULES, TechRule


def canonical_technology(raw: str, rules: Sequence[TechRule] = DEFAULT_TECH_RULES) -> str:
    """Map one technology name to its canonical spelling.

    The lower-cased name is checked against each rule's substring in order;
    the first hit wins. Names no rule covers are returned unchanged.

    Example:
        >>> canonical_technology("NodeJS")
        'Node.js'
        >>> canonical_technology("GraphQL")
        'GraphQL'
    """
    lowered = raw.lower()
    for rule in rules:
        if rule.contains in lowered:
            return rule.canonical
    return raw


def normalize_technologies(raw: Sequence[str], rules: Sequence[TechRule] = DEFAULT_TECH_RULES) -> List[str]:
    """Canonicalize a list of technology names.

    Returns a new list of the same length and order; the input is not modified.
    """
    return [canonical_technology(name, rules) for name in raw]
