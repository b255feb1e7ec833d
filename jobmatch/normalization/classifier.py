"""Job title classification into the fixed category set."""

from typing import Sequence

from jobmatch.config.models import DEFAULT_TITLE_BUCKETS, TitleBucket
from jobmatch.domain.models import JobCategory


def classify_title(title: str, buckets: Sequence[TitleBucket] = DEFAULT_TITLE_BUCKETS) -> JobCategory:
    """Return the category of the first bucket with a keyword found in ``title``.

    Keywords are case-sensitive substrings and buckets are tried in
    declaration order, so "Data API Engineer" is Backend with the default
    buckets. No match, or an empty title, gives ``JobCategory.OTHER``.

    Example:
        >>> classify_title("Senior Backend Engineer")
        <JobCategory.BACKEND: 'Backend'>
    """
    if not title:
        return JobCategory.OTHER

    for bucket in buckets:
        if any(keyword in title for keyword in bucket.keywords):
            return JobCategory(bucket.name)

    return JobCategory.OTHER
