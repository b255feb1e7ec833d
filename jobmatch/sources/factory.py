"""Factory function for choosing a post source."""

from pathlib import Path
from typing import Optional

from jobmatch.config.models import PostConfig
from jobmatch.logging import get_logger

from .base import PostSource
from .http import HttpPostSource
from .static import FilePostSource, StaticPostSource

logger = get_logger(__name__, component="source")


def get_post_source(
    text: Optional[str] = None,
    path: Optional[Path] = None,
    url: Optional[str] = None,
    config: Optional[PostConfig] = None,
) -> PostSource:
    """Pick the post source for a run.

    At most one of text, path and url may be given. With none, the
    configured ``post.default_text`` is used, then the built-in sample post.

    Raises:
        ValueError: If more than one input is given

    Example:
        >>> get_post_source(text="Backend Engineer, Go, AWS").label
        'text'
    """
    config = config or PostConfig()

    given = [name for name, value in (("text", text), ("path", path), ("url", url)) if value is not None]
    if len(given) > 1:
        raise ValueError(f"Specify only one post input, got: {', '.join(given)}")

    if url is not None:
        source = HttpPostSource(url, timeout=config.http_timeout, user_agent=config.user_agent)
    elif path is not None:
        source = FilePostSource(path)
    elif text is not None:
        source = StaticPostSource(text)
    elif config.default_text is not None:
        source = StaticPostSource(config.default_text)
    else:
        source = StaticPostSource()

    logger.debug(
        "Selected post source",
        extra={"event": "source.selected", "source": source.label, "source_class": type(source).__name__},
    )
    return source
