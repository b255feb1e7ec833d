"""Job post sources.

- StaticPostSource: given text, or the built-in sample post
- FilePostSource: a UTF-8 text file
- HttpPostSource: a web page, reduced to plain text
"""

from .base import PostSource
from .defaults import DEFAULT_POST_TEXT
from .exceptions import (
    PostSourceError,
    PostSourceHTTPError,
    PostSourceResponseError,
    PostSourceTimeoutError,
)
from .factory import get_post_source
from .http import HttpPostSource
from .static import FilePostSource, StaticPostSource

__all__ = [
    "PostSource",
    "StaticPostSource",
    "FilePostSource",
    "HttpPostSource",
    "get_post_source",
    "DEFAULT_POST_TEXT",
    "PostSourceError",
    "PostSourceHTTPError",
    "PostSourceTimeoutError",
    "PostSourceResponseError",
]
