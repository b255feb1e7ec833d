"""Post sources that need no network access."""

from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from jobmatch.domain.models import JobPost
from jobmatch.logging import get_logger

from .base import PostSource
from .defaults import DEFAULT_POST_TEXT
from .exceptions import PostSourceResponseError

logger = get_logger(__name__, component="source")


class StaticPostSource(PostSource):
    """Returns fixed post text, or the built-in sample post when none is given."""

    def __init__(self, text: Optional[str] = None):
        self.text = text
        self._is_default = text is None

    @property
    def label(self) -> str:
        return "default" if self._is_default else "text"

    def fetch(self) -> JobPost:
        text = DEFAULT_POST_TEXT if self._is_default else self.text
        try:
            return JobPost(text=text, source=self.label)
        except ValidationError as e:
            raise PostSourceResponseError("Post text is empty") from e


class FilePostSource(PostSource):
    """Reads a post from a UTF-8 text file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def label(self) -> str:
        return f"file:{self.path}"

    def fetch(self) -> JobPost:
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(
                f"Failed to read post file {self.path}: {e}",
                extra={"event": "source.fetch.error", "path": str(self.path)},
            )
            raise PostSourceResponseError(f"Failed to read post file {self.path}: {e}") from e

        try:
            return JobPost(text=text, source=self.label)
        except ValidationError as e:
            raise PostSourceResponseError(f"Post file {self.path} is empty") from e
