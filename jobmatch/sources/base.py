"""Base class for job post sources."""

from abc import ABC, abstractmethod

from jobmatch.domain.models import JobPost


class PostSource(ABC):
    """Produces the job post a pipeline run works on.

    Subclasses implement ``fetch``; each call returns a fresh JobPost.
    """

    @abstractmethod
    def fetch(self) -> JobPost:
        """Fetch the post.

        Returns:
            JobPost with non-empty text

        Raises:
            PostSourceError: If the post cannot be obtained. Subclasses:
            - PostSourceHTTPError: HTTP 4xx/5xx or connection failure
            - PostSourceTimeoutError: Request timed out
            - PostSourceResponseError: Empty or unreadable content
        """
        pass

    @property
    @abstractmethod
    def label(self) -> str:
        """Short description of where the post comes from, for logs."""
        pass
