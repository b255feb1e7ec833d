"""Custom exceptions for job post sources."""

from jobmatch.exceptions import JobMatchError


class PostSourceError(JobMatchError):
    """Base exception for all post source errors.

    Catching this catches any failure to obtain the post text. The pipeline
    treats it as fatal for the run.
    """

    pass


class PostSourceHTTPError(PostSourceError):
    """HTTP request for a post failed with a 4xx or 5xx status, or could not be sent."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        """Initialize HTTP error with status code and URL.

        Args:
            message: Human-readable error message
            status_code: HTTP status code (0 when no response was received)
            url: URL that failed
        """
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class PostSourceTimeoutError(PostSourceError):
    """HTTP request for a post timed out."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class PostSourceResponseError(PostSourceError):
    """A post was retrieved but contained no usable text (or the file was unreadable)."""

    pass
