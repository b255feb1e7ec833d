"""Custom exceptions for language model and embedding collaborators."""

from typing import Optional

from jobmatch.exceptions import JobMatchError


class CollaboratorError(JobMatchError):
    """Base exception for failures of an external model service.

    These are never recovered inside a pipeline run: the run is aborted and
    the caller decides whether to try again.
    """

    def __init__(self, message: str, model: Optional[str] = None) -> None:
        super().__init__(message)
        self.model = model


class LanguageModelError(CollaboratorError):
    """A chat completion request failed (network, auth, quota, timeout)."""

    pass


class EmbeddingError(CollaboratorError):
    """An embedding request failed or returned the wrong number of vectors."""

    pass
