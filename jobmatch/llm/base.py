"""Interfaces for the external model collaborators.

The pipeline only ever talks to a language model through ``complete`` and to
an embedding service through ``embed``; tests substitute plain fakes.
"""

from typing import List, Protocol, Sequence, runtime_checkable


@runtime_checkable
class LanguageModel(Protocol):
    """Text-in, text-out language model."""

    def complete(self, prompt: str) -> str:
        """Return the model's reply to a single user prompt.

        Raises:
            LanguageModelError: If the service cannot be reached or rejects the call
        """
        ...


@runtime_checkable
class Embedder(Protocol):
    """Embedding service returning one vector per input, in input order."""

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """Embed ``texts``.

        Raises:
            EmbeddingError: If the service fails or returns a mismatched batch
        """
        ...
