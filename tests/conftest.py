"""Shared fixtures and fakes for the job match tests.

The fakes stand in for the external model collaborators so that no test
touches the network.
"""

from typing import List, Optional, Sequence

import pytest

from jobmatch.logging.context import clear_log_context


class FakeLanguageModel:
    """Language model returning canned replies in order.

    The last reply is repeated once the list is exhausted. Every prompt is
    recorded in ``prompts``.
    """

    def __init__(self, replies: Sequence[str] = ("",), error: Optional[Exception] = None):
        self.replies = list(replies)
        self.error = error
        self.prompts: List[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        if len(self.replies) > 1:
            return self.replies.pop(0)
        return self.replies[0] if self.replies else ""


class KeywordEmbedder:
    """Embedder whose vector has one dimension per keyword.

    Dimension i is 1.0 when keyword i occurs in the lower-cased text, which
    makes cosine similarities easy to reason about in assertions.
    """

    def __init__(self, keywords: Sequence[str], error: Optional[Exception] = None):
        self.keywords = [k.lower() for k in keywords]
        self.error = error
        self.calls: List[List[str]] = []

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        self.calls.append(list(texts))
        if self.error is not None:
            raise self.error
        return [
            [1.0 if keyword in text.lower() else 0.0 for keyword in self.keywords]
            for text in texts
        ]


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def make_llm():
    """Factory for FakeLanguageModel instances."""
    return FakeLanguageModel


@pytest.fixture
def make_embedder():
    """Factory for KeywordEmbedder instances."""
    return KeywordEmbedder


@pytest.fixture
def extraction_reply():
    """A well-formed extraction reply for a full-stack post."""
    return (
        '{"Title": "Senior Full-Stack Engineer", '
        '"Technologies": ["ReactJS", "NodeJS", "GraphQL", "Docker"], '
        '"Seniority": "Senior", "Remote": true, "SalaryRange": "$120k-$150k"}'
    )


@pytest.fixture
def reference_names():
    """The candidate's known technologies used across tests."""
    return ["React", "Node.js", "AWS", "GraphQL"]
