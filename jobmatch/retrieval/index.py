"""In-memory similarity index over resume chunks."""

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from jobmatch.llm.base import Embedder
from jobmatch.llm.similarity import as_matrix, normalize_rows, similarity_matrix
from jobmatch.logging import get_logger
from jobmatch.utils.text import split_paragraphs

logger = get_logger(__name__, component="retrieval")

CHUNK_SEPARATOR = "\n---\n"


@dataclass(frozen=True)
class RetrievedChunk:
    """A resume chunk and its cosine similarity to the query."""

    text: str
    score: float


class ResumeIndex:
    """Resume chunks embedded once and searched by cosine similarity.

    Attributes:
        chunks: Resume chunks in document order
    """

    def __init__(
        self,
        chunks: Sequence[str],
        vectors: np.ndarray,
        embedder: Embedder,
        logger_instance: Optional[logging.Logger] = None,
    ):
        if len(chunks) != vectors.shape[0]:
            raise ValueError(
                f"Got {len(chunks)} chunks but {vectors.shape[0]} vectors"
            )
        self.chunks = list(chunks)
        self._vectors = normalize_rows(vectors) if len(chunks) else vectors
        self.embedder = embedder
        self.logger = logger_instance or logger

    @classmethod
    def from_text(cls, resume_text: str, embedder: Embedder) -> "ResumeIndex":
        """Chunk and embed a resume.

        Raises:
            EmbeddingError: If the chunks cannot be embedded
        """
        chunks = split_paragraphs(resume_text)
        vectors = as_matrix(embedder.embed(chunks)) if chunks else as_matrix([])

        logger.info(
            f"Indexed resume into {len(chunks)} chunks",
            extra={"event": "retrieval.indexed", "chunk_count": len(chunks)},
        )
        return cls(chunks, vectors, embedder)

    def __len__(self) -> int:
        return len(self.chunks)

    def search(self, query: str, k: int = 4) -> List[RetrievedChunk]:
        """Return up to ``k`` chunks most similar to ``query``, best first.

        Raises:
            EmbeddingError: If the query cannot be embedded
        """
        if not self.chunks or k <= 0 or not query.strip():
            return []

        query_vector = as_matrix(self.embedder.embed([query]))
        scores = similarity_matrix(query_vector, self._vectors)[0]

        # Stable sort keeps document order among equal scores
        order = np.argsort(-scores, kind="stable")[:k]
        results = [RetrievedChunk(text=self.chunks[i], score=float(scores[i])) for i in order]

        self.logger.debug(
            f"Retrieved {len(results)} resume chunks",
            extra={
                "event": "retrieval.searched",
                "k": k,
                "scores": [round(r.score, 4) for r in results],
            },
        )
        return results

    def context_for(self, query: str, k: int = 4) -> str:
        """Concatenate the top ``k`` chunks for ``query`` into one context string."""
        return CHUNK_SEPARATOR.join(chunk.text for chunk in self.search(query, k))


class ResumeRetriever:
    """Builds the resume index on first use and serves context for posts.

    Indexing is deferred so that an embedding failure surfaces inside the
    Retrieve stage of the run that needed it. A failed build is retried on
    the next call.
    """

    def __init__(self, resume_text: str, embedder: Embedder, top_k: int = 4):
        self.resume_text = resume_text
        self.embedder = embedder
        self.top_k = top_k
        self._lock = threading.Lock()
        self._index: Optional[ResumeIndex] = None

    @property
    def index(self) -> ResumeIndex:
        index = self._index
        if index is not None:
            return index

        with self._lock:
            if self._index is None:
                self._index = ResumeIndex.from_text(self.resume_text, self.embedder)
            return self._index

    def retrieve(self, query: str) -> str:
        """Return the top-k resume chunks for ``query`` joined into one string.

        Raises:
            EmbeddingError: If the resume or the query cannot be embedded
        """
        return self.index.context_for(query, self.top_k)
