"""Process-wide cache of reference technology embeddings."""

import threading
from typing import Optional

import numpy as np

from jobmatch.llm.base import Embedder
from jobmatch.llm.similarity import as_matrix, normalize_rows
from jobmatch.logging import get_logger

from .models import ReferenceTechSet

logger = get_logger(__name__, component="scoring")


class ReferenceEmbeddingCache:
    """Embeds the reference technologies once, on first use.

    The first caller of ``get()`` embeds the reference set while holding the
    lock; every later caller gets the same read-only, row-normalized matrix
    without locking. A failed embedding call leaves the cache empty so the
    next run tries again.
    """

    def __init__(self, reference: ReferenceTechSet, embedder: Embedder):
        self.reference = reference
        self.embedder = embedder
        self._lock = threading.Lock()
        self._matrix: Optional[np.ndarray] = None

    @property
    def initialized(self) -> bool:
        return self._matrix is not None

    def get(self) -> np.ndarray:
        """Return the reference matrix, shape (len(reference), dim).

        Raises:
            EmbeddingError: If the first embedding call fails
        """
        matrix = self._matrix
        if matrix is not None:
            return matrix

        with self._lock:
            if self._matrix is None:
                self._matrix = self._build()
            return self._matrix

    def _build(self) -> np.ndarray:
        names = list(self.reference.names)
        if not names:
            logger.warning(
                "Reference technology set is empty; similarity scores will be 0",
                extra={"event": "scoring.reference.empty"},
            )
            matrix = as_matrix([])
        else:
            matrix = normalize_rows(as_matrix(self.embedder.embed(names)))

        matrix.setflags(write=False)

        logger.info(
            f"Embedded {len(names)} reference technologies",
            extra={
                "event": "scoring.reference.embedded",
                "reference_count": len(names),
                "dimensions": int(matrix.shape[1]) if matrix.ndim == 2 else 0,
            },
        )
        return matrix
