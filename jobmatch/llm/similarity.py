"""Vector similarity helpers built on numpy."""

from typing import Sequence

import numpy as np


def normalize_rows(vectors: np.ndarray) -> np.ndarray:
    """Scale each row to unit length; all-zero rows stay zero."""
    norms = np.linalg.norm(vectors, axis=1, keepdims=True)
    norms = np.where(norms == 0, 1, norms)
    return vectors / norms


def as_matrix(vectors: Sequence[Sequence[float]]) -> np.ndarray:
    """Convert a list of vectors to a 2-D float32 array (shape (0, 0) when empty)."""
    if len(vectors) == 0:
        return np.zeros((0, 0), dtype=np.float32)
    return np.asarray(vectors, dtype=np.float32)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two vectors; 0.0 if either has zero length."""
    va = np.asarray(a, dtype=np.float32)
    vb = np.asarray(b, dtype=np.float32)
    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(va, vb) / (norm_a * norm_b))


def similarity_matrix(queries: np.ndarray, references: np.ndarray) -> np.ndarray:
    """Pairwise cosine similarities, shape (len(queries), len(references))."""
    if queries.size == 0 or references.size == 0:
        return np.zeros((queries.shape[0], references.shape[0]))
    return normalize_rows(queries) @ normalize_rows(references).T


def max_similarities(queries: np.ndarray, references: np.ndarray) -> np.ndarray:
    """Best cosine similarity of each query against all references (0.0 if none)."""
    matrix = similarity_matrix(queries, references)
    if matrix.shape[1] == 0:
        return np.zeros(matrix.shape[0])
    return matrix.max(axis=1)
