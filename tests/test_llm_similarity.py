"""Unit tests for vector similarity helpers."""

import numpy as np
import pytest

from jobmatch.llm.similarity import (
    as_matrix,
    cosine_similarity,
    max_similarities,
    normalize_rows,
    similarity_matrix,
)


def test_cosine_similarity_basic():
    assert cosine_similarity([1, 0], [1, 0]) == pytest.approx(1.0)
    assert cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)
    assert cosine_similarity([1, 1], [1, 0]) == pytest.approx(0.7071, abs=1e-4)


def test_cosine_similarity_zero_vector():
    assert cosine_similarity([0, 0], [1, 0]) == 0.0


def test_normalize_rows_keeps_zero_rows():
    normalized = normalize_rows(np.array([[3.0, 4.0], [0.0, 0.0]]))

    assert normalized[0] == pytest.approx([0.6, 0.8])
    assert list(normalized[1]) == [0.0, 0.0]


def test_as_matrix_empty():
    assert as_matrix([]).shape == (0, 0)


def test_similarity_matrix_shape():
    queries = as_matrix([[1, 0], [0, 1], [1, 1]])
    references = as_matrix([[1, 0], [0, 2]])

    matrix = similarity_matrix(queries, references)

    assert matrix.shape == (3, 2)
    assert matrix[1, 1] == pytest.approx(1.0)


def test_max_similarities_no_references():
    best = max_similarities(as_matrix([[1, 0], [0, 1]]), as_matrix([]))

    assert list(best) == [0.0, 0.0]


def test_max_similarities_picks_best_reference():
    best = max_similarities(as_matrix([[1, 0]]), as_matrix([[0, 1], [1, 0.1]]))

    assert best[0] == pytest.approx(0.995, abs=1e-3)
