# tests/test_similarity.py
"""Tests for cosine similarity."""

import math

import numpy as np
import pytest

from corpusvault.similarity import cosine_similarities, cosine_similarity


class TestCosineSimilarity:
    def test_identical_vectors(self):
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors(self):
        assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)

    def test_scale_invariant(self):
        assert cosine_similarity([1.0, 1.0], [10.0, 10.0]) == pytest.approx(1.0)

    def test_zero_vector_scores_zero(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 2.0]) == 0.0
        assert cosine_similarity([1.0, 2.0], [0.0, 0.0]) == 0.0

    def test_result_within_bounds(self):
        a = [0.1 + 1e-17, 0.2, 0.3]
        assert -1.0 <= cosine_similarity(a, a) <= 1.0

    def test_dimension_mismatch_raises(self):
        with pytest.raises(ValueError, match="dimensions differ"):
            cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0])

    def test_non_finite_raises(self):
        with pytest.raises(ValueError, match="non-finite"):
            cosine_similarity([math.nan, 1.0], [1.0, 1.0])
        with pytest.raises(ValueError, match="non-finite"):
            cosine_similarity([1.0, 1.0], [math.inf, 1.0])


class TestCosineSimilarities:
    def test_matches_pairwise(self):
        query = [1.0, 2.0, 0.5]
        vectors = [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [1.0, 2.0, 0.5]]

        scores = cosine_similarities(query, vectors)

        assert scores.shape == (3,)
        for score, vector in zip(scores, vectors, strict=True):
            assert score == pytest.approx(cosine_similarity(query, vector))

    def test_empty_vectors(self):
        scores = cosine_similarities([1.0, 0.0], [])
        assert isinstance(scores, np.ndarray)
        assert scores.size == 0

    def test_zero_rows_score_zero(self):
        scores = cosine_similarities([1.0, 0.0], [[0.0, 0.0], [1.0, 0.0]])
        assert scores[0] == 0.0
        assert scores[1] == pytest.approx(1.0)

    def test_zero_query_scores_zero(self):
        scores = cosine_similarities([0.0, 0.0], [[1.0, 0.0], [0.0, 1.0]])
        assert scores.tolist() == [0.0, 0.0]

    def test_dimension_mismatch_raises(self):
        with pytest.raises(ValueError, match="does not match"):
            cosine_similarities([1.0, 0.0, 0.0], [[1.0, 0.0]])
