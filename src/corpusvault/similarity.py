# src/corpusvault/similarity.py
"""Cosine similarity over embedding vectors."""

from collections.abc import Sequence

import numpy as np


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine similarity between two vectors.

    Formula: cos(θ) = (a · b) / (||a|| * ||b||)

    Zero vectors have no direction, so their similarity to anything is 0.
    The result is clipped to [-1, 1] to absorb floating point drift.

    Raises:
        ValueError: If the vectors differ in length or hold non-finite values.
    """
    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)

    if a_arr.shape != b_arr.shape:
        raise ValueError(f"Vector dimensions differ: {a_arr.shape[0]} vs {b_arr.shape[0]}")
    if not (np.isfinite(a_arr).all() and np.isfinite(b_arr).all()):
        raise ValueError("Vectors contain non-finite values")

    norm_a, norm_b = np.linalg.norm(a_arr), np.linalg.norm(b_arr)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.clip(np.dot(a_arr, b_arr) / (norm_a * norm_b), -1.0, 1.0))


def cosine_similarities(query: Sequence[float], vectors: Sequence[Sequence[float]]) -> np.ndarray:
    """Compute the cosine similarity of ``query`` against every row of ``vectors``.

    Rows with zero norm (and a zero-norm query) score 0.

    Returns:
        1-D array with one similarity per row, in row order.
    """
    if len(vectors) == 0:
        return np.zeros(0, dtype=np.float64)

    q = np.asarray(query, dtype=np.float64)
    matrix = np.asarray(vectors, dtype=np.float64)
    if matrix.ndim != 2 or matrix.shape[1] != q.shape[0]:
        raise ValueError(
            f"Query dimension {q.shape[0]} does not match stored vectors {matrix.shape}"
        )

    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(q)
    dots = matrix @ q
    with np.errstate(divide="ignore", invalid="ignore"):
        scores = np.where(norms > 0, dots / np.where(norms > 0, norms, 1.0), 0.0)
    return np.clip(scores, -1.0, 1.0)
