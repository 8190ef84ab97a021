"""
Cosine similarity between embedding vectors.
Malformed-but-well-typed input (length mismatch, empty or zero vectors) scores 0.
"""

from typing import Sequence

import numpy as np


def vector_magnitude(vector: Sequence[float]) -> float:
    """Euclidean norm of a vector (0.0 for empty input)."""
    if vector is None or len(vector) == 0:
        return 0.0
    return float(np.linalg.norm(np.asarray(vector, dtype=np.float64)))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two vectors in [-1, 1].

    Returns 0.0 instead of raising when the lengths differ, either vector is
    empty, or either vector has zero magnitude. Identical non-zero vectors
    score exactly 1.0.
    """
    if a is None or b is None or len(a) != len(b) or len(a) == 0:
        return 0.0

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)

    magnitude_a = np.linalg.norm(va)
    magnitude_b = np.linalg.norm(vb)
    if magnitude_a == 0 or magnitude_b == 0:
        return 0.0

    if np.array_equal(va, vb):
        return 1.0

    score = float(np.dot(va, vb) / (magnitude_a * magnitude_b))
    return max(-1.0, min(1.0, score))
