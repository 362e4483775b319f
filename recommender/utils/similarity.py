"""
Similarity utilities: cosine similarity shared by every recommender and by
the diversity metric.
"""

from typing import Sequence

import numpy as np


def cosine_similarity(v1: Sequence[float], v2: Sequence[float]) -> float:
    """
    Compute cosine similarity between two equal-length vectors.

    Returns 0.0 for empty vectors or when either norm is zero.
    """
    if len(v1) == 0 or len(v2) == 0:
        return 0.0
    if len(v1) != len(v2):
        raise ValueError(f"Vector length mismatch: {len(v1)} != {len(v2)}")
    a = np.asarray(v1, dtype=float)
    b = np.asarray(v2, dtype=float)
    norm_product = np.linalg.norm(a) * np.linalg.norm(b)
    if norm_product == 0:
        return 0.0
    return float(np.dot(a, b) / norm_product)
