"""
Ranking Metrics for Offline Recommendation Evaluation

Computes standard information-retrieval metrics against binary relevance
(a post is relevant if the user liked or commented on it):
- Precision@K, Recall@K, HitRate@K
- MRR@K, MAP@K, NDCG@K
- Coverage, average popularity, intra-list diversity

Usage:
    from evaluation.metrics import precision_at_k, ndcg_at_k
    p = precision_at_k(predicted_ids, truth_ids, 10)
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Sequence, Set

from recommender.utils.similarity import cosine_similarity

DIVERSITY_PAIRS = ("adjacent", "all")


def _hits(predicted: Sequence[str], truth: Set[str], k: int) -> int:
    return sum(1 for pid in predicted[:k] if pid in truth)


def precision_at_k(predicted: Sequence[str], truth: Set[str], k: int) -> float:
    """
    Compute Precision@K.

    Args:
        predicted: Ranked list of recommended post IDs
        truth: Set of relevant post IDs
        k: Cutoff

    Returns:
        |top-k ∩ truth| / k, or 0 when k is 0
    """
    if k <= 0:
        return 0.0
    return _hits(predicted, truth, k) / k


def recall_at_k(predicted: Sequence[str], truth: Set[str], k: int) -> float:
    """|top-k ∩ truth| / |truth|, 0 when truth is empty."""
    if not truth:
        return 0.0
    return _hits(predicted, truth, k) / len(truth)


def hit_rate_at_k(predicted: Sequence[str], truth: Set[str], k: int) -> float:
    """1.0 if any of the top-k is relevant, else 0.0."""
    return 1.0 if any(pid in truth for pid in predicted[:k]) else 0.0


def reciprocal_rank_at_k(predicted: Sequence[str], truth: Set[str], k: int) -> float:
    """1 / rank of the first relevant item in the top-k, 0 if none."""
    for i, pid in enumerate(predicted[:k]):
        if pid in truth:
            return 1.0 / (i + 1)
    return 0.0


def average_precision_at_k(predicted: Sequence[str], truth: Set[str], k: int) -> float:
    """
    Average precision at each hit position, normalized by min(|truth|, k).

    Returns 0 when there are no hits.
    """
    hits = 0
    score = 0.0
    for i, pid in enumerate(predicted[:k]):
        if pid in truth:
            hits += 1
            score += hits / (i + 1)
    if hits == 0:
        return 0.0
    return score / min(len(truth), k)


def ndcg_at_k(predicted: Sequence[str], truth: Set[str], k: int) -> float:
    """
    Compute NDCG@K with binary gains.

    DCG sums 1 / log2(i + 2) over relevant positions i (0-indexed); IDCG is the
    same sum over min(|truth|, k) ideal hits.

    Returns:
        NDCG@K between 0 and 1, 0 when there is no ideal gain
    """
    dcg = sum(
        1.0 / math.log2(i + 2)
        for i, pid in enumerate(predicted[:k])
        if pid in truth
    )
    idcg = sum(1.0 / math.log2(i + 2) for i in range(min(len(truth), k)))
    if idcg == 0:
        return 0.0
    return dcg / idcg


def coverage_percent(recommended_ids: Iterable[str], catalog_size: int) -> float:
    """
    Compute catalog coverage.

    Args:
        recommended_ids: Every post ID recommended across evaluated users
        catalog_size: Number of active posts

    Returns:
        Percentage (0-100) of the catalog that was recommended at least once
    """
    if catalog_size <= 0:
        return 0.0
    return len(set(recommended_ids)) / catalog_size * 100


def intra_list_diversity(
    post_ids: Sequence[str],
    tag_vectors: Dict[str, List[float]],
    pairs: str = "adjacent",
) -> float:
    """
    Mean (1 - cosine) between binary tag vectors of recommended posts.

    pairs="adjacent" compares consecutive items; pairs="all" averages over every
    unordered pair (classic ILD). Lists shorter than 2 score 0. Posts without a
    known vector count as the zero vector.
    """
    if pairs not in DIVERSITY_PAIRS:
        raise ValueError(f"pairs must be one of {DIVERSITY_PAIRS}, got {pairs!r}")
    n = len(post_ids)
    if n < 2:
        return 0.0

    if pairs == "adjacent":
        index_pairs = [(i, i + 1) for i in range(n - 1)]
    else:
        index_pairs = [(i, j) for i in range(n - 1) for j in range(i + 1, n)]

    total = 0.0
    for i, j in index_pairs:
        vi = tag_vectors.get(post_ids[i], [])
        vj = tag_vectors.get(post_ids[j], [])
        total += 1.0 - cosine_similarity(vi, vj)
    return total / len(index_pairs)


def round_metric(value: float, places: int = 3) -> float:
    """Round half-up to a fixed number of decimals."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
