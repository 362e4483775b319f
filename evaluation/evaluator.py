"""
Offline Recommendation Evaluator

Replays like/comment interactions as ground truth and scores each registered
algorithm at several cutoffs:
1. Fetch one catalog snapshot and build per-user ground truth
2. Select users (explicit ids, minimum interaction count)
3. Run every algorithm per user; a failure skips that user for that algorithm
4. Average per-user metrics over users with at least one recommendation

Usage:
    evaluator = RecommendationEvaluator(store)
    report = asyncio.run(evaluator.evaluate(EvaluationOptions(ks=[5, 10])))
"""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime
from typing import Awaitable, Callable, Dict, List, Literal, Optional, Set

from pydantic import BaseModel, Field, field_validator

from recommender.models.catalog import Post
from recommender.models.config import RecommendationConfig, resolve_config
from recommender.recommendation_engine import RecommendationEngine
from recommender.services.catalog_store import CatalogStore, InteractionMaskedStore

from .metrics import (
    average_precision_at_k,
    coverage_percent,
    hit_rate_at_k,
    intra_list_diversity,
    ndcg_at_k,
    precision_at_k,
    recall_at_k,
    reciprocal_rank_at_k,
    round_metric,
)

logger = logging.getLogger(__name__)

AlgorithmFn = Callable[[RecommendationEngine, str], Awaitable[List[Post]]]

# Named algorithms under evaluation, in report order
ALGORITHMS: Dict[str, AlgorithmFn] = {
    "cosine_based": lambda engine, uid: engine.get_raw_recommended_posts_for_user(uid),
    "user_based": lambda engine, uid: engine.get_user_based_recommendations(uid),
    "interaction_based": lambda engine, uid: engine.get_collaborative_interaction_recommendations(uid),
    "fusion": lambda engine, uid: engine.get_final_recommendations(uid),
}


# =============================================================================
# Options and report models
# =============================================================================


class EvaluationOptions(BaseModel):
    """What to evaluate and how."""

    ks: List[int] = Field(default_factory=lambda: [5, 10, 20])
    # None evaluates every user in the catalog
    user_ids: Optional[List[str]] = None
    min_interactions: int = Field(default=1, ge=0)
    # None evaluates every registered algorithm
    algorithms: Optional[List[str]] = None
    diversity_pairs: Literal["adjacent", "all"] = "adjacent"
    # Hide the evaluated user's own likes/comments from the algorithms
    mask_ground_truth: bool = False
    max_concurrency: int = Field(default=1, ge=1)

    @field_validator("ks")
    @classmethod
    def _positive_ks(cls, v: List[int]) -> List[int]:
        if not v or any(k < 1 for k in v):
            raise ValueError("ks must be a non-empty list of positive integers")
        return sorted(set(v))

    @field_validator("algorithms")
    @classmethod
    def _known_algorithms(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        unknown = [name for name in v if name not in ALGORITHMS]
        if unknown:
            raise ValueError(f"Unknown algorithms: {unknown}. Available: {list(ALGORITHMS)}")
        return v

    def algorithm_names(self) -> List[str]:
        return list(self.algorithms) if self.algorithms else list(ALGORITHMS)


class CutoffMetrics(BaseModel):
    """Averaged metrics for one algorithm at one cutoff."""

    k: int
    precision: float = 0.0
    recall: float = 0.0
    hit_rate: float = 0.0
    mrr: float = 0.0
    map: float = 0.0
    ndcg: float = 0.0
    coverage: float = 0.0
    avg_popularity: float = 0.0
    diversity: float = 0.0


class AlgorithmMetrics(BaseModel):
    """Metrics for one algorithm across all cutoffs."""

    algorithm: str
    users_evaluated: int = 0
    failures: int = 0
    at_k: Dict[int, CutoffMetrics] = Field(default_factory=dict)


class EvaluationReport(BaseModel):
    """Full evaluation output, JSON-serializable via model_dump(mode="json")."""

    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
    dataset: Optional[str] = None
    ks: List[int] = Field(default_factory=list)
    users_considered: int = 0
    catalog_size: int = 0
    options: Dict = Field(default_factory=dict)
    algorithms: Dict[str, AlgorithmMetrics] = Field(default_factory=dict)


# =============================================================================
# Evaluator
# =============================================================================


class RecommendationEvaluator:
    """Scores recommendation algorithms against held-out interactions."""

    def __init__(
        self,
        store: CatalogStore,
        config: Optional[RecommendationConfig] = None,
        dataset_name: Optional[str] = None,
    ):
        self.store = store
        self.config = resolve_config(config)
        self.dataset_name = dataset_name
        self.engine = RecommendationEngine(store, self.config)

    async def evaluate(self, options: Optional[EvaluationOptions] = None) -> EvaluationReport:
        options = options or EvaluationOptions()
        names = options.algorithm_names()

        users, posts, tags, likes, comments = await asyncio.gather(
            self.store.list_all_users_with_preferences(),
            self.store.list_active_posts(with_tags=True, with_author=False),
            self.store.list_all_tags(),
            self.store.list_all_likes(),
            self.store.list_all_comments(),
        )

        truth = ground_truth(likes, comments)
        user_ids = self._select_users([u.id for u in users], truth, options)
        tag_vectors = binary_tag_vectors([t.id for t in tags], posts)
        logger.info(
            "Evaluating %d users x %d algorithms (ks=%s, catalog=%d posts)",
            len(user_ids),
            len(names),
            options.ks,
            len(posts),
        )

        semaphore = asyncio.Semaphore(options.max_concurrency)

        async def run_user(user_id: str) -> Dict[str, Optional[List[Post]]]:
            async with semaphore:
                return await self._predict_for_user(user_id, names, options.mask_ground_truth)

        predictions = await asyncio.gather(*(run_user(uid) for uid in user_ids))

        report = EvaluationReport(
            dataset=self.dataset_name,
            ks=options.ks,
            users_considered=len(user_ids),
            catalog_size=len(posts),
            options=options.model_dump(),
        )
        for name in names:
            per_user = [
                (uid, preds[name]) for uid, preds in zip(user_ids, predictions)
            ]
            report.algorithms[name] = aggregate_algorithm(
                name, per_user, truth, tag_vectors, len(posts), options
            )
            logger.info(
                "%s: %d users evaluated, %d failures",
                name,
                report.algorithms[name].users_evaluated,
                report.algorithms[name].failures,
            )
        return report

    def _select_users(
        self,
        catalog_user_ids: List[str],
        truth: Dict[str, Set[str]],
        options: EvaluationOptions,
    ) -> List[str]:
        candidates = options.user_ids if options.user_ids is not None else catalog_user_ids
        selected = []
        seen = set()
        for uid in candidates:
            if uid in seen:
                continue
            seen.add(uid)
            if len(truth.get(uid, ())) < options.min_interactions:
                continue
            selected.append(uid)
        return selected

    async def _predict_for_user(
        self,
        user_id: str,
        names: List[str],
        mask_ground_truth: bool,
    ) -> Dict[str, Optional[List[Post]]]:
        engine = self.engine
        if mask_ground_truth:
            engine = RecommendationEngine(InteractionMaskedStore(self.store, user_id), self.config)

        results: Dict[str, Optional[List[Post]]] = {}
        for name in names:
            try:
                results[name] = await ALGORITHMS[name](engine, user_id)
            except Exception as e:
                logger.warning("Algorithm %s failed for user %s: %s", name, user_id, e)
                results[name] = None
        return results


# =============================================================================
# Helpers
# =============================================================================


def ground_truth(likes, comments) -> Dict[str, Set[str]]:
    """Map user id -> ids of posts the user liked or commented on."""
    truth: Dict[str, Set[str]] = defaultdict(set)
    for edge in list(likes) + list(comments):
        truth[edge.user_id].add(edge.post_id)
    return dict(truth)


def binary_tag_vectors(tag_ids: List[str], posts: List[Post]) -> Dict[str, List[float]]:
    """Post id -> 0/1 tag membership vector over the tag catalog."""
    index = {tid: i for i, tid in enumerate(tag_ids)}
    vectors = {}
    for post in posts:
        vec = [0.0] * len(index)
        for tid in post.tag_ids():
            if tid in index:
                vec[index[tid]] = 1.0
        vectors[post.id] = vec
    return vectors


def aggregate_algorithm(
    name: str,
    per_user: List[tuple],
    truth: Dict[str, Set[str]],
    tag_vectors: Dict[str, List[float]],
    catalog_size: int,
    options: EvaluationOptions,
) -> AlgorithmMetrics:
    """
    Average per-user metrics for one algorithm.

    per_user holds (user_id, predictions) pairs; predictions is None when the
    algorithm raised for that user. Only users with a non-empty prediction list
    count toward users_evaluated and the averages.
    """
    failures = sum(1 for _, preds in per_user if preds is None)
    evaluated = [(uid, preds) for uid, preds in per_user if preds]
    result = AlgorithmMetrics(algorithm=name, users_evaluated=len(evaluated), failures=failures)

    n = len(evaluated)
    for k in options.ks:
        sums = defaultdict(float)
        recommended_ids: List[str] = []
        popularity_total = 0
        slots = 0

        for uid, preds in evaluated:
            user_truth = truth.get(uid, set())
            top = preds[:k]
            ids = [p.id for p in preds]
            top_ids = ids[:k]

            sums["precision"] += precision_at_k(ids, user_truth, k)
            sums["recall"] += recall_at_k(ids, user_truth, k)
            sums["hit_rate"] += hit_rate_at_k(ids, user_truth, k)
            sums["mrr"] += reciprocal_rank_at_k(ids, user_truth, k)
            sums["map"] += average_precision_at_k(ids, user_truth, k)
            sums["ndcg"] += ndcg_at_k(ids, user_truth, k)
            sums["diversity"] += intra_list_diversity(top_ids, tag_vectors, options.diversity_pairs)

            recommended_ids.extend(top_ids)
            popularity_total += sum(p.popularity for p in top)
            slots += len(top)

        averages = {metric: (total / n if n else 0.0) for metric, total in sums.items()}
        result.at_k[k] = CutoffMetrics(
            k=k,
            coverage=round_metric(coverage_percent(recommended_ids, catalog_size)),
            avg_popularity=round_metric(popularity_total / slots if slots else 0.0),
            **{metric: round_metric(value) for metric, value in averages.items()},
        )
    return result
