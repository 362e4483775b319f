"""
Score fusion: blend tag, user-based, self-interaction, and collaborative
signals into one ranked list, then backfill short lists.

Ordering policy:
1. similarity-first: posts from the tag map, by tag score (descending)
2. remaining fused posts, by weighted total (descending)
3. if still below min_results: other active posts not authored by the user,
   newest first, with score 0 and backfill=True
"""

from typing import Dict, List, Optional

from ..models.catalog import Post, User, newest_first
from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.interactions import InteractionMatrix
from ..models.scoring import FusionResult, ScoredPost, SignalScores
from .content_based import score_posts_by_tags
from .interaction_based import borrowed_interaction_scores
from .user_based import build_preference_matrix, find_similar_users_by_tags
from .vector_space import VectorSpace

FUSION_WEIGHTS: Dict[str, float] = {
    "tag": 0.4,
    "user_based": 0.2,
    "interaction": 0.2,
    "collaborative": 0.2,
}


def collect_signal_scores(
    user: User,
    space: VectorSpace,
    active_posts: List[Post],
    users: List[User],
    matrix: InteractionMatrix,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> SignalScores:
    """Compute the four independent score maps for one user."""
    tag_scores = {
        sp.post.id: sp.score
        for sp in score_posts_by_tags(user, space, active_posts)
        if sp.score > config.similarity_threshold
    }

    similar_authors = {
        other_id
        for other_id, _ in find_similar_users_by_tags(
            user.id, build_preference_matrix(users, active_posts)
        )
    }
    user_based_scores = {
        post.id: 1.0
        for post in active_posts
        if not post.is_authored_by(user.id) and post.author.id in similar_authors
    }

    return SignalScores(
        tag=tag_scores,
        user_based=user_based_scores,
        interaction=matrix.row(user.id),
        collaborative=borrowed_interaction_scores(user.id, matrix),
    )


def weighted_total(signals: SignalScores, post_id: str) -> float:
    return (
        FUSION_WEIGHTS["tag"] * signals.tag.get(post_id, 0.0)
        + FUSION_WEIGHTS["user_based"] * signals.user_based.get(post_id, 0.0)
        + FUSION_WEIGHTS["interaction"] * signals.interaction.get(post_id, 0.0)
        + FUSION_WEIGHTS["collaborative"] * signals.collaborative.get(post_id, 0.0)
    )


def fuse_scores(
    user: Optional[User],
    space: VectorSpace,
    active_posts: List[Post],
    users: List[User],
    matrix: InteractionMatrix,
    config: RecommendationConfig = DEFAULT_CONFIG,
    min_results: Optional[int] = None,
) -> FusionResult:
    """
    Rank posts for a user by the weighted sum of all signals.

    Own posts and inactive posts never appear. Unknown users get an empty
    result (no backfill). min_results below 1 raises ValueError.
    """
    if min_results is not None and min_results < 1:
        raise ValueError(f"min_results must be at least 1, got {min_results}")
    if user is None:
        return FusionResult()
    target_size = min_results if min_results is not None else config.min_results

    signals = collect_signal_scores(user, space, active_posts, users, matrix, config)
    post_by_id = {post.id: post for post in active_posts}

    candidate_ids: Dict[str, None] = {}
    for scores in (signals.tag, signals.user_based, signals.interaction, signals.collaborative):
        for post_id in scores:
            candidate_ids.setdefault(post_id, None)

    fused: Dict[str, ScoredPost] = {}
    for post_id in candidate_ids:
        post = post_by_id.get(post_id)
        if post is None or post.is_authored_by(user.id):
            continue
        total = weighted_total(signals, post_id)
        if total <= 0:
            continue
        fused[post_id] = ScoredPost(
            post=post, score=total, breakdown=signals.breakdown_for(post_id)
        )

    ranked: List[ScoredPost] = []
    included = set()

    for post_id in sorted(signals.tag, key=lambda pid: signals.tag[pid], reverse=True):
        if post_id in fused and post_id not in included:
            ranked.append(fused[post_id])
            included.add(post_id)

    for scored in sorted(fused.values(), key=lambda sp: sp.score, reverse=True):
        if scored.post.id not in included:
            ranked.append(scored)
            included.add(scored.post.id)

    if len(ranked) < target_size:
        for post in newest_first(active_posts):
            if len(ranked) >= target_size:
                break
            if post.id in included or post.is_authored_by(user.id):
                continue
            ranked.append(ScoredPost(post=post, score=0.0, backfill=True))
            included.add(post.id)

    return FusionResult(ranked=ranked, signals=signals)
