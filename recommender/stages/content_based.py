"""
Content-based scoring: cosine similarity between the user's tag-preference
vector and each post's tag vector.

Threshold filter first; when too few posts pass, fall back to every post with
a positive score, best first.
"""

from typing import List, Optional

from ..models.catalog import Post, User
from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.scoring import ScoredPost
from ..utils.similarity import cosine_similarity
from .vector_space import VectorSpace


def score_posts_by_tags(
    user: User,
    space: VectorSpace,
    active_posts: List[Post],
) -> List[ScoredPost]:
    """Cosine score of every active post not authored by the user, in catalog order."""
    user_vector = space.user_vector(user.preference_ids())
    scored = []
    for post in active_posts:
        if post.is_authored_by(user.id):
            continue
        sim = cosine_similarity(user_vector, space.post_vector(post))
        scored.append(ScoredPost(post=post, score=sim, breakdown={"tag": sim}))
    return scored


def recommend_content_based(
    user: Optional[User],
    space: VectorSpace,
    active_posts: List[Post],
    config: RecommendationConfig = DEFAULT_CONFIG,
    cap_fallback: bool = True,
) -> List[ScoredPost]:
    """
    Rank posts for a user by tag similarity.

    Returns posts scoring above config.similarity_threshold when at least
    config.min_results of them pass. Otherwise returns posts with score > 0
    sorted by score (ties keep catalog order), truncated to min_results when
    cap_fallback is set. Missing users and users without preferences get [].
    """
    if user is None or not user.preferences:
        return []

    scored = score_posts_by_tags(user, space, active_posts)
    passing = [sp for sp in scored if sp.score > config.similarity_threshold]
    if len(passing) >= config.min_results:
        return passing

    fallback = sorted(
        (sp for sp in scored if sp.score > 0),
        key=lambda sp: sp.score,
        reverse=True,
    )
    if cap_fallback:
        fallback = fallback[: config.min_results]
    return fallback
