"""Pipeline stages: vector space, the four recommenders, fusion, post context."""

from .content_based import recommend_content_based, score_posts_by_tags
from .context import CONTEXT_PAGE_SIZE, recommend_for_post
from .fusion import FUSION_WEIGHTS, collect_signal_scores, fuse_scores
from .interaction_based import (
    INTERACTION_SIMILARITY_THRESHOLD,
    borrowed_interaction_scores,
    find_similar_users_by_interactions,
    recommend_interaction_based,
)
from .user_based import (
    USER_SIMILARITY_THRESHOLD,
    build_preference_matrix,
    find_similar_users_by_tags,
    recommend_user_based,
)
from .vector_space import VectorSpace, build_vector_space, tag_weight

__all__ = [
    "CONTEXT_PAGE_SIZE",
    "FUSION_WEIGHTS",
    "INTERACTION_SIMILARITY_THRESHOLD",
    "USER_SIMILARITY_THRESHOLD",
    "VectorSpace",
    "borrowed_interaction_scores",
    "build_preference_matrix",
    "build_vector_space",
    "collect_signal_scores",
    "find_similar_users_by_interactions",
    "find_similar_users_by_tags",
    "fuse_scores",
    "recommend_content_based",
    "recommend_for_post",
    "recommend_interaction_based",
    "recommend_user_based",
    "score_posts_by_tags",
    "tag_weight",
]
