"""Data models for the recommendation pipeline."""

from .catalog import (
    Author,
    Comment,
    Like,
    Post,
    Tag,
    User,
    ensure_comments,
    ensure_likes,
    ensure_posts,
    ensure_tags,
    ensure_users,
    newest_first,
)
from .config import (
    DEFAULT_CONFIG,
    ConfigurationError,
    RecommendationConfig,
    resolve_config,
)
from .interactions import InteractionMatrix, build_interaction_matrix
from .scoring import FusionResult, ScoredPost, SignalScores

__all__ = [
    "Author",
    "Comment",
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "FusionResult",
    "InteractionMatrix",
    "Like",
    "Post",
    "RecommendationConfig",
    "ScoredPost",
    "SignalScores",
    "Tag",
    "User",
    "build_interaction_matrix",
    "ensure_comments",
    "ensure_likes",
    "ensure_posts",
    "ensure_tags",
    "ensure_users",
    "newest_first",
    "resolve_config",
]
