"""
Blog Recommendation Engine

Single entry point for the recommender package:
- models/: catalog entities, RecommendationConfig, ScoredPost, InteractionMatrix
- stages/: vector space, content/user/interaction recommenders, fusion, post context
- services/: CatalogStore protocol and in-memory / JSON implementations
- utils/: cosine similarity, display cards
"""

from .models import (
    DEFAULT_CONFIG,
    ConfigurationError,
    FusionResult,
    InteractionMatrix,
    Post,
    RecommendationConfig,
    ScoredPost,
    Tag,
    User,
)
from .recommendation_engine import RecommendationEngine
from .services import (
    CatalogStore,
    InMemoryCatalogStore,
    InteractionMaskedStore,
    JsonCatalogStore,
    load_catalog_dataset,
)
from .utils import PostCard, cosine_similarity, to_post_card

__all__ = [
    "CatalogStore",
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "FusionResult",
    "InMemoryCatalogStore",
    "InteractionMaskedStore",
    "InteractionMatrix",
    "JsonCatalogStore",
    "Post",
    "PostCard",
    "RecommendationConfig",
    "RecommendationEngine",
    "ScoredPost",
    "Tag",
    "User",
    "cosine_similarity",
    "load_catalog_dataset",
    "to_post_card",
]
