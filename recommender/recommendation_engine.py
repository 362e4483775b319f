"""
Blog Recommendation Engine

Async facade over the modular pipeline:
- stages/vector_space: tag index and inverse log-usage weights
- stages/content_based, user_based, interaction_based: independent signals
- stages/fusion: weighted blend with deduplication and backfill
- stages/context: related posts for the post being read

Each public call fetches its own snapshot from the CatalogStore; once the data
is in memory all scoring is synchronous and pure.
"""

import asyncio
import logging
from typing import Iterable, List, Optional

from .models.catalog import Post
from .models.config import RecommendationConfig, resolve_config
from .models.interactions import build_interaction_matrix
from .models.scoring import FusionResult, ScoredPost
from .services.catalog_store import CatalogStore
from .stages.content_based import recommend_content_based
from .stages.context import recommend_for_post
from .stages.fusion import fuse_scores
from .stages.interaction_based import recommend_interaction_based
from .stages.user_based import recommend_user_based
from .stages.vector_space import build_vector_space
from .utils.cards import PostCard, to_post_card

logger = logging.getLogger(__name__)


class RecommendationEngine:
    """Ranks posts for users from a CatalogStore snapshot."""

    def __init__(self, store: CatalogStore, config: Optional[RecommendationConfig] = None):
        self.store = store
        self.config = resolve_config(config)

    # ------------------------------------------------------------------
    # Content-based
    # ------------------------------------------------------------------

    async def get_content_based_scores(
        self,
        user_id: str,
        cap_fallback: bool = True,
    ) -> List[ScoredPost]:
        """Tag-similarity ranking with scores."""
        tags, posts, user = await asyncio.gather(
            self.store.list_all_tags(),
            self.store.list_active_posts(with_tags=True, with_author=True),
            self.store.get_user_with_preferences(user_id),
        )
        if user is None:
            return []
        space = build_vector_space(tags, posts)
        scored = recommend_content_based(user, space, posts, self.config, cap_fallback)
        logger.debug(
            "content_based user=%s candidates=%d returned=%d", user_id, len(posts), len(scored)
        )
        return scored

    async def get_recommended_posts_for_user(self, user_id: str) -> List[PostCard]:
        """Content-based recommendations mapped to display cards."""
        scored = await self.get_content_based_scores(user_id, cap_fallback=True)
        return [to_post_card(sp.post) for sp in scored]

    async def get_raw_recommended_posts_for_user(self, user_id: str) -> List[Post]:
        """Content-based recommendations as full posts; fallback is not capped."""
        scored = await self.get_content_based_scores(user_id, cap_fallback=False)
        return [sp.post for sp in scored]

    # ------------------------------------------------------------------
    # Collaborative
    # ------------------------------------------------------------------

    async def get_user_based_recommendations(self, user_id: str) -> List[Post]:
        users, posts = await asyncio.gather(
            self.store.list_all_users_with_preferences(),
            self.store.list_active_posts(with_tags=True, with_author=True),
        )
        return recommend_user_based(user_id, users, posts)

    async def get_collaborative_interaction_recommendations(self, user_id: str) -> List[Post]:
        users, posts, likes, comments = await asyncio.gather(
            self.store.list_all_users_with_preferences(),
            self.store.list_active_posts(with_tags=True, with_author=True),
            self.store.list_all_likes(),
            self.store.list_all_comments(),
        )
        matrix = build_interaction_matrix((u.id for u in users), likes, comments)
        return [post for post, _ in recommend_interaction_based(user_id, matrix, posts)]

    # ------------------------------------------------------------------
    # Fusion
    # ------------------------------------------------------------------

    async def explain_final_recommendations(
        self,
        user_id: str,
        min_results: Optional[int] = None,
    ) -> FusionResult:
        """Fused ranking together with the per-signal score maps."""
        tags, posts, user, users, likes, comments = await asyncio.gather(
            self.store.list_all_tags(),
            self.store.list_active_posts(with_tags=True, with_author=True),
            self.store.get_user_with_preferences(user_id),
            self.store.list_all_users_with_preferences(),
            self.store.list_all_likes(),
            self.store.list_all_comments(),
        )
        if user is None:
            return FusionResult()
        space = build_vector_space(tags, posts)
        matrix = build_interaction_matrix((u.id for u in users), likes, comments)
        result = fuse_scores(user, space, posts, users, matrix, self.config, min_results)
        logger.debug(
            "fusion user=%s ranked=%d backfill=%d",
            user_id,
            len(result.ranked),
            result.backfill_count,
        )
        return result

    async def get_final_recommendations(
        self,
        user_id: str,
        min_results: Optional[int] = None,
    ) -> List[Post]:
        result = await self.explain_final_recommendations(user_id, min_results)
        return result.posts

    # ------------------------------------------------------------------
    # Post context
    # ------------------------------------------------------------------

    async def get_recommendations_based_on_current_post_tags(
        self,
        user_id: str,
        post_tag_ids: Iterable[str],
        current_post_id: str,
    ) -> List[Post]:
        user, posts = await asyncio.gather(
            self.store.get_user_with_preferences(user_id),
            self.store.list_active_posts(with_tags=True, with_author=True),
        )
        return recommend_for_post(user, post_tag_ids, current_post_id, posts, self.config)

    async def get_post_context_recommendations(self, user_id: str, post_id: str) -> List[Post]:
        """Resolve the post's tags, then recommend related posts. Unknown post -> []."""
        post = await self.store.get_post_with_tags(post_id)
        if post is None:
            return []
        return await self.get_recommendations_based_on_current_post_tags(
            user_id, post.tag_ids(), post_id
        )
