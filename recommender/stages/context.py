"""
Post-context recommendations: related posts for the post a user is reading.

Only activates when the current post shares a tag with the user's interests.
Tag-matched posts come first, then other recent posts fill the page.
"""

from typing import Iterable, List, Optional, Set

from ..models.catalog import Post, User, newest_first
from ..models.config import DEFAULT_CONFIG, RecommendationConfig

CONTEXT_PAGE_SIZE = 10


def _fill(
    selected: List[Post],
    candidates: Iterable[Post],
    page_size: int,
) -> None:
    taken: Set[str] = {post.id for post in selected}
    for post in candidates:
        if len(selected) >= page_size:
            return
        if post.id in taken:
            continue
        selected.append(post)
        taken.add(post.id)


def recommend_for_post(
    user: Optional[User],
    post_tag_ids: Iterable[str],
    current_post_id: str,
    active_posts: List[Post],
    config: RecommendationConfig = DEFAULT_CONFIG,
    page_size: int = CONTEXT_PAGE_SIZE,
) -> List[Post]:
    """
    Up to page_size posts related to the current post.

    Tiers, each newest first:
    1. posts sharing a tag that is on the current post and in the user's preferences
    2. any other active post
    3. the user's own posts, only with config.context_include_own_posts

    The current post is never returned. No tag overlap means no results.
    """
    if user is None:
        return []
    matched = set(post_tag_ids) & user.preference_ids()
    if not matched:
        return []

    others = [
        post
        for post in newest_first(active_posts)
        if post.id != current_post_id and not post.is_authored_by(user.id)
    ]

    selected: List[Post] = []
    _fill(selected, (p for p in others if matched.intersection(p.tag_ids())), page_size)
    _fill(selected, others, page_size)

    if config.context_include_own_posts:
        own = [
            post
            for post in newest_first(active_posts)
            if post.id != current_post_id and post.is_authored_by(user.id)
        ]
        _fill(selected, own, page_size)

    return selected
