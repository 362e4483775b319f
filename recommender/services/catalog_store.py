"""
Catalog Store abstraction.

Supplies posts, tags, users, likes and comments to the recommendation engine.
The engine only reads; persistence belongs to the implementation. Shipped
implementations: in-memory snapshot (tests, evaluation, JSON datasets) and an
interaction-masking view used for held-out evaluation.
"""

from collections import Counter
from typing import List, Optional, Protocol

from ..models.catalog import Comment, Like, Post, Tag, User


class CatalogStore(Protocol):
    """Protocol for read access to the blog catalog. Every call is a suspension point."""

    async def list_active_posts(
        self,
        with_tags: bool = True,
        with_author: bool = True,
    ) -> List[Post]:
        """Return all active posts, optionally with tags and author populated."""
        ...

    async def list_all_tags(self) -> List[Tag]:
        """Return the whole tag catalog."""
        ...

    async def get_user_with_preferences(self, user_id: str) -> Optional[User]:
        """Return the user with preferences, or None if unknown."""
        ...

    async def list_all_users_with_preferences(self) -> List[User]:
        ...

    async def list_all_likes(self) -> List[Like]:
        ...

    async def list_all_comments(self) -> List[Comment]:
        ...

    async def get_post_with_tags(self, post_id: str) -> Optional[Post]:
        """Return one post (any status) with its tags, or None if unknown."""
        ...


class InMemoryCatalogStore:
    """
    Catalog store over fixed in-memory lists.

    Like and comment counts on posts are derived from the edges passed in.
    Tags and authors are always populated, so the with_* flags are accepted
    for interface parity only.
    """

    def __init__(
        self,
        tags: List[Tag],
        users: List[User],
        posts: List[Post],
        likes: Optional[List[Like]] = None,
        comments: Optional[List[Comment]] = None,
    ):
        self._tags = list(tags)
        self._users = list(users)
        self._user_by_id = {u.id: u for u in self._users}
        self._likes = list(likes or [])
        self._comments = list(comments or [])
        like_counts = Counter(like.post_id for like in self._likes)
        comment_counts = Counter(comment.post_id for comment in self._comments)
        self._posts = [
            post.model_copy(
                update={
                    "like_count": like_counts.get(post.id, 0),
                    "comment_count": comment_counts.get(post.id, 0),
                }
            )
            for post in posts
        ]
        self._post_by_id = {p.id: p for p in self._posts}

    async def list_active_posts(
        self,
        with_tags: bool = True,
        with_author: bool = True,
    ) -> List[Post]:
        return [post for post in self._posts if post.status]

    async def list_all_tags(self) -> List[Tag]:
        return list(self._tags)

    async def get_user_with_preferences(self, user_id: str) -> Optional[User]:
        return self._user_by_id.get(user_id)

    async def list_all_users_with_preferences(self) -> List[User]:
        return list(self._users)

    async def list_all_likes(self) -> List[Like]:
        return list(self._likes)

    async def list_all_comments(self) -> List[Comment]:
        return list(self._comments)

    async def get_post_with_tags(self, post_id: str) -> Optional[Post]:
        return self._post_by_id.get(post_id)


class InteractionMaskedStore:
    """
    View over another store that hides one user's likes and comments.

    Used by the evaluator so interaction-driven algorithms cannot see the
    interactions they are being scored against.
    """

    def __init__(self, base: CatalogStore, user_id: str):
        self._base = base
        self._user_id = user_id

    async def list_active_posts(
        self,
        with_tags: bool = True,
        with_author: bool = True,
    ) -> List[Post]:
        return await self._base.list_active_posts(with_tags=with_tags, with_author=with_author)

    async def list_all_tags(self) -> List[Tag]:
        return await self._base.list_all_tags()

    async def get_user_with_preferences(self, user_id: str) -> Optional[User]:
        return await self._base.get_user_with_preferences(user_id)

    async def list_all_users_with_preferences(self) -> List[User]:
        return await self._base.list_all_users_with_preferences()

    async def list_all_likes(self) -> List[Like]:
        likes = await self._base.list_all_likes()
        return [like for like in likes if like.user_id != self._user_id]

    async def list_all_comments(self) -> List[Comment]:
        comments = await self._base.list_all_comments()
        return [c for c in comments if c.user_id != self._user_id]

    async def get_post_with_tags(self, post_id: str) -> Optional[Post]:
        return await self._base.get_post_with_tags(post_id)
