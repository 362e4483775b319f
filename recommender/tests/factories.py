"""Builders for small hand-made catalogs used across the test suite."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Iterable

from recommender.models.catalog import Author, Comment, Like, Post, Tag, User

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_tag(tag_id: str) -> Tag:
    return Tag(id=tag_id, title=tag_id.upper(), slug=tag_id.lower())


def make_user(user_id: str, preferences: Iterable[str] = ()) -> User:
    return User(
        id=user_id,
        full_name=f"User {user_id}",
        username=user_id,
        preferences=[make_tag(t) for t in preferences],
    )


def make_post(
    post_id: str,
    author_id: str,
    tags: Iterable[str] = (),
    day: int = 0,
    status: bool = True,
) -> Post:
    return Post(
        id=post_id,
        title=f"Post {post_id}",
        content=f"Body of {post_id}",
        slug=f"post-{post_id}",
        status=status,
        created_at=BASE_TIME + timedelta(days=day),
        tags=[make_tag(t) for t in tags],
        author=Author(id=author_id, full_name=f"User {author_id}", username=author_id),
    )


def make_like(user_id: str, post_id: str) -> Like:
    return Like(user_id=user_id, post_id=post_id)


def make_comment(user_id: str, post_id: str) -> Comment:
    return Comment(user_id=user_id, post_id=post_id, content="nice")


def run(coro):
    """Drive a coroutine to completion."""
    return asyncio.run(coro)
