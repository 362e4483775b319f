"""Display-safe post cards returned to the presentation layer."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from ..models.catalog import Post


class TagCard(BaseModel):
    id: str
    title: str
    slug: str
    status: bool


class AuthorCard(BaseModel):
    id: str
    full_name: str
    slug: str


class PostCard(BaseModel):
    id: str
    title: str
    content: str
    image: Optional[str] = None
    slug: str
    status: bool
    created_at: datetime
    tags: List[TagCard] = []
    author: AuthorCard


def to_post_card(post: Post) -> PostCard:
    """Pick the public fields of a post, its tags, and its author."""
    return PostCard(
        id=post.id,
        title=post.title,
        content=post.content,
        image=post.image,
        slug=post.slug,
        status=post.status,
        created_at=post.created_at,
        tags=[
            TagCard(id=tag.id, title=tag.title, slug=tag.slug, status=tag.status)
            for tag in post.tags
        ],
        author=AuthorCard(
            id=post.author.id,
            full_name=post.author.full_name,
            slug=post.author.username,
        ),
    )
