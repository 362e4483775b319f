"""
Catalog models: typed representation of the blog catalog read from storage.

Posts, tags, users, likes and comments are owned by the storage collaborator;
the recommendation pipeline only reads them. Built from store/API dicts via
Post.model_validate(d) or the ensure_* helpers below.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are treated as UTC so mixed catalogs stay comparable."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Tag(BaseModel):
    """A tag from the global tag catalog."""

    model_config = ConfigDict(extra="allow")

    id: str
    title: str = ""
    slug: str = ""
    status: bool = True


class Author(BaseModel):
    """Author summary embedded in a post."""

    model_config = ConfigDict(extra="allow")

    id: str
    full_name: str = ""
    username: str = ""


class User(BaseModel):
    """
    A user with their declared tag preferences.

    preferences is a bounded subscription list; the user-management side only
    ever narrows it, but the pipeline makes no assumption about staleness.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    full_name: str = ""
    username: str = ""
    preferences: List[Tag] = Field(default_factory=list)

    def preference_ids(self) -> Set[str]:
        return {tag.id for tag in self.preferences}


class Post(BaseModel):
    """
    A blog post with its tags and author.

    status is the active flag; inactive posts never take part in scoring.
    like_count and comment_count are derived by the store.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    title: str = ""
    content: str = ""
    image: Optional[str] = None
    slug: str = ""
    status: bool = True
    created_at: datetime
    tags: List[Tag] = Field(default_factory=list)
    author: Author
    like_count: int = 0
    comment_count: int = 0

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value):
        return as_utc(value)

    def tag_ids(self) -> List[str]:
        return [tag.id for tag in self.tags]

    def is_authored_by(self, user_id: str) -> bool:
        return self.author.id == user_id

    @property
    def popularity(self) -> int:
        """Interaction count used by the popularity metric."""
        return self.like_count + self.comment_count


class Like(BaseModel):
    """A (user, post) like edge."""

    model_config = ConfigDict(extra="allow")

    user_id: str
    post_id: str
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value):
        return as_utc(value)


class Comment(BaseModel):
    """A (user, post) comment edge."""

    model_config = ConfigDict(extra="allow")

    user_id: str
    post_id: str
    content: str = ""
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, value):
        return as_utc(value)


def ensure_posts(items: List[Union[Dict[str, Any], Post]]) -> List[Post]:
    """Convert list of dicts or Posts to list of Post models."""
    return [Post.model_validate(p) if isinstance(p, dict) else p for p in items]


def ensure_users(items: List[Union[Dict[str, Any], User]]) -> List[User]:
    """Convert list of dicts or Users to list of User models."""
    return [User.model_validate(u) if isinstance(u, dict) else u for u in items]


def ensure_tags(items: List[Union[Dict[str, Any], Tag]]) -> List[Tag]:
    return [Tag.model_validate(t) if isinstance(t, dict) else t for t in items]


def ensure_likes(items: List[Union[Dict[str, Any], Like]]) -> List[Like]:
    return [Like.model_validate(x) if isinstance(x, dict) else x for x in items]


def ensure_comments(items: List[Union[Dict[str, Any], Comment]]) -> List[Comment]:
    return [Comment.model_validate(x) if isinstance(x, dict) else x for x in items]


def newest_first(posts: List[Post]) -> List[Post]:
    """Posts ordered by created_at descending (stable for equal timestamps)."""
    return sorted(posts, key=lambda p: p.created_at, reverse=True)
