"""Shared utilities for similarity and post display mapping."""

from .cards import AuthorCard, PostCard, TagCard, to_post_card
from .similarity import cosine_similarity

__all__ = [
    "AuthorCard",
    "PostCard",
    "TagCard",
    "cosine_similarity",
    "to_post_card",
]
