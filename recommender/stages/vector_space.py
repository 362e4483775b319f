"""
Tag vector space: shared tag indexing and inverse log-usage weights.

Every tag in the catalog gets a slot, not only tags attached to posts, so that
user preference vectors and post vectors built in the same pass are comparable.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from ..models.catalog import Post, Tag


def tag_weight(usage: int) -> float:
    """Inverse log-usage weight 1 / ln(1 + usage), usage floored at 1."""
    return 1.0 / math.log(1 + max(usage, 1))


@dataclass
class VectorSpace:
    """Tag index, usage counts, and post vectors for one computation."""

    tag_index: Dict[str, int]
    tag_usage: Dict[str, int]
    post_vectors: Dict[str, List[float]] = field(default_factory=dict)

    @property
    def dimensions(self) -> int:
        return len(self.tag_index)

    def vector_for(self, tag_ids: Iterable[str]) -> List[float]:
        """Weighted vector for a set of tag ids; unknown tags are ignored."""
        vector = [0.0] * self.dimensions
        for tag_id in tag_ids:
            idx = self.tag_index.get(tag_id)
            if idx is not None:
                vector[idx] = tag_weight(self.tag_usage.get(tag_id, 0))
        return vector

    def user_vector(self, preference_ids: Iterable[str]) -> List[float]:
        return self.vector_for(preference_ids)

    def post_vector(self, post: Post) -> List[float]:
        cached = self.post_vectors.get(post.id)
        if cached is not None:
            return cached
        return self.vector_for(post.tag_ids())


def build_vector_space(tags: List[Tag], active_posts: List[Post]) -> VectorSpace:
    """
    Index every catalog tag, count usage over active posts, and build post vectors.

    Tags attached to posts but missing from the catalog get no slot.
    """
    tag_index: Dict[str, int] = {}
    for tag in tags:
        tag_index.setdefault(tag.id, len(tag_index))
    tag_usage: Dict[str, int] = {tag_id: 0 for tag_id in tag_index}
    for post in active_posts:
        for tag_id in post.tag_ids():
            if tag_id in tag_usage:
                tag_usage[tag_id] += 1

    space = VectorSpace(tag_index=tag_index, tag_usage=tag_usage)
    for post in active_posts:
        space.post_vectors[post.id] = space.vector_for(post.tag_ids())
    return space
