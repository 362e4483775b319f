"""
User-based collaborative filtering over declared tag preferences.

Users are binary vectors over the tags present on active posts; posts authored
by sufficiently similar users are recommended.
"""

from typing import Dict, List, Tuple

from ..models.catalog import Post, User
from ..utils.similarity import cosine_similarity

USER_SIMILARITY_THRESHOLD = 0.3


def post_tag_universe(active_posts: List[Post]) -> List[str]:
    """Distinct tag ids attached to active posts, in first-appearance order."""
    seen: Dict[str, None] = {}
    for post in active_posts:
        for tag_id in post.tag_ids():
            seen.setdefault(tag_id, None)
    return list(seen)


def build_preference_matrix(
    users: List[User],
    active_posts: List[Post],
) -> Dict[str, List[float]]:
    """user id -> binary vector (1.0 where the user prefers the tag)."""
    tag_ids = post_tag_universe(active_posts)
    tag_index = {tag_id: i for i, tag_id in enumerate(tag_ids)}
    matrix: Dict[str, List[float]] = {}
    for user in users:
        vector = [0.0] * len(tag_ids)
        for tag_id in user.preference_ids():
            idx = tag_index.get(tag_id)
            if idx is not None:
                vector[idx] = 1.0
        matrix[user.id] = vector
    return matrix


def find_similar_users_by_tags(
    user_id: str,
    matrix: Dict[str, List[float]],
    threshold: float = USER_SIMILARITY_THRESHOLD,
) -> List[Tuple[str, float]]:
    """(user id, similarity) pairs with similarity >= threshold, most similar first."""
    target = matrix.get(user_id)
    if target is None:
        return []
    scored = [
        (other_id, cosine_similarity(target, vector))
        for other_id, vector in matrix.items()
        if other_id != user_id
    ]
    similar = [pair for pair in scored if pair[1] >= threshold]
    similar.sort(key=lambda pair: pair[1], reverse=True)
    return similar


def recommend_user_based(
    user_id: str,
    users: List[User],
    active_posts: List[Post],
) -> List[Post]:
    """
    Posts authored by users with similar tag preferences.

    Grouped by similar-user rank, catalog order within each author, so the
    result is deliberately not in plain catalog order. The target's own posts
    are never returned.
    """
    matrix = build_preference_matrix(users, active_posts)
    similar = find_similar_users_by_tags(user_id, matrix)
    if not similar:
        return []

    posts_by_author: Dict[str, List[Post]] = {}
    for post in active_posts:
        if post.is_authored_by(user_id):
            continue
        posts_by_author.setdefault(post.author.id, []).append(post)

    recommended: List[Post] = []
    for other_id, _ in similar:
        recommended.extend(posts_by_author.get(other_id, []))
    return recommended
