"""
Interaction-based collaborative filtering over likes and comments.

Users are compared by their interaction rows; posts that similar users engaged
with, and the target has not, accumulate the borrowed interaction weight.
"""

from typing import Dict, List, Tuple

from ..models.catalog import Post
from ..models.interactions import InteractionMatrix
from ..utils.similarity import cosine_similarity

INTERACTION_SIMILARITY_THRESHOLD = 0.2


def find_similar_users_by_interactions(
    user_id: str,
    matrix: InteractionMatrix,
    threshold: float = INTERACTION_SIMILARITY_THRESHOLD,
) -> List[Tuple[str, float]]:
    """(user id, similarity) pairs over the matrix's post universe, most similar first."""
    if not matrix.has_user(user_id):
        return []
    post_ids = matrix.post_ids()
    target = matrix.dense_row(user_id, post_ids)
    scored = [
        (other_id, cosine_similarity(target, matrix.dense_row(other_id, post_ids)))
        for other_id in matrix.user_ids()
        if other_id != user_id
    ]
    similar = [pair for pair in scored if pair[1] >= threshold]
    similar.sort(key=lambda pair: pair[1], reverse=True)
    return similar


def borrowed_interaction_scores(
    user_id: str,
    matrix: InteractionMatrix,
) -> Dict[str, float]:
    """post id -> summed weight from similar users, excluding posts the user touched."""
    similar = find_similar_users_by_interactions(user_id, matrix)
    interacted = set(matrix.row(user_id))
    scores: Dict[str, float] = {}
    for other_id, _ in similar:
        for post_id, weight in matrix.row(other_id).items():
            if post_id in interacted:
                continue
            scores[post_id] = scores.get(post_id, 0.0) + weight
    return scores


def recommend_interaction_based(
    user_id: str,
    matrix: InteractionMatrix,
    active_posts: List[Post],
) -> List[Tuple[Post, float]]:
    """
    Active posts ranked by borrowed interaction weight (descending, stable).

    Posts authored by the user and posts no longer active are dropped.
    """
    scores = borrowed_interaction_scores(user_id, matrix)
    if not scores:
        return []
    post_by_id = {post.id: post for post in active_posts}
    ranked = []
    for post_id, score in scores.items():
        post = post_by_id.get(post_id)
        if post is None or post.is_authored_by(user_id):
            continue
        ranked.append((post, score))
    ranked.sort(key=lambda pair: pair[1], reverse=True)
    return ranked
