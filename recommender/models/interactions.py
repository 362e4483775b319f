"""
Interaction matrix: sparse user x post weights built from likes and comments.

Only present (user, post) pairs are stored; every lookup defaults to zero.
"""

from typing import Dict, Iterable, List, Optional

from .catalog import Comment, Like

LIKE_WEIGHT = 2.0
COMMENT_WEIGHT = 1.0


class InteractionMatrix:
    """Two-level mapping user id -> (post id -> weight) with zero-default lookups."""

    def __init__(self, user_ids: Optional[Iterable[str]] = None):
        self._rows: Dict[str, Dict[str, float]] = {}
        for user_id in user_ids or []:
            self._rows.setdefault(user_id, {})

    def add(self, user_id: str, post_id: str, weight: float) -> None:
        """Accumulate weight on an existing user row. Unknown users are ignored."""
        row = self._rows.get(user_id)
        if row is None:
            return
        row[post_id] = row.get(post_id, 0.0) + weight

    def has_user(self, user_id: str) -> bool:
        return user_id in self._rows

    def user_ids(self) -> List[str]:
        return list(self._rows)

    def row(self, user_id: str) -> Dict[str, float]:
        """Copy of the user's sparse row (empty for unknown users)."""
        return dict(self._rows.get(user_id, {}))

    def weight(self, user_id: str, post_id: str) -> float:
        return self._rows.get(user_id, {}).get(post_id, 0.0)

    def post_ids(self) -> List[str]:
        """Every post id seen in any row, in first-seen order."""
        seen: Dict[str, None] = {}
        for row in self._rows.values():
            for post_id in row:
                seen.setdefault(post_id, None)
        return list(seen)

    def dense_row(self, user_id: str, post_ids: List[str]) -> List[float]:
        """Project a user's row onto post_ids, zero-filled where absent."""
        row = self._rows.get(user_id, {})
        return [row.get(post_id, 0.0) for post_id in post_ids]

    def __len__(self) -> int:
        return len(self._rows)


def build_interaction_matrix(
    user_ids: Iterable[str],
    likes: List[Like],
    comments: List[Comment],
) -> InteractionMatrix:
    """Rows for every known user; +2 per like, +1 per comment."""
    matrix = InteractionMatrix(user_ids)
    for like in likes:
        matrix.add(like.user_id, like.post_id, LIKE_WEIGHT)
    for comment in comments:
        matrix.add(comment.user_id, comment.post_id, COMMENT_WEIGHT)
    return matrix
