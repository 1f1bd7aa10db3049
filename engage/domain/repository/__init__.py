"""Repository interfaces."""

from engage.domain.repository.comment import CommentRepository
from engage.domain.repository.identity import CurrentUserProvider
from engage.domain.repository.reaction import ReactionRepository

__all__ = [
    "CommentRepository",
    "CurrentUserProvider",
    "ReactionRepository",
]
