"""Domain value objects."""

from engage.domain.value.identifiers import CommentId, UserId
from engage.domain.value.types import ReactionType, Target, TargetType

__all__ = [
    # Identifiers
    "CommentId",
    "UserId",
    # Types
    "ReactionType",
    "Target",
    "TargetType",
]
