"""Domain model entities."""

from engage.domain.model.comment import MAX_CONTENT_LENGTH, Comment, CommentPage
from engage.domain.model.reaction import ReactionRecord, ReactionSnapshot
from engage.domain.model.thread import ThreadPage
from engage.domain.model.user import UserRef

__all__ = [
    "MAX_CONTENT_LENGTH",
    "Comment",
    "CommentPage",
    "ReactionRecord",
    "ReactionSnapshot",
    "ThreadPage",
    "UserRef",
]
