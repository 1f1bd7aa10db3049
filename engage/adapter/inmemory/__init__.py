"""In-memory repository implementations."""

from .comment import InMemoryCommentRepository
from .reaction import InMemoryReactionRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryReactionRepository",
]
