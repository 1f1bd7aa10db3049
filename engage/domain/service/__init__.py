"""Domain services."""

from .base import Service
from .reaction_engine import ReactionAggregateEngine, apply_optimistic
from .thread_engine import CommentThreadEngine
from .traversal import ThreadLine, iter_thread

__all__ = [
    "CommentThreadEngine",
    "ReactionAggregateEngine",
    "Service",
    "ThreadLine",
    "apply_optimistic",
    "iter_thread",
]
