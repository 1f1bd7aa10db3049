"""Backend API adapter."""

from .client import AccessTokenProvider, ApiClient
from .comment import HttpCommentRepository
from .reaction import HttpReactionRepository

__all__ = [
    "AccessTokenProvider",
    "ApiClient",
    "HttpCommentRepository",
    "HttpReactionRepository",
]
