"""Comment use cases."""

from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)

__all__ = [
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
]
