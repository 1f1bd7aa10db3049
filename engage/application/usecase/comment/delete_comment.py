"""Delete comment use case."""

import logfire
from pydantic import BaseModel

from engage.domain.error import (
    AuthenticationRequiredError,
    NotAuthorizedError,
    NotFoundError,
)
from engage.domain.repository import CommentRepository, CurrentUserProvider
from engage.domain.service.thread_engine import CommentThreadEngine
from engage.domain.value import CommentId

from ..base import BaseUseCase


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    removed: int  # Comments removed from the thread, replies included


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting one of the current user's comments."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        user_provider: CurrentUserProvider,
        engine: CommentThreadEngine,
    ) -> None:
        """Initialize delete comment use case.

        Args:
            comment_repository: Comment repository
            user_provider: Source of the signed-in user
            engine: Thread the comment is displayed in
        """
        self.comment_repository = comment_repository
        self.user_provider = user_provider
        self.engine = engine

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        The thread is only changed after the server confirms the delete.

        Args:
            request: Delete comment request with comment ID

        Returns:
            Deleted comment ID and number of comments removed

        Raises:
            NotFoundError: If the comment is not in the thread
            AuthenticationRequiredError: If no user is signed in
            NotAuthorizedError: If the user doesn't own the comment
            OperationFailedError: If the server rejects the delete
        """
        comment_id = CommentId(request.comment_id)

        # 1. Locate comment in the loaded thread
        comment = self.engine.find(comment_id)
        if comment is None:
            raise NotFoundError("comment", request.comment_id)

        # 2. Check authorization (user owns comment)
        user = self.user_provider.current_user()
        if user is None:
            raise AuthenticationRequiredError("delete comment")
        if not comment.author.is_same_user(user):
            raise NotAuthorizedError("comment", request.comment_id, user.id)

        # 3. Delete on the server, then drop the subtree locally
        with logfire.span("comment.delete", comment_id=comment_id):
            await self.comment_repository.delete_comment(comment_id)
        removed = self.engine.remove_comment(comment_id)

        return DeleteCommentResponse(comment_id=request.comment_id, removed=removed)
