"""Comment editor."""

import logfire

from engage.domain.error import AuthenticationRequiredError, NotAuthorizedError
from engage.domain.model.comment import MAX_CONTENT_LENGTH, Comment
from engage.domain.model.user import UserRef
from engage.domain.repository import CommentRepository
from engage.domain.service.thread_engine import CommentThreadEngine
from engage.domain.value import CommentId, Target

from .base import Composer


class CommentEditor(Composer):
    """Edits the text of a comment owned by the current user.

    Opens prefilled with the current text; cancelling restores it.
    """

    def __init__(
        self,
        engine: CommentThreadEngine,
        comment_repository: CommentRepository,
        comment: Comment,
        user: UserRef | None,
        max_length: int = MAX_CONTENT_LENGTH,
    ) -> None:
        """Initialize editor.

        Args:
            engine: Thread holding the comment
            comment_repository: Comment repository
            comment: Comment being edited
            user: Signed-in user
            max_length: Maximum content length

        Raises:
            AuthenticationRequiredError: If no user is signed in
            NotAuthorizedError: If the user is not the author
        """
        if user is None:
            raise AuthenticationRequiredError("edit comment")
        if not comment.author.is_same_user(user):
            raise NotAuthorizedError("comment", comment.id, user.id)

        super().__init__(engine, comment_repository, max_length)
        self.original = comment
        self.open(comment.content)

    @property
    def comment_id(self) -> CommentId:
        return self.original.id

    async def _send(self, text: str, target: Target) -> Comment:
        with logfire.span("composer.edit", comment_id=self.original.id):
            return await self.comment_repository.update_comment(
                self.original.id, text, target=target
            )

    async def _merge(self, comment: Comment) -> None:
        if self.engine.replace_comment(comment):
            self.original = self.engine.find(comment.id) or comment

    def _reset(self) -> None:
        super()._reset()
        self.content = self.original.content
