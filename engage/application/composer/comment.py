"""Create and reply composers."""

import logfire

from engage.domain.model.comment import MAX_CONTENT_LENGTH, Comment
from engage.domain.repository import CommentRepository
from engage.domain.service.thread_engine import CommentThreadEngine
from engage.domain.value import CommentId, Target

from .base import Composer


class CommentComposer(Composer):
    """Composer for new top-level comments."""

    async def _send(self, text: str, target: Target) -> Comment:
        with logfire.span("composer.create", target=str(target)):
            return await self.comment_repository.create_comment(
                content=text, target=target
            )

    async def _merge(self, comment: Comment) -> None:
        await self.engine.insert_comment(comment)


class ReplyComposer(Composer):
    """Composer for a reply to one comment."""

    def __init__(
        self,
        engine: CommentThreadEngine,
        comment_repository: CommentRepository,
        parent_id: CommentId,
        max_length: int = MAX_CONTENT_LENGTH,
    ) -> None:
        super().__init__(engine, comment_repository, max_length)
        self.parent_id = parent_id

    async def _send(self, text: str, target: Target) -> Comment:
        with logfire.span(
            "composer.reply", target=str(target), parent_id=self.parent_id
        ):
            return await self.comment_repository.create_comment(
                content=text, target=target, parent_id=self.parent_id
            )

    async def _merge(self, comment: Comment) -> None:
        if comment.parent_id is None:
            # Some responses omit the parent on create
            comment = comment.model_copy(update={"parent_id": self.parent_id})
        await self.engine.insert_comment(comment)
