"""Composer set for one thread view."""

from engage.domain.error import NotFoundError
from engage.domain.model.comment import MAX_CONTENT_LENGTH
from engage.domain.repository import CommentRepository, CurrentUserProvider
from engage.domain.service.thread_engine import CommentThreadEngine
from engage.domain.value import CommentId

from .comment import CommentComposer, ReplyComposer
from .editor import CommentEditor


class ThreadComposers:
    """One top-level composer, at most one reply composer, editors by id."""

    def __init__(
        self,
        engine: CommentThreadEngine,
        comment_repository: CommentRepository,
        user_provider: CurrentUserProvider,
        max_length: int = MAX_CONTENT_LENGTH,
    ) -> None:
        self.engine = engine
        self.comment_repository = comment_repository
        self.user_provider = user_provider
        self.max_length = max_length

        self.comment = CommentComposer(engine, comment_repository, max_length)
        self.reply: ReplyComposer | None = None
        self.editors: dict[CommentId, CommentEditor] = {}

    def open_reply(self, parent_id: CommentId) -> ReplyComposer:
        """Open the reply composer for ``parent_id``.

        Opening a reply to a different comment cancels the previous one.
        """
        if self.reply is not None:
            if self.reply.parent_id == parent_id:
                return self.reply
            self.reply.cancel()

        self.reply = ReplyComposer(
            self.engine, self.comment_repository, parent_id, self.max_length
        )
        self.reply.open()
        return self.reply

    def close_reply(self) -> None:
        if self.reply is not None:
            self.reply.cancel()
            self.reply = None

    def edit(self, comment_id: CommentId) -> CommentEditor:
        """Open (or return the open) editor for a comment in the thread.

        Raises:
            NotFoundError: If the comment is not loaded
            NotAuthorizedError: If the current user is not the author
        """
        editor = self.editors.get(comment_id)
        if editor is not None:
            return editor

        comment = self.engine.find(comment_id)
        if comment is None:
            raise NotFoundError("comment", comment_id)

        editor = CommentEditor(
            self.engine,
            self.comment_repository,
            comment,
            self.user_provider.current_user(),
            self.max_length,
        )
        self.editors[comment_id] = editor
        return editor

    def close_editor(self, comment_id: CommentId) -> None:
        editor = self.editors.pop(comment_id, None)
        if editor is not None:
            editor.cancel()
