"""Composer state machine shared by create, reply and edit flows."""

from abc import ABC, abstractmethod
from enum import Enum

import logfire

from engage.domain.error import OperationFailedError, ValidationError
from engage.domain.model.comment import MAX_CONTENT_LENGTH, Comment
from engage.domain.repository import CommentRepository
from engage.domain.service.thread_engine import CommentThreadEngine
from engage.domain.value import Target


class ComposerState(str, Enum):
    """Composer lifecycle."""

    IDLE = "idle"
    COMPOSING = "composing"
    SUBMITTING = "submitting"


class Composer(ABC):
    """Text input bound to a thread engine.

    ``idle -> composing -> submitting``, then back to ``idle`` on success or
    to ``composing`` on failure. The engine is only touched once the server
    has confirmed the result.
    """

    def __init__(
        self,
        engine: CommentThreadEngine,
        comment_repository: CommentRepository,
        max_length: int = MAX_CONTENT_LENGTH,
    ) -> None:
        self.engine = engine
        self.comment_repository = comment_repository
        self.max_length = max_length

        self.state = ComposerState.IDLE
        self.content = ""
        self.error: str | None = None

    def open(self, content: str = "") -> None:
        """Start composing, optionally with prefilled text."""
        self.state = ComposerState.COMPOSING
        self.content = content
        self.error = None

    def update(self, content: str) -> None:
        if self.state is ComposerState.SUBMITTING:
            return
        self.state = ComposerState.COMPOSING
        self.content = content

    @property
    def can_submit(self) -> bool:
        text = self.content.strip()
        return (
            self.state is ComposerState.COMPOSING
            and 0 < len(text) <= self.max_length
        )

    async def submit(self) -> Comment | None:
        """Send the trimmed content and merge the confirmed result.

        Returns:
            The server's comment, or None if a submit is already running

        Raises:
            ValidationError: Empty or over-length content (nothing is sent)
            OperationFailedError: The server call failed; content is kept
        """
        if self.state is ComposerState.SUBMITTING:
            return None

        text = self.content.strip()
        if not text:
            self.error = "Comment cannot be empty"
            raise ValidationError(self.error)
        if len(text) > self.max_length:
            self.error = f"Comment cannot exceed {self.max_length} characters"
            raise ValidationError(self.error)

        target = self.engine.target
        self.state = ComposerState.SUBMITTING
        self.error = None
        try:
            comment = await self._send(text, target)
        except OperationFailedError as e:
            if self.state is ComposerState.SUBMITTING:
                self.state = ComposerState.COMPOSING
            self.error = e.message
            logfire.warn(
                "Composer submit failed",
                composer=type(self).__name__,
                target=str(target),
                error=e.message,
            )
            raise

        if self.engine.target == target:
            await self._merge(comment)
        else:
            logfire.info(
                "Submitted comment belongs to previous target",
                comment_id=comment.id,
                target=str(target),
            )

        # Cancelled while submitting: the result is merged, the composer stays idle
        if self.state is ComposerState.SUBMITTING:
            self._reset()
        return comment

    def cancel(self) -> None:
        """Discard the draft."""
        self._reset()

    def _reset(self) -> None:
        self.state = ComposerState.IDLE
        self.content = ""
        self.error = None

    @abstractmethod
    async def _send(self, text: str, target: Target) -> Comment:
        pass

    @abstractmethod
    async def _merge(self, comment: Comment) -> None:
        pass
