"""Comment composers and editors."""

from .base import Composer, ComposerState
from .comment import CommentComposer, ReplyComposer
from .editor import CommentEditor
from .thread import ThreadComposers

__all__ = [
    "CommentComposer",
    "CommentEditor",
    "Composer",
    "ComposerState",
    "ReplyComposer",
    "ThreadComposers",
]
