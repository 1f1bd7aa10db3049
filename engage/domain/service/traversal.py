"""Depth-first traversal of a comment tree for display.

The engine stores comments as a tree; a UI walks it through this contract
instead of recursing over the models itself. Indentation is capped at
``max_depth`` so very deep threads stay readable.
"""

from collections.abc import Collection, Iterator, Sequence

from pydantic import Field

from engage.domain.model.comment import Comment
from engage.domain.model.common import DomainModel
from engage.domain.value import CommentId


class ThreadLine(DomainModel):
    """One comment as it appears in a flattened thread view."""

    comment: Comment
    level: int = Field(ge=0)  # Actual nesting level (0 = top-level)
    indent: int = Field(ge=0)  # Display level, capped at max_depth
    has_replies: bool
    replies_hidden: bool


def iter_thread(
    comments: Sequence[Comment],
    max_depth: int,
    expanded: Collection[CommentId] | None = None,
) -> Iterator[ThreadLine]:
    """Walk a thread depth-first in list order.

    Args:
        comments: Top-level comments
        max_depth: Indentation cap
        expanded: IDs whose replies are shown. None shows every reply.

    Yields:
        ThreadLine for each visible comment
    """
    yield from _walk(comments, 0, max_depth, expanded)


def _walk(
    comments: Sequence[Comment],
    level: int,
    max_depth: int,
    expanded: Collection[CommentId] | None,
) -> Iterator[ThreadLine]:
    for comment in comments:
        show_replies = expanded is None or comment.id in expanded
        has_replies = bool(comment.replies)
        yield ThreadLine(
            comment=comment,
            level=level,
            indent=min(level, max_depth),
            has_replies=has_replies,
            replies_hidden=has_replies and not show_replies,
        )
        if has_replies and show_replies:
            yield from _walk(comment.replies, level + 1, max_depth, expanded)
