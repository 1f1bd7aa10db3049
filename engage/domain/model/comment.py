"""Comment entity.

Comments are threaded discussions on a content item. The server returns
them pre-nested up to a negotiated ``max_depth``; descendants deeper than
that arrive flattened under their deepest visible ancestor.
"""

from collections.abc import Iterator
from typing import Optional

from pydantic import Field

from engage.domain.model.common import DomainModel, Timestamp, utc_now
from engage.domain.model.user import UserRef
from engage.domain.value import CommentId, Target

MAX_CONTENT_LENGTH = 1000


class Comment(DomainModel):
    """Comment entity.

    Represents a remark on a target or a reply to another comment.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level)
    - replies: Child comments as returned by the server, in display order
    """

    id: CommentId = Field(min_length=1)
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    target: Target
    author: UserRef
    parent_id: Optional[CommentId] = None
    replies: tuple["Comment", ...] = ()
    created_at: Timestamp = Field(default_factory=utc_now)
    updated_at: Timestamp = Field(default_factory=utc_now)

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    def with_replies(self, replies: tuple["Comment", ...]) -> "Comment":
        """Return a copy of this comment with ``replies`` swapped in."""
        return self.model_copy(update={"replies": replies})

    def with_content(self, content: str) -> "Comment":
        """Return an edited copy with ``content`` and a fresh ``updated_at``."""
        return self.model_validate(
            {**self.__dict__, "content": content, "updated_at": utc_now()}
        )

    def walk(self) -> Iterator["Comment"]:
        """Yield this comment and every descendant, depth-first."""
        yield self
        for reply in self.replies:
            yield from reply.walk()


class CommentPage(DomainModel):
    """One page of top-level comments in canonical form."""

    items: tuple[Comment, ...] = ()
    total_count: int = Field(default=0, ge=0)
