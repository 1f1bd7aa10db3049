"""In-memory comment repository.

Behaves like the backend: top-level comments newest first, replies oldest
first, nesting limited to ``max_depth`` levels and deletes cascading to
replies.
"""

from itertools import count
from typing import Optional
from uuid import uuid4

from engage.domain.error import OperationFailedError
from engage.domain.model.common import utc_now
from engage.domain.model.comment import Comment, CommentPage
from engage.domain.repository import CommentRepository, CurrentUserProvider
from engage.domain.value import CommentId, Target


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository."""

    def __init__(self, user_provider: CurrentUserProvider) -> None:
        self.user_provider = user_provider
        self._comments: dict[CommentId, Comment] = {}
        self._sequence: dict[CommentId, int] = {}
        self._counter = count()

    def add(self, comment: Comment) -> Comment:
        """Store a comment (and any nested replies) as-is, bypassing checks."""
        for node in comment.walk():
            self._comments[node.id] = node.with_replies(())
            self._sequence[node.id] = next(self._counter)
        return comment

    async def list_comments(
        self,
        target: Target,
        page: int,
        limit: int,
        max_depth: int,
    ) -> CommentPage:
        """List one page of top-level comments, newest first."""
        top_level = sorted(
            (
                c
                for c in self._comments.values()
                if c.target == target and c.parent_id is None
            ),
            key=lambda c: self._sequence[c.id],
            reverse=True,
        )
        start = (page - 1) * limit
        items = tuple(
            self._nest(c, 0, max_depth) for c in top_level[start : start + limit]
        )
        return CommentPage(items=items, total_count=len(top_level))

    async def create_comment(
        self,
        content: str,
        target: Target,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a comment authored by the current user."""
        author = self.user_provider.current_user()
        if author is None:
            raise OperationFailedError("Create comment", "Not authenticated")
        if parent_id is not None:
            parent = self._comments.get(parent_id)
            if parent is None:
                raise OperationFailedError("Create comment", "Parent comment not found")
            if parent.target != target:
                raise OperationFailedError(
                    "Create comment", "Parent comment does not belong to this target"
                )

        now = utc_now()
        comment = Comment(
            id=CommentId(uuid4().hex[:24]),
            content=content,
            target=target,
            author=author,
            parent_id=parent_id,
            created_at=now,
            updated_at=now,
        )
        return self.add(comment)

    async def update_comment(
        self,
        comment_id: CommentId,
        content: str,
        target: Optional[Target] = None,
    ) -> Comment:
        """Replace the text of a comment owned by the current user."""
        existing = self._require_owned(comment_id, "Update comment")
        updated = existing.with_content(content)
        self._comments[comment_id] = updated
        return updated

    async def delete_comment(self, comment_id: CommentId) -> None:
        """Delete a comment and all of its replies."""
        self._require_owned(comment_id, "Delete comment")
        doomed = [comment_id]
        while doomed:
            current = doomed.pop()
            self._comments.pop(current, None)
            self._sequence.pop(current, None)
            doomed.extend(self._children_ids(current))

    async def get_comment(
        self, comment_id: CommentId, target: Optional[Target] = None
    ) -> Comment:
        comment = self._comments.get(comment_id)
        if comment is None:
            raise OperationFailedError("Get comment", "Comment not found")
        return comment

    def _require_owned(self, comment_id: CommentId, operation: str) -> Comment:
        comment = self._comments.get(comment_id)
        if comment is None:
            raise OperationFailedError(operation, "Comment not found")
        user = self.user_provider.current_user()
        if user is None or user.id != comment.author.id:
            raise OperationFailedError(operation, "Not authorized")
        return comment

    def _children(self, parent_id: CommentId) -> list[Comment]:
        children = [c for c in self._comments.values() if c.parent_id == parent_id]
        return sorted(children, key=lambda c: self._sequence[c.id])

    def _children_ids(self, parent_id: CommentId) -> list[CommentId]:
        return [c.id for c in self._children(parent_id)]

    def _descendants(self, parent_id: CommentId) -> list[Comment]:
        found: list[Comment] = []
        for child in self._children(parent_id):
            found.append(child)
            found.extend(self._descendants(child.id))
        return sorted(found, key=lambda c: self._sequence[c.id])

    def _nest(self, comment: Comment, level: int, max_depth: int) -> Comment:
        """Attach replies so no comment sits deeper than ``max_depth``.

        Descendants past the limit are flattened into the replies of the
        deepest ancestor that may still show replies.
        """
        if level + 1 > max_depth:
            return comment.with_replies(())
        if level + 1 == max_depth:
            flat = tuple(d.with_replies(()) for d in self._descendants(comment.id))
            return comment.with_replies(flat)
        return comment.with_replies(
            tuple(
                self._nest(child, level + 1, max_depth)
                for child in self._children(comment.id)
            )
        )
