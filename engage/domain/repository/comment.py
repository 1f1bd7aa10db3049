"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from engage.domain.model.comment import Comment, CommentPage
from engage.domain.value import CommentId, Target


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract the thread engine consumes. Implementations
    normalize whatever the backend returns into canonical models and raise
    ``OperationFailedError`` for every transport or server failure.
    """

    @abstractmethod
    async def list_comments(
        self,
        target: Target,
        page: int,
        limit: int,
        max_depth: int,
    ) -> CommentPage:
        """List one page of top-level comments for a target.

        Args:
            target: Content item the comments belong to
            page: 1-based page number
            limit: Maximum number of top-level comments to return
            max_depth: Levels of nested replies to include per comment

        Returns:
            Page of top-level comments, each with nested replies
        """
        pass

    @abstractmethod
    async def create_comment(
        self,
        content: str,
        target: Target,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a top-level comment or a reply.

        Args:
            content: Comment text
            target: Content item being commented on
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            The created comment as stored by the server
        """
        pass

    @abstractmethod
    async def update_comment(
        self,
        comment_id: CommentId,
        content: str,
        target: Optional[Target] = None,
    ) -> Comment:
        """Replace the text of a comment.

        Args:
            comment_id: Comment to edit
            content: New text
            target: Target the comment belongs to, if known; used when the
                server response omits it

        Returns:
            The updated comment
        """
        pass

    @abstractmethod
    async def delete_comment(self, comment_id: CommentId) -> None:
        """Delete a comment.

        Args:
            comment_id: Comment to delete
        """
        pass

    @abstractmethod
    async def get_comment(
        self, comment_id: CommentId, target: Optional[Target] = None
    ) -> Comment:
        """Fetch a single comment.

        Args:
            comment_id: Comment to fetch
            target: Target the comment belongs to, if known

        Returns:
            The comment
        """
        pass
