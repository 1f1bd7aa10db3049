"""Comment repository over the backend API."""

from typing import Optional

import logfire

from engage.adapter.api.client import ApiClient
from engage.adapter.api.envelope import ensure_success, unwrap_list, unwrap_object
from engage.adapter.api.mappers import payload_to_comment
from engage.adapter.error import AdapterError
from engage.domain.error import OperationFailedError
from engage.domain.model.comment import Comment, CommentPage
from engage.domain.repository import CommentRepository
from engage.domain.value import CommentId, Target


class HttpCommentRepository(CommentRepository):
    """CommentRepository backed by the ``/comments`` endpoints."""

    def __init__(self, client: ApiClient) -> None:
        """Initialize repository.

        Args:
            client: API client
        """
        self.client = client

    async def list_comments(
        self,
        target: Target,
        page: int,
        limit: int,
        max_depth: int,
    ) -> CommentPage:
        """List one page of top-level comments, replies nested."""
        params = {
            "targetType": target.target_type.value,
            "targetId": target.target_id,
            "page": page,
            "limit": limit,
            "maxDepth": max_depth,
        }
        try:
            body = await self.client.get("/comments", params=params)
            items, total = unwrap_list(body)
            comments = tuple(payload_to_comment(item, target) for item in items)
        except AdapterError as e:
            raise OperationFailedError("List comments", str(e)) from e

        logfire.debug(
            "Comments listed", target=str(target), page=page, count=len(comments)
        )
        return CommentPage(items=comments, total_count=total)

    async def create_comment(
        self,
        content: str,
        target: Target,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a top-level comment or reply."""
        payload = {
            "content": content,
            "targetType": target.target_type.value,
            "targetId": target.target_id,
            "parentCommentId": parent_id,
        }
        try:
            body = await self.client.post("/comments", json=payload)
            comment = payload_to_comment(unwrap_object(body), target)
        except AdapterError as e:
            raise OperationFailedError("Create comment", str(e)) from e

        logfire.info(
            "Comment created",
            comment_id=comment.id,
            target=str(target),
            parent_id=parent_id,
        )
        return comment

    async def update_comment(
        self,
        comment_id: CommentId,
        content: str,
        target: Optional[Target] = None,
    ) -> Comment:
        """Replace the text of a comment."""
        try:
            body = await self.client.put(
                f"/comments/{comment_id}", json={"content": content}
            )
            comment = payload_to_comment(unwrap_object(body), target)
        except AdapterError as e:
            raise OperationFailedError("Update comment", str(e)) from e

        logfire.info("Comment updated", comment_id=comment_id)
        return comment

    async def delete_comment(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        try:
            body = await self.client.delete(f"/comments/{comment_id}")
            ensure_success(body)
        except AdapterError as e:
            raise OperationFailedError("Delete comment", str(e)) from e

        logfire.info("Comment deleted", comment_id=comment_id)

    async def get_comment(
        self, comment_id: CommentId, target: Optional[Target] = None
    ) -> Comment:
        """Fetch a single comment."""
        try:
            body = await self.client.get(f"/comments/{comment_id}")
            return payload_to_comment(unwrap_object(body), target)
        except AdapterError as e:
            raise OperationFailedError("Get comment", str(e)) from e
