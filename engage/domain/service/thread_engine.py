"""Comment thread engine.

Owns the comment tree and pagination cursor for one target. Pages are
merged without duplicating any comment id, appends are applied in page
order, and create/edit/delete results are merged only after the server
has confirmed them.
"""

from collections.abc import Callable, Iterator
from typing import Optional

import logfire

from engage.domain.error import OperationFailedError
from engage.domain.model.comment import Comment
from engage.domain.model.thread import ThreadPage
from engage.domain.repository import CommentRepository
from engage.domain.service.traversal import ThreadLine, iter_thread
from engage.domain.value import CommentId, Target

from .base import Service

Nodes = tuple[Comment, ...]


class CommentThreadEngine(Service):
    """In-memory comment tree for a single target."""

    def __init__(
        self,
        target: Target,
        comment_repository: CommentRepository,
        page_size: int = 10,
        max_depth: int = 5,
    ) -> None:
        """Initialize thread engine.

        Args:
            target: Content item whose thread this engine holds
            comment_repository: Comment repository
            page_size: Top-level comments requested per page
            max_depth: Reply nesting requested from the server
        """
        self.target = target
        self.comment_repository = comment_repository
        self.page_size = page_size
        self.max_depth = max_depth

        self._comments: Nodes = ()
        self._current_page = 0  # Highest page merged so far (0 = none)
        self._has_more = True
        self._loading = False
        self._expanded: set[CommentId] = set()
        # Bumped on refresh and target switch; older loads are ignored
        self._generation = 0

        self.total_count = 0
        self.last_error: str | None = None

    @property
    def comments(self) -> Nodes:
        """Top-level comments, each carrying its replies."""
        return self._comments

    @property
    def page(self) -> ThreadPage:
        return ThreadPage(
            page=max(self._current_page, 1),
            limit=self.page_size,
            has_more=self._has_more,
            loading=self._loading,
        )

    # Loading

    async def load_page(self, page_number: int, refresh: bool = False) -> bool:
        """Fetch one page of top-level comments and merge it.

        Refresh replaces the current list; otherwise the page is appended
        after removing every comment id already present anywhere in the
        tree. A non-refresh call made while a load is running is dropped.

        Failures are not raised: a failed refresh empties the thread, a
        failed append leaves it untouched. ``last_error`` holds the message.

        Args:
            page_number: 1-based page to fetch
            refresh: Replace instead of append

        Returns:
            True if the page was merged
        """
        if self._loading and not refresh:
            logfire.debug(
                "Load coalesced with in-flight request",
                target=str(self.target),
                page=page_number,
            )
            return False

        if refresh:
            self._generation += 1
        generation = self._generation
        self._loading = True

        try:
            with logfire.span(
                "thread.load_page",
                target=str(self.target),
                page=page_number,
                refresh=refresh,
            ):
                result = await self.comment_repository.list_comments(
                    target=self.target,
                    page=page_number,
                    limit=self.page_size,
                    max_depth=self.max_depth,
                )
        except OperationFailedError as e:
            if generation != self._generation:
                return False
            self.last_error = e.message
            logfire.warn(
                "Comment page load failed",
                target=str(self.target),
                page=page_number,
                refresh=refresh,
                error=e.message,
            )
            if refresh:
                self._reset_tree()
                self._has_more = False
            return False
        finally:
            if generation == self._generation:
                self._loading = False

        if generation != self._generation:
            logfire.info(
                "Discarding stale comment page",
                target=str(self.target),
                page=page_number,
            )
            return False

        latest = refresh or page_number >= self._current_page
        if refresh:
            self._comments = _dedupe(result.items, set())
            self._current_page = page_number
            self._expanded &= self.all_ids()
        else:
            if page_number > self._current_page + 1:
                logfire.warn(
                    "Discarding out-of-order comment page",
                    target=str(self.target),
                    page=page_number,
                    current_page=self._current_page,
                )
                return False
            fresh = _dedupe(result.items, self.all_ids())
            self._comments = self._comments + fresh
            self._current_page = max(self._current_page, page_number)

        # Only the page at the cursor decides has_more
        if latest:
            self._has_more = len(result.items) == self.page_size
            self.total_count = result.total_count
        self.last_error = None

        logfire.info(
            "Comment page merged",
            target=str(self.target),
            page=page_number,
            refresh=refresh,
            returned=len(result.items),
            top_level=len(self._comments),
            has_more=self._has_more,
        )
        return True

    async def refresh(self) -> bool:
        """Reload the thread from page 1."""
        return await self.load_page(1, refresh=True)

    async def load_more(self) -> bool:
        """Fetch the next page if there is one and nothing is loading."""
        if not self._has_more or self._loading:
            return False
        return await self.load_page(self._current_page + 1)

    def switch_target(self, target: Target) -> None:
        """Point the engine at another content item.

        In-flight loads for the previous target are ignored when they land.
        """
        logfire.info(
            "Thread target switched", previous=str(self.target), target=str(target)
        )
        self._generation += 1
        self.target = target
        self._reset_tree()
        self._has_more = True
        self._loading = False
        self.last_error = None

    # Mutations (applied after server confirmation)

    async def insert_comment(self, comment: Comment) -> bool:
        """Merge a newly created comment.

        Top-level comments are prepended. Replies are appended to their
        parent wherever it sits in the tree; if the parent has not been
        loaded, the thread is refreshed so the reply is not lost.

        Args:
            comment: Comment returned by the server

        Returns:
            True if the comment is present in the tree afterwards
        """
        if comment.id in self.all_ids():
            logfire.info("Comment already in thread", comment_id=comment.id)
            return True

        if comment.parent_id is None:
            self._comments = (comment,) + self._comments
            self.total_count += 1
            logfire.info(
                "Top-level comment inserted",
                target=str(self.target),
                comment_id=comment.id,
            )
            return True

        updated, parent = _update_node(
            self._comments,
            comment.parent_id,
            lambda node: node.with_replies(node.replies + (comment,)),
        )
        if parent is not None:
            self._comments = updated
            logfire.info(
                "Reply inserted",
                target=str(self.target),
                comment_id=comment.id,
                parent_id=comment.parent_id,
            )
            return True

        logfire.warn(
            "Reply parent not loaded, refreshing thread",
            target=str(self.target),
            comment_id=comment.id,
            parent_id=comment.parent_id,
        )
        await self.refresh()
        return comment.id in self.all_ids()

    def replace_comment(self, comment: Comment) -> bool:
        """Swap in an edited comment, keeping its replies and placement.

        Only content and ``updated_at`` change on edit; parent, target and
        creation time are taken from the existing node.

        Returns:
            True if the comment was found
        """

        def merge(existing: Comment) -> Comment:
            return comment.model_copy(
                update={
                    "replies": existing.replies,
                    "parent_id": existing.parent_id,
                    "target": existing.target,
                    "created_at": existing.created_at,
                }
            )

        updated, existing = _update_node(self._comments, comment.id, merge)
        if existing is None:
            logfire.warn("Edited comment not in thread", comment_id=comment.id)
            return False
        self._comments = updated
        logfire.info("Comment replaced", comment_id=comment.id)
        return True

    def remove_comment(self, comment_id: CommentId) -> int:
        """Remove a comment and its entire subtree.

        Deletion cascades: replies of a deleted comment are removed with it.

        Returns:
            Number of comments removed (0 if not found)
        """
        top_level = any(node.id == comment_id for node in self._comments)
        updated, removed = _update_node(self._comments, comment_id, lambda _: None)
        if removed is None:
            logfire.warn("Deleted comment not in thread", comment_id=comment_id)
            return 0

        removed_ids = {node.id for node in removed.walk()}
        self._comments = updated
        self._expanded -= removed_ids
        if top_level:
            self.total_count = max(0, self.total_count - 1)

        logfire.info(
            "Comment removed",
            comment_id=comment_id,
            removed=len(removed_ids),
        )
        return len(removed_ids)

    # Reply visibility

    def toggle_reply_visibility(
        self, comment_id: CommentId, visible: Optional[bool] = None
    ) -> bool:
        """Show or hide the replies of a comment.

        Args:
            comment_id: Comment whose replies to toggle
            visible: Desired state; None flips the current one

        Returns:
            New visibility
        """
        if visible is None:
            visible = comment_id not in self._expanded
        if visible:
            self._expanded.add(comment_id)
        else:
            self._expanded.discard(comment_id)
        return visible

    def replies_visible(self, comment_id: CommentId) -> bool:
        return comment_id in self._expanded

    # Queries

    def find(self, comment_id: CommentId) -> Comment | None:
        for node in self.walk():
            if node.id == comment_id:
                return node
        return None

    def contains(self, comment_id: CommentId) -> bool:
        return self.find(comment_id) is not None

    def all_ids(self) -> set[CommentId]:
        return {node.id for node in self.walk()}

    def walk(self) -> Iterator[Comment]:
        """Every comment in the tree, depth-first."""
        for comment in self._comments:
            yield from comment.walk()

    def lines(self) -> list[ThreadLine]:
        """Visible thread, flattened for display."""
        return list(iter_thread(self._comments, self.max_depth, self._expanded))

    def _reset_tree(self) -> None:
        self._comments = ()
        self._current_page = 0
        self._expanded.clear()
        self.total_count = 0


def _dedupe(items: Nodes, seen: set[CommentId]) -> Nodes:
    """Drop every comment whose id is in ``seen``, recording the rest.

    A dropped comment takes its replies with it; the copy already in the
    tree is kept.
    """
    kept: list[Comment] = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        replies = _dedupe(item.replies, seen)
        kept.append(item if replies == item.replies else item.with_replies(replies))
    return tuple(kept)


def _update_node(
    nodes: Nodes,
    comment_id: CommentId,
    fn: Callable[[Comment], Comment | None],
) -> tuple[Nodes, Comment | None]:
    """Rebuild ``nodes`` with the comment ``comment_id`` passed through ``fn``.

    The current level is scanned before recursing into replies. ``fn``
    returning None removes the node.

    Returns:
        Updated nodes and the original matched node (None if not found)
    """
    for index, node in enumerate(nodes):
        if node.id == comment_id:
            replacement = fn(node)
            middle = () if replacement is None else (replacement,)
            return nodes[:index] + middle + nodes[index + 1 :], node

    for index, node in enumerate(nodes):
        replies, hit = _update_node(node.replies, comment_id, fn)
        if hit is not None:
            return nodes[:index] + (node.with_replies(replies),) + nodes[index + 1 :], hit

    return nodes, None
