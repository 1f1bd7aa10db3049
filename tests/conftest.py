"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from itertools import count

import logfire

from engage.domain.model.comment import Comment, CommentPage
from engage.domain.model.user import UserRef
from engage.domain.value import CommentId, Target, TargetType, UserId

# Keep spans and logs local during tests
logfire.configure(send_to_logfire=False, console=False)

TEST_USER = UserRef(id=UserId("user-1"), first_name="Lan", last_name="Nguyen")
OTHER_USER = UserRef(id=UserId("user-2"), first_name="Minh", last_name="Tran")
TARGET = Target(target_type=TargetType.MEMORY, target_id="memory-1")

_ids = count(1)
_base_time = datetime(2024, 5, 1, 12, 0, 0)


def make_comment(
    content: str = "Nice memory",
    comment_id: str | None = None,
    parent_id: str | None = None,
    replies: tuple[Comment, ...] = (),
    author: UserRef = TEST_USER,
    target: Target = TARGET,
) -> Comment:
    """Helper to build comments with unique ids and increasing timestamps."""
    n = next(_ids)
    created = _base_time + timedelta(seconds=n)
    return Comment(
        id=CommentId(comment_id or f"c{n}"),
        content=content,
        target=target,
        author=author,
        parent_id=CommentId(parent_id) if parent_id else None,
        replies=replies,
        created_at=created,
        updated_at=created,
    )


def make_page(count_: int, prefix: str = "c", total: int | None = None) -> CommentPage:
    """Helper to build a page of top-level comments with ids prefix0..prefixN."""
    items = tuple(
        make_comment(f"comment {i}", comment_id=f"{prefix}{i}") for i in range(count_)
    )
    return CommentPage(items=items, total_count=total if total is not None else count_)
