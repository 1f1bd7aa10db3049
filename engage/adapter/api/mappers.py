"""Mappers from API payloads to domain models.

Payloads arrive in the backend's camelCase with Mongo-style ``_id`` keys.
Domain models are immutable pydantic models, so mapping is explicit.
"""

from typing import Any, Dict, Optional

import logfire
from pydantic import ValidationError

from engage.adapter.error import MalformedResponseError
from engage.domain.model import Comment, ReactionRecord, ReactionSnapshot, UserRef
from engage.domain.value import CommentId, ReactionType, Target, TargetType, UserId


def payload_to_user(payload: Any) -> UserRef:
    """Convert an API user object (or bare id) to a UserRef.

    A user without ``id``/``_id`` cannot be told apart from anyone else
    and is rejected rather than matched by name.

    Raises:
        MalformedResponseError: If the user has no stable id
    """
    if isinstance(payload, str) and payload:
        return UserRef(id=UserId(payload))
    if not isinstance(payload, dict):
        raise MalformedResponseError("User payload is not an object")

    user_id = payload.get("id") or payload.get("_id")
    if not user_id:
        raise MalformedResponseError("User payload has no stable id")

    return UserRef(
        id=UserId(str(user_id)),
        first_name=payload.get("firstName"),
        last_name=payload.get("lastName"),
        name=payload.get("name"),
        avatar=payload.get("avatar"),
    )


def payload_to_target_type(value: Any) -> TargetType:
    """Accept both ``memory`` and ``Memory`` spellings."""
    if not isinstance(value, str) or not value:
        raise MalformedResponseError(f"Invalid target type: {value!r}")
    try:
        return TargetType(value[0].lower() + value[1:])
    except ValueError as e:
        raise MalformedResponseError(f"Unknown target type: {value}") from e


def payload_to_comment(
    payload: Dict[str, Any], default_target: Optional[Target] = None
) -> Comment:
    """Convert an API comment object, with nested replies, to a Comment.

    Args:
        payload: Comment object from the API
        default_target: Target to use when the payload omits it (nested
            replies often do)

    Raises:
        MalformedResponseError: If required fields are missing or invalid
    """
    comment_id = payload.get("_id") or payload.get("id")
    if not comment_id:
        raise MalformedResponseError("Comment payload has no id")

    if payload.get("targetType") and payload.get("targetId"):
        target = Target(
            target_type=payload_to_target_type(payload["targetType"]),
            target_id=str(payload["targetId"]),
        )
    elif default_target is not None:
        target = default_target
    else:
        raise MalformedResponseError(f"Comment {comment_id} has no target")

    parent = payload.get("parentComment", payload.get("parentCommentId"))
    if isinstance(parent, dict):
        parent = parent.get("_id") or parent.get("id")

    replies = payload.get("replies") or []
    if not isinstance(replies, list):
        raise MalformedResponseError(f"Comment {comment_id} replies is not a list")

    fields: Dict[str, Any] = {
        "id": CommentId(str(comment_id)),
        "content": payload.get("content"),
        "target": target,
        "author": payload_to_user(payload.get("user")),
        "parent_id": CommentId(str(parent)) if parent else None,
        "replies": tuple(payload_to_comment(r, target) for r in replies),
    }
    if payload.get("createdAt"):
        fields["created_at"] = payload["createdAt"]
    if payload.get("updatedAt"):
        fields["updated_at"] = payload["updatedAt"]

    try:
        return Comment(**fields)
    except ValidationError as e:
        raise MalformedResponseError(f"Invalid comment {comment_id}: {e}") from e


def payload_to_reaction_snapshot(
    reactions: Dict[str, Any], target: Target
) -> ReactionSnapshot:
    """Convert a reactions-by-type mapping to a ReactionSnapshot.

    Unknown reaction types are skipped. Missing types become empty lists.

    Raises:
        MalformedResponseError: If an entry is invalid or lacks a user id
    """
    by_type: Dict[ReactionType, tuple[ReactionRecord, ...]] = {}
    for key, entries in reactions.items():
        try:
            reaction_type = ReactionType(key)
        except ValueError:
            logfire.warn("Skipping unknown reaction type", reaction_type=key)
            continue
        if entries is None:
            continue
        if not isinstance(entries, list):
            raise MalformedResponseError(f"Reactions for {key} is not a list")

        records = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise MalformedResponseError(f"Reaction entry for {key} is not an object")
            fields: Dict[str, Any] = {
                "target": target,
                "user": payload_to_user(entry.get("user")),
                "type": reaction_type,
            }
            if entry.get("createdAt"):
                fields["created_at"] = entry["createdAt"]
            try:
                records.append(ReactionRecord(**fields))
            except ValidationError as e:
                raise MalformedResponseError(f"Invalid reaction entry: {e}") from e
        by_type[reaction_type] = tuple(records)

    return ReactionSnapshot(target=target, reactions=by_type)
