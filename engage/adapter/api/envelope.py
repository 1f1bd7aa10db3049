"""Response envelope normalization.

The backend wraps the same payload in different shapes depending on the
endpoint and deployment. Each function below accepts every known shape,
tries them in a fixed order and returns only the payload. Nothing outside
this module inspects raw envelopes.

List precedence:
    1. ``{"data": {"data": [...], "pagination": {...}}}``
    2. ``{"data": [...], "pagination": {...}}``
    3. ``[...]``

Single object precedence:
    1. ``{"data": {"data": {...}}}``
    2. ``{"data": {...}}``
    3. ``{...}`` carrying an ``_id`` or ``id``

Reactions precedence (first container holding ``reactions``):
    1. ``{"data": {"data": {"reactions": ...}}}``
    2. ``{"data": {"reactions": ...}}``
    3. ``{"reactions": ...}``

A top-level ``"success": false`` is an error in every case.
"""

from typing import Any

from engage.adapter.error import ApiError, MalformedResponseError


def ensure_success(body: Any) -> None:
    """Raise if the envelope reports failure.

    Raises:
        ApiError: If ``success`` is explicitly false
    """
    if isinstance(body, dict) and body.get("success") is False:
        raise ApiError(body.get("message") or "Request was not successful")


def unwrap_list(body: Any) -> tuple[list[dict[str, Any]], int]:
    """Extract list items and the total count.

    Returns:
        Tuple of (items, total). Total falls back to the item count.

    Raises:
        ApiError: If the envelope reports failure
        MalformedResponseError: If no known shape matches
    """
    ensure_success(body)

    items: Any = None
    pagination: Any = None
    if isinstance(body, dict):
        data = body.get("data")
        if isinstance(data, dict) and isinstance(data.get("data"), list):
            items = data["data"]
            pagination = data.get("pagination") or body.get("pagination")
        elif isinstance(data, list):
            items = data
            pagination = body.get("pagination")
    elif isinstance(body, list):
        items = body

    if items is None:
        raise MalformedResponseError("Unrecognized list envelope")
    if not all(isinstance(item, dict) for item in items):
        raise MalformedResponseError("List envelope contains non-object items")

    total = len(items)
    if isinstance(pagination, dict) and isinstance(pagination.get("total"), int):
        total = pagination["total"]
    return items, total


def unwrap_object(body: Any) -> dict[str, Any]:
    """Extract a single object.

    Raises:
        ApiError: If the envelope reports failure
        MalformedResponseError: If no known shape matches
    """
    ensure_success(body)

    if isinstance(body, dict):
        data = body.get("data")
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            return data["data"]
        if isinstance(data, dict):
            return data
        if "_id" in body or "id" in body:
            return body

    raise MalformedResponseError("Unrecognized object envelope")


def unwrap_reactions(body: Any) -> dict[str, Any]:
    """Extract the reactions-by-type mapping.

    A well-formed envelope without a ``reactions`` key means no reactions.

    Raises:
        ApiError: If the envelope reports failure
        MalformedResponseError: If the body is not an object or
            ``reactions`` is not a mapping
    """
    ensure_success(body)

    if not isinstance(body, dict):
        raise MalformedResponseError("Unrecognized reactions envelope")

    candidates: list[Any] = []
    data = body.get("data")
    if isinstance(data, dict):
        candidates.append(data.get("data"))
        candidates.append(data)
    candidates.append(body)

    for candidate in candidates:
        if isinstance(candidate, dict) and "reactions" in candidate:
            reactions = candidate["reactions"] or {}
            if not isinstance(reactions, dict):
                raise MalformedResponseError("Reactions payload is not a mapping")
            return reactions

    return {}
