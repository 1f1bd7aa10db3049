"""Strongly typed identifiers.

The backend issues opaque string ids (24-char hex ObjectIds in practice);
the client never parses them.
"""

from typing import NewType

CommentId = NewType("CommentId", str)
UserId = NewType("UserId", str)
