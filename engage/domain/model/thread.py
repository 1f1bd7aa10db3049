"""Pagination cursor for a comment thread."""

from pydantic import Field

from engage.domain.model.common import DomainModel


class ThreadPage(DomainModel):
    """Pagination cursor state for one target.

    ``has_more`` is true iff the last fetched page returned exactly
    ``limit`` items.
    """

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    has_more: bool = True
    loading: bool = False
