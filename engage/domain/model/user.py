"""User reference entity."""

from pydantic import Field

from engage.domain.model.common import DomainModel
from engage.domain.value import UserId

ANONYMOUS_DISPLAY_NAME = "Người dùng"


class UserRef(DomainModel):
    """Reference to a user, carrying presentation data only.

    ``id`` is the stable identity used for every ownership comparison.
    Display fields are never used to decide who a user is.
    """

    id: UserId = Field(min_length=1)
    first_name: str | None = None
    last_name: str | None = None
    name: str | None = None
    avatar: str | None = None

    @property
    def display_name(self) -> str:
        full = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return full or self.name or ANONYMOUS_DISPLAY_NAME

    def is_same_user(self, other: "UserRef | None") -> bool:
        return other is not None and self.id == other.id
