"""Base model for all domain entities."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _assume_utc(value: datetime) -> datetime:
    # Server timestamps are UTC; some omit the offset
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Timezone-aware datetime; naive input is taken as UTC
Timestamp = Annotated[datetime, AfterValidator(_assume_utc)]


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )
