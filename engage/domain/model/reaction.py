"""Reaction entities.

Each user holds at most one reaction per target. Setting a new type
replaces the previous record rather than adding a second one.
"""

from typing import Any

from pydantic import Field, computed_field, field_validator

from engage.domain.model.common import DomainModel, Timestamp, utc_now
from engage.domain.model.user import UserRef
from engage.domain.value import ReactionType, Target, UserId


class ReactionRecord(DomainModel):
    """One user's reaction to one target."""

    target: Target
    user: UserRef
    type: ReactionType
    created_at: Timestamp = Field(default_factory=utc_now)


class ReactionSnapshot(DomainModel):
    """Aggregate reaction view for one target.

    Every one of the six reaction types is always present as a key,
    mapping to its records in server order.
    """

    target: Target
    reactions: dict[ReactionType, tuple[ReactionRecord, ...]] = Field(
        default_factory=dict
    )
    current_user_type: ReactionType | None = None

    @field_validator("reactions", mode="before")
    @classmethod
    def fill_missing_types(cls, value: Any) -> Any:
        """Ensure all six types are keys, defaulting to no records."""
        filled: dict[Any, Any] = {t: () for t in ReactionType}
        filled.update(dict(value or {}))
        return filled

    @computed_field
    @property
    def counts(self) -> dict[ReactionType, int]:
        return {t: len(self.reactions[t]) for t in ReactionType}

    @computed_field
    @property
    def total(self) -> int:
        return sum(len(records) for records in self.reactions.values())

    def records_for(self, reaction_type: ReactionType) -> tuple[ReactionRecord, ...]:
        return self.reactions[reaction_type]

    def users_for(self, reaction_type: ReactionType) -> list[UserRef]:
        return [record.user for record in self.reactions[reaction_type]]

    def records_for_user(self, user_id: UserId) -> list[ReactionRecord]:
        """Records belonging to ``user_id`` across all six types."""
        return [
            record
            for t in ReactionType
            for record in self.reactions[t]
            if record.user.id == user_id
        ]

    def recent(self) -> list[ReactionRecord]:
        """All records, newest first (for a "who reacted" list)."""
        records = [r for t in ReactionType for r in self.reactions[t]]
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    @classmethod
    def empty(cls, target: Target) -> "ReactionSnapshot":
        return cls(target=target)
