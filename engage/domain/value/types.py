"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import Field

from engage.domain.value.common import ValueObject


class TargetType(str, Enum):
    """Kind of content item that comments and reactions attach to."""

    PROMPT_RESPONSE = "promptResponse"
    MEMORY = "memory"
    HEALTH_RECORD = "healthRecord"
    GROWTH_RECORD = "growthRecord"
    COMMENT = "comment"

    @property
    def reaction_name(self) -> str:
        """Spelling used by the reactions endpoint (``PromptResponse``, ``Memory``...)."""
        return self.value[0].upper() + self.value[1:]


class ReactionType(str, Enum):
    """The six mutually exclusive reaction kinds, in display order."""

    LIKE = "like"
    LOVE = "love"
    HAHA = "haha"
    WOW = "wow"
    SAD = "sad"
    ANGRY = "angry"


class Target(ValueObject):
    """Content item identified by ``(target_type, target_id)``.

    The caller guarantees the item exists; it is never validated here.
    """

    target_type: TargetType
    target_id: str = Field(min_length=1)

    def __str__(self) -> str:
        return f"{self.target_type.value}:{self.target_id}"
