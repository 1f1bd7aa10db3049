"""Reaction repository interface."""

from abc import ABC, abstractmethod

from engage.domain.model.reaction import ReactionSnapshot
from engage.domain.value import ReactionType, Target


class ReactionRepository(ABC):
    """Repository for reactions on a target.

    The acting user is implied by the authenticated session.
    """

    @abstractmethod
    async def get_reactions(self, target: Target) -> ReactionSnapshot:
        """Fetch every reaction on a target, grouped by type.

        ``current_user_type`` is left unset; the aggregate engine derives it.
        """
        pass

    @abstractmethod
    async def set_reaction(self, target: Target, reaction_type: ReactionType) -> None:
        """Create or replace the current user's reaction."""
        pass

    @abstractmethod
    async def delete_reaction(self, target: Target) -> None:
        """Remove the current user's reaction, if any."""
        pass
