"""Reaction repository over the backend API."""

import logfire

from engage.adapter.api.client import ApiClient
from engage.adapter.api.envelope import ensure_success, unwrap_reactions
from engage.adapter.api.mappers import payload_to_reaction_snapshot
from engage.adapter.error import AdapterError
from engage.domain.error import OperationFailedError
from engage.domain.model.reaction import ReactionSnapshot
from engage.domain.repository import ReactionRepository
from engage.domain.value import ReactionType, Target


class HttpReactionRepository(ReactionRepository):
    """ReactionRepository backed by the ``/reactions`` endpoints.

    This endpoint spells target types capitalised (``Memory``, ``Comment``).
    """

    def __init__(self, client: ApiClient) -> None:
        """Initialize repository.

        Args:
            client: API client
        """
        self.client = client

    async def get_reactions(self, target: Target) -> ReactionSnapshot:
        """Fetch every reaction on a target, grouped by type."""
        try:
            body = await self.client.get("/reactions", params=_target_params(target))
            snapshot = payload_to_reaction_snapshot(unwrap_reactions(body), target)
        except AdapterError as e:
            raise OperationFailedError("Get reactions", str(e)) from e

        logfire.debug("Reactions fetched", target=str(target), total=snapshot.total)
        return snapshot

    async def set_reaction(self, target: Target, reaction_type: ReactionType) -> None:
        """Create or replace the current user's reaction."""
        payload = {**_target_params(target), "type": reaction_type.value}
        try:
            body = await self.client.post("/reactions", json=payload)
            ensure_success(body)
        except AdapterError as e:
            raise OperationFailedError("Set reaction", str(e)) from e

        logfire.info("Reaction set", target=str(target), reaction=reaction_type.value)

    async def delete_reaction(self, target: Target) -> None:
        """Remove the current user's reaction."""
        try:
            body = await self.client.delete("/reactions", params=_target_params(target))
            ensure_success(body)
        except AdapterError as e:
            raise OperationFailedError("Delete reaction", str(e)) from e

        logfire.info("Reaction deleted", target=str(target))


def _target_params(target: Target) -> dict[str, str]:
    return {
        "targetType": target.target_type.reaction_name,
        "targetId": target.target_id,
    }
