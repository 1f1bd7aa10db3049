"""In-memory reaction repository."""

from engage.domain.error import OperationFailedError
from engage.domain.model.common import utc_now
from engage.domain.model.reaction import ReactionRecord, ReactionSnapshot
from engage.domain.repository import CurrentUserProvider, ReactionRepository
from engage.domain.value import ReactionType, Target, UserId


class InMemoryReactionRepository(ReactionRepository):
    """In-memory implementation of ReactionRepository.

    Keeps one record per (target, user); setting replaces.
    """

    def __init__(self, user_provider: CurrentUserProvider) -> None:
        self.user_provider = user_provider
        self._records: dict[Target, dict[UserId, ReactionRecord]] = {}

    def add(self, record: ReactionRecord) -> ReactionRecord:
        """Store a record for any user, replacing their previous one."""
        by_user = self._records.setdefault(record.target, {})
        by_user.pop(record.user.id, None)
        by_user[record.user.id] = record
        return record

    async def get_reactions(self, target: Target) -> ReactionSnapshot:
        by_type: dict[ReactionType, list[ReactionRecord]] = {t: [] for t in ReactionType}
        for record in self._records.get(target, {}).values():
            by_type[record.type].append(record)
        return ReactionSnapshot(
            target=target,
            reactions={t: tuple(records) for t, records in by_type.items()},
        )

    async def set_reaction(self, target: Target, reaction_type: ReactionType) -> None:
        user = self.user_provider.current_user()
        if user is None:
            raise OperationFailedError("Set reaction", "Not authenticated")
        self.add(
            ReactionRecord(
                target=target, user=user, type=reaction_type, created_at=utc_now()
            )
        )

    async def delete_reaction(self, target: Target) -> None:
        user = self.user_provider.current_user()
        if user is None:
            raise OperationFailedError("Delete reaction", "Not authenticated")
        self._records.get(target, {}).pop(user.id, None)
