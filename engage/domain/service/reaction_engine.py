"""Reaction aggregate engine.

Holds the reaction snapshot for one target and applies the current user's
reaction optimistically. Server requests are sequenced by a single sync
worker so that the backend always converges to the user's last intent,
however quickly they tap.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Optional, Union

import logfire

from engage.domain.error import AuthenticationRequiredError, OperationFailedError
from engage.domain.model.common import utc_now
from engage.domain.model.reaction import ReactionRecord, ReactionSnapshot
from engage.domain.model.user import UserRef
from engage.domain.repository import CurrentUserProvider, ReactionRepository
from engage.domain.value import ReactionType, Target

from .base import Service


class _Marker(Enum):
    NONE_PENDING = "none_pending"
    UNKNOWN = "unknown"


# A reaction intent: a type, None for "no reaction", or a marker
Intent = Union[ReactionType, None, _Marker]

FailureCallback = Callable[[OperationFailedError], None]


class ReactionAggregateEngine(Service):
    """Reaction snapshot and optimistic protocol for a single target."""

    def __init__(
        self,
        target: Target,
        reaction_repository: ReactionRepository,
        user_provider: CurrentUserProvider,
        default_type: ReactionType = ReactionType.LIKE,
        settle_seconds: float = 0.3,
        on_failure: Optional[FailureCallback] = None,
    ) -> None:
        """Initialize reaction engine.

        Args:
            target: Content item whose reactions this engine holds
            reaction_repository: Reaction repository
            user_provider: Source of the signed-in user
            default_type: Type applied by ``toggle_default``
            settle_seconds: Delay before an intent is sent
            on_failure: Called with each failed sync, for telemetry
        """
        self.target = target
        self.reaction_repository = reaction_repository
        self.user_provider = user_provider
        self.default_type = default_type
        self.settle_seconds = settle_seconds
        self.on_failure = on_failure

        self._snapshot = ReactionSnapshot.empty(target)
        self._generation = 0
        self._mutations = 0
        self._pending: Intent = _Marker.NONE_PENDING
        self._confirmed: Intent = _Marker.UNKNOWN
        self._request_in_flight = False
        self._sync_task: asyncio.Task[bool] | None = None

        self.last_error: str | None = None

    @property
    def snapshot(self) -> ReactionSnapshot:
        return self._snapshot

    @property
    def current_user_type(self) -> ReactionType | None:
        return self._snapshot.current_user_type

    @property
    def syncing(self) -> bool:
        return self._sync_task is not None and not self._sync_task.done()

    async def load(self) -> bool:
        """Fetch the snapshot from the server.

        Skipped while a reaction intent is settling or being sent, and
        dropped if the target switched or a reaction was applied while
        loading, since it may not reflect the user's latest intent.

        Returns:
            True if the server snapshot was applied
        """
        return await self._load(allow_during_sync=False)

    async def apply(self, new_type: ReactionType | None) -> bool:
        """Set (or clear, with None) the current user's reaction.

        The local snapshot changes immediately. The server request follows
        after the settling window; calls made meanwhile are applied locally
        and only the latest intent is sent. On failure the snapshot is
        reloaded from the server instead of being rolled back by hand.

        Args:
            new_type: Reaction to set, or None to remove it

        Returns:
            True if the server confirmed the final intent

        Raises:
            AuthenticationRequiredError: If no user is signed in
        """
        user = self.user_provider.current_user()
        if user is None:
            raise AuthenticationRequiredError("apply reaction")

        previous = self._snapshot.current_user_type
        self._snapshot = apply_optimistic(self._snapshot, user, new_type)
        self._mutations += 1
        self._pending = new_type

        logfire.info(
            "Reaction applied locally",
            target=str(self.target),
            user_id=user.id,
            previous=previous.value if previous else None,
            reaction=new_type.value if new_type else None,
        )
        return await self._ensure_sync()

    async def toggle_default(self) -> bool:
        """Primary activation: react with the default type, or un-react."""
        if self._snapshot.current_user_type == self.default_type:
            return await self.apply(None)
        return await self.apply(self.default_type)

    async def pick(self, reaction_type: ReactionType) -> bool:
        """Picker selection: always sets the chosen type."""
        return await self.apply(reaction_type)

    async def wait_idle(self) -> None:
        """Wait until every pending intent has been sent."""
        if self._sync_task is not None and not self._sync_task.done():
            await asyncio.shield(self._sync_task)

    def switch_target(self, target: Target) -> None:
        """Point the engine at another content item.

        Requests already sent for the previous target complete, but their
        outcomes no longer touch this engine's state.
        """
        logfire.info(
            "Reaction target switched", previous=str(self.target), target=str(target)
        )
        self._generation += 1
        self.target = target
        self._snapshot = ReactionSnapshot.empty(target)
        self._pending = _Marker.NONE_PENDING
        self._confirmed = _Marker.UNKNOWN
        self._request_in_flight = False
        self._sync_task = None
        self.last_error = None

    async def _ensure_sync(self) -> bool:
        if self._sync_task is None or self._sync_task.done():
            self._sync_task = asyncio.create_task(self._sync(self._generation))
        # Shielded so a cancelled caller does not abort a shared worker
        return await asyncio.shield(self._sync_task)

    async def _sync(self, generation: int) -> bool:
        """Send pending intents until none remain.

        Returns:
            True if the last intent handled was confirmed by the server
        """
        target = self.target
        confirmed = False

        while self._pending is not _Marker.NONE_PENDING:
            if self.settle_seconds > 0:
                await asyncio.sleep(self.settle_seconds)
            if generation != self._generation:
                return False

            intent = self._pending
            self._pending = _Marker.NONE_PENDING
            if intent == self._confirmed:
                logfire.debug(
                    "Reaction intent matches server state",
                    target=str(target),
                    reaction=_intent_name(intent),
                )
                confirmed = True
                continue

            self._request_in_flight = True
            try:
                with logfire.span(
                    "reactions.sync",
                    target=str(target),
                    reaction=_intent_name(intent),
                ):
                    if intent is None:
                        await self.reaction_repository.delete_reaction(target)
                    else:
                        await self.reaction_repository.set_reaction(target, intent)
            except OperationFailedError as e:
                if generation != self._generation:
                    return False
                self._request_in_flight = False
                self._confirmed = _Marker.UNKNOWN
                confirmed = False
                self.last_error = e.message
                logfire.warn(
                    "Reaction sync failed",
                    target=str(target),
                    reaction=_intent_name(intent),
                    error=e.message,
                )
                self._notify_failure(e)
                if self._pending is _Marker.NONE_PENDING:
                    # Drop the optimistic state; the server is the truth
                    await self._load(allow_during_sync=True)
                continue
            finally:
                if generation == self._generation:
                    self._request_in_flight = False

            if generation != self._generation:
                return False
            self._confirmed = intent
            confirmed = True
            self.last_error = None

        return confirmed

    async def _load(self, allow_during_sync: bool) -> bool:
        generation = self._generation
        mutations = self._mutations
        if not allow_during_sync and self._sync_active():
            logfire.debug("Reaction load skipped during sync", target=str(self.target))
            return False

        try:
            with logfire.span("reactions.load", target=str(self.target)):
                fetched = await self.reaction_repository.get_reactions(self.target)
        except OperationFailedError as e:
            if generation == self._generation:
                self.last_error = e.message
            logfire.warn(
                "Reaction load failed", target=str(self.target), error=e.message
            )
            return False

        if generation != self._generation:
            logfire.info("Discarding reactions for previous target")
            return False
        if self._mutations != mutations or (
            not allow_during_sync and self._sync_active()
        ):
            logfire.info(
                "Discarding reactions superseded by local change",
                target=str(self.target),
            )
            return False

        current = self._find_current_user_type(fetched)
        self._snapshot = fetched.model_copy(update={"current_user_type": current})
        self._confirmed = current
        logfire.info(
            "Reactions loaded",
            target=str(self.target),
            total=self._snapshot.total,
            current=current.value if current else None,
        )
        return True

    def _sync_active(self) -> bool:
        """True while an intent is waiting to be sent or in flight."""
        return (
            self._request_in_flight
            or self._pending is not _Marker.NONE_PENDING
            or self.syncing
        )

    def _find_current_user_type(
        self, snapshot: ReactionSnapshot
    ) -> ReactionType | None:
        """Locate the signed-in user's reaction by stable user id."""
        user = self.user_provider.current_user()
        if user is None:
            return None
        records = snapshot.records_for_user(user.id)
        if not records:
            return None
        if len(records) > 1:
            logfire.warn(
                "User has more than one reaction on target",
                target=str(snapshot.target),
                user_id=user.id,
                types=[r.type.value for r in records],
            )
        return max(records, key=lambda r: r.created_at).type

    def _notify_failure(self, error: OperationFailedError) -> None:
        if self.on_failure is not None:
            self.on_failure(error)


def apply_optimistic(
    snapshot: ReactionSnapshot,
    user: UserRef,
    new_type: ReactionType | None,
    now: datetime | None = None,
) -> ReactionSnapshot:
    """Return ``snapshot`` with ``user``'s reaction set to ``new_type``.

    The user's record is removed from every list before the new one is
    added, so the user appears in at most one list. Re-selecting the
    current type keeps the existing record.
    """
    existing = snapshot.records_for_user(user.id)
    if (
        new_type is not None
        and len(existing) == 1
        and existing[0].type == new_type
        and snapshot.current_user_type == new_type
    ):
        return snapshot

    reactions = {
        t: tuple(r for r in records if r.user.id != user.id)
        for t, records in snapshot.reactions.items()
    }
    if new_type is not None:
        record = ReactionRecord(
            target=snapshot.target,
            user=user,
            type=new_type,
            created_at=now or utc_now(),
        )
        reactions[new_type] = reactions[new_type] + (record,)

    return ReactionSnapshot(
        target=snapshot.target,
        reactions=reactions,
        current_user_type=new_type,
    )


def _intent_name(intent: Intent) -> str | None:
    if isinstance(intent, ReactionType):
        return intent.value
    if intent is None:
        return None
    return intent.value
