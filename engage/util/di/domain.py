"""Domain layer DI providers."""

from dishka import Scope, provide

from engage.application.factory import EngineFactory
from engage.config import Settings
from engage.domain.repository import (
    CommentRepository,
    CurrentUserProvider,
    ReactionRepository,
)
from engage.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Engine factory provider - concrete, no mocks needed.

    REQUEST-scoped so it can sit on top of request-scoped test repositories.
    Engines themselves are never provided directly: each view asks the
    factory for its own.
    """

    scope = Scope.REQUEST

    @provide
    def get_engine_factory(
        self,
        comment_repository: CommentRepository,
        reaction_repository: ReactionRepository,
        user_provider: CurrentUserProvider,
        settings: Settings,
    ) -> EngineFactory:
        """Provide per-target engine factory."""
        return EngineFactory(
            comment_repository=comment_repository,
            reaction_repository=reaction_repository,
            user_provider=user_provider,
            settings=settings,
        )
