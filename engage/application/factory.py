"""Engine composition."""

from typing import Optional

from engage.application.composer import ThreadComposers
from engage.application.usecase.comment import DeleteCommentUseCase
from engage.config import Settings
from engage.domain.repository import (
    CommentRepository,
    CurrentUserProvider,
    ReactionRepository,
)
from engage.domain.service.reaction_engine import (
    FailureCallback,
    ReactionAggregateEngine,
)
from engage.domain.service.thread_engine import CommentThreadEngine
from engage.domain.value import Target


class EngineFactory:
    """Builds isolated engines for individual content items.

    Every call returns a fresh instance; two views of the same target never
    share state.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        reaction_repository: ReactionRepository,
        user_provider: CurrentUserProvider,
        settings: Settings,
    ) -> None:
        self.comment_repository = comment_repository
        self.reaction_repository = reaction_repository
        self.user_provider = user_provider
        self.settings = settings

    def comment_thread(self, target: Target) -> CommentThreadEngine:
        return CommentThreadEngine(
            target=target,
            comment_repository=self.comment_repository,
            page_size=self.settings.thread.page_size,
            max_depth=self.settings.thread.max_depth,
        )

    def reactions(
        self, target: Target, on_failure: Optional[FailureCallback] = None
    ) -> ReactionAggregateEngine:
        return ReactionAggregateEngine(
            target=target,
            reaction_repository=self.reaction_repository,
            user_provider=self.user_provider,
            default_type=self.settings.reactions.default_type,
            settle_seconds=self.settings.reactions.settle_seconds,
            on_failure=on_failure,
        )

    def composers(self, engine: CommentThreadEngine) -> ThreadComposers:
        return ThreadComposers(
            engine=engine,
            comment_repository=self.comment_repository,
            user_provider=self.user_provider,
            max_length=self.settings.thread.max_content_length,
        )

    def delete_comment_use_case(
        self, engine: CommentThreadEngine
    ) -> DeleteCommentUseCase:
        return DeleteCommentUseCase(
            comment_repository=self.comment_repository,
            user_provider=self.user_provider,
            engine=engine,
        )
