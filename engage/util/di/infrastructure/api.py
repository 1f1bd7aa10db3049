"""Backend API infrastructure providers."""

from collections.abc import AsyncIterator

import httpx
import logfire
from dishka import Scope, provide

from engage.adapter.api import (
    AccessTokenProvider,
    ApiClient,
    HttpCommentRepository,
    HttpReactionRepository,
)
from engage.adapter.api.client import DEFAULT_HEADERS
from engage.config import ApiSettings
from engage.domain.repository import CommentRepository, ReactionRepository
from engage.util.di.base import ProviderBase
from engage.util.observability import instrument_httpx


class ApiProvider(ProviderBase):
    """Backend API component base."""

    __mock_component__ = "api"
    # The real client reads tokens from the APP-scoped session store
    __depends_on__ = {"session"}


class ProdApiProvider(ApiProvider):
    """Production provider talking to the backend over HTTP."""

    __is_mock__ = False

    scope = Scope.APP

    @provide
    async def get_http_client(
        self, api_settings: ApiSettings
    ) -> AsyncIterator[httpx.AsyncClient]:
        """Provide shared HTTP client, closed with the container."""
        instrument_httpx()
        async with httpx.AsyncClient(
            base_url=api_settings.base_url,
            timeout=api_settings.timeout,
            headers=DEFAULT_HEADERS,
        ) as client:
            logfire.info("API client opened", base_url=api_settings.base_url)
            yield client
        logfire.info("API client closed")

    @provide
    def get_api_client(
        self, http: httpx.AsyncClient, token_provider: AccessTokenProvider
    ) -> ApiClient:
        """Provide authenticated API client."""
        return ApiClient(http, token_provider=token_provider)

    @provide
    def get_comment_repository(self, client: ApiClient) -> CommentRepository:
        """Provide Comment repository."""
        return HttpCommentRepository(client)

    @provide
    def get_reaction_repository(self, client: ApiClient) -> ReactionRepository:
        """Provide Reaction repository."""
        return HttpReactionRepository(client)
