"""Mock session providers for testing."""

from dishka import Scope, provide

from engage.adapter.api.client import AccessTokenProvider
from engage.adapter.session import SessionStore
from engage.domain.repository import CurrentUserProvider
from engage.util.di.infrastructure.session import SessionProvider
from tests.conftest import TEST_USER


class MockSessionProvider(SessionProvider):
    """Mock session provider with the test user signed in."""

    __is_mock__ = True

    scope = Scope.REQUEST

    @provide
    def get_session_store(self) -> SessionStore:
        """Provide session store signed in as the test user."""
        return SessionStore(user=TEST_USER, access_token="test-token")

    @provide
    def get_current_user_provider(self, store: SessionStore) -> CurrentUserProvider:
        """Provide the signed-in user source."""
        return store

    @provide
    def get_access_token_provider(self, store: SessionStore) -> AccessTokenProvider:
        """Provide the access token source."""
        return store
