"""Session infrastructure providers."""

from dishka import Scope, provide

from engage.adapter.api.client import AccessTokenProvider
from engage.adapter.session import SessionStore
from engage.config import Settings
from engage.domain.model.user import UserRef
from engage.domain.repository import CurrentUserProvider
from engage.domain.value import UserId
from engage.util.di.base import ProviderBase


class SessionProvider(ProviderBase):
    """Session component base."""

    __mock_component__ = "session"


class ProdSessionProvider(SessionProvider):
    """Production session provider.

    The store starts signed out unless ``SESSION__USER_ID`` is configured.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide
    def get_session_store(self, settings: Settings) -> SessionStore:
        """Provide session store seeded from settings."""
        seed = settings.session
        if not seed.user_id:
            return SessionStore()
        user = UserRef(
            id=UserId(seed.user_id),
            first_name=seed.first_name,
            last_name=seed.last_name,
            avatar=seed.avatar,
        )
        return SessionStore(user=user, access_token=seed.access_token)

    @provide
    def get_current_user_provider(self, store: SessionStore) -> CurrentUserProvider:
        """Provide the signed-in user source."""
        return store

    @provide
    def get_access_token_provider(self, store: SessionStore) -> AccessTokenProvider:
        """Provide the access token source for API requests."""
        return store
