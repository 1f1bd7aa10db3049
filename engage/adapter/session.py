"""Signed-in session state."""

import logfire

from engage.adapter.api.client import AccessTokenProvider
from engage.domain.model.user import UserRef
from engage.domain.repository import CurrentUserProvider


class SessionStore(CurrentUserProvider, AccessTokenProvider):
    """Holds the signed-in user and their access token.

    The authentication layer calls ``sign_in``/``sign_out``; engines and the
    API client only read from it.
    """

    def __init__(
        self, user: UserRef | None = None, access_token: str | None = None
    ) -> None:
        self._user = user
        self._access_token = access_token

    def sign_in(self, user: UserRef, access_token: str | None = None) -> None:
        self._user = user
        self._access_token = access_token
        logfire.info("Session signed in", user_id=user.id)

    def sign_out(self) -> None:
        if self._user is not None:
            logfire.info("Session signed out", user_id=self._user.id)
        self._user = None
        self._access_token = None

    def current_user(self) -> UserRef | None:
        return self._user

    def access_token(self) -> str | None:
        return self._access_token
