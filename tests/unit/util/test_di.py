"""Unit tests for provider selection and container wiring."""

import pytest

from engage.adapter.inmemory import InMemoryCommentRepository
from engage.adapter.session import SessionStore
from engage.domain.repository import CommentRepository, CurrentUserProvider
from engage.util.di import (
    ApiProvider,
    ProdApiProvider,
    ProdConfigProvider,
    SessionProvider,
    get_provider,
)
from engage.util.error import DependencyInjectionError
from tests.conftest import TEST_USER
from tests.di import MockApiProvider, MockSessionProvider, build_test_container
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()
session_env = create_env_fixture(unmock={"session"})


class TestGetProvider:
    """Tests for get_provider."""

    def test_concrete_provider_used_as_is(self):
        assert get_provider(ProdConfigProvider) is ProdConfigProvider

    def test_mockable_component_selection(self):
        assert get_provider(ApiProvider, use_mock=False) is ProdApiProvider
        assert get_provider(ApiProvider, use_mock=True) is MockApiProvider
        assert get_provider(SessionProvider, use_mock=True) is MockSessionProvider


class TestBuildTestContainer:
    """Tests for build_test_container validation."""

    def test_unknown_component(self):
        with pytest.raises(DependencyInjectionError):
            build_test_container(unmock={"database"})

    def test_api_requires_session(self):
        with pytest.raises(DependencyInjectionError):
            build_test_container(unmock={"api"})


class TestContainers:
    """Tests for resolved dependencies."""

    @pytest.mark.asyncio
    async def test_unit_env_uses_in_memory_backend(self, unit_env):
        repo = await unit_env.get(CommentRepository)
        users = await unit_env.get(CurrentUserProvider)

        assert isinstance(repo, InMemoryCommentRepository)
        assert users.current_user() == TEST_USER

    @pytest.mark.asyncio
    async def test_real_session_is_seeded_from_settings(self, monkeypatch):
        # Arrange
        monkeypatch.setenv("SESSION__USER_ID", "seed-user")
        monkeypatch.setenv("SESSION__ACCESS_TOKEN", "seed-token")
        container = build_test_container(unmock={"session"})

        # Act
        async with container() as request_container:
            store = await request_container.get(SessionStore)
            user = store.current_user()
            token = store.access_token()
        await container.close()

        # Assert
        assert user.id == "seed-user"
        assert token == "seed-token"

    @pytest.mark.asyncio
    async def test_sign_out_clears_real_session(self, session_env):
        store = await session_env.get(SessionStore)

        store.sign_out()

        assert store.current_user() is None
        assert store.access_token() is None
