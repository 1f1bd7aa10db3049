"""Unit tests for the HTTP repositories against a mocked transport."""

import json

import httpx
import pytest

from engage.adapter.api import ApiClient, HttpCommentRepository, HttpReactionRepository
from engage.adapter.session import SessionStore
from engage.domain.error import OperationFailedError
from engage.domain.value import ReactionType, Target, TargetType
from tests.conftest import TARGET, TEST_USER

BASE_URL = "https://api.test/api"


def _client(handler, token: str | None = "secret") -> ApiClient:
    http = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return ApiClient(http, token_provider=SessionStore(TEST_USER, token))


def _comment(comment_id: str = "c1", **extra):
    return {
        "_id": comment_id,
        "content": "Hello",
        "targetType": "memory",
        "targetId": "memory-1",
        "user": {"_id": "user-1"},
        **extra,
    }


class TestHttpCommentRepository:
    """Tests for HttpCommentRepository."""

    @pytest.mark.asyncio
    async def test_list_sends_query_and_auth(self):
        # Arrange
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "data": {
                        "data": [_comment("c1"), _comment("c2")],
                        "pagination": {"total": 7},
                    }
                },
            )

        repo = HttpCommentRepository(_client(handler))

        # Act
        page = await repo.list_comments(TARGET, page=2, limit=2, max_depth=5)

        # Assert
        request = seen[0]
        assert request.url.path == "/api/comments"
        assert dict(request.url.params) == {
            "targetType": "memory",
            "targetId": "memory-1",
            "page": "2",
            "limit": "2",
            "maxDepth": "5",
        }
        assert request.headers["Authorization"] == "Bearer secret"
        assert [c.id for c in page.items] == ["c1", "c2"]
        assert page.total_count == 7

    @pytest.mark.asyncio
    async def test_create_posts_parent_id(self):
        # Arrange
        sent = {}

        def handler(request: httpx.Request) -> httpx.Response:
            sent.update(json.loads(request.content))
            return httpx.Response(201, json={"data": _comment("r1", parentComment="c1")})

        repo = HttpCommentRepository(_client(handler))

        # Act
        comment = await repo.create_comment("Hello", TARGET, parent_id="c1")

        # Assert
        assert sent == {
            "content": "Hello",
            "targetType": "memory",
            "targetId": "memory-1",
            "parentCommentId": "c1",
        }
        assert comment.parent_id == "c1"

    @pytest.mark.asyncio
    async def test_update_without_target_in_response_uses_known_target(self):
        # Arrange
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"data": {"_id": "c1", "content": "edited", "user": "user-1"}},
            )

        repo = HttpCommentRepository(_client(handler))

        # Act
        comment = await repo.update_comment("c1", "edited", target=TARGET)

        # Assert
        assert seen[0].method == "PUT"
        assert seen[0].url.path == "/api/comments/c1"
        assert json.loads(seen[0].content) == {"content": "edited"}
        assert comment.content == "edited"
        assert comment.target == TARGET

    @pytest.mark.asyncio
    async def test_update_prefers_target_from_response(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": _comment("c1", content="edited")})

        repo = HttpCommentRepository(_client(handler))

        comment = await repo.update_comment("c1", "edited")

        assert comment.target == TARGET
        assert comment.author.id == "user-1"

    @pytest.mark.asyncio
    async def test_get_comment_without_target_in_response(self):
        # Arrange
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/comments/c1"
            return httpx.Response(
                200, json={"_id": "c1", "content": "Hello", "user": {"_id": "user-1"}}
            )

        repo = HttpCommentRepository(_client(handler))

        # Act
        comment = await repo.get_comment("c1", target=TARGET)

        # Assert
        assert comment.id == "c1"
        assert comment.target == TARGET

    @pytest.mark.asyncio
    async def test_get_comment_without_any_target_fails(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json={"_id": "c1", "content": "Hello", "user": {"_id": "user-1"}}
            )

        repo = HttpCommentRepository(_client(handler))

        with pytest.raises(OperationFailedError) as exc_info:
            await repo.get_comment("c1")

        assert exc_info.value.operation == "Get comment"

    @pytest.mark.asyncio
    async def test_server_error_becomes_operation_failed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"message": "Not your comment"})

        repo = HttpCommentRepository(_client(handler))

        with pytest.raises(OperationFailedError) as exc_info:
            await repo.update_comment("c1", "edited")

        assert exc_info.value.operation == "Update comment"
        assert exc_info.value.message == "Not your comment"

    @pytest.mark.asyncio
    async def test_timeout_becomes_operation_failed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        repo = HttpCommentRepository(_client(handler))

        with pytest.raises(OperationFailedError):
            await repo.list_comments(TARGET, page=1, limit=10, max_depth=5)

    @pytest.mark.asyncio
    async def test_success_false_on_delete_fails(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"success": False, "message": "Locked"})

        repo = HttpCommentRepository(_client(handler))

        with pytest.raises(OperationFailedError) as exc_info:
            await repo.delete_comment("c1")

        assert exc_info.value.message == "Locked"


class TestHttpReactionRepository:
    """Tests for HttpReactionRepository."""

    @pytest.mark.asyncio
    async def test_get_uses_capitalised_target_type(self):
        # Arrange
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"data": {"reactions": {"love": [{"user": {"_id": "user-1"}}]}}},
            )

        repo = HttpReactionRepository(_client(handler))
        target = Target(target_type=TargetType.PROMPT_RESPONSE, target_id="pr-1")

        # Act
        snapshot = await repo.get_reactions(target)

        # Assert
        assert seen[0].url.params["targetType"] == "PromptResponse"
        assert snapshot.counts[ReactionType.LOVE] == 1

    @pytest.mark.asyncio
    async def test_set_and_delete(self):
        # Arrange
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True})

        repo = HttpReactionRepository(_client(handler, token=None))

        # Act
        await repo.set_reaction(TARGET, ReactionType.HAHA)
        await repo.delete_reaction(TARGET)

        # Assert
        assert json.loads(seen[0].content) == {
            "targetType": "Memory",
            "targetId": "memory-1",
            "type": "haha",
        }
        assert seen[1].method == "DELETE"
        assert seen[1].url.params["targetType"] == "Memory"
        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_empty_body_on_delete_is_success(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(204)

        repo = HttpReactionRepository(_client(handler))

        await repo.delete_reaction(TARGET)
