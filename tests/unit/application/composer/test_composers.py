"""Unit tests for comment composers and editors."""

import asyncio

import pytest

from engage.application.composer import (
    CommentComposer,
    CommentEditor,
    ComposerState,
    ReplyComposer,
    ThreadComposers,
)
from engage.domain.error import (
    AuthenticationRequiredError,
    NotAuthorizedError,
    NotFoundError,
    OperationFailedError,
    ValidationError,
)
from engage.domain.model.comment import Comment
from engage.domain.service.thread_engine import CommentThreadEngine
from engage.domain.value import Target, TargetType
from tests.conftest import OTHER_USER, TARGET, TEST_USER, make_comment
from tests.fakes import ScriptedCommentRepository, StaticUserProvider, wait_until


async def _thread(*comments: Comment, user=TEST_USER):
    users = StaticUserProvider(user)
    repo = ScriptedCommentRepository(users)
    for comment in comments:
        repo.add(comment)
    engine = CommentThreadEngine(target=TARGET, comment_repository=repo)
    await engine.refresh()
    return engine, repo, users


class TestCommentComposer:
    """Tests for top-level comment creation."""

    @pytest.mark.asyncio
    async def test_create_on_empty_thread(self):
        """The thread holds exactly the new comment afterwards."""
        # Arrange
        engine, repo, _ = await _thread()
        composer = CommentComposer(engine, repo)
        composer.update("hello")

        # Act
        comment = await composer.submit()

        # Assert
        assert [c.content for c in engine.comments] == ["hello"]
        assert engine.comments[0].id == comment.id
        assert composer.state is ComposerState.IDLE
        assert composer.content == ""

    @pytest.mark.asyncio
    async def test_content_is_trimmed(self):
        engine, repo, _ = await _thread()
        composer = CommentComposer(engine, repo)
        composer.update("   padded   ")

        comment = await composer.submit()

        assert comment.content == "padded"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["", "   \n\t", "x" * 1001])
    async def test_invalid_content_never_reaches_server(self, content):
        # Arrange
        engine, repo, _ = await _thread()
        composer = CommentComposer(engine, repo)
        composer.update(content)

        # Act & Assert
        assert composer.can_submit is False
        with pytest.raises(ValidationError):
            await composer.submit()
        assert composer.state is ComposerState.COMPOSING
        assert engine.comments == ()

    @pytest.mark.asyncio
    async def test_exactly_max_length_is_accepted(self):
        engine, repo, _ = await _thread()
        composer = CommentComposer(engine, repo)
        composer.update("x" * 1000)

        assert composer.can_submit is True
        await composer.submit()
        assert len(engine.comments[0].content) == 1000

    @pytest.mark.asyncio
    async def test_failure_keeps_draft_and_tree(self):
        # Arrange
        engine, repo, _ = await _thread()
        composer = CommentComposer(engine, repo)
        composer.update("hello")
        repo.fail_next("create_comment", "Network unreachable")

        # Act
        with pytest.raises(OperationFailedError):
            await composer.submit()

        # Assert
        assert composer.state is ComposerState.COMPOSING
        assert composer.content == "hello"
        assert composer.error == "Network unreachable"
        assert engine.comments == ()

    @pytest.mark.asyncio
    async def test_submit_while_submitting_is_ignored(self):
        # Arrange
        engine, repo, _ = await _thread()
        composer = CommentComposer(engine, repo)
        composer.update("hello")
        gate = asyncio.Event()
        create = repo.create_comment

        async def slow_create(*args, **kwargs):
            await gate.wait()
            return await create(*args, **kwargs)

        repo.create_comment = slow_create

        # Act
        first = asyncio.create_task(composer.submit())
        await wait_until(lambda: composer.state is ComposerState.SUBMITTING)
        second = await composer.submit()
        gate.set()
        await first

        # Assert
        assert second is None
        assert len(engine.comments) == 1

    @pytest.mark.asyncio
    async def test_cancel_discards_draft(self):
        engine, repo, _ = await _thread()
        composer = CommentComposer(engine, repo)
        composer.update("draft")

        composer.cancel()

        assert composer.state is ComposerState.IDLE
        assert composer.content == ""

    @pytest.mark.asyncio
    async def test_result_for_previous_target_is_not_merged(self):
        # Arrange
        engine, repo, _ = await _thread()
        composer = CommentComposer(engine, repo)
        composer.update("hello")
        gate = asyncio.Event()
        create = repo.create_comment

        async def slow_create(*args, **kwargs):
            await gate.wait()
            return await create(*args, **kwargs)

        repo.create_comment = slow_create

        # Act
        task = asyncio.create_task(composer.submit())
        await wait_until(lambda: composer.state is ComposerState.SUBMITTING)
        engine.switch_target(Target(target_type=TargetType.COMMENT, target_id="x"))
        gate.set()
        comment = await task

        # Assert
        assert comment.target == TARGET
        assert engine.comments == ()


class TestReplyComposer:
    """Tests for replies."""

    @pytest.mark.asyncio
    async def test_reply_attaches_to_parent(self):
        """The parent gains exactly one reply."""
        # Arrange
        parent = make_comment("parent", comment_id="p1")
        engine, repo, _ = await _thread(parent)
        composer = ReplyComposer(engine, repo, parent_id="p1")
        composer.open("reply")

        # Act
        reply = await composer.submit()

        # Assert
        replies = engine.find("p1").replies
        assert len(replies) == 1
        assert replies[0].id == reply.id
        assert replies[0].content == "reply"

    @pytest.mark.asyncio
    async def test_missing_parent_in_response_is_filled(self):
        # Arrange
        parent = make_comment("parent", comment_id="p1")
        engine, repo, _ = await _thread(parent)
        create = repo.create_comment

        async def create_without_parent(content, target, parent_id=None):
            created = await create(content, target, parent_id)
            return created.model_copy(update={"parent_id": None})

        repo.create_comment = create_without_parent
        composer = ReplyComposer(engine, repo, parent_id="p1")
        composer.update("reply")

        # Act
        await composer.submit()

        # Assert
        assert engine.find("p1").replies[0].parent_id == "p1"
        assert len(engine.comments) == 1


class TestCommentEditor:
    """Tests for editing."""

    @pytest.mark.asyncio
    async def test_edit_replaces_content_and_keeps_replies(self):
        # Arrange
        root = make_comment("before", comment_id="e1")
        child = make_comment("child", comment_id="e2", parent_id="e1")
        engine, repo, _ = await _thread(root, child)
        editor = CommentEditor(engine, repo, engine.find("e1"), TEST_USER)
        editor.update("after")

        # Act
        await editor.submit()

        # Assert
        node = engine.find("e1")
        assert node.content == "after"
        assert [r.id for r in node.replies] == ["e2"]
        assert editor.content == "after"
        assert editor.state is ComposerState.IDLE

    @pytest.mark.asyncio
    async def test_cancel_restores_original(self):
        engine, repo, _ = await _thread(make_comment("original", comment_id="e1"))
        editor = CommentEditor(engine, repo, engine.find("e1"), TEST_USER)
        editor.update("changed")

        editor.cancel()

        assert editor.content == "original"
        assert editor.state is ComposerState.IDLE

    @pytest.mark.asyncio
    async def test_non_author_cannot_edit(self):
        engine, repo, _ = await _thread(make_comment("mine", comment_id="e1"))

        with pytest.raises(NotAuthorizedError):
            CommentEditor(engine, repo, engine.find("e1"), OTHER_USER)

    @pytest.mark.asyncio
    async def test_signed_out_cannot_edit(self):
        engine, repo, _ = await _thread(make_comment("mine", comment_id="e1"))

        with pytest.raises(AuthenticationRequiredError):
            CommentEditor(engine, repo, engine.find("e1"), None)

    @pytest.mark.asyncio
    async def test_failed_edit_leaves_tree(self):
        # Arrange
        engine, repo, _ = await _thread(make_comment("original", comment_id="e1"))
        editor = CommentEditor(engine, repo, engine.find("e1"), TEST_USER)
        editor.update("changed")
        repo.fail_next("update_comment")

        # Act
        with pytest.raises(OperationFailedError):
            await editor.submit()

        # Assert
        assert engine.find("e1").content == "original"
        assert editor.content == "changed"
        assert editor.state is ComposerState.COMPOSING


class TestThreadComposers:
    """Tests for the per-thread composer set."""

    @pytest.mark.asyncio
    async def test_one_reply_composer_at_a_time(self):
        # Arrange
        engine, repo, users = await _thread(
            make_comment("a", comment_id="a"), make_comment("b", comment_id="b")
        )
        composers = ThreadComposers(engine, repo, users)
        first = composers.open_reply("a")
        first.update("draft for a")

        # Act
        second = composers.open_reply("b")

        # Assert
        assert first.state is ComposerState.IDLE
        assert first.content == ""
        assert composers.reply is second
        assert second.parent_id == "b"
        assert composers.open_reply("b") is second

    @pytest.mark.asyncio
    async def test_editors_keyed_by_comment(self):
        # Arrange
        engine, repo, users = await _thread(make_comment("a", comment_id="a"))
        composers = ThreadComposers(engine, repo, users)

        # Act
        editor = composers.edit("a")

        # Assert
        assert composers.edit("a") is editor
        assert editor.content == "a"
        composers.close_editor("a")
        assert "a" not in composers.editors

    @pytest.mark.asyncio
    async def test_edit_unknown_comment(self):
        engine, repo, users = await _thread()
        composers = ThreadComposers(engine, repo, users)

        with pytest.raises(NotFoundError):
            composers.edit("ghost")
