"""Unit tests for bookmark and ingestion use cases."""

import pytest

from threadlens.application.usecase.bookmark import (
    GetBookmarksRequest,
    GetBookmarksUseCase,
    ToggleBookmarkRequest,
    ToggleBookmarkUseCase,
    UpdateNoteRequest,
    UpdateNoteUseCase,
)
from threadlens.application.usecase.ingest import (
    IngestCommentsRequest,
    IngestCommentsUseCase,
)
from threadlens.domain.error import NotFoundError
from threadlens.domain.repository import CommentRepository
from tests.conftest import VIDEO_ID, make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _payload(comment_id: str, content: str = "hello") -> dict:
    return {
        "commentEntityPayload": {
            "properties": {"commentId": comment_id, "content": {"content": content}},
            "author": {"displayName": "@bob"},
            "toolbar": {"likeCountLiked": "12"},
        }
    }


class TestBookmarkUseCases:
    @pytest.mark.asyncio
    async def test_toggle_note_and_list(self, unit_env):
        # Arrange
        repo = await unit_env.get(CommentRepository)
        await repo.save_many([make_comment("a"), make_comment("b")])
        toggle = await unit_env.get(ToggleBookmarkUseCase)
        note = await unit_env.get(UpdateNoteUseCase)
        bookmarks = await unit_env.get(GetBookmarksUseCase)

        # Act
        toggled = await toggle.execute(ToggleBookmarkRequest(comment_id="b"))
        noted = await note.execute(UpdateNoteRequest(comment_id="b", note="good point"))
        listed = await bookmarks.execute(GetBookmarksRequest(context_id=VIDEO_ID))

        # Assert
        assert toggled.is_bookmarked is True
        assert toggled.bookmark_added_date != ""
        assert noted.note == "good point"
        assert listed.total == 1
        assert listed.comments[0].comment_id == "b"
        assert listed.comments[0].note == "good point"

    @pytest.mark.asyncio
    async def test_unknown_comment(self, unit_env):
        toggle = await unit_env.get(ToggleBookmarkUseCase)

        with pytest.raises(NotFoundError):
            await toggle.execute(ToggleBookmarkRequest(comment_id="nope"))


class TestIngestComments:
    @pytest.mark.asyncio
    async def test_maps_and_stores_payloads(self, unit_env):
        # Arrange
        use_case = await unit_env.get(IngestCommentsUseCase)
        repo = await unit_env.get(CommentRepository)
        request = IngestCommentsRequest(
            context_id=VIDEO_ID,
            payloads=[_payload("a"), _payload("a"), _payload(""), _payload("b")],
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.received == 4
        assert response.inserted == 2
        stored = await repo.get_comments(VIDEO_ID)
        assert [c.likes for c in stored] == [12, 12]

    @pytest.mark.asyncio
    async def test_replace_clears_context_first(self, unit_env):
        use_case = await unit_env.get(IngestCommentsUseCase)
        repo = await unit_env.get(CommentRepository)
        await repo.save_many([make_comment("stale")])

        response = await use_case.execute(
            IngestCommentsRequest(context_id=VIDEO_ID, payloads=[_payload("a")], replace=True)
        )

        assert response.cleared == 1
        assert [c.comment_id for c in await repo.get_comments(VIDEO_ID)] == ["a"]
