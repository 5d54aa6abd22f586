"""Unit tests for scraped payload mapping."""

from datetime import datetime, timedelta, timezone

import pytest

from threadlens.adapter.error import PayloadError
from threadlens.adapter.ingest import (
    convert_likes_to_number,
    dedupe_comments,
    payload_to_comment,
    payloads_to_comments,
    time_ago_to_epoch_ms,
)
from threadlens.domain.value import ContextId
from tests.conftest import make_comment

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
VIDEO = ContextId("vid")


def _payload(comment_id="Ugx1", content="Great video", reply_level=0, **author):
    return {
        "payload": {
            "commentEntityPayload": {
                "properties": {
                    "commentId": comment_id,
                    "content": {"content": content},
                    "publishedTime": "2 days ago",
                    "replyLevel": reply_level,
                },
                "author": {"displayName": "@alice", "channelId": "UC1", **author},
                "toolbar": {"likeCountLiked": "1.2K", "replyCount": "3"},
            }
        }
    }


def _ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


class TestConvertLikesToNumber:
    @pytest.mark.parametrize(
        "value,expected",
        [("1.2K", 1200), ("3M", 3_000_000), ("42", 42), (7, 7), ("", 0), (None, 0), ("n/a", 0)],
    )
    def test_abbreviations(self, value, expected):
        assert convert_likes_to_number(value) == expected


class TestTimeAgo:
    def test_relative_units(self):
        assert time_ago_to_epoch_ms("3 hours ago", NOW) == _ms(NOW - timedelta(hours=3))
        assert time_ago_to_epoch_ms("1 week ago", NOW) == _ms(NOW - timedelta(weeks=1))

    def test_edited_marker_is_ignored(self):
        expected = _ms(NOW - timedelta(days=2))

        assert time_ago_to_epoch_ms("2 days ago (edited)", NOW) == expected

    def test_unknown_text_resolves_to_now(self):
        assert time_ago_to_epoch_ms("yesterday-ish", NOW) == _ms(NOW)


class TestPayloadToComment:
    def test_maps_fields_and_derives_flags(self):
        # Arrange
        payload = _payload(content="See 1:23 and https://example.com")

        # Act
        comment = payload_to_comment(payload, VIDEO, NOW)

        # Assert
        assert comment.comment_id == "Ugx1"
        assert comment.video_id == "vid"
        assert comment.author == "@alice"
        assert comment.likes == 1200
        assert comment.reply_count == 3
        assert comment.word_count == 4
        assert comment.published_date == _ms(NOW - timedelta(days=2))
        assert comment.has_timestamp is True
        assert comment.has_links is True
        assert comment.is_member is False

    def test_reply_parent_from_dotted_id(self):
        comment = payload_to_comment(_payload("Ugx1.Abc", reply_level=1), VIDEO, NOW)

        assert comment.is_reply
        assert comment.comment_parent_id == "Ugx1"

    def test_member_needs_badge_and_label(self):
        member = payload_to_comment(
            _payload(sponsorBadgeUrl="https://badge", sponsorBadgeA11y="Member for 1 year"),
            VIDEO,
            NOW,
        )
        badge_only = payload_to_comment(_payload(sponsorBadgeUrl="https://badge"), VIDEO, NOW)

        assert member.is_member is True
        assert badge_only.is_member is False

    def test_score_without_colon_is_not_a_timestamp(self):
        comment = payload_to_comment(_payload(content="10 out of 10"), VIDEO, NOW)

        assert comment.has_timestamp is False

    def test_missing_id_raises(self):
        with pytest.raises(PayloadError):
            payload_to_comment(_payload(comment_id=""), VIDEO, NOW)


class TestBatches:
    def test_dedupe_keeps_first_occurrence(self):
        first = make_comment("a", "first")
        result = dedupe_comments([first, make_comment("a", "second"), make_comment("b")])

        assert [c.content for c in result] == ["first", ""]

    def test_batch_skips_invalid_payloads_and_duplicates(self):
        payloads = [_payload("a"), _payload(""), _payload("a"), _payload("b")]

        result = payloads_to_comments(payloads, VIDEO, NOW)

        assert [c.comment_id for c in result] == ["a", "b"]
