"""Scraped comment payload mapping.

A payload is the ``commentEntityPayload`` mutation the watch page ships
for each comment, either bare or wrapped as ``{"payload":
{"commentEntityPayload": ...}}``. Derived flags are computed here once
and stored with the comment.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, List, Optional

import logfire

from threadlens.adapter.error import PayloadError
from threadlens.domain.model import Comment
from threadlens.domain.value import CommentId, ContextId

TIMESTAMP_PATTERN = re.compile(r"\b(\d{1,2}):([0-5]\d)(?::([0-5]\d))?\b")

_MULTIPLIERS = {"K": 1_000, "M": 1_000_000, "B": 1_000_000_000}

_UNIT_DELTAS = {
    "second": timedelta(seconds=1),
    "minute": timedelta(minutes=1),
    "hour": timedelta(hours=1),
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
    "month": timedelta(days=30),
    "year": timedelta(days=365),
}


def convert_likes_to_number(value: Any) -> int:
    """Convert a display like count such as ``"1.2K"`` to an integer.

    Unparseable values count as zero.
    """
    if value is None:
        return 0
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    text = str(value).strip().replace(",", "").upper()
    if not text:
        return 0
    multiplier = _MULTIPLIERS.get(text[-1], 1)
    if multiplier != 1:
        text = text[:-1]
    try:
        return max(round(float(text) * multiplier), 0)
    except (ValueError, OverflowError):
        return 0


def time_ago_to_epoch_ms(time_ago: str, now: Optional[datetime] = None) -> int:
    """Resolve a relative time such as ``"3 weeks ago"`` to epoch ms.

    Months count as 30 days and years as 365. Anything unrecognized
    resolves to ``now``.
    """
    now = now or datetime.now(timezone.utc)
    text = time_ago.replace("(edited)", "").strip()
    parts = text.split()
    if len(parts) >= 2 and parts[0].isdigit():
        unit = parts[1].rstrip("s")
        delta = _UNIT_DELTAS.get(unit)
        if delta is not None:
            now = now - delta * int(parts[0])
    return int(now.timestamp() * 1000)


def _entity(payload: dict) -> dict:
    wrapped = payload.get("payload")
    if isinstance(wrapped, dict) and "commentEntityPayload" in wrapped:
        return wrapped["commentEntityPayload"] or {}
    return payload.get("commentEntityPayload", payload) or {}


def payload_to_comment(
    payload: dict, video_id: ContextId, now: Optional[datetime] = None
) -> Comment:
    """Map one scraped payload to a Comment.

    Raises:
        PayloadError: If the payload carries no comment id
    """
    entity = _entity(payload)
    properties = entity.get("properties") or {}
    author = entity.get("author") or {}
    toolbar = entity.get("toolbar") or {}

    comment_id = properties.get("commentId")
    if not comment_id:
        raise PayloadError("Comment payload has no commentId")

    content = (properties.get("content") or {}).get("content") or ""
    published = properties.get("publishedTime") or ""
    reply_level = int(properties.get("replyLevel") or 0)

    parent_id = None
    if reply_level > 0 and "." in comment_id:
        parent_id = CommentId(comment_id.split(".", 1)[0])

    return Comment(
        comment_id=CommentId(comment_id),
        video_id=video_id,
        comment_parent_id=parent_id,
        reply_level=reply_level,
        author=author.get("displayName") or "",
        author_avatar_url=author.get("avatarThumbnailUrl") or "",
        author_channel_id=author.get("channelId") or "",
        likes=convert_likes_to_number(toolbar.get("likeCountLiked")),
        reply_count=convert_likes_to_number(toolbar.get("replyCount")),
        content=content,
        published=published,
        published_date=time_ago_to_epoch_ms(published, now),
        is_author_content_creator=bool(author.get("isCreator")),
        is_hearted=bool(toolbar.get("heartActiveTooltip")),
        is_member=bool(author.get("sponsorBadgeUrl") and author.get("sponsorBadgeA11y")),
        is_donated=bool(properties.get("donationAmount")),
        donation_amount=properties.get("donationAmount") or "",
        has_timestamp=TIMESTAMP_PATTERN.search(content) is not None,
        has_links="http" in content,
    )


def dedupe_comments(comments: Iterable[Comment]) -> List[Comment]:
    """Drop repeated comment ids, keeping the first occurrence."""
    seen: set[str] = set()
    unique = []
    for comment in comments:
        if comment.comment_id in seen:
            continue
        seen.add(comment.comment_id)
        unique.append(comment)
    return unique


def payloads_to_comments(
    payloads: Iterable[dict], video_id: ContextId, now: Optional[datetime] = None
) -> List[Comment]:
    """Map a scraped batch, skipping payloads without an id."""
    comments = []
    skipped = 0
    for payload in payloads:
        try:
            comments.append(payload_to_comment(payload, video_id, now))
        except PayloadError as e:
            skipped += 1
            logfire.warn("Skipping comment payload", video_id=video_id, error=str(e))
    unique = dedupe_comments(comments)
    logfire.debug(
        "Payload batch mapped",
        video_id=video_id,
        mapped=len(unique),
        skipped=skipped,
        duplicates=len(comments) - len(unique),
    )
    return unique
