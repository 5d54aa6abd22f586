"""Mapping of scraped comment payloads into Comment records."""

from threadlens.adapter.ingest.payload import (
    convert_likes_to_number,
    dedupe_comments,
    payload_to_comment,
    payloads_to_comments,
    time_ago_to_epoch_ms,
)

__all__ = [
    "convert_likes_to_number",
    "dedupe_comments",
    "payload_to_comment",
    "payloads_to_comments",
    "time_ago_to_epoch_ms",
]
