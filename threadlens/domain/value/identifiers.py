"""Strongly typed identifiers for comment records.

Identifiers come from the remote comment source as opaque strings, so
they are wrapped with NewType rather than parsed into UUIDs.
"""

from typing import NewType

CommentId = NewType("CommentId", str)
# Scope a comment collection is loaded for (one video)
ContextId = NewType("ContextId", str)
