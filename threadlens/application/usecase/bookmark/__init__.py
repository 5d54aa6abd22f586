"""Bookmark use cases."""

from .get_bookmarks import GetBookmarksRequest, GetBookmarksResponse, GetBookmarksUseCase
from .toggle_bookmark import (
    ToggleBookmarkRequest,
    ToggleBookmarkResponse,
    ToggleBookmarkUseCase,
)
from .update_note import UpdateNoteRequest, UpdateNoteResponse, UpdateNoteUseCase

__all__ = [
    "GetBookmarksRequest",
    "GetBookmarksResponse",
    "GetBookmarksUseCase",
    "ToggleBookmarkRequest",
    "ToggleBookmarkResponse",
    "ToggleBookmarkUseCase",
    "UpdateNoteRequest",
    "UpdateNoteResponse",
    "UpdateNoteUseCase",
]
