"""Ingestion use cases."""

from .ingest_comments import (
    IngestCommentsRequest,
    IngestCommentsResponse,
    IngestCommentsUseCase,
)

__all__ = [
    "IngestCommentsRequest",
    "IngestCommentsResponse",
    "IngestCommentsUseCase",
]
