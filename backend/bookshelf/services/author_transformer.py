"""
Bookshelf API — Author Resource Transformer
============================================

What:  Maps AuthorRecord values to JSON:API resource objects and documents.
How:   Pure functions; no I/O, no framework objects.

Timestamp format:
    UTC, ISO 8601, microsecond precision, literal Z suffix:
        2024-01-15T12:00:00.123456Z
    Naive datetimes (SQLite hands them back without tzinfo) are taken as UTC,
    so the same instant always renders to the same text.
"""

from datetime import datetime, timezone
from typing import Iterable

from bookshelf.domain import AUTHORS_TYPE, AuthorRecord
from bookshelf.schemas.author import (
    AuthorAttributes,
    AuthorCollectionDocument,
    AuthorDocument,
    AuthorResourceObject,
)


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def to_resource_object(record: AuthorRecord) -> AuthorResourceObject:
    return AuthorResourceObject(
        id=str(record.id),
        type=AUTHORS_TYPE,
        attributes=AuthorAttributes(
            name=record.name,
            created_at=format_timestamp(record.created_at),
            updated_at=format_timestamp(record.updated_at),
        ),
    )


def to_document(record: AuthorRecord) -> AuthorDocument:
    """Single-resource document: {"data": {id, type, attributes}}."""
    return AuthorDocument(data=to_resource_object(record))


def to_collection_document(records: Iterable[AuthorRecord]) -> AuthorCollectionDocument:
    """Collection document; input order is preserved."""
    return AuthorCollectionDocument(data=[to_resource_object(r) for r in records])
