"""
Bookshelf API — Author Transformer Unit Tests
==============================================

What:  Tests for AuthorRecord → JSON:API resource/document mapping.

What we test:
    ✅ id is rendered as a string, type is "authors"
    ✅ Timestamps are UTC with microseconds and a Z suffix
    ✅ Naive and aware datetimes for the same instant render identically
    ✅ Collections preserve input order (including empty)
"""

from datetime import datetime, timedelta, timezone

from bookshelf.services.author_transformer import (
    format_timestamp,
    to_collection_document,
    to_document,
    to_resource_object,
)
from factories import build_author_record


class TestFormatTimestamp:

    def test_aware_utc(self):
        value = datetime(2024, 1, 15, 12, 0, 0, 123456, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2024-01-15T12:00:00.123456Z"

    def test_naive_is_taken_as_utc(self):
        naive = datetime(2024, 1, 15, 12, 0, 0)
        aware = naive.replace(tzinfo=timezone.utc)
        assert format_timestamp(naive) == format_timestamp(aware) == "2024-01-15T12:00:00.000000Z"

    def test_other_offsets_are_converted(self):
        plus_two = timezone(timedelta(hours=2))
        value = datetime(2024, 1, 15, 14, 30, 0, tzinfo=plus_two)
        assert format_timestamp(value) == "2024-01-15T12:30:00.000000Z"


class TestResourceObject:

    def test_shape(self):
        record = build_author_record(id=42, name="Jane Austen")
        resource = to_resource_object(record).model_dump()

        assert resource["id"] == "42"
        assert resource["type"] == "authors"
        assert resource["attributes"]["name"] == "Jane Austen"
        assert resource["attributes"]["created_at"] == format_timestamp(record.created_at)
        assert resource["attributes"]["updated_at"] == format_timestamp(record.updated_at)

    def test_document_wraps_resource_in_data(self):
        record = build_author_record()
        assert to_document(record).model_dump() == {
            "data": to_resource_object(record).model_dump()
        }

    def test_same_record_same_output(self):
        record = build_author_record()
        assert to_document(record).model_dump() == to_document(record).model_dump()


class TestCollectionDocument:

    def test_order_is_preserved(self):
        records = [build_author_record(id=i) for i in (3, 1, 2)]
        document = to_collection_document(records).model_dump()
        assert [item["id"] for item in document["data"]] == ["3", "1", "2"]

    def test_empty(self):
        assert to_collection_document([]).model_dump() == {"data": []}
