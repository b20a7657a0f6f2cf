"""
Bookshelf API — Author Validator Unit Tests
============================================

What:  Tests for the create/update document rules and their messages.
How:   Pure function calls; no app, no database.

What we test:
    ✅ Valid documents return the attributes to persist
    ✅ Every rule renders the exact message and pointer
    ✅ Several failing fields are all reported, in field order
    ✅ Only the first failing rule per field is reported
"""

import pytest

from bookshelf.exceptions import ValidationError
from bookshelf.services.author_validator import (
    CREATE,
    UPDATE,
    collect_errors,
    render_message,
    validate_author_document,
)
from factories import create_document, update_document


class TestRenderMessage:

    def test_dotted_field_name(self):
        assert render_message("/data/attributes/name", "required") == (
            "The data.attributes.name field is required."
        )

    def test_each_rule(self):
        assert render_message("/data/type", "in") == "The selected data.type is invalid."
        assert render_message("/data/id", "string") == "The data.id must be a string."
        assert render_message("/data/attributes", "array") == (
            "The data.attributes must be an array."
        )


class TestCreateRules:

    def test_valid_document_returns_attributes(self):
        attributes = validate_author_document(create_document("Jane Austen"), CREATE)
        assert attributes == {"name": "Jane Austen"}

    def test_create_ignores_body_id(self):
        document = create_document(id=123)
        assert collect_errors(document, CREATE) == []

    def test_missing_type(self):
        document = {"data": {"attributes": {"name": "Jane"}}}
        assert collect_errors(document, CREATE) == [
            ("/data/type", "The data.type field is required.")
        ]

    def test_wrong_type(self):
        document = create_document(type="books")
        assert collect_errors(document, CREATE) == [
            ("/data/type", "The selected data.type is invalid.")
        ]

    def test_missing_attributes(self):
        document = {"data": {"type": "authors"}}
        assert collect_errors(document, CREATE) == [
            ("/data/attributes", "The data.attributes field is required.")
        ]

    def test_attributes_not_an_object(self):
        document = create_document(attributes="Jane Austen")
        assert collect_errors(document, CREATE) == [
            ("/data/attributes", "The data.attributes must be an array.")
        ]

    def test_empty_attributes_reports_name_only(self):
        document = create_document(attributes={})
        assert collect_errors(document, CREATE) == [
            ("/data/attributes/name", "The data.attributes.name field is required.")
        ]

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_blank_name(self, name):
        errors = collect_errors(create_document(name), CREATE)
        assert errors == [
            ("/data/attributes/name", "The data.attributes.name field is required.")
        ]

    def test_non_string_name(self):
        errors = collect_errors(create_document(42), CREATE)
        assert errors == [
            ("/data/attributes/name", "The data.attributes.name must be a string.")
        ]

    def test_empty_document_reports_type_and_attributes(self):
        errors = collect_errors({}, CREATE)
        assert [pointer for pointer, _ in errors] == ["/data/type", "/data/attributes"]

    def test_non_object_document(self):
        errors = collect_errors(["not", "a", "document"], CREATE)
        assert [pointer for pointer, _ in errors] == ["/data/type", "/data/attributes"]


class TestUpdateRules:

    def test_valid_document(self):
        assert collect_errors(update_document(1), UPDATE) == []

    def test_missing_id(self):
        document = create_document("Jane")
        assert collect_errors(document, UPDATE) == [
            ("/data/id", "The data.id field is required.")
        ]

    def test_integer_id(self):
        document = update_document(1, id=1)
        assert collect_errors(document, UPDATE) == [
            ("/data/id", "The data.id must be a string.")
        ]

    def test_all_fields_wrong_are_all_reported(self):
        document = {"data": {"type": "books", "id": 7, "attributes": {"name": ""}}}
        errors = collect_errors(document, UPDATE)
        assert errors == [
            ("/data/type", "The selected data.type is invalid."),
            ("/data/id", "The data.id must be a string."),
            ("/data/attributes/name", "The data.attributes.name field is required."),
        ]


class TestValidateAuthorDocument:

    def test_raises_validation_error_with_every_violation(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_author_document({"data": {}}, UPDATE)

        exc = exc_info.value
        assert exc.status_code == 422
        assert exc.context["pointers"] == ["/data/type", "/data/id", "/data/attributes"]
        assert exc.error_objects()[0] == {
            "title": "Validation Error",
            "details": "The data.type field is required.",
            "source": {"pointer": "/data/type"},
        }

    def test_unknown_operation(self):
        with pytest.raises(ValueError):
            collect_errors(create_document(), "upsert")
