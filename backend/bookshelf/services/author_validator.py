"""
Bookshelf API — Author Document Validator
==========================================

What:  Validates the JSON:API document of an Author create/update request.
How:   Pure functions, no I/O. Each field is checked independently; for each
       field only its first failing rule is reported. Field order is fixed:
       data.type → data.id (update only) → data.attributes → data.attributes.name
Who:   Called by AuthorService before anything reaches the store.

Rules:
    required  missing, null, empty/blank string or empty list
    in        data.type must equal "authors"
    string    value must be a str
    array     data.attributes must be an object (message kept as "array")
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from bookshelf.domain import AUTHORS_TYPE
from bookshelf.exceptions import ValidationError

CREATE = "create"
UPDATE = "update"

_MISSING = object()

_TEMPLATES = {
    "required": "The {field} field is required.",
    "in": "The selected {field} is invalid.",
    "string": "The {field} must be a string.",
    "array": "The {field} must be an array.",
}


def render_message(pointer: str, rule: str) -> str:
    """
    Render the human message for a failed rule.

    >>> render_message("/data/attributes/name", "required")
    'The data.attributes.name field is required.'
    """
    field = pointer.strip("/").replace("/", ".")
    return _TEMPLATES[rule].format(field=field)


def _is_blank(value: Any) -> bool:
    if value is _MISSING or value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, list):
        return len(value) == 0
    return False


def _member(container: Any, key: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(key, _MISSING)
    return _MISSING


def _check_type(data: Any) -> Optional[str]:
    value = _member(data, "type")
    if _is_blank(value):
        return "required"
    if value != AUTHORS_TYPE:
        return "in"
    return None


def _check_id(data: Any) -> Optional[str]:
    value = _member(data, "id")
    if _is_blank(value):
        return "required"
    if not isinstance(value, str):
        return "string"
    return None


def _check_attributes(data: Any) -> Optional[str]:
    value = _member(data, "attributes")
    # {} passes: an empty object is present, only its members are missing
    if _is_blank(value):
        return "required"
    if not isinstance(value, Mapping):
        return "array"
    return None


def _check_name(attributes: Mapping[str, Any]) -> Optional[str]:
    value = attributes.get("name", _MISSING)
    if _is_blank(value):
        return "required"
    if not isinstance(value, str):
        return "string"
    return None


def collect_errors(document: Any, operation: str) -> List[Tuple[str, str]]:
    """
    Return every (pointer, message) violation found in `document`.

    An empty list means the document is valid for `operation`.
    """
    if operation not in (CREATE, UPDATE):
        raise ValueError(f"Unknown operation '{operation}'")

    data = _member(document, "data")
    errors: List[Tuple[str, str]] = []

    rule = _check_type(data)
    if rule:
        errors.append(("/data/type", render_message("/data/type", rule)))

    if operation == UPDATE:
        rule = _check_id(data)
        if rule:
            errors.append(("/data/id", render_message("/data/id", rule)))

    rule = _check_attributes(data)
    if rule:
        errors.append(("/data/attributes", render_message("/data/attributes", rule)))
    else:
        rule = _check_name(data["attributes"])
        if rule:
            pointer = "/data/attributes/name"
            errors.append((pointer, render_message(pointer, rule)))

    return errors


def validate_author_document(document: Any, operation: str) -> Dict[str, Any]:
    """
    Validate a create/update document and return the attributes to persist.

    Raises:
        ValidationError: with one entry per violated field (→ 422)
    """
    errors = collect_errors(document, operation)
    if errors:
        raise ValidationError(errors, context={"operation": operation})
    return {"name": document["data"]["attributes"]["name"]}
