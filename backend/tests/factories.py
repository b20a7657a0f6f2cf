"""
Bookshelf API — Test Data Builders
===================================

What:  Pure builders producing valid random Author records and principals.
Who:   Test suite only; production code never imports this module.
"""

import random
from datetime import datetime, timedelta, timezone
from itertools import count

from bookshelf.auth import Principal
from bookshelf.domain import AuthorRecord

FIRST_NAMES = ["Jane", "Mary", "Charles", "George", "Leo", "Virginia", "Herman", "Emily", "Toni"]
LAST_NAMES = ["Austen", "Shelley", "Dickens", "Eliot", "Tolstoy", "Woolf", "Melville", "Bronte", "Morrison"]

_ids = count(1)


def random_name() -> str:
    return f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}"


def build_author_record(**overrides) -> AuthorRecord:
    """A valid AuthorRecord; any field can be overridden."""
    created_at = datetime.now(timezone.utc) - timedelta(minutes=random.randint(1, 10_000))
    values = {
        "id": next(_ids),
        "name": random_name(),
        "created_at": created_at,
        "updated_at": created_at,
    }
    values.update(overrides)
    return AuthorRecord(**values)


def build_principal(**overrides) -> Principal:
    name = random_name()
    values = {
        "user_id": random.randint(1, 10_000),
        "name": name,
        "email": name.lower().replace(" ", ".") + "@example.com",
        "token_id": random.randint(1, 10_000),
    }
    values.update(overrides)
    return Principal(**values)


def create_document(name="Jane Austen", **data_overrides) -> dict:
    data = {"type": "authors", "attributes": {"name": name}}
    data.update(data_overrides)
    return {"data": data}


def update_document(author_id, name="Mary Shelley", **data_overrides) -> dict:
    data = {"id": str(author_id), "type": "authors", "attributes": {"name": name}}
    data.update(data_overrides)
    return {"data": data}
