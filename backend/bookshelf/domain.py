"""
Bookshelf API — Domain Values and Collaborator Interfaces
==========================================================

What:  The plain Author value exchanged between the request handler and the
       persistence collaborator, and the interface that collaborator fulfils.
How:   AuthorRecord is a frozen dataclass (no ORM, no framework base class).
       AuthorStore is a typing.Protocol; SQLAlchemyAuthorStore implements it,
       tests substitute AsyncMock objects.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Mapping, Optional, Protocol


AUTHORS_TYPE = "authors"

# Upper bound of the INTEGER primary key column
MAX_AUTHOR_ID = 2**31 - 1


def parse_author_id(author_id: Any) -> Optional[int]:
    """
    Interpret a path or body identifier as a primary key.

    Returns None for anything that cannot name a row: non-numeric text,
    zero, negatives, and values beyond the key column's range.
    """
    try:
        value = int(author_id)
    except (TypeError, ValueError):
        return None
    if 0 < value <= MAX_AUTHOR_ID:
        return value
    return None


@dataclass(frozen=True)
class AuthorRecord:
    """
    One persisted author.

    Invariants: `name` is a non-empty string; `updated_at >= created_at`.
    """

    id: int
    name: str
    created_at: datetime
    updated_at: datetime


class AuthorStore(Protocol):
    """
    Persistence collaborator for authors.

    Identifiers arrive as the raw path segment; an identifier the store cannot
    interpret is reported exactly like a missing row (NotFoundError).
    """

    async def create(self, attributes: Mapping[str, Any]) -> AuthorRecord:
        ...

    async def find(self, author_id: str) -> AuthorRecord:
        """Raises NotFoundError when absent."""
        ...

    async def list(self) -> List[AuthorRecord]:
        """All authors in creation order."""
        ...

    async def update(self, author_id: str, attributes: Mapping[str, Any]) -> AuthorRecord:
        """Raises NotFoundError when absent."""
        ...

    async def delete(self, author_id: str) -> None:
        """Raises NotFoundError when absent."""
        ...
