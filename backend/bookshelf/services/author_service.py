"""
Bookshelf API — Author Service (Request Handler Orchestrator)
==============================================================

What:  Orchestrates validate → persist → transform for the five Author
       operations.
How:   Stateless; every method receives the store (and the already-parsed
       request values) explicitly. HTTP details (status codes, Location
       header) stay in routes/authors.py.
Who:   Called by the route handlers; calls the validator, the store and the
       transformer.

Orchestration Flow (write operations):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌─────────────┐
    │  Route   │───▶│  Validator  │───▶│    Store     │───▶│ Transformer │
    └──────────┘    └─────────────┘    └──────────────┘    └─────────────┘

    Validation failures never reach the store, so a rejected PATCH leaves
    the persisted author untouched.
"""

import logging
from typing import Any

from bookshelf.domain import AuthorStore, parse_author_id
from bookshelf.exceptions import ConflictError
from bookshelf.schemas.author import AuthorCollectionDocument, AuthorDocument
from bookshelf.services.author_transformer import to_collection_document, to_document
from bookshelf.services.author_validator import CREATE, UPDATE, validate_author_document

logger = logging.getLogger(__name__)


def _same_author(path_id: str, body_id: str) -> bool:
    """Numeric ids match by value ("01" names author 1), anything else by text."""
    path_pk, body_pk = parse_author_id(path_id), parse_author_id(body_id)
    if path_pk is not None and body_pk is not None:
        return path_pk == body_pk
    return body_id == str(path_id)


class AuthorService:
    """
    Business logic layer for author operations.

    Responsibilities:
        - list_authors():  every author, creation order
        - show_author():   one author or NotFoundError
        - create_author(): validated insert
        - update_author(): validated full replacement of `name`
        - delete_author(): unconditional removal (NotFoundError when absent)
    """

    async def list_authors(self, store: AuthorStore) -> AuthorCollectionDocument:
        records = await store.list()
        return to_collection_document(records)

    async def show_author(self, store: AuthorStore, author_id: str) -> AuthorDocument:
        record = await store.find(author_id)
        return to_document(record)

    async def create_author(self, store: AuthorStore, document: Any) -> AuthorDocument:
        """
        Validate a create document and persist the new author.

        Raises:
            ValidationError: document violates the Author rules (→ 422)
            DatabaseError:   insert failed (→ 500)
        """
        attributes = validate_author_document(document, CREATE)
        record = await store.create(attributes)
        return to_document(record)

    async def update_author(
        self, store: AuthorStore, author_id: str, document: Any
    ) -> AuthorDocument:
        """
        Validate an update document and replace the author's name.

        The path id selects the row. The body id must be present, a string,
        and name the same resource.

        Raises:
            ValidationError: document violates the Author rules (→ 422)
            ConflictError:   body id differs from the path id (→ 409)
            NotFoundError:   no author with that id (→ 404)
        """
        attributes = validate_author_document(document, UPDATE)

        body_id = document["data"]["id"]
        if not _same_author(author_id, body_id):
            logger.warning("Update id mismatch: path=%s body=%s", author_id, body_id)
            raise ConflictError(
                message=(
                    f"The data.id '{body_id}' does not match the author "
                    f"'{author_id}' addressed by the URL."
                ),
                pointer="/data/id",
                context={"path_id": str(author_id), "body_id": body_id},
            )

        record = await store.update(author_id, attributes)
        return to_document(record)

    async def delete_author(self, store: AuthorStore, author_id: str) -> None:
        await store.delete(author_id)


# ── Singleton Instance ────────────────────────────────────────────────────
author_service = AuthorService()
