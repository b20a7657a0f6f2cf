"""
Bookshelf API — SQLAlchemy Author Store
========================================

What:  The persistence collaborator behind AuthorService.
How:   Implements the AuthorStore protocol on a per-request AsyncSession.
       Rows never leave this module; callers receive AuthorRecord values.
       Writes are flushed, not committed: get_db_session() commits once the
       request handler has finished successfully.

Error translation:
    missing row / unusable id     → NotFoundError  (404)
    SQLAlchemyError               → DatabaseError  (500, details logged only)

Example:
    async with session_scope() as session:
        store = SQLAlchemyAuthorStore(session)
        author = await store.create({"name": "Jane Austen"})
        same = await store.find(str(author.id))
"""

import logging
from typing import Any, List, Mapping

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.domain import AuthorRecord, parse_author_id
from bookshelf.exceptions import DatabaseError, NotFoundError
from bookshelf.models.author import Author, utcnow

logger = logging.getLogger(__name__)


def _to_record(row: Author) -> AuthorRecord:
    return AuthorRecord(
        id=row.id,
        name=row.name,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SQLAlchemyAuthorStore:
    """AuthorStore backed by the `authors` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_row(self, author_id: str) -> Author:
        pk = parse_author_id(author_id)
        if pk is None:
            raise NotFoundError(resource="author", resource_id=str(author_id))
        try:
            row = await self.session.get(Author, pk)
        except SQLAlchemyError as e:
            logger.error("Database error fetching author %s: %s", author_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the author. Please try again.",
                context={"author_id": str(author_id), "error_type": type(e).__name__},
            )
        if row is None:
            raise NotFoundError(resource="author", resource_id=str(author_id))
        return row

    async def create(self, attributes: Mapping[str, Any]) -> AuthorRecord:
        now = utcnow()
        row = Author(name=attributes["name"], created_at=now, updated_at=now)
        try:
            self.session.add(row)
            await self.session.flush()  # Assigns the id without committing
        except SQLAlchemyError as e:
            logger.error("Database error creating author: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the author. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Author created: %s", row.id)
        return _to_record(row)

    async def find(self, author_id: str) -> AuthorRecord:
        return _to_record(await self._get_row(author_id))

    async def list(self) -> List[AuthorRecord]:
        try:
            result = await self.session.execute(select(Author).order_by(Author.id))
        except SQLAlchemyError as e:
            logger.error("Database error listing authors: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve authors. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [_to_record(row) for row in result.scalars().all()]

    async def update(self, author_id: str, attributes: Mapping[str, Any]) -> AuthorRecord:
        row = await self._get_row(author_id)
        row.name = attributes["name"]
        row.updated_at = utcnow()
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating author %s: %s", author_id, str(e))
            raise DatabaseError(
                message="Could not update the author. Please try again.",
                context={"author_id": str(author_id), "error_type": type(e).__name__},
            )
        logger.info("Author updated: %s", row.id)
        return _to_record(row)

    async def delete(self, author_id: str) -> None:
        row = await self._get_row(author_id)
        try:
            await self.session.delete(row)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting author %s: %s", author_id, str(e))
            raise DatabaseError(
                message="Could not delete the author. Please try again.",
                context={"author_id": str(author_id), "error_type": type(e).__name__},
            )
        logger.info("Author deleted: %s", author_id)
