"""
Bookshelf API — Author SQLAlchemy Model
=========================================

What:  ORM model representing the `authors` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used only by SQLAlchemyAuthorStore, which converts rows to AuthorRecord.

Table Design:
    - Integer primary key: server-assigned, never reused (autoincrement)
    - name: required text, replaced wholesale on update
    - created_at / updated_at: UTC with timezone, set by the store in Python
      so the value returned after insert is identical to the persisted one
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Author(Base):
    """
    A row in the `authors` table.

    Lifecycle:
        1. Inserted by a validated POST (created_at == updated_at)
        2. `name` replaced and `updated_at` refreshed by a validated PATCH
        3. Hard-deleted by DELETE (no soft delete, nothing cascades)
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, name='{self.name}')>"
