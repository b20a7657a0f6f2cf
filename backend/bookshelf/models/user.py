"""
Bookshelf API — User and Personal Access Token Models
=======================================================

What:  The principal that owns bearer tokens, and the tokens themselves.
How:   Tokens are stored only as SHA-256 hex digests; the plaintext is shown
       once when issued (see services/token_service.py).
Who:   Read by DatabaseTokenValidator on every authenticated request;
       written by the dev-setup command and the test suite.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.database import Base
from bookshelf.models.author import utcnow


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    tokens: Mapped[List["PersonalAccessToken"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"


class PersonalAccessToken(Base):
    """
    A long-lived bearer token belonging to one user.

    A token authenticates while it is not revoked and, when `expires_at`
    is set, that instant has not passed.
    """

    __tablename__ = "personal_access_tokens"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # SHA-256 hex digest of the plaintext token
    token_hash: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    revoked: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    user: Mapped[User] = relationship(back_populates="tokens", lazy="joined")

    def __repr__(self) -> str:
        return (
            f"<PersonalAccessToken(id={self.id}, user_id={self.user_id}, "
            f"name='{self.name}', revoked={self.revoked})>"
        )
