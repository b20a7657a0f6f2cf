"""
Bookshelf API — Bearer Token Authentication
============================================

What:  Resolves the `Authorization: Bearer <token>` header to a Principal.
How:   The route dependency `require_principal` extracts the token and asks a
       TokenValidator to verify it. The default validator checks the
       personal_access_tokens table (SHA-256 digest lookup); any other
       OAuth2 validator can be swapped in through `get_token_validator`.
Who:   Every author route depends on `require_principal`.

Failure reasons (logged, never returned to the client):
    missing_token   no Authorization header or not a Bearer scheme
    invalid_token   digest not found
    revoked_token   token revoked
    expired_token   expires_at in the past
All of them surface as UnauthorizedError → 401.
"""

import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

from fastapi import Depends, Request
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.database import get_db_session
from bookshelf.exceptions import UnauthorizedError
from bookshelf.models.user import PersonalAccessToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""

    user_id: int
    name: str
    email: str
    token_id: int


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class TokenValidator(Protocol):
    async def validate(self, token: str) -> Principal:
        """Return the token's principal or raise UnauthorizedError."""
        ...


class DatabaseTokenValidator:
    """Validates personal access tokens stored as SHA-256 digests."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def validate(self, token: str) -> Principal:
        result = await self.session.execute(
            select(PersonalAccessToken).where(
                PersonalAccessToken.token_hash == hash_token(token)
            )
        )
        record = result.scalar_one_or_none()

        if record is None:
            raise UnauthorizedError("invalid_token")
        if record.revoked:
            raise UnauthorizedError("revoked_token", context={"token_id": record.id})
        if record.expires_at is not None:
            expires_at = record.expires_at
            if expires_at.tzinfo is None:
                expires_at = expires_at.replace(tzinfo=timezone.utc)
            if expires_at <= datetime.now(timezone.utc):
                raise UnauthorizedError("expired_token", context={"token_id": record.id})

        return Principal(
            user_id=record.user.id,
            name=record.user.name,
            email=record.user.email,
            token_id=record.id,
        )


async def get_token_validator(
    db: AsyncSession = Depends(get_db_session),
) -> TokenValidator:
    return DatabaseTokenValidator(db)


async def require_principal(
    request: Request,
    validator: TokenValidator = Depends(get_token_validator),
) -> Principal:
    """
    FastAPI dependency guarding the author routes.

    Raises:
        UnauthorizedError: no valid bearer token (→ 401)
    """
    scheme, token = get_authorization_scheme_param(request.headers.get("authorization"))
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError("missing_token")

    try:
        principal = await validator.validate(token)
    except UnauthorizedError as e:
        logger.warning("Bearer token rejected: %s", e.reason)
        raise

    request.state.principal = principal
    return principal
