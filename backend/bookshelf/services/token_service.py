"""
Bookshelf API — Personal Access Token Service
==============================================

What:  Creates developer users and issues personal access tokens for them.
How:   The plaintext token comes from `secrets.token_urlsafe`; only its
       SHA-256 digest is stored. The plaintext is returned once to the caller.
Who:   The dev-setup command and the test suite.
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.auth import hash_token
from bookshelf.config import settings
from bookshelf.models.author import utcnow
from bookshelf.models.user import PersonalAccessToken, User

logger = logging.getLogger(__name__)

TOKEN_BYTES = 40


async def get_or_create_user(session: AsyncSession, name: str, email: str) -> Tuple[User, bool]:
    """Return (user, created). An existing user with that email is reused."""
    result = await session.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    if user is not None:
        return user, False

    user = User(name=name, email=email)
    session.add(user)
    await session.flush()
    logger.info("User created: %s <%s>", user.id, email)
    return user, True


async def issue_personal_access_token(
    session: AsyncSession,
    user: User,
    name: str,
    ttl_days: Optional[int] = None,
) -> Tuple[PersonalAccessToken, str]:
    """
    Issue a new bearer token for `user`.

    Args:
        ttl_days: lifetime in days; defaults to settings.token_ttl_days,
                  0 means the token never expires.

    Returns:
        (stored token row, plaintext token)
    """
    if ttl_days is None:
        ttl_days = settings.token_ttl_days

    plaintext = secrets.token_urlsafe(TOKEN_BYTES)
    now = utcnow()
    token = PersonalAccessToken(
        user_id=user.id,
        name=name,
        token_hash=hash_token(plaintext),
        created_at=now,
        expires_at=now + timedelta(days=ttl_days) if ttl_days else None,
    )
    session.add(token)
    await session.flush()
    logger.info("Personal access token %s issued for user %s", token.id, user.id)
    return token, plaintext


async def revoke_token(session: AsyncSession, token: PersonalAccessToken) -> None:
    token.revoked = True
    await session.flush()
    logger.info("Personal access token %s revoked", token.id)
