"""
Authentication dependencies for FastAPI.

A token may arrive as ``Authorization: Bearer <token>`` or in the token
cookie; both carriers are accepted on every authenticated route.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from socialfeed.core.config import settings
from socialfeed.core.exceptions import BadRequestError, UnauthorizedError, UserNotFoundError
from socialfeed.core.security import TokenClaims, TokenError, TokenService, get_token_service
from socialfeed.crud import user as user_crud
from socialfeed.db.models.user import User
from socialfeed.db.session import get_db

# Configure logging
logger = logging.getLogger(__name__)

# Bearer scheme; missing headers are handled below so the cookie can be tried
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class Actor:
    """The authenticated user and the claims of the token they presented."""
    user: User
    claims: TokenClaims


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[str]:
    """
    Pull the raw token out of the request, header first, then cookie.
    """
    if credentials and credentials.credentials:
        return credentials.credentials
    cookie_token = request.cookies.get(settings.TOKEN_COOKIE_NAME)
    if cookie_token:
        return cookie_token
    return None


async def get_token_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Decode the presented token.

    Raises:
        UnauthorizedError: no token, or one that fails verification
    """
    token = extract_token(request, credentials)
    if not token:
        logger.warning(f"Rejected {request.method} {request.url.path}: no token")
        raise UnauthorizedError()

    try:
        return tokens.decode(token)
    except TokenError as e:
        logger.warning(f"Rejected {request.method} {request.url.path}: {e}")
        raise UnauthorizedError()


def parse_user_id(raw_user_id: str) -> UUID:
    """
    Turn a token's ``user_id`` into a persistence key.

    Raises:
        BadRequestError: the value is not a UUID
    """
    try:
        return UUID(raw_user_id)
    except (TypeError, ValueError):
        logger.warning(f"Token carries a malformed user id: {raw_user_id!r}")
        raise BadRequestError()


async def get_current_actor(
    claims: TokenClaims = Depends(get_token_claims),
    db: AsyncSession = Depends(get_db),
) -> Actor:
    """
    Resolve the token holder to a live user.

    Raises:
        BadRequestError: the token's user id is malformed
        UserNotFoundError: the token is valid but its user no longer exists
    """
    user_id = parse_user_id(claims.user_id)
    user = await user_crud.get_user(db, user_id)
    if user is None:
        logger.warning(f"Token for unknown user {user_id}")
        raise UserNotFoundError()
    return Actor(user=user, claims=claims)
