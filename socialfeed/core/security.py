import logging
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Dict

from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import settings

logger = logging.getLogger(__name__)

# --- Hashing Setup ---
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_BCRYPT_ROUNDS,
)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)
# --- End Hashing Setup ---


class TokenError(Exception):
    """Base class for token decoding failures."""


class InvalidTokenError(TokenError):
    """Bad signature, malformed payload or missing claims."""


class TokenExpiredError(TokenError):
    """The token's expiry is not in the future."""


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    issued_at: int
    expires_at: int


class TokenService:
    """
    Issues and decodes signed, time-bound identity tokens.

    The signing secret is handed in by the caller; nothing here reads the
    environment. Timestamps are whole seconds since the epoch, as JWT
    ``iat``/``exp`` claims are.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expiration_minutes: int = 10,
        clock: Callable[[], float] = time.time,
    ):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl_seconds = expiration_minutes * 60
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock())

    def _encode(self, user_id: str, issued_at: int) -> str:
        to_encode: Dict[str, Any] = {
            "user_id": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self._ttl_seconds,
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def issue(self, user_id: Any) -> str:
        """Issue a fresh token for ``user_id``."""
        return self._encode(str(user_id), self._now())

    def refresh(self, claims: TokenClaims) -> str:
        """
        Re-issue a token for the holder of ``claims``.

        The new ``iat`` is always strictly greater than the presented one,
        even when both fall within the same clock second.
        """
        issued_at = max(self._now(), claims.issued_at + 1)
        return self._encode(claims.user_id, issued_at)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify ``token`` and return its claims.

        Raises:
            InvalidTokenError: bad signature or malformed payload
            TokenExpiredError: ``exp`` is not after the current time
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        user_id = payload.get("user_id")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        if user_id is None or issued_at is None or expires_at is None:
            raise InvalidTokenError("Token is missing required claims")

        try:
            claims = TokenClaims(
                user_id=str(user_id),
                issued_at=int(issued_at),
                expires_at=int(expires_at),
            )
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("Token claims are malformed") from e

        if claims.expires_at <= self._now():
            raise TokenExpiredError("Signature has expired.")
        return claims


@lru_cache()
def get_token_service() -> TokenService:
    """Dependency returning the process-wide token service."""
    return TokenService(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expiration_minutes=settings.JWT_EXPIRATION_MINUTES,
    )
