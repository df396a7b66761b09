"""Password digests and JWT creation/verification for authentication."""

import hashlib
import hmac
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt

if TYPE_CHECKING:
    from jsonformatter.core.config import Settings

# Issued tokens are valid for a fixed window; not configurable per call.
ACCESS_TOKEN_EXPIRE_MINUTES = 60
JWT_ALGORITHM = "HS256"


def hash_password(plain_password: str) -> bytes:
    """Return the SHA-256 digest of a plain-text password, as stored in user_master."""
    return hashlib.sha256(plain_password.encode("utf-8")).digest()


def verify_password(plain_password: str, stored_digest: bytes | None) -> bool:
    """
    Verify a plain password against a stored digest.

    Returns False when no digest is stored. The comparison is constant-time.
    """
    if not stored_digest:
        return False
    return hmac.compare_digest(hash_password(plain_password), bytes(stored_digest))


def create_access_token(
    user_id: int,
    user_name: str,
    settings: "Settings",
    now: datetime | None = None,
) -> str:
    """Create a signed JWT with sub (user id), name, iss, aud, iat and exp."""
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "name": user_name,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: "Settings") -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, name, iss, aud, iat, exp).
    Raises jwt.PyJWTError on a bad signature, expired token, or wrong issuer/audience.
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
        options={"require": ["sub", "exp", "iat"]},
    )
