"""
JWT token utilities for the admin session.

Tokens are issued and verified by the backend; here we only read their
claims to know when a cached token has expired.
"""

from datetime import datetime, timezone
from typing import Optional

from jose import JWTError, jwt


def decode_token_claims(token: str) -> Optional[dict]:
    """
    Read the claims of a JWT without verifying its signature.

    Args:
        token: The JWT token string

    Returns:
        Claims dict, or None if the token is not a JWT
    """
    try:
        return jwt.get_unverified_claims(token)
    except JWTError:
        return None


def token_expiry(token: str) -> Optional[datetime]:
    """Expiry time of a token (UTC), or None if it has no `exp` claim."""
    claims = decode_token_claims(token)
    if not claims or "exp" not in claims:
        return None
    return datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc)


def token_expired(token: str, now: Optional[datetime] = None) -> bool:
    """
    Check whether a token is past its expiry.

    Opaque tokens and tokens without `exp` are treated as not expired;
    the backend answers 401 for those when they lapse.
    """
    expires_at = token_expiry(token)
    if expires_at is None:
        return False
    now = now or datetime.now(timezone.utc)
    return now >= expires_at
