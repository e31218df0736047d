# Overview: Signed, time-limited bearer tokens (JWT) carrying the user's id and email.

"""
Token Service

Tokens are self-contained HS256 JWTs with claims:
- id: user id
- email: user email
- iat / exp: issued-at and expiry (iat + AuthSettings.token_ttl, one hour by default)

Nothing is stored server-side; validity is signature + expiry only.
"""

from dataclasses import dataclass

import jwt

from ..config import AuthSettings
from ..models import User
from product_api.time_utils import utcnow


class AuthorizationError(Exception):
    """Raised when a bearer token is missing, malformed, tampered with or expired."""
    pass


@dataclass(frozen=True)
class Identity:
    """Decoded token identity attached to the request."""
    user_id: int
    email: str


def issue_token(user: User, settings: AuthSettings) -> str:
    now = utcnow()
    payload = {
        "id": user.id,
        "email": user.email,
        "iat": now,
        "exp": now + settings.token_ttl,
    }
    return jwt.encode(payload, settings.secret, algorithm=settings.algorithm)


def decode_token(token: str, settings: AuthSettings) -> Identity:
    """
    Verify signature and expiry and return the embedded identity.

    Raises AuthorizationError with "Token expired" or "Invalid token".
    """
    try:
        claims = jwt.decode(
            token,
            settings.secret,
            algorithms=[settings.algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthorizationError("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise AuthorizationError("Invalid token") from e

    user_id = claims.get("id")
    email = claims.get("email")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
        raise AuthorizationError("Invalid token")

    return Identity(user_id=user_id, email=email)
