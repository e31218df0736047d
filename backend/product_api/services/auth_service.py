# Overview: Service-layer operations for accounts; hashing, registration and credential checks.

"""
Authentication Service

Accounts are created by self-registration and identified by email.
Passwords are hashed with bcrypt (salted, cost from AuthSettings.bcrypt_rounds)
and only the hash is persisted. Token issuance lives in token_service.py.

SECURITY NOTES:
- Plaintext passwords exist only for the duration of the request
- verify_password is timing-safe (bcrypt.checkpw)
- A wrong password and a malformed stored hash fail the same way
"""

import re

import bcrypt

from ..config import AuthSettings
from ..models import User
from ..repository import Repository
from ..validation import NotFoundError, ValidationError

REGISTRATION_FIELDS = ("username", "firstname", "email", "password")

# local@domain.tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_users = Repository(User)


class AuthenticationError(Exception):
    """Raised when supplied credentials do not match the stored hash."""
    pass


def hash_password(password: str, rounds: int = 12) -> str:
    """
    Hash password using bcrypt.

    Returns the hash as a string for storage in the users table.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash.

    Returns True if password matches hash, False otherwise
    (including when the stored value is not a bcrypt hash).
    """
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


def _clean_registration(data: dict) -> dict:
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON payload")

    missing = [f for f in REGISTRATION_FIELDS if data.get(f) is None]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    cleaned = {}
    for f in REGISTRATION_FIELDS:
        value = data[f]
        if not isinstance(value, str):
            raise ValidationError(f"{f} must be a string")
        # Passwords are taken verbatim; everything else is trimmed
        value = value if f == "password" else value.strip()
        if value == "":
            raise ValidationError(f"{f} cannot be blank")
        cleaned[f] = value

    # bcrypt only reads the first 72 bytes
    if len(cleaned["password"].encode("utf-8")) > 72:
        raise ValidationError("password exceeds max length 72 bytes")

    if not EMAIL_PATTERN.match(cleaned["email"]):
        raise ValidationError("email is not a valid email address")

    for f in ("username", "firstname"):
        limit = User.__table__.columns[f].type.length
        if len(cleaned[f]) > limit:
            raise ValidationError(f"{f} exceeds max length {limit}")

    return cleaned


def register(data: dict, settings: AuthSettings) -> User:
    """
    Create a new account.

    Args:
        data: {username, firstname, email, password}
        settings: process AuthSettings (bcrypt cost)

    Returns:
        Created User

    Raises:
        ValidationError: missing/blank/malformed fields or email already registered
    """
    fields = _clean_registration(data)

    if _users.find_one(email=fields["email"]) is not None:
        raise ValidationError("Email already registered")

    # A concurrent duplicate still trips uq_users_email, surfaced by the
    # repository as ValidationError.
    return _users.create(
        username=fields["username"],
        firstname=fields["firstname"],
        email=fields["email"],
        password_hash=hash_password(fields["password"], rounds=settings.bcrypt_rounds),
    )


def authenticate(email, password) -> User:
    """
    Look up a user by email and check the password.

    Raises:
        ValidationError: email or password missing
        NotFoundError: no user with that email
        AuthenticationError: password does not match
    """
    if not isinstance(email, str) or not email.strip():
        raise ValidationError("email is required")
    if not isinstance(password, str) or password == "":
        raise ValidationError("password is required")

    user = _users.find_one(email=email.strip())
    if user is None:
        raise NotFoundError("User not found")

    if not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid credentials")

    return user


def list_users() -> list[User]:
    return _users.find()
