# backend/product_api/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping

from flask import current_app


def _database_uri() -> str:
    """
    Build the SQLAlchemy URI from DATABASE_URL and an optional DATABASE_NAME.

    When DATABASE_NAME is set it is appended as the final path segment,
    so DATABASE_URL can point at a server and the name picks the database.
    """
    url = os.environ.get("DATABASE_URL", "sqlite:///products.sqlite3")
    name = os.environ.get("DATABASE_NAME")
    if name:
        return f"{url.rstrip('/')}/{name}"
    return url


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Token signing
    JWT_SECRET = os.environ.get("JWT_SECRET", "dev-jwt-secret-change-me-0123456789abcdef")
    JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
    JWT_EXPIRES_SECONDS = int(os.environ.get("JWT_EXPIRES_SECONDS", "3600"))

    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    PORT = int(os.environ.get("PORT", "3000"))


@dataclass(frozen=True)
class AuthSettings:
    """
    Process-wide auth configuration, frozen once at app creation.

    Services take this explicitly instead of reading app.config ad hoc.
    """
    secret: str
    algorithm: str = "HS256"
    token_ttl: timedelta = timedelta(hours=1)
    bcrypt_rounds: int = 12

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "AuthSettings":
        secret = config.get("JWT_SECRET")
        if not secret:
            raise RuntimeError("JWT_SECRET must be configured")
        return cls(
            secret=secret,
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
            token_ttl=timedelta(seconds=int(config.get("JWT_EXPIRES_SECONDS", 3600))),
            bcrypt_rounds=int(config.get("BCRYPT_ROUNDS", 12)),
        )


def get_auth_settings() -> AuthSettings:
    """AuthSettings of the current app."""
    return current_app.extensions["auth_settings"]
