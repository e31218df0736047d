"""Token issuance and decoding without HTTP."""

from datetime import timedelta
from types import SimpleNamespace

import jwt
import pytest

from product_api.config import AuthSettings
from product_api.services import token_service
from product_api.services.token_service import AuthorizationError, Identity
from product_api.time_utils import utcnow


SETTINGS = AuthSettings(secret="token-test-secret-0123456789abcdef0123456789", bcrypt_rounds=4)
USER = SimpleNamespace(id=42, email="a@b.com")


def test_round_trip():
    token = token_service.issue_token(USER, SETTINGS)
    assert token_service.decode_token(token, SETTINGS) == Identity(user_id=42, email="a@b.com")


def test_one_hour_validity_by_default():
    claims = jwt.decode(
        token_service.issue_token(USER, SETTINGS), SETTINGS.secret, algorithms=["HS256"]
    )
    assert claims["exp"] - claims["iat"] == 3600


def test_expired():
    settings = AuthSettings(secret=SETTINGS.secret, token_ttl=timedelta(seconds=-5))
    token = token_service.issue_token(USER, settings)
    with pytest.raises(AuthorizationError, match="Token expired"):
        token_service.decode_token(token, SETTINGS)


def test_wrong_secret():
    other = AuthSettings(secret="some-other-secret-0123456789abcdef0123456789")
    token = token_service.issue_token(USER, other)
    with pytest.raises(AuthorizationError, match="Invalid token"):
        token_service.decode_token(token, SETTINGS)


def test_missing_identity_claims():
    token = jwt.encode(
        {"sub": "42", "iat": utcnow(), "exp": utcnow() + timedelta(hours=1)},
        SETTINGS.secret,
        algorithm="HS256",
    )
    with pytest.raises(AuthorizationError, match="Invalid token"):
        token_service.decode_token(token, SETTINGS)


def test_missing_expiry_rejected():
    token = jwt.encode({"id": 42, "email": "a@b.com", "iat": utcnow()}, SETTINGS.secret, algorithm="HS256")
    with pytest.raises(AuthorizationError):
        token_service.decode_token(token, SETTINGS)


def test_unsigned_token_rejected():
    token = jwt.encode(
        {"id": 42, "email": "a@b.com", "iat": utcnow(), "exp": utcnow() + timedelta(hours=1)},
        None,
        algorithm="none",
    )
    with pytest.raises(AuthorizationError):
        token_service.decode_token(token, SETTINGS)


def test_settings_from_config():
    settings = AuthSettings.from_config({
        "JWT_SECRET": "s" * 40,
        "JWT_EXPIRES_SECONDS": "120",
        "BCRYPT_ROUNDS": "5",
    })
    assert settings.token_ttl == timedelta(seconds=120)
    assert settings.bcrypt_rounds == 5
    assert settings.algorithm == "HS256"


def test_settings_require_secret():
    with pytest.raises(RuntimeError):
        AuthSettings.from_config({"JWT_SECRET": ""})
