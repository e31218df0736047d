"""
Authorization tests.

Verifies:
- Product routes return 401 without a usable bearer token
- Tampered, foreign-signed and expired tokens never reach product logic
- Public endpoints need no token
"""

from datetime import timedelta

import jwt
import pytest

from product_api.models import Product
from product_api.time_utils import utcnow


PRODUCT_ROUTES = [
    ("GET", "/products"),
    ("POST", "/products"),
    ("GET", "/products/1"),
    ("PUT", "/products/1"),
    ("DELETE", "/products/1"),
]


def _call(client, method, path, headers=None):
    kwargs = {"headers": headers or {}}
    if method in ("POST", "PUT"):
        kwargs["json"] = {"code": "X", "name": "X", "category": "C", "price": 1,
                          "quantity": 1, "inventoryStatus": "INSTOCK"}
    return getattr(client, method.lower())(path, **kwargs)


class TestUnauthenticatedAccess:
    """All product endpoints return 401 without a token."""

    @pytest.mark.parametrize("method,path", PRODUCT_ROUTES)
    def test_requires_auth(self, client, db_session, method, path):
        resp = _call(client, method, path)
        assert resp.status_code == 401, f"{method} {path} returned {resp.status_code}"
        assert resp.get_json() == {"error": "Authentication required"}

    @pytest.mark.parametrize("header", ["Basic abc", "Bearer", "Bearer   ", "token"])
    def test_malformed_header(self, client, db_session, header):
        resp = client.get("/products", headers={"Authorization": header})
        assert resp.status_code == 401


class TestRejectedTokens:

    @pytest.mark.parametrize("method,path", PRODUCT_ROUTES)
    def test_tampered_token(self, client, db_session, token, method, path):
        header, _, signature = token.split(".")
        forged_payload = jwt.encode(
            {"id": 999, "email": "evil@b.com", "iat": utcnow(), "exp": utcnow() + timedelta(hours=1)},
            "another-secret-0123456789abcdef0123456789",
            algorithm="HS256",
        ).split(".")[1]

        resp = _call(client, method, path, {"Authorization": f"Bearer {header}.{forged_payload}.{signature}"})
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Invalid token"}
        assert db_session.query(Product).count() == 0

    def test_token_signed_with_other_secret(self, client, user):
        foreign = jwt.encode(
            {"id": user.id, "email": user.email, "iat": utcnow(), "exp": utcnow() + timedelta(hours=1)},
            "another-secret-0123456789abcdef0123456789",
            algorithm="HS256",
        )
        resp = client.get("/products", headers={"Authorization": f"Bearer {foreign}"})
        assert resp.status_code == 401

    def test_expired_token(self, app, client, user):
        issued = utcnow() - timedelta(hours=2)
        expired = jwt.encode(
            {"id": user.id, "email": user.email, "iat": issued, "exp": issued + timedelta(hours=1)},
            app.config["JWT_SECRET"],
            algorithm="HS256",
        )
        resp = client.get("/products", headers={"Authorization": f"Bearer {expired}"})
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Token expired"}

    def test_garbage_token(self, client, db_session):
        resp = client.get("/products", headers={"Authorization": "Bearer not.a.jwt"})
        assert resp.status_code == 401

    def test_valid_token(self, client, auth_headers):
        resp = client.get("/products", headers=auth_headers)
        assert resp.status_code == 200

    @pytest.mark.parametrize("scheme", ["bearer", "BEARER", "BeArEr"])
    def test_scheme_is_case_insensitive(self, client, token, scheme):
        resp = client.get("/products", headers={"Authorization": f"{scheme} {token}"})
        assert resp.status_code == 200


class TestPublicEndpoints:
    """Account, token, health and version endpoints are public."""

    def test_health(self, client, db_session):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["status"] == "healthy"
        assert data["checks"]["database"]["status"] == "healthy"

    def test_version(self, client):
        resp = client.get("/version")
        assert resp.status_code == 200
        assert "api_version" in resp.get_json()

    def test_unknown_route_is_json_404(self, client):
        resp = client.get("/nope")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Not found"}
