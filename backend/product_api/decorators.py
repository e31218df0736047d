# Overview: Request decorators for API routes.

from functools import wraps
from flask import request, jsonify, g, current_app

from .config import get_auth_settings
from .services import token_service
from .services.token_service import AuthorizationError


def require_auth(f):
    """
    Require a valid bearer token.

    Sets g.identity to the decoded token_service.Identity (user id, email).
    The referenced user is not looked up again; a signed, unexpired token
    is sufficient.

    SECURITY: Returns 401 if:
    - No Authorization header, or a scheme other than Bearer (any case)
    - Token signature invalid, token malformed or expired
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get("Authorization")

        scheme, _, token = (auth_header or "").partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            return jsonify({"error": "Authentication required"}), 401

        try:
            identity = token_service.decode_token(token, get_auth_settings())
        except AuthorizationError as e:
            current_app.logger.warning("Rejected bearer token on %s %s: %s", request.method, request.path, e)
            return jsonify({"error": str(e)}), 401

        g.identity = identity

        return f(*args, **kwargs)

    return decorated_function
