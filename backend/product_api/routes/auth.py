# Overview: Flask API routes for accounts and tokens; parses input and returns JSON responses.

# backend/product_api/routes/auth.py
"""
Authentication API routes

Both routes are public:
- POST /auth/account creates an account
- POST /auth/token exchanges email + password for a bearer token
"""

from flask import Blueprint, request, jsonify, current_app

from ..config import get_auth_settings
from ..services import auth_service
from ..services import token_service
from ..services.auth_service import AuthenticationError
from ..validation import NotFoundError, ValidationError


auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@auth_bp.post("/account")
def create_account_route():
    """
    Register a new user.

    Request body:
    {
        "username": "HB",
        "firstname": "hamza",
        "email": "a@b.com",
        "password": "..."
    }

    Returns 201 with the created user (never the password hash).
    """
    data = request.get_json(silent=True) or {}

    try:
        user = auth_service.register(data, get_auth_settings())
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    current_app.logger.info("Account created for user id=%s", user.id)
    return jsonify({"message": "Account created successfully", "user": user.to_dict()}), 201


@auth_bp.post("/token")
def issue_token_route():
    """
    Exchange credentials for a signed token valid for one hour.

    Request body: {"email": "...", "password": "..."}

    Returns:
        200 {"token": "..."}
        400 missing fields, 404 unknown email, 401 wrong password
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON payload"}), 400

    try:
        user = auth_service.authenticate(data.get("email"), data.get("password"))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        current_app.logger.warning("Token requested for unknown email")
        return jsonify({"error": str(e)}), 404
    except AuthenticationError as e:
        current_app.logger.warning("Token requested with invalid credentials")
        return jsonify({"error": str(e)}), 401

    token = token_service.issue_token(user, get_auth_settings())
    current_app.logger.info("Token issued for user id=%s", user.id)
    return jsonify({"token": token}), 200
