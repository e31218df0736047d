# Overview: Flask API routes for products operations; parses input and returns JSON responses.

# backend/product_api/routes/products.py
"""
Product management routes.

SECURITY: All routes require a bearer token (@require_auth).
"""
from flask import Blueprint, request, jsonify

from ..services import products_service
from ..validation import NotFoundError, ValidationError
from ..decorators import require_auth

products_bp = Blueprint("products", __name__, url_prefix="/products")


@products_bp.post("")
@require_auth
def create_product_route():
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}

    try:
        created = products_service.create_product(payload)
    except ValidationError as e:
        return {"error": str(e)}, 400

    return created, 201


@products_bp.get("")
@require_auth
def list_products_route():
    """List all products (no pagination)."""
    return jsonify(products_service.list_products()), 200


@products_bp.get("/<int:product_id>")
@require_auth
def get_product_route(product_id: int):
    try:
        return products_service.get_product(product_id), 200
    except NotFoundError as e:
        return {"error": str(e)}, 404


@products_bp.put("/<int:product_id>")
@require_auth
def update_product_route(product_id: int):
    """
    Partially update a product.

    Only the supplied fields change; updatedAt is always refreshed.
    """
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}

    try:
        updated = products_service.update_product(product_id, payload)
    except NotFoundError as e:
        return {"error": str(e)}, 404
    except ValidationError as e:
        return {"error": str(e)}, 400

    return updated, 200


@products_bp.delete("/<int:product_id>")
@require_auth
def delete_product_route(product_id: int):
    try:
        products_service.delete_product(product_id)
    except NotFoundError as e:
        return {"error": str(e)}, 404

    return {"message": "Product deleted successfully"}, 200
