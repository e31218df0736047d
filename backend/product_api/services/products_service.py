# backend/product_api/services/products_service.py
"""
Products Service

CRUD over the products table. Payloads arrive as the client's JSON dict
(camelCase keys) and are validated here against PRODUCT_POLICY and
enforce_rules_product before anything is persisted.

Timestamps: createdAt and updatedAt are set on create; every successful
update sets updatedAt to now, even when the payload changes nothing else.
Concurrent updates to the same id are last-write-wins.
"""
from __future__ import annotations

from ..models import Product
from ..repository import Repository
from ..validation import (
    PRODUCT_POLICY,
    NotFoundError,
    enforce_rules_product,
    validate_payload,
)
from product_api.time_utils import utcnow

_products = Repository(Product)


def create_product(payload: dict) -> dict:
    """
    Validate and persist a new product.

    Raises:
        ValidationError: missing required fields, bad types or bad inventoryStatus
    """
    patch = validate_payload(model=Product, payload=payload, policy=PRODUCT_POLICY, partial=False)
    enforce_rules_product(patch)

    now = utcnow()
    p = _products.create(**patch, created_at=now, updated_at=now)
    return p.to_dict()


def list_products() -> list[dict]:
    """All products, store-native order, no pagination."""
    return [p.to_dict() for p in _products.find()]


def get_product(product_id: int) -> dict:
    p = _products.find_by_id(product_id)
    if p is None:
        raise NotFoundError("Product not found")
    return p.to_dict()


def update_product(product_id: int, payload: dict) -> dict:
    """
    Partial overwrite of an existing product.

    Only supplied keys are validated and applied; updatedAt is always refreshed.

    Raises:
        NotFoundError: unknown id
        ValidationError: a supplied field is invalid
    """
    if _products.find_by_id(product_id) is None:
        raise NotFoundError("Product not found")

    patch = validate_payload(model=Product, payload=payload, policy=PRODUCT_POLICY, partial=True)
    enforce_rules_product(patch)
    patch["updated_at"] = utcnow()

    p = _products.update_by_id(product_id, patch)
    if p is None:
        # Deleted between the lookup and the write
        raise NotFoundError("Product not found")
    return p.to_dict()


def delete_product(product_id: int) -> None:
    """Hard delete. Raises NotFoundError for an unknown id."""
    if not _products.delete_by_id(product_id):
        raise NotFoundError("Product not found")
