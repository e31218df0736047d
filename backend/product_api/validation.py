from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Float, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeMeta

from product_api.models.products import InventoryStatus


class ValidationError(ValueError):
    """400-level input problem."""


class NotFoundError(LookupError):
    """404-level: referenced id or email does not exist."""


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - writable_fields: JSON keys clients are allowed to set (security boundary)
    - required_on_create: JSON keys required for POST
    - field_columns: JSON key -> model column key, for keys that differ
    """
    writable_fields: set[str]
    required_on_create: set[str] = field(default_factory=set)
    field_columns: dict[str, str] = field(default_factory=dict)

    def column_for(self, key: str) -> str:
        return self.field_columns.get(key, key)


PRODUCT_POLICY = ModelValidationPolicy(
    writable_fields={
        "code", "name", "description", "image", "category", "price", "quantity",
        "internalReference", "shellId", "inventoryStatus", "rating",
    },
    required_on_create={"code", "name", "category", "price", "quantity", "inventoryStatus"},
    field_columns={
        "internalReference": "internal_reference",
        "shellId": "shell_id",
        "inventoryStatus": "inventory_status",
    },
)


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    mapper = model.__mapper__
    return {c.key: c for c in mapper.columns}


# Range of a signed 64-bit INTEGER column
INT_MIN, INT_MAX = -2**63, 2**63 - 1


def _coerce_int(name: str, value: Any) -> int:
    """Ints and plain digit strings only; bools, floats and exponents are refused."""
    if isinstance(value, bool) or isinstance(value, float):
        raise ValidationError(f"{name} must be an integer")
    if isinstance(value, str):
        digits = value.strip()
        if not re.fullmatch(r"[-+]?\d+", digits):
            raise ValidationError(f"{name} must be an integer")
        value = int(digits)
    if not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer")
    if not INT_MIN <= value <= INT_MAX:
        raise ValidationError(f"{name} is out of range")
    return value


def _coerce_value(name: str, col, value: Any):
    coltype = col.type

    if value is None:
        return None

    if isinstance(coltype, Integer):
        return _coerce_int(name, value)

    # Floats / decimals - accept any finite number, or a numeric string
    if isinstance(coltype, (Float, Numeric)):
        if isinstance(value, bool):
            raise ValidationError(f"{name} must be a number")
        if isinstance(value, (int, float)):
            try:
                number = float(value)
            except OverflowError:
                raise ValidationError(f"{name} is out of range")
        elif isinstance(value, str):
            try:
                number = float(value.strip())
            except ValueError:
                raise ValidationError(f"{name} must be a number")
        else:
            raise ValidationError(f"{name} must be a number")
        if not math.isfinite(number):
            raise ValidationError(f"{name} must be a finite number")
        return number

    # Strings / Text
    if isinstance(coltype, (String, Text)):
        if isinstance(value, (dict, list)):
            raise ValidationError(f"{name} must be a string")
        return str(value).strip()

    return value


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: dict,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Check a client JSON object against the model columns and the policy.

    Create (partial=False) also demands every required_on_create key;
    update (partial=True) looks only at the keys present. The result is
    keyed by column name, ready to setattr on the model.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    if not partial:
        missing = sorted(f for f in policy.required_on_create if payload.get(f) is None)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    cols = _columns_by_key(model)
    unknown = [k for k in payload if k not in policy.writable_fields or policy.column_for(k) not in cols]
    if unknown:
        raise ValidationError(f"Field not allowed: {unknown[0]}")

    return {
        policy.column_for(k): _check_field(k, cols[policy.column_for(k)], raw)
        for k, raw in payload.items()
    }


def _check_field(name: str, col, raw: Any):
    if raw is None:
        if not col.nullable:
            raise ValidationError(f"{name} cannot be null")
        return None

    value = _coerce_value(name, col, raw)
    if not isinstance(value, str):
        return value

    if value == "" and not col.nullable:
        raise ValidationError(f"{name} cannot be blank")
    limit = getattr(col.type, "length", None)
    if limit and len(value) > limit:
        raise ValidationError(f"{name} exceeds max length {limit}")
    return value


def enforce_rules_product(patch: dict) -> None:
    """Checks the column metadata cannot express: inventoryStatus must be a known value."""
    if "inventory_status" in patch:
        status = patch["inventory_status"]
        if status not in InventoryStatus.values():
            raise ValidationError(
                f"inventoryStatus must be one of {', '.join(InventoryStatus.values())}"
            )
