from __future__ import annotations

from enum import Enum

from ..extensions import db
from product_api.time_utils import to_utc_z, utcnow


class InventoryStatus(str, Enum):
    INSTOCK = "INSTOCK"
    LOWSTOCK = "LOWSTOCK"
    OUTOFSTOCK = "OUTOFSTOCK"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


class Product(db.Model):
    """
    Product catalogue entry.

    Column keys are snake_case; the JSON surface uses camelCase names
    (see PRODUCT_POLICY in validation.py and to_dict below).
    """
    __tablename__ = "products"
    __table_args__ = (
        db.Index("ix_products_code", "code"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    code = db.Column(db.String(64), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    image = db.Column(db.String(1024), nullable=True)
    category = db.Column(db.String(128), nullable=False)

    price = db.Column(db.Float, nullable=False)
    quantity = db.Column(db.Integer, nullable=False)

    internal_reference = db.Column(db.String(128), nullable=True)
    # Opaque reference to a shelf record owned elsewhere
    shell_id = db.Column(db.Integer, nullable=True)

    # One of InventoryStatus; enforced in enforce_rules_product
    inventory_status = db.Column(db.String(16), nullable=False)

    rating = db.Column(db.Float, nullable=False, default=0.0)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "image": self.image,
            "category": self.category,
            "price": self.price,
            "quantity": self.quantity,
            "internalReference": self.internal_reference,
            "shellId": self.shell_id,
            "inventoryStatus": self.inventory_status,
            "rating": self.rating,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
