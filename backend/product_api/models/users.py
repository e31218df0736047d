from __future__ import annotations

from ..extensions import db
from product_api.time_utils import to_utc_z, utcnow


class User(db.Model):
    """
    Registered accounts.

    Email is the login identifier and is unique across the table.
    Only the bcrypt hash of the password is stored.
    """
    __tablename__ = "users"
    __table_args__ = (
        db.UniqueConstraint("email", name="uq_users_email"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    username = db.Column(db.String(64), nullable=False, index=True)
    firstname = db.Column(db.String(64), nullable=False)
    email = db.Column(db.String(255), nullable=False)

    # Bcrypt hashed password
    password_hash = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "firstname": self.firstname,
            "email": self.email,
            "createdAt": to_utc_z(self.created_at),
        }
