# Overview: Minimal store interface over a single model; services never touch db.session directly.

"""
Repository over one SQLAlchemy model.

Exposes the five operations the services need (create, find, find_by_id,
update_by_id, delete_by_id) so the storage engine can be swapped without
touching service logic. Every write is a single commit.

Store failures are translated:
- IntegrityError (unique/not-null violations) -> ValidationError
- any other SQLAlchemyError -> UnexpectedStoreError
The session is rolled back before either is raised.
"""
from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .extensions import db
from .validation import ValidationError

ModelT = TypeVar("ModelT")


class UnexpectedStoreError(RuntimeError):
    """500-level: store or connectivity failure."""


class Repository(Generic[ModelT]):
    def __init__(self, model: type[ModelT]):
        self.model = model

    def _commit(self) -> None:
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            raise ValidationError(str(e.orig)) from e
        except SQLAlchemyError as e:
            db.session.rollback()
            raise UnexpectedStoreError(str(e)) from e

    def _query(self, fn):
        try:
            return fn()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise UnexpectedStoreError(str(e)) from e

    def create(self, **fields: Any) -> ModelT:
        obj = self.model(**fields)
        db.session.add(obj)
        self._commit()
        return obj

    def find(self, **criteria: Any) -> list[ModelT]:
        return self._query(lambda: db.session.query(self.model).filter_by(**criteria).all())

    def find_one(self, **criteria: Any) -> Optional[ModelT]:
        return self._query(lambda: db.session.query(self.model).filter_by(**criteria).first())

    def find_by_id(self, record_id: int) -> Optional[ModelT]:
        return self._query(lambda: db.session.get(self.model, record_id))

    def update_by_id(self, record_id: int, patch: dict) -> Optional[ModelT]:
        """Apply patch to the record; returns None if it does not exist."""
        obj = self.find_by_id(record_id)
        if obj is None:
            return None
        for k, v in patch.items():
            setattr(obj, k, v)
        self._commit()
        return obj

    def delete_by_id(self, record_id: int) -> bool:
        obj = self.find_by_id(record_id)
        if obj is None:
            return False
        db.session.delete(obj)
        self._commit()
        return True
