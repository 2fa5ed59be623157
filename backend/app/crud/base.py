"""Shared helpers for the CRUD modules."""

from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.errors import StoreError


@contextmanager
def store_operation(db: Session, action: str):
    """Roll back and re-raise SQLAlchemy failures as ``StoreError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        raise StoreError(f"Could not {action}", original=exc) from exc
