"""Domain errors raised by the billing services.

Routers translate these into HTTP responses through the handlers registered in
``backend.app.main``; services never raise ``HTTPException`` themselves.
"""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


class TimebillError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TimebillError):
    """Bad or missing input, rejected before anything is written."""

    status_code = 400


class InvalidStatusTransition(ValidationError):
    pass


class NotFoundError(TimebillError):
    """Referenced row is absent or belongs to another user."""

    status_code = 404


class StoreError(TimebillError):
    """Persistence failure; wraps the underlying SQLAlchemy error."""

    status_code = 503

    def __init__(self, message: str, original: Exception | None = None):
        super().__init__(message)
        self.original = original


@dataclass
class PartialFailure:
    """Accumulates non-fatal per-item failures of a best-effort loop."""

    operation: str
    failures: list[tuple[int, str]] = field(default_factory=list)

    def record(self, item_id: int, reason: str) -> None:
        logger.warning("%s: item %s failed: %s", self.operation, item_id, reason)
        self.failures.append((item_id, reason))

    @property
    def failed_ids(self) -> list[int]:
        return [item_id for item_id, _ in self.failures]

    def __bool__(self) -> bool:
        return bool(self.failures)
