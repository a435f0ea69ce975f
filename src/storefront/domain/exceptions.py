"""Domain-level exceptions.

Every failure the order transaction can report is a subclass of
DomainException so the CLI layer can catch them uniformly.  Storage
errors are deliberately *not* wrapped: they propagate as-is.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class InvalidRequestError(DomainException):
    """Malformed input.  ``field`` names the offending attribute."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class EntityNotFoundError(DomainException):
    """A referenced product or order does not exist."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} '{entity_id}' not found")
        self.entity = entity
        self.entity_id = entity_id


class InsufficientStockError(DomainException):
    """Requested more units than the product currently has in stock."""

    def __init__(self, product_id: str, available: int, requested: int) -> None:
        super().__init__(
            f"Insufficient stock for product '{product_id}' "
            f"(available {available}, requested {requested})"
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested


class InvalidStateError(DomainException):
    """An invariant was violated after otherwise successful processing."""
