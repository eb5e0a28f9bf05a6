"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the outer layers (CLI, any HTTP adapter) can catch them uniformly and
map them to user-facing messages and status codes.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A request was malformed or a business rule was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    def __init__(self, entity: str, entity_id: object, message: str | None = None) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message or f"{entity} with ID '{entity_id}' not found")


class InsufficientStockError(DomainException):
    """Not enough stock to satisfy a requested quantity.

    Carries the numbers so a client can render "only 3 left, you asked for 5".
    """

    def __init__(self, product_name: str, available: int, requested: int) -> None:
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Product '{product_name}' has only {available} items in stock, "
            f"but {requested} were requested."
        )


class InvalidStatusTransitionError(DomainException):
    """An order lifecycle transition is not allowed from the current status."""

    def __init__(self, current_status: str, action: str, message: str | None = None) -> None:
        self.current_status = current_status
        self.action = action
        super().__init__(
            message or f"Cannot {action} order with status '{current_status}'."
        )


class OrderPersistenceError(DomainException):
    """The order could not be stored after its stock was reserved.

    The reservation has already been released when this is raised.
    """
