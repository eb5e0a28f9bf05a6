"""Map domain errors onto transport status codes.

The domain raises typed errors only; adapters decide what they mean on
the wire.  HTTP-style codes are the reference mapping, and the CLI
derives its exit codes from them.
"""

from __future__ import annotations

from orderdesk.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvalidStatusTransitionError,
    ValidationError,
)

_CLIENT_ERRORS = (ValidationError, InsufficientStockError, InvalidStatusTransitionError)


def http_status_for(exc: BaseException) -> int:
    if isinstance(exc, EntityNotFoundError):
        return 404
    if isinstance(exc, _CLIENT_ERRORS):
        return 400
    return 500


def exit_code_for(exc: BaseException) -> int:
    """Process exit code for *exc*: 4 not found, 3 rejected, 1 otherwise."""
    return {404: 4, 400: 3}.get(http_status_for(exc), 1)
