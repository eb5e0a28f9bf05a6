"""Turn domain errors into click errors with meaningful exit codes."""

from __future__ import annotations

import click

from orderdesk.domain.exceptions import DomainException
from orderdesk.infrastructure.error_mapping import exit_code_for


class DomainClickException(click.ClickException):
    """A ClickException whose exit code reflects the kind of domain error."""

    def __init__(self, exc: DomainException) -> None:
        super().__init__(str(exc))
        self.exit_code = exit_code_for(exc)
