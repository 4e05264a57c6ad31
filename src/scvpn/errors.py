"""Exceptions raised when a service profile is rendered incorrectly.

Both errors describe bugs in the calling code rather than runtime
conditions, so nothing in the package tries to recover from them. The
command line entry point turns them into distinct exit codes.
"""

from __future__ import annotations

from enum import IntEnum

from .config import ServiceKind


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_CONFIG = 10
    INVALID_SERVICE_KIND_CALLED = 20
    MISSING_SERVICE_ID = 21


class ServiceConfigError(Exception):
    """Base class for rendering contract violations."""

    exit_code = ExitCode.INVALID_CONFIG


class WrongKindForOperation(ServiceConfigError):
    """A rendering operation was called on a profile of the other kind."""

    exit_code = ExitCode.INVALID_SERVICE_KIND_CALLED

    def __init__(self, operation: str, expected: ServiceKind, actual: ServiceKind) -> None:
        super().__init__(
            f"{operation} is only available for {expected.human_name} services, "
            f"not {actual.human_name}"
        )
        self.operation = operation
        self.expected = expected
        self.actual = actual


class MissingServiceIdentifier(ServiceConfigError):
    """A rendering operation needs the service identifier before it exists."""

    exit_code = ExitCode.MISSING_SERVICE_ID

    def __init__(self, operation: str, service_name: str) -> None:
        super().__init__(
            f"{operation} requires service '{service_name}' to be registered first"
        )
        self.operation = operation
        self.service_name = service_name
