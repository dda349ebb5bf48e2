"""Error hierarchy for bootstat.

Error layers:
- BootstatError: Base class for all bootstat errors
- DomainError: Malformed input, unsupported requests, unexpected host state
- InfrastructureError: Failures talking to the sysroot or the ostree tooling
- ContextError: Wraps a lower-level failure with the name of the operation
  that was running, so the CLI can print the whole chain

Errors are never retried; the CLI prints the context chain and exits non-zero.
"""

from contextlib import ContextDecorator
from types import TracebackType


class BootstatError(Exception):
    """Base class for all bootstat errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(BootstatError):
    """Base class for domain errors."""


class ParseError(DomainError):
    """A reference string, keyfile or metadata value could not be parsed."""


class UnsupportedFormatVersionError(DomainError):
    """The requested status format version is not known."""

    def __init__(self, version: int) -> None:
        super().__init__(f"Unsupported format version: {version}")
        self.version = version


class NotBootedError(DomainError):
    """The running system is not an OSTree deployment."""


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(BootstatError):
    """Base class for infrastructure/system errors."""


class CommandError(InfrastructureError):
    """An external command (ostree) failed."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


# =============================================================================
# Context
# =============================================================================


class ContextError(BootstatError):
    """Names the operation during which the chained ``__cause__`` was raised."""


class ErrorContext(ContextDecorator):
    """Attach an operation name to failures raised inside a block or function.

    Usable both as a decorator and as a ``with`` block::

        @context("Computing status")
        def get_status(...): ...

        with context("Booted deployment"):
            ...
    """

    wrapped: tuple[type[BaseException], ...] = (BootstatError, OSError)

    def __init__(self, message: str) -> None:
        self.message = message

    def __enter__(self) -> "ErrorContext":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is not None and isinstance(exc, self.wrapped):
            raise ContextError(self.message) from exc


def context(message: str) -> ErrorContext:
    return ErrorContext(message)


def error_chain(exc: BaseException) -> list[str]:
    """Messages from the outermost context down to the root cause."""
    messages = []
    current: BaseException | None = exc
    while current is not None:
        if isinstance(current, BootstatError):
            messages.append(current.message)
        else:
            messages.append(str(current) or current.__class__.__name__)
        current = current.__cause__
    return messages
