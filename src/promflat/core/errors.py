"""
Unified error handling for promflat.

Every stage of the fetch -> map -> flatten pipeline raises one of the
exceptions below and never recovers locally. The CLI converts them into
exit codes.

Exit Codes:
- 0: Success
- 1: Warning (requested metric not present in the result)
- 10: Configuration error
- 11: Network error (transport failure, non-200 status, cancellation)
- 12: Parse error (malformed exposition, unknown family type)
- 13: Empty result (flattening produced no entries)
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import Enum, IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for the CLI."""

    SUCCESS = 0
    WARNING = 1
    CONFIG_ERROR = 10
    NETWORK_ERROR = 11
    PARSE_ERROR = 12
    EMPTY_RESULT = 13
    UNKNOWN_ERROR = 127


class PromflatError(Exception):
    """Base exception for promflat errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PromflatError):
    """Raised for configuration-related errors."""

    exit_code = ExitCode.CONFIG_ERROR


class NetworkErrorReason(str, Enum):
    """Why a fetch failed."""

    TRANSPORT = "transport"
    STATUS = "status"
    CANCELLED = "cancelled"


class NetworkError(PromflatError):
    """Raised when the exposition document could not be retrieved."""

    exit_code = ExitCode.NETWORK_ERROR

    def __init__(
        self,
        url: str,
        reason: NetworkErrorReason,
        code: int | None = None,
        message: str | None = None,
    ):
        if message is None:
            if reason is NetworkErrorReason.STATUS:
                message = f"{url} not HTTP 200 OK (got {code})"
            else:
                message = f"{reason.value} failure fetching {url}"
        details: dict[str, Any] = {"url": url, "reason": reason.value}
        if code is not None:
            details["code"] = code
        super().__init__(message, details)
        self.url = url
        self.reason = reason
        self.code = code


class ParseError(PromflatError):
    """Raised when the exposition text cannot be tokenized."""

    exit_code = ExitCode.PARSE_ERROR


class UnknownTypeError(ParseError):
    """Raised when a metric family declares a type outside the supported five."""

    def __init__(self, family: str, type_name: str):
        super().__init__(
            f"metric family {family!r} has unsupported type {type_name!r}",
            {"family": family, "type": type_name},
        )
        self.family = family
        self.type_name = type_name


class EmptyResultError(PromflatError):
    """Raised when flattening produced no entries."""

    exit_code = ExitCode.EMPTY_RESULT

    def __init__(self, message: str = "result is empty", details: dict[str, Any] | None = None):
        super().__init__(message, details)


# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI main functions that provides unified error handling.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    Exit codes:
        - PromflatError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except PromflatError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=int(e.exit_code),
                        **e.details,
                    )
                print(f"Error: {format_error_message(e)}", file=sys.stderr)
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130  # Standard exit code for SIGINT
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=int(ExitCode.UNKNOWN_ERROR),
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: PromflatError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
