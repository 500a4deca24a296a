"""Core modules for promflat - centralized error definitions."""

from promflat.core.errors import (
    ConfigurationError,
    EmptyResultError,
    ExitCode,
    NetworkError,
    NetworkErrorReason,
    ParseError,
    PromflatError,
    UnknownTypeError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "PromflatError",
    "ConfigurationError",
    "NetworkError",
    "NetworkErrorReason",
    "ParseError",
    "UnknownTypeError",
    "EmptyResultError",
    "main_with_error_handling",
    "format_error_message",
]
