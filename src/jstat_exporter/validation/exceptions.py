"""
Exception types and error handling helpers.

This module provides the error taxonomy of the exporter together with the
small set of helpers used to log errors consistently before they are
re-raised or turned into an exit code.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when validation fails.

    This is the exception type used for configuration and command-line
    validation throughout the exporter.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class ExporterError(Exception):
    """Base class for errors raised while sampling and exporting jstat data."""


class TargetNotFoundError(ExporterError):
    """No JVM matching the requested target was reported by jps."""

    def __init__(self, target: Optional[str], reason: str = ""):
        message = f"No target process: {target or '<any>'}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.target = target


class SubprocessSpawnError(ExporterError):
    """The jstat subprocess could not be started."""

    def __init__(self, command: str, cause: Exception):
        super().__init__(f"Failed to start '{command}': {cause}")
        self.command = command
        self.cause = cause


class MalformedSampleError(ExporterError):
    """
    A cached jstat line could not be converted into gauge values.

    Raised when the token at a required position is missing or is not a
    number, which means the jstat output layout is not the expected one.
    """

    def __init__(self, category: str, position: int, line: str, reason: str):
        super().__init__(
            f"Malformed {category} sample at token {position}: {reason} (line: {line!r})"
        )
        self.category = category
        self.position = position
        self.line = line


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    """Handle subprocess-related errors."""
    handle_error(error, f"subprocess command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Handle CLI-related errors by logging them and exiting."""
    exit_code = kwargs.pop('exit_code', 1)

    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
