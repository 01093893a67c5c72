"""
Validation functions for exporter settings.

Every validator returns the normalised value on success and raises
ValidationError naming the offending field otherwise.
"""

from typing import Any, List, Optional, Tuple

from .exceptions import ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is a positive integer.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a positive float.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_enum_choice(
    value: Any,
    valid_choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Returns:
        The matching choice as spelled in valid_choices.

    Raises:
        ValidationError: If value is not one of the choices
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {type(value).__name__}",
            field_name=field_name,
            value=value
        )
    for choice in valid_choices:
        if value == choice or (not case_sensitive and value.lower() == choice.lower()):
            return choice
    raise ValidationError(
        f"{field_name} must be one of {valid_choices}, got '{value}'",
        field_name=field_name,
        value=value
    )


def validate_non_empty_string(value: Any, field_name: str = "value") -> str:
    """Validate that a value is a non-blank string and return it stripped."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    return value.strip()


def validate_listen_address(value: Any, field_name: str = "listen_address") -> Tuple[str, int]:
    """
    Split a ``host:port`` listen address.

    An empty host (``":9010"``) means all interfaces. IPv6 hosts may be
    written in brackets (``"[::1]:9010"``).

    Returns:
        Tuple of (host, port).

    Raises:
        ValidationError: If the address has no port or the port is invalid
    """
    address = validate_non_empty_string(value, field_name=field_name)
    host, sep, port_str = address.rpartition(":")
    if not sep:
        raise ValidationError(
            f"{field_name} must have the form 'host:port', got '{address}'",
            field_name=field_name,
            value=value
        )
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    port = validate_positive_integer(
        port_str, min_value=0, max_value=65535, field_name=f"{field_name} port"
    )
    return host, port


def validate_metrics_path(value: Any, field_name: str = "metrics_path") -> str:
    """
    Validate the HTTP path the metrics are served under.

    Raises:
        ValidationError: If the path is not absolute or is the landing page
    """
    path = validate_non_empty_string(value, field_name=field_name)
    if not path.startswith("/") or path == "/":
        raise ValidationError(
            f"{field_name} must start with '/' and must not be '/', got '{path}'",
            field_name=field_name,
            value=value
        )
    return path
