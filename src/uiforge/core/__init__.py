"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
    UIForgeError,
    ParseError,
    UnresolvedComponentKey,
    OracleUnavailable,
    PatchError,
    PatchTargetNotFound,
    UnsupportedClassValue,
)
from .validate import (
    ValidationError,
    ValidationResult,
    GenerateRequest,
    validate_markup_size,
    validate_request,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import extract_json, safe_json_dumps, JSONParseError, validate_json_depth
from .tracing import trace_operation


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "UIForgeError",
    "ParseError",
    "UnresolvedComponentKey",
    "OracleUnavailable",
    "PatchError",
    "PatchTargetNotFound",
    "UnsupportedClassValue",
    # Validation
    "ValidationError",
    "ValidationResult",
    "GenerateRequest",
    "validate_markup_size",
    "validate_request",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    "trace_operation",
    # JSON
    "extract_json",
    "safe_json_dumps",
    "JSONParseError",
    "validate_json_depth",
    # DI
    "create_container",
]
