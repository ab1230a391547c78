"""Request validation with strong typing."""

from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure, Result, Success

# Validation limits
MAX_MARKUP_LENGTH = 512 * 1024
COMPONENT_NAME_PATTERN = r"^[A-Z][A-Za-z0-9_]*$"
MAX_COMPONENT_NAME_LENGTH = 64
MAX_PATCH_OPS = 100
JSX_ATTRIBUTE_PATTERN = r"^[A-Za-z_][A-Za-z0-9_\-]*(?::[A-Za-z_][A-Za-z0-9_\-]*)?$"

M = TypeVar("M", bound=BaseModel)


class ValidationError(Exception):
    """Validation failed."""

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    details: tuple[str, ...] = ()

    def to_error(self) -> ValidationError:
        return ValidationError(self.message, list(self.details))


class RequestValidator(BaseModel):
    """Base validator with strict configuration."""

    model_config = ConfigDict(
        strict=True, validate_assignment=True, extra="forbid", frozen=True  # Immutable by default
    )


class GenerateRequest(RequestValidator):
    """Validated generate request."""

    markup: str = Field(min_length=1, max_length=MAX_MARKUP_LENGTH)
    name: str = Field(
        default="GeneratedComponent",
        min_length=1,
        max_length=MAX_COMPONENT_NAME_LENGTH,
        pattern=COMPONENT_NAME_PATTERN,
    )

    @field_validator("markup")
    @classmethod
    def validate_markup(cls, v: str) -> str:
        """Ensure markup is non-empty after stripping."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Markup cannot be empty")
        return stripped


def validate_markup_size(markup: str, max_size: int) -> None:
    """
    Validate encoded markup size.

    Raises:
        ValidationError: If size exceeds limit
    """
    size = len(markup.encode("utf-8"))
    if size > max_size:
        raise ValidationError(f"Markup size {size} bytes exceeds maximum {max_size} bytes")


def format_pydantic_errors(error: PydanticValidationError) -> tuple[str, ...]:
    """Flatten pydantic errors into "loc: message" strings."""
    details = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "<root>"
        details.append(f"{loc}: {err.get('msg', 'invalid')}")
    return tuple(details)


def validate_request(
    model: type[M], payload: Any, context: dict[str, Any] | None = None
) -> Result[M, ValidationResult]:
    """
    Validate a raw request payload against a model (Result pattern).

    Args:
        model: Pydantic model class describing the request
        payload: Decoded request body
        context: Pydantic validation context (e.g. {"max_ops": 50})

    Returns:
        Success(model instance) or Failure(ValidationResult)
    """
    if not isinstance(payload, dict):
        return Failure(
            ValidationResult(
                f"Invalid {model.__name__}: expected object, got {type(payload).__name__}"
            )
        )
    try:
        return Success(model.model_validate(payload, context=context))
    except PydanticValidationError as e:
        return Failure(
            ValidationResult(f"Invalid {model.__name__}", format_pydantic_errors(e))
        )
