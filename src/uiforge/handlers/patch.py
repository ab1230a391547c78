"""Patch Handler."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from returns.pipeline import is_successful
from returns.result import Result

from ..core import LogContext, get_logger, trace_operation
from ..core.config import Settings
from ..core.validate import ValidationResult, validate_request
from ..monitoring import metrics_collector
from ..patch import PatchEngine, PatchRequest, PatchWorkspace

logger = get_logger(__name__)


class PatchResponse(BaseModel):
    """Patch boundary response."""

    success: bool
    diffs: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    source: str | None = None
    changed_files: list[str] = Field(default_factory=list)
    validation_errors: list[str] = Field(default_factory=list)


class PatchHandler:
    """Handles patch requests against a source string or a project tree."""

    def __init__(self, engine: PatchEngine, settings: Settings) -> None:
        self.engine = engine
        self.settings = settings

    def validate(self, payload: Any) -> Result[PatchRequest, ValidationResult]:
        return validate_request(PatchRequest, payload, context={"max_ops": self.settings.max_patch_ops})

    def patch(self, payload: Any, source: str) -> PatchResponse:
        """Apply a patch request to one source text."""
        with LogContext(request="patch"):
            result = self.validate(payload)
            if not is_successful(result):
                return self._rejected(result.failure())

            request = result.unwrap()
            with trace_operation("patch", ops=len(request.ops)):
                outcome = self.engine.apply(source, request)

            metrics_collector.record_patch("success" if outcome.success else "partial")
            return PatchResponse(
                success=outcome.success,
                diffs=outcome.diffs,
                errors=outcome.errors,
                source=outcome.source,
            )

    def patch_files(self, payload: Any, root: str | Path, dry_run: bool = False) -> PatchResponse:
        """Apply a patch request to files under a project root."""
        with LogContext(request="patch", root=str(root)):
            result = self.validate(payload)
            if not is_successful(result):
                return self._rejected(result.failure())

            request = result.unwrap()
            with trace_operation("patch_files", ops=len(request.ops), dry_run=dry_run):
                outcome = PatchWorkspace(root, self.engine).apply(request, dry_run=dry_run)

            metrics_collector.record_patch("success" if outcome.success else "partial")
            return PatchResponse(
                success=outcome.success,
                diffs=outcome.diffs,
                errors=outcome.errors,
                changed_files=outcome.changed_files,
            )

    @staticmethod
    def _rejected(failure: ValidationResult) -> PatchResponse:
        metrics_collector.record_patch("validation_error")
        logger.warning("validation", error=failure.message, details=list(failure.details))
        return PatchResponse(
            success=False,
            validation_errors=[failure.message, *failure.details],
        )
