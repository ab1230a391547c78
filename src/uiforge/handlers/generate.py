"""Generate Handler."""

import time
from typing import Any

from pydantic import BaseModel, Field
from returns.pipeline import is_successful

from ..agents.ui_generator import UIGenerator
from ..core import LogContext, get_logger, trace_operation
from ..core.config import Settings
from ..core.errors import ParseError
from ..core.validate import GenerateRequest, ValidationError, validate_markup_size, validate_request
from ..monitoring import metrics_collector

logger = get_logger(__name__)


class GenerateResponse(BaseModel):
    """Generate boundary response; failures carry a reason and no code."""

    success: bool
    tree: dict[str, Any] | None = None
    plan: dict[str, Any] | None = None
    code: str | None = None
    file_path: str | None = None
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None
    details: list[str] = Field(default_factory=list)


class GenerateHandler:
    """Handles markup to component generation requests."""

    def __init__(self, ui_generator: UIGenerator, settings: Settings) -> None:
        self.ui_generator = ui_generator
        self.settings = settings

    def generate(self, payload: Any) -> GenerateResponse:
        """Validate, run the pipeline and shape the response."""
        start_time = time.perf_counter()

        with LogContext(request="generate"):
            result = validate_request(GenerateRequest, payload)
            if not is_successful(result):
                failure = result.failure()
                self._record("validation_error", start_time)
                logger.warning("validation", error=failure.message, details=list(failure.details))
                return GenerateResponse(success=False, error=failure.message, details=list(failure.details))

            request = result.unwrap()
            try:
                validate_markup_size(request.markup, self.settings.max_markup_size)
            except ValidationError as e:
                self._record("validation_error", start_time)
                logger.warning("validation", error=str(e))
                return GenerateResponse(success=False, error=str(e))

            try:
                with LogContext(component=request.name), trace_operation(
                    "generate", component=request.name
                ):
                    generation = self.ui_generator.generate(request.markup, request.name)
            except ParseError as e:
                self._record("parse_error", start_time)
                logger.warning("parse", error=str(e))
                return GenerateResponse(success=False, error=str(e))
            except Exception as e:
                self._record("error", start_time)
                logger.error("generation", error=str(e), exc_info=True)
                raise

            self._record("success", start_time)
            return GenerateResponse(
                success=True,
                tree=generation.tree.model_dump(mode="json", exclude_none=True),
                plan=(
                    generation.plan.model_dump(mode="json", by_alias=True, exclude_none=True)
                    if generation.plan is not None
                    else None
                ),
                code=generation.code,
                file_path=generation.file_path,
                warnings=generation.warnings,
            )

    @staticmethod
    def _record(status: str, start_time: float) -> None:
        metrics_collector.record_generate(status, time.perf_counter() - start_time)
