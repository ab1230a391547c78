"""Request handlers for the generate and patch operations."""

from .generate import GenerateHandler, GenerateResponse
from .patch import PatchHandler, PatchResponse

__all__ = ["GenerateHandler", "GenerateResponse", "PatchHandler", "PatchResponse"]
