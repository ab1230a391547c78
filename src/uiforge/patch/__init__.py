"""Structural patching of generated source."""

from .models import (
    AddClassOp,
    RemoveClassOp,
    ReplaceClassOp,
    SetAttributeOp,
    InsertAfterOp,
    TextEditOp,
    PatchOp,
    PatchRequest,
    PatchResult,
)
from .engine import PatchEngine
from .locator import FIRST_MATCH, SourceView, first_match
from .workspace import PatchWorkspace, WorkspacePatchResult

__all__ = [
    "AddClassOp",
    "RemoveClassOp",
    "ReplaceClassOp",
    "SetAttributeOp",
    "InsertAfterOp",
    "TextEditOp",
    "PatchOp",
    "PatchRequest",
    "PatchResult",
    "PatchEngine",
    "FIRST_MATCH",
    "SourceView",
    "first_match",
    "PatchWorkspace",
    "WorkspacePatchResult",
]
