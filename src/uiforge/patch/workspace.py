"""File-backed patching: ops are routed to files under a project root."""

from pathlib import Path

from pydantic import BaseModel, Field

from ..core import get_logger
from ..core.errors import PatchError
from ..monitoring import metrics_collector
from .engine import PatchEngine
from .models import PatchRequest

logger = get_logger(__name__)


class WorkspacePatchResult(BaseModel):
    """Outcome of patching files on disk."""

    success: bool
    diffs: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    changed_files: list[str] = Field(default_factory=list)
    dry_run: bool = False


class PatchWorkspace:
    """
    Applies patch requests to files under a root directory.

    Op file references are resolved inside the root ("/src/x.tsx" and
    "src/x.tsx" are the same file). Each file is read once, edited in
    request order, and written back once at the end.
    """

    def __init__(self, root: str | Path, engine: PatchEngine | None = None) -> None:
        self.root = Path(root).resolve()
        self.engine = engine or PatchEngine()

    def resolve(self, file: str) -> Path:
        """
        Map an op file reference to a path inside the root.

        Raises:
            PatchError: If the path escapes the root or does not exist
        """
        try:
            path = (self.root / file.lstrip("/\\")).resolve()
        except (OSError, ValueError) as e:
            raise PatchError(f"invalid path: {file}") from e
        if not path.is_relative_to(self.root):
            raise PatchError(f"path escapes workspace root: {file}")
        if not path.is_file():
            raise PatchError(f"file not found: {file}")
        return path

    @staticmethod
    def _read(path: Path, file: str) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PatchError(f"cannot read {file}: {e}") from e

    def apply(self, request: PatchRequest, dry_run: bool = False) -> WorkspacePatchResult:
        diffs: list[str] = []
        errors: list[str] = []
        originals: dict[Path, str] = {}
        contents: dict[Path, str] = {}

        for index, op in enumerate(request.ops):
            try:
                path = self.resolve(op.file)
                if path not in contents:
                    originals[path] = contents[path] = self._read(path, op.file)
                contents[path], diff = self.engine.apply_op(contents[path], op)
            except PatchError as e:
                errors.append(f"{op.file}: {op.op} - {e}")
                metrics_collector.record_patch_op(op.op, "error")
                logger.warning("patch_op_failed", index=index, op=op.op, file=op.file, error=str(e))
                continue
            diffs.append(diff)
            metrics_collector.record_patch_op(op.op, "success")

        changed = [path for path, text in contents.items() if text != originals[path]]
        if not dry_run:
            for path in changed:
                path.write_text(contents[path], encoding="utf-8")
                logger.info("file_written", path=str(path))

        logger.info(
            "workspace_patch_applied",
            ops=len(request.ops),
            failed=len(errors),
            changed=len(changed),
            dry_run=dry_run,
        )
        return WorkspacePatchResult(
            success=not errors,
            diffs=diffs,
            errors=errors,
            changed_files=[str(path.relative_to(self.root)) for path in changed],
            dry_run=dry_run,
        )
