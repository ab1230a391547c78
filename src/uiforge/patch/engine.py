"""
Patch Engine
Applies typed edit operations to generated component source.
"""

from ..core import get_logger
from ..core.errors import PatchError, PatchTargetNotFound, UnsupportedClassValue
from ..core.json import safe_json_dumps
from ..monitoring import metrics_collector
from .classes import add_class, remove_class, replace_class, split_tokens
from .locator import JsxAttribute, JsxElement, SourceView, first_match
from .models import (
    AddClassOp,
    InsertAfterOp,
    PatchOp,
    PatchRequest,
    PatchResult,
    RemoveClassOp,
    ReplaceClassOp,
    SetAttributeOp,
    TextEditOp,
)

logger = get_logger(__name__)

ClassOp = AddClassOp | RemoveClassOp | ReplaceClassOp


def _splice(data: bytes, start: int, end: int, text: str) -> str:
    return (data[:start] + text.encode("utf-8") + data[end:]).decode("utf-8")


def _class_value_span(view: SourceView, attr: JsxAttribute) -> tuple[int, int]:
    """
    Byte span of the editable class text (quotes excluded).

    Raises:
        UnsupportedClassValue: If the value is a dynamic expression
    """
    value = attr.value
    if value is not None and value.type == "jsx_expression":
        inner = value.named_children
        value = inner[0] if len(inner) == 1 else None
        if value is not None and value.type == "template_string":
            if any(child.type == "template_substitution" for child in value.named_children):
                value = None
        elif value is not None and value.type != "string":
            value = None

    if value is None or value.type not in ("string", "template_string"):
        raise UnsupportedClassValue("className is not a static string")
    return value.start_byte + 1, value.end_byte - 1


class PatchEngine:
    """Stateless; each op runs against a fresh structural view."""

    def apply(self, source: str, request: PatchRequest) -> PatchResult:
        """
        Apply ops in order; failed ops are recorded and skipped.

        Returns:
            PatchResult with one diff per applied op and one error per failed op
        """
        diffs: list[str] = []
        errors: list[str] = []
        current = source

        for index, op in enumerate(request.ops):
            try:
                current, diff = self.apply_op(current, op)
            except PatchError as e:
                errors.append(f"{op.file}: {op.op} - {e}")
                metrics_collector.record_patch_op(op.op, "error")
                logger.warning("patch_op_failed", index=index, op=op.op, file=op.file, error=str(e))
                continue
            diffs.append(diff)
            metrics_collector.record_patch_op(op.op, "success")
            logger.debug("patch_op_applied", index=index, op=op.op, file=op.file)

        logger.info("patch_applied", ops=len(request.ops), applied=len(diffs), failed=len(errors))
        return PatchResult(success=not errors, diffs=diffs, errors=errors, source=current)

    def apply_op(self, source: str, op: PatchOp) -> tuple[str, str]:
        """
        Apply one op.

        Returns:
            (new source, diff summary)

        Raises:
            PatchError: If the op cannot be applied
        """
        if isinstance(op, TextEditOp):
            return self._text_edit(source, op)

        view = SourceView(source)
        element = first_match(view, op.locator)
        if element is None:
            raise PatchTargetNotFound(op.locator)

        match op:
            case AddClassOp() | RemoveClassOp() | ReplaceClassOp():
                return self._edit_classes(view, element, op)
            case SetAttributeOp():
                return self._set_attribute(view, element, op)
            case InsertAfterOp():
                return self._insert_after(view, element, op)
        raise PatchError(f"unsupported op: {op.op}")

    def _edit_classes(self, view: SourceView, element: JsxElement, op: ClassOp) -> tuple[str, str]:
        attr = view.attribute(element, "className")
        if attr is None:
            current = ""
        else:
            start, end = _class_value_span(view, attr)
            current = view.data[start:end].decode("utf-8")

        match op:
            case AddClassOp():
                updated = add_class(current, op.class_name)
                detail = op.class_name
            case RemoveClassOp():
                updated = remove_class(current, op.class_name)
                detail = op.class_name
            case ReplaceClassOp():
                updated = replace_class(current, op.from_, op.to)
                detail = f"{op.from_} -> {op.to}"

        if attr is None:
            point = view.attribute_insert_point(element)
            source = _splice(view.data, point, point, f' className="{updated}"')
        else:
            source = _splice(view.data, start, end, updated)

        diff = f"{op.file}: {op.op} {detail} on <{view.tag_name(element)}>"
        if split_tokens(current) == split_tokens(updated):
            diff += " (unchanged)"
        return source, diff

    def _set_attribute(self, view: SourceView, element: JsxElement, op: SetAttributeOp) -> tuple[str, str]:
        literal = "{" + safe_json_dumps(op.value) + "}"
        attr = view.attribute(element, op.name)

        if attr is None:
            point = view.attribute_insert_point(element)
            source = _splice(view.data, point, point, f" {op.name}={literal}")
        elif attr.value is None:
            source = _splice(view.data, attr.node.start_byte, attr.node.end_byte, f"{op.name}={literal}")
        else:
            source = _splice(view.data, attr.value.start_byte, attr.value.end_byte, literal)

        return source, f"{op.file}: setAttribute {op.name}={literal} on <{view.tag_name(element)}>"

    def _insert_after(self, view: SourceView, element: JsxElement, op: InsertAfterOp) -> tuple[str, str]:
        end = element.node.end_byte
        source = _splice(view.data, end, end, "\n" + view.line_indent(element.node) + op.code)
        return source, f"{op.file}: insertAfter <{view.tag_name(element)}> (+{len(op.code)} chars)"

    def _text_edit(self, source: str, op: TextEditOp) -> tuple[str, str]:
        if op.find not in source:
            raise PatchTargetNotFound(op.find)
        return source.replace(op.find, op.replace, 1), f"{op.file}: textEdit {op.find!r} -> {op.replace!r}"
