"""
Structural view of TSX source
JSX elements from a tree-sitter parse, plus the first-match locator policy.
"""

from dataclasses import dataclass, field

from tree_sitter import Node
from tree_sitter_language_pack import get_parser

from ..core import get_logger
from ..core.errors import PatchError

logger = get_logger(__name__)

ELEMENT_TYPES = frozenset({"jsx_element", "jsx_self_closing_element"})

FIRST_MATCH = "first_match"


@dataclass(eq=False)
class JsxElement:
    """A JSX element and its position among the other elements."""

    node: Node
    opening: Node
    parent: "JsxElement | None" = None
    children: list["JsxElement"] = field(default_factory=list)

    @property
    def self_closing(self) -> bool:
        return self.node.type == "jsx_self_closing_element"


@dataclass(frozen=True)
class JsxAttribute:
    name: str
    node: Node
    value: Node | None


class SourceView:
    """
    Ephemeral structural view of one version of a source text.

    Offsets are byte offsets into the UTF-8 encoding. Build a new view
    after every edit.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.data = source.encode("utf-8")
        self.tree = get_parser("tsx").parse(self.data)
        self.elements: list[JsxElement] = []
        self._collect(self.tree.root_node, None)

        if self.tree.root_node.has_error:
            logger.debug("source_syntax_errors", elements=len(self.elements))

    def _collect(self, node: Node, parent: JsxElement | None) -> None:
        if node.type in ELEMENT_TYPES:
            opening = node.child_by_field_name("open_tag") if node.type == "jsx_element" else node
            element = JsxElement(node=node, opening=opening or node, parent=parent)
            self.elements.append(element)
            if parent is not None:
                parent.children.append(element)
            parent = element
        for child in node.children:
            self._collect(child, parent)

    def text(self, node: Node) -> bytes:
        return self.data[node.start_byte : node.end_byte]

    def tag_name(self, element: JsxElement) -> str:
        name = element.opening.child_by_field_name("name")
        return self.text(name).decode("utf-8") if name is not None else ""

    def attributes(self, element: JsxElement) -> list[JsxAttribute]:
        result = []
        for child in element.opening.named_children:
            if child.type != "jsx_attribute":
                continue
            parts = child.named_children
            if not parts:
                continue
            value = parts[-1] if len(parts) > 1 else None
            result.append(JsxAttribute(self.text(parts[0]).decode("utf-8"), child, value))
        return result

    def attribute(self, element: JsxElement, name: str) -> JsxAttribute | None:
        for attr in self.attributes(element):
            if attr.name == name:
                return attr
        return None

    def attribute_insert_point(self, element: JsxElement) -> int:
        """Byte offset just after the last attribute (or the tag name)."""
        named = element.opening.named_children
        if not named:
            raise PatchError("cannot add attributes to a fragment")
        return named[-1].end_byte

    def line_indent(self, node: Node) -> str:
        line_start = self.data.rfind(b"\n", 0, node.start_byte) + 1
        prefix = self.data[line_start : node.start_byte]
        return prefix[: len(prefix) - len(prefix.lstrip())].decode("utf-8")


def first_match(view: SourceView, locator: str) -> JsxElement | None:
    """
    Locate the target element for a literal locator substring.

    Pass 1: first element (pre-order) whose opening tag contains the locator.
    Pass 2: first element (pre-order) whose full text contains the locator
    while none of its child elements does.
    """
    needle = locator.encode("utf-8")

    for element in view.elements:
        if needle in view.text(element.opening):
            return element

    for element in view.elements:
        if needle in view.text(element.node) and not any(
            needle in view.text(child.node) for child in element.children
        ):
            return element

    return None
