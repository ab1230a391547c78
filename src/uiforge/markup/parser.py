"""Markup Parser - sanitized markup text to an ordered attribute tree."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Literal, Mapping
import xml.etree.ElementTree as ET

from ..core import get_logger
from ..core.errors import ParseError
from .sanitizer import DEFAULT_MAX_DEPTH, local_name, sanitize_markup

logger = get_logger(__name__)

_EMPTY_ATTRIBUTES: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True)
class MarkupNode:
    """One element or text run of the parsed markup, children in document order."""

    type: Literal["element", "text"]
    name: str = ""
    attributes: Mapping[str, str] = field(default_factory=lambda: _EMPTY_ATTRIBUTES)
    children: tuple["MarkupNode", ...] = ()
    value: str = ""

    @property
    def is_element(self) -> bool:
        return self.type == "element"

    def elements(self) -> Iterator["MarkupNode"]:
        """Direct element children."""
        return (child for child in self.children if child.is_element)

    def descendants(self) -> Iterator["MarkupNode"]:
        """All descendant elements, depth-first pre-order (self excluded)."""
        for child in self.elements():
            yield child
            yield from child.descendants()

    def direct_text(self) -> str | None:
        """Content of the first direct text child, if any."""
        for child in self.children:
            if child.type == "text":
                return child.value
        return None

    def text_content(self) -> str:
        """Concatenated descendant text, whitespace-normalized."""
        return " ".join(self._text_runs()).strip()

    def _text_runs(self) -> Iterator[str]:
        for child in self.children:
            if child.type == "text":
                yield from child.value.split()
            else:
                yield from child._text_runs()


def _text_node(value: str | None) -> MarkupNode | None:
    if value is None or not value.strip():
        return None
    return MarkupNode(type="text", value=value)


class MarkupParser:
    """Builds a MarkupNode tree from sanitized markup text."""

    def parse(self, markup: str) -> MarkupNode:
        """
        Parse markup text.

        Raises:
            ParseError: If the text is not well-formed XML
        """
        if not markup or not markup.strip():
            raise ParseError("Empty markup")
        try:
            root = ET.fromstring(markup.strip())
        except ET.ParseError as e:
            logger.warning("markup_syntax_error", error=str(e))
            raise ParseError(f"Invalid markup: {e}") from e
        return self._convert(root)

    def _convert(self, element: ET.Element) -> MarkupNode:
        children: list[MarkupNode] = []

        leading = _text_node(element.text)
        if leading:
            children.append(leading)

        for child in element:
            if isinstance(child.tag, str):
                children.append(self._convert(child))
            tail = _text_node(child.tail)
            if tail:
                children.append(tail)

        return MarkupNode(
            type="element",
            name=local_name(element.tag),
            attributes=MappingProxyType({local_name(k): v for k, v in element.attrib.items()}),
            children=tuple(children),
        )


def parse_markup(markup: str) -> MarkupNode:
    """Parse sanitized markup text into an attribute tree."""
    return MarkupParser().parse(markup)


def load_markup(markup: str, max_depth: int = DEFAULT_MAX_DEPTH) -> MarkupNode:
    """Sanitize then parse raw markup."""
    return parse_markup(sanitize_markup(markup, max_depth=max_depth))
