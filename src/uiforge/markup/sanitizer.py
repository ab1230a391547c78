"""Markup Sanitizer - allow-list filtering of SVG before parsing."""

import re
import xml.etree.ElementTree as ET

import bleach

from ..core import get_logger
from ..core.errors import ParseError

logger = get_logger(__name__)


ALLOWED_TAGS = frozenset(
    {
        "svg", "g", "path", "rect", "circle", "ellipse", "line",
        "polyline", "polygon", "text", "tspan", "image",
    }
)

ALLOWED_ATTRIBUTES = frozenset(
    {
        "viewBox", "width", "height", "x", "y", "x1", "y1", "x2", "y2",
        "cx", "cy", "r", "rx", "ry", "d", "points", "fill", "stroke",
        "stroke-width", "opacity", "font-family", "font-size", "font-weight",
        "text-anchor", "dominant-baseline", "id", "href",
    }
)

# Presence of any of these fails the whole document.
FORBIDDEN_TAGS = frozenset({"script", "foreignObject", "iframe", "object", "embed"})

# Never rendered in place; removed together with their content. Any other
# element outside ALLOWED_TAGS is unwrapped and its allowed content kept.
NON_RENDERING_TAGS = frozenset(
    {
        "defs", "mask", "clipPath", "pattern", "marker", "linearGradient",
        "radialGradient", "filter", "title", "desc", "metadata", "style",
    }
)

# bleach keeps relative URLs only when http(s) is allowed; the href policy itself
# is enforced by _allow_attribute.
URL_PROTOCOLS = frozenset({"http", "https", "data"})

DEFAULT_MAX_DEPTH = 64

_DECLARATION_RE = re.compile(r"<!\s*(DOCTYPE|ENTITY)", re.IGNORECASE)
_SCRIPT_SCHEME_RE = re.compile(r"(java|vb)script\s*:", re.IGNORECASE)
_SCHEME_RE = re.compile(r"^\s*[a-zA-Z][a-zA-Z0-9+.\-]*:")

# html5lib lowercases attribute names; restore the SVG spelling afterwards.
_ATTRIBUTE_CASE = {name.lower(): name for name in ALLOWED_ATTRIBUTES}

# bleach parses an HTML fragment; the wrapper keeps the content in SVG parsing mode.
_WRAPPER_OPEN = "<svg>"
_WRAPPER_CLOSE = "</svg>"


def local_name(tag: str) -> str:
    """Strip an ElementTree namespace ("{uri}rect" -> "rect")."""
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


def _is_safe_href(value: str) -> bool:
    """Relative references and inline raster data only."""
    stripped = value.strip()
    if stripped.lower().startswith("data:image/"):
        return True
    return not _SCHEME_RE.match(stripped) and not stripped.startswith("//")


def _allow_attribute(tag: str, name: str, value: str) -> bool:
    canonical = _ATTRIBUTE_CASE.get(name.lower())
    if canonical is None:
        logger.debug("attribute_dropped", element=tag, attribute=name)
        return False
    if canonical == "href" and (tag != "image" or not _is_safe_href(value)):
        logger.debug("attribute_dropped", element=tag, attribute=name)
        return False
    return True


class MarkupSanitizer:
    """
    Allow-list sanitizer for vector markup.

    Unsafe content (declarations, script-capable elements, event handler
    attributes, script URLs) rejects the document. Non-rendering containers
    are removed with their content. Other elements outside the allow-list are
    unwrapped by bleach, keeping their allowed descendants in place;
    attributes outside the allow-list are dropped.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.max_depth = max_depth

    def sanitize(self, markup: str) -> str:
        """
        Sanitize markup text.

        Args:
            markup: Raw SVG markup

        Returns:
            Sanitized markup text (namespaces removed, allow-listed content only)

        Raises:
            ParseError: If the markup is malformed or unsafe
        """
        if not markup or not markup.strip():
            raise ParseError("Empty markup")

        if _DECLARATION_RE.search(markup):
            logger.warning("unsafe_markup", reason="declaration")
            raise ParseError("Unsafe markup: DOCTYPE/ENTITY declarations are not allowed")

        try:
            root = ET.fromstring(markup.strip())
        except ET.ParseError as e:
            logger.warning("markup_syntax_error", error=str(e))
            raise ParseError(f"Invalid markup: {e}") from e

        self._reject_unsafe(root)

        name = local_name(root.tag)
        if name not in ALLOWED_TAGS:
            raise ParseError(f"Unsupported root element: <{name}>")

        normalized = self._normalize(root, depth=1)
        # Explicit end tags: HTML parsing ignores "/>" on unknown elements.
        serialized = ET.tostring(normalized, encoding="unicode", short_empty_elements=False)

        cleaned = bleach.clean(
            _WRAPPER_OPEN + serialized + _WRAPPER_CLOSE,
            tags=ALLOWED_TAGS,
            attributes=_allow_attribute,
            protocols=URL_PROTOCOLS,
            strip=True,
            strip_comments=True,
        )

        try:
            wrapper = ET.fromstring(cleaned)
        except ET.ParseError as e:
            logger.error("sanitized_markup_unparseable", error=str(e))
            raise ParseError(f"Invalid markup after sanitizing: {e}") from e

        clean_root = wrapper[0]
        self._restore_attribute_case(clean_root)
        return ET.tostring(clean_root, encoding="unicode")

    def _reject_unsafe(self, root: ET.Element) -> None:
        for element in root.iter():
            if not isinstance(element.tag, str):
                continue
            name = local_name(element.tag)
            if name in FORBIDDEN_TAGS:
                logger.warning("unsafe_markup", reason="element", element=name)
                raise ParseError(f"Unsafe markup: <{name}> is not allowed")
            for attr, value in element.attrib.items():
                attr_name = local_name(attr)
                if attr_name.lower().startswith("on"):
                    logger.warning("unsafe_markup", reason="event_handler", attribute=attr_name)
                    raise ParseError(f"Unsafe markup: event handler attribute '{attr_name}'")
                if _SCRIPT_SCHEME_RE.search(value):
                    logger.warning("unsafe_markup", reason="script_url", attribute=attr_name)
                    raise ParseError(f"Unsafe markup: script URL in '{attr_name}'")

    def _normalize(self, element: ET.Element, depth: int) -> ET.Element:
        """Copy with local names, without non-rendering subtrees; enforces depth."""
        if depth > self.max_depth:
            raise ParseError(f"Markup nesting depth exceeds maximum {self.max_depth}")

        name = local_name(element.tag)
        copy = ET.Element(name, {local_name(k): v for k, v in element.attrib.items()})
        copy.text = element.text

        for child in element:
            child_name = local_name(child.tag) if isinstance(child.tag, str) else ""
            if child_name and child_name not in NON_RENDERING_TAGS:
                if child_name not in ALLOWED_TAGS:
                    logger.debug("element_unwrapped", element=child_name)
                normalized = self._normalize(child, depth + 1)
                normalized.tail = child.tail
                copy.append(normalized)
                continue

            logger.debug("element_dropped", element=child_name or "<non-element>")
            # Keep the dropped element's tail text in document flow.
            if child.tail:
                if len(copy):
                    copy[-1].tail = (copy[-1].tail or "") + child.tail
                else:
                    copy.text = (copy.text or "") + child.tail

        return copy

    def _restore_attribute_case(self, root: ET.Element) -> None:
        for element in root.iter():
            items = [(_ATTRIBUTE_CASE.get(k.lower(), k), v) for k, v in element.attrib.items()]
            element.attrib.clear()
            element.attrib.update(items)


def sanitize_markup(markup: str, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """Convenience function to sanitize markup text."""
    return MarkupSanitizer(max_depth=max_depth).sanitize(markup)
