"""JSX element model and injection-safe serialization."""

import re
from dataclasses import dataclass, field
from typing import Any, Union

from ..core import get_logger
from ..core.json import safe_json_dumps
from ..core.validate import JSX_ATTRIBUTE_PATTERN

logger = get_logger(__name__)

INDENT = "  "

SELF_CLOSING_TAGS = frozenset({"img", "input", "br", "hr", "Input"})

PROP_NAME_RE = re.compile(JSX_ATTRIBUTE_PATTERN)

_TEXT_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", "{": "&#123;", "}": "&#125;"}
_ATTR_ESCAPES = {"&": "&amp;", '"': "&quot;", "<": "&lt;", ">": "&gt;"}
_TEXT_RE = re.compile(r"[&<>{}]")
_ATTR_RE = re.compile(r'[&"<>]')


def escape_text(value: str) -> str:
    """Escape a string for use as a JSX text child."""
    return _TEXT_RE.sub(lambda m: _TEXT_ESCAPES[m.group(0)], value)


def escape_attr(value: str) -> str:
    """Escape a string for use inside a double-quoted JSX attribute."""
    return _ATTR_RE.sub(lambda m: _ATTR_ESCAPES[m.group(0)], value)


def is_valid_prop_name(name: str) -> bool:
    return PROP_NAME_RE.fullmatch(name) is not None


@dataclass
class Element:
    """One JSX element to serialize; props render in insertion order."""

    tag: str
    props: dict[str, Any] = field(default_factory=dict)
    children: list[Union["Element", str]] = field(default_factory=list)


def render_prop(name: str, value: Any, warnings: list[str]) -> str | None:
    """
    Serialize one prop.

    Strings become name="..."; anything else becomes name={<json>}.
    Invalid names are dropped with a warning.
    """
    if not is_valid_prop_name(name):
        message = f"Dropped invalid prop name: {name!r}"
        logger.warning("prop_dropped", prop=name)
        warnings.append(message)
        return None
    if isinstance(value, str):
        return f'{name}="{escape_attr(value)}"'
    try:
        return f"{name}={{{safe_json_dumps(value)}}}"
    except (TypeError, ValueError):
        logger.warning("prop_dropped", prop=name, reason="unserializable")
        warnings.append(f"Dropped unserializable prop: {name!r}")
        return None


def _open_tag(element: Element, warnings: list[str]) -> str:
    parts = [element.tag]
    for name, value in element.props.items():
        if name == "className" and not value:
            continue
        rendered = render_prop(name, value, warnings)
        if rendered is not None:
            parts.append(rendered)
    return " ".join(parts)


def render_element(element: Element, depth: int, warnings: list[str]) -> list[str]:
    """Serialize an element tree to indented source lines."""
    pad = INDENT * depth
    open_tag = _open_tag(element, warnings)

    if not element.children:
        if element.tag in SELF_CLOSING_TAGS:
            return [f"{pad}<{open_tag} />"]
        return [f"{pad}<{open_tag}></{element.tag}>"]

    if len(element.children) == 1 and isinstance(element.children[0], str):
        return [f"{pad}<{open_tag}>{escape_text(element.children[0])}</{element.tag}>"]

    lines = [f"{pad}<{open_tag}>"]
    for child in element.children:
        if isinstance(child, str):
            lines.append(f"{pad}{INDENT}{escape_text(child)}")
        else:
            lines.extend(render_element(child, depth + 1, warnings))
    lines.append(f"{pad}</{element.tag}>")
    return lines


def iter_elements(element: Element):
    yield element
    for child in element.children:
        if isinstance(child, Element):
            yield from iter_elements(child)
