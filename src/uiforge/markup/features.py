"""
Feature Extraction
Flattens the attribute tree into typed, per-element feature records.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from .parser import MarkupNode

_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value: str | None) -> float | None:
    """
    Parse the leading numeric prefix of an attribute value.

    "24" -> 24.0, "24px" -> 24.0, "  .5em" -> 0.5, "auto" -> None
    """
    if value is None:
        return None
    match = _NUMBER_PREFIX.match(value)
    return float(match.group(1)) if match else None


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box taken from x/y/width/height attributes."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Feature:
    """One markup element, flattened."""

    type: str
    attributes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    text: str | None = None
    bounds: Bounds | None = None

    def number(self, name: str) -> float | None:
        """Numeric value of an attribute, if it has a numeric prefix."""
        return parse_number(self.attributes.get(name))

    def to_dict(self) -> dict[str, Any]:
        """Plain representation for oracle payloads."""
        data: dict[str, Any] = {"type": self.type, "attributes": dict(self.attributes)}
        if self.text is not None:
            data["text"] = self.text
        if self.bounds is not None:
            data["bounds"] = {
                "x": self.bounds.x,
                "y": self.bounds.y,
                "width": self.bounds.width,
                "height": self.bounds.height,
            }
        return data


def _bounds(attributes: Mapping[str, str]) -> Bounds | None:
    width = parse_number(attributes.get("width")) or 0.0
    height = parse_number(attributes.get("height")) or 0.0
    if width <= 0 or height <= 0:
        return None
    return Bounds(
        x=parse_number(attributes.get("x")) or 0.0,
        y=parse_number(attributes.get("y")) or 0.0,
        width=width,
        height=height,
    )


def to_feature(node: MarkupNode) -> Feature:
    """Build the feature record for a single element node."""
    return Feature(
        type=node.name,
        attributes=node.attributes,
        text=node.direct_text(),
        bounds=_bounds(node.attributes),
    )


class FeatureStream:
    """
    Lazy, restartable sequence of features in depth-first pre-order.

    Each iteration walks the tree afresh; nothing is cached.
    """

    def __init__(self, root: MarkupNode) -> None:
        self.root = root

    def __iter__(self) -> Iterator[Feature]:
        return self._walk(self.root)

    def _walk(self, node: MarkupNode) -> Iterator[Feature]:
        if node.is_element and node.name:
            yield to_feature(node)
        for child in node.elements():
            yield from self._walk(child)

    def to_list(self) -> list[Feature]:
        return list(self)


def extract_features(root: MarkupNode) -> FeatureStream:
    """Feature sequence for an attribute tree."""
    return FeatureStream(root)
