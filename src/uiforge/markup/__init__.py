"""Markup sanitizing, parsing and feature extraction."""

from .sanitizer import MarkupSanitizer, sanitize_markup, ALLOWED_TAGS, ALLOWED_ATTRIBUTES
from .parser import MarkupNode, MarkupParser, parse_markup, load_markup
from .features import Bounds, Feature, FeatureStream, extract_features, parse_number

__all__ = [
    "MarkupSanitizer",
    "sanitize_markup",
    "ALLOWED_TAGS",
    "ALLOWED_ATTRIBUTES",
    "MarkupNode",
    "MarkupParser",
    "parse_markup",
    "load_markup",
    "Bounds",
    "Feature",
    "FeatureStream",
    "extract_features",
    "parse_number",
]
