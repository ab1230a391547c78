"""Component source generation."""

from .generator import CodeGenerator, GeneratedCode
from .emit import escape_attr, escape_text
from .tailwind import to_classes

__all__ = ["CodeGenerator", "GeneratedCode", "escape_attr", "escape_text", "to_classes"]
