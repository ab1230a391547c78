"""Component palette."""

from .registry import Palette, PaletteEntry, default_palette

__all__ = ["Palette", "PaletteEntry", "default_palette"]
