"""Tailwind class derivation from semantic layout and style values."""

import math

from ..agents.models import Layout, Style

RADIUS_CLASSES = {
    2: "rounded-sm",
    4: "rounded",
    6: "rounded-md",
    8: "rounded-lg",
    12: "rounded-xl",
    16: "rounded-2xl",
    24: "rounded-3xl",
}

SHADOW_CLASSES = {"sm": "shadow-sm", "md": "shadow-md", "lg": "shadow-lg"}

ALIGN_CLASSES = {
    "start": "items-start",
    "center": "items-center",
    "end": "items-end",
    "between": "items-stretch",
    "around": "items-center",
}

JUSTIFY_CLASSES = {
    "start": "justify-start",
    "center": "justify-center",
    "end": "justify-end",
    "between": "justify-between",
    "around": "justify-around",
}


def _spacing(pixels: float) -> int:
    """Pixels to the Tailwind spacing scale (4px steps, half rounds up)."""
    return int(math.floor(pixels / 4 + 0.5))


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _arbitrary(value: str) -> str:
    # Arbitrary values cannot hold spaces.
    return value.strip().replace(" ", "_")


def _color(prefix: str, value: str) -> str:
    value = value.strip()
    if value.startswith("#") or "(" in value:
        return f"{prefix}-[{_arbitrary(value)}]"
    return f"{prefix}-{_arbitrary(value)}"


def layout_classes(layout: Layout | None) -> list[str]:
    if layout is None:
        return []

    classes: list[str] = []
    if layout.display == "flex":
        classes.append("flex")
        if layout.direction == "column":
            classes.append("flex-col")
        elif layout.direction == "row":
            classes.append("flex-row")
    elif layout.display == "grid":
        classes.append("grid")
        if layout.columns:
            classes.append(f"grid-cols-{layout.columns}")
    elif layout.display == "block":
        classes.append("block")

    if layout.gap:
        classes.append(f"gap-{_spacing(layout.gap)}")
    if layout.padding:
        classes.append(f"p-{_spacing(layout.padding)}")
    if layout.align:
        classes.append(ALIGN_CLASSES[layout.align])
    if layout.justify:
        classes.append(JUSTIFY_CLASSES[layout.justify])
    return classes


def style_classes(style: Style | None) -> list[str]:
    if style is None:
        return []

    classes: list[str] = []
    if style.bg:
        classes.append(_color("bg", style.bg))
    if style.color:
        classes.append(_color("text", style.color))
    if style.radius:
        classes.append(RADIUS_CLASSES.get(style.radius, f"rounded-[{_number(style.radius)}px]"))
    if style.shadow:
        classes.append(SHADOW_CLASSES[style.shadow])
    if style.border:
        classes.append("border")
        if isinstance(style.border, str) and "solid" in style.border:
            classes.append("border-solid")
    return classes


def to_classes(layout: Layout | None = None, style: Style | None = None) -> str:
    """Joined class string for a layout/style pair."""
    return join_classes(*layout_classes(layout), *style_classes(style))


def join_classes(*parts: str | None) -> str:
    """Join class strings, dropping empties and repeated tokens (first wins)."""
    seen: dict[str, None] = {}
    for part in parts:
        for token in (part or "").split():
            seen.setdefault(token, None)
    return " ".join(seen)
