"""Standard component catalog."""

from .registry import PaletteEntry

CATALOG: tuple[PaletteEntry, ...] = (
    # Layout
    PaletteEntry(
        key="layout.card",
        tag="div",
        default_classes="rounded-2xl shadow-md p-6 bg-white",
        match_hints=("card", "container", "box", "panel"),
    ),
    PaletteEntry(
        key="layout.stack",
        tag="div",
        default_classes="flex flex-col gap-4",
        match_hints=("stack", "column", "vertical", "list"),
    ),
    PaletteEntry(
        key="layout.row",
        tag="div",
        default_classes="flex flex-row gap-4",
        match_hints=("row", "horizontal", "inline"),
    ),
    PaletteEntry(
        key="layout.grid",
        tag="div",
        default_classes="grid gap-4",
        match_hints=("grid", "table", "matrix"),
    ),
    # Typography
    PaletteEntry(
        key="typography.h1",
        tag="h1",
        default_classes="text-2xl font-semibold",
        match_hints=("title", "heading", "header", "main"),
    ),
    PaletteEntry(
        key="typography.h2",
        tag="h2",
        default_classes="text-xl font-semibold",
        match_hints=("subtitle", "section", "secondary"),
    ),
    PaletteEntry(
        key="typography.h3",
        tag="h3",
        default_classes="text-lg font-medium",
        match_hints=("subheading", "small-title"),
    ),
    PaletteEntry(
        key="typography.p",
        tag="p",
        default_classes="text-sm text-gray-600",
        match_hints=("text", "description", "content", "body"),
    ),
    PaletteEntry(
        key="typography.span",
        tag="span",
        default_classes="text-sm",
        match_hints=("inline", "label", "small-text"),
    ),
    # Forms
    PaletteEntry(
        key="form.input",
        tag="input",
        default_classes="border rounded-md px-3 py-2 w-full",
        default_props={"type": "text"},
        match_hints=("input", "field", "text-input", "search"),
    ),
    PaletteEntry(
        key="form.textarea",
        tag="textarea",
        default_classes="border rounded-md px-3 py-2 w-full",
        match_hints=("textarea", "multiline", "description", "comment"),
    ),
    PaletteEntry(
        key="form.select",
        tag="select",
        default_classes="border rounded-md px-3 py-2 w-full",
        match_hints=("select", "dropdown", "choice", "option"),
    ),
    PaletteEntry(
        key="form.option",
        tag="option",
        match_hints=("option", "choice"),
    ),
    PaletteEntry(
        key="form.checkbox",
        tag="input",
        default_classes="h-4 w-4 rounded border",
        default_props={"type": "checkbox"},
        match_hints=("checkbox", "toggle", "switch", "check"),
    ),
    PaletteEntry(
        key="form.button",
        tag="button",
        default_classes="bg-black text-white rounded-md px-4 py-2",
        match_hints=("button", "submit", "action", "click", "primary"),
    ),
    PaletteEntry(
        key="form.button.secondary",
        tag="button",
        default_classes="bg-gray-200 text-gray-800 rounded-md px-4 py-2",
        match_hints=("secondary", "cancel", "back", "outline"),
    ),
    # Lists
    PaletteEntry(
        key="list.ul",
        tag="ul",
        default_classes="divide-y",
        match_hints=("list", "items", "menu", "navigation"),
    ),
    PaletteEntry(
        key="list.li",
        tag="li",
        default_classes="px-4 py-2",
        match_hints=("item", "entry", "row"),
    ),
    # Media / icons
    PaletteEntry(
        key="media.img",
        tag="img",
        default_classes="rounded-md",
        match_hints=("image", "photo", "picture", "avatar"),
    ),
    PaletteEntry(
        key="icon.glyph",
        tag="span",
        default_classes="inline-block h-5 w-5",
        default_props={"aria-hidden": True},
        match_hints=("icon", "glyph", "symbol"),
    ),
    PaletteEntry(
        key="icon.button",
        tag="button",
        default_classes="p-2 rounded-md hover:bg-gray-100",
        match_hints=("icon", "symbol", "emoji", "glyph"),
    ),
    # shadcn/ui
    PaletteEntry(
        key="ui.button",
        lib="shadcn",
        tag="Button",
        import_spec='import { Button } from "@/components/ui/button";',
        match_hints=("button", "primary", "rounded"),
    ),
    PaletteEntry(
        key="ui.input",
        lib="shadcn",
        tag="Input",
        import_spec='import { Input } from "@/components/ui/input";',
        match_hints=("input", "field"),
    ),
    PaletteEntry(
        key="ui.card",
        lib="shadcn",
        tag="Card",
        import_spec='import { Card } from "@/components/ui/card";',
        default_classes="p-6",
        match_hints=("card", "panel"),
    ),
)
