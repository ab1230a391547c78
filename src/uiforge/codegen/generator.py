"""
Code Generator
Lowers a build plan (or a UI tree directly) to a React/TSX component module.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from ..agents.models import (
    BuildNode,
    BuildPlan,
    ButtonNode,
    FormField,
    FormNode,
    FrameNode,
    IconNode,
    ImageNode,
    ListNode,
    TextNode,
    UINode,
    UITree,
    item_label,
)
from ..core import get_logger
from ..core.validate import COMPONENT_NAME_PATTERN
from ..monitoring import metrics_collector
from ..palette import Palette
from .emit import Element, iter_elements, render_element
from .tailwind import join_classes, style_classes, to_classes

logger = get_logger(__name__)

DEFAULT_OUTPUT_DIR = "/src/components/generated"
PLACEHOLDER_CLASSES = "border border-dashed border-red-400 p-2 text-sm text-red-600"
FORM_CONTROL_TAGS = frozenset({"input", "textarea", "select", "button", "Input", "Button"})

# Wrapper lives at depth 2 inside `return (`; its children start one level deeper.
BODY_DEPTH = 3

_NAME_RE = re.compile(COMPONENT_NAME_PATTERN)


@dataclass
class GeneratedCode:
    """Emitted component source and everything learned while emitting it."""

    name: str
    file_path: str
    code: str
    imports: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


_SUBMIT_HANDLER = """  function handleSubmit(e: React.FormEvent<HTMLFormElement>) {
    e.preventDefault();
    const data = Object.fromEntries(new FormData(e.currentTarget).entries());
    onSubmit?.(data);
  }

"""


def _template(name: str, imports: list[str], wrapper_tag: str, body: list[str]) -> str:
    header = "\n".join(imports) + "\n\n" if imports else ""
    is_form = wrapper_tag == "form"
    params = "{ onSubmit, className }" if is_form else "{ className }"
    handler = _SUBMIT_HANDLER if is_form else ""
    submit = " onSubmit={handleSubmit}" if is_form else ""
    body_text = "\n".join(body)
    return f"""{header}import * as React from "react";

export type {name}Props = {{
  onSubmit?: (data: Record<string, FormDataEntryValue>) => void;
  className?: string;
}};

export default function {name}({params}: {name}Props) {{
{handler}  return (
    <{wrapper_tag}{submit} className={{className}}>
{body_text}
    </{wrapper_tag}>
  );
}}
"""


class CodeGenerator:
    """Serializes build plans and UI trees using a palette."""

    def __init__(self, palette: Palette, output_dir: str = DEFAULT_OUTPUT_DIR) -> None:
        self.palette = palette
        self.output_dir = output_dir.rstrip("/")

    def file_path(self, name: str) -> str:
        return f"{self.output_dir}/{name}.tsx"

    def generate(self, plan: BuildPlan) -> GeneratedCode:
        """
        Emit a component module for a build plan.

        Unknown component keys never fail generation: they render as a
        labeled placeholder and produce a warning.

        Raises:
            ValueError: If the plan name is not a valid component name
        """
        self._check_name(plan.name)
        warnings: list[str] = []
        imports: list[str] = []

        root = self._lower(plan.root, imports, warnings)
        body = render_element(root, BODY_DEPTH, warnings)
        wrapper = "form" if self._has_form_control(root) else "div"

        code = _template(plan.name, imports, wrapper, body)
        logger.info(
            "code_generated",
            component=plan.name,
            mode="plan",
            imports=len(imports),
            warnings=len(warnings),
        )
        return GeneratedCode(
            name=plan.name,
            file_path=self.file_path(plan.name),
            code=code,
            imports=imports,
            warnings=warnings,
        )

    def render_tree(self, tree: UITree, name: str) -> GeneratedCode:
        """Emit a component module straight from a UI tree (no palette)."""
        self._check_name(name)
        warnings: list[str] = []

        root = self._tree_element(tree)
        body = render_element(root, BODY_DEPTH, warnings)
        wrapper = "form" if self._has_form_control(root) else "div"

        code = _template(name, [], wrapper, body)
        logger.info("code_generated", component=name, mode="tree", warnings=len(warnings))
        return GeneratedCode(name=name, file_path=self.file_path(name), code=code, warnings=warnings)

    def collect_imports(self, root: BuildNode) -> list[str]:
        """Import lines of every palette entry referenced, first-seen order."""
        imports: list[str] = []
        self._collect(root, imports)
        return imports

    def _collect(self, node: BuildNode, imports: list[str]) -> None:
        entry = self.palette.lookup(node.component_key)
        if entry is not None and entry.import_spec and entry.import_spec not in imports:
            imports.append(entry.import_spec)
        for child in node.children:
            if isinstance(child, BuildNode):
                self._collect(child, imports)

    @staticmethod
    def _check_name(name: str) -> None:
        if not _NAME_RE.fullmatch(name):
            raise ValueError(f"Invalid component name: {name!r}")

    @staticmethod
    def _has_form_control(root: Element) -> bool:
        return any(el.tag in FORM_CONTROL_TAGS for el in iter_elements(root))

    # Build plan lowering

    def _lower(self, node: BuildNode, imports: list[str], warnings: list[str]) -> Element:
        entry = self.palette.lookup(node.component_key)
        if entry is None:
            return self._placeholder(node.component_key, warnings)

        if entry.import_spec and entry.import_spec not in imports:
            imports.append(entry.import_spec)

        props: dict[str, Any] = {}
        classes = join_classes(
            entry.default_classes, node.extra_classes, _str_or_none(node.props.get("className"))
        )
        if classes:
            props["className"] = classes
        for key, value in {**entry.default_props, **node.props}.items():
            if key != "className":
                props[key] = value

        children: list[Element | str] = []
        for child in node.children:
            if isinstance(child, str):
                children.append(child)
            else:
                children.append(self._lower(child, imports, warnings))

        return Element(tag=entry.tag, props=props, children=children)

    @staticmethod
    def _placeholder(key: str, warnings: list[str]) -> Element:
        logger.warning("unresolved_component_key", key=key)
        metrics_collector.record_unresolved_key()
        warnings.append(f"Unknown component key: {key}")
        return Element(
            tag="div",
            props={"data-unresolved": key, "className": PLACEHOLDER_CLASSES},
            children=[f"Unknown component: {key}"],
        )

    # Direct UI tree emission

    def _tree_element(self, node: UINode) -> Element:
        if isinstance(node, TextNode):
            return Element(
                tag=node.role,
                props={"className": to_classes(style=node.style)},
                children=[node.content],
            )

        if isinstance(node, ImageNode):
            return Element(
                tag="img",
                props={"src": node.src, "alt": node.alt, "className": to_classes(style=node.style)},
            )

        if isinstance(node, IconNode):
            return Element(
                tag="span",
                props={
                    "className": join_classes("inline-block h-5 w-5", to_classes(style=node.style)),
                    "data-icon": node.name,
                    "aria-hidden": True,
                },
            )

        if isinstance(node, ButtonNode):
            return Element(
                tag="button",
                props={
                    "type": "submit",
                    "className": join_classes(
                        "rounded-md px-4 py-2", *style_classes(node.style)
                    ),
                },
                children=[node.label],
            )

        if isinstance(node, ListNode):
            return Element(
                tag="ul",
                props={"className": join_classes("divide-y", to_classes(style=node.style))},
                children=[
                    Element(tag="li", props={"className": "px-4 py-2"}, children=[item_label(item)])
                    for item in node.items
                ],
            )

        if isinstance(node, FormNode):
            fields = list(node.fields) + list(node.actions or [])
            return Element(
                tag="div",
                props={
                    "className": join_classes(
                        "flex flex-col gap-4 p-4", to_classes(style=node.style)
                    ),
                    "data-form": node.name,
                },
                children=[_field_element(f) for f in fields],
            )

        if isinstance(node, FrameNode):
            return Element(
                tag="div",
                props={"className": to_classes(node.layout, node.style)},
                children=[self._tree_element(child) for child in node.children],
            )

        raise TypeError(f"Unknown UI node: {type(node).__name__}")


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


_CONTROL_CLASSES = "w-full px-3 py-2 border border-gray-300 rounded-md shadow-sm"
_LABEL_CLASSES = "block text-sm font-medium text-gray-700"


def _field_element(field_: FormField) -> Element:
    field_id = f"field-{field_.name}"
    label = field_.label or field_.name

    if field_.component == "Button":
        return Element(
            tag="button",
            props={
                "type": "submit",
                "className": "w-full bg-blue-600 text-white py-2 px-4 rounded-md hover:bg-blue-700",
            },
            children=[field_.label or "Submit"],
        )

    if field_.component in ("Checkbox", "Switch"):
        control_props: dict[str, Any] = {
            "id": field_id,
            "name": field_.name,
            "type": "checkbox",
            "className": "h-4 w-4 rounded border-gray-300",
        }
        if field_.component == "Switch":
            control_props["role"] = "switch"
        if field_.required:
            control_props["required"] = True
        return Element(
            tag="div",
            props={"className": "flex items-center gap-2"},
            children=[
                Element(tag="input", props=control_props),
                Element(tag="label", props={"htmlFor": field_id, "className": _LABEL_CLASSES}, children=[label]),
            ],
        )

    control: Element
    props: dict[str, Any] = {"id": field_id, "name": field_.name}
    if field_.component == "Select":
        options = [Element(tag="option", props={"value": ""}, children=[f"Select {label}"])]
        options.extend(
            Element(tag="option", props={"value": opt}, children=[opt]) for opt in field_.options or []
        )
        props["className"] = _CONTROL_CLASSES
        if field_.required:
            props["required"] = True
        control = Element(tag="select", props=props, children=options)
    else:
        if field_.component == "Input":
            props["type"] = "text"
        else:
            props["rows"] = 4
        props["placeholder"] = field_.placeholder or ""
        props["className"] = _CONTROL_CLASSES
        if field_.required:
            props["required"] = True
        tag = "input" if field_.component == "Input" else "textarea"
        control = Element(tag=tag, props=props)

    return Element(
        tag="div",
        props={"className": "space-y-2"},
        children=[
            Element(tag="label", props={"htmlFor": field_id, "className": _LABEL_CLASSES}, children=[label]),
            control,
        ],
    )
