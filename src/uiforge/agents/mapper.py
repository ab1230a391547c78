"""
Build Plan Mapper
Lowers a semantic UI tree onto palette components.
"""

from dataclasses import dataclass, field
from typing import Any

from ..codegen.tailwind import to_classes
from ..core import get_logger
from ..core.errors import OracleUnavailable
from ..monitoring import metrics_collector
from ..palette import Palette
from .models import (
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
from .oracle import OracleGateway

logger = get_logger(__name__)

FALLBACK_KEY = "layout.stack"

TYPOGRAPHY_KEYS = {
    "h1": "typography.h1",
    "h2": "typography.h2",
    "h3": "typography.h3",
    "p": "typography.p",
    "span": "typography.span",
}


@dataclass
class MappingResult:
    """A validated build plan plus how it was produced."""

    plan: BuildPlan
    source: str
    warnings: list[str] = field(default_factory=list)


def validate_plan(plan: BuildPlan, palette: Palette, warnings: list[str] | None = None) -> BuildPlan:
    """
    Replace every component key the palette cannot resolve.

    Unknown keys become the generic container key and are reported in
    warnings. The plan's import list is rebuilt from the palette.
    """
    warnings = warnings if warnings is not None else []
    imports: list[str] = []

    def visit(node: BuildNode) -> BuildNode:
        key = node.component_key
        if key not in palette:
            logger.warning("unresolved_component_key", key=key, substitute=FALLBACK_KEY)
            metrics_collector.record_unresolved_key()
            warnings.append(f"Unknown component key: {key} (replaced with {FALLBACK_KEY})")
            key = FALLBACK_KEY

        entry = palette.lookup(key)
        if entry is not None and entry.import_spec and entry.import_spec not in imports:
            imports.append(entry.import_spec)

        children: list[BuildNode | str] = [
            child if isinstance(child, str) else visit(child) for child in node.children
        ]
        return node.model_copy(update={"component_key": key, "children": children})

    root = visit(plan.root)
    return BuildPlan(name=plan.name, imports=imports, root=root)


def _node(key: str, children: list[BuildNode | str] | None = None, extra: str | None = None, **props: Any) -> BuildNode:
    return BuildNode(
        component_key=key,
        props={k: v for k, v in props.items() if v is not None},
        extra_classes=extra or None,
        children=children or [],
    )


class BuildPlanMapper:
    """UITree to BuildPlan, through the oracle when possible."""

    def __init__(self, palette: Palette, oracle: OracleGateway | None = None) -> None:
        self.palette = palette
        self.oracle = oracle

    def map(self, tree: UITree, name: str) -> MappingResult:
        """
        Produce a palette-validated build plan.

        Args:
            tree: Semantic UI tree
            name: Component name for the plan
        """
        warnings: list[str] = []

        if self.oracle is not None and self.oracle.available:
            try:
                proposed = self.oracle.propose_build_plan(tree, self.palette.keys())
                plan = validate_plan(proposed.model_copy(update={"name": name}), self.palette, warnings)
                logger.info("plan_mapped", source="oracle", component=name)
                return MappingResult(plan=plan, source="oracle", warnings=warnings)
            except OracleUnavailable as e:
                logger.warning("oracle_fallback", call="propose_build_plan", reason=str(e))

        plan = validate_plan(self.fallback(tree, name), self.palette, warnings)
        logger.info("plan_mapped", source="rules", component=name)
        return MappingResult(plan=plan, source="rules", warnings=warnings)

    def fallback(self, tree: UITree, name: str) -> BuildPlan:
        """Deterministic mapping rules (no validation)."""
        root = _node(FALLBACK_KEY, [self.map_node(child) for child in tree.children])
        return BuildPlan(name=name, root=root)

    def map_node(self, node: UINode) -> BuildNode:
        if isinstance(node, TextNode):
            return _node(TYPOGRAPHY_KEYS.get(node.role, "typography.p"), [node.content])

        if isinstance(node, FormNode):
            fields = [self.map_field(f) for f in list(node.fields) + list(node.actions or [])]
            return _node("layout.card", [_node("layout.stack", fields)])

        if isinstance(node, FrameNode):
            if node.layout is not None and node.layout.display == "grid":
                key = "layout.grid"
            elif node.layout is not None and node.layout.direction == "row":
                key = "layout.row"
            else:
                key = "layout.stack"
            return _node(
                key,
                [self.map_node(child) for child in node.children],
                extra=to_classes(node.layout, node.style),
            )

        if isinstance(node, ImageNode):
            return _node("media.img", src=node.src, alt=node.alt)

        if isinstance(node, IconNode):
            return _node("icon.glyph", **{"data-icon": node.name, "aria-label": node.name})

        if isinstance(node, ListNode):
            return _node("list.ul", [_node("list.li", [item_label(item)]) for item in node.items])

        if isinstance(node, ButtonNode):
            return _node("form.button", [node.label], type="button")

        logger.warning("unmapped_node", type=type(node).__name__)
        return _node(FALLBACK_KEY)

    def map_field(self, field_: FormField) -> BuildNode:
        label = field_.label or field_.name
        required = True if field_.required else None

        if field_.component == "Button":
            return _node("form.button", [field_.label or "Submit"], type="submit")

        if field_.component == "Textarea":
            return _node(
                "form.textarea",
                name=field_.name,
                placeholder=field_.placeholder,
                required=required,
                **{"aria-label": label},
            )

        if field_.component == "Select":
            options: list[BuildNode | str] = [
                _node("form.option", [option], value=option) for option in field_.options or []
            ]
            return _node("form.select", options, name=field_.name, required=required, **{"aria-label": label})

        if field_.component in ("Checkbox", "Switch"):
            role = "switch" if field_.component == "Switch" else None
            return _node(
                "form.checkbox", name=field_.name, role=role, required=required, **{"aria-label": label}
            )

        return _node(
            "form.input",
            name=field_.name,
            placeholder=field_.placeholder,
            required=required,
            **{"aria-label": label},
        )

