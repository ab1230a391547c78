"""
Semantic Inferencer
Reconstructs a semantic UI tree from parsed markup with fixed-priority rules.
"""

from typing import Iterable, Mapping, Sequence

from ..core import get_logger
from ..core.errors import OracleUnavailable
from ..markup.features import Feature, extract_features, parse_number
from ..markup.parser import MarkupNode
from .models import (
    FormField,
    FormNode,
    FrameNode,
    ImageNode,
    Layout,
    Style,
    TextNode,
    UINode,
    UITree,
)
from .oracle import OracleGateway

logger = get_logger(__name__)

TEXT_ELEMENTS = frozenset({"text", "tspan"})
GROUP_ELEMENTS = frozenset({"g", "svg"})
PRIMITIVE_ELEMENTS = frozenset({"circle", "ellipse", "path", "polygon", "polyline"})

EMPTY_DOCUMENT_MESSAGE = "SVG content detected but no recognizable elements found"

DEFAULT_ROOT_LAYOUT = Layout(display="flex", direction="column", gap=16)
DEFAULT_ROOT_STYLE = Style(bg="#ffffff", radius=8, shadow="sm")


def text_role(font_size: float | None) -> str:
    """Heading level from a declared font size."""
    if font_size is None:
        return "p"
    if font_size >= 32:
        return "h1"
    if font_size >= 24:
        return "h2"
    if font_size >= 18:
        return "h3"
    return "p"


def _text(attributes: Mapping[str, str], content: str) -> TextNode:
    return TextNode(
        role=text_role(parse_number(attributes.get("font-size"))),
        content=content or "Text",
        style=Style(color=attributes.get("fill") or "#000000"),
    )


def _rect_frame(attributes: Mapping[str, str]) -> FrameNode:
    return FrameNode(
        layout=Layout(display="flex", direction="column", gap=12, padding=16),
        style=Style(
            bg=attributes.get("fill") or "#ffffff",
            radius=parse_number(attributes.get("rx")) or 0,
            shadow="sm",
            border="stroke" in attributes,
        ),
    )


def _image(attributes: Mapping[str, str]) -> ImageNode:
    return ImageNode(src=attributes.get("href", ""), alt="")


def _primitive_frame(name: str, attributes: Mapping[str, str]) -> FrameNode:
    return FrameNode(
        layout=Layout(display="flex", direction="column", gap=8, padding=12),
        style=Style(
            bg=attributes.get("fill") or "#f0f0f0",
            radius=4,
            shadow="sm",
            border="stroke" in attributes,
        ),
        children=[
            TextNode(
                role="p",
                content=f"{name} element",
                style=Style(color=attributes.get("stroke") or "#666666"),
            )
        ],
    )


def _button_form(label: str) -> FormNode:
    return FormNode(
        name="buttonForm",
        fields=[FormField(name="button", component="Button", label=label or "Button")],
        style=Style(bg="#3b82f6", radius=8, shadow="sm"),
    )


def _input_form(labels: Sequence[str]) -> FormNode:
    fields = []
    for index, label in enumerate(labels):
        label = label or f"Field {index + 1}"
        fields.append(
            FormField(
                name=f"field{index}",
                component="Input",
                label=label,
                placeholder=f"Enter {label}",
            )
        )
    return FormNode(
        name="generatedForm",
        fields=fields,
        style=Style(bg="#f9fafb", radius=8, shadow="sm"),
    )


class SemanticInferencer:
    """
    Markup to UITree.

    Rules, first match wins per element:
        1. text/tspan            -> Text (role from font-size)
        2. rect                  -> Frame
        2b. image                -> Image
        3. group, 1 rect + text  -> button Form
        4. group, >1 rect + text -> Form with one Input per text
        4b. other group          -> Frame of its children's results
        5. circle/ellipse/path/polygon/polyline -> Frame describing the element
        6. nothing at all        -> diagnostic Text
    """

    def __init__(
        self,
        oracle: OracleGateway | None = None,
        root_layout: Layout | None = None,
        root_style: Style | None = None,
    ) -> None:
        self.oracle = oracle
        self.root_layout = root_layout or DEFAULT_ROOT_LAYOUT
        self.root_style = root_style or DEFAULT_ROOT_STYLE

    def infer(
        self,
        root: MarkupNode,
        *,
        markup: str | None = None,
        features: Sequence[Feature] | None = None,
    ) -> UITree:
        """
        Infer a UI tree from the attribute tree.

        The oracle is consulted first when one is configured and the raw
        markup is supplied; any oracle failure falls back to the rules.
        """
        if self.oracle is not None and self.oracle.available and markup is not None:
            try:
                tree = self.oracle.propose_ui_tree(
                    markup, features if features is not None else list(extract_features(root))
                )
                logger.info("tree_inferred", source="oracle", children=len(tree.children))
                return tree
            except OracleUnavailable as e:
                logger.warning("oracle_fallback", call="propose_ui_tree", reason=str(e))

        children: list[UINode] = []
        for node in root.elements():
            result = self._infer_node(node)
            if result is not None:
                children.append(result)

        return self._finish(children, source="rules")

    def infer_features(self, features: Iterable[Feature]) -> UITree:
        """
        Infer a flat UI tree from a feature sequence.

        Containers carry no structure here, so only the element rules apply.
        """
        children: list[UINode] = []
        for feature in features:
            node = self._infer_feature(feature)
            if node is not None:
                children.append(node)
        return self._finish(children, source="features")

    def _finish(self, children: list[UINode], source: str) -> UITree:
        if not children:
            logger.info("no_recognizable_elements", source=source)
            children = [TextNode(role="p", content=EMPTY_DOCUMENT_MESSAGE)]

        tree = FrameNode(
            layout=self.root_layout.model_copy(),
            style=self.root_style.model_copy(),
            children=children,
        )
        logger.info("tree_inferred", source=source, children=len(children))
        return tree

    def _infer_node(self, node: MarkupNode) -> UINode | None:
        name = node.name

        if name in TEXT_ELEMENTS:
            return _text(node.attributes, node.text_content())

        if name == "rect":
            return _rect_frame(node.attributes)

        if name == "image":
            return _image(node.attributes)

        if name in GROUP_ELEMENTS:
            return self._infer_group(node)

        if name in PRIMITIVE_ELEMENTS:
            return _primitive_frame(name, node.attributes)

        logger.debug("element_unmatched", element=name)
        return None

    def _infer_group(self, node: MarkupNode) -> UINode | None:
        descendants = list(node.descendants())
        rects = [d for d in descendants if d.name == "rect"]
        texts = [d for d in descendants if d.name == "text"]

        if len(rects) == 1 and texts:
            return _button_form(texts[0].text_content())

        if len(rects) > 1 and texts:
            return _input_form([t.text_content() for t in texts])

        children = [c for c in (self._infer_node(child) for child in node.elements()) if c is not None]
        if not children:
            return None
        return FrameNode(
            layout=Layout(display="flex", direction="column", gap=8),
            children=children,
        )

    def _infer_feature(self, feature: Feature) -> UINode | None:
        name = feature.type

        if name in TEXT_ELEMENTS:
            if not feature.text or not feature.text.strip():
                return None
            return _text(feature.attributes, " ".join(feature.text.split()))

        if name == "rect":
            return _rect_frame(feature.attributes)

        if name == "image":
            return _image(feature.attributes)

        if name in PRIMITIVE_ELEMENTS:
            return _primitive_frame(name, feature.attributes)

        return None
