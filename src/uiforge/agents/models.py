"""UI Data Models - semantic tree and palette-bound build plan."""

from typing import Annotated, Any, Literal, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Layout(BaseModel):
    """Layout of a frame."""

    display: Literal["flex", "grid", "block"] = "flex"
    direction: Literal["row", "column"] | None = None
    gap: float | None = None
    padding: float | None = None
    columns: int | None = None
    align: Literal["start", "center", "end", "between", "around"] | None = None
    justify: Literal["start", "center", "end", "between", "around"] | None = None


class Style(BaseModel):
    """Visual style of any node."""

    bg: str | None = None
    color: str | None = None
    radius: float | None = None
    shadow: Literal["sm", "md", "lg"] | None = None
    border: bool | str | None = None


FieldComponent = Literal["Input", "Textarea", "Select", "Checkbox", "Switch", "Button"]


class FormField(BaseModel):
    """One form control."""

    name: str
    label: str | None = None
    component: FieldComponent
    required: bool | None = None
    options: list[str] | None = None
    placeholder: str | None = None


class TextNode(BaseModel):
    type: Literal["Text"] = "Text"
    role: Literal["h1", "h2", "h3", "p", "span"] = "p"
    content: str
    style: Style | None = None


class ImageNode(BaseModel):
    type: Literal["Image"] = "Image"
    src: str = ""
    alt: str = ""
    style: Style | None = None


class IconNode(BaseModel):
    type: Literal["Icon"] = "Icon"
    name: str
    style: Style | None = None


class FormNode(BaseModel):
    type: Literal["Form"] = "Form"
    name: str
    fields: list[FormField] = Field(default_factory=list)
    actions: list[FormField] | None = None
    style: Style | None = None


class ListNode(BaseModel):
    type: Literal["List"] = "List"
    items: list[Any] = Field(default_factory=list)
    style: Style | None = None


class ButtonNode(BaseModel):
    type: Literal["Button"] = "Button"
    label: str
    style: Style | None = None


class FrameNode(BaseModel):
    """Container; children are kept in render order."""

    type: Literal["Frame"] = "Frame"
    layout: Layout | None = None
    style: Style | None = None
    children: list["UINode"] = Field(default_factory=list)


UINode = Annotated[
    Union[TextNode, ImageNode, IconNode, FrameNode, FormNode, ListNode, ButtonNode],
    Field(discriminator="type"),
]

# The tree root is always a frame.
UITree = FrameNode

FrameNode.model_rebuild()


class BuildNode(BaseModel):
    """A palette-bound node of the build plan."""

    model_config = ConfigDict(populate_by_name=True)

    component_key: str = Field(
        validation_alias=AliasChoices("componentKey", "component_key"),
        serialization_alias="componentKey",
    )
    props: dict[str, Any] = Field(default_factory=dict)
    extra_classes: str | None = Field(
        default=None,
        validation_alias=AliasChoices("extraClasses", "extra_classes", "tailwind"),
        serialization_alias="extraClasses",
    )
    children: list[Union["BuildNode", str]] = Field(default_factory=list)


class BuildPlan(BaseModel):
    """Component name, import lines and the build tree."""

    name: str
    imports: list[str] = Field(default_factory=list)
    root: BuildNode


BuildNode.model_rebuild()


def item_label(item: Any) -> str:
    """Display text of a list item (plain string, mapping or node)."""
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        for key in ("content", "label", "text", "name"):
            if isinstance(item.get(key), str):
                return item[key]
    for attr in ("content", "label", "name"):
        value = getattr(item, attr, None)
        if isinstance(value, str):
            return value
    return str(item)
