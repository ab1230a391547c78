"""Semantic inference and plan mapping."""

from .models import (
    Layout,
    Style,
    FormField,
    TextNode,
    ImageNode,
    IconNode,
    FrameNode,
    FormNode,
    ListNode,
    ButtonNode,
    UINode,
    UITree,
    BuildNode,
    BuildPlan,
)
from .oracle import DesignOracle, OracleGateway
from .inferencer import SemanticInferencer
from .mapper import BuildPlanMapper, MappingResult, validate_plan

__all__ = [
    "Layout",
    "Style",
    "FormField",
    "TextNode",
    "ImageNode",
    "IconNode",
    "FrameNode",
    "FormNode",
    "ListNode",
    "ButtonNode",
    "UINode",
    "UITree",
    "BuildNode",
    "BuildPlan",
    "DesignOracle",
    "OracleGateway",
    "SemanticInferencer",
    "BuildPlanMapper",
    "MappingResult",
    "validate_plan",
]
