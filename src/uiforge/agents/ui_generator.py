"""UI Generator - markup to component source, oracle first with rule-based fallback."""

from dataclasses import dataclass, field

from ..codegen import CodeGenerator
from ..codegen.generator import DEFAULT_OUTPUT_DIR
from ..core import get_logger
from ..markup import extract_features, parse_markup, sanitize_markup
from ..markup.features import Feature
from ..markup.sanitizer import DEFAULT_MAX_DEPTH
from ..palette import Palette
from .inferencer import SemanticInferencer
from .mapper import BuildPlanMapper
from .models import BuildPlan, UITree
from .oracle import OracleGateway

logger = get_logger(__name__)


@dataclass
class Generation:
    """Everything one generate request produced."""

    features: list[Feature]
    tree: UITree
    plan: BuildPlan | None
    code: str
    file_path: str
    warnings: list[str] = field(default_factory=list)


class UIGenerator:
    """Runs the full markup to source pipeline."""

    def __init__(
        self,
        palette: Palette,
        oracle: OracleGateway | None = None,
        output_dir: str = DEFAULT_OUTPUT_DIR,
        max_markup_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.palette = palette
        self.oracle = oracle
        self.max_markup_depth = max_markup_depth
        self.inferencer = SemanticInferencer(oracle)
        self.mapper = BuildPlanMapper(palette, oracle)
        self.codegen = CodeGenerator(palette, output_dir)

        use_oracle = oracle is not None and oracle.available
        logger.info("initialized", mode="oracle" if use_oracle else "rule-based", palette=len(palette))

    def generate(self, markup: str, name: str) -> Generation:
        """
        Generate component source from markup.

        Raises:
            ParseError: If the markup is malformed or unsafe (no partial output)
            ValueError: If name is not a valid component name
        """
        sanitized = sanitize_markup(markup, max_depth=self.max_markup_depth)
        root = parse_markup(sanitized)
        features = extract_features(root).to_list()
        logger.debug("features_extracted", count=len(features))

        tree = self.inferencer.infer(root, markup=sanitized, features=features)
        mapping = self.mapper.map(tree, name)
        generated = self.codegen.generate(mapping.plan)

        warnings = mapping.warnings + generated.warnings
        logger.info(
            "generation_complete",
            component=name,
            plan_source=mapping.source,
            nodes=len(tree.children),
            warnings=len(warnings),
        )
        return Generation(
            features=features,
            tree=tree,
            plan=mapping.plan,
            code=generated.code,
            file_path=generated.file_path,
            warnings=warnings,
        )

    def generate_from_tree(self, tree: UITree, name: str) -> Generation:
        """Emit source straight from a UI tree, bypassing the palette."""
        generated = self.codegen.render_tree(tree, name)
        return Generation(
            features=[],
            tree=tree,
            plan=None,
            code=generated.code,
            file_path=generated.file_path,
            warnings=generated.warnings,
        )
