"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from ..agents.oracle import OracleGateway
from ..agents.ui_generator import UIGenerator
from ..clients.oracle import HTTPDesignOracle
from ..handlers import GenerateHandler, PatchHandler
from ..palette import Palette, default_palette
from ..patch import PatchEngine
from .config import Settings, get_settings
from .logging_config import get_logger

logger = get_logger(__name__)


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_palette(self) -> Palette:
        """Provide the process-wide component palette."""
        return default_palette()

    @singleton
    @provider
    def provide_oracle_gateway(self, settings: Settings, palette: Palette) -> OracleGateway:
        """Provide the oracle gateway (empty when no oracle URL is configured)."""
        if not settings.oracle_enabled:
            logger.info("oracle_disabled")
            return OracleGateway(None, timeout=settings.oracle_timeout)

        oracle = HTTPDesignOracle(
            settings.oracle_url,
            timeout=settings.oracle_timeout,
            fail_max=settings.breaker_fail_max,
            reset_timeout=settings.breaker_reset_timeout,
            palette=palette,
        )
        return OracleGateway(oracle, timeout=settings.oracle_timeout)

    @singleton
    @provider
    def provide_ui_generator(
        self, palette: Palette, oracle: OracleGateway, settings: Settings
    ) -> UIGenerator:
        """Provide UI generator with all dependencies."""
        return UIGenerator(
            palette=palette,
            oracle=oracle,
            output_dir=settings.output_dir,
            max_markup_depth=settings.max_markup_depth,
        )

    @singleton
    @provider
    def provide_patch_engine(self) -> PatchEngine:
        return PatchEngine()

    @singleton
    @provider
    def provide_generate_handler(self, generator: UIGenerator, settings: Settings) -> GenerateHandler:
        return GenerateHandler(generator, settings)

    @singleton
    @provider
    def provide_patch_handler(self, engine: PatchEngine, settings: Settings) -> PatchHandler:
        return PatchHandler(engine, settings)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
