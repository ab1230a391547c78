"""Dependency wiring tests."""

import pytest

from uiforge.agents.oracle import OracleGateway
from uiforge.agents.ui_generator import UIGenerator
from uiforge.clients import HTTPDesignOracle
from uiforge.core import create_container
from uiforge.core.config import Settings
from uiforge.handlers import GenerateHandler, PatchHandler
from uiforge.palette import Palette, default_palette
from uiforge.patch import PatchEngine


@pytest.mark.unit
class TestContainer:
    """Injector wiring."""

    def test_handlers_resolved(self, di_container):
        generate = di_container.get(GenerateHandler)
        patch = di_container.get(PatchHandler)

        assert isinstance(generate, GenerateHandler)
        assert isinstance(patch, PatchHandler)
        assert generate.ui_generator is di_container.get(UIGenerator)
        assert patch.engine is di_container.get(PatchEngine)

    def test_singletons(self, di_container):
        assert di_container.get(UIGenerator) is di_container.get(UIGenerator)
        assert di_container.get(Palette) is default_palette()

    def test_settings_passed_through(self):
        settings = Settings(output_dir="/web/generated", max_markup_depth=8)
        container = create_container(settings)

        generator = container.get(UIGenerator)

        assert container.get(Settings) is settings
        assert generator.max_markup_depth == 8
        assert generator.codegen.file_path("A") == "/web/generated/A.tsx"

    def test_oracle_disabled_without_url(self, di_container):
        gateway = di_container.get(OracleGateway)
        assert gateway.available is False

    def test_http_oracle_when_configured(self):
        container = create_container(Settings(oracle_url="http://oracle.test", oracle_timeout=3.0))

        gateway = container.get(OracleGateway)

        assert gateway.available
        assert isinstance(gateway.oracle, HTTPDesignOracle)
        assert gateway.oracle.palette is container.get(Palette)
        assert gateway.timeout == 3.0
        assert container.get(UIGenerator).oracle is gateway
