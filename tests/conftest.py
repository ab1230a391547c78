"""Pytest configuration and fixtures."""

import os
from typing import Any

import pytest
import respx

from uiforge.agents.models import BuildPlan, UITree
from uiforge.agents.oracle import OracleGateway
from uiforge.agents.ui_generator import UIGenerator
from uiforge.core import configure_logging, create_container
from uiforge.core.config import Settings
from uiforge.palette import default_palette
from uiforge.patch import PatchEngine


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ['UIFORGE_LOG_LEVEL'] = 'DEBUG'
    os.environ['UIFORGE_ORACLE_URL'] = ''  # No oracle in tests unless a test wires one
    configure_logging(level="DEBUG")


# ============================================================================
# Markup Samples
# ============================================================================

BUTTON_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="240" height="80">'
    '<g>'
    '<rect x="10" y="10" width="120" height="40" rx="8" fill="#fff"/>'
    '<text x="30" y="35">Submit</text>'
    '</g>'
    '</svg>'
)

FORM_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="320" height="240">'
    '<g>'
    '<rect x="0" y="0" width="300" height="32"/>'
    '<rect x="0" y="60" width="300" height="96"/>'
    '<text x="0" y="-4">Email</text>'
    '<text x="0" y="56">Message</text>'
    '</g>'
    '</svg>'
)

CARD_SOURCE = """export default function Card() {
  return (
    <div className="p-4 p-4  rounded">
      <h1 className="text-xl">Title</h1>
      <img src="/logo.png" />
      <button type="submit">Save</button>
    </div>
  );
}
"""


@pytest.fixture
def button_svg():
    return BUTTON_SVG


@pytest.fixture
def form_svg():
    return FORM_SVG


@pytest.fixture
def card_source():
    return CARD_SOURCE


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings (fresh, not the cached process instance)."""
    return Settings()


@pytest.fixture
def di_container(settings):
    """Dependency injection container for testing."""
    return create_container(settings)


@pytest.fixture
def palette():
    return default_palette()


@pytest.fixture
def ui_generator(palette):
    """Rule-based UI generator (no oracle)."""
    return UIGenerator(palette=palette)


@pytest.fixture
def patch_engine():
    return PatchEngine()


@pytest.fixture
def generated_button_source(ui_generator):
    """Component source generated from the submit button markup."""
    return ui_generator.generate(BUTTON_SVG, "SubmitButton").code


# ============================================================================
# Oracle Fixtures
# ============================================================================

class FakeOracle:
    """In-process design oracle returning canned proposals."""

    def __init__(self, tree: UITree | None = None, plan: BuildPlan | None = None, error: Exception | None = None):
        self.tree = tree
        self.plan = plan
        self.error = error
        self.calls: list[str] = []

    def propose_ui_tree(self, markup: str, features: list[Any]) -> UITree:
        self.calls.append("propose_ui_tree")
        if self.error:
            raise self.error
        return self.tree

    def propose_build_plan(self, tree: UITree, palette_keys: list[str]) -> BuildPlan:
        self.calls.append("propose_build_plan")
        if self.error:
            raise self.error
        return self.plan


@pytest.fixture
def fake_oracle_factory():
    """Build an oracle gateway around a FakeOracle."""

    def _make(tree=None, plan=None, error=None, timeout=2.0):
        oracle = FakeOracle(tree=tree, plan=plan, error=error)
        return oracle, OracleGateway(oracle, timeout=timeout)

    return _make


# ============================================================================
# HTTP/Network Fixtures
# ============================================================================

@pytest.fixture
def mock_httpx_client():
    """Mock httpx transport."""
    with respx.mock:
        yield respx
