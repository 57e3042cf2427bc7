"""
Test Configuration
==================

Pytest configuration with fixtures for all test types.
Provides test settings, converter instances and sample scene data.
"""

import pytest
from pathlib import Path
from typing import Any, Dict, Generator

from pydantic_settings import SettingsConfigDict

import figma_html.config.settings as settings_module
from figma_html.config.settings import Settings
from figma_html.core.figma.parser import SceneParser
from figma_html.core.rendering.html_generator import FigmaHTMLConverter
from figma_html.core.rendering.styles import StyleResolver

from tests.utils.data_generators import SceneDataGenerator


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    figma_access_token: str = "test-token"
    output_dir: Path = Path("./test_output")
    log_level: str = "DEBUG"

    model_config = SettingsConfigDict(env_file=".env.test")


@pytest.fixture(scope="session")
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture(scope="session", autouse=True)
def override_settings(test_settings: TestSettings) -> Generator[TestSettings, None, None]:
    """Override application settings for testing."""
    previous = settings_module.settings
    settings_module.settings = test_settings
    yield test_settings
    settings_module.settings = previous


@pytest.fixture
def converter(test_settings: TestSettings) -> FigmaHTMLConverter:
    """Converter using test settings."""
    return FigmaHTMLConverter(test_settings)


@pytest.fixture
def resolver() -> StyleResolver:
    """Style resolver fixture."""
    return StyleResolver()


@pytest.fixture
def scene_parser() -> SceneParser:
    """Scene parser fixture."""
    return SceneParser(max_depth=64)


@pytest.fixture
def generator() -> SceneDataGenerator:
    """Figma JSON data generator."""
    return SceneDataGenerator()


@pytest.fixture
def sample_file(generator: SceneDataGenerator) -> Dict[str, Any]:
    """Small file with a card frame holding a title and a button."""
    button = generator.frame(
        "1:4",
        x=120,
        y=280,
        width=120,
        height=40,
        node_type="INSTANCE",
        fills=[generator.solid(generator.color(0.2, 0.4, 1.0))],
        cornerRadius=6,
    )
    title = generator.text("1:3", "Welcome", x=120, y=220, width=200, height=32)
    card = generator.frame(
        "1:2",
        x=100,
        y=200,
        width=320,
        height=160,
        children=[title, button],
        fills=[generator.solid(generator.color(1, 1, 1))],
    )
    return generator.file(generator.document(generator.page(card)))
