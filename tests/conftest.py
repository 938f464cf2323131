"""
Shared fixtures for the modman test suite.
"""

import sys
from pathlib import Path
from typing import Generator, List

import pytest

from modman.infrastructure.config.models import ListenerOptions
from modman.listeners.resolver import MODULE_NAMESPACE

ASSETS_DIR = Path(__file__).parent / "assets"
ASSET_MODULES = ("ListenerTestModule", "SomeModule", "DependentModule", "NotAModule")


@pytest.fixture
def assets_dir() -> Path:
    """Directory holding the sample modules and config files."""
    return ASSETS_DIR


@pytest.fixture
def listener_options(assets_dir: Path) -> ListenerOptions:
    """Listener options resolving modules from the assets directory."""
    return ListenerOptions(module_paths=[str(assets_dir)])


@pytest.fixture(autouse=True)
def forget_asset_modules() -> Generator[None, None, None]:
    """Drop sample modules from sys.modules so each test loads them fresh."""
    yield
    for name in ASSET_MODULES:
        sys.modules.pop(name, None)
    for name in [name for name in sys.modules if name.startswith(MODULE_NAMESPACE + ".")]:
        sys.modules.pop(name, None)
