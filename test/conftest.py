"""
Pytest configuration and fixtures for CMS admin plugin tests
"""

import logging
import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH120

from cms_admin.admin.navigation import AdminNavigation  # noqa: E402
from cms_admin.assets.manifest import InMemoryAssetQueue  # noqa: E402
from cms_admin.plugins.registry import HookRegistry  # noqa: E402
from cms_admin.registration import ErrorCollection  # noqa: E402
from cms_admin.templating.renderer import create_environment  # noqa: E402


@pytest.fixture
def hooks():
    """A fresh hook registry, isolated from the global singleton"""
    return HookRegistry()


@pytest.fixture
def errors():
    return ErrorCollection()


@pytest.fixture
def navigation():
    return AdminNavigation()


@pytest.fixture
def asset_queue():
    return InMemoryAssetQueue()


@pytest.fixture
def override_templates(tmp_path):
    """
    Template directory that shadows the bundled templates.

    Returns a function writing a template file and the environment that
    searches the directory first.
    """
    def write(name: str, source: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return create_environment(tmp_path)

    return write


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handlers and level set by configure_logging() during a test"""
    logger = logging.getLogger("cms_admin")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
