"""
Global pytest configuration and fixtures for the DocuSign node tests.

Fixtures defined here and in ``tests/fixtures`` are available to all test
modules without explicit import.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Generator

import pytest  # type: ignore
from faker import Faker  # type: ignore

# Add the project root to Python path
project_root: Path = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from docusign_node.config.settings import get_settings  # noqa: E402

pytest_plugins = ["tests.fixtures.docusign_fixtures"]

# Initialize Faker for generating test data
fake: Faker = Faker()


# ============================================================================
# Session-level fixtures
# ============================================================================


@pytest.fixture(scope="session")
def faker_instance() -> Faker:
    """
    Provide a Faker instance for generating test data.

    Returns:
        Configured Faker instance
    """
    return fake


# ============================================================================
# Function-level fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """
    Reset environment state and cached settings around each test.
    """
    original_env: Dict[str, str] = os.environ.copy()
    get_settings.cache_clear()

    yield

    os.environ.clear()
    os.environ.update(original_env)
    get_settings.cache_clear()


# ============================================================================
# Test lifecycle hooks
# ============================================================================


def pytest_configure(config):
    """
    Register custom markers.
    """
    config.addinivalue_line("markers", "unit: fast tests without network access")
    config.addinivalue_line("markers", "node: tests driving DocuSignNode.execute end to end")


def pytest_collection_modifyitems(config, items):
    """
    Auto-mark tests based on their module.
    """
    for item in items:
        if "test_node" in str(item.fspath):
            item.add_marker(pytest.mark.node)
        else:
            item.add_marker(pytest.mark.unit)
