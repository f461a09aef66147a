"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tests.fixtures.test_inputs import (
    get_new_build_facts,
    get_existing_facts,
    get_projection_config,
)


@pytest.fixture
def new_build_facts():
    """Fully eligible EH40 new build."""
    return get_new_build_facts()


@pytest.fixture
def existing_facts():
    """Existing building bought before 2023."""
    return get_existing_facts()


@pytest.fixture
def projection_config():
    """Projection with depreciation schedule and sale modeling."""
    return get_projection_config()
