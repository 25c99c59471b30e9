"""
Pytest fixtures for the option builder tests.
"""

import os
from unittest.mock import patch

import pytest

from cmdopts import OptionsConfig, reset_config


@pytest.fixture(autouse=True)
def isolated_config():
    """Run each test with a fresh global config and no CMDOPTS_* variables."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("CMDOPTS_")}
    with patch.dict(os.environ, env, clear=True):
        reset_config()
        yield
        reset_config()


@pytest.fixture
def config():
    """Default builder configuration."""
    return OptionsConfig()


@pytest.fixture
def fail_fast_config():
    """Configuration that raises validation errors when options are applied."""
    return OptionsConfig(fail_fast=True)


@pytest.fixture
def sorted_config():
    """Configuration producing deterministic payload key order."""
    return OptionsConfig(json_sort_keys=True)
