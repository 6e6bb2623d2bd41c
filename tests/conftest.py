"""Pytest configuration and shared fixtures for the html2md test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Verbosity, settings
from utils import cleanup_test_dir, create_test_temp_dir

from html2md import Converter
from html2md.plugins import github_flavored

# Configure Hypothesis for property-based testing
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")
    config.addinivalue_line("markers", "slow: Slow tests over large inputs")


@pytest.fixture(autouse=True)
def reset_root_logging() -> Generator[None, None, None]:
    """Restore root logger handlers changed by the CLI's logging setup."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    try:
        yield
    finally:
        root_logger.handlers[:] = handlers
        root_logger.setLevel(level)
        logging.captureWarnings(False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def converter() -> Converter:
    """Provide a converter with only the default rule set."""
    return Converter()


@pytest.fixture
def gfm_converter() -> Converter:
    """Provide a converter with the GitHub flavoured plugins installed."""
    return Converter().use(github_flavored())
