"""Unit tests for infrastructure.logging.setup module.

Tests cover:
- configure_logging function
- get_module_logger context binding
- Test logging suppression in test environment
"""

import logging

import pytest

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
    _is_test_environment,
)


@pytest.mark.unit
class TestIsTestEnvironment:
    def test_detects_pytest_in_sys_modules(self):
        """Returns True when pytest is in sys.modules."""
        assert _is_test_environment() is True


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_configure_logging_returns_bound_logger(self, mock_settings):
        result = configure_logging(settings=mock_settings)

        assert hasattr(result, "info")
        assert hasattr(result, "warning")
        assert hasattr(result, "error")

    def test_configure_logging_accepts_overrides(self, mock_settings):
        assert configure_logging(settings=mock_settings, log_level="DEBUG")
        assert configure_logging(settings=mock_settings, is_production=True)

    def test_configure_logging_suppresses_output_under_pytest(self, mock_settings):
        configure_logging(settings=mock_settings)

        assert logging.root.level > logging.CRITICAL


@pytest.mark.unit
class TestGetModuleLogger:
    def test_binds_calling_module(self):
        logger = get_module_logger()

        context = logger._context
        assert context["component"] == "test_setup"
        assert context["module_path"].endswith("test_setup")
