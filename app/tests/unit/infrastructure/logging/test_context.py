"""Unit tests for infrastructure.logging.context module.

Tests cover:
- bind_request_context() context manager
- get_correlation_id()
- Context isolation and cleanup
"""

import uuid

import pytest
import structlog

from infrastructure.logging.context import bind_request_context, get_correlation_id


@pytest.mark.unit
class TestBindRequestContext:
    """Test suite for bind_request_context context manager."""

    def test_auto_generates_correlation_id(self):
        with bind_request_context(principal="alice"):
            correlation_id = get_correlation_id()
            assert correlation_id is not None
            uuid.UUID(correlation_id)

    def test_uses_provided_correlation_id(self):
        with bind_request_context(correlation_id="req-123"):
            assert get_correlation_id() == "req-123"

    def test_binds_request_details(self):
        with bind_request_context(
            principal="alice",
            request_path="/api/v1/translations",
            request_method="POST",
            locale="en",
        ):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["principal"] == "alice"
            assert ctx["request_path"] == "/api/v1/translations"
            assert ctx["request_method"] == "POST"
            assert ctx["locale"] == "en"

    def test_omits_missing_values(self):
        with bind_request_context(correlation_id="req-1"):
            ctx = structlog.contextvars.get_contextvars()
            assert "principal" not in ctx
            assert "request_path" not in ctx

    def test_context_cleared_on_exit(self):
        with bind_request_context(correlation_id="req-1", principal="alice"):
            pass

        ctx = structlog.contextvars.get_contextvars()
        assert "correlation_id" not in ctx
        assert "principal" not in ctx

    def test_context_cleared_on_exception(self):
        with pytest.raises(RuntimeError):
            with bind_request_context(correlation_id="req-1"):
                raise RuntimeError("boom")

        assert get_correlation_id() is None
