# Assumptions:
# - Using pytest for testing framework
# - Correlation and trace IDs live in context variables

import asyncio
import logging

import pytest
import structlog
from pythonjsonlogger import jsonlogger

from toolkit.logging import (
    CORRELATION_ID_HEADER,
    TRACE_ID_HEADER,
    clear_correlation_context,
    correlation_headers,
    get_correlation_id,
    get_trace_id,
    set_correlation_id,
    set_trace_id,
    setup_logging,
)
from toolkit.logging.setup import add_correlation_context, add_service_context


class TestCorrelationContext:
    """Test cases for correlation and trace ID context"""

    def test_defaults_to_none(self):
        assert get_correlation_id() is None
        assert get_trace_id() is None
        assert correlation_headers() == {}

    def test_set_and_clear(self):
        set_correlation_id("corr-123")
        set_trace_id("trace-456")

        assert correlation_headers() == {
            CORRELATION_ID_HEADER: "corr-123",
            TRACE_ID_HEADER: "trace-456",
        }

        clear_correlation_context()
        assert get_correlation_id() is None
        assert get_trace_id() is None

    @pytest.mark.asyncio
    async def test_isolated_between_tasks(self):
        async def worker(correlation_id):
            set_correlation_id(correlation_id)
            await asyncio.sleep(0)
            return get_correlation_id()

        results = await asyncio.gather(worker("a"), worker("b"))

        assert results == ["a", "b"]


class TestProcessors:
    """Test cases for structlog processors"""

    def test_add_service_context(self):
        processor = add_service_context("billing")

        assert processor(None, "info", {"event": "hello"}) == {"event": "hello", "service": "billing"}

    def test_add_correlation_context(self):
        set_correlation_id("corr-123")
        processor = add_correlation_context()

        event_dict = processor(None, "info", {"event": "hello"})

        assert event_dict == {"event": "hello", "correlation_id": "corr-123"}


class TestSetupLogging:
    """Test cases for setup_logging"""

    def test_json_format(self):
        setup_logging("billing", level="DEBUG", format_type="json")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, jsonlogger.JsonFormatter)

    def test_console_format(self):
        setup_logging("billing", format_type="console")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
