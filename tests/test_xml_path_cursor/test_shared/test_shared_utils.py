"""Tests for logging, metrics and the exception hierarchy."""

import logging

from xml_path_cursor.shared import (
    InvalidMoveError,
    NavigationError,
    StreamReadError,
    TraversalMetrics,
    get_logger,
)


class TestCorrelationLogger:
    """Test correlation-aware logging."""

    def test_component_defaults_to_module_name(self):
        logger = get_logger("xml_path_cursor.navigation.cursor")
        assert logger.component == "cursor"
        assert logger.correlation_id is None

    def test_records_carry_correlation_info(self, caplog):
        logger = get_logger("xml_path_cursor.test", "corr-42", "tester")

        with caplog.at_level(logging.INFO, logger="xml_path_cursor.test"):
            logger.info("hello", extra={"depth": 3})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.correlation_id == "corr-42"
        assert record.component == "tester"
        assert record.depth == 3

    def test_debug_enabled_flag(self):
        logger = get_logger("xml_path_cursor.test.debug")
        logger.logger.setLevel(logging.DEBUG)
        assert logger.is_debug_enabled() is True
        logger.logger.setLevel(logging.WARNING)
        assert logger.is_debug_enabled() is False


class TestTraversalMetrics:
    """Test traversal counters."""

    def test_defaults(self):
        metrics = TraversalMetrics()
        assert metrics.events_consumed == 0
        assert metrics.max_depth == 0
        assert metrics.elapsed_ms >= 0.0

    def test_record_depth_keeps_maximum(self):
        metrics = TraversalMetrics()
        metrics.record_depth(3)
        metrics.record_depth(1)
        assert metrics.max_depth == 3

    def test_memory_reading(self):
        assert TraversalMetrics().memory_rss_bytes > 0

    def test_to_dict(self):
        metrics = TraversalMetrics(events_consumed=10, elements_entered=4)
        data = metrics.to_dict()
        assert data["events_consumed"] == 10
        assert data["elements_entered"] == 4
        assert "elapsed_ms" in data


class TestErrors:
    """Test the exception hierarchy."""

    def test_hierarchy(self):
        assert issubclass(StreamReadError, NavigationError)
        assert issubclass(InvalidMoveError, NavigationError)
        assert issubclass(InvalidMoveError, ValueError)
        assert not issubclass(StreamReadError, ValueError)

    def test_stream_error_position(self):
        error = StreamReadError("bad", line=3, column=7)
        assert str(error) == "bad"
        assert (error.line, error.column) == (3, 7)
