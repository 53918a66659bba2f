import logging

import pytest

from bikeplanner.core.logging import (
    TraceIdFilter,
    bind_trace_id,
    configure_logging,
    current_trace_id,
    trace_id_from_header,
    unbind_trace_id,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_valid_header_value_is_reused_lowercased() -> None:
    assert trace_id_from_header(" ABCDEF12-3456 ") == "abcdef12-3456"


@pytest.mark.parametrize("value", [None, "", "short", "not a trace id!", "x" * 20])
def test_missing_or_invalid_header_gets_fresh_id(value) -> None:
    trace_id = trace_id_from_header(value)

    assert len(trace_id) == 32
    assert trace_id != trace_id_from_header(value)


def test_bound_trace_id_is_visible_until_unbound() -> None:
    assert current_trace_id() == "-"

    token = bind_trace_id("abcdef1234")
    try:
        assert current_trace_id() == "abcdef1234"
    finally:
        unbind_trace_id(token)

    assert current_trace_id() == "-"


def test_filter_stamps_records_with_current_trace_id() -> None:
    record = logging.LogRecord("bikeplanner", logging.INFO, __file__, 1, "hello", None, None)
    token = bind_trace_id("0123456789abcdef")
    try:
        assert TraceIdFilter().filter(record) is True
    finally:
        unbind_trace_id(token)

    assert record.trace_id == "0123456789abcdef"


def test_configure_logging_installs_single_traced_handler(restore_root_logger) -> None:
    logger = configure_logging("bikeplanner-test", "DEBUG")

    root = restore_root_logger
    assert logger.name == "bikeplanner-test"
    assert len(root.handlers) == 1
    assert any(isinstance(f, TraceIdFilter) for f in root.handlers[0].filters)
    assert root.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
