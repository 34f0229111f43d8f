"""
Tests for structured logging of store operations.
"""

import logging

from embedstore.util.logging import StructuredLogger, logger, truncate_text


def test_log_operation_format(caplog):
    test_logger = StructuredLogger("embedstore.test")

    with caplog.at_level(logging.INFO, logger="embedstore.test"):
        test_logger.log_operation("store.upsert", "success", {"doc_id": "a"})

    assert "Operation: store.upsert, Status: success, Details: {'doc_id': 'a'}" in caplog.text


def test_failed_operations_log_as_warning(caplog):
    test_logger = StructuredLogger("embedstore.test.failed")

    with caplog.at_level(logging.INFO, logger="embedstore.test.failed"):
        test_logger.log_store_operation("upsert", "kb", {"doc_id": "a"}, status="rejected")

    assert caplog.records[-1].levelno == logging.WARNING
    assert "'store': 'kb'" in caplog.records[-1].getMessage()


def test_search_logging(caplog):
    test_logger = StructuredLogger("embedstore.test.search")

    with caplog.at_level(logging.INFO, logger="embedstore.test.search"):
        test_logger.log_search("kb", top_k=5, hits=2, scanned=10)

    message = caplog.records[-1].getMessage()
    assert "store.search" in message
    assert "'scanned': 10" in message


def test_store_operations_are_logged(caplog, record_store):
    with caplog.at_level(logging.INFO, logger="embedstore"):
        record_store.upsert("a", "cat", [0.1, 0.2, 0.3, 0.4])
        record_store.upsert("b", "dog", [0.1, 0.2])

    messages = [r.getMessage() for r in caplog.records]
    assert any("store.upsert, Status: success" in m for m in messages)
    assert any("store.upsert, Status: rejected" in m for m in messages)


def test_global_logger():
    assert logger.logger.name == "embedstore"
    assert logger.logger.handlers


def test_truncate_text():
    assert truncate_text("short") == "short"
    assert truncate_text("x" * 60) == "x" * 50 + "..."
    assert truncate_text(None) == ""
