from __future__ import annotations

import logging
from datetime import datetime

import pytest

from cashflow.core.log import init_logging, log_context, set_level, shutdown_logging, timeit
from cashflow.core.log.context import ContextFilter

LOGGER_NAME = "cashflow.tests"


def _record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(LOGGER_NAME, logging.INFO, __file__, 1, message, None, None)


def test_scoped_context_is_restored() -> None:
    log_context.bind(request="r1")
    try:
        with log_context.scoped(tool="get_revenue_summary", ignored=None):
            assert log_context.as_dict() == {"request": "r1", "tool": "get_revenue_summary"}
        assert log_context.as_dict() == {"request": "r1"}
    finally:
        log_context.clear()


def test_context_filter_prefixes_bound_values() -> None:
    context_filter = ContextFilter()

    bare = _record()
    context_filter.filter(bare)
    with log_context.scoped(tool="find_data_anomalies"):
        tagged = _record()
        context_filter.filter(tagged)

    assert bare.context == ""
    assert tagged.context == "tool=find_data_anomalies "


def test_timeit_logs_success(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)

    with timeit("Scan", logger=logger, unit="rows") as timer:
        timer.add(3)

    assert "Scan completed in" in caplog.text
    assert "3 rows" in caplog.text


def test_timeit_logs_and_reraises_failure(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)

    with pytest.raises(RuntimeError):
        with timeit("Scan", logger=logger):
            raise RuntimeError("boom")

    assert caplog.records[-1].levelno == logging.ERROR
    assert "Scan failed after" in caplog.records[-1].getMessage()


def test_daily_file_handler_writes_context(tmp_path) -> None:
    shutdown_logging()
    try:
        init_logging(console=False, log_dir=tmp_path, level="INFO")
        with log_context.scoped(tool="list_pricing_plans"):
            logging.getLogger(LOGGER_NAME).info("written to disk")
    finally:
        shutdown_logging()

    log_file = tmp_path / f"{datetime.now().strftime('%Y_%m_%d')}.log"
    content = log_file.read_text(encoding="utf-8")
    assert "tool=list_pricing_plans written to disk" in content
    assert "| INFO     | cashflow.tests |" in content


def test_set_level_updates_installed_handlers(tmp_path) -> None:
    shutdown_logging()
    try:
        init_logging(console=False, log_dir=tmp_path, level="INFO")
        set_level("WARNING")
        logger = logging.getLogger(LOGGER_NAME)
        logger.info("dropped")
        logger.warning("kept")
    finally:
        shutdown_logging()

    content = (tmp_path / f"{datetime.now().strftime('%Y_%m_%d')}.log").read_text(encoding="utf-8")
    assert "kept" in content
    assert "dropped" not in content
