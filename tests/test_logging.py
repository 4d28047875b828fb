import json
import logging
import sys

import pytest

from virtual1403 import JSONFormatter, setup_logging
from virtual1403.exceptions import ConfigurationError, ScannerStateError
from virtual1403.scanner import EventRecorder, PrinterScanner


def test_job_completion_logged_at_info(caplog):
    caplog.set_level(logging.INFO, logger="virtual1403")
    scanner = PrinterScanner(EventRecorder())
    scanner.feed(b"A\rB\n\f")
    scanner.close("JOB7")
    messages = [r.getMessage() for r in caplog.records]
    assert any(
        "[JOB] Job completed: 'JOB7' lines=2 overstrikes=1 page_breaks=1" in m
        for m in messages
    )


def test_job_completion_record_carries_jobinfo(caplog):
    caplog.set_level(logging.INFO, logger="virtual1403")
    scanner = PrinterScanner(EventRecorder())
    scanner.feed(b"A\n")
    scanner.close("JOB7")
    (record,) = [r for r in caplog.records if "Job completed" in r.getMessage()]
    assert record.jobinfo == "JOB7"
    assert json.loads(JSONFormatter().format(record))["jobinfo"] == "JOB7"


def test_truncation_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="virtual1403")
    scanner = PrinterScanner(EventRecorder())
    scanner.feed(b"X" * 135 + b"\n")
    assert any(
        "Line truncated: dropped 3 char(s) past column 132" in r.getMessage()
        for r in caplog.records
    )


def test_feed_logs_chunk_preview_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="virtual1403")
    PrinterScanner(EventRecorder()).feed(b"AB")
    assert any("[DATA] feed - len=2" in r.getMessage() for r in caplog.records)


def test_reentrant_call_logged_as_warning(caplog):
    class Reentrant(EventRecorder):
        def page_break(self):
            self.scanner.close("again")

    handler = Reentrant()
    handler.scanner = PrinterScanner(handler)
    with pytest.raises(ScannerStateError):
        handler.scanner.feed(b"\f")
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert any("[SCANNER] close" in r.getMessage() for r in warnings)


def test_setup_logging_plain():
    setup_logging("DEBUG")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert root.handlers
    assert not any(isinstance(h.formatter, JSONFormatter) for h in root.handlers)


def test_setup_logging_json(monkeypatch):
    monkeypatch.setenv("VIRTUAL1403_LOG_JSON", "true")
    setup_logging("info")
    root = logging.getLogger()
    assert root.level == logging.INFO
    assert any(isinstance(h.formatter, JSONFormatter) for h in root.handlers)


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ConfigurationError):
        setup_logging("LOUD")


def test_json_formatter_fields():
    record = logging.LogRecord(
        "virtual1403.scanner.scanner",
        logging.INFO,
        __file__,
        10,
        "Job %s completed",
        ("JOB1",),
        None,
    )
    record.jobinfo = "JOB1"
    record.virtual1403_extra = {"lines": 3}
    entry = json.loads(JSONFormatter().format(record))
    assert entry["level"] == "INFO"
    assert entry["message"] == "Job JOB1 completed"
    assert entry["jobinfo"] == "JOB1"
    assert entry["lines"] == 3


def test_json_formatter_exception_context():
    try:
        raise ScannerStateError("feed after close", context={"operation": "feed"})
    except ScannerStateError:
        exc_info = sys.exc_info()
    record = logging.LogRecord(
        "virtual1403", logging.ERROR, __file__, 1, "failed", (), exc_info
    )
    entry = json.loads(JSONFormatter().format(record))
    assert "ScannerStateError" in entry["exception"]
    assert entry["context"] == {"operation": "feed"}
