import logging
from logging import NullHandler
from typing import Iterable, Optional

import pytest

from virtual1403.scanner import EventRecorder, PrinterScanner, ScannerConfig

JOBINFO = "JOB00042 HERCULES"


@pytest.fixture
def jobinfo():
    """Fixture providing the job descriptor used by run_scanner."""
    return JOBINFO


@pytest.fixture
def run_scanner():
    """Fixture providing a helper that scans chunks and returns the recorder."""

    def _run(
        chunks: Iterable[bytes],
        jobinfo: str = JOBINFO,
        config: Optional[ScannerConfig] = None,
    ) -> EventRecorder:
        recorder = EventRecorder()
        scanner = PrinterScanner(recorder, config)
        for chunk in chunks:
            scanner.feed(chunk)
        scanner.close(jobinfo)
        return recorder

    return _run


@pytest.fixture
def recorder():
    """Fixture providing an empty EventRecorder."""
    return EventRecorder()


@pytest.fixture
def scanner(recorder):
    """Fixture providing a PrinterScanner with default 1403 geometry."""
    return PrinterScanner(recorder)


def pytest_configure(config):
    config.addinivalue_line("markers", "property: property-based scanner tests")


@pytest.fixture(autouse=True)
def suppress_logging():
    logger = logging.getLogger()
    old_handlers = logger.handlers[:]
    old_level = logger.level
    null_handler = NullHandler()
    logger.addHandler(null_handler)
    yield
    try:
        logger.removeHandler(null_handler)
    except ValueError:
        pass
    # Restore any handlers that were removed during the test
    current_handlers = logger.handlers[:]
    for h in old_handlers:
        if h not in current_handlers:
            logger.addHandler(h)
    # Remove any handlers that were not present before
    for h in logger.handlers[:]:
        if h not in old_handlers:
            logger.removeHandler(h)
    logger.setLevel(old_level)
