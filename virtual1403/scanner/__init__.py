"""Printer stream scanning: carriage-control bytes in, print events out."""

from .config import DEFAULT_CONFIG, OverflowPolicy, ScannerConfig
from .constants import (
    CHAR_CR,
    CHAR_FF,
    CHAR_LF,
    CHAR_TAB,
    CONTROL_BYTES,
    MAX_LINE_LEN,
    TAB_WIDTH,
)
from .handler import (
    EndOfJobEvent,
    EventRecorder,
    LineEvent,
    PageBreakEvent,
    PrintEvent,
    PrinterHandler,
    TextPageHandler,
)
from .scanner import JobSummary, PrinterScanner, scan_bytes, scan_stream

__all__ = [
    "PrinterScanner",
    "JobSummary",
    "scan_bytes",
    "scan_stream",
    "PrinterHandler",
    "EventRecorder",
    "TextPageHandler",
    "LineEvent",
    "PageBreakEvent",
    "EndOfJobEvent",
    "PrintEvent",
    "ScannerConfig",
    "OverflowPolicy",
    "DEFAULT_CONFIG",
    "MAX_LINE_LEN",
    "TAB_WIDTH",
    "CHAR_TAB",
    "CHAR_LF",
    "CHAR_FF",
    "CHAR_CR",
    "CONTROL_BYTES",
]
