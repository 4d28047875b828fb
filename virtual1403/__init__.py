"""
virtual1403 package init.
Exports the printer stream scanner, its handlers and logging setup.
"""

import argparse
import dataclasses
import datetime
import json
import logging
import os
import sys
from typing import List, Optional

from .exceptions import ConfigurationError, ScannerStateError, Virtual1403Error
from .scanner import (
    EndOfJobEvent,
    EventRecorder,
    JobSummary,
    LineEvent,
    OverflowPolicy,
    PageBreakEvent,
    PrinterHandler,
    PrinterScanner,
    ScannerConfig,
    TextPageHandler,
    scan_bytes,
    scan_stream,
)


class JSONFormatter(logging.Formatter):
    """JSON formatter with structured logging support."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.datetime.now().isoformat(),
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        jobinfo = getattr(record, "jobinfo", None)
        if jobinfo:
            log_entry["jobinfo"] = jobinfo

        extra = getattr(record, "virtual1403_extra", {})
        if extra:
            log_entry.update(extra)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
            context = getattr(record.exc_info[1], "context", None)
            if context:
                log_entry["context"] = context

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "WARNING") -> None:
    """
    Setup basic logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Set ``VIRTUAL1403_LOG_JSON=true`` for one JSON object per log record.
    """
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise ConfigurationError(f"Unknown log level '{level}'")
    use_json = os.environ.get("VIRTUAL1403_LOG_JSON", "false").lower() == "true"
    root = logging.getLogger()
    root.setLevel(numeric)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    if use_json:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    else:
        logging.basicConfig(level=numeric)


def _format_events(recorder: EventRecorder) -> str:
    out = []
    for event in recorder.events:
        if isinstance(event, LineEvent):
            out.append(f"LINE\t{int(event.linefeed)}\t{event.line}\n")
        elif isinstance(event, PageBreakEvent):
            out.append("PAGE\n")
        elif isinstance(event, EndOfJobEvent):
            out.append(f"EOJ\t{event.jobinfo}\n")
    return "".join(out)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point: scan a printer stream file and print the result."""
    parser = argparse.ArgumentParser(
        prog="virtual1403",
        description="virtual1403 - scan a line-printer stream into pages",
    )
    parser.add_argument("file", help="Printer stream file ('-' for stdin)")
    parser.add_argument(
        "--jobinfo", help="Job descriptor reported at end of job (default: file name)"
    )
    parser.add_argument("--max-line-len", type=int, help="Print line width")
    parser.add_argument("--tab-width", type=int, help="Columns between tab stops")
    parser.add_argument(
        "--wrap",
        action="store_true",
        help="Continue overlong lines on a new line instead of truncating",
    )
    parser.add_argument(
        "--events",
        action="store_true",
        help="Print one line per scanner event instead of composed pages",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args(argv)

    try:
        setup_logging(args.log_level)
        config = ScannerConfig.from_env()
        overrides = {}
        if args.max_line_len is not None:
            overrides["max_line_len"] = args.max_line_len
        if args.tab_width is not None:
            overrides["tab_width"] = args.tab_width
        if args.wrap:
            overrides["overflow"] = OverflowPolicy.WRAP
        if overrides:
            config = dataclasses.replace(config, **overrides)
    except ConfigurationError as e:
        parser.error(str(e))

    jobinfo = args.jobinfo if args.jobinfo is not None else args.file
    handler: PrinterHandler = EventRecorder() if args.events else TextPageHandler()

    try:
        if args.file == "-":
            scan_stream(sys.stdin.buffer, handler, jobinfo, config)
        else:
            with open(args.file, "rb") as stream:
                scan_stream(stream, handler, jobinfo, config)
    except OSError as e:
        logging.getLogger(__name__).error(f"Cannot read {args.file}: {e}")
        return 1

    if isinstance(handler, EventRecorder):
        sys.stdout.write(_format_events(handler))
    else:
        assert isinstance(handler, TextPageHandler)
        sys.stdout.write(handler.render())
    return 0


__all__ = [
    "PrinterScanner",
    "PrinterHandler",
    "EventRecorder",
    "TextPageHandler",
    "LineEvent",
    "PageBreakEvent",
    "EndOfJobEvent",
    "JobSummary",
    "ScannerConfig",
    "OverflowPolicy",
    "scan_bytes",
    "scan_stream",
    "Virtual1403Error",
    "ScannerStateError",
    "ConfigurationError",
    "JSONFormatter",
    "setup_logging",
    "main",
]
