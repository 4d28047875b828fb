"""
Printer stream scanner for the virtual 1403.

Turns the raw byte stream of a spooled line printer into print events on a
PrinterHandler: completed lines (with or without paper advance), page breaks
and end of job. The stream is consumed incrementally; nothing beyond the
current partial line is ever buffered.
"""

import logging
import re
import time
from dataclasses import dataclass
from typing import BinaryIO, Optional, Union

from ..exceptions import ScannerStateError
from ..utils.logging_utils import (
    log_data_processing,
    log_debug_operation,
    log_job_event,
    log_scanner_warning,
)
from .config import DEFAULT_CONFIG, OverflowPolicy, ScannerConfig
from .constants import CHAR_CR, CHAR_FF, CHAR_LF, CHAR_TAB, LINE_ENCODING
from .handler import PrinterHandler

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]

# Longest run of bytes that are not one of the four controls.
_PRINTABLE_RUN = re.compile(
    b"[^" + re.escape(bytes((CHAR_TAB, CHAR_LF, CHAR_FF, CHAR_CR))) + b"]+"
)

DEFAULT_CHUNK_SIZE = 4096


@dataclass(frozen=True)
class JobSummary:
    """Counters for one finished job."""

    jobinfo: str
    lines: int
    overstrikes: int
    page_breaks: int
    bytes_fed: int
    dropped_chars: int
    duration: float


class PrinterScanner:
    """Streaming carriage-control state machine for one print job.

    Feed bytes with :meth:`feed` in arrival order and finish with
    :meth:`close`. One instance serves exactly one job and must be driven by
    one caller at a time; there is no internal locking.
    """

    def __init__(
        self, handler: PrinterHandler, config: Optional[ScannerConfig] = None
    ) -> None:
        self.handler = handler
        self.config = config or DEFAULT_CONFIG
        self._line = bytearray()
        # Set right after a CR closed a line; a following LF is part of the same
        # line end and must not produce a second line.
        self._after_cr = False
        self._closed = False
        self._failed = False
        self._busy = False
        self._jobinfo: Optional[str] = None
        self._line_dropped = 0

        self.lines = 0
        self.overstrikes = 0
        self.page_breaks = 0
        self.bytes_fed = 0
        self.dropped_chars = 0
        self._start_time = time.monotonic()

    # Public API ---------------------------------------------------------------
    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def column(self) -> int:
        """Current write position on the line being assembled."""
        return len(self._line)

    @property
    def line_in_progress(self) -> bool:
        return len(self._line) > 0

    def feed(self, data: BytesLike) -> None:
        """
        Process the next chunk of the print stream.

        Args:
            data: Raw printer bytes, in arrival order. Chunk boundaries carry no
                meaning; any split of a stream yields the same events.

        Raises:
            TypeError: If ``data`` is not a bytes-like object.
            ScannerStateError: If the scanner is closed, aborted, or already busy.
        """
        self._check_state("feed")
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"PrinterScanner.feed() requires bytes, not {type(data).__name__}"
            )
        self._busy = True
        try:
            if not isinstance(data, bytes):
                data = bytes(data)
            self.bytes_fed += len(data)
            if logger.isEnabledFor(logging.DEBUG):
                log_data_processing(
                    logger,
                    "feed",
                    f"len={len(data)} column={self.column} preview_hex={data[:32].hex()}",
                )
            self._scan(data)
        except Exception:
            self._failed = True
            raise
        finally:
            self._busy = False

    def close(self, jobinfo: str) -> JobSummary:
        """
        Signal end of stream.

        Flushes a partial line (as a normal, advancing line) and then reports
        end of job with ``jobinfo``.

        Args:
            jobinfo: Opaque job descriptor handed through to the handler.

        Returns:
            JobSummary with the job's counters.

        Raises:
            TypeError: If ``jobinfo`` is not a string.
            ScannerStateError: If the scanner is closed, aborted, or already busy.
        """
        self._check_state("close")
        if not isinstance(jobinfo, str):
            raise TypeError("jobinfo must be a str")
        self._busy = True
        try:
            if self.line_in_progress:
                self._end_line(linefeed=True)
            self._after_cr = False
            self._closed = True
            self._jobinfo = jobinfo
            summary = self.summary()
            self.handler.end_of_job(jobinfo)
        except Exception:
            self._failed = True
            raise
        finally:
            self._busy = False
        log_job_event(
            logger,
            "Job completed",
            f"{jobinfo!r} lines={summary.lines} overstrikes={summary.overstrikes} "
            f"page_breaks={summary.page_breaks} bytes={summary.bytes_fed}",
            jobinfo=jobinfo,
        )
        return summary

    def summary(self) -> JobSummary:
        """Counters so far; ``jobinfo`` is empty until the job is closed."""
        return JobSummary(
            jobinfo=self._jobinfo or "",
            lines=self.lines,
            overstrikes=self.overstrikes,
            page_breaks=self.page_breaks,
            bytes_fed=self.bytes_fed,
            dropped_chars=self.dropped_chars,
            duration=time.monotonic() - self._start_time,
        )

    def __repr__(self) -> str:
        state = "closed" if self._closed else "failed" if self._failed else "open"
        return (
            f"PrinterScanner(state={state}, column={self.column}, "
            f"lines={self.lines}, page_breaks={self.page_breaks})"
        )

    # Internal -----------------------------------------------------------------
    def _check_state(self, operation: str) -> None:
        if self._busy:
            log_scanner_warning(logger, operation, "re-entrant call rejected")
            raise ScannerStateError(
                f"PrinterScanner.{operation}() called while another call is in progress",
                context={"operation": operation},
            )
        if self._closed:
            raise ScannerStateError(
                f"PrinterScanner.{operation}() called after close",
                context={"operation": operation, "jobinfo": self._jobinfo},
            )
        if self._failed:
            raise ScannerStateError(
                f"PrinterScanner.{operation}() called after a handler error aborted the job",
                context={"operation": operation},
            )

    def _scan(self, data: bytes) -> None:
        i = 0
        n = len(data)
        while i < n:
            byte = data[i]

            if byte == CHAR_LF:
                if self._after_cr:
                    # CR LF: the CR already ended this line
                    self._after_cr = False
                else:
                    self._end_line(linefeed=True)
                i += 1
                continue

            self._after_cr = False

            if byte == CHAR_CR:
                self._end_line(linefeed=False)
                self._after_cr = True
                i += 1
                continue

            if byte == CHAR_FF:
                if self.line_in_progress:
                    self._end_line(linefeed=True)
                self._page_break()
                i += 1
                continue

            if byte == CHAR_TAB:
                self._tab()
                i += 1
                continue

            match = _PRINTABLE_RUN.match(data, i)
            assert match is not None
            self._put(match.group())
            i = match.end()

    def _put(self, run: bytes) -> None:
        limit = self.config.max_line_len
        if self.config.overflow is OverflowPolicy.WRAP:
            pos = 0
            while pos < len(run):
                if len(self._line) >= limit:
                    self._end_line(linefeed=True)
                room = limit - len(self._line)
                self._line.extend(run[pos : pos + room])
                pos += room
            return

        room = limit - len(self._line)
        if len(run) > room:
            self._line_dropped += len(run) - room
            run = run[:room]
        self._line.extend(run)

    def _tab(self) -> None:
        width = self.config.tab_width
        column = len(self._line)
        stop = min((column // width + 1) * width, self.config.max_line_len)
        if stop > column:
            self._line.extend(b" " * (stop - column))

    def _end_line(self, linefeed: bool) -> None:
        line = self._line.decode(LINE_ENCODING)
        self._line = bytearray()
        if self._line_dropped:
            log_debug_operation(
                logger,
                "Line truncated",
                f"dropped {self._line_dropped} char(s) past column {self.config.max_line_len}",
            )
            self.dropped_chars += self._line_dropped
            self._line_dropped = 0
        self.lines += 1
        if not linefeed:
            self.overstrikes += 1
        self.handler.add_line(line, linefeed)

    def _page_break(self) -> None:
        self.page_breaks += 1
        self.handler.page_break()


def scan_bytes(
    data: BytesLike,
    handler: PrinterHandler,
    jobinfo: str,
    config: Optional[ScannerConfig] = None,
) -> JobSummary:
    """Scan a complete in-memory print stream as one job."""
    scanner = PrinterScanner(handler, config)
    scanner.feed(data)
    return scanner.close(jobinfo)


def scan_stream(
    stream: BinaryIO,
    handler: PrinterHandler,
    jobinfo: str,
    config: Optional[ScannerConfig] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> JobSummary:
    """
    Scan a print stream read from a binary file-like object until EOF.

    Args:
        stream: Object with a ``read(n)`` method returning bytes
        handler: Receiver of the print events
        jobinfo: Opaque job descriptor reported at end of job
        config: Scanner settings, defaults to the 1403 geometry
        chunk_size: Bytes requested per read

    Returns:
        JobSummary of the finished job.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    scanner = PrinterScanner(handler, config)
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        scanner.feed(chunk)
    return scanner.close(jobinfo)


__all__ = [
    "PrinterScanner",
    "JobSummary",
    "scan_bytes",
    "scan_stream",
    "DEFAULT_CHUNK_SIZE",
]
