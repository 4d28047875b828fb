"""
Handler contract for printer stream scanning, plus two stock handlers.

A PrinterScanner reports everything it finds through a PrinterHandler, in
stream order, on the thread that drives the scanner:

- ``add_line(line, linefeed)`` once per completed print line
- ``page_break()`` once per form feed
- ``end_of_job(jobinfo)`` exactly once, last

``linefeed=False`` marks an overstrike: the next line is printed over this one
instead of on a fresh line.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

__all__ = [
    "PrinterHandler",
    "LineEvent",
    "PageBreakEvent",
    "EndOfJobEvent",
    "PrintEvent",
    "EventRecorder",
    "TextPageHandler",
]


class PrinterHandler(ABC):
    """Receives the output of printer stream scanning."""

    @abstractmethod
    def add_line(self, line: str, linefeed: bool) -> None:
        """A print line completed. ``linefeed`` is False for an overstrike."""
        raise NotImplementedError("Subclasses must implement add_line")

    @abstractmethod
    def page_break(self) -> None:
        """The paper was thrown to the top of the next page."""
        raise NotImplementedError("Subclasses must implement page_break")

    @abstractmethod
    def end_of_job(self, jobinfo: str) -> None:
        """The job ended; ``jobinfo`` is the caller's opaque descriptor."""
        raise NotImplementedError("Subclasses must implement end_of_job")


@dataclass(frozen=True)
class LineEvent:
    line: str
    linefeed: bool


@dataclass(frozen=True)
class PageBreakEvent:
    pass


@dataclass(frozen=True)
class EndOfJobEvent:
    jobinfo: str


PrintEvent = Union[LineEvent, PageBreakEvent, EndOfJobEvent]


class EventRecorder(PrinterHandler):
    """Ordered recorder turning handler calls into tagged events.

    Useful when the caller would rather walk a list after the job than
    implement the three callbacks, and for tests.
    """

    def __init__(self) -> None:
        self._events: List[PrintEvent] = []

    def add_line(self, line: str, linefeed: bool) -> None:
        self._events.append(LineEvent(line, linefeed))

    def page_break(self) -> None:
        self._events.append(PageBreakEvent())

    def end_of_job(self, jobinfo: str) -> None:
        self._events.append(EndOfJobEvent(jobinfo))

    # Public API ---------------------------------------------------------------
    @property
    def events(self) -> List[PrintEvent]:
        return list(self._events)

    @property
    def lines(self) -> List[LineEvent]:
        return [e for e in self._events if isinstance(e, LineEvent)]

    @property
    def page_breaks(self) -> int:
        return sum(1 for e in self._events if isinstance(e, PageBreakEvent))

    @property
    def finished(self) -> bool:
        return bool(self._events) and isinstance(self._events[-1], EndOfJobEvent)

    @property
    def jobinfo(self) -> Optional[str]:
        if self.finished:
            last = self._events[-1]
            assert isinstance(last, EndOfJobEvent)
            return last.jobinfo
        return None

    def clear(self) -> None:
        self._events.clear()


class TextPageHandler(PrinterHandler):
    """Compose scanner output into plain-text pages.

    Overstruck lines are merged into one physical line. Characters already
    struck stay; a later pass only fills columns that are still blank, so an
    underline pass leaves the text it underlines readable.
    A page break always closes the current page, even an empty one; the page
    still open at end of job is kept only if something was printed on it.
    """

    def __init__(self) -> None:
        self._pages: List[str] = []
        self._page_lines: List[str] = []
        self._overlay: Optional[List[str]] = None
        self.jobinfo: Optional[str] = None

    def add_line(self, line: str, linefeed: bool) -> None:
        if self._overlay is None:
            self._overlay = list(line)
        else:
            if len(line) > len(self._overlay):
                self._overlay.extend(" " * (len(line) - len(self._overlay)))
            for col, ch in enumerate(line):
                if ch != " " and self._overlay[col] == " ":
                    self._overlay[col] = ch
        if linefeed:
            self._commit_overlay()

    def page_break(self) -> None:
        self._commit_overlay()
        self._pages.append(self._page_text())
        self._page_lines = []

    def end_of_job(self, jobinfo: str) -> None:
        self._commit_overlay()
        if self._page_lines:
            self._pages.append(self._page_text())
            self._page_lines = []
        self.jobinfo = jobinfo
        logger.debug(
            "TextPageHandler composed %d page(s) for job %r", len(self._pages), jobinfo
        )

    @property
    def pages(self) -> List[str]:
        return list(self._pages)

    def render(self) -> str:
        """Return all finished pages separated by form feeds."""
        return "\f".join(self._pages)

    def _commit_overlay(self) -> None:
        if self._overlay is not None:
            self._page_lines.append("".join(self._overlay))
            self._overlay = None

    def _page_text(self) -> str:
        return "".join(line + "\n" for line in self._page_lines)
