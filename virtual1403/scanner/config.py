"""Scanner configuration: line width, tab stops and overflow policy."""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from ..exceptions import ConfigurationError
from .constants import MAX_LINE_LEN, TAB_WIDTH

logger = logging.getLogger(__name__)

ENV_MAX_LINE_LEN = "VIRTUAL1403_MAX_LINE_LEN"
ENV_TAB_WIDTH = "VIRTUAL1403_TAB_WIDTH"
ENV_OVERFLOW = "VIRTUAL1403_OVERFLOW"


class OverflowPolicy(Enum):
    """What happens to printable bytes arriving once a line is full."""

    TRUNCATE = "truncate"  # Drop them (1403 behaviour)
    WRAP = "wrap"  # Close the full line and continue on a new one


@dataclass(frozen=True)
class ScannerConfig:
    """Immutable settings for one PrinterScanner.

    The defaults reproduce a 1403 print line: 132 columns, a tab stop every
    eight columns, and hard truncation past the last column.
    """

    max_line_len: int = MAX_LINE_LEN
    tab_width: int = TAB_WIDTH
    overflow: OverflowPolicy = OverflowPolicy.TRUNCATE

    def __post_init__(self) -> None:
        if not isinstance(self.max_line_len, int) or self.max_line_len < 1:
            raise ConfigurationError(
                "max_line_len must be a positive integer",
                context={"max_line_len": self.max_line_len},
            )
        if not isinstance(self.tab_width, int) or self.tab_width < 1:
            raise ConfigurationError(
                "tab_width must be a positive integer",
                context={"tab_width": self.tab_width},
            )
        if not isinstance(self.overflow, OverflowPolicy):
            raise ConfigurationError(
                "overflow must be an OverflowPolicy",
                context={"overflow": self.overflow},
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ScannerConfig":
        """
        Build a configuration from ``VIRTUAL1403_*`` environment variables.

        Unset variables keep their defaults.

        Args:
            environ: Mapping to read instead of ``os.environ`` (mainly for tests)

        Raises:
            ConfigurationError: If a variable holds an unusable value.
        """
        env = os.environ if environ is None else environ
        max_line_len = _int_setting(env, ENV_MAX_LINE_LEN, MAX_LINE_LEN)
        tab_width = _int_setting(env, ENV_TAB_WIDTH, TAB_WIDTH)
        overflow = parse_overflow(env.get(ENV_OVERFLOW, OverflowPolicy.TRUNCATE.value))
        try:
            config = cls(
                max_line_len=max_line_len, tab_width=tab_width, overflow=overflow
            )
        except ConfigurationError as e:
            e.add_context("source", "environment")
            raise
        logger.debug("Scanner configuration from environment: %s", config)
        return config


def parse_overflow(value: str) -> OverflowPolicy:
    """Map a policy name (case-insensitive) to an OverflowPolicy."""
    try:
        return OverflowPolicy(value.strip().lower())
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown overflow policy '{value}'",
            context={"choices": ", ".join(p.value for p in OverflowPolicy)},
            original_exception=e,
        ) from e


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be an integer",
            context={"value": raw},
            original_exception=e,
        ) from e


DEFAULT_CONFIG = ScannerConfig()

__all__ = [
    "OverflowPolicy",
    "ScannerConfig",
    "DEFAULT_CONFIG",
    "parse_overflow",
    "ENV_MAX_LINE_LEN",
    "ENV_TAB_WIDTH",
    "ENV_OVERFLOW",
]
