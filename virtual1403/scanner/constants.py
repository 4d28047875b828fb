"""Carriage-control byte values and line geometry of the virtual 1403 printer."""

# Widest print line of a 1403 print train.
MAX_LINE_LEN = 132

# Tab stops fall on every eighth column.
TAB_WIDTH = 8

# Control bytes. Upstream translation guarantees these never carry printable data.
CHAR_TAB = 0x09
CHAR_LF = 0x0A
CHAR_FF = 0x0C
CHAR_CR = 0x0D

CONTROL_BYTES = frozenset((CHAR_TAB, CHAR_LF, CHAR_FF, CHAR_CR))

# Printable bytes map one-to-one onto characters.
LINE_ENCODING = "latin-1"

__all__ = [
    "MAX_LINE_LEN",
    "TAB_WIDTH",
    "CHAR_TAB",
    "CHAR_LF",
    "CHAR_FF",
    "CHAR_CR",
    "CONTROL_BYTES",
    "LINE_ENCODING",
]
