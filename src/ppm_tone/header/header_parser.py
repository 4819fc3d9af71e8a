"""
header_parser.py — fixed-structure PPM/PGM header reader and writer.

WHAT THIS MODULE DOES
---------------------
Reads the textual prefix of a binary Netpbm image from a byte stream:

    P<version> <width> <height> <max_value><ws>

and returns it as an immutable HeaderRecord. Exactly the header bytes are
consumed (including the single whitespace byte after <max_value>), so the
next read on the stream starts at the first pixel byte.

WHAT IT DELIBERATELY DOES NOT DO
--------------------------------
• No '#' comment lines.
• No runs of whitespace: each token is followed by exactly one separator.
• No ASCII variants and no 16-bit samples (max_value must be 1..255).

Version checking (P6 only) is the pipeline's job; the parser accepts any
P<digits> tag so that a well-formed but unsupported header can be reported
as such rather than as garbage.

REFERENCES (short list)
-----------------------
• Netpbm format family: ppm(5), pgm(5) manual pages.

© 2025 Ali Pouya — PPM Tone (classic edition)
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import sys
from typing import BinaryIO

from ppm_tone.errors import HeaderError

logger = logging.getLogger(__name__)

# Single-byte separators accepted between header tokens (C isspace set)
WHITESPACE = frozenset(b" \t\n\r\v\f")

# Longest decimal field we are willing to buffer before giving up
MAX_FIELD_DIGITS = 20

MAX_CHANNEL_VALUE = 255


# -----------------------------------------------------------------------------
# Record
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class HeaderRecord:
    """
    Parsed image header.

    format_version : the digit(s) after 'P' (6 = binary RGB, 5 = binary grey)
    width, height  : image size in pixels (positive)
    max_value      : maximum channel value, 1..255 (8-bit samples)
    """
    format_version: int
    width: int
    height: int
    max_value: int

    @property
    def magic(self) -> str:
        return f"P{self.format_version}"

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def payload_size(self) -> int:
        """Bytes of interleaved RGB payload that must follow the header."""
        return self.pixel_count * 3


# -----------------------------------------------------------------------------
# Tokenizer
# -----------------------------------------------------------------------------
def _read_token(stream: BinaryIO, field: str) -> bytes:
    """
    Read bytes up to (and consuming) one whitespace separator.

    Raises HeaderError on EOF before the separator, on an empty token, or
    when the token grows past MAX_FIELD_DIGITS.
    """
    token = bytearray()
    while True:
        ch = stream.read(1)
        if not ch:
            raise HeaderError(f"Invalid header: stream ended while reading {field}")
        if ch[0] in WHITESPACE:
            break
        token += ch
        if len(token) > MAX_FIELD_DIGITS:
            raise HeaderError(f"Invalid header: {field} field too long")

    if not token:
        raise HeaderError(f"Invalid header: empty {field} field")
    return bytes(token)


def _parse_uint(token: bytes, field: str) -> int:
    # bytes.isdigit() is ASCII-only: no sign, no unicode digits
    if not token.isdigit():
        raise HeaderError(f"Invalid header: {field} {token!r} is not a non-negative integer")
    return int(token)


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------
def parse_header(stream: BinaryIO) -> HeaderRecord:
    """
    Parse a `P<version> <width> <height> <max>` header from a binary stream.

    Parameters
    ----------
    stream : binary file-like object supporting read(n)

    Returns
    -------
    HeaderRecord

    Raises
    ------
    HeaderError
        Stream exhausted before a complete header, a malformed field, a
        non-positive dimension, a max value outside 1..255, or a payload too
        large to address.
    """
    tag = _read_token(stream, "format tag")
    if tag[:1] != b"P" or len(tag) < 2:
        raise HeaderError(f"Invalid header: format tag {tag!r} is not P<digits>")
    version = _parse_uint(tag[1:], "format version")

    width = _parse_uint(_read_token(stream, "width"), "width")
    height = _parse_uint(_read_token(stream, "height"), "height")
    max_value = _parse_uint(_read_token(stream, "max value"), "max value")

    if width == 0 or height == 0:
        raise HeaderError(f"Invalid header: image size {width}x{height} is empty")
    if not 0 < max_value <= MAX_CHANNEL_VALUE:
        raise HeaderError(f"Invalid header: max value {max_value} is not an 8-bit depth")

    header = HeaderRecord(format_version=version, width=width, height=height, max_value=max_value)
    if header.payload_size > sys.maxsize:
        raise HeaderError(f"Invalid header: {width}x{height} pixels overflow the addressable size")

    logger.debug("parsed header %s %dx%d max=%d", header.magic, width, height, max_value)
    return header


def format_header(magic: str, width: int, height: int, max_value: int) -> bytes:
    """Render `"<magic> <w> <h> <max>\\n"` as ASCII bytes."""
    return f"{magic} {width} {height} {max_value}\n".encode("ascii")
