"""
String Manipulation Utilities for mkcallable.

This module provides the small text helpers shared by the directive
scanner, the signature parser and the emitter templates.
"""

from __future__ import annotations

import re
from typing import List

from .constants import BLANK_CHARS


_ORDINAL_SUFFIXES = ("th", "st", "nd", "rd", "th", "th", "th", "th", "th", "th")


# =============================================================================
# Trimming and Splitting
# =============================================================================

def trim(text: str) -> str:
    """Strip spaces and tabs (only) from both ends of text."""
    return text.strip(BLANK_CHARS)


def split_fields(text: str) -> List[str]:
    """
    Split text on runs of whitespace.

    Args:
        text: Text to split

    Returns:
        Non-empty fields in order
    """
    return text.split()


# =============================================================================
# Code Generation Utilities
# =============================================================================

def ordinalize(number: int) -> str:
    """
    Format a positive integer as an English ordinal.

    Args:
        number: One-based position

    Returns:
        Ordinal string such as '1st', '12th' or '23rd'
    """
    suffix = _ORDINAL_SUFFIXES[number % 10]
    if 11 <= number % 100 <= 13:
        suffix = "th"
    return f"{number}{suffix}"


def go_quote(text: str) -> str:
    """Quote text as a Go interpreted string literal."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\n", "\\n").replace("\t", "\\t")
    return f'"{escaped}"'


_GO_SIMPLE_ESCAPES = {
    "a": "\a", "b": "\b", "f": "\f", "n": "\n", "r": "\r",
    "t": "\t", "v": "\v", "\\": "\\", '"': '"',
}
_GO_STRING_PATTERN = re.compile(r'^"(?:[^"\\\n]|\\.)*"$|^`[^`]*`$')
_GO_ESCAPE_PATTERN = re.compile(
    r"\\(?:x(?P<hex>[0-9A-Fa-f]{2})"
    r"|(?P<octal>[0-7]{3})"
    r"|u(?P<rune4>[0-9A-Fa-f]{4})"
    r"|U(?P<rune8>[0-9A-Fa-f]{8})"
    r"|(?P<other>.))",
    re.DOTALL,
)


def _decode_escape(match: "re.Match", literal: str) -> bytes:
    """Bytes denoted by one backslash escape of an interpreted literal."""
    if match.group("hex"):
        return bytes([int(match.group("hex"), 16)])
    if match.group("octal"):
        value = int(match.group("octal"), 8)
        if value > 0xFF:
            raise ValueError(f"octal escape value > 255 in {literal}")
        return bytes([value])

    rune = match.group("rune4") or match.group("rune8")
    if rune:
        code = int(rune, 16)
        if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
            raise ValueError(f"escape sequence is invalid Unicode code point in {literal}")
        return chr(code).encode("utf-8")

    other = match.group("other")
    if other not in _GO_SIMPLE_ESCAPES:
        raise ValueError(f"invalid escape sequence \\{other} in {literal}")
    return _GO_SIMPLE_ESCAPES[other].encode("utf-8")


def go_unquote(literal: str) -> str:
    """
    Unquote a Go interpreted or raw string literal.

    Interpreted literals accept Go's escapes: the single-character ones,
    ``\\xhh`` and three-digit octal bytes, ``\\uhhhh`` and ``\\Uhhhhhhhh``
    code points. Byte escapes must combine into valid UTF-8.

    Args:
        literal: Quoted text, including the delimiters

    Returns:
        The literal's value

    Raises:
        ValueError: If literal is not a well-formed string literal
    """
    if not _GO_STRING_PATTERN.match(literal):
        raise ValueError(f"invalid syntax: {literal}")
    if literal.startswith("`"):
        # Carriage returns are discarded from raw literals
        return literal[1:-1].replace("\r", "")

    body = literal[1:-1]
    value = bytearray()
    pos = 0
    for match in _GO_ESCAPE_PATTERN.finditer(body):
        value += body[pos:match.start()].encode("utf-8")
        value += _decode_escape(match, literal)
        pos = match.end()
    value += body[pos:].encode("utf-8")

    try:
        return value.decode("utf-8")
    except UnicodeDecodeError:
        raise ValueError(f"invalid UTF-8 in {literal}")
