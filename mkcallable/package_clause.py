"""
Package clause reader.

Reads just enough of a Go source file to learn its package name: leading
whitespace and comments are skipped, then ``package <identifier>`` must
follow. The rest of the file is never examined, so it does not have to
be valid Go.
"""

import re

from .utils.exceptions import PackageClauseError

_IDENTIFIER = re.compile(r"[^\W\d]\w*", re.UNICODE)
_KEYWORD = "package"


def _skip_trivia(text: str, pos: int, origin: str) -> int:
    """Advance pos past whitespace, line comments and block comments."""
    while pos < len(text):
        if text[pos].isspace():
            pos += 1
        elif text.startswith("//", pos):
            newline = text.find("\n", pos)
            pos = len(text) if newline == -1 else newline + 1
        elif text.startswith("/*", pos):
            close = text.find("*/", pos + 2)
            if close == -1:
                raise PackageClauseError("comment not terminated", origin)
            pos = close + 2
        else:
            break
    return pos


def read_package_name(text: str, origin: str = "") -> str:
    """
    Return the package name declared by Go source text.

    Args:
        text: Source text, at least up to the package clause
        origin: File path or label used in error messages

    Raises:
        PackageClauseError: If the text does not start with a package clause
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    pos = _skip_trivia(text, 0, origin)
    if not text.startswith(_KEYWORD, pos):
        raise PackageClauseError("expected 'package'", origin)
    pos += len(_KEYWORD)

    # The keyword must be followed by a separator, not more identifier text
    after = _skip_trivia(text, pos, origin)
    if after == pos and after < len(text) and not text[after].isspace():
        raise PackageClauseError("expected 'package'", origin)

    match = _IDENTIFIER.match(text, after)
    if match is None:
        raise PackageClauseError("expected package name", origin)

    name = match.group(0)
    if name == "_":
        raise PackageClauseError("invalid package name _", origin)
    return name
