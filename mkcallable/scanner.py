"""
Directive Scanner.

This module reads Go sources line by line and feeds every
``//ugo:callable`` directive into a GenerationContext:

    //ugo:callable:import "strings"
    //ugo:callable:import tm "time"
    //ugo:callable:convert *Time ToTime
    //ugo:callable Add(a int, b int) (ret ugo.Object)

Converter and import directives take effect for every signature parsed
after them in the same run, including signatures in later files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union

from .codegen.naming import IdentifierSynthesizer, allocate_internal_names
from .codegen.signature import FunctionDescriptor, parse_signature
from .context import GenerationContext
from .package_clause import read_package_name
from .utils.constants import (
    CONVERT_DIRECTIVE,
    DIRECTIVE_PREFIX,
    IMPORT_DIRECTIVE,
    SIGNATURE_SEPARATORS,
)
from .utils.exceptions import DirectiveFormatError, PackageMismatchError
from .utils.logging import GenerationLogger
from .utils.string_utils import go_unquote, split_fields, trim

PathLike = Union[str, Path]


class DirectiveScanner:
    """Scans sources into one GenerationContext."""

    def __init__(self, context: Optional[GenerationContext] = None):
        self.context = context if context is not None else GenerationContext()
        self._synthesizer = IdentifierSynthesizer(export=self.context.export)
        self._log = GenerationLogger(__name__)

    def scan_files(self, paths: Iterable[PathLike]) -> GenerationContext:
        """Scan files in order and return the populated context."""
        for path in paths:
            self.scan_file(path)
        return self.context

    def scan_file(self, path: PathLike) -> None:
        """
        Scan one file.

        Bytes that are not valid UTF-8 are tolerated outside directive
        lines, e.g. in a Latin-1 copyright comment.

        Raises:
            OSError: If the file cannot be read
        """
        with open(path, "rb") as f:
            text = f.read().decode("utf-8", errors="surrogateescape")
        self.scan_text(text, str(path))

    def scan_text(self, text: str, origin: str = "<source>") -> None:
        """
        Scan already loaded source text.

        Args:
            text: Go source text
            origin: File path or label used in logs and errors
        """
        functions = 0
        directives = 0
        for line_number, raw_line in enumerate(text.splitlines(), start=1):
            line = trim(raw_line)
            if not line.startswith(DIRECTIVE_PREFIX):
                continue
            directives += 1
            if self._scan_directive(line, origin, line_number):
                functions += 1

        self._record_package(read_package_name(text, origin), origin)
        self._log.log_file_scanned(origin, functions, directives)

    def _scan_directive(self, line: str, origin: str, line_number: int) -> bool:
        """Handle one directive line; return True if it declared a function."""
        try:
            line.encode("utf-8")
        except UnicodeEncodeError:
            raise DirectiveFormatError(f"directive is not valid UTF-8 at {origin}:{line_number}", line)

        rest = line[len(DIRECTIVE_PREFIX):]

        if rest.startswith(IMPORT_DIRECTIVE):
            self._log.log_directive(origin, line_number, "import", rest)
            self.parse_import(rest[len(IMPORT_DIRECTIVE):])
            return False
        if rest.startswith(CONVERT_DIRECTIVE):
            self._log.log_directive(origin, line_number, "convert", rest)
            self.parse_convert(rest[len(CONVERT_DIRECTIVE):])
            return False
        if rest[:1] in SIGNATURE_SEPARATORS:
            self._log.log_directive(origin, line_number, "signature", rest)
            self.parse_function(rest[1:], origin)
            return True

        raise DirectiveFormatError(f"unrecognized directive {line!r} at {origin}:{line_number}", line)

    def parse_import(self, payload: str) -> None:
        """
        Register an import directive payload.

        Accepted forms are ``"path"`` (or a raw literal) and
        ``alias "path"``; a blank payload is ignored.
        """
        text = trim(payload)
        if not text:
            return

        alias = ""
        if text[0] in "\"`":
            quoted = text
        else:
            parts = split_fields(text)
            if len(parts) != 2:
                raise DirectiveFormatError(f"invalid import directive, line: {text}", text)
            alias, quoted = parts

        try:
            path = go_unquote(quoted)
        except ValueError as e:
            raise DirectiveFormatError(f"cannot unquote {e}, line: {text}", text)

        self.context.imports.add(path, alias)

    def parse_convert(self, payload: str) -> None:
        """Register a ``<typeName> <converterName>`` payload; blank is ignored."""
        text = trim(payload)
        parts = split_fields(text)
        if not parts:
            return
        if len(parts) != 2:
            raise DirectiveFormatError(f"invalid convert directive, line: {text}", text)

        type_name, converter = parts
        self.context.registry.register(type_name, converter)
        self._log.log_converter_override(type_name, converter)

    def parse_function(self, payload: str, origin: str = "") -> FunctionDescriptor:
        """Parse a signature payload, name it and add it to the context."""
        fn = parse_signature(payload, origin)
        self._synthesizer.apply(fn)
        allocate_internal_names(fn)
        self.context.add_function(fn)
        return fn

    def _record_package(self, name: str, origin: str) -> None:
        current = self.context.package_name
        if current is not None and current != name:
            raise PackageMismatchError(current, name, origin)
        self.context.package_name = name


def scan_sources(
    paths: Iterable[PathLike],
    export: bool = False,
    extended_only: bool = False,
) -> GenerationContext:
    """
    Scan files into a fresh context.

    Args:
        paths: Go source files, scanned in order
        export: Synthesize exported names for ``func`` placeholders
        extended_only: Render only cursor wrappers

    Returns:
        Populated GenerationContext
    """
    context = GenerationContext(export=export, extended_only=extended_only)
    return DirectiveScanner(context).scan_files(paths)
