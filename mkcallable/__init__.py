"""
mkcallable: ugo callable wrapper generator

Reads ``//ugo:callable`` directive comments in Go sources and generates
adapter functions that expose plain Go functions to the ugo scripting
runtime as ``CallableFunc`` and ``CallableExFunc`` values.

Key Features:
- Argument count checks and typed argument extraction per parameter
- Per-run converter overrides and extra imports via directives
- Synthesized wrapper names for ``func`` placeholders
- Output canonicalized through gofmt

Usage:
    from mkcallable import generate

    source = generate(["builtins.go"])
"""

__version__ = "0.1.0"
__author__ = "mkcallable developers"
__email__ = "mkcallable@example.com"

# Public API exports
from .context import GenerationContext, ImportEntry, ImportSet
from .scanner import DirectiveScanner, scan_sources
from .codegen.emitter import Emitter, render_source
from .formatter import GoFormatter
from .generator import CallableGenerator, generate
from .loader import FileImporter, shebang_read_file, shebang_to_slashes

from .utils.config import MkcallableConfig, load_config
from .utils.exceptions import MkcallableError

__all__ = [
    "GenerationContext",
    "ImportEntry",
    "ImportSet",
    "DirectiveScanner",
    "scan_sources",
    "Emitter",
    "render_source",
    "GoFormatter",
    "CallableGenerator",
    "generate",
    "FileImporter",
    "shebang_read_file",
    "shebang_to_slashes",
    "MkcallableConfig",
    "load_config",
    "MkcallableError",
]
