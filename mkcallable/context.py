"""
Generation Context Management.

This module provides the explicit state of one generation run: parsed
functions, import sets, converter registry, package name and flags.
The scanner fills a context in, and the emitter renders it. Nothing is
kept in module globals, so independent runs never share state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .codegen.converters import ConverterRegistry
from .codegen.signature import FunctionDescriptor
from .utils.constants import (
    DEFAULT_RUNTIME_IMPORTS,
    EXTERNAL_IMPORT_MARKER,
    RUNTIME_IMPORT_PATH,
    RUNTIME_PACKAGE,
    RUNTIME_QUALIFIER,
)
from .utils.exceptions import ImportConflictError
from .utils.logging import get_logger
from .utils.string_utils import go_quote

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImportEntry:
    """One import of the generated file."""

    path: str
    alias: str = ""

    @property
    def is_external(self) -> bool:
        return EXTERNAL_IMPORT_MARKER in self.path

    def render(self) -> str:
        """Return the import spec as Go source."""
        if not self.alias:
            return go_quote(self.path)
        return f"{self.alias} {go_quote(self.path)}"


class ImportSet:
    """
    Imports partitioned into runtime-provided and external packages.

    Paths are unique across both partitions; each partition is kept
    sorted by path.
    """

    def __init__(self, defaults: Tuple[str, ...] = DEFAULT_RUNTIME_IMPORTS):
        self._runtime: List[ImportEntry] = []
        self._external: List[ImportEntry] = []
        # Defaults no directive asked for; cleared path by path on request
        self._implicit = set(defaults)
        for path in defaults:
            self.add(path)

    def __len__(self) -> int:
        return len(self._runtime) + len(self._external)

    def __contains__(self, path: str) -> bool:
        return self.find(path) is not None

    @property
    def runtime(self) -> Tuple[ImportEntry, ...]:
        return tuple(self._runtime)

    @property
    def external(self) -> Tuple[ImportEntry, ...]:
        return tuple(self._external)

    def is_implicit(self, path: str) -> bool:
        """Whether path is only present as a default import."""
        return path in self._implicit

    def find(self, path: str) -> Optional[ImportEntry]:
        for entry in self._runtime + self._external:
            if entry.path == path:
                return entry
        return None

    def add(self, path: str, alias: str = "") -> bool:
        """
        Register an import.

        Returns:
            True if a new entry was added, False for an empty path or an
            identical existing entry

        Raises:
            ImportConflictError: If path is already imported under another alias
        """
        if not path:
            return False

        existing = self.find(path)
        if existing is not None:
            if existing.alias == alias:
                self._implicit.discard(path)
                return False
            raise ImportConflictError(path, alias, existing.alias)

        entry = ImportEntry(path=path, alias=alias)
        target = self._external if entry.is_external else self._runtime
        target.append(entry)
        target.sort(key=lambda e: e.path)
        logger.debug(f"Added {'external' if entry.is_external else 'runtime'} import {entry.render()}")
        return True


@dataclass
class GenerationContext:
    """State of one generation run."""

    export: bool = False
    extended_only: bool = False
    package_name: Optional[str] = None
    functions: List[FunctionDescriptor] = field(default_factory=list)
    imports: ImportSet = field(default_factory=ImportSet)
    registry: ConverterRegistry = field(default_factory=ConverterRegistry)

    @property
    def is_runtime_package(self) -> bool:
        """Whether the generated file belongs to the runtime package itself."""
        return self.package_name == RUNTIME_PACKAGE

    @property
    def qualifier(self) -> str:
        """Prefix for runtime names, empty inside the runtime package."""
        return "" if self.is_runtime_package else RUNTIME_QUALIFIER

    def add_function(self, fn: FunctionDescriptor) -> None:
        self.functions.append(fn)

    def output_imports(self) -> Tuple[Tuple[ImportEntry, ...], Tuple[ImportEntry, ...]]:
        """
        Imports of the rendered file: runtime-provided, then external.

        The runtime root import is included unless the target package is
        the runtime package itself. Defaults nobody asked for are left out
        in extended-only mode, where no positional guard uses them.
        """
        runtime = self.imports.runtime
        if self.extended_only:
            runtime = tuple(e for e in runtime if not self.imports.is_implicit(e.path))

        external = list(self.imports.external)
        if not self.is_runtime_package and self.imports.find(RUNTIME_IMPORT_PATH) is None:
            external.append(ImportEntry(RUNTIME_IMPORT_PATH))
            external.sort(key=lambda e: e.path)
        return runtime, tuple(external)
