"""
Naming Utilities for generated wrappers.

This module provides the two naming steps applied to every parsed
signature:
- allocate_internal_names: collision-free identifiers for the callee,
  arguments container, result and error of a wrapper
- synthesize_name: a deterministic wrapper name derived from the
  parameter and return types, used when a directive is declared with
  the ``func`` placeholder instead of a name
"""

from __future__ import annotations

from typing import Collection, Dict, Iterable, Optional

from ..utils.constants import (
    ARGS_BASE_NAME,
    BUILTIN_TYPE_ALIASES,
    CALLEE_BASE_NAME,
    ERROR_BASE_NAME,
    EXPORTED_NAME_PREFIX,
    PLACEHOLDER_NAME,
    POINTER_CODE,
    POINTER_SIGIL,
    RESULT_BASE_NAME,
    RETURNS_SEPARATOR,
    RUNTIME_QUALIFIER,
    UNEXPORTED_NAME_PREFIX,
    UNKNOWN_TYPE_SUFFIX,
)
from ..utils.logging import get_logger
from .signature import FunctionDescriptor, InternalNames, ParameterDescriptor

logger = get_logger(__name__)


# =============================================================================
# Internal Names
# =============================================================================

def generate_unique_name(base_name: str, used_names: Collection[str]) -> str:
    """
    Return base_name, or the first of base0, base1, ... not in used_names.
    """
    if base_name not in used_names:
        return base_name

    counter = 0
    while True:
        candidate = f"{base_name}{counter}"
        if candidate not in used_names:
            return candidate
        counter += 1


def allocate_internal_names(fn: FunctionDescriptor) -> InternalNames:
    """
    Assign the wrapper's internal identifiers to fn.

    Names are chosen independently against the function's own parameter
    names; each generated wrapper is a separate lexical scope.

    Returns:
        The assigned InternalNames
    """
    used = set(fn.parameter_names)
    names = InternalNames(
        callee=generate_unique_name(CALLEE_BASE_NAME, used),
        args=generate_unique_name(ARGS_BASE_NAME, used),
        result=generate_unique_name(RESULT_BASE_NAME, used),
        error=generate_unique_name(ERROR_BASE_NAME, used),
    )
    fn.internal_names = names
    return names


# =============================================================================
# Synthesized Names
# =============================================================================

class IdentifierSynthesizer:
    """
    Derives wrapper names from signature shapes.

    ``func(a int, b string) (error)`` becomes ``funcPisRe`` (or
    ``FuncPisRe`` when exporting): the prefix, one code per parameter,
    the returns separator, then one code per return entry.
    """

    def __init__(self, export: bool = False, aliases: Optional[Dict[str, str]] = None):
        self.export = export
        self.aliases = dict(aliases) if aliases is not None else dict(BUILTIN_TYPE_ALIASES)

    @property
    def prefix(self) -> str:
        return EXPORTED_NAME_PREFIX if self.export else UNEXPORTED_NAME_PREFIX

    def type_code(self, type_name: str) -> str:
        """Short code for one type token."""
        code = POINTER_CODE if type_name.startswith(POINTER_SIGIL) else ""

        alias = self.aliases.get(type_name) or self.aliases.get(RUNTIME_QUALIFIER + type_name)
        if alias:
            return code + alias

        dot = type_name.find(".")
        trailing = type_name[dot + 1:]
        if trailing.startswith(POINTER_SIGIL):
            trailing = trailing[len(POINTER_SIGIL):]
        if dot > -1:
            alias = self.aliases.get(trailing)
        return code + (alias or trailing + UNKNOWN_TYPE_SUFFIX)

    def _codes(self, params: Iterable[ParameterDescriptor]) -> str:
        return "".join(self.type_code(p.type_name) for p in params)

    def synthesize(self, fn: FunctionDescriptor) -> str:
        """Build the synthesized name for fn without modifying it."""
        return (
            self.prefix
            + self._codes(fn.parameters)
            + RETURNS_SEPARATOR
            + self._codes(fn.returns.as_parameters())
        )

    def apply(self, fn: FunctionDescriptor) -> str:
        """
        Rewrite fn's declared name if it is the placeholder.

        Returns:
            The (possibly new) declared name
        """
        if fn.declared_name != PLACEHOLDER_NAME:
            return fn.declared_name

        name = self.synthesize(fn)
        logger.debug(f"Synthesized name {name!r} for {fn.raw_source!r}")
        fn.declared_name = name
        return name


def synthesize_name(fn: FunctionDescriptor, export: bool = False) -> str:
    """Convenience wrapper around IdentifierSynthesizer.apply."""
    return IdentifierSynthesizer(export=export).apply(fn)
