"""
Converter Registry for wrapped function parameters.

This module maps native parameter types to the code that extracts and
validates a value of that type from an incoming dynamic runtime
argument. A converter is either a reference to a named conversion
routine available at the call site, or a rule that renders the whole
extraction statement itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Union

from ..utils.constants import (
    BUILTIN_CONVERTERS,
    DYNAMIC_OBJECT_TYPE,
    RUNTIME_QUALIFIER,
    RUNTIME_TYPE_NAMES,
)
from ..utils.exceptions import ConverterNotFoundError
from ..utils.logging import get_logger
from .signature import FunctionDescriptor, ParameterDescriptor

logger = get_logger(__name__)

# (position, args container name, parameter, cursor convention) -> statement
ConversionRule = Callable[[int, str, ParameterDescriptor, bool], str]


@dataclass(frozen=True)
class NamedConverter:
    """Converter calling ``function_name(value) (converted, ok)``."""

    function_name: str

    def qualified_name(self, qualifier: str) -> str:
        """Return the routine name, dropping the runtime qualifier when elided."""
        if qualifier == "" and self.function_name.startswith(RUNTIME_QUALIFIER):
            return self.function_name[len(RUNTIME_QUALIFIER):]
        return self.function_name


@dataclass(frozen=True)
class RuleConverter:
    """Converter rendering its extraction statement through a rule."""

    rule: ConversionRule
    description: str = ""

    def render(self, position: int, args_name: str, parameter: ParameterDescriptor, extended: bool) -> str:
        return self.rule(position, args_name, parameter, extended)


ConverterEntry = Union[NamedConverter, RuleConverter]


def extract_dynamic_object(position: int, args_name: str, parameter: ParameterDescriptor, extended: bool) -> str:
    """Positional extraction of a value that needs no conversion."""
    if extended:
        return f"{parameter.name} := {args_name}.Get({position})"
    return f"{parameter.name} := {args_name}[{position}]"


def default_converters() -> Dict[str, ConverterEntry]:
    """Build a fresh copy of the builtin converter table."""
    table: Dict[str, ConverterEntry] = {
        type_name: NamedConverter(function_name)
        for type_name, function_name in BUILTIN_CONVERTERS.items()
    }
    table[DYNAMIC_OBJECT_TYPE] = RuleConverter(extract_dynamic_object, "positional extraction")
    return table


class ConverterRegistry:
    """
    Registry of converters for one generation run.

    Each instance owns its own table, so directive overrides made during
    one run never leak into another.
    """

    def __init__(self, converters: Optional[Dict[str, ConverterEntry]] = None):
        self._converters: Dict[str, ConverterEntry] = (
            dict(converters) if converters is not None else default_converters()
        )
        self._type_names: Dict[str, str] = dict(RUNTIME_TYPE_NAMES)

    def __contains__(self, type_name: str) -> bool:
        return self.lookup(type_name) is not None

    def __len__(self) -> int:
        return len(self._converters)

    def register(self, type_name: str, entry: Union[ConverterEntry, str]) -> None:
        """
        Add or silently override the converter for a type.

        Args:
            type_name: Native type token, e.g. ``*Time``
            entry: Converter entry, or a routine name for a NamedConverter
        """
        if isinstance(entry, str):
            entry = NamedConverter(entry)
        if type_name in self._converters:
            logger.debug(f"Overriding converter for {type_name!r}")
        self._converters[type_name] = entry

    def lookup(self, type_name: str) -> Optional[ConverterEntry]:
        """Find the converter for a type, retrying with the runtime qualifier."""
        entry = self._converters.get(type_name)
        if entry is None:
            entry = self._converters.get(RUNTIME_QUALIFIER + type_name)
        return entry

    def resolve(self, type_name: str) -> ConverterEntry:
        """Like lookup, but raise when nothing matches."""
        entry = self.lookup(type_name)
        if entry is None:
            raise ConverterNotFoundError(type_name)
        return entry

    def runtime_type_name(self, type_name: str) -> str:
        """Runtime-facing name of a type for argument type errors."""
        name = self._type_names.get(type_name)
        if name is None:
            name = self._type_names.get(RUNTIME_QUALIFIER + type_name)
        return name or type_name

    def validate(self, functions: Iterable[FunctionDescriptor]) -> None:
        """
        Check that every parameter of every function has a converter.

        Raises:
            ConverterNotFoundError: For the first unresolved parameter type
        """
        for fn in functions:
            for param in fn.parameters:
                if self.lookup(param.type_name) is None:
                    raise ConverterNotFoundError(param.type_name, fn.declared_name)
