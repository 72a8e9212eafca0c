"""
Function Signature Parsing Module.

This module turns the payload of a signature directive, such as
``Add(a int, b int) (ret ugo.Object, err error)``, into a structured
FunctionDescriptor. Parsing is purely textual: type tokens are never
resolved here, and compound types must be written as single tokens.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..utils.constants import ERROR_TYPE, EXTENDED_NAME_SUFFIX, VARIADIC_MARKER
from ..utils.exceptions import SignatureFormatError
from ..utils.logging import get_logger
from ..utils.string_utils import split_fields, trim

logger = get_logger(__name__)


@dataclass(frozen=True)
class ParameterDescriptor:
    """A named, typed entry of a parameter or return list."""

    name: str
    type_name: str
    position: int

    @property
    def is_error(self) -> bool:
        """Whether this entry carries failure information."""
        return self.type_name == ERROR_TYPE


@dataclass(frozen=True)
class ReturnDescriptor:
    """
    Return shape of a wrapped function.

    Zero entries: no value and no error. One entry: either a value or a
    lone error. Two entries: a value followed by an error.
    """

    value: Optional[ParameterDescriptor] = None
    returns_error: bool = False

    @property
    def count(self) -> int:
        return len(self.as_parameters())

    def as_parameters(self) -> Tuple[ParameterDescriptor, ...]:
        """Return entries in declaration order, the error entry last."""
        params = []
        if self.value is not None:
            params.append(self.value)
        if self.returns_error:
            params.append(ParameterDescriptor("err", ERROR_TYPE, len(params)))
        return tuple(params)

    def type_list(self) -> str:
        """Return Go source for the result list, e.g. ``(int, error)``."""
        types = ", ".join(p.type_name for p in self.as_parameters())
        return f"({types})" if types else ""


@dataclass(frozen=True)
class InternalNames:
    """Identifiers a generated wrapper declares for itself."""

    callee: str
    args: str
    result: str
    error: str


@dataclass
class FunctionDescriptor:
    """
    Parsed form of one signature directive.

    internal_names is filled in by the name allocator; declared_name may
    be rewritten once by the identifier synthesizer.
    """

    declared_name: str
    parameters: Tuple[ParameterDescriptor, ...]
    returns: ReturnDescriptor
    raw_source: str
    internal_names: Optional[InternalNames] = None
    origin: str = field(default="", compare=False)

    @property
    def wrapper_name(self) -> str:
        """Name of the positional-array wrapper."""
        return self.declared_name

    @property
    def extended_wrapper_name(self) -> str:
        """Name of the cursor wrapper."""
        return self.declared_name + EXTENDED_NAME_SUFFIX

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.parameters)

    def parameter_type_list(self) -> str:
        """Return Go source for the parameter types, e.g. ``int, string``."""
        return ", ".join(p.type_name for p in self.parameters)


# =============================================================================
# Parsing
# =============================================================================

def extract_section(text: str, start: str = "(", end: str = ")") -> Tuple[str, str, str, bool]:
    """
    Split text around its first ``start ... end`` section.

    Returns:
        Tuple of (prefix, body, suffix, found). When no start delimiter
        exists, found is False and suffix holds the whole text.

    Raises:
        SignatureFormatError: If a start delimiter has no matching end.
    """
    text = trim(text)
    head, sep, tail = text.partition(start)
    if not sep:
        return "", "", text, False

    body, sep, suffix = tail.partition(end)
    if not sep:
        raise SignatureFormatError(f"unbalanced parenthesis in {text!r}", text)
    return trim(head), body, suffix, True


def extract_fields(text: str, source: str, allow_unnamed: bool = False) -> Tuple[ParameterDescriptor, ...]:
    """
    Parse a comma separated list of ``name type`` fields.

    Args:
        text: Text between the parentheses
        source: Whole signature, quoted in error messages
        allow_unnamed: Accept a lone type token as an unnamed field

    Returns:
        Descriptors with zero-based positions
    """
    text = trim(text)
    if not text:
        return ()

    params = []
    for position, raw_field in enumerate(text.split(",")):
        tokens = split_fields(raw_field)
        if len(tokens) == 1 and allow_unnamed:
            name, type_name = "", tokens[0]
        elif len(tokens) == 2:
            name, type_name = tokens
        else:
            raise SignatureFormatError(
                f"could not extract function parameter from {trim(raw_field)!r} in {source!r}", source
            )
        if VARIADIC_MARKER in type_name:
            raise SignatureFormatError(
                f"variadic parameter is not supported from {trim(raw_field)!r} in {source!r}", source
            )
        params.append(ParameterDescriptor(name=name, type_name=type_name, position=position))
    return tuple(params)


def classify_returns(fields: Tuple[ParameterDescriptor, ...], source: str) -> ReturnDescriptor:
    """Interpret a parsed return list as one of the four return shapes."""
    if len(fields) == 0:
        return ReturnDescriptor()
    if len(fields) == 1:
        if fields[0].is_error:
            return ReturnDescriptor(returns_error=True)
        return ReturnDescriptor(value=fields[0])
    if len(fields) == 2:
        if not fields[1].is_error:
            raise SignatureFormatError(
                f"only last error is allowed as second return value in {source!r}", source
            )
        return ReturnDescriptor(value=fields[0], returns_error=True)
    raise SignatureFormatError(f"too many return values in {source!r}", source)


def parse_signature(payload: str, origin: str = "") -> FunctionDescriptor:
    """
    Parse a signature directive payload.

    Args:
        payload: Text following the directive prefix
        origin: Source label recorded on the descriptor

    Returns:
        FunctionDescriptor without internal names

    Raises:
        SignatureFormatError: If the payload is malformed
    """
    source = trim(payload)

    name, body, rest, found = extract_section(source)
    if not found or not name:
        raise SignatureFormatError(
            f"could not extract function name and parameters from {source!r}", source
        )
    parameters = extract_fields(body, source)

    returns = ReturnDescriptor()
    garbage, body, rest, found = extract_section(rest)
    if found:
        if garbage:
            raise SignatureFormatError(f"extra arguments in {source!r}", source)
        returns = classify_returns(extract_fields(body, source, allow_unnamed=True), source)
        rest = trim(rest)

    if rest:
        raise SignatureFormatError(f"extra arguments in {source!r}", source)

    logger.debug(f"Parsed signature {name!r}: {len(parameters)} parameters, {returns.count} results")
    return FunctionDescriptor(
        declared_name=name,
        parameters=parameters,
        returns=returns,
        raw_source=source,
        origin=origin,
    )
