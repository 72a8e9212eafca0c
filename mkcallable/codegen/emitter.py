"""
Wrapper Emitter.

This module renders a scanned GenerationContext into Go source. Every
declared function is modeled as two wrappers that differ only in how
they check the argument count and read each argument:

- positional (``Name``, ``CallableFunc``): receives ``args ...Object``,
  compares ``len(args)`` and indexes ``args[i]``
- cursor (``NameEx``, ``CallableExFunc``): receives ``args Call``,
  delegates to ``args.CheckLen(n)`` and reads ``args.Get(i)``

Cursor wrappers are always rendered; positional ones are skipped in
extended-only mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..utils.constants import (
    CALLABLE_EX_FUNC_TYPE,
    CALLABLE_FUNC_TYPE,
    GENERATED_HEADER,
    UNDEFINED_SENTINEL,
)
from ..utils.exceptions import PackageClauseError
from ..utils.logging import GenerationLogger
from ..utils.string_utils import ordinalize
from .converters import ConverterRegistry, NamedConverter
from .renderer import JinjaTemplateRenderer
from .signature import FunctionDescriptor, ParameterDescriptor

if TYPE_CHECKING:
    from ..context import GenerationContext

MAIN_TEMPLATE = "callable.go.j2"


class CallingConvention(Enum):
    """Runtime-facing shape of a generated wrapper."""

    POSITIONAL = "positional"
    CURSOR = "cursor"

    @property
    def extended(self) -> bool:
        return self is CallingConvention.CURSOR


@dataclass(frozen=True)
class WrapperView:
    """Pre-rendered pieces of one wrapper, consumed by the template."""

    name: str
    callable_type: str
    object_type: str
    source: str
    callee: str
    param_types: str
    result_types: str
    args_decl: str
    result: str
    error: str
    guard: str
    extractions: Tuple[str, ...]
    call: str


class WrapperBuilder:
    """
    Builds the statements of one wrapper.

    Both conventions go through the same steps; only count_guard and
    extract_argument consult the convention.
    """

    def __init__(self, registry: ConverterRegistry, qualifier: str):
        self.registry = registry
        self.q = qualifier

    def count_guard(self, fn: FunctionDescriptor, convention: CallingConvention) -> str:
        names = fn.internal_names
        count = len(fn.parameters)
        if convention.extended:
            return (
                f"if {names.error} := {names.args}.CheckLen({count}); {names.error} != nil {{\n"
                f"\treturn {self.q}{UNDEFINED_SENTINEL}, {names.error}\n"
                f"}}"
            )
        return (
            f"if len({names.args}) != {count} {{\n"
            f"\treturn {self.q}{UNDEFINED_SENTINEL}, {self.q}ErrWrongNumArguments.NewError("
            f"\"want={count} got=\" + strconv.Itoa(len({names.args})))\n"
            f"}}"
        )

    def argument_access(self, fn: FunctionDescriptor, position: int, convention: CallingConvention) -> str:
        args = fn.internal_names.args
        if convention.extended:
            return f"{args}.Get({position})"
        return f"{args}[{position}]"

    def extract_argument(
        self, fn: FunctionDescriptor, param: ParameterDescriptor, convention: CallingConvention
    ) -> str:
        """Statement binding param from the incoming arguments."""
        converter = self.registry.resolve(param.type_name)
        if not isinstance(converter, NamedConverter):
            return converter.render(param.position, fn.internal_names.args, param, convention.extended)

        access = self.argument_access(fn, param.position, convention)
        expected = self.registry.runtime_type_name(param.type_name)
        return (
            f"{param.name}, ok := {converter.qualified_name(self.q)}({access})\n"
            f"if !ok {{\n"
            f"\treturn {self.q}{UNDEFINED_SENTINEL}, {self.q}NewArgumentTypeError("
            f"\"{ordinalize(param.position + 1)}\", \"{expected}\", {access}.TypeName())\n"
            f"}}"
        )

    def call(self, fn: FunctionDescriptor) -> str:
        """Call of the wrapped function binding its results."""
        names = fn.internal_names
        arguments = ", ".join(fn.parameter_names)
        invocation = f"{names.callee}({arguments})"
        undefined = f"{names.result} = {self.q}{UNDEFINED_SENTINEL}"

        returns = fn.returns
        if returns.value is not None and returns.returns_error:
            return f"{names.result}, {names.error} = {invocation}"
        if returns.value is not None:
            return f"{names.result} = {invocation}"
        if returns.returns_error:
            return f"{names.error} = {invocation}\n{undefined}"
        return f"{invocation}\n{undefined}"

    def build(self, fn: FunctionDescriptor, convention: CallingConvention) -> WrapperView:
        names = fn.internal_names
        result_types = fn.returns.type_list()
        if convention.extended:
            name = fn.extended_wrapper_name
            callable_type = CALLABLE_EX_FUNC_TYPE
            args_decl = f"{names.args} {self.q}Call"
        else:
            name = fn.wrapper_name
            callable_type = CALLABLE_FUNC_TYPE
            args_decl = f"{names.args} ...{self.q}Object"

        return WrapperView(
            name=name,
            callable_type=self.q + callable_type,
            object_type=self.q + "Object",
            source=fn.raw_source,
            callee=names.callee,
            param_types=fn.parameter_type_list(),
            result_types=" " + result_types if result_types else "",
            args_decl=args_decl,
            result=names.result,
            error=names.error,
            guard=self.count_guard(fn, convention),
            extractions=tuple(self.extract_argument(fn, p, convention) for p in fn.parameters),
            call=self.call(fn),
        )


class Emitter:
    """Renders a GenerationContext into Go source text."""

    def __init__(self, renderer: Optional[JinjaTemplateRenderer] = None, template_name: str = MAIN_TEMPLATE):
        self._renderer = renderer or JinjaTemplateRenderer()
        self._template_name = template_name
        self._log = GenerationLogger(__name__)

    def conventions(self, context: "GenerationContext") -> List[CallingConvention]:
        if context.extended_only:
            return [CallingConvention.CURSOR]
        return [CallingConvention.CURSOR, CallingConvention.POSITIONAL]

    def build_wrappers(self, context: "GenerationContext") -> List[WrapperView]:
        """Wrappers in output order: all cursor ones, then all positional ones."""
        builder = WrapperBuilder(context.registry, context.qualifier)
        return [
            builder.build(fn, convention)
            for convention in self.conventions(context)
            for fn in context.functions
        ]

    def render(self, context: "GenerationContext") -> str:
        """
        Render the context.

        Raises:
            PackageClauseError: If no package name was recorded
            ConverterNotFoundError: Before rendering anything, if any
                parameter of any function lacks a converter
        """
        if context.package_name is None:
            raise PackageClauseError("package name is unknown, no source was scanned")
        context.registry.validate(context.functions)

        runtime_imports, external_imports = context.output_imports()
        text = self._renderer.render_file(
            self._template_name,
            {
                "header": GENERATED_HEADER,
                "package_name": context.package_name,
                "runtime_imports": runtime_imports,
                "external_imports": external_imports,
                "wrappers": self.build_wrappers(context),
            },
        )
        self._log.log_render(len(context.functions), context.extended_only, len(text))
        return text


def render_source(context: "GenerationContext") -> str:
    """Render context with a default Emitter."""
    return Emitter().render(context)
