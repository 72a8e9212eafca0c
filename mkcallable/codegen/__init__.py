"""
Codegen module for callable wrapper generation.

This module provides the generator core: signature parsing, the
converter registry, identifier allocation and synthesis, and the
template-driven emitter.
"""

from .signature import (
    FunctionDescriptor,
    ParameterDescriptor,
    ReturnDescriptor,
    InternalNames,
    parse_signature,
)
from .converters import (
    ConverterRegistry,
    ConverterEntry,
    NamedConverter,
    RuleConverter,
    default_converters,
)
from .naming import (
    IdentifierSynthesizer,
    allocate_internal_names,
    generate_unique_name,
    synthesize_name,
)
from .renderer import JinjaTemplateRenderer
from .emitter import CallingConvention, Emitter, WrapperBuilder, render_source

__all__ = [
    # Signatures
    "FunctionDescriptor",
    "ParameterDescriptor",
    "ReturnDescriptor",
    "InternalNames",
    "parse_signature",
    # Converters
    "ConverterRegistry",
    "ConverterEntry",
    "NamedConverter",
    "RuleConverter",
    "default_converters",
    # Naming
    "IdentifierSynthesizer",
    "allocate_internal_names",
    "generate_unique_name",
    "synthesize_name",
    # Emission
    "JinjaTemplateRenderer",
    "CallingConvention",
    "Emitter",
    "WrapperBuilder",
    "render_source",
]
