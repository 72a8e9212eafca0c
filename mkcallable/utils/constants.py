"""
Constants for the mkcallable generator.

This module consolidates the fixed tokens of the directive language and
of the target scripting runtime, providing a single source of truth for
the scanner, parser, naming and emitter modules.
"""

from __future__ import annotations


# =============================================================================
# Directive Language
# =============================================================================

DIRECTIVE_PREFIX = "//ugo:callable"
IMPORT_DIRECTIVE = ":import"
CONVERT_DIRECTIVE = ":convert"

# Characters accepted between the prefix and a signature payload
SIGNATURE_SEPARATORS = (" ", "\t")

# Characters trimmed from both ends of directive lines and fields
BLANK_CHARS = " \t"

VARIADIC_MARKER = "..."
ERROR_TYPE = "error"
POINTER_SIGIL = "*"

# Paths containing this character are classified as external imports
EXTERNAL_IMPORT_MARKER = "."


# =============================================================================
# Target Runtime
# =============================================================================

RUNTIME_PACKAGE = "ugo"
RUNTIME_QUALIFIER = RUNTIME_PACKAGE + "."
RUNTIME_IMPORT_PATH = "github.com/ozanh/ugo"

# Imports present in every generated file
DEFAULT_RUNTIME_IMPORTS = ("strconv",)

UNDEFINED_SENTINEL = "Undefined"
CALLABLE_FUNC_TYPE = "CallableFunc"
CALLABLE_EX_FUNC_TYPE = "CallableExFunc"
EXTENDED_NAME_SUFFIX = "Ex"


# =============================================================================
# Name Synthesis
# =============================================================================

PLACEHOLDER_NAME = "func"
EXPORTED_NAME_PREFIX = "FuncP"
UNEXPORTED_NAME_PREFIX = "funcP"
RETURNS_SEPARATOR = "R"
POINTER_CODE = "p"
UNKNOWN_TYPE_SUFFIX = "_"

# Base names for the identifiers every wrapper declares
CALLEE_BASE_NAME = "fn"
ARGS_BASE_NAME = "args"
RESULT_BASE_NAME = "ret"
ERROR_BASE_NAME = "err"

BUILTIN_TYPE_ALIASES = {
    "_": "p",  # p is reserved for the pointer marker
    "ugo.Object": "O",
    "ugo.String": "S",
    "ugo.Bytes": "B",
    "ugo.Map": "M",
    "ugo.SyncMap": "M2",
    "ugo.Array": "A",
    "ugo.Float": "F",
    "ugo.Int": "I",
    "ugo.Uint": "U",
    "ugo.Char": "C",
    "string": "s",
    "bool": "b",
    "byte": "b1",
    "[]byte": "b2",
    "int": "i",
    "int64": "i64",
    "uint64": "u64",
    "float64": "f64",
    "rune": "r",
    "error": "e",
}


# =============================================================================
# Converters
# =============================================================================

BUILTIN_CONVERTERS = {
    "string": "ugo.ToGoString",
    "[]byte": "ugo.ToGoByteSlice",
    "int": "ugo.ToGoInt",
    "int64": "ugo.ToGoInt64",
    "uint64": "ugo.ToGoUint64",
    "float64": "ugo.ToGoFloat64",
    "rune": "ugo.ToGoRune",
    "bool": "ugo.ToGoBool",
    "ugo.String": "ugo.ToString",
    "ugo.Bytes": "ugo.ToBytes",
    "ugo.Int": "ugo.ToInt",
    "ugo.Uint": "ugo.ToUint",
    "ugo.Float": "ugo.ToFloat",
    "ugo.Char": "ugo.ToChar",
    "ugo.Bool": "ugo.ToBool",
    "ugo.Array": "ugo.ToArray",
    "ugo.Map": "ugo.ToMap",
    "*ugo.SyncMap": "ugo.ToSyncMap",
}

# Runtime-facing type names reported in argument type errors
RUNTIME_TYPE_NAMES = {
    "ugo.Object": "object",
    "ugo.String": "string",
    "ugo.Bytes": "bytes",
    "ugo.Map": "map",
    "ugo.SyncMap": "syncMap",
    "ugo.Array": "array",
    "ugo.Float": "float",
    "ugo.Int": "int",
    "ugo.Uint": "uint",
    "ugo.Char": "char",
    "string": "string",
    "byte": "char",
    "[]byte": "bytes",
    "int64": "int",
    "uint64": "uint",
    "float64": "float",
    "rune": "char",
    "error": "error",
    "*Time": "time",
    "*Location": "location",
}

# The dynamic object type needs no conversion, only positional extraction
DYNAMIC_OBJECT_TYPE = "ugo.Object"


# =============================================================================
# Output
# =============================================================================

GENERATED_HEADER = "// Code generated by 'go generate'; DO NOT EDIT."
DEFAULT_FORMAT_COMMAND = ("gofmt",)
LOG_LEVEL_ENV = "MKCALLABLE_LOG_LEVEL"
NO_FORMAT_ENV = "MKCALLABLE_NO_FORMAT"
DEFAULT_LOG_LEVEL = "WARNING"
