"""
Utils package for mkcallable.

This module provides constants, exceptions, configuration, logging and
string helpers shared by the generator modules.
"""

from .exceptions import (
    MkcallableError,
    DirectiveFormatError,
    SignatureFormatError,
    ResolutionError,
    ConverterNotFoundError,
    ImportConflictError,
    PackageClauseError,
    PackageMismatchError,
    FormatError,
    ConfigError,
    ImportLoadError,
    TemplateRenderError,
)
from .constants import *
from .string_utils import ordinalize, trim, split_fields, go_quote, go_unquote

from .config import (
    MkcallableConfig,
    GenerationConfig,
    FormatConfig,
    LoggingConfig,
    load_config,
)

from .logging import get_logger, setup_logging, GenerationLogger

__all__ = [
    # Exceptions
    "MkcallableError",
    "DirectiveFormatError",
    "SignatureFormatError",
    "ResolutionError",
    "ConverterNotFoundError",
    "ImportConflictError",
    "PackageClauseError",
    "PackageMismatchError",
    "FormatError",
    "ConfigError",
    "ImportLoadError",
    "TemplateRenderError",

    # Constants (exported via *)

    # String utilities
    "ordinalize",
    "trim",
    "split_fields",
    "go_quote",
    "go_unquote",

    # Configuration
    "MkcallableConfig",
    "GenerationConfig",
    "FormatConfig",
    "LoggingConfig",
    "load_config",

    # Logging
    "get_logger",
    "setup_logging",
    "GenerationLogger",
]
