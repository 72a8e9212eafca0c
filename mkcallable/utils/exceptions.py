"""
Custom exception definitions.

This module defines the exception hierarchy for mkcallable-specific
errors. Every failure of a generation run is raised as one of these
(or as an unchanged OSError for file system problems), so callers can
tell malformed directives, unresolved types and formatter rejections
apart.
"""

import re
from typing import Optional


class MkcallableError(Exception):
    """
    Base exception for all mkcallable-related errors.

    This is the root exception class for all generator-specific
    errors, providing common functionality and error handling.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize mkcallable error.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class DirectiveFormatError(MkcallableError):
    """
    Raised when a directive line is malformed.

    Covers bad import and convert payloads, unrecognized directive
    forms and, through SignatureFormatError, malformed signatures.
    """

    def __init__(self, message: str, line: str = ""):
        """
        Initialize directive format error.

        Args:
            message: Error description, already quoting the offending text
            line: Raw directive text that failed to parse
        """
        super().__init__(message)
        self.line = line


class SignatureFormatError(DirectiveFormatError):
    """Raised when a function signature payload cannot be parsed."""


class ResolutionError(MkcallableError):
    """
    Raised when parsed directives cannot be resolved consistently.

    Resolution errors are detected after scanning and always abort the
    run before any text is rendered.
    """


class ConverterNotFoundError(ResolutionError):
    """Raised when a parameter type has no registered converter."""

    def __init__(self, type_name: str, function_name: Optional[str] = None):
        """
        Initialize converter lookup error.

        Args:
            type_name: Parameter type without a converter
            function_name: Declared name of the function using the type
        """
        details = {}
        if function_name is not None:
            details["function"] = function_name

        super().__init__(f"converter is not found for type: {type_name}", details)
        self.type_name = type_name
        self.function_name = function_name


class ImportConflictError(ResolutionError):
    """Raised when one import path is registered with two aliases."""

    def __init__(self, path: str, alias: str, existing_alias: str):
        """
        Initialize import conflict error.

        Args:
            path: Import path registered twice
            alias: Alias of the rejected registration
            existing_alias: Alias already recorded for the path
        """
        super().__init__(
            f"double import with different alias, path: {path}",
            {"alias": alias or "<none>", "existing_alias": existing_alias or "<none>"},
        )
        self.path = path
        self.alias = alias
        self.existing_alias = existing_alias


class PackageClauseError(MkcallableError):
    """Raised when the package clause of a source cannot be read."""

    def __init__(self, message: str, origin: str = ""):
        details = {"source": origin} if origin else {}
        super().__init__(message, details)
        self.origin = origin


class PackageMismatchError(PackageClauseError):
    """Raised when scanned sources declare different packages."""

    def __init__(self, first: str, second: str, origin: str = ""):
        super().__init__(f"sources declare different packages: {first!r} and {second!r}", origin)
        self.first = first
        self.second = second


class FormatError(MkcallableError):
    """
    Raised when the external formatter rejects rendered source.

    The raw, unformatted text is kept so the author of the directives
    can locate the defect.
    """

    _LOCATION_PATTERN = re.compile(r"^.+?:\d+:\d+:")

    def __init__(self, message: str, raw_source: str = "", formatter_output: str = ""):
        """
        Initialize format error.

        Args:
            message: Error description
            raw_source: Rendered text handed to the formatter
            formatter_output: Diagnostics printed by the formatter
        """
        details = {}
        if raw_source:
            details["source_length"] = len(raw_source)
        if formatter_output:
            details["formatter_output_length"] = len(formatter_output)

        super().__init__(message, details)
        self.raw_source = raw_source
        self.formatter_output = formatter_output

    def get_formatter_errors(self) -> list:
        """
        Extract positioned error lines from formatter output.

        Returns:
            List of error message strings
        """
        if not self.formatter_output:
            return []

        errors = []
        for line in self.formatter_output.split("\n"):
            line = line.strip()
            if self._LOCATION_PATTERN.match(line):
                errors.append(line)
        return errors


class ConfigError(MkcallableError):
    """Raised when a configuration file cannot be loaded."""

    def __init__(self, message: str, config_file: Optional[str] = None):
        details = {"config_file": config_file} if config_file else {}
        super().__init__(message, details)
        self.config_file = config_file


class ImportLoadError(MkcallableError):
    """Raised when the file importer is asked for an invalid module."""


class TemplateRenderError(MkcallableError):
    """Raised when an emitter template fails to load or render."""

    def __init__(self, message: str, template_name: Optional[str] = None):
        details = {"template": template_name} if template_name else {}
        super().__init__(message, details)
        self.template_name = template_name
