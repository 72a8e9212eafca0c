"""
Logging configuration and utilities.

This module provides centralized logging configuration for the
mkcallable package with appropriate formatting and levels.
"""

import logging
import os
from typing import Optional

from .constants import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the mkcallable package.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)

    log_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger("mkcallable")
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Console handler writes to stderr so generated source on stdout stays clean
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if name.startswith("mkcallable.") or name == "mkcallable":
        return logging.getLogger(name)
    return logging.getLogger(f"mkcallable.{name}")


class GenerationLogger:
    """
    Specialized logging for one generation run.

    Wraps a module logger with methods for the milestones of a run so
    that scanner, emitter and command line report them consistently.
    """

    def __init__(self, name: str):
        """
        Initialize logger for specific component.

        Args:
            name: Component name for logging context
        """
        self.logger = get_logger(name)

    def log_file_scanned(self, origin: str, functions: int, directives: int) -> None:
        """
        Log the outcome of scanning one source.

        Args:
            origin: File path or label of the scanned source
            functions: Number of signatures parsed from it
            directives: Number of recognized directive lines
        """
        self.logger.info(f"Scanned {origin}: {directives} directives, {functions} functions")

    def log_directive(self, origin: str, line_number: int, kind: str, payload: str) -> None:
        """
        Log one recognized directive line.

        Args:
            origin: File path or label of the source
            line_number: One-based line number
            kind: Directive kind (signature, import, convert)
            payload: Directive text after the prefix
        """
        self.logger.debug(f"{origin}:{line_number}: {kind} directive {payload.strip()!r}")

    def log_converter_override(self, type_name: str, converter: str) -> None:
        """
        Log a converter registration coming from a directive.

        Args:
            type_name: Native type being registered
            converter: Conversion routine name
        """
        self.logger.debug(f"Converter for {type_name!r} set to {converter!r}")

    def log_render(self, function_count: int, extended_only: bool, length: int) -> None:
        """
        Log the size of a rendered output.

        Args:
            function_count: Number of declared functions
            extended_only: Whether positional wrappers were suppressed
            length: Length of rendered text in characters
        """
        variants = "cursor only" if extended_only else "cursor and positional"
        self.logger.info(f"Rendered {function_count} functions ({variants}), {length} characters")


# Initialize logging on module import
setup_logging()
