"""
Configuration System for mkcallable.

This module provides a small, unified configuration interface for the
generator. Settings come from an optional JSON file, then environment
variables, then command line flags, each layer overriding the previous.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .constants import DEFAULT_FORMAT_COMMAND, DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV, NO_FORMAT_ENV
from .exceptions import ConfigError
from .logging import get_logger

logger = get_logger(__name__)

_TRUTHY = ("1", "true", "yes")


@dataclass
class GenerationConfig:
    """Generation flags."""

    export: bool = False
    extended_only: bool = False
    output: Optional[str] = None


@dataclass
class FormatConfig:
    """External formatter configuration."""

    enabled: bool = True
    command: List[str] = field(default_factory=lambda: list(DEFAULT_FORMAT_COMMAND))


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None


class MkcallableConfig:
    """
    Unified configuration manager for one generator invocation.

    Unlike a process-wide singleton, each invocation builds its own
    instance so that library callers can run generations side by side.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to a JSON configuration file. If None, only
                defaults and environment overrides apply.
        """
        self.config_file = Path(config_file) if config_file else None
        self._config_data = self._load_config()

        self.generation = self._create_generation_config()
        self.format = self._create_format_config()
        self.logging = self._create_logging_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from the JSON file, if any."""
        if self.config_file is None:
            return {}
        if not self.config_file.exists():
            logger.debug(f"Configuration file {self.config_file} not found, using defaults")
            return {}

        try:
            with open(self.config_file, "r") as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to parse configuration: {e}", str(self.config_file))

        if not isinstance(config_data, dict):
            raise ConfigError("Configuration root must be an object", str(self.config_file))

        logger.debug(f"Loaded configuration from {self.config_file}")
        return config_data

    def _section(self, name: str) -> Dict[str, Any]:
        data = self._config_data.get(name, {})
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration section {name!r} must be an object", str(self.config_file))
        return data

    def _flag(self, data: Dict[str, Any], section: str, key: str, default: bool) -> bool:
        value = data.get(key, default)
        if not isinstance(value, bool):
            raise ConfigError(f"Configuration option {section}.{key} must be a boolean", str(self.config_file))
        return value

    def _create_generation_config(self) -> GenerationConfig:
        """Create generation configuration from loaded data."""
        gen_data = self._section("generation")

        return GenerationConfig(
            export=self._flag(gen_data, "generation", "export", False),
            extended_only=self._flag(gen_data, "generation", "extended_only", False),
            output=gen_data.get("output"),
        )

    def _create_format_config(self) -> FormatConfig:
        """Create formatter configuration from loaded data."""
        format_data = self._section("format")

        # Check environment variable override
        env_disabled = os.getenv(NO_FORMAT_ENV, "").lower() in _TRUTHY
        enabled = self._flag(format_data, "format", "enabled", True) and not env_disabled

        command = format_data.get("command", list(DEFAULT_FORMAT_COMMAND))
        if isinstance(command, str):
            command = command.split()
        if not command:
            raise ConfigError("Formatter command must not be empty", str(self.config_file))

        return FormatConfig(enabled=enabled, command=list(command))

    def _create_logging_config(self) -> LoggingConfig:
        """Create logging configuration from loaded data."""
        log_data = self._section("logging")

        level = os.getenv(LOG_LEVEL_ENV) or log_data.get("level", DEFAULT_LOG_LEVEL)

        return LoggingConfig(
            level=level,
            log_file=log_data.get("log_file"),
        )

    def apply_overrides(
        self,
        output: Optional[str] = None,
        export: Optional[bool] = None,
        extended_only: Optional[bool] = None,
        format_enabled: Optional[bool] = None,
        log_level: Optional[str] = None,
    ) -> "MkcallableConfig":
        """
        Apply command line overrides; None leaves a value untouched.

        Returns:
            self, for chaining
        """
        if output is not None:
            self.generation.output = output
        if export is not None:
            self.generation.export = export
        if extended_only is not None:
            self.generation.extended_only = extended_only
        if format_enabled is not None:
            self.format.enabled = format_enabled
        if log_level is not None:
            self.logging.level = log_level
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return {
            "generation": {
                "export": self.generation.export,
                "extended_only": self.generation.extended_only,
                "output": self.generation.output,
            },
            "format": {
                "enabled": self.format.enabled,
                "command": list(self.format.command),
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
        }


def load_config(config_file: Optional[str] = None) -> MkcallableConfig:
    """Load configuration from a specific file."""
    return MkcallableConfig(config_file)
