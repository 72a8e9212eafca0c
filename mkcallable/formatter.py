"""
External source formatter bridge.

Generated text is canonicalized by the Go toolchain's own formatter,
which doubles as a syntax check: text gofmt cannot parse is reported
together with the raw source instead of being written out.
"""

import subprocess
from typing import Optional, Sequence

from .utils.constants import DEFAULT_FORMAT_COMMAND
from .utils.exceptions import FormatError
from .utils.logging import get_logger

logger = get_logger(__name__)


class GoFormatter:
    """Pipes source text through gofmt (or a compatible command)."""

    def __init__(self, command: Optional[Sequence[str]] = None):
        self.command = list(command) if command else list(DEFAULT_FORMAT_COMMAND)

    def format(self, source: str) -> str:
        """
        Return the canonical form of source.

        Raises:
            FormatError: If the formatter is missing or rejects the text
        """
        logger.debug(f"Formatting {len(source)} characters with {' '.join(self.command)}")
        try:
            result = subprocess.run(
                self.command,
                input=source,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            raise FormatError(f"formatter not found: {self.command[0]}", raw_source=source)

        if result.returncode != 0:
            raise FormatError(
                f"formatter exited with status {result.returncode}",
                raw_source=source,
                formatter_output=result.stderr,
            )
        return result.stdout


class NullFormatter:
    """Formatter that returns text unchanged."""

    def format(self, source: str) -> str:
        return source
