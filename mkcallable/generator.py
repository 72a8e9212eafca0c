"""
Generation pipeline.

Scans the given sources, validates and renders the collected functions,
formats the result and writes it out. Output is written only after
every stage succeeded.
"""

import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO, Union

from .codegen.emitter import Emitter
from .context import GenerationContext
from .formatter import GoFormatter, NullFormatter
from .scanner import DirectiveScanner
from .utils.config import MkcallableConfig
from .utils.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


class CallableGenerator:
    """
    Runs one generation with a fixed configuration.

    Args:
        config: Generation, formatter and logging settings; defaults apply
            when omitted
        emitter: Optional emitter, mainly for custom templates
    """

    def __init__(self, config: Optional[MkcallableConfig] = None, emitter: Optional[Emitter] = None):
        self.config = config or MkcallableConfig()
        self.emitter = emitter or Emitter()

    def _formatter(self):
        if self.config.format.enabled:
            return GoFormatter(self.config.format.command)
        return NullFormatter()

    def scan(self, paths: Iterable[PathLike]) -> GenerationContext:
        context = GenerationContext(
            export=self.config.generation.export,
            extended_only=self.config.generation.extended_only,
        )
        return DirectiveScanner(context).scan_files(paths)

    def generate(self, paths: Iterable[PathLike]) -> str:
        """
        Produce the final source text for paths without writing it.

        Raises:
            MkcallableError: On any directive, resolution, package or
                formatting failure
            OSError: If a source file cannot be read
        """
        paths = list(paths)
        context = self.scan(paths)
        logger.info(f"Scanned {len(paths)} file(s), {len(context.functions)} function(s) declared")

        source = self.emitter.render(context)
        return self._formatter().format(source)

    def write(self, text: str, stream: Optional[TextIO] = None) -> None:
        """Write text to the configured output file, or to stream (stdout)."""
        output = self.config.generation.output
        if output:
            with open(output, "w", encoding="utf-8") as f:
                f.write(text)
            logger.info(f"Wrote {len(text)} characters to {output}")
            return

        (stream or sys.stdout).write(text)

    def run(self, paths: Iterable[PathLike], stream: Optional[TextIO] = None) -> str:
        text = self.generate(paths)
        self.write(text, stream)
        return text


def generate(paths: Iterable[PathLike], config: Optional[MkcallableConfig] = None) -> str:
    """Render wrappers for paths and return the text."""
    return CallableGenerator(config).generate(paths)
