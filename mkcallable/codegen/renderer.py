"""
Template Rendering Engine.

This module provides template-based code generation using Jinja2 templates.
It wraps template errors and registers the filters used by the
Go wrapper templates.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from ..utils.exceptions import TemplateRenderError

DEFAULT_TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")


def indent_tabs(text: str, level: int = 1, first: bool = False) -> str:
    """Indent every line of text but the first by level tabs."""
    lines = text.splitlines()
    if not lines:
        return text

    indent = "\t" * level
    head = indent + lines[0] if first else lines[0]
    return "\n".join([head] + [indent + line if line else line for line in lines[1:]])


class JinjaTemplateRenderer:
    """Jinja2-based template renderer for wrapper generation."""

    def __init__(self, template_dir: Optional[str] = None):
        """Initialize the template renderer."""
        if template_dir is None:
            template_dir = DEFAULT_TEMPLATE_DIR

        self._template_dir = Path(template_dir)
        self._env = Environment(
            loader=FileSystemLoader(str(self._template_dir)),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )

        self._setup_custom_filters()

    def _setup_custom_filters(self) -> None:
        """Set up custom Jinja2 filters for Go generation."""
        self._env.filters["indent_tabs"] = indent_tabs

    def render_file(self, template_path: str, context: Dict[str, Any]) -> str:
        """Render a template file with the given context."""
        try:
            template = self._env.get_template(template_path)
            return template.render(**context)
        except TemplateError as e:
            raise TemplateRenderError(f"Template file rendering failed: {e}", template_path)
