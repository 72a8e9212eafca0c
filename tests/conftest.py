"""
Pytest configuration and shared fixtures for mkcallable tests.

This module provides common test fixtures, configuration, and utilities
used across the test suite.
"""

import re
import textwrap

import pytest

from mkcallable.codegen.emitter import Emitter
from mkcallable.context import GenerationContext
from mkcallable.scanner import DirectiveScanner
from mkcallable.utils.config import MkcallableConfig


# Go source fixtures
ADD_SOURCE = textwrap.dedent(
    """\
    package main

    //ugo:callable Add(a int, b int) (int)
    """
)

FUNC_PLACEHOLDER_SOURCE = textwrap.dedent(
    """\
    package main

    //ugo:callable func(a int, b string) (error)
    """
)

TIME_SOURCE = textwrap.dedent(
    """\
    // Copyright notice.

    package time

    //ugo:callable:import "time"
    //ugo:callable:convert *Time ToTime
    //ugo:callable:convert time.Duration ToGoDuration
    //ugo:callable sleep(d time.Duration)
    //ugo:callable since(t *Time) (ret ugo.Object)
    //ugo:callable parse(layout string, value string) (ret ugo.Object, err error)
    """
)


@pytest.fixture
def context():
    """Create a fresh GenerationContext."""
    return GenerationContext()


@pytest.fixture
def scanner(context):
    """Create a DirectiveScanner bound to the context fixture."""
    return DirectiveScanner(context)


@pytest.fixture
def emitter():
    """Create an Emitter with the bundled templates."""
    return Emitter()


@pytest.fixture
def write_go(tmp_path):
    """Factory writing Go sources into a temporary directory."""

    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def render(emitter):
    """Factory scanning source text and rendering it."""

    def _render(text, export=False, extended_only=False):
        ctx = GenerationContext(export=export, extended_only=extended_only)
        DirectiveScanner(ctx).scan_text(text, "test.go")
        return emitter.render(ctx)

    return _render


@pytest.fixture
def unformatted_config(monkeypatch):
    """Configuration with the external formatter disabled."""
    monkeypatch.delenv("MKCALLABLE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("MKCALLABLE_NO_FORMAT", raising=False)
    return MkcallableConfig().apply_overrides(format_enabled=False)


# Utility functions for tests
def assert_go_pattern(go_code, pattern, description=""):
    """
    Assert that generated Go code matches a pattern.

    Args:
        go_code: Generated Go source
        pattern: Regex pattern to match
        description: Description of what the pattern checks
    """
    if not re.search(pattern, go_code, re.MULTILINE):
        pytest.fail(f"Go pattern check failed: {description}\nPattern: {pattern}\nSource:\n{go_code}")


def assert_go_not_pattern(go_code, pattern, description=""):
    """
    Assert that generated Go code does not match a pattern.

    Args:
        go_code: Generated Go source
        pattern: Regex pattern that should not match
        description: Description of what the pattern checks
    """
    if re.search(pattern, go_code, re.MULTILINE):
        pytest.fail(f"Go negative pattern check failed: {description}\nPattern: {pattern}\nSource:\n{go_code}")


# Pytest hooks for test collection and reporting
def pytest_collection_modifyitems(config, items):
    """Add markers based on test path."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "integration" in path:
            item.add_marker(pytest.mark.integration)
        elif "filecheck" in path:
            item.add_marker(pytest.mark.filecheck)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for complete workflows"
    )
    config.addinivalue_line(
        "markers", "filecheck: FileCheck-style generated source validation tests"
    )
    config.addinivalue_line(
        "markers", "requires_gofmt: Tests that require the gofmt binary"
    )
