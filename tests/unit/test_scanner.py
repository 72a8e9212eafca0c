"""
Unit tests for the directive scanner.

Tests recognition of the three directive forms, payload validation,
package tracking and state carried across files.
"""

import pytest

from mkcallable.context import GenerationContext, ImportEntry
from mkcallable.codegen.converters import NamedConverter
from mkcallable.scanner import DirectiveScanner, scan_sources
from mkcallable.utils.exceptions import (
    DirectiveFormatError,
    ImportConflictError,
    PackageClauseError,
    PackageMismatchError,
    SignatureFormatError,
)

from conftest import ADD_SOURCE, FUNC_PLACEHOLDER_SOURCE, TIME_SOURCE


class TestScanText:
    """Test scanning of in-memory sources."""

    def test_time_source(self, scanner, context):
        scanner.scan_text(TIME_SOURCE, "time.go")

        assert context.package_name == "time"
        assert [fn.declared_name for fn in context.functions] == ["sleep", "since", "parse"]
        assert context.imports.find("time") == ImportEntry("time")
        assert context.registry.lookup("*Time") == NamedConverter("ToTime")
        assert context.registry.lookup("time.Duration") == NamedConverter("ToGoDuration")

    def test_internal_names_allocated(self, scanner, context):
        scanner.scan_text("package p\n//ugo:callable f(args int)\n")
        assert context.functions[0].internal_names.args == "args0"

    def test_placeholder_synthesized(self, context):
        context.export = True
        DirectiveScanner(context).scan_text(FUNC_PLACEHOLDER_SOURCE)
        assert context.functions[0].declared_name == "FuncPisRe"

    def test_indented_and_tab_separated(self, scanner, context):
        scanner.scan_text("package p\n\t  //ugo:callable\tf(a int)  \n")
        assert context.functions[0].raw_source == "f(a int)"

    def test_ordinary_comments_ignored(self, scanner, context):
        scanner.scan_text("package p\n// ugo:callable f(a int)\n// just a comment\n")
        assert context.functions == []
        assert context.package_name == "p"

    def test_origin_recorded(self, scanner, context):
        scanner.scan_text(ADD_SOURCE, "add.go")
        assert context.functions[0].origin == "add.go"

    @pytest.mark.parametrize(
        "line",
        ["//ugo:callable", "//ugo:callableAdd(a int)", "//ugo:callable:export f()"],
    )
    def test_unrecognized_directive(self, scanner, line):
        with pytest.raises(DirectiveFormatError, match="unrecognized directive"):
            scanner.scan_text(f"package p\n{line}\n", "bad.go")

    def test_malformed_signature(self, scanner):
        with pytest.raises(SignatureFormatError):
            scanner.scan_text("package p\n//ugo:callable f(a int) junk\n")

    def test_missing_package_clause(self, scanner):
        with pytest.raises(PackageClauseError):
            scanner.scan_text("//ugo:callable f(a int)\n", "nopkg.go")


class TestParseImport:
    """Test import directive payloads."""

    def test_plain(self, scanner, context):
        scanner.parse_import(' "strings"')
        assert context.imports.find("strings") == ImportEntry("strings")

    def test_alias(self, scanner, context):
        scanner.parse_import(' tm "time"')
        assert context.imports.find("time") == ImportEntry("time", "tm")

    def test_raw_literal(self, scanner, context):
        scanner.parse_import(" `golang.org/x/text`")
        assert context.imports.external == (ImportEntry("golang.org/x/text"),)

    def test_blank_ignored(self, scanner, context):
        scanner.parse_import("   ")
        assert len(context.imports) == 1

    def test_escaped_path(self, scanner, context):
        scanner.parse_import(' "\\x74ime"')
        assert context.imports.find("time") == ImportEntry("time")

    def test_escaped_quote_rejected(self, scanner):
        with pytest.raises(DirectiveFormatError, match="cannot unquote"):
            scanner.parse_import(' "it\\\'s"')

    @pytest.mark.parametrize("payload", [' "time', " time", ' a b "time"', " tm time"])
    def test_malformed(self, scanner, payload):
        with pytest.raises(DirectiveFormatError):
            scanner.parse_import(payload)

    def test_conflict(self, scanner):
        scanner.parse_import(' tm "time"')
        with pytest.raises(ImportConflictError):
            scanner.parse_import(' "time"')


class TestParseConvert:
    """Test converter directive payloads."""

    def test_register(self, scanner, context):
        scanner.parse_convert(" *Time ToTime")
        assert context.registry.lookup("*Time") == NamedConverter("ToTime")

    def test_override_builtin(self, scanner, context):
        scanner.parse_convert(" int ToMyInt")
        assert context.registry.lookup("int") == NamedConverter("ToMyInt")

    def test_blank_ignored(self, scanner, context):
        scanner.parse_convert("")
        assert "*Time" not in context.registry

    @pytest.mark.parametrize("payload", [" *Time", " *Time ToTime extra"])
    def test_malformed(self, scanner, payload):
        with pytest.raises(DirectiveFormatError, match="invalid convert directive"):
            scanner.parse_convert(payload)


class TestScanFiles:
    """Test multi-file scanning."""

    def test_state_carries_across_files(self, write_go):
        first = write_go("a.go", "package p\n//ugo:callable:convert *Time ToTime\n")
        second = write_go("b.go", "package p\n//ugo:callable since(t *Time)\n")

        ctx = scan_sources([first, second], export=True, extended_only=True)

        assert ctx.export is True
        assert ctx.extended_only is True
        assert ctx.functions[0].parameters[0].type_name == "*Time"
        assert "*Time" in ctx.registry

    def test_package_mismatch(self, write_go):
        first = write_go("a.go", "package p\n")
        second = write_go("b.go", "package q\n")
        with pytest.raises(PackageMismatchError) as exc_info:
            scan_sources([first, second])
        assert exc_info.value.first == "p"
        assert exc_info.value.second == "q"

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            scan_sources([tmp_path / "missing.go"])

    def test_scan_files_returns_context(self, write_go):
        path = write_go("add.go", ADD_SOURCE)
        ctx = GenerationContext()
        assert DirectiveScanner(ctx).scan_files([path]) is ctx
        assert ctx.functions[0].declared_name == "Add"

    def test_latin1_comment_tolerated(self, tmp_path):
        path = tmp_path / "legacy.go"
        path.write_bytes(b"// Copyright \xe9 2020\npackage p\n//ugo:callable f(a int)\n")

        ctx = scan_sources([path])

        assert ctx.package_name == "p"
        assert ctx.functions[0].declared_name == "f"

    def test_invalid_bytes_in_directive(self, tmp_path):
        path = tmp_path / "bad.go"
        path.write_bytes(b"package p\n//ugo:callable f(a \xe9nt)\n")
        with pytest.raises(DirectiveFormatError, match="not valid UTF-8"):
            scan_sources([path])
