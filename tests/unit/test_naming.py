"""
Unit tests for wrapper naming.

Tests collision-free internal identifiers and synthesized names for
``func`` placeholders.
"""

import pytest

from mkcallable.codegen.naming import (
    IdentifierSynthesizer,
    allocate_internal_names,
    generate_unique_name,
    synthesize_name,
)
from mkcallable.codegen.signature import InternalNames, parse_signature


class TestGenerateUniqueName:
    """Test unique name probing."""

    def test_free(self):
        assert generate_unique_name("fn", {"a", "b"}) == "fn"

    def test_taken(self):
        assert generate_unique_name("args", {"args"}) == "args0"

    def test_probes_in_order(self):
        assert generate_unique_name("ret", {"ret", "ret0", "ret1"}) == "ret2"


class TestAllocateInternalNames:
    """Test per-function identifier allocation."""

    def test_defaults(self):
        fn = parse_signature("Add(a int, b int) (int)")
        names = allocate_internal_names(fn)
        assert names == InternalNames(callee="fn", args="args", result="ret", error="err")
        assert fn.internal_names is names

    def test_args_collision(self):
        fn = parse_signature("f(args int, b int)")
        names = allocate_internal_names(fn)
        assert names.args == "args0"
        assert names.callee == "fn"

    def test_all_collide(self):
        fn = parse_signature("f(fn int, args int, ret int, err int)")
        names = allocate_internal_names(fn)
        assert names == InternalNames(callee="fn0", args="args0", result="ret0", error="err0")

    def test_suffixed_name_taken(self):
        fn = parse_signature("f(err int, err0 int)")
        assert allocate_internal_names(fn).error == "err1"

    def test_functions_independent(self):
        first = parse_signature("f(args int)")
        second = parse_signature("g(a int)")
        allocate_internal_names(first)
        allocate_internal_names(second)
        assert first.internal_names.args == "args0"
        assert second.internal_names.args == "args"


class TestIdentifierSynthesizer:
    """Test synthesized wrapper names."""

    def test_exported(self):
        fn = parse_signature("func(a int, b string) (error)")
        assert IdentifierSynthesizer(export=True).apply(fn) == "FuncPisRe"
        assert fn.declared_name == "FuncPisRe"

    def test_unexported(self):
        fn = parse_signature("func(a int, b string) (error)")
        assert synthesize_name(fn) == "funcPisRe"

    def test_named_function_untouched(self):
        fn = parse_signature("Add(a int, b int) (int)")
        assert synthesize_name(fn, export=True) == "Add"

    def test_no_returns(self):
        fn = parse_signature("func()")
        assert synthesize_name(fn) == "funcPR"

    def test_value_and_error(self):
        fn = parse_signature("func(o ugo.Object) (ret ugo.Object, err error)")
        assert synthesize_name(fn) == "funcPOROe"

    @pytest.mark.parametrize(
        "type_name, code",
        [
            ("int", "i"),
            ("[]byte", "b2"),
            ("ugo.Array", "A"),
            ("Array", "A"),
            ("*ugo.SyncMap", "pSyncMap_"),
            ("*Time", "pTime_"),
            ("time.Duration", "Duration_"),
            ("pkg.string", "s"),
            ("Custom", "Custom_"),
        ],
    )
    def test_type_codes(self, type_name, code):
        assert IdentifierSynthesizer().type_code(type_name) == code

    def test_custom_aliases(self):
        synthesizer = IdentifierSynthesizer(aliases={"int": "N"})
        assert synthesizer.type_code("int") == "N"
        assert synthesizer.type_code("string") == "string_"
