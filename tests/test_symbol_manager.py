import pytest

from asmcore.util.symbol_manager import (
    SymbolContext,
    SymbolError,
    SymbolKind,
    SymbolManager,
)


def _declare_tree():
    sm = SymbolManager("symbol")
    glob = SymbolContext.new_global()
    outer = sm.declare(glob, "outer", 0, SymbolKind.LABEL, span="s_outer")
    outer_ctx = sm.get(outer).ctx
    inner = sm.declare(outer_ctx, "inner", 1, SymbolKind.LABEL, span="s_inner")
    return sm, outer, inner


def test_declare_global_and_lookup():
    sm = SymbolManager("symbol")
    ref = sm.declare(SymbolContext.new_global(), "start", 0, SymbolKind.LABEL, "sp")
    assert sm.get_by_name_global("start") == ref
    decl = sm.get(ref)
    assert decl.name == "start"
    assert decl.depth == 0
    assert decl.kind is SymbolKind.LABEL
    assert decl.ctx.hierarchy == ("start",)
    assert decl.item_ref == ref


def test_nested_declaration_full_name_and_context():
    sm, outer, inner = _declare_tree()
    decl = sm.get(inner)
    assert decl.name == "outer.inner"
    assert decl.depth == 1
    assert decl.ctx.hierarchy == ("outer", "inner")
    assert sm.get(outer).children == {"inner": inner}


def test_relative_and_absolute_lookup():
    sm, outer, inner = _declare_tree()
    ctx = sm.get(outer).ctx
    assert sm.try_get_by_name(ctx, 1, ["inner"]) == inner
    assert sm.try_get_by_name(SymbolContext.new_global(), 0, ["outer", "inner"]) == inner
    assert sm.try_get_by_name(ctx, 0, ["outer"]) == outer


def test_lookup_level_beyond_context_returns_none():
    sm, outer, _ = _declare_tree()
    assert sm.try_get_by_name(SymbolContext.new_global(), 1, ["inner"]) is None
    assert sm.try_get_by_name(SymbolContext.new_global(), 0, []) is None


def test_unknown_symbol_raises_with_displayable_name():
    sm, _, _ = _declare_tree()
    with pytest.raises(SymbolError) as info:
        sm.get_by_name(SymbolContext.new_global(), 0, ["outer", "nothing"], span="x")
    assert info.value.message == "unknown symbol `outer.nothing`"
    assert info.value.span == "x"


def test_displayable_name_prefixes_dots():
    sm = SymbolManager("symbol")
    assert sm.get_displayable_name(2, ["a", "b"]) == "..a.b"
    assert sm.get_displayable_name(0, ["a"]) == "a"


def test_duplicate_declaration_raises_with_note():
    sm = SymbolManager("symbol")
    glob = SymbolContext.new_global()
    sm.declare(glob, "dup", 0, SymbolKind.CONSTANT, span="first")
    with pytest.raises(SymbolError) as info:
        sm.declare(glob, "dup", 0, SymbolKind.CONSTANT, span="second")
    assert info.value.message == "duplicate symbol `dup`"
    assert info.value.note == "first declared here"
    assert info.value.note_span == "first"
    assert info.value.span == "second"


def test_same_name_at_different_levels_is_allowed():
    sm, outer, inner = _declare_tree()
    again = sm.declare(sm.get(outer).ctx, "inner", 0, SymbolKind.LABEL, span="g")
    assert again not in (outer, inner)
    assert sm.get_by_name_global("inner") == again


def test_skipping_a_nesting_level_raises():
    sm = SymbolManager("symbol")
    with pytest.raises(SymbolError) as info:
        sm.declare(SymbolContext.new_global(), "x", 1, SymbolKind.LABEL, span="s")
    assert info.value.message == "symbol declaration skips a nesting level"


def test_anonymous_names_are_unique():
    sm = SymbolManager("symbol")
    first = sm.generate_anonymous_name()
    sm.declare(SymbolContext.new_global(), first, 0, SymbolKind.OTHER, span="a")
    second = sm.generate_anonymous_name()
    assert first != second
    assert first.startswith("#anonymous_symbol_")
    assert sm.get_by_name_global(first) == 0


def test_span_refs_recorded():
    sm, outer, inner = _declare_tree()
    assert sm.span_refs["s_outer"] == outer
    sm.add_span_ref("use_site", inner)
    assert sm.span_refs["use_site"] == inner


def test_get_by_name_global_unknown_raises():
    sm = SymbolManager("function")
    with pytest.raises(SymbolError) as info:
        sm.get_by_name_global("f")
    assert info.value.message == "unknown function `f`"