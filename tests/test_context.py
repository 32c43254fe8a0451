import pytest

from asmcore.expr.context import (
    EVAL_RECURSION_DEPTH_MAX,
    EvalAsmBlockQuery,
    EvalContext,
    EvalFunctionArgument,
    EvalFunctionQuery,
    EvalVariableQuery,
    dummy_eval_query,
)
from asmcore.expr.expression import ExprError, Value


def test_locals():
    ctx = EvalContext()
    ctx.set_local("x", Value.integer(4))
    assert ctx.get_local("x") == Value.integer(4)
    assert ctx.get_local("y") is None


def test_token_subst_prefers_substitution():
    ctx = EvalContext()
    ctx.set_token_subst("r", "a0")
    ctx.set_local("v", Value.void())
    assert ctx.get_token_subst("r") == "a0"
    assert ctx.get_token_subst("v") == EvalContext.hygienize_name_for_asm_subst("v")
    assert ctx.get_token_subst("missing") is None


def test_hygienize_name():
    assert EvalContext.hygienize_name_for_asm_subst("x") == "__x"


def test_deepened_is_empty_and_deeper():
    ctx = EvalContext()
    ctx.set_local("x", Value.void())
    deeper = ctx.deepened()
    assert deeper.recursion_depth == ctx.recursion_depth + 1
    assert deeper.get_local("x") is None


def test_hygienize_locals():
    ctx = EvalContext()
    ctx.set_local("x", Value.integer(1))
    ctx.set_local("__y", Value.integer(2))
    ctx.set_token_subst("t", "text")
    new_ctx = ctx.hygienize_locals_for_asm_subst()
    assert new_ctx.get_local("__x") == Value.integer(1)
    assert new_ctx.get_local("x") is None
    assert new_ctx.get_local("____y") is None
    assert new_ctx.token_substs == {"__t": "text"}
    assert new_ctx.recursion_depth == ctx.recursion_depth + 1


def test_recursion_limit():
    ctx = EvalContext()
    for _ in range(EVAL_RECURSION_DEPTH_MAX - 1):
        ctx = ctx.deepened()
    ctx.check_recursion_depth_limit()
    deeper = ctx.deepened()
    with pytest.raises(ExprError, match="recursion depth limit reached"):
        deeper.check_recursion_depth_limit("span")


def test_ensure_arg_number():
    query = EvalFunctionQuery(
        Value.builtin_function("le"),
        [EvalFunctionArgument(Value.void()), EvalFunctionArgument(Value.void())],
        span="call",
    )
    query.ensure_arg_number(2)
    with pytest.raises(ExprError) as info:
        query.ensure_arg_number(1)
    assert str(info.value) == "function expected 1 argument (but got 2)"
    assert info.value.span == "call"


def test_ensure_min_max_arg_number():
    query = EvalFunctionQuery(Value.builtin_function("assert"), [])
    with pytest.raises(ExprError) as info:
        query.ensure_min_max_arg_number(1, 2)
    assert str(info.value) == "function expected 1 to 2 arguments (but got 0)"
    query.args.append(EvalFunctionArgument(Value.boolean(True)))
    query.ensure_min_max_arg_number(1, 2)
    assert len(query.args) == 1


@pytest.mark.parametrize(
    "query, message",
    [
        (EvalVariableQuery(0, ["x"], "s"), "cannot reference variables in this context"),
        (EvalFunctionQuery(Value.function(0), [], "s"), "cannot reference functions in this context"),
        (EvalAsmBlockQuery(None, "s"), "cannot use `asm` blocks in this context"),
    ],
)
def test_dummy_eval_query(query, message):
    with pytest.raises(ExprError) as info:
        dummy_eval_query(query)
    assert info.value.message == message
    assert info.value.span == "s"