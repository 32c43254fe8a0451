"""Evaluation of expression trees into values."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Type

from asmcore.expr.builtins import eval_builtin_fn, resolve_builtin_fn
from asmcore.expr.context import (
    EvalAsmBlockQuery,
    EvalContext,
    EvalFunctionArgument,
    EvalFunctionQuery,
    EvalProvider,
    EvalVariableQuery,
    dummy_eval_query,
)
from asmcore.expr.expression import (
    BinaryOp,
    Expr,
    ExprAsm,
    ExprBinary,
    ExprBlock,
    ExprCall,
    ExprError,
    ExprLiteral,
    ExprSlice,
    ExprSliceShort,
    ExprTernary,
    ExprUnary,
    ExprVariable,
    UnaryOp,
    Value,
    ValueKind,
)
from asmcore.util.bigint import BigInt, BigIntError


class _Propagate(Exception):
    """Carries an unknown or failed value up to the top of the evaluation."""

    def __init__(self, value: Value) -> None:
        super().__init__()
        self.value = value


def _eval(expr: Expr, ctx: EvalContext, provider: EvalProvider) -> Value:
    """Evaluate a sub-expression, unwinding if its value must propagate."""
    value = _dispatch(expr, ctx, provider)
    if value.should_propagate():
        raise _Propagate(value)
    return value


def _dispatch(expr: Expr, ctx: EvalContext, provider: EvalProvider) -> Value:
    handler = _HANDLERS.get(type(expr))
    if handler is None:
        raise TypeError(f"cannot evaluate {type(expr).__name__}")
    return handler(expr, ctx, provider)


def _eval_literal(expr: ExprLiteral, ctx: EvalContext, provider: EvalProvider) -> Value:
    return expr.value


def _eval_variable(expr: ExprVariable, ctx: EvalContext, provider: EvalProvider) -> Value:
    if expr.hierarchy_level == 0 and len(expr.hierarchy) == 1:
        name = expr.hierarchy[0]
        if resolve_builtin_fn(name) is not None:
            return Value.builtin_function(name)
        local = ctx.get_local(name)
        if local is not None:
            return local

    return provider(EvalVariableQuery(expr.hierarchy_level, list(expr.hierarchy), expr.span))


def _eval_unary(expr: ExprUnary, ctx: EvalContext, provider: EvalProvider) -> Value:
    inner = _eval(expr.inner, ctx, provider)

    if inner.kind is ValueKind.INTEGER:
        if expr.op is UnaryOp.NEG:
            return Value.integer(-inner.payload)
        return Value.integer(~inner.payload)

    if inner.kind is ValueKind.BOOL and expr.op is UnaryOp.NOT:
        return Value.boolean(not inner.payload)

    raise ExprError("invalid argument type to operator", expr.span)


def _eval_assign(expr: ExprBinary, ctx: EvalContext, provider: EvalProvider) -> Value:
    target = expr.lhs
    if not isinstance(target, ExprVariable):
        raise ExprError("invalid assignment destination", target.span)
    if target.hierarchy_level != 0 or len(target.hierarchy) != 1:
        raise ExprError("symbol cannot be assigned to", target.span)

    value = _eval(expr.rhs, ctx, provider)
    ctx.set_local(target.hierarchy[0], value)
    return Value.void()


def _eval_lazy(expr: ExprBinary, ctx: EvalContext, provider: EvalProvider) -> Value:
    short_circuit = expr.op is BinaryOp.LAZY_OR

    lhs = _eval(expr.lhs, ctx, provider)
    if lhs.kind is not ValueKind.BOOL:
        raise ExprError("invalid argument type to operator", expr.lhs.span)
    if lhs.payload == short_circuit:
        return lhs

    rhs = _eval(expr.rhs, ctx, provider)
    if rhs.kind is not ValueKind.BOOL:
        raise ExprError("invalid argument type to operator", expr.rhs.span)
    return rhs


_BOOL_OPS: Dict[BinaryOp, Callable[[bool, bool], bool]] = {
    BinaryOp.AND: lambda a, b: a and b,
    BinaryOp.OR: lambda a, b: a or b,
    BinaryOp.XOR: lambda a, b: a != b,
    BinaryOp.EQ: lambda a, b: a == b,
    BinaryOp.NE: lambda a, b: a != b,
}

_CHECKED_OPS: Dict[BinaryOp, Callable[[BigInt, BigInt, Any], BigInt]] = {
    BinaryOp.ADD: BigInt.checked_add,
    BinaryOp.SUB: BigInt.checked_sub,
    BinaryOp.MUL: BigInt.checked_mul,
    BinaryOp.DIV: BigInt.checked_div,
    BinaryOp.MOD: BigInt.checked_mod,
    BinaryOp.SHL: BigInt.checked_shl,
    BinaryOp.SHR: BigInt.checked_shr,
}

_BITWISE_OPS: Dict[BinaryOp, Callable[[BigInt, BigInt], BigInt]] = {
    BinaryOp.AND: lambda a, b: a & b,
    BinaryOp.OR: lambda a, b: a | b,
    BinaryOp.XOR: lambda a, b: a ^ b,
}

_COMPARE_OPS: Dict[BinaryOp, Callable[[BigInt, BigInt], bool]] = {
    BinaryOp.EQ: lambda a, b: a == b,
    BinaryOp.NE: lambda a, b: a != b,
    BinaryOp.LT: lambda a, b: a < b,
    BinaryOp.LE: lambda a, b: a <= b,
    BinaryOp.GT: lambda a, b: a > b,
    BinaryOp.GE: lambda a, b: a >= b,
}


def _eval_binary(expr: ExprBinary, ctx: EvalContext, provider: EvalProvider) -> Value:
    op = expr.op
    if op is BinaryOp.ASSIGN:
        return _eval_assign(expr, ctx, provider)
    if op in (BinaryOp.LAZY_OR, BinaryOp.LAZY_AND):
        return _eval_lazy(expr, ctx, provider)

    lhs = _eval(expr.lhs, ctx, provider)
    rhs = _eval(expr.rhs, ctx, provider)

    if lhs.kind is ValueKind.BOOL and rhs.kind is ValueKind.BOOL:
        bool_op = _BOOL_OPS.get(op)
        if bool_op is None:
            raise ExprError("invalid argument types to operator", expr.span)
        return Value.boolean(bool_op(lhs.payload, rhs.payload))

    lhs_int = lhs.get_bigint()
    rhs_int = rhs.get_bigint()
    if lhs_int is None or rhs_int is None:
        raise ExprError("invalid argument types to operator", expr.span)

    if op in _CHECKED_OPS:
        return Value.integer(_CHECKED_OPS[op](lhs_int, rhs_int, expr.span))
    if op in _BITWISE_OPS:
        return Value.integer(_BITWISE_OPS[op](lhs_int, rhs_int))
    if op in _COMPARE_OPS:
        return Value.boolean(_COMPARE_OPS[op](lhs_int, rhs_int))
    if op is BinaryOp.CONCAT:
        if lhs_int.size is None:
            raise ExprError("argument to concatenation with indefinite size", expr.lhs.span)
        if rhs_int.size is None:
            raise ExprError("argument to concatenation with indefinite size", expr.rhs.span)
        return Value.integer(
            lhs_int.concat((lhs_int.size, 0), rhs_int, (rhs_int.size, 0))
        )

    raise ExprError("invalid argument types to operator", expr.span)


def _eval_ternary(expr: ExprTernary, ctx: EvalContext, provider: EvalProvider) -> Value:
    cond = _eval(expr.cond, ctx, provider)
    if cond.kind is not ValueKind.BOOL:
        raise ExprError("invalid condition type", expr.cond.span)
    branch = expr.true_branch if cond.payload else expr.false_branch
    return _eval(branch, ctx, provider)


def _eval_slice(expr: ExprSlice, ctx: EvalContext, provider: EvalProvider) -> Value:
    inner = _eval(expr.inner, ctx, provider).get_bigint()
    if inner is None:
        raise ExprError("invalid argument type to slice", expr.span)

    left = _eval(expr.left, ctx, provider)
    right = _eval(expr.right, ctx, provider)
    left_usize = left.expect_usize(expr.span) + 1
    right_usize = right.expect_usize(expr.span)
    return Value.integer(inner.checked_slice(left_usize, right_usize, expr.span))


def _eval_slice_short(
    expr: ExprSliceShort, ctx: EvalContext, provider: EvalProvider
) -> Value:
    inner = _eval(expr.inner, ctx, provider).get_bigint()
    if inner is None:
        raise ExprError("invalid argument type to slice", expr.span)

    size = _eval(expr.size, ctx, provider).expect_usize(expr.span)
    return Value.integer(inner.checked_slice(size, 0, expr.span))


def _eval_block(expr: ExprBlock, ctx: EvalContext, provider: EvalProvider) -> Value:
    result = Value.void()
    for inner in expr.exprs:
        result = _eval(inner, ctx, provider)
    return result


def _eval_call(expr: ExprCall, ctx: EvalContext, provider: EvalProvider) -> Value:
    func = _eval(expr.target, ctx, provider)
    args = [
        EvalFunctionArgument(_eval(arg, ctx, provider), arg.span) for arg in expr.args
    ]
    query = EvalFunctionQuery(func=func, args=args, span=expr.span, eval_ctx=ctx)

    if func.kind is ValueKind.EXPR_BUILTIN_FUNCTION:
        return eval_builtin_fn(query)
    if func.kind in (ValueKind.ASM_BUILTIN_FUNCTION, ValueKind.FUNCTION):
        return provider(query)
    if func.kind is ValueKind.UNKNOWN:
        raise ExprError("unknown function", expr.target.span)
    raise ExprError("expression is not callable", expr.target.span)


def _eval_asm(expr: ExprAsm, ctx: EvalContext, provider: EvalProvider) -> Value:
    return provider(EvalAsmBlockQuery(ast=expr.ast, span=expr.span, eval_ctx=ctx))


_HANDLERS: Dict[Type[Expr], Callable[[Any, EvalContext, EvalProvider], Value]] = {
    ExprLiteral: _eval_literal,
    ExprVariable: _eval_variable,
    ExprUnary: _eval_unary,
    ExprBinary: _eval_binary,
    ExprTernary: _eval_ternary,
    ExprSlice: _eval_slice,
    ExprSliceShort: _eval_slice_short,
    ExprBlock: _eval_block,
    ExprCall: _eval_call,
    ExprAsm: _eval_asm,
}


def evaluate(
    expr: Expr,
    provider: EvalProvider = dummy_eval_query,
    ctx: Optional[EvalContext] = None,
) -> Value:
    """Evaluate an expression; unknown or failed values are returned as they are.

    Raises ExprError or BigIntError when the expression cannot be evaluated.
    """
    if ctx is None:
        ctx = EvalContext()
    try:
        return _dispatch(expr, ctx, provider)
    except _Propagate as propagated:
        return propagated.value


def eval_bigint(expr: Expr, provider: EvalProvider = dummy_eval_query) -> BigInt:
    """Evaluate an expression that must give an integer."""
    bigint = evaluate(expr, provider).expect_bigint(expr.span)
    return BigInt(bigint.value, bigint.size)


def eval_nonzero_usize(expr: Expr, provider: EvalProvider = dummy_eval_query) -> int:
    """Evaluate an expression that must give a positive machine-sized integer."""
    return evaluate(expr, provider).expect_nonzero_usize(expr.span)


def try_eval_usize(expr: Expr) -> Optional[int]:
    """The expression's value if it is a constant non-negative integer, else None."""
    try:
        value = evaluate(expr, dummy_eval_query)
    except (ExprError, BigIntError):
        return None
    return value.as_usize()