"""Static analysis of expressions: sizes and values known without evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from asmcore.expr.builtins import get_statically_known_value_builtin_fn
from asmcore.expr.evaluate import try_eval_usize
from asmcore.expr.expression import (
    BinaryOp,
    Expr,
    ExprAsm,
    ExprBinary,
    ExprBlock,
    ExprCall,
    ExprLiteral,
    ExprSlice,
    ExprSliceShort,
    ExprTernary,
    ExprUnary,
    ExprVariable,
    ValueKind,
)


@dataclass
class StaticallyKnownLocal:
    size: Optional[int] = None
    value_known: bool = False


@dataclass
class StaticallyKnownVariableQuery:
    hierarchy_level: int
    hierarchy: List[str]


@dataclass
class StaticallyKnownFunctionQuery:
    func: str
    args: Sequence[Expr]


@dataclass
class StaticallyKnownProvider:
    """Answers what is known about locals, variables and functions.

    Without a query callable, nothing about that kind of name is known.
    """

    locals: Dict[str, StaticallyKnownLocal] = field(default_factory=dict)
    query_variable: Optional[Callable[[StaticallyKnownVariableQuery], bool]] = None
    query_function: Optional[Callable[[StaticallyKnownFunctionQuery], bool]] = None


def get_static_size_builtin_le(
    provider: StaticallyKnownProvider, args: Sequence[Expr]
) -> Optional[int]:
    if len(args) == 1:
        return get_static_size(args[0], provider)
    return None


def get_static_size_builtin_fn(
    name: str, provider: StaticallyKnownProvider, args: Sequence[Expr]
) -> Optional[int]:
    """The result size of a built-in call, if it is fixed by its arguments."""
    if name == "le":
        return get_static_size_builtin_le(provider, args)
    return None


def _simple_name(expr: Expr) -> Optional[str]:
    if (
        isinstance(expr, ExprVariable)
        and expr.hierarchy_level == 0
        and len(expr.hierarchy) == 1
    ):
        return expr.hierarchy[0]
    return None


def get_static_size(expr: Expr, provider: StaticallyKnownProvider) -> Optional[int]:
    """The bit size of the expression's value if it can be told without evaluating."""
    if isinstance(expr, ExprVariable):
        name = _simple_name(expr)
        if name is None:
            return None
        local = provider.locals.get(name)
        return local.size if local is not None else None

    if isinstance(expr, ExprLiteral):
        if expr.value.kind is ValueKind.INTEGER:
            return expr.value.payload.size
        return None

    if isinstance(expr, ExprBinary):
        if expr.op is not BinaryOp.CONCAT:
            return None
        lhs_size = get_static_size(expr.lhs, provider)
        if lhs_size is None:
            return None
        rhs_size = get_static_size(expr.rhs, provider)
        if rhs_size is None:
            return None
        return lhs_size + rhs_size

    if isinstance(expr, ExprSlice):
        left = try_eval_usize(expr.left)
        if left is None:
            return None
        right = try_eval_usize(expr.right)
        if right is None:
            return None
        left += 1
        return None if right > left else left - right

    if isinstance(expr, ExprSliceShort):
        return try_eval_usize(expr.size)

    if isinstance(expr, ExprTernary):
        true_size = get_static_size(expr.true_branch, provider)
        if true_size is None:
            return None
        false_size = get_static_size(expr.false_branch, provider)
        return true_size if true_size == false_size else None

    if isinstance(expr, ExprBlock):
        return get_static_size(expr.exprs[-1], provider) if expr.exprs else None

    if isinstance(expr, ExprCall):
        if isinstance(expr.target, ExprVariable) and expr.target.hierarchy_level == 0:
            if len(expr.target.hierarchy) == 1:
                return get_static_size_builtin_fn(
                    expr.target.hierarchy[0], provider, expr.args
                )
        return None

    return None


def is_value_statically_known(expr: Expr, provider: StaticallyKnownProvider) -> bool:
    """Whether the expression's value can be known before the final pass."""
    if isinstance(expr, ExprVariable):
        name = _simple_name(expr)
        if name is not None and name in provider.locals:
            return provider.locals[name].value_known
        if provider.query_variable is None:
            return False
        return provider.query_variable(
            StaticallyKnownVariableQuery(expr.hierarchy_level, list(expr.hierarchy))
        )

    if isinstance(expr, ExprLiteral):
        return True

    if isinstance(expr, (ExprUnary, ExprAsm)):
        return False

    if isinstance(expr, ExprBinary):
        lhs_known = is_value_statically_known(expr.lhs, provider)
        rhs_known = is_value_statically_known(expr.rhs, provider)
        return lhs_known and rhs_known

    if isinstance(expr, ExprSlice):
        return (
            is_value_statically_known(expr.left, provider)
            and is_value_statically_known(expr.right, provider)
            and is_value_statically_known(expr.inner, provider)
        )

    if isinstance(expr, ExprSliceShort):
        return is_value_statically_known(
            expr.size, provider
        ) and is_value_statically_known(expr.inner, provider)

    if isinstance(expr, ExprTernary):
        known = [
            is_value_statically_known(e, provider)
            for e in (expr.cond, expr.true_branch, expr.false_branch)
        ]
        return all(known)

    if isinstance(expr, ExprBlock):
        return all(is_value_statically_known(e, provider) for e in expr.exprs)

    if isinstance(expr, ExprCall):
        target = expr.target
        if not isinstance(target, ExprVariable) or target.hierarchy_level != 0:
            return False
        if not all(is_value_statically_known(arg, provider) for arg in expr.args):
            return False
        if len(target.hierarchy) != 1:
            return False
        name = target.hierarchy[0]
        if get_statically_known_value_builtin_fn(name, expr.args):
            return True
        if provider.query_function is None:
            return False
        return provider.query_function(StaticallyKnownFunctionQuery(name, expr.args))

    return False


def returned_value_span(expr: Expr) -> Any:
    """The span of the sub-expression whose value the expression returns."""
    while isinstance(expr, ExprBlock) and expr.exprs:
        expr = expr.exprs[-1]
    return expr.span