"""Functions built into the expression language."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence

from asmcore.expr.context import EvalFunctionQuery
from asmcore.expr.expression import ExprError, Value, ValueKind

BuiltinFn = Callable[[EvalFunctionQuery], Value]


def eval_builtin_assert(query: EvalFunctionQuery) -> Value:
    """Void if the condition holds, else a failed constraint with the message."""
    query.ensure_min_max_arg_number(1, 2)
    condition = query.args[0].value.expect_bool(query.args[0].span)
    if condition:
        return Value.void()

    if len(query.args) == 2:
        text = query.args[1].value.expect_string(query.args[1].span).utf8_contents
        message = f"assertion failed: {text}"
    else:
        message = "assertion failed"
    return Value.failed_constraint(ExprError(message, query.span))


def eval_builtin_le(query: EvalFunctionQuery) -> Value:
    """Reverse the byte order of a sized integer whose size is a multiple of 8."""
    query.ensure_arg_number(1)
    arg = query.args[0]
    bigint = arg.value.expect_sized_bigint(arg.span)
    if bigint.size % 8 != 0:
        raise ExprError(
            "argument to `le` must have a size multiple of 8",
            arg.span,
            note=f"got size {bigint.size}",
        )
    return Value.integer(bigint.convert_le())


def eval_builtin_string_encoding(encoding: str, query: EvalFunctionQuery) -> Value:
    query.ensure_arg_number(1)
    arg = query.args[0]
    s = arg.value.expect_string(arg.span)
    return Value.string(s.utf8_contents, encoding)


def eval_builtin_ascii(query: EvalFunctionQuery) -> Value:
    return eval_builtin_string_encoding("ascii", query)


def eval_builtin_utf8(query: EvalFunctionQuery) -> Value:
    return eval_builtin_string_encoding("utf8", query)


def eval_builtin_utf16be(query: EvalFunctionQuery) -> Value:
    return eval_builtin_string_encoding("utf16be", query)


def eval_builtin_utf16le(query: EvalFunctionQuery) -> Value:
    return eval_builtin_string_encoding("utf16le", query)


def eval_builtin_utf32be(query: EvalFunctionQuery) -> Value:
    return eval_builtin_string_encoding("utf32be", query)


def eval_builtin_utf32le(query: EvalFunctionQuery) -> Value:
    return eval_builtin_string_encoding("utf32le", query)


def eval_builtin_strlen(query: EvalFunctionQuery) -> Value:
    """The length of a string in UTF-8 bytes."""
    query.ensure_arg_number(1)
    arg = query.args[0]
    s = arg.value.expect_string(arg.span)
    return Value.integer(len(s.utf8_contents.encode("utf-8", errors="surrogatepass")))


_BUILTINS: Dict[str, BuiltinFn] = {
    "assert": eval_builtin_assert,
    "le": eval_builtin_le,
    "ascii": eval_builtin_ascii,
    "utf8": eval_builtin_utf8,
    "utf16be": eval_builtin_utf16be,
    "utf16le": eval_builtin_utf16le,
    "utf32be": eval_builtin_utf32be,
    "utf32le": eval_builtin_utf32le,
    "strlen": eval_builtin_strlen,
}

_STATICALLY_KNOWN = frozenset(_BUILTINS) - {"assert"}


def resolve_builtin_fn(name: str) -> Optional[BuiltinFn]:
    return _BUILTINS.get(name)


def eval_builtin_fn(query: EvalFunctionQuery) -> Value:
    """Call the built-in function named by the query's function value."""
    if query.func.kind is not ValueKind.EXPR_BUILTIN_FUNCTION:
        raise TypeError("query does not name a built-in function")
    builtin = resolve_builtin_fn(query.func.payload)
    if builtin is None:
        raise ExprError("unknown function", query.span)
    return builtin(query)


def get_statically_known_value_builtin_fn(name: str, args: Sequence[Any]) -> bool:
    """Whether the built-in's result is known whenever its arguments are."""
    return name in _STATICALLY_KNOWN