"""Evaluation state and the queries an expression hands to its provider."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from asmcore.expr.expression import ExprError, Value

EVAL_RECURSION_DEPTH_MAX = 25

ASM_HYGIENIZE_PREFIX = "__"


class EvalContext:
    """Local variables and token substitutions visible during evaluation."""

    def __init__(self) -> None:
        self.locals: Dict[str, Value] = {}
        self.token_substs: Dict[str, str] = {}
        self.recursion_depth = 0

    def deepened(self) -> "EvalContext":
        """A fresh, empty context one recursion level deeper."""
        ctx = EvalContext()
        ctx.recursion_depth = self.recursion_depth + 1
        return ctx

    def check_recursion_depth_limit(self, span: Any = None) -> None:
        if self.recursion_depth >= EVAL_RECURSION_DEPTH_MAX:
            raise ExprError("recursion depth limit reached", span)

    def set_local(self, name: str, value: Value) -> None:
        self.locals[name] = value

    def get_local(self, name: str) -> Optional[Value]:
        return self.locals.get(name)

    def set_token_subst(self, name: str, excerpt: str) -> None:
        self.token_substs[name] = excerpt

    def get_token_subst(self, name: str) -> Optional[str]:
        """The text substituted for `name`; locals map to their hygienized name."""
        if name in self.token_substs:
            return self.token_substs[name]
        if name in self.locals:
            return self.hygienize_name_for_asm_subst(name)
        return None

    def hygienize_locals_for_asm_subst(self) -> "EvalContext":
        """A deeper context with every name given the hygiene prefix."""
        ctx = self.deepened()
        for name, value in self.locals.items():
            if not name.startswith(ASM_HYGIENIZE_PREFIX):
                ctx.locals[self.hygienize_name_for_asm_subst(name)] = value
        for name, excerpt in self.token_substs.items():
            if not name.startswith(ASM_HYGIENIZE_PREFIX):
                ctx.token_substs[self.hygienize_name_for_asm_subst(name)] = excerpt
        return ctx

    @staticmethod
    def hygienize_name_for_asm_subst(name: str) -> str:
        return ASM_HYGIENIZE_PREFIX + name


@dataclass
class EvalVariableQuery:
    hierarchy_level: int
    hierarchy: List[str]
    span: Any = None


@dataclass
class EvalFunctionArgument:
    value: Value
    span: Any = None


@dataclass
class EvalFunctionQuery:
    func: Value
    args: List[EvalFunctionArgument] = field(default_factory=list)
    span: Any = None
    eval_ctx: EvalContext = field(default_factory=EvalContext)

    def ensure_arg_number(self, expected: int) -> None:
        if len(self.args) != expected:
            plural = "" if expected == 1 else "s"
            raise ExprError(
                f"function expected {expected} argument{plural} "
                f"(but got {len(self.args)})",
                self.span,
            )

    def ensure_min_max_arg_number(self, minimum: int, maximum: int) -> None:
        if not minimum <= len(self.args) <= maximum:
            raise ExprError(
                f"function expected {minimum} to {maximum} arguments "
                f"(but got {len(self.args)})",
                self.span,
            )


@dataclass
class EvalAsmBlockQuery:
    ast: Any
    span: Any = None
    eval_ctx: EvalContext = field(default_factory=EvalContext)


EvalQuery = Union[EvalVariableQuery, EvalFunctionQuery, EvalAsmBlockQuery]
EvalProvider = Callable[[EvalQuery], Value]


def dummy_eval_query(query: EvalQuery) -> Value:
    """A provider for contexts where no variables, functions or asm blocks exist."""
    if isinstance(query, EvalVariableQuery):
        raise ExprError("cannot reference variables in this context", query.span)
    if isinstance(query, EvalFunctionQuery):
        raise ExprError("cannot reference functions in this context", query.span)
    if isinstance(query, EvalAsmBlockQuery):
        raise ExprError("cannot use `asm` blocks in this context", query.span)
    raise TypeError(f"unknown query type: {type(query).__name__}")