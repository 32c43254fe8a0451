"""Expression trees and the values they evaluate to."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, List, Optional

from asmcore.util.bigint import BigInt


class ExprError(ValueError):
    """An expression or value that cannot be used as requested."""

    def __init__(self, message: str, span: Any = None, note: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.span = span
        self.note = note

    def __str__(self) -> str:
        return self.message


class UnaryOp(enum.Enum):
    NEG = enum.auto()
    NOT = enum.auto()


class BinaryOp(enum.Enum):
    ASSIGN = enum.auto()
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    MOD = enum.auto()
    SHL = enum.auto()
    SHR = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    XOR = enum.auto()
    EQ = enum.auto()
    NE = enum.auto()
    LT = enum.auto()
    LE = enum.auto()
    GT = enum.auto()
    GE = enum.auto()
    LAZY_AND = enum.auto()
    LAZY_OR = enum.auto()
    CONCAT = enum.auto()


@dataclass(frozen=True)
class ExprString:
    """A string together with the encoding used when it becomes an integer."""

    utf8_contents: str
    encoding: str = "utf8"

    def to_bigint(self) -> BigInt:
        """The encoded bytes read as a big-endian integer sized 8 bits per byte."""
        text = self.utf8_contents
        if self.encoding == "utf8":
            data = text.encode("utf-8", errors="surrogatepass")
        elif self.encoding == "utf16be":
            data = text.encode("utf-16-be", errors="surrogatepass")
        elif self.encoding == "utf16le":
            data = text.encode("utf-16-le", errors="surrogatepass")
        elif self.encoding == "utf32be":
            data = text.encode("utf-32-be", errors="surrogatepass")
        elif self.encoding == "utf32le":
            data = text.encode("utf-32-le", errors="surrogatepass")
        elif self.encoding == "ascii":
            data = bytes(ord(c) if ord(c) < 0x100 else 0 for c in text)
        else:
            raise ValueError(f"invalid string encoding: {self.encoding}")
        return BigInt.from_bytes_be(data)


class ValueKind(enum.Enum):
    UNKNOWN = enum.auto()
    FAILED_CONSTRAINT = enum.auto()
    VOID = enum.auto()
    INTEGER = enum.auto()
    STRING = enum.auto()
    BOOL = enum.auto()
    EXPR_BUILTIN_FUNCTION = enum.auto()
    ASM_BUILTIN_FUNCTION = enum.auto()
    FUNCTION = enum.auto()


@dataclass(frozen=True)
class Value:
    """The result of evaluating an expression: a kind and its payload."""

    kind: ValueKind
    payload: Any = None

    @classmethod
    def unknown(cls) -> "Value":
        return cls(ValueKind.UNKNOWN)

    @classmethod
    def failed_constraint(cls, message: Any) -> "Value":
        return cls(ValueKind.FAILED_CONSTRAINT, message)

    @classmethod
    def void(cls) -> "Value":
        return cls(ValueKind.VOID)

    @classmethod
    def integer(cls, value: Any) -> "Value":
        bigint = value if isinstance(value, BigInt) else BigInt(value)
        return cls(ValueKind.INTEGER, bigint)

    @classmethod
    def string(cls, value: str, encoding: str = "utf8") -> "Value":
        return cls(ValueKind.STRING, ExprString(value, encoding))

    @classmethod
    def boolean(cls, value: bool) -> "Value":
        return cls(ValueKind.BOOL, bool(value))

    @classmethod
    def builtin_function(cls, name: str) -> "Value":
        return cls(ValueKind.EXPR_BUILTIN_FUNCTION, name)

    @classmethod
    def asm_builtin_function(cls, name: str) -> "Value":
        return cls(ValueKind.ASM_BUILTIN_FUNCTION, name)

    @classmethod
    def function(cls, index: int) -> "Value":
        return cls(ValueKind.FUNCTION, index)

    def is_unknown(self) -> bool:
        return self.kind is ValueKind.UNKNOWN

    def should_propagate(self) -> bool:
        """Whether evaluation must stop and hand this value upwards unchanged."""
        return self.kind in (ValueKind.UNKNOWN, ValueKind.FAILED_CONSTRAINT)

    def make_literal(self) -> "ExprLiteral":
        return ExprLiteral(None, self)

    def get_bigint(self) -> Optional[BigInt]:
        """The value as an integer, converting strings; None for other kinds."""
        if self.kind is ValueKind.INTEGER:
            return BigInt(self.payload.value, self.payload.size)
        if self.kind is ValueKind.STRING:
            return self.payload.to_bigint()
        return None

    def coalesce_to_integer(self) -> "Value":
        if self.kind is ValueKind.STRING:
            return Value.integer(self.payload.to_bigint())
        return self

    def unwrap_bigint(self) -> BigInt:
        if self.kind is not ValueKind.INTEGER:
            raise TypeError("not an integer")
        return self.payload

    def expect_bigint(self, span: Any = None) -> BigInt:
        if self.kind is ValueKind.INTEGER:
            return self.payload
        if self.kind is ValueKind.UNKNOWN:
            raise ExprError("value is unknown", span)
        raise ExprError("expected integer", span)

    def expect_sized_bigint(self, span: Any = None) -> BigInt:
        bigint = self.expect_bigint(span)
        if bigint.size is None:
            raise ExprError("expected integer with definite size", span)
        return bigint

    def expect_error_or_bigint(self, span: Any = None) -> "Value":
        value = self.coalesce_to_integer()
        if value.should_propagate() or value.kind is ValueKind.INTEGER:
            return value
        raise ExprError("expected integer", span)

    def expect_error_or_sized_bigint(self, span: Any = None) -> "Value":
        value = self.coalesce_to_integer()
        if value.should_propagate():
            return value
        if value.kind is ValueKind.INTEGER and value.payload.size is not None:
            return value
        raise ExprError("expected integer with definite size", span)

    def as_usize(self) -> Optional[int]:
        if self.kind is ValueKind.INTEGER:
            return self.payload.maybe_usize()
        return None

    def expect_usize(self, span: Any = None) -> int:
        if self.kind is ValueKind.INTEGER:
            return self.payload.checked_usize(span)
        if self.kind is ValueKind.UNKNOWN:
            raise ExprError("value is unknown", span)
        raise ExprError("expected non-negative integer", span)

    def expect_error_or_usize(self, span: Any = None) -> "Value":
        if self.should_propagate():
            return self
        if self.kind is ValueKind.INTEGER:
            self.payload.checked_usize(span)
            return self
        raise ExprError("expected non-negative integer", span)

    def expect_nonzero_usize(self, span: Any = None) -> int:
        if self.kind is ValueKind.INTEGER:
            return self.payload.checked_nonzero_usize(span)
        if self.kind is ValueKind.UNKNOWN:
            raise ExprError("value is unknown", span)
        raise ExprError("expected positive integer", span)

    def expect_bool(self, span: Any = None) -> bool:
        if self.kind is ValueKind.BOOL:
            return self.payload
        raise ExprError("expected boolean", span)

    def expect_string(self, span: Any = None) -> ExprString:
        if self.kind is ValueKind.STRING:
            return self.payload
        raise ExprError("expected string", span)

    def min_size(self) -> int:
        return self.unwrap_bigint().min_size()

    def get_bit(self, index: int) -> bool:
        return self.unwrap_bigint().get_bit(index)


@dataclass
class Expr:
    """Base of all expression nodes; `span` covers the whole node."""

    span: Any


@dataclass
class ExprLiteral(Expr):
    value: Value


@dataclass
class ExprVariable(Expr):
    hierarchy_level: int
    hierarchy: List[str] = field(default_factory=list)


@dataclass
class ExprUnary(Expr):
    op_span: Any
    op: UnaryOp
    inner: Expr


@dataclass
class ExprBinary(Expr):
    op_span: Any
    op: BinaryOp
    lhs: Expr
    rhs: Expr


@dataclass
class ExprTernary(Expr):
    cond: Expr
    true_branch: Expr
    false_branch: Expr


@dataclass
class ExprSlice(Expr):
    slice_span: Any
    left: Expr
    right: Expr
    inner: Expr


@dataclass
class ExprSliceShort(Expr):
    size_span: Any
    size: Expr
    inner: Expr


@dataclass
class ExprBlock(Expr):
    exprs: List[Expr] = field(default_factory=list)


@dataclass
class ExprCall(Expr):
    target: Expr
    args: List[Expr] = field(default_factory=list)


@dataclass
class ExprAsm(Expr):
    ast: Any