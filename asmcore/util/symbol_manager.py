"""Hierarchical symbol declarations and name lookup."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple


class SymbolError(LookupError):
    """A symbol that cannot be declared or found."""

    def __init__(
        self,
        message: str,
        span: Any = None,
        note: Optional[str] = None,
        note_span: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.span = span
        self.note = note
        self.note_span = note_span

    def __str__(self) -> str:
        return self.message


class SymbolKind(enum.Enum):
    CONSTANT = enum.auto()
    LABEL = enum.auto()
    FUNCTION = enum.auto()
    OTHER = enum.auto()


@dataclass(frozen=True)
class SymbolContext:
    """The chain of enclosing symbol names that relative lookups start from."""

    hierarchy: Tuple[str, ...] = ()

    @classmethod
    def new_global(cls) -> "SymbolContext":
        return cls(())


@dataclass
class SymbolDecl:
    span: Any
    name: str
    kind: SymbolKind
    depth: int
    ctx: SymbolContext
    item_ref: int
    children: Dict[str, int] = field(default_factory=dict)


class SymbolManager:
    """Declares symbols in a tree and resolves names, possibly relative ones."""

    def __init__(self, report_as: str) -> None:
        self.report_as = report_as
        self.decls: List[SymbolDecl] = []
        self.globals: Dict[str, int] = {}
        self.span_refs: Dict[Any, int] = {}

    def _children(self, parent_ref: Optional[int]) -> Dict[str, int]:
        if parent_ref is None:
            return self.globals
        return self.decls[parent_ref].children

    def _traverse(
        self, parent_ref: Optional[int], hierarchy: Sequence[str]
    ) -> Optional[int]:
        if not hierarchy:
            return None
        current = parent_ref
        for name in hierarchy:
            child = self._children(current).get(name)
            if child is None:
                return None
            current = child
        return current

    def _get_parent(
        self, parent_ref: Optional[int], hierarchy: Sequence[str]
    ) -> Optional[int]:
        current = parent_ref
        for name in hierarchy:
            child = self._children(current).get(name)
            if child is None:
                return None
            current = child
        return current

    def get(self, item_ref: int) -> SymbolDecl:
        return self.decls[item_ref]

    def get_by_name_global(self, name: str, span: Any = None) -> int:
        return self.get_by_name(SymbolContext.new_global(), 0, [name], span)

    def try_get_by_name(
        self, ctx: SymbolContext, hierarchy_level: int, hierarchy: Sequence[str]
    ) -> Optional[int]:
        """Look a name up below the ancestor `hierarchy_level` deep in `ctx`."""
        if hierarchy_level > len(ctx.hierarchy):
            return None
        parent = self._get_parent(None, ctx.hierarchy[:hierarchy_level])
        return self._traverse(parent, hierarchy)

    def get_by_name(
        self,
        ctx: SymbolContext,
        hierarchy_level: int,
        hierarchy: Sequence[str],
        span: Any = None,
    ) -> int:
        found = self.try_get_by_name(ctx, hierarchy_level, hierarchy)
        if found is None:
            raise SymbolError(
                f"unknown {self.report_as} "
                f"`{self.get_displayable_name(hierarchy_level, hierarchy)}`",
                span,
            )
        return found

    def get_displayable_name(
        self, hierarchy_level: int, hierarchy: Sequence[str]
    ) -> str:
        return "." * hierarchy_level + ".".join(hierarchy)

    def generate_anonymous_name(self) -> str:
        return f"#anonymous_{self.report_as}_{len(self.decls)}"

    def declare(
        self,
        ctx: SymbolContext,
        name: str,
        hierarchy_level: int,
        kind: SymbolKind,
        span: Any = None,
    ) -> int:
        """Declare `name` under the ancestor `hierarchy_level` deep in `ctx`."""
        if hierarchy_level > len(ctx.hierarchy):
            raise SymbolError("symbol declaration skips a nesting level", span)

        parent_ref = self._get_parent(None, ctx.hierarchy[:hierarchy_level])
        children = self._children(parent_ref)

        duplicate = children.get(name)
        if duplicate is not None:
            raise SymbolError(
                f"duplicate {self.report_as} `{name}`",
                span,
                note="first declared here",
                note_span=self.decls[duplicate].span,
            )

        item_ref = len(self.decls)
        children[name] = item_ref

        new_ctx = SymbolContext(tuple(ctx.hierarchy[:hierarchy_level]) + (name,))
        full_name = name
        if parent_ref is not None:
            full_name = f"{self.decls[parent_ref].name}.{name}"

        self.decls.append(
            SymbolDecl(
                span=span,
                name=full_name,
                kind=kind,
                depth=hierarchy_level,
                ctx=new_ctx,
                item_ref=item_ref,
            )
        )
        self.span_refs[span] = item_ref
        return item_ref

    def add_span_ref(self, span: Any, item_ref: int) -> None:
        self.span_refs[span] = item_ref