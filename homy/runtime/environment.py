"""Lexical scope chain stored as an arena of frames.

Frames live in a single list owned by :class:`ScopeArena` and refer to their
parent by index. An :class:`Environment` is a lightweight handle pairing the
arena with one frame index, so closures only need to remember an integer.

Frames are released when the block or call that opened them exits. A
released frame is reclaimed once it reaches the top of the arena, unless a
closure captured it; captured frames stay alive for the rest of the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from homy.errors import (
    ConstReassignmentError,
    DuplicateDeclarationError,
    UndeclaredNameError,
)


class BindingKind(Enum):
    LET = "let"
    CONST = "const"
    FUNCTION = "func"
    PARAMETER = "param"
    BUILTIN = "builtin"


@dataclass
class Binding:
    value: Any
    kind: BindingKind
    line: int = 0
    column: int = 0


@dataclass
class Frame:
    parent: Optional[int]
    bindings: Dict[str, Binding] = field(default_factory=dict)
    captured: bool = False
    released: bool = False


class ScopeArena:
    """Owns every frame of one evaluation run."""

    def __init__(self) -> None:
        self.frames: List[Frame] = []

    def __len__(self) -> int:
        return len(self.frames)

    def __getitem__(self, index: int) -> Frame:
        return self.frames[index]

    def allocate(self, parent: Optional[int]) -> int:
        self.frames.append(Frame(parent=parent))
        return len(self.frames) - 1

    def release(self, index: int) -> None:
        self.frames[index].released = True
        while self.frames and self.frames[-1].released and not self.frames[-1].captured:
            self.frames.pop()

    def capture(self, index: int) -> None:
        self.frames[index].captured = True

    def chain(self, index: int) -> Iterator[Frame]:
        """Yield the frame at ``index`` and then each ancestor, innermost first."""
        current: Optional[int] = index
        while current is not None:
            frame = self.frames[current]
            yield frame
            current = frame.parent


class Environment:
    """Handle to one frame of a :class:`ScopeArena`."""

    def __init__(self, arena: ScopeArena, index: int):
        self.arena = arena
        self.index = index

    @classmethod
    def root(cls, arena: Optional[ScopeArena] = None) -> "Environment":
        arena = arena if arena is not None else ScopeArena()
        return cls(arena, arena.allocate(None))

    @property
    def frame(self) -> Frame:
        return self.arena[self.index]

    @property
    def parent(self) -> Optional["Environment"]:
        parent = self.frame.parent
        return None if parent is None else Environment(self.arena, parent)

    def child_scope(self) -> "Environment":
        return Environment(self.arena, self.arena.allocate(self.index))

    def release(self) -> None:
        self.arena.release(self.index)

    def capture(self) -> None:
        self.arena.capture(self.index)

    def owns(self, name: str) -> bool:
        """True if ``name`` is declared in this frame, ignoring ancestors."""
        return name in self.frame.bindings

    def define(
        self,
        name: str,
        value: Any,
        kind: BindingKind = BindingKind.LET,
        line: int = 0,
        column: int = 0,
    ) -> None:
        existing = self.frame.bindings.get(name)
        if existing is not None:
            raise DuplicateDeclarationError(
                message=f"'{name}' is already declared in this scope",
                line=line,
                column=column,
                name=name,
                first_line=existing.line,
                first_column=existing.column,
            )
        self.frame.bindings[name] = Binding(value=value, kind=kind, line=line, column=column)

    def resolve(self, name: str) -> Optional[Binding]:
        for frame in self.arena.chain(self.index):
            binding = frame.bindings.get(name)
            if binding is not None:
                return binding
        return None

    def lookup(self, name: str, line: int = 0, column: int = 0) -> Any:
        binding = self.resolve(name)
        if binding is None:
            raise self._undeclared(name, line, column)
        return binding.value

    def assign(self, name: str, value: Any, line: int = 0, column: int = 0) -> None:
        binding = self.resolve(name)
        if binding is None:
            raise self._undeclared(name, line, column)
        if binding.kind is BindingKind.CONST:
            raise ConstReassignmentError(
                message=f"Cannot reassign const '{name}'",
                line=line,
                column=column,
                name=name,
                declared_line=binding.line,
                declared_column=binding.column,
            )
        binding.value = value

    def visible_names(self) -> List[str]:
        names: List[str] = []
        for frame in self.arena.chain(self.index):
            for name in frame.bindings:
                if name not in names:
                    names.append(name)
        return names

    def _undeclared(self, name: str, line: int, column: int) -> UndeclaredNameError:
        return UndeclaredNameError(
            message=f"'{name}' is not declared",
            line=line,
            column=column,
            name=name,
            available=self.visible_names(),
        )

    def __repr__(self) -> str:
        return f"Environment(index={self.index}, names={list(self.frame.bindings)})"


__all__ = ["BindingKind", "Binding", "Frame", "ScopeArena", "Environment"]
