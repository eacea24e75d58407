"""Runtime value model and the emitted application description."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from homy.ast import BlockStatement, PropertyKind
from homy.errors import DuplicatePropertyError


@dataclass(frozen=True)
class FunctionValue:
    """A user function closed over the frame it was declared in."""

    name: str
    parameters: Tuple[str, ...]
    body: BlockStatement
    captured_frame: int
    line: int = 0
    column: int = 0


@dataclass(frozen=True)
class BuiltinFunction:
    """A host-implemented function. ``arity`` of None accepts any count."""

    name: str
    arity: Optional[int]
    impl: Callable[..., Any]


@dataclass
class BodySection:
    style_reference: str
    content: List[Any] = field(default_factory=list)


@dataclass
class AppDescription:
    """Single-assignment record built up by domain declarations."""

    name: Optional[str] = None
    is_web_package: bool = False
    web_version: Optional[str] = None
    mini_version: Optional[str] = None
    icon_path: Optional[str] = None
    body: Optional[BodySection] = None
    _declared: Dict[str, Tuple[int, int]] = field(default_factory=dict, repr=False, compare=False)

    def set_property(self, prop: PropertyKind, value: Any, line: int, column: int) -> None:
        self._claim(prop.field_name, prop.keyword, line, column)
        setattr(self, prop.field_name, value)

    def open_body(self, style_reference: str, line: int, column: int) -> BodySection:
        self._claim("body", "body", line, column)
        self.body = BodySection(style_reference=style_reference)
        return self.body

    def _claim(self, field_name: str, keyword: str, line: int, column: int) -> None:
        if field_name in self._declared:
            first_line, first_column = self._declared[field_name]
            raise DuplicatePropertyError(
                message=(
                    f"'{keyword}' is already declared at {first_line}:{first_column}"
                ),
                line=line,
                column=column,
                property_name=keyword,
            )
        self._declared[field_name] = (line, column)

    def to_dict(self) -> Dict[str, Any]:
        body = None
        if self.body is not None:
            body = {
                "styleReference": self.body.style_reference,
                "content": [to_host(item) for item in self.body.content],
            }
        return {
            "name": self.name,
            "isWebPackage": self.is_web_package,
            "webVersion": self.web_version,
            "miniVersion": self.mini_version,
            "iconPath": self.icon_path,
            "body": body,
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if is_number(value):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return True


def type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (FunctionValue, BuiltinFunction)):
        return "function"
    return type(value).__name__


def display(value: Any) -> str:
    """Render a value the way ``+`` concatenation and ``print`` show it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (FunctionValue, BuiltinFunction)):
        return f"<func {value.name}>"
    return str(value)


def values_equal(left: Any, right: Any) -> bool:
    if is_number(left) and is_number(right):
        return left == right
    if type_name(left) != type_name(right):
        return False
    if isinstance(left, (FunctionValue, BuiltinFunction)):
        return left is right
    return left == right


def to_host(value: Any) -> Any:
    """Convert a runtime value to a JSON-compatible host value."""
    if isinstance(value, (FunctionValue, BuiltinFunction)):
        return display(value)
    return value


__all__ = [
    "FunctionValue",
    "BuiltinFunction",
    "BodySection",
    "AppDescription",
    "is_number",
    "is_truthy",
    "type_name",
    "display",
    "values_equal",
    "to_host",
]
