"""Tree-walking evaluator for homy programs.

Statements produce a :class:`Completion`; ``return``, ``break`` and
``continue`` travel back up to the loop or call that consumes them as plain
values rather than as exceptions. Expressions produce runtime values.

Dispatch is by :class:`~homy.ast.NodeKind` through two handler tables, one
for statements and one for expressions, which together cover every kind.
"""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, TextIO

from homy.ast import (
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    BodyDeclaration,
    CallExpression,
    ContentCall,
    DeclarationKind,
    Expression,
    ExpressionStatement,
    ForStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    LogicalExpression,
    MiniAppPropertyDeclaration,
    Node,
    NodeKind,
    Program,
    PropertyKind,
    ReturnStatement,
    Statement,
    StringLiteral,
    UnaryExpression,
    VariableDeclaration,
    WhileStatement,
)
from homy.config import RuntimeConfig
from homy.errors import (
    ArityMismatchError,
    CallDepthError,
    ContentCallError,
    ControlFlowError,
    DivisionByZeroError,
    HomyError,
    NotCallableError,
    OperandTypeError,
    StepLimitError,
)

from .environment import BindingKind, Environment, ScopeArena
from .values import (
    AppDescription,
    BodySection,
    BuiltinFunction,
    FunctionValue,
    display,
    is_number,
    is_truthy,
    type_name,
    values_equal,
)

logger = logging.getLogger(__name__)


class CompletionType(Enum):
    NORMAL = "normal"
    RETURN = "return"
    BREAK = "break"
    CONTINUE = "continue"


@dataclass(frozen=True)
class Completion:
    """Outcome of executing one statement."""

    type: CompletionType = CompletionType.NORMAL
    value: Any = None
    node: Optional[Node] = None

    @property
    def abrupt(self) -> bool:
        return self.type is not CompletionType.NORMAL


NORMAL = Completion()


class EvaluationState:
    """Track evaluation state and limits."""

    def __init__(self, max_call_depth: int = 100, max_steps: Optional[int] = 1_000_000):
        self.max_call_depth = max_call_depth
        self.max_steps = max_steps
        self.step_count = 0
        self.call_depth = 0
        self.call_stack: List[str] = []

    def enter_call(self, name: str, node: Node) -> None:
        """Enter a function call."""
        self.call_depth += 1
        self.call_stack.append(name)

        if self.call_depth > self.max_call_depth:
            raise CallDepthError(
                message=(
                    f"Maximum call depth ({self.max_call_depth}) exceeded. "
                    f"Call stack: {' -> '.join(self.call_stack[-10:])}"
                ),
                line=node.line,
                column=node.column,
            )

    def exit_call(self) -> None:
        """Exit a function call."""
        self.call_depth -= 1
        if self.call_stack:
            self.call_stack.pop()

    def step(self, node: Node) -> None:
        """Increment step counter."""
        self.step_count += 1

        if self.max_steps is not None and self.step_count > self.max_steps:
            raise StepLimitError(
                message=f"Maximum evaluation steps ({self.max_steps}) exceeded",
                line=node.line,
                column=node.column,
            )


_PROPERTY_VALUE_TYPES = {
    PropertyKind.APP_NAME: ("string",),
    PropertyKind.WEB_VERSION: ("string", "number"),
    PropertyKind.MINI_VERSION: ("string", "number"),
    PropertyKind.APP_ICON: ("string",),
}


class Evaluator:
    """Execute a :class:`~homy.ast.Program` and build its application description."""

    def __init__(
        self,
        config: Optional[RuntimeConfig] = None,
        *,
        path: str = "",
        output: Optional[TextIO] = None,
    ):
        self.config = config or RuntimeConfig()
        self.path = path
        self.output = output
        self.state = EvaluationState(self.config.max_call_depth, self.config.max_steps)
        self.arena = ScopeArena()
        self.app = AppDescription()
        self._body: Optional[BodySection] = None

        self.statement_handlers: Dict[NodeKind, Callable[[Any, Environment], Completion]] = {
            NodeKind.PROGRAM: self._exec_program,
            NodeKind.BLOCK_STATEMENT: self._exec_block,
            NodeKind.VARIABLE_DECLARATION: self._exec_variable_declaration,
            NodeKind.FUNCTION_DECLARATION: self._exec_function_declaration,
            NodeKind.PROPERTY_DECLARATION: self._exec_property_declaration,
            NodeKind.BODY_DECLARATION: self._exec_body_declaration,
            NodeKind.IF_STATEMENT: self._exec_if,
            NodeKind.WHILE_STATEMENT: self._exec_while,
            NodeKind.FOR_STATEMENT: self._exec_for,
            NodeKind.RETURN_STATEMENT: self._exec_return,
            NodeKind.BREAK_STATEMENT: lambda node, env: Completion(CompletionType.BREAK, node=node),
            NodeKind.CONTINUE_STATEMENT: lambda node, env: Completion(CompletionType.CONTINUE, node=node),
            NodeKind.EXPRESSION_STATEMENT: self._exec_expression_statement,
        }
        self.expression_handlers: Dict[NodeKind, Callable[[Any, Environment], Any]] = {
            NodeKind.IDENTIFIER: lambda node, env: env.lookup(node.name, node.line, node.column),
            NodeKind.NUMBER_LITERAL: lambda node, env: node.value,
            NodeKind.STRING_LITERAL: lambda node, env: node.value,
            NodeKind.BOOLEAN_LITERAL: lambda node, env: node.value,
            NodeKind.NULL_LITERAL: lambda node, env: None,
            NodeKind.BINARY_EXPRESSION: self._eval_binary,
            NodeKind.LOGICAL_EXPRESSION: self._eval_logical,
            NodeKind.UNARY_EXPRESSION: self._eval_unary,
            NodeKind.ASSIGNMENT_EXPRESSION: self._eval_assignment,
            NodeKind.CALL_EXPRESSION: self._eval_call,
            NodeKind.CONTENT_CALL: self._eval_content_call,
        }

    # ====================================================================
    # Entry point
    # ====================================================================

    def run(self, program: Program) -> AppDescription:
        """Execute ``program`` against a fresh scope chain."""
        root = Environment.root(self.arena)
        self._install_builtins(root)
        scope = root.child_scope()

        try:
            completion = self.execute(program, scope)
            if completion.type in (CompletionType.BREAK, CompletionType.CONTINUE):
                raise self._stray_jump(completion)
        except RecursionError:
            raise CallDepthError(
                message="Maximum call or nesting depth exceeded (host recursion limit reached)",
                path=self.path or None,
            ) from None
        except HomyError as exc:
            if not exc.path and self.path:
                exc.path = self.path
            raise

        logger.debug(
            "Evaluated %s in %d steps", self.path or "<source>", self.state.step_count
        )
        return self.app

    def execute(self, node: Statement, env: Environment) -> Completion:
        self.state.step(node)
        return self.statement_handlers[node.kind](node, env)

    def evaluate(self, node: Expression, env: Environment) -> Any:
        return self.expression_handlers[node.kind](node, env)

    def execute_sequence(self, statements: Sequence[Statement], env: Environment) -> Completion:
        for statement in statements:
            completion = self.execute(statement, env)
            if completion.abrupt:
                return completion
        return NORMAL

    def _install_builtins(self, env: Environment) -> None:
        builtins = [
            BuiltinFunction("print", None, self._builtin_print),
            BuiltinFunction("len", 1, self._builtin_len),
        ]
        for builtin in builtins:
            env.define(builtin.name, builtin, BindingKind.BUILTIN)

    # ====================================================================
    # Statements
    # ====================================================================

    def _exec_program(self, node: Program, env: Environment) -> Completion:
        completion = self.execute_sequence(node.body, env)
        if completion.type is CompletionType.RETURN:
            return NORMAL
        return completion

    def _exec_block(self, node: BlockStatement, env: Environment) -> Completion:
        scope = env.child_scope()
        try:
            return self.execute_sequence(node.body, scope)
        finally:
            scope.release()

    def _exec_variable_declaration(self, node: VariableDeclaration, env: Environment) -> Completion:
        value = None if node.initializer is None else self.evaluate(node.initializer, env)
        kind = BindingKind.CONST if node.binding_kind is DeclarationKind.CONST else BindingKind.LET
        env.define(node.name, value, kind, node.line, node.column)
        return NORMAL

    def _exec_function_declaration(self, node: FunctionDeclaration, env: Environment) -> Completion:
        function = FunctionValue(
            name=node.name,
            parameters=node.parameters,
            body=node.body,
            captured_frame=env.index,
            line=node.line,
            column=node.column,
        )
        env.capture()
        env.define(node.name, function, BindingKind.FUNCTION, node.line, node.column)
        return NORMAL

    def _exec_property_declaration(self, node: MiniAppPropertyDeclaration, env: Environment) -> Completion:
        prop = node.property_kind
        if prop is PropertyKind.WEB_PACKAGE:
            value: Any = True
        elif node.argument is None:
            value = self.config.default_web_version
        else:
            raw = self.evaluate(node.argument, env)
            allowed = _PROPERTY_VALUE_TYPES[prop]
            if type_name(raw) not in allowed:
                raise OperandTypeError(
                    message=f"Invalid value for {prop.keyword}()",
                    line=node.argument.line,
                    column=node.argument.column,
                    expected_type=" or ".join(allowed),
                    found_type=type_name(raw),
                )
            value = display(raw)

        self.app.set_property(prop, value, node.line, node.column)
        logger.debug("Set %s = %r", prop.field_name, value)
        return NORMAL

    def _exec_body_declaration(self, node: BodyDeclaration, env: Environment) -> Completion:
        reference = node.style_reference
        if isinstance(reference, Identifier) and env.resolve(reference.name) is None:
            style = reference.name
        else:
            style = display(self.evaluate(reference, env))

        section = self.app.open_body(style, node.line, node.column)
        scope = env.child_scope()
        outer, self._body = self._body, section
        try:
            return self.execute_sequence(node.content, scope)
        finally:
            self._body = outer
            scope.release()

    def _exec_if(self, node: IfStatement, env: Environment) -> Completion:
        if is_truthy(self.evaluate(node.test, env)):
            return self.execute(node.consequent, env)
        if node.alternate is not None:
            return self.execute(node.alternate, env)
        return NORMAL

    def _exec_while(self, node: WhileStatement, env: Environment) -> Completion:
        while is_truthy(self.evaluate(node.test, env)):
            self.state.step(node)
            completion = self.execute(node.body, env)
            if completion.type is CompletionType.BREAK:
                break
            if completion.type is CompletionType.RETURN:
                return completion
        return NORMAL

    def _exec_for(self, node: ForStatement, env: Environment) -> Completion:
        scope = env.child_scope()
        try:
            if node.init is not None:
                self.execute(node.init, scope)
            while node.test is None or is_truthy(self.evaluate(node.test, scope)):
                self.state.step(node)
                completion = self.execute(node.body, scope)
                if completion.type is CompletionType.BREAK:
                    break
                if completion.type is CompletionType.RETURN:
                    return completion
                if node.update is not None:
                    self.evaluate(node.update, scope)
            return NORMAL
        finally:
            scope.release()

    def _exec_return(self, node: ReturnStatement, env: Environment) -> Completion:
        value = None if node.value is None else self.evaluate(node.value, env)
        return Completion(CompletionType.RETURN, value, node)

    def _exec_expression_statement(self, node: ExpressionStatement, env: Environment) -> Completion:
        value = self.evaluate(node.expression, env)
        if self._body is not None and isinstance(node.expression, StringLiteral):
            self._emit(value)
        return NORMAL

    # ====================================================================
    # Expressions
    # ====================================================================

    def _eval_assignment(self, node: AssignmentExpression, env: Environment) -> Any:
        value = self.evaluate(node.value, env)
        env.assign(node.target.name, value, node.line, node.column)
        return value

    def _eval_logical(self, node: LogicalExpression, env: Environment) -> Any:
        chain = self._left_chain(node)
        value = self.evaluate(chain[-1].left, env)
        for current in reversed(chain):
            if current.operator == "&&":
                value = self.evaluate(current.right, env) if is_truthy(value) else value
            else:
                value = value if is_truthy(value) else self.evaluate(current.right, env)
        return value

    def _eval_unary(self, node: UnaryExpression, env: Environment) -> Any:
        operand = self.evaluate(node.operand, env)
        if node.operator == "!":
            return not is_truthy(operand)
        if not is_number(operand):
            raise self._type_error(node, "-", "number", operand)
        return -operand

    def _eval_binary(self, node: BinaryExpression, env: Environment) -> Any:
        chain = self._left_chain(node)
        value = self.evaluate(chain[-1].left, env)
        for current in reversed(chain):
            value = self._apply_binary(current, value, self.evaluate(current.right, env))
        return value

    @staticmethod
    def _left_chain(node: Node) -> List[Node]:
        """``node`` and its left operands of the same kind, outermost first.

        ``1 + 2 + 3`` nests to the left; callers fold the chain in a loop.
        """
        chain = [node]
        while chain[-1].left.kind is node.kind:
            chain.append(chain[-1].left)
        return chain

    def _apply_binary(self, node: BinaryExpression, left: Any, right: Any) -> Any:
        op = node.operator

        if op == "==":
            return values_equal(left, right)
        if op == "!=":
            return not values_equal(left, right)

        if op == "+":
            if isinstance(left, str) or isinstance(right, str):
                return display(left) + display(right)
            self._require_numbers(node, left, right, "number or string")
            return left + right

        if op in ("<", ">", "<=", ">="):
            if not (is_number(left) and is_number(right)) and not (
                isinstance(left, str) and isinstance(right, str)
            ):
                raise OperandTypeError(
                    message=f"Cannot compare {type_name(left)} {op} {type_name(right)}",
                    line=node.line,
                    column=node.column,
                    expected_type="two numbers or two strings",
                    found_type=f"{type_name(left)}, {type_name(right)}",
                )
            return _COMPARISONS[op](left, right)

        self._require_numbers(node, left, right, "number")
        if op == "-":
            return left - right
        if op == "*":
            return left * right
        if op in ("/", "%") and right == 0:
            raise DivisionByZeroError(
                message="Division by zero" if op == "/" else "Modulo by zero",
                line=node.line,
                column=node.column,
            )
        if op == "/":
            if isinstance(left, int) and isinstance(right, int) and left % right == 0:
                return left // right
            return left / right
        # op == "%": sign follows the dividend
        result = math.fmod(left, right)
        if isinstance(left, int) and isinstance(right, int):
            return int(result)
        return result

    def _eval_call(self, node: CallExpression, env: Environment) -> Any:
        callee = self.evaluate(node.callee, env)
        arguments = [self.evaluate(argument, env) for argument in node.arguments]
        return self.call_function(callee, arguments, node)

    def _eval_content_call(self, node: ContentCall, env: Environment) -> Any:
        if self._body is None:
            raise ContentCallError(
                message="Call(...) can only be used inside a body section",
                line=node.line,
                column=node.column,
            )
        if not node.arguments:
            raise ArityMismatchError(
                message="Call() expects at least 1 argument, got 0",
                line=node.line,
                column=node.column,
                expected=1,
                received=0,
            )

        values = [self.evaluate(argument, env) for argument in node.arguments]
        target, rest = values[0], values[1:]
        if isinstance(target, (FunctionValue, BuiltinFunction)):
            result = self.call_function(target, rest, node)
        elif rest:
            raise NotCallableError(
                message=f"Call() with arguments needs a function, got {type_name(target)}",
                line=node.line,
                column=node.column,
            )
        else:
            result = target

        self._emit(result)
        return result

    # ====================================================================
    # Calls
    # ====================================================================

    def call_function(self, callee: Any, arguments: List[Any], node: Node) -> Any:
        if not isinstance(callee, (FunctionValue, BuiltinFunction)):
            raise NotCallableError(
                message=f"Value of type {type_name(callee)} is not callable",
                line=node.line,
                column=node.column,
            )

        expected = len(callee.parameters) if isinstance(callee, FunctionValue) else callee.arity
        if expected is not None and expected != len(arguments):
            raise ArityMismatchError(
                message=f"{callee.name}() expects {expected} argument(s), got {len(arguments)}",
                line=node.line,
                column=node.column,
                expected=expected,
                received=len(arguments),
            )

        self.state.enter_call(callee.name, node)
        try:
            if isinstance(callee, BuiltinFunction):
                return callee.impl(node, *arguments)
            return self._invoke(callee, arguments)
        finally:
            self.state.exit_call()

    def _invoke(self, function: FunctionValue, arguments: List[Any]) -> Any:
        scope = Environment(self.arena, function.captured_frame).child_scope()
        try:
            for name, value in zip(function.parameters, arguments):
                scope.define(name, value, BindingKind.PARAMETER, function.line, function.column)
            completion = self.execute_sequence(function.body.body, scope)
        finally:
            scope.release()

        if completion.type is CompletionType.RETURN:
            return completion.value
        if completion.abrupt:
            raise self._stray_jump(completion)
        return None

    # ====================================================================
    # Builtins
    # ====================================================================

    def _builtin_print(self, node: Node, *values: Any) -> None:
        text = " ".join(display(value) for value in values)
        logger.debug("print at %d:%d: %s", node.line, node.column, text)
        stream = self.output if self.output is not None else sys.stdout
        stream.write(text + "\n")
        return None

    def _builtin_len(self, node: Node, value: Any) -> int:
        if not isinstance(value, str):
            raise self._type_error(node, "len", "string", value)
        return len(value)

    # ====================================================================
    # Helpers
    # ====================================================================

    def _emit(self, value: Any) -> None:
        self._body.content.append(value)
        logger.debug("Body content += %r", value)

    def _require_numbers(self, node: BinaryExpression, left: Any, right: Any, expected: str) -> None:
        for operand in (left, right):
            if not is_number(operand):
                raise self._type_error(node, node.operator, expected, operand)

    @staticmethod
    def _type_error(node: Node, operator: str, expected: str, value: Any) -> OperandTypeError:
        return OperandTypeError(
            message=f"Unsupported operand for '{operator}'",
            line=node.line,
            column=node.column,
            expected_type=expected,
            found_type=type_name(value),
        )

    @staticmethod
    def _stray_jump(completion: Completion) -> ControlFlowError:
        keyword = completion.type.value
        node = completion.node
        return ControlFlowError(
            message=f"'{keyword}' used outside of a loop",
            line=node.line if node is not None else None,
            column=node.column if node is not None else None,
        )


_COMPARISONS: Dict[str, Callable[[Any, Any], bool]] = {
    "<": lambda a, b: a < b,
    ">": lambda a, b: a > b,
    "<=": lambda a, b: a <= b,
    ">=": lambda a, b: a >= b,
}


__all__ = [
    "CompletionType",
    "Completion",
    "EvaluationState",
    "Evaluator",
]
