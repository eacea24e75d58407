"""Tests for the recursive descent parser."""

import pytest

from homy.ast import (
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    BodyDeclaration,
    BooleanLiteral,
    CallExpression,
    ContentCall,
    DeclarationKind,
    ExpressionStatement,
    ForStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    LogicalExpression,
    MiniAppPropertyDeclaration,
    NodeKind,
    NullLiteral,
    NumberLiteral,
    Program,
    PropertyKind,
    ReturnStatement,
    StringLiteral,
    UnaryExpression,
    VariableDeclaration,
    WhileStatement,
)
from homy.errors import (
    HomySyntaxError,
    InvalidAssignmentTargetError,
    PropertyArityError,
    UnexpectedTokenError,
)
from homy.lexer import tokenize
from homy.parser import HomyParser, parse, parse_source


def parse_expression(source):
    program = parse_source(source + ";")
    statement = program.body[0]
    assert isinstance(statement, ExpressionStatement)
    return statement.expression


class TestParserEntryPoints:
    """Program construction."""

    def test_empty_program(self):
        program = parse_source("")
        assert program == Program(body=())
        assert program.kind is NodeKind.PROGRAM

    def test_parse_tokens(self):
        program = parse(tokenize("let a = 1;"))
        assert len(program.body) == 1

    def test_tokens_must_end_with_eof(self):
        tokens = tokenize("let a = 1;")[:-1]
        with pytest.raises(ValueError):
            HomyParser(tokens)


class TestDomainDeclarations:
    """Application property keywords and body sections."""

    def test_name_declaration(self):
        statement = parse_source('name_app_mini("App");').body[0]
        assert statement == MiniAppPropertyDeclaration(
            property_kind=PropertyKind.APP_NAME, argument=StringLiteral("App")
        )
        assert (statement.line, statement.column) == (1, 1)

    def test_web_package_takes_no_argument(self):
        statement = parse_source("web_package_mini();").body[0]
        assert statement.property_kind is PropertyKind.WEB_PACKAGE
        assert statement.argument is None

    def test_web_version_argument_is_optional(self):
        bare, explicit = parse_source('web_mini_version();\nweb_mini_version("2.0");').body
        assert bare.argument is None
        assert explicit.argument == StringLiteral("2.0")

    def test_wrong_arity_points_at_keyword(self):
        with pytest.raises(PropertyArityError) as exc_info:
            parse_source('let a = 1;\n  name_app_mini("A", "B");')
        error = exc_info.value
        assert (error.line, error.column) == (2, 3)
        assert error.keyword == "name_app_mini"

    def test_missing_required_argument(self):
        with pytest.raises(PropertyArityError):
            parse_source("mini_app_icon();")

    def test_body_section(self):
        source = 'body@ (style: "main.css")\n  Call("hi");\n  "text";\n/body;'
        statement = parse_source(source).body[0]
        assert isinstance(statement, BodyDeclaration)
        assert statement.style_reference == StringLiteral("main.css")
        assert statement.content == (
            ExpressionStatement(ContentCall(arguments=(StringLiteral("hi"),))),
            ExpressionStatement(StringLiteral("text")),
        )

    def test_body_with_identifier_style_and_no_semicolon(self):
        statement = parse_source("body@ (style: theme)\n/body").body[0]
        assert statement.style_reference == Identifier("theme")
        assert statement.content == ()

    def test_unclosed_body(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source('body@ (style: "a")\n Call(1);')
        assert exc_info.value.expected == ["'/body'"]
        assert exc_info.value.found == "end of input"

    def test_nested_body_is_rejected(self):
        with pytest.raises(HomySyntaxError) as exc_info:
            parse_source('body@ (style: "a")\n body@ (style: "b") /body\n/body')
        assert "nested" in exc_info.value.message
        assert exc_info.value.line == 2


class TestDeclarations:
    """let, const and func."""

    def test_let_without_initializer(self):
        statement = parse_source("let x;").body[0]
        assert statement == VariableDeclaration(DeclarationKind.LET, "x", None)

    def test_const_requires_initializer(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("const x;")
        assert "initializer" in exc_info.value.message

    def test_function_declaration(self):
        statement = parse_source("func add(a, b) { return a + b; }").body[0]
        assert isinstance(statement, FunctionDeclaration)
        assert statement.name == "add"
        assert statement.parameters == ("a", "b")
        assert statement.body.body == (
            ReturnStatement(BinaryExpression("+", Identifier("a"), Identifier("b"))),
        )

    def test_duplicate_parameter(self):
        with pytest.raises(HomySyntaxError) as exc_info:
            parse_source("func f(a, a) {}")
        assert "Duplicate parameter" in exc_info.value.message


class TestControlFlow:
    """if / while / for / jumps."""

    def test_else_if_chain(self):
        statement = parse_source("if (a) {} else if (b) {} else { c; }").body[0]
        assert isinstance(statement, IfStatement)
        assert isinstance(statement.alternate, IfStatement)
        assert isinstance(statement.alternate.alternate, BlockStatement)

    def test_while(self):
        statement = parse_source("while (x < 3) { x = x + 1; }").body[0]
        assert isinstance(statement, WhileStatement)
        assert statement.test == BinaryExpression("<", Identifier("x"), NumberLiteral(3))

    def test_for_with_all_clauses(self):
        statement = parse_source("for (let i = 0; i < 3; i = i + 1) { break; }").body[0]
        assert isinstance(statement, ForStatement)
        assert isinstance(statement.init, VariableDeclaration)
        assert isinstance(statement.update, AssignmentExpression)

    def test_for_with_empty_clauses(self):
        statement = parse_source("for (;;) { break; }").body[0]
        assert statement.init is None
        assert statement.test is None
        assert statement.update is None

    def test_for_with_expression_init(self):
        statement = parse_source("for (i = 0; i < 1;) {}").body[0]
        assert isinstance(statement.init, ExpressionStatement)

    def test_return_without_value(self):
        statement = parse_source("return;").body[0]
        assert statement == ReturnStatement(None)

    def test_missing_closing_brace(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("if (a) { b;")
        error = exc_info.value
        assert error.expected == ["'}'"]
        assert error.found == "end of input"
        assert error.suggestion == "Close the block with '}'"


class TestExpressions:
    """Precedence and associativity."""

    def test_multiplication_binds_tighter(self):
        assert parse_expression("1 + 2 * 3") == BinaryExpression(
            "+", NumberLiteral(1), BinaryExpression("*", NumberLiteral(2), NumberLiteral(3))
        )

    def test_subtraction_is_left_associative(self):
        assert parse_expression("a - b - c") == BinaryExpression(
            "-", BinaryExpression("-", Identifier("a"), Identifier("b")), Identifier("c")
        )

    def test_assignment_is_right_associative(self):
        assert parse_expression("a = b = 1") == AssignmentExpression(
            Identifier("a"), AssignmentExpression(Identifier("b"), NumberLiteral(1))
        )

    def test_logical_precedence(self):
        assert parse_expression("a || b && c") == LogicalExpression(
            "||", Identifier("a"), LogicalExpression("&&", Identifier("b"), Identifier("c"))
        )

    def test_comparison_above_equality(self):
        expr = parse_expression("a < b == true")
        assert expr == BinaryExpression(
            "==", BinaryExpression("<", Identifier("a"), Identifier("b")), BooleanLiteral(True)
        )

    def test_unary_operators(self):
        assert parse_expression("!-x") == UnaryExpression("!", UnaryExpression("-", Identifier("x")))

    def test_grouping(self):
        assert parse_expression("(1 + 2) * 3") == BinaryExpression(
            "*", BinaryExpression("+", NumberLiteral(1), NumberLiteral(2)), NumberLiteral(3)
        )

    def test_chained_calls(self):
        assert parse_expression("f(1)(2, null)") == CallExpression(
            CallExpression(Identifier("f"), (NumberLiteral(1),)),
            (NumberLiteral(2), NullLiteral()),
        )

    def test_number_values(self):
        assert parse_expression("10") == NumberLiteral(10)
        assert parse_expression("2.5").value == 2.5
        assert isinstance(parse_expression("10").value, int)

    def test_invalid_assignment_target(self):
        with pytest.raises(InvalidAssignmentTargetError):
            parse_source("1 = 2;")

    def test_positions_exclude_from_equality(self):
        assert parse_expression("a+b") == parse_expression("a  +\n b")

    def test_missing_expression(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("let x = ;")
        assert exc_info.value.expected == ["expression"]
        assert exc_info.value.found == "';'"

    def test_missing_semicolon_suggestion(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("let x = 1\nlet y = 2;")
        error = exc_info.value
        assert error.line == 2
        assert error.suggestion == "Add ';' at the end of line 1"
        assert "Expected: ';'" in str(error)

    def test_deeply_nested_expression(self):
        source = "let x = " + "(" * 500 + "1" + ")" * 500 + ";"
        with pytest.raises(HomySyntaxError) as exc_info:
            parse_source(source)
        error = exc_info.value
        assert error.message == "Expression nested too deeply"
        assert error.line == 1
        assert error.column is not None

    def test_long_flat_chain_parses(self):
        program = parse_source("let x = " + " + ".join(["1"] * 600) + ";")
        assert program.body[0].initializer.kind is NodeKind.BINARY_EXPRESSION
