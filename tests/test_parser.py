from lox.ast import Assign, Binary, Block, Expression, Grouping, Literal, Print, Unary, Var, Variable
from lox.ast_json import to_sexpr
from lox.errors import LexError, ParseError
from lox.parser import parse_program
from lox.types import NIL


def parse_ok(source):
    statements, errors = parse_program(source)
    assert errors == []
    return statements


def test_precedence_and_associativity():
    statements = parse_ok('1 - 2 - 3 * -4 == 5 > 6;')
    assert [to_sexpr(s) for s in statements] == ['(; (== (- (- 1 2) (* 3 (- 4))) (> 5 6)))']


def test_grouping_and_unary():
    statements = parse_ok('print !(true == false);')
    assert to_sexpr(statements[0]) == '(print (! (group (== true false))))'
    assert isinstance(statements[0], Print)
    assert isinstance(statements[0].expression, Unary)
    assert isinstance(statements[0].expression.right, Grouping)


def test_literals():
    statements = parse_ok('nil; "s"; 2.5; false;')
    values = [s.expression.value for s in statements]
    assert values == [NIL, 's', 2.5, False]
    assert all(isinstance(s.expression, Literal) for s in statements)


def test_var_declarations():
    first, second = parse_ok('var a; var b = a;')
    assert isinstance(first, Var) and first.initializer is None
    assert first.name.lexeme == 'a'
    assert isinstance(second.initializer, Variable)
    assert second.initializer.name.lexeme == 'a'


def test_assignment_is_right_associative():
    (stmt,) = parse_ok('a = b = 3;')
    assert isinstance(stmt, Expression)
    assert isinstance(stmt.expression, Assign)
    assert stmt.expression.name.lexeme == 'a'
    assert isinstance(stmt.expression.value, Assign)
    assert to_sexpr(stmt) == '(; (= a (= b 3)))'


def test_nested_blocks():
    (stmt,) = parse_ok('{ var x = 1; { print x; } }')
    assert isinstance(stmt, Block)
    assert isinstance(stmt.statements[0], Var)
    assert isinstance(stmt.statements[1], Block)
    assert to_sexpr(stmt) == '(block (var x 1) (block (print x)))'


def test_invalid_assignment_target():
    statements, errors = parse_program('1 + a = 3;')
    assert errors == [ParseError(1, 'Invalid assignment target.', " at '='")]
    # The statement itself still parses to the left-hand side
    assert isinstance(statements[0].expression, Binary)


def test_missing_semicolon_at_end():
    statements, errors = parse_program('print 1')
    assert statements == []
    assert [str(e) for e in errors] == ["[line 1] Error at end: Expect ';' after value."]


def test_failing_declaration_is_dropped_and_parsing_resumes():
    statements, errors = parse_program('var = 1;\nprint 2;\n(1;\nprint 3;')
    assert [str(e) for e in errors] == [
        "[line 1] Error at '=': Expect variable name.",
        "[line 3] Error at ';': Expect ')' after expression.",
    ]
    assert [to_sexpr(s) for s in statements] == ['(print 2)', '(print 3)']


def test_expect_expression():
    statements, errors = parse_program(');')
    assert statements == []
    assert [str(e) for e in errors] == ["[line 1] Error at ')': Expect expression."]


def test_unclosed_block():
    statements, errors = parse_program('{ print 1;')
    assert statements == []
    assert [str(e) for e in errors] == ["[line 1] Error at end: Expect '}' after block."]


def test_lex_errors_come_first():
    statements, errors = parse_program('print @;')
    assert isinstance(errors[0], LexError)
    assert isinstance(errors[1], ParseError)
    assert statements == []
