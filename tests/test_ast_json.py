import json

from lox.ast_json import program_from_obj, program_to_obj, to_sexpr
from lox.interpreter import Interpreter
from lox.parser import parse_program


def test_program_survives_json(capsys):
    source = 'var a = nil; { var b = -2; a = b * (3 + 1); } print a; print !true == false; print "x" + "y";'
    statements, errors = parse_program(source)
    assert errors == []
    text = json.dumps(program_to_obj(statements))
    loaded = program_from_obj(json.loads(text))
    assert loaded == statements
    Interpreter().interpret(loaded)
    assert capsys.readouterr().out.splitlines() == ['-8', 'true', 'xy']


def test_var_without_initializer():
    statements, _ = parse_program('var a;')
    obj = program_to_obj(statements)
    assert obj['body'][0] == {
        'type': 'Var',
        'name': {'type': 'IDENTIFIER', 'lexeme': 'a', 'literal': None, 'line': 1},
        'initializer': None,
    }
    assert to_sexpr(program_from_obj(obj)[0]) == '(var a)'


def test_sexpr_for_strings_and_assignment():
    statements, _ = parse_program('s = "a" + "b";')
    assert to_sexpr(statements[0]) == '(; (= s (+ "a" "b")))'
