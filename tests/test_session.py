import io

from lox.errors import LexError, ParseError, TypeMismatch, UninitializedVariableRead
from lox.interpreter import Interpreter
from lox.session import Session


def make_session():
    out, err = io.StringIO(), io.StringIO()
    return Session(Interpreter(stdout=out), stderr=err), out, err


def test_repl_echoes_lone_expression():
    session, out, err = make_session()
    result = session.run('1 + 2;', repl=True)
    assert result.ok
    assert out.getvalue() == '3\n'
    assert err.getvalue() == ''


def test_lone_expression_is_silent_outside_repl():
    session, out, _ = make_session()
    assert session.run('1 + 2;').ok
    assert out.getvalue() == ''


def test_repl_echo_only_for_single_expression():
    session, out, _ = make_session()
    session.run('var a = 1; a + 1;', repl=True)
    assert out.getvalue() == ''
    session.run('print a;', repl=True)
    assert out.getvalue() == '1\n'


def test_repl_state_persists_between_runs():
    session, out, _ = make_session()
    session.run('var count = 1;', repl=True)
    session.run('count = count + 1;', repl=True)
    session.run('count;', repl=True)
    assert out.getvalue() == '2\n2\n'


def test_repl_echo_of_uninitialized_variable():
    session, out, err = make_session()
    session.run('var x;', repl=True)
    result = session.run('x;', repl=True)
    assert isinstance(result.runtime_error, UninitializedVariableRead)
    assert out.getvalue() == ''
    assert err.getvalue() == "Variable 'x' is uninitialized.\n[line 1;token x]\n"


def test_syntax_errors_prevent_execution():
    session, out, err = make_session()
    result = session.run('print "ok";\nprint ;\n@')
    assert result.had_error
    assert not result.ok
    assert out.getvalue() == ''
    assert result.diagnostics == [
        LexError(3, "Unexpected character '@'."),
        ParseError(2, 'Expect expression.', " at ';'"),
    ]
    assert err.getvalue().splitlines() == [
        "[line 3] Error: Unexpected character '@'.",
        "[line 2] Error at ';': Expect expression.",
    ]


def test_runtime_error_report_and_fresh_next_run():
    session, out, err = make_session()
    result = session.run('print 1;\nprint 2 < "3";\nprint 3;')
    assert isinstance(result.runtime_error, TypeMismatch)
    assert result.had_runtime_error and not result.had_error
    assert out.getvalue() == '1\n'
    assert err.getvalue() == 'Operand must be a number.\n[line 2;token <]\n'
    assert session.run('print 4;').ok
    assert out.getvalue() == '1\n4\n'


def test_colored_report():
    out, err = io.StringIO(), io.StringIO()
    session = Session(Interpreter(stdout=out), stderr=err, color=True)
    session.run('print -"x";')
    assert 'Operand must be a number.' in err.getvalue()


def test_run_file(tmp_path, capsys):
    program = tmp_path / 'hello.lox'
    program.write_text('var greeting = "hi";\nprint greeting;\n', encoding='utf-8')
    result = Session(Interpreter()).run_file(str(program))
    assert result.ok
    assert capsys.readouterr().out == 'hi\n'
