import io

from lox.interpreter import Interpreter
from lox.session import Session
from lox.shell import Shell


def run_shell(text):
    out = io.StringIO()
    session = Session(Interpreter(stdout=out), stderr=io.StringIO())
    shell = Shell(session, stdin=io.StringIO(text), stdout=io.StringIO())
    shell.use_rawinput = False
    shell.cmdloop(intro='')
    return out.getvalue(), session


def test_shell_runs_lines_against_one_scope():
    out, _ = run_shell('var x = 2;\nx * 21;\n\nprint x;\nexit\n')
    assert out == '42\n2\n'


def test_shell_reports_errors_and_keeps_going():
    out, session = run_shell('print missing;\nprint "still here";\n')
    assert out == 'still here\n'
    assert session.stderr.getvalue() == "Undefined variable 'missing'.\n[line 1;token missing]\n"


def test_command_words_are_lox_names_inside_code():
    out, session = run_shell('var exit = 1;\nexit = 2;\nvar help = 3;\nhelp + exit;\nexit\nprint "after exit";\n')
    assert out == '2\n5\n'
    assert session.interpreter.globals.values == {'exit': 2.0, 'help': 3.0}


def test_help_and_end_of_input_are_commands():
    session = Session(Interpreter(stdout=io.StringIO()), stderr=io.StringIO())
    shell = Shell(session, stdout=io.StringIO())
    assert not shell.onecmd('help')
    assert 'Each line you type is run as Lox source.' in shell.stdout.getvalue()
    assert shell.onecmd('EOF')
    assert shell.onecmd('  exit  ')
