# Lox language package
# This package provides a scanner, parser and tree-walking interpreter for Lox.
from .errors import LoxRuntimeError
from .interpreter import Interpreter
from .parser import parse_program
from .session import RunResult, Session


def run_source(source: str) -> RunResult:
    """Convenience function to run a Lox program from a source string."""
    with Interpreter() as interpreter:
        return Session(interpreter).run(source)


__all__ = [
    'run_source',
    'parse_program',
    'Interpreter',
    'LoxRuntimeError',
    'RunResult',
    'Session',
]
