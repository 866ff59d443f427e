"""Session control for Lox: runs source text through the scanner, parser
and interpreter and reports what went wrong.

A :class:`Session` owns one :class:`~lox.interpreter.Interpreter`, so
variables defined by one ``run`` call are visible to the next. Each call
returns its own :class:`RunResult`; nothing is carried over between runs
except the global scope.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from termcolor import colored

from .ast import Expression
from .errors import Diagnostic, LoxRuntimeError
from .interpreter import Interpreter
from .parser import parse
from .scanner import scan


@dataclass
class RunResult:
    """Outcome of a single :meth:`Session.run` call."""
    diagnostics: List[Diagnostic] = field(default_factory=list)
    runtime_error: Optional[LoxRuntimeError] = None

    @property
    def had_error(self) -> bool:
        return bool(self.diagnostics)

    @property
    def had_runtime_error(self) -> bool:
        return self.runtime_error is not None

    @property
    def ok(self) -> bool:
        return not self.had_error and not self.had_runtime_error


class Session:
    ERROR = "red"

    def __init__(
        self,
        interpreter: Optional[Interpreter] = None,
        stderr: Optional[TextIO] = None,
        color: bool = False,
    ):
        self.interpreter = interpreter if interpreter is not None else Interpreter()
        self.stderr = stderr
        self.color = color

    def run(self, source: str, repl: bool = False) -> RunResult:
        result = RunResult()
        tokens, lex_errors = scan(source)
        statements, parse_errors = parse(tokens)
        self.interpreter.debug(f"scanned {len(tokens)} tokens, parsed {len(statements)} statements")

        result.diagnostics.extend(lex_errors)
        result.diagnostics.extend(parse_errors)
        for diagnostic in result.diagnostics:
            self.report(str(diagnostic))
        if result.had_error:
            return result

        if repl and len(statements) == 1 and isinstance(statements[0], Expression):
            result.runtime_error = self.show(statements[0])
        else:
            result.runtime_error = self.interpreter.interpret(statements, on_error=self.runtime_error)
        return result

    def show(self, stmt: Expression) -> Optional[LoxRuntimeError]:
        """Evaluate a lone expression statement and write its value."""
        interpreter = self.interpreter
        try:
            value = interpreter.evaluate(stmt.expression, interpreter.globals)
            print(interpreter.stringify(value, stmt.expression), file=interpreter.stdout)
        except LoxRuntimeError as error:
            self.runtime_error(error)
            return error
        return None

    def run_file(self, path: str) -> RunResult:
        with open(path, 'r', encoding='utf-8') as f:
            source = f.read()
        return self.run(source)

    def runtime_error(self, error: LoxRuntimeError):
        self.report(error.report())

    def report(self, message: str):
        if self.color:
            message = colored(message, Session.ERROR, attrs=["bold"])
        print(message, file=self.stderr if self.stderr is not None else sys.stderr)
