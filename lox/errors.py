"""Diagnostics and runtime errors for Lox.

Lex and parse problems are collected as :class:`Diagnostic` records and
reported after the pass finishes. Runtime problems are exceptions derived
from :class:`LoxRuntimeError`.
"""

from dataclasses import dataclass
from typing import Optional

from lox.tokens import Token, TokenType


@dataclass(frozen=True)
class Diagnostic:
    """A lex or parse problem reported against a source line."""
    line: int
    message: str
    where: str = ''

    def __str__(self) -> str:
        return f"[line {self.line}] Error{self.where}: {self.message}"


class LexError(Diagnostic):
    pass


class ParseError(Diagnostic):
    @classmethod
    def at_token(cls, token: Token, message: str) -> 'ParseError':
        if token.type == TokenType.EOF:
            return cls(token.line, message, ' at end')
        return cls(token.line, message, f" at '{token.lexeme}'")


class LoxRuntimeError(Exception):
    """Base exception type for errors raised while evaluating Lox code."""
    name = 'RuntimeError'

    def __init__(self, message: str, token: Optional[Token] = None):
        super().__init__(message)
        self.message = message
        self.token = token

    def report(self) -> str:
        if self.token is None:
            return self.message
        return f"{self.message}\n[line {self.token.line};token {self.token.lexeme}]"


class TypeMismatch(LoxRuntimeError):
    name = 'TypeMismatch'


class DivisionByZero(LoxRuntimeError):
    name = 'DivisionByZero'


class UndefinedVariable(LoxRuntimeError):
    name = 'UndefinedVariable'


class UninitializedVariableRead(LoxRuntimeError):
    name = 'UninitializedVariableRead'
