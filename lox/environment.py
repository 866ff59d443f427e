"""Lexical scopes for the Lox interpreter."""

from typing import Any, Dict, Optional

from lox.errors import UndefinedVariable
from lox.tokens import Token


class Environment:
    """A lexical scope mapping names to values, linked to its enclosing scope."""
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Any] = {}

    @property
    def depth(self) -> int:
        # The global scope has depth 0
        depth = 0
        env = self.enclosing
        while env is not None:
            depth += 1
            env = env.enclosing
        return depth

    def define(self, name: str, value: Any):
        # Re-declaring a name in the same scope replaces the old binding
        self.values[name] = value

    def get(self, name: Token) -> Any:
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        if self.enclosing is not None:
            return self.enclosing.get(name)
        raise UndefinedVariable(f"Undefined variable '{name.lexeme}'.", name)

    def assign(self, name: Token, value: Any):
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return
        if self.enclosing is not None:
            self.enclosing.assign(name, value)
            return
        raise UndefinedVariable(f"Undefined variable '{name.lexeme}'.", name)

