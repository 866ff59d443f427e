"""Tree-walking interpreter for Lox.

The interpreter evaluates the statements produced by :mod:`lox.parser`
against a chain of :class:`~lox.environment.Environment` scopes. Runtime
problems are raised as :class:`~lox.errors.LoxRuntimeError` subclasses and
stop the current batch of statements at the first failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, TextIO

from .ast import (
    Assign, Binary, Block, Expr, Expression, Grouping, Literal, Print, Stmt,
    Unary, Var, Variable,
)
from .environment import Environment
from .errors import (
    DivisionByZero, LoxRuntimeError, TypeMismatch, UninitializedVariableRead,
)
from .tokens import Token, TokenType
from .types import (
    UNINITIALIZED, UninitializedVal, is_truthy, normalize, number_operand,
    to_string, values_equal,
)


ORDERING = {
    TokenType.GREATER: lambda a, b: a > b,
    TokenType.GREATER_EQUAL: lambda a, b: a >= b,
    TokenType.LESS: lambda a, b: a < b,
    TokenType.LESS_EQUAL: lambda a, b: a <= b,
}


@dataclass
class Operand:
    """The outcome of evaluating one side of a binary expression."""
    value: Any = None
    error: Optional[LoxRuntimeError] = None

    def get(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


class Interpreter:
    """Core interpreter that executes Lox statements."""
    def __init__(self, stdout: Optional[TextIO] = None, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.globals = Environment()
        self.stdout = stdout
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # Public API
    def interpret(
        self,
        statements: List[Stmt],
        env: Optional[Environment] = None,
        on_error: Optional[Callable[[LoxRuntimeError], None]] = None,
    ) -> Optional[LoxRuntimeError]:
        """Execute statements in order, stopping at the first runtime error.

        The error is passed to ``on_error`` (when given) and returned; the
        remaining statements are skipped. Returns ``None`` when every
        statement ran.
        """
        if env is None:
            env = self.globals
        for stmt in statements:
            try:
                self.execute(stmt, env)
            except LoxRuntimeError as error:
                self.debug(f"runtime error {error.name}: {error.message}")
                if on_error is not None:
                    on_error(error)
                return error
        return None

    def execute(self, node: Stmt, env: Environment):
        if self.debug_level >= 1:
            self.debug(f"execute {type(node).__name__} at depth {env.depth}")
        if isinstance(node, Expression):
            self.evaluate(node.expression, env)
            return
        if isinstance(node, Print):
            value = self.evaluate(node.expression, env)
            print(self.stringify(value, node.expression), file=self.stdout)
            return
        if isinstance(node, Var):
            value = UNINITIALIZED
            if node.initializer is not None:
                value = self.evaluate(node.initializer, env)
            env.define(node.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"define {node.name.lexeme} = {value!r}")
            return
        if isinstance(node, Block):
            self.execute_block(node.statements, Environment(enclosing=env))
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def execute_block(self, statements: List[Stmt], env: Environment):
        # env is dropped by the caller once the block is done
        for stmt in statements:
            self.execute(stmt, env)

    def evaluate(self, node: Expr, env: Environment) -> Any:
        return normalize(self._evaluate(node, env))

    def _evaluate(self, node: Expr, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Variable):
            return env.get(node.name)
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.assign(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.name.lexeme} = {value!r}")
            return value
        if isinstance(node, Unary):
            right = self.evaluate(node.right, env)
            result = self.apply_unary_op(node.operator, right)
            if self.debug_level >= 3:
                self.debug(f"{node.operator.lexeme}{right!r} -> {result!r}")
            return result
        if isinstance(node, Binary):
            left = self.evaluate_operand(node.left, env)
            right = self.evaluate_operand(node.right, env)
            result = self.apply_binary_op(node.operator, left, right)
            if self.debug_level >= 3:
                self.debug(f"{left.value!r} {node.operator.lexeme} {right.value!r} -> {result!r}")
            return result
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def evaluate_operand(self, node: Expr, env: Environment) -> Operand:
        """Evaluate one side of a binary expression, keeping a failure for later.

        Both sides always run; which failure gets reported is decided by the
        operator in :meth:`apply_binary_op`.
        """
        try:
            return Operand(self.evaluate(node, env))
        except LoxRuntimeError as e:
            return Operand(error=e)

    def apply_unary_op(self, operator: Token, right: Any) -> Any:
        if operator.type == TokenType.MINUS:
            return -self.number_operand(operator, right)
        if operator.type == TokenType.BANG:
            return not is_truthy(right)
        raise TypeMismatch(f"unknown unary operator {operator.lexeme}", operator)

    def apply_binary_op(self, operator: Token, left: Operand, right: Operand) -> Any:
        """Apply a binary operator to two evaluated operands.

        Each operator checks its operands in a fixed order and reports the
        first failure: the left side (its evaluation error, then its type)
        before the right, except for ``/``, which checks the divisor and
        its zero test before the dividend. ``+`` reports any failed or
        mismatched operand as a type mismatch.
        """
        op = operator.type
        if op == TokenType.EQUAL_EQUAL:
            return values_equal(left.get(), right.get())
        if op == TokenType.BANG_EQUAL:
            return not values_equal(left.get(), right.get())
        if op == TokenType.PLUS:
            a, b = left.value, right.value
            if left.error is None and right.error is None:
                if isinstance(a, float) and isinstance(b, float):
                    return a + b
                if isinstance(a, str) and isinstance(b, str):
                    return a + b
            raise TypeMismatch('Operands must be two numbers or two strings.', operator)
        if op == TokenType.SLASH:
            y = self.number_operand(operator, right.get())
            if y == 0.0:
                raise DivisionByZero('Division by zero.', operator)
            return self.number_operand(operator, left.get()) / y
        x = self.number_operand(operator, left.get())
        y = self.number_operand(operator, right.get())
        if op in ORDERING:
            return ORDERING[op](x, y)
        if op == TokenType.MINUS:
            return x - y
        if op == TokenType.STAR:
            return x * y
        raise TypeMismatch(f"unknown binary operator {operator.lexeme}", operator)

    def number_operand(self, operator: Token, value: Any) -> float:
        try:
            return number_operand(value)
        except TypeError:
            raise TypeMismatch('Operand must be a number.', operator)

    def stringify(self, value: Any, expr: Optional[Expr] = None) -> str:
        """Render a value for display, rejecting uninitialized variables."""
        if isinstance(value, UninitializedVal):
            while isinstance(expr, Grouping):
                expr = expr.expression
            if isinstance(expr, Variable):
                raise UninitializedVariableRead(
                    f"Variable '{expr.name.lexeme}' is uninitialized.", expr.name,
                )
            raise UninitializedVariableRead('Value is uninitialized.')
        return to_string(value)
