"""Recursive-descent parser for Lox.

Each precedence level of the grammar is one method. Binary levels parse
the next tighter level and then loop while the current token is one of
their operators, folding the operands into a left-associative
:class:`~lox.ast.Binary` node::

    declaration   := varDecl | statement
    varDecl       := "var" IDENT ( "=" expression )? ";"
    statement     := printStmt | block | exprStmt
    printStmt     := "print" expression ";"
    block         := "{" declaration* "}"
    exprStmt      := expression ";"
    expression    := assignment
    assignment    := ( IDENT "=" assignment ) | equality
    equality      := comparison ( ("!="|"==") comparison )*
    comparison    := term ( (">"|">="|"<"|"<=") term )*
    term          := factor ( ("+"|"-") factor )*
    factor        := unary ( ("/"|"*") unary )*
    unary         := ("!"|"-") unary | primary
    primary       := NUMBER | STRING | "true" | "false" | "nil"
                   | IDENT | "(" expression ")"

Syntax problems are recorded as :class:`~lox.errors.ParseError`
diagnostics. A declaration that fails to parse is dropped from the result
and the parser resynchronizes at the next statement boundary.
"""

from __future__ import annotations

from typing import List, Tuple

from .ast import (
    Assign, Binary, Block, Expr, Expression, Grouping, Literal, Print, Stmt,
    Unary, Var, Variable,
)
from .errors import Diagnostic, ParseError
from .scanner import scan
from .tokens import Token, TokenType
from .types import NIL


class ParseAbort(Exception):
    """Raised to abandon the declaration currently being parsed."""
    def __init__(self, error: ParseError):
        super().__init__(str(error))
        self.error = error


# Keywords that begin a statement; the parser resumes before them
STATEMENT_STARTS = {
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
}


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.current = 0
        self.diagnostics: List[ParseError] = []

    def parse(self) -> Tuple[List[Stmt], List[ParseError]]:
        statements: List[Stmt] = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        return statements, self.diagnostics

    # Statements

    def declaration(self):
        try:
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseAbort:
            self.synchronize()
            return None

    def var_declaration(self) -> Stmt:
        name = self.consume(TokenType.IDENTIFIER, 'Expect variable name.')
        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self) -> Stmt:
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Block(self.block())
        return self.expression_statement()

    def print_statement(self) -> Stmt:
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def block(self) -> List[Stmt]:
        # The opening brace is already consumed
        statements: List[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self) -> Stmt:
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    # Expressions

    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.equality()
        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            # Reported, but the parser is still in a known state
            self.error(equals, 'Invalid assignment target.')
        return expr

    def equality(self) -> Expr:
        return self.binary(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self) -> Expr:
        return self.binary(
            self.term,
            TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL,
        )

    def term(self) -> Expr:
        return self.binary(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self) -> Expr:
        return self.binary(self.unary, TokenType.SLASH, TokenType.STAR)

    def binary(self, operand, *operators: TokenType) -> Expr:
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = Binary(expr, operator, right)
        return expr

    def unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)
        return self.primary()

    def primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(NIL)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise ParseAbort(self.error(self.peek(), 'Expect expression.'))

    # Token helpers

    def match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise ParseAbort(self.error(self.peek(), message))

    def check(self, token_type: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type == token_type

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def error(self, token: Token, message: str) -> ParseError:
        error = ParseError.at_token(token, message)
        self.diagnostics.append(error)
        return error

    def synchronize(self) -> None:
        """Skip tokens until the start of the next statement."""
        self.advance()
        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return
            if self.peek().type in STATEMENT_STARTS:
                return
            self.advance()


def parse(tokens: List[Token]) -> Tuple[List[Stmt], List[ParseError]]:
    return Parser(tokens).parse()


def parse_program(source: str) -> Tuple[List[Stmt], List[Diagnostic]]:
    """Scan and parse source text.

    Returns the parsed statements and every diagnostic produced, lex
    diagnostics first.
    """
    tokens, lex_errors = scan(source)
    statements, parse_errors = parse(tokens)
    return statements, [*lex_errors, *parse_errors]
