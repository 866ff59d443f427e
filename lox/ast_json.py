"""JSON serialization/deserialization for the Lox AST.

This module converts between Lox AST dataclasses and plain Python
dict/list structures suitable for JSON encoding, so a parsed program can be
written to disk and executed later without re-parsing. It also renders
expressions and statements in a parenthesized prefix form that makes
grouping and precedence visible.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Assign,
    Binary,
    Block,
    Expression,
    Grouping,
    Literal,
    Print,
    Unary,
    Var,
    Variable,
)
from .tokens import Token, TokenType
from .types import NAN, NIL, UNINITIALIZED, NaNVal, NilVal, UninitializedVal, to_string


def value_to_obj(value: Any) -> Any:
    if isinstance(value, NilVal):
        return {"__value__": "nil"}
    if isinstance(value, NaNVal):
        return {"__value__": "nan"}
    if isinstance(value, UninitializedVal):
        return {"__value__": "uninitialized"}
    return value


def value_from_obj(o: Any) -> Any:
    if isinstance(o, dict):
        tag = o["__value__"]
        if tag == "nil":
            return NIL
        if tag == "nan":
            return NAN
        if tag == "uninitialized":
            return UNINITIALIZED
        raise ValueError(f"unknown value tag: {tag}")
    # JSON has no float/int distinction; Lox numbers are always floats
    if isinstance(o, int) and not isinstance(o, bool):
        return float(o)
    return o


def token_to_obj(t: Token) -> Dict[str, Any]:
    return {
        "type": t.type.name,
        "lexeme": t.lexeme,
        "literal": value_to_obj(t.literal),
        "line": t.line,
    }


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["type"]], o["lexeme"], value_from_obj(o["literal"]), o["line"])


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]

    # Statements
    if isinstance(node, Expression):
        return {"type": "Expression", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Print):
        return {"type": "Print", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Var):
        return {
            "type": "Var",
            "name": token_to_obj(node.name),
            "initializer": ast_to_obj(node.initializer),
        }
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}

    # Expressions
    if isinstance(node, Binary):
        return {
            "type": "Binary",
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Literal):
        return {"type": "Literal", "value": value_to_obj(node.value)}
    if isinstance(node, Unary):
        return {
            "type": "Unary",
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Variable):
        return {"type": "Variable", "name": token_to_obj(node.name)}
    if isinstance(node, Assign):
        return {
            "type": "Assign",
            "name": token_to_obj(node.name),
            "value": ast_to_obj(node.value),
        }

    raise TypeError(f"Unsupported node type for serialization: {type(node).__name__}")


def ast_from_obj(o: Any) -> Any:
    if o is None:
        return None
    if isinstance(o, list):
        return [ast_from_obj(x) for x in o]

    t = o.get("type")
    if t == "Expression":
        return Expression(ast_from_obj(o["expression"]))
    if t == "Print":
        return Print(ast_from_obj(o["expression"]))
    if t == "Var":
        return Var(token_from_obj(o["name"]), ast_from_obj(o.get("initializer")))
    if t == "Block":
        return Block([ast_from_obj(s) for s in o["statements"]])
    if t == "Binary":
        return Binary(ast_from_obj(o["left"]), token_from_obj(o["operator"]), ast_from_obj(o["right"]))
    if t == "Grouping":
        return Grouping(ast_from_obj(o["expression"]))
    if t == "Literal":
        return Literal(value_from_obj(o["value"]))
    if t == "Unary":
        return Unary(token_from_obj(o["operator"]), ast_from_obj(o["right"]))
    if t == "Variable":
        return Variable(token_from_obj(o["name"]))
    if t == "Assign":
        return Assign(token_from_obj(o["name"]), ast_from_obj(o["value"]))

    raise ValueError(f"Unknown AST node type in JSON: {t}")


def parenthesize(name: str, *parts: Any) -> str:
    return "(" + " ".join([name, *(to_sexpr(p) for p in parts)]) + ")"


def to_sexpr(node: Any) -> str:
    """Render a node in parenthesized prefix form, e.g. ``(* (- 1) (group 2))``."""
    if isinstance(node, Binary):
        return parenthesize(node.operator.lexeme, node.left, node.right)
    if isinstance(node, Grouping):
        return parenthesize("group", node.expression)
    if isinstance(node, Literal):
        if isinstance(node.value, str):
            return f'"{node.value}"'
        return to_string(node.value)
    if isinstance(node, Unary):
        return parenthesize(node.operator.lexeme, node.right)
    if isinstance(node, Variable):
        return node.name.lexeme
    if isinstance(node, Assign):
        return parenthesize(f"= {node.name.lexeme}", node.value)
    if isinstance(node, Expression):
        return parenthesize(";", node.expression)
    if isinstance(node, Print):
        return parenthesize("print", node.expression)
    if isinstance(node, Var):
        if node.initializer is None:
            return f"(var {node.name.lexeme})"
        return parenthesize(f"var {node.name.lexeme}", node.initializer)
    if isinstance(node, Block):
        return parenthesize("block", *node.statements)
    raise TypeError(f"Unsupported node type for printing: {type(node).__name__}")


def program_to_obj(statements: List[Any]) -> Dict[str, Any]:
    return {"type": "Program", "body": ast_to_obj(statements)}


def program_from_obj(o: Dict[str, Any]) -> List[Any]:
    if o.get("type") != "Program":
        raise ValueError("expected a Program object at the top level")
    return ast_from_obj(o["body"])
