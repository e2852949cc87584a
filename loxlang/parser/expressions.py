"""
Expression parsing utilities for Lox.

These functions operate on a `loxlang.parser.parser.Parser` instance and
implement the recursive descent logic for expressions, one function per
precedence level, lowest first:

    assignment → or → and → equality → comparison → term → factor
    → unary → call → primary

Binary and logical levels loop while the next token belongs to their
operator set, which makes them left-associative. Assignment recurses into
itself and is therefore right-associative.


File: expressions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from loxlang.nodes import (
    Assign,
    Binary,
    Call,
    Get,
    Grouping,
    Literal,
    Logical,
    Set,
    Super,
    This,
    Unary,
    Variable,
)
from loxlang.tokens import TokenType

from .context import MAX_ARGUMENTS, ClassKind

if TYPE_CHECKING:
    from loxlang.parser import Parser


# ---- Lowest precedence ----

def parse_expression(parser: 'Parser'):
    """Parse a full expression."""
    return parser.assignment()


def parse_assignment(parser: 'Parser'):
    """
    Parse an assignment to a variable or an instance property.

    Syntax:
        <identifier> = <assignment>
        <call>.<identifier> = <assignment>

    The left-hand side is parsed as an ordinary expression first and only
    then checked to be a valid target.
    """
    expr = parser.logical_or()

    if parser.match(TokenType.EQUAL):
        equals = parser.previous
        value = parser.assignment()

        if isinstance(expr, Variable):
            return Assign(expr.name, value)
        if isinstance(expr, Get):
            return Set(expr.object, expr.name, value)

        # Reported without raising; parsing continues normally.
        parser.error(equals, "Invalid assignment target.")

    return expr


def parse_logical_or(parser: 'Parser'):
    """Parse 'or' expressions."""
    expr = parser.logical_and()
    while parser.match(TokenType.OR):
        operator = parser.previous
        right = parser.logical_and()
        expr = Logical(expr, operator, right)
    return expr


def parse_logical_and(parser: 'Parser'):
    """Parse 'and' expressions."""
    expr = parser.equality()
    while parser.match(TokenType.AND):
        operator = parser.previous
        right = parser.equality()
        expr = Logical(expr, operator, right)
    return expr


def parse_equality(parser: 'Parser'):
    """Parse '==' and '!=' expressions."""
    expr = parser.comparison()
    while parser.match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
        operator = parser.previous
        right = parser.comparison()
        expr = Binary(expr, operator, right)
    return expr


def parse_comparison(parser: 'Parser'):
    """Parse relational expressions."""
    expr = parser.term()
    while parser.match(
        TokenType.GREATER,
        TokenType.GREATER_EQUAL,
        TokenType.LESS,
        TokenType.LESS_EQUAL,
    ):
        operator = parser.previous
        right = parser.term()
        expr = Binary(expr, operator, right)
    return expr


def parse_term(parser: 'Parser'):
    """Parse addition and subtraction expressions."""
    expr = parser.factor()
    while parser.match(TokenType.MINUS, TokenType.PLUS):
        operator = parser.previous
        right = parser.factor()
        expr = Binary(expr, operator, right)
    return expr


def parse_factor(parser: 'Parser'):
    """Parse multiplication and division expressions."""
    expr = parser.unary()
    while parser.match(TokenType.SLASH, TokenType.STAR):
        operator = parser.previous
        right = parser.unary()
        expr = Binary(expr, operator, right)
    return expr


def parse_unary(parser: 'Parser'):
    """Parse prefix '!' and '-'."""
    if parser.match(TokenType.BANG, TokenType.MINUS):
        operator = parser.previous
        right = parser.unary()
        return Unary(operator, right)
    return parser.call()


def parse_call(parser: 'Parser'):
    """
    Parse a chain of calls and property accesses.

    Syntax:
        <primary> ( "(" <arguments>? ")" | "." <identifier> )*
    """
    expr = parser.primary()
    while True:
        if parser.match(TokenType.LEFT_PAREN):
            expr = _finish_call(parser, expr)
        elif parser.match(TokenType.DOT):
            name = parser.eat(TokenType.IDENTIFIER, "Expect property name after '.'.")
            expr = Get(expr, name)
        else:
            break
    return expr


def _finish_call(parser: 'Parser', callee):
    """Parse the argument list of a call whose '(' was consumed."""
    arguments = []
    if not parser.check(TokenType.RIGHT_PAREN):
        while True:
            if len(arguments) >= MAX_ARGUMENTS:
                parser.error(parser.curr_token, f"Can't have more than {MAX_ARGUMENTS} arguments.")
            arguments.append(parser.expression())
            if not parser.match(TokenType.COMMA):
                break
    paren = parser.eat(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
    return Call(callee, paren, tuple(arguments))


# ---- Highest precedence ----

def parse_primary(parser: 'Parser'):
    """Parse literals, variables, groupings, 'this' and 'super' accesses."""
    tok = parser.curr_token

    if parser.match(TokenType.FALSE):
        return Literal(False)
    if parser.match(TokenType.TRUE):
        return Literal(True)
    if parser.match(TokenType.NIL):
        return Literal(None)
    if parser.match(TokenType.NUMBER, TokenType.STRING):
        return Literal(tok.literal)

    if parser.match(TokenType.SUPER):
        if parser.class_kind == ClassKind.NONE:
            parser.error(tok, "Can't use 'super' outside of a class.")
        elif parser.class_kind != ClassKind.SUBCLASS:
            parser.error(tok, "Can't use 'super' in a class with no superclass.")
        parser.eat(TokenType.DOT, "Expect '.' after 'super'.")
        method = parser.eat(TokenType.IDENTIFIER, "Expect superclass method name.")
        return Super(tok, method)

    if parser.match(TokenType.THIS):
        if parser.class_kind == ClassKind.NONE:
            parser.error(tok, "Can't use 'this' outside of a class.")
        return This(tok)

    if parser.match(TokenType.IDENTIFIER):
        return Variable(tok)

    if parser.match(TokenType.LEFT_PAREN):
        expr = parser.expression()
        parser.eat(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
        return Grouping(expr)

    raise parser.error(tok, "Expect expression.")
