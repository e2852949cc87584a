"""AST node definitions for Lox.

The parser builds these nodes and the interpreter walks them. All nodes are
frozen dataclasses holding tuples for their child sequences, so a parsed
program is never mutated during execution.


File: nodes.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, fields, is_dataclass
from typing import Optional

from loxlang.tokens import Token


class Expr:
    """Base class for expression nodes."""


class Stmt:
    """Base class for statement nodes."""


# ---- Expressions ----

@dataclass(frozen=True)
class Literal(Expr):
    value: object


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    paren: Token
    arguments: tuple[Expr, ...]


@dataclass(frozen=True)
class Get(Expr):
    object: Expr
    name: Token


@dataclass(frozen=True)
class Set(Expr):
    object: Expr
    name: Token
    value: Expr


@dataclass(frozen=True)
class This(Expr):
    keyword: Token


@dataclass(frozen=True)
class Super(Expr):
    keyword: Token
    method: Token


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


# ---- Statements ----

@dataclass(frozen=True)
class ExpressionStmt(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr


@dataclass(frozen=True)
class VarDecl(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True)
class Block(Stmt):
    statements: tuple[Stmt, ...]


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class FunctionDecl(Stmt):
    name: Token
    params: tuple[Token, ...]
    body: tuple[Stmt, ...]


@dataclass(frozen=True)
class ReturnStmt(Stmt):
    keyword: Token
    value: Optional[Expr]


@dataclass(frozen=True)
class BreakStmt(Stmt):
    keyword: Token


@dataclass(frozen=True)
class ClassDecl(Stmt):
    name: Token
    superclass: Optional[Variable]
    methods: tuple[FunctionDecl, ...]


def node_line(node) -> Optional[int]:
    """
    Return the line of the shallowest token inside ``node``, or None.

    The tree is walked iteratively so the lookup works on nodes nested too
    deeply for the recursive evaluator.
    """
    pending = deque([node])
    while pending:
        item = pending.popleft()
        if isinstance(item, Token):
            return item.line
        if isinstance(item, tuple):
            pending.extend(item)
        elif is_dataclass(item):
            pending.extend(getattr(item, f.name) for f in fields(item))
    return None
