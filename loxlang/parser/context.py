"""
Static parsing context for Lox.

The parser tracks which kind of function and class body it is inside so
misplaced ``return``, ``this``, ``super`` and ``break`` are reported as
syntax errors instead of surfacing at run time.


File: context.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from enum import Enum

from loxlang.tokens import TokenType


MAX_ARGUMENTS = 255

STATEMENT_STARTS = (
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
)


class FunctionKind(str, Enum):
    """
    The kind of function body currently being parsed.
    """
    NONE = "none"
    FUNCTION = "function"
    METHOD = "method"
    INITIALIZER = "initializer"


class ClassKind(str, Enum):
    """
    The kind of class body currently being parsed.
    """
    NONE = "none"
    CLASS = "class"
    SUBCLASS = "subclass"
