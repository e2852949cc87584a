"""Lexer for Lox.

This lexer performs a single pass over the source code using a combined
regular expression of named groups. Each match yields a :class:`Token`
containing its type, lexeme, literal value and source line number.

Tokens cover literals (numbers, strings), keywords (``var``, ``fun``,
``class`` …), operators and delimiters. Two-character operators are listed
before their one-character prefixes so the longest match always wins.
Comment text beginning with ``//`` is skipped. Errors (unexpected characters
and unterminated strings) do not stop the pass: every one of them is
collected so the caller can report them together.


File: lexer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

import re

from loxlang.exceptions import LoxSyntaxError, ScanException
from loxlang.tokens import KEYWORDS, Token, TokenType


TOKEN_SPECIFICATION: list[tuple[str, str]] = [
    # Literals
    ('NUMBER',        r'[0-9]+(?:\.[0-9]+)?'),
    ('STRING',        r'"[^"\n]*"'),
    ('UNTERMINATED',  r'"[^"\n]*'),
    ('IDENTIFIER',    r'[A-Za-z_][A-Za-z0-9_]*'),

    # Comments
    ('COMMENT',       r'//[^\n]*'),

    # Comparison operators
    ('BANG_EQUAL',    r'!='),
    ('EQUAL_EQUAL',   r'=='),
    ('GREATER_EQUAL', r'>='),
    ('LESS_EQUAL',    r'<='),
    ('BANG',          r'!'),
    ('EQUAL',         r'='),
    ('GREATER',       r'>'),
    ('LESS',          r'<'),

    # Delimiters
    ('LEFT_PAREN',    r'\('),
    ('RIGHT_PAREN',   r'\)'),
    ('LEFT_BRACE',    r'\{'),
    ('RIGHT_BRACE',   r'\}'),
    ('COMMA',         r','),
    ('DOT',           r'\.'),
    ('SEMICOLON',     r';'),

    # Arithmetic operators
    ('MINUS',         r'-'),
    ('PLUS',          r'\+'),
    ('SLASH',         r'/'),
    ('STAR',          r'\*'),

    # Miscellaneous
    ('NEWLINE',       r'\n'),
    ('SKIP',          r'[ \t\r]+'),
    ('MISMATCH',      r'.'),
]

TOKEN_REGEX = re.compile(
    '|'.join(f'(?P<{name}>{pattern})' for name, pattern in TOKEN_SPECIFICATION)
)


def tokenize(code: str, reporter=None) -> list[Token]:
    """
    Convert a string of source code into a list of tokens.

    Parameters:
        code (str): The source code to tokenize.
        reporter (ErrorReporter | None): Receives every scan error. When
            omitted, errors are raised together after the pass.

    Returns:
        list[Token]: The tokens, always terminated by an EOF token.

    Raises:
        LoxSyntaxError: If no reporter is given and the pass found errors.
    """
    tokens: list[Token] = []
    errors: list[ScanException] = []
    line_num = 1

    for match_obj in TOKEN_REGEX.finditer(code):
        kind = match_obj.lastgroup
        value = match_obj.group()

        if kind == 'NEWLINE':
            line_num += 1
            continue
        if kind in ('SKIP', 'COMMENT'):
            continue
        if kind == 'MISMATCH':
            errors.append(ScanException(line_num, "Unexpected character."))
            continue
        if kind == 'UNTERMINATED':
            errors.append(ScanException(line_num, "Unterminated string."))
            continue

        if kind == 'NUMBER':
            tokens.append(Token(TokenType.NUMBER, value, float(value), line_num))
        elif kind == 'STRING':
            tokens.append(Token(TokenType.STRING, value, value[1:-1], line_num))
        elif kind == 'IDENTIFIER':
            token_type = KEYWORDS.get(value, TokenType.IDENTIFIER)
            tokens.append(Token(token_type, value, None, line_num))
        else:
            tokens.append(Token(TokenType[kind], value, None, line_num))

    tokens.append(Token(TokenType.EOF, "", None, line_num))

    if reporter is not None:
        for error in errors:
            reporter.static_error(error)
    elif errors:
        raise LoxSyntaxError(errors)
    return tokens
