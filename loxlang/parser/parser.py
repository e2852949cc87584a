"""
Main parser entry point for Lox.

This module defines the `Parser` class, which coordinates the recursive
descent parsing process. The actual parsing routines are split across
`loxlang.parser.expressions` and `loxlang.parser.statements`.

The parser keeps going after a syntax error: the failing declaration is
abandoned, tokens are discarded up to the next statement boundary and
parsing resumes, so one pass reports every error in the source.


File: parser.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.1
License: MIT
"""

from loxlang.exceptions import LoxSyntaxError, ParseException
from loxlang.stack import deep_recursion
from loxlang.tokens import Token, TokenType

from . import expressions as _expr
from . import statements as _stmt
from .context import STATEMENT_STARTS, ClassKind, FunctionKind


class Parser:
    """Lox parser."""

    def __init__(self, tokens: list[Token], reporter=None, file: str = "<script>"):
        """
        Initialize the parser with a list of tokens.

        Parameters:
            tokens (list): A list of Token instances ending in EOF.
            reporter (ErrorReporter | None): Receives every parse error. When
                omitted, errors are raised together once parsing finishes.
            file (str): The name of the script.
        """
        self.tokens = tokens
        self.reporter = reporter
        self.source_file = file
        self.position = 0
        self.curr_token = self.tokens[self.position]
        self.errors: list[ParseException] = []

        # Static context used to reject misplaced return/this/super/break.
        self.function_kind = FunctionKind.NONE
        self.class_kind = ClassKind.NONE
        self.loop_depth = 0

    # ------------------------------------------------------------------
    # Token handling
    # ------------------------------------------------------------------

    @property
    def previous(self) -> Token:
        """The most recently consumed token."""
        return self.tokens[self.position - 1]

    def at_end(self) -> bool:
        return self.curr_token.type == TokenType.EOF

    def check(self, token_type: TokenType) -> bool:
        return self.curr_token.type == token_type

    def advance(self) -> Token:
        """
        Consume the current token and return it.
        """
        token = self.curr_token
        if not self.at_end():
            self.position += 1
            self.curr_token = self.tokens[self.position]
        return token

    def match(self, *token_types: TokenType) -> bool:
        """
        Consume the current token if it has one of the given types.
        """
        if self.curr_token.type in token_types:
            self.advance()
            return True
        return False

    def eat(self, token_type: TokenType, message: str) -> Token:
        """
        Consume the current token if it matches the expected type.

        Parameters:
            token_type (TokenType): The expected token type.
            message (str): The error message used when the token differs.

        Returns:
            Token: The consumed token.

        Raises:
            ParseException: If the token does not match the expected type.
        """
        if self.check(token_type):
            return self.advance()
        raise self.error(self.curr_token, message)

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def error(self, token: Token, message: str) -> ParseException:
        """
        Record a parse error and return it so the caller can raise it.
        """
        exc = ParseException(token, message)
        self.errors.append(exc)
        if self.reporter is not None:
            self.reporter.static_error(exc)
        return exc

    def synchronize(self) -> None:
        """
        Discard tokens until the start of the next statement.
        """
        self.advance()
        while not self.at_end():
            if self.previous.type == TokenType.SEMICOLON:
                return
            if self.curr_token.type in STATEMENT_STARTS:
                return
            self.advance()

    # Expression wrappers
    def expression(self):
        """
        Parse a full expression.
        """
        return _expr.parse_expression(self)

    def assignment(self):
        """
        Parse an assignment, the lowest precedence level.
        """
        return _expr.parse_assignment(self)

    def logical_or(self):
        """
        Parse a logical OR expression.
        """
        return _expr.parse_logical_or(self)

    def logical_and(self):
        """
        Parse a logical AND expression.
        """
        return _expr.parse_logical_and(self)

    def equality(self):
        """
        Parse an equality expression using '==' or '!='.
        """
        return _expr.parse_equality(self)

    def comparison(self):
        """
        Parse a comparison expression using relational operators.
        """
        return _expr.parse_comparison(self)

    def term(self):
        """
        Parse an addition or subtraction expression.
        """
        return _expr.parse_term(self)

    def factor(self):
        """
        Parse a multiplication or division expression.
        """
        return _expr.parse_factor(self)

    def unary(self):
        """
        Parse a prefix '!' or '-' expression.
        """
        return _expr.parse_unary(self)

    def call(self):
        """
        Parse calls and property accesses.
        """
        return _expr.parse_call(self)

    def primary(self):
        """
        Parse a literal, variable, grouping, 'this' or 'super' access.
        """
        return _expr.parse_primary(self)

    # Statement wrappers
    def declaration(self):
        """
        Parse a declaration, recovering from syntax errors.
        """
        return _stmt.parse_declaration(self)

    def class_declaration(self):
        """
        Parse a class declaration.
        """
        return _stmt.parse_class_declaration(self)

    def function(self, kind: FunctionKind):
        """
        Parse a function or method declaration.
        """
        return _stmt.parse_function(self, kind)

    def var_declaration(self):
        """
        Parse a 'var' declaration.
        """
        return _stmt.parse_var_declaration(self)

    def statement(self):
        """
        Parse a single statement.
        """
        return _stmt.parse_statement(self)

    def block(self):
        """
        Parse the statements of a block whose '{' was already consumed.
        """
        return _stmt.parse_block(self)

    def parse_for(self):
        """
        Parse a 'for' loop into its 'while' form.
        """
        return _stmt.parse_for(self)

    def parse_if(self):
        """
        Parse an 'if' conditional statement.
        """
        return _stmt.parse_if(self)

    def parse_print(self):
        """
        Parse a 'print' statement used for output.
        """
        return _stmt.parse_print(self)

    def parse_return(self):
        """
        Parse a 'return' statement from within a function.
        """
        return _stmt.parse_return(self)

    def parse_while(self):
        """
        Parse a 'while' loop.
        """
        return _stmt.parse_while(self)

    def parse_break(self):
        """
        Parse a 'break' statement for loop termination.
        """
        return _stmt.parse_break(self)

    def expression_statement(self):
        """
        Parse an expression statement.
        """
        return _stmt.parse_expression_statement(self)

    def parse(self) -> list:
        """
        Parse the full input into a list of statements.

        Source nested deeper than the raised recursion limit allows is
        reported as a parse error at the token where parsing gave up.

        Raises:
            LoxSyntaxError: If no reporter is attached and errors were found.
        """
        statements = []
        with deep_recursion():
            while not self.at_end():
                try:
                    stmt = self.declaration()
                except RecursionError:
                    self.error(self.curr_token, "Expression nesting too deep.")
                    self.synchronize()
                    continue
                if stmt is not None:
                    statements.append(stmt)
        if self.errors and self.reporter is None:
            raise LoxSyntaxError(self.errors, self.source_file)
        return statements
