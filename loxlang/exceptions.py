"""Errors.

Static errors (scanning and parsing) are accumulated for a whole pass and
reported together. Runtime errors are fatal to the current run and carry the
line of the offending token.


File: exceptions.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from loxlang.tokens import Token, TokenType


class ScanException(Exception):
    """
    Error for malformed source text (unexpected character, unterminated string).
    """
    def __init__(self, line: int, message: str):
        self.line = line
        self.message = message
        self.where = ""
        super().__init__(f"[line {line}] Error: {message}")


class ParseException(Exception):
    """
    Error for an unexpected token, tagged with the offending token.
    """
    def __init__(self, token: Token, message: str):
        self.token = token
        self.line = token.line
        self.message = message
        if token.type == TokenType.EOF:
            self.where = " at end"
        else:
            self.where = f" at '{token.lexeme}'"
        super().__init__(f"[line {token.line}] Error{self.where}: {message}")


class LoxSyntaxError(Exception):
    """
    Raised when a scan or parse pass without a reporter collected errors.
    """
    def __init__(self, errors, file: str = "<script>"):
        self.errors = list(errors)
        self.file = file
        super().__init__("\n".join(str(error) for error in self.errors))


class LoxRuntimeException(Exception):
    """
    Base class for errors raised while executing a program.
    """
    def __init__(self, message: str, line=None):
        self.message = message
        self.line = line
        super().__init__(message)


class UndefinedVariableException(LoxRuntimeException):
    """
    Error for undefined variables.
    """
    def __init__(self, varname, line=None):
        self.varname = varname
        super().__init__(f"Undefined variable '{varname}'.", line)


class UndefinedPropertyException(LoxRuntimeException):
    """
    Error for property reads that match neither a field nor a method.
    """
    def __init__(self, name, line=None):
        self.name = name
        super().__init__(f"Undefined property '{name}'.", line)


class OperandTypeException(LoxRuntimeException):
    """
    Error for operators applied to operands of the wrong type.
    """
    def __init__(self, operator, message, line=None):
        self.operator = operator
        super().__init__(message, line)


class ArityException(LoxRuntimeException):
    """
    Error for calls with the wrong number of arguments.
    """
    def __init__(self, expected, got, line=None):
        self.expected = expected
        self.got = got
        super().__init__(f"Expected {expected} arguments but got {got}.", line)


class NotCallableException(LoxRuntimeException):
    """
    Error for calling something that is neither a function nor a class.
    """
    def __init__(self, line=None):
        super().__init__("Can only call functions and classes.", line)


class SuperclassException(LoxRuntimeException):
    """
    Error for a superclass expression that does not evaluate to a class.
    """
    def __init__(self, line=None):
        super().__init__("Superclass must be a class.", line)


class StackOverflowException(LoxRuntimeException):
    """
    Error for exhausting the host call stack.
    """
    def __init__(self, line=None):
        super().__init__("Stack overflow.", line)
