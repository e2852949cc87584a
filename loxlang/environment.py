"""Lexical environments for Lox.

An :class:`Environment` maps names to values for one scope and points to
the scope that encloses it. Blocks and calls create child environments; a
function call parents its environment to the function's closure rather
than to the caller's scope, which is what makes scoping lexical.

Environments are shared by reference. Several closures may hold the same
environment and all of them observe assignments made through any one.


File: environment.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from typing import Optional

from loxlang.exceptions import UndefinedVariableException
from loxlang.tokens import Token


class Environment:
    """A single scope in a chain of scopes."""

    def __init__(self, enclosing: Optional[Environment] = None):
        self.values: dict[str, object] = {}
        self.enclosing = enclosing

    def define(self, name: str, value: object) -> None:
        """
        Bind ``name`` in this scope, replacing any existing binding here.
        """
        self.values[name] = value

    def get(self, name: Token) -> object:
        """
        Look ``name`` up from this scope outward.

        Raises:
            UndefinedVariableException: If no scope in the chain binds it.
        """
        env = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.enclosing
        raise UndefinedVariableException(name.lexeme, name.line)

    def assign(self, name: Token, value: object) -> None:
        """
        Update the nearest existing binding of ``name``.

        Raises:
            UndefinedVariableException: If no scope in the chain binds it.
        """
        env = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.enclosing
        raise UndefinedVariableException(name.lexeme, name.line)

    def __repr__(self) -> str:
        return f"Environment({list(self.values)}, enclosing={self.enclosing is not None})"
