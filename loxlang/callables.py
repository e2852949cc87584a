"""Runtime callables and objects.

Every value that can appear in call position derives from
:class:`LoxCallable`: user functions, native functions, classes and bound
methods. Calls are dispatched uniformly through ``arity()`` and ``call()``
so the interpreter never needs to know which kind it is invoking.

Lox classes are plain data (a name, an optional superclass and a method
table); inheritance is resolved by :meth:`LoxClass.find_method` walking the
superclass chain rather than by Python's own class hierarchy.


File: callables.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

from loxlang.control import ReturnControlFlow
from loxlang.environment import Environment
from loxlang.exceptions import UndefinedPropertyException
from loxlang.nodes import FunctionDecl
from loxlang.tokens import Token

if TYPE_CHECKING:
    from loxlang.interpreter import Interpreter


class LoxCallable:
    """Interface shared by everything that can be called."""

    def arity(self) -> int:
        raise NotImplementedError

    def call(self, interpreter: Interpreter, arguments: list) -> object:
        raise NotImplementedError


class LoxFunction(LoxCallable):
    """
    Runtime representation of a user-defined function.

    The closure is the environment that was active when the declaration
    executed; every call runs in a fresh child of it.
    """

    def __init__(self, declaration: FunctionDecl, closure: Environment, is_initializer: bool = False):
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: Interpreter, arguments: list) -> object:
        return self.invoke(interpreter, arguments, self.closure)

    def invoke(self, interpreter: Interpreter, arguments: list, closure: Environment) -> object:
        """
        Run the body with ``arguments`` bound in a child of ``closure``.

        Returns:
            The value carried by a ``return`` statement, or None.
        """
        environment = Environment(closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        outcome = interpreter.execute_block(self.declaration.body, environment)
        if isinstance(outcome, ReturnControlFlow):
            return outcome.value
        return None

    def bind(self, instance: LoxInstance) -> BoundMethod:
        """
        Pair this method with the instance that ``this`` refers to.
        """
        return BoundMethod(instance, self)

    def __str__(self) -> str:
        return f"<fn {self.name}>"


class BoundMethod(LoxCallable):
    """A method paired with the instance it was accessed on."""

    def __init__(self, instance: LoxInstance, function: LoxFunction):
        self.instance = instance
        self.function = function
        self.closure = Environment(function.closure)
        self.closure.define("this", instance)

    def arity(self) -> int:
        return self.function.arity()

    def call(self, interpreter: Interpreter, arguments: list) -> object:
        result = self.function.invoke(interpreter, arguments, self.closure)
        if self.function.is_initializer:
            return self.instance
        return result

    def __str__(self) -> str:
        return str(self.function)


class NativeFunction(LoxCallable):
    """A function implemented by the host with a fixed arity."""

    def __init__(self, name: str, arity: int, function: Callable[..., object]):
        self.name = name
        self._arity = arity
        self.function = function

    def arity(self) -> int:
        return self._arity

    def call(self, interpreter: Interpreter, arguments: list) -> object:
        return self.function(*arguments)

    def __str__(self) -> str:
        return "<native fn>"


class LoxClass(LoxCallable):
    """
    Runtime representation of a class.

    Calling a class creates an instance and runs its ``init`` method, if
    any, with the call's arguments.
    """

    def __init__(self, name: str, superclass: Optional[LoxClass], methods: dict[str, LoxFunction]):
        self.name = name
        self.superclass = superclass
        self.methods = methods

    def find_method(self, name: str) -> Optional[LoxFunction]:
        """
        Find ``name`` on this class or the nearest ancestor defining it.
        """
        klass = self
        while klass is not None:
            if name in klass.methods:
                return klass.methods[name]
            klass = klass.superclass
        return None

    def arity(self) -> int:
        initializer = self.find_method("init")
        if initializer is None:
            return 0
        return initializer.arity()

    def call(self, interpreter: Interpreter, arguments: list) -> object:
        instance = LoxInstance(self)
        initializer = self.find_method("init")
        if initializer is not None:
            initializer.bind(instance).call(interpreter, arguments)
        return instance

    def __str__(self) -> str:
        return self.name


class LoxInstance:
    """An object created by calling a class. Fields are added on assignment."""

    def __init__(self, klass: LoxClass):
        self.klass = klass
        self.fields: dict[str, object] = {}

    def get(self, name: Token) -> object:
        """
        Read a property. Fields shadow methods of the same name.

        Raises:
            UndefinedPropertyException: If neither a field nor a method matches.
        """
        if name.lexeme in self.fields:
            return self.fields[name.lexeme]

        method = self.klass.find_method(name.lexeme)
        if method is not None:
            return method.bind(self)

        raise UndefinedPropertyException(name.lexeme, name.line)

    def set(self, name: Token, value: object) -> None:
        self.fields[name.lexeme] = value

    def __str__(self) -> str:
        return f"{self.klass.name} instance"
