"""Interpreter.

This is a tree-walk interpreter for evaluating AST nodes produced by the parser. It supports
arithmetic, variables, closures, classes with single inheritance, conditionals, loops, and
output statements.

1. Execution Model
The interpreter evaluates an abstract syntax tree (AST) in a top-down, recursive manner.
Statements are executed via the `execute()` method, and expressions are evaluated using
`eval_expr()`. Both dispatch on the node class with structural pattern matching.

2. Environment
The interpreter owns the global :class:`Environment`, created once with the native
functions in it, and tracks the environment of the code currently running. Blocks run in
a fresh child environment; function calls run in a child of the function's closure. The
previous environment is restored on every exit path.

3. Expression Evaluation
Expression nodes (literals, variable references, arithmetic, comparisons, calls and
property accesses) are evaluated recursively. Operand types are checked and typed
exceptions (`OperandTypeException`, `UndefinedVariableException`, ...) are raised with
the line of the offending token.

4. Control Flow
`if`, `while` (and `for`, desugared by the parser) and blocks. `return` and `break` do
not raise: `execute()` returns a control outcome (`ReturnControlFlow`, `BreakLoop`) that
blocks pass upward until the function call or loop it belongs to consumes it.

5. Error Handling
Runtime errors are fatal to the run. They propagate out of `interpret()` as
`LoxRuntimeException` subclasses for the caller to report.


File: interpreter.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import math

from loxlang.callables import LoxCallable, LoxClass, LoxFunction, LoxInstance
from loxlang.control import BREAK, ReturnControlFlow
from loxlang.environment import Environment
from loxlang.exceptions import (
    ArityException,
    LoxRuntimeException,
    NotCallableException,
    OperandTypeException,
    StackOverflowException,
    SuperclassException,
    UndefinedPropertyException,
)
from loxlang.natives import NATIVES
from loxlang.nodes import (
    Assign,
    Binary,
    Block,
    BreakStmt,
    Call,
    ClassDecl,
    ExpressionStmt,
    FunctionDecl,
    Get,
    Grouping,
    If,
    Literal,
    Logical,
    Print,
    ReturnStmt,
    Set,
    Super,
    This,
    Unary,
    VarDecl,
    Variable,
    While,
    node_line,
)
from loxlang.stack import deep_recursion
from loxlang.tokens import Token, TokenType

# Integral numbers below this magnitude print in full, without an exponent.
FULL_INTEGER_LIMIT = 1e21


class Interpreter:
    """Tree-walk interpreter for Lox."""

    def __init__(self):
        """Initialize the interpreter with a fresh global environment."""
        self.globals = Environment()
        for native in NATIVES:
            self.globals.define(native.name, native)
        self.environment = self.globals

    def interpret(self, statements: list) -> None:
        """
        Execute a parsed program.

        Runs under a raised recursion limit. Exhausting it outside any Lox
        call (e.g. in a very long operator chain) is reported as a stack
        overflow on the line of the statement being executed.

        Raises:
            LoxRuntimeException: On the first runtime error.
        """
        with deep_recursion():
            for stmt in statements:
                try:
                    self.execute(stmt)
                except RecursionError:
                    raise StackOverflowException(node_line(stmt)) from None

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def execute(self, stmt):
        """
        Execute a single statement.

        Returns:
            None when the statement completed normally, otherwise the control
            outcome (ReturnControlFlow or BreakLoop) that must travel upward.
        """
        match stmt:
            case ExpressionStmt():
                self.eval_expr(stmt.expression)
            case Print():
                value = self.eval_expr(stmt.expression)
                print(self.stringify(value))
            case VarDecl():
                value = None
                if stmt.initializer is not None:
                    value = self.eval_expr(stmt.initializer)
                self.environment.define(stmt.name.lexeme, value)
            case Block():
                return self.execute_block(stmt.statements, Environment(self.environment))
            case If():
                if self.is_truthy(self.eval_expr(stmt.condition)):
                    return self.execute(stmt.then_branch)
                if stmt.else_branch is not None:
                    return self.execute(stmt.else_branch)
            case While():
                while self.is_truthy(self.eval_expr(stmt.condition)):
                    outcome = self.execute(stmt.body)
                    if outcome is BREAK:
                        break
                    if outcome is not None:
                        return outcome
            case FunctionDecl():
                function = LoxFunction(stmt, self.environment)
                self.environment.define(stmt.name.lexeme, function)
            case ReturnStmt():
                value = None
                if stmt.value is not None:
                    value = self.eval_expr(stmt.value)
                return ReturnControlFlow(value)
            case BreakStmt():
                return BREAK
            case ClassDecl():
                self.execute_class(stmt)
            case _:
                raise TypeError(f"Unknown statement type: {type(stmt).__name__}")
        return None

    def execute_block(self, statements, environment: Environment):
        """
        Execute ``statements`` in ``environment``, then restore the current one.

        Returns:
            The first control outcome produced by a statement, or None.
        """
        previous = self.environment
        try:
            self.environment = environment
            for stmt in statements:
                outcome = self.execute(stmt)
                if outcome is not None:
                    return outcome
            return None
        finally:
            self.environment = previous

    def execute_class(self, stmt: ClassDecl) -> None:
        """
        Build a class from its declaration and bind it under its name.

        Methods of a subclass close over an environment binding ``super`` to
        the superclass, so ``super`` always means the parent of the class the
        method was written in.
        """
        superclass = None
        if stmt.superclass is not None:
            superclass = self.eval_expr(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise SuperclassException(stmt.superclass.name.line)

        self.environment.define(stmt.name.lexeme, None)

        closure = self.environment
        if superclass is not None:
            closure = Environment(self.environment)
            closure.define("super", superclass)

        methods = {
            method.name.lexeme: LoxFunction(method, closure, method.name.lexeme == "init")
            for method in stmt.methods
        }
        klass = LoxClass(stmt.name.lexeme, superclass, methods)
        self.environment.assign(stmt.name, klass)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def eval_expr(self, expr):
        """
        Recursively evaluate an expression node and return its computed value.

        Raises:
            LoxRuntimeException: For type errors, undefined names, bad calls
                and property accesses on non-instances.
        """
        match expr:
            case Literal():
                return expr.value
            case Grouping():
                return self.eval_expr(expr.expression)
            case Variable():
                return self.environment.get(expr.name)
            case Assign():
                value = self.eval_expr(expr.value)
                self.environment.assign(expr.name, value)
                return value
            case Unary():
                return self.eval_unary(expr)
            case Binary():
                return self.eval_binary(expr)
            case Logical():
                left = self.eval_expr(expr.left)
                if expr.operator.type == TokenType.OR:
                    if self.is_truthy(left):
                        return left
                elif not self.is_truthy(left):
                    return left
                return self.eval_expr(expr.right)
            case Call():
                return self.eval_call(expr)
            case Get():
                target = self.eval_expr(expr.object)
                if isinstance(target, LoxInstance):
                    return target.get(expr.name)
                raise LoxRuntimeException("Only instances have properties.", expr.name.line)
            case Set():
                target = self.eval_expr(expr.object)
                if not isinstance(target, LoxInstance):
                    raise LoxRuntimeException("Only instances have fields.", expr.name.line)
                value = self.eval_expr(expr.value)
                target.set(expr.name, value)
                return value
            case This():
                return self.environment.get(expr.keyword)
            case Super():
                return self.eval_super(expr)
        raise TypeError(f"Invalid expression node: {expr!r}")

    def eval_unary(self, expr: Unary):
        right = self.eval_expr(expr.right)
        operator = expr.operator
        if operator.type == TokenType.BANG:
            return not self.is_truthy(right)
        if not isinstance(right, float):
            raise OperandTypeException(
                operator.lexeme,
                f"Operand of '{operator.lexeme}' must be a number.",
                operator.line,
            )
        return -right

    def eval_binary(self, expr: Binary):
        left = self.eval_expr(expr.left)
        right = self.eval_expr(expr.right)
        operator = expr.operator

        match operator.type:
            case TokenType.EQUAL_EQUAL:
                return self.is_equal(left, right)
            case TokenType.BANG_EQUAL:
                return not self.is_equal(left, right)
            case TokenType.PLUS:
                if isinstance(left, float) and isinstance(right, float):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise OperandTypeException(
                    operator.lexeme,
                    "Operands of '+' must be two numbers or two strings.",
                    operator.line,
                )

        self.check_number_operands(operator, left, right)
        match operator.type:
            case TokenType.MINUS:
                return left - right
            case TokenType.STAR:
                return left * right
            case TokenType.SLASH:
                return self.divide(left, right)
            case TokenType.GREATER:
                return left > right
            case TokenType.GREATER_EQUAL:
                return left >= right
            case TokenType.LESS:
                return left < right
            case TokenType.LESS_EQUAL:
                return left <= right
        raise TypeError(f"Unknown binary operator '{operator.lexeme}'")

    def eval_call(self, expr: Call):
        callee = self.eval_expr(expr.callee)
        arguments = [self.eval_expr(argument) for argument in expr.arguments]

        if not isinstance(callee, LoxCallable):
            raise NotCallableException(expr.paren.line)
        if len(arguments) != callee.arity():
            raise ArityException(callee.arity(), len(arguments), expr.paren.line)

        try:
            return callee.call(self, arguments)
        except RecursionError:
            raise StackOverflowException(expr.paren.line) from None

    def eval_super(self, expr: Super):
        superclass = self.environment.get(expr.keyword)
        this = Token(TokenType.THIS, "this", None, expr.keyword.line)
        instance = self.environment.get(this)

        method = superclass.find_method(expr.method.lexeme)
        if method is None:
            raise UndefinedPropertyException(expr.method.lexeme, expr.method.line)
        return method.bind(instance)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def check_number_operands(operator: Token, left, right) -> None:
        if isinstance(left, float) and isinstance(right, float):
            return
        raise OperandTypeException(
            operator.lexeme,
            f"Operands of '{operator.lexeme}' must be numbers.",
            operator.line,
        )

    @staticmethod
    def divide(left: float, right: float) -> float:
        """IEEE-754 division: a zero divisor gives an infinity or NaN."""
        try:
            return left / right
        except ZeroDivisionError:
            if left == 0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)

    @staticmethod
    def is_truthy(value) -> bool:
        """Only nil and false are falsey."""
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        return True

    @staticmethod
    def is_equal(left, right) -> bool:
        """Values of different Lox types are never equal."""
        if type(left) is not type(right):
            return False
        return left == right

    @staticmethod
    def stringify(value) -> str:
        """Return the Lox representation of a runtime value."""
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float):
            if value.is_integer() and abs(value) < FULL_INTEGER_LIMIT:
                text = "%d" % value
                if text == "0" and math.copysign(1.0, value) < 0:
                    return "-0"
                return text
            return repr(value)
        return str(value)
