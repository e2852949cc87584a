"""AST printer.

Renders parsed programs as parenthesised prefix expressions for debugging,
e.g. ``-123 * (45.67)`` becomes ``(* (- 123) (group 45.67))``.


File: printer.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

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
)


class AstPrinter:
    """Convert statements and expressions into a readable string."""

    def print_program(self, statements) -> str:
        return "\n".join(self.print_stmt(stmt) for stmt in statements)

    def print_stmt(self, stmt) -> str:
        match stmt:
            case ExpressionStmt():
                return self.parenthesize(";", stmt.expression)
            case Print():
                return self.parenthesize("print", stmt.expression)
            case VarDecl():
                if stmt.initializer is None:
                    return f"(var {stmt.name.lexeme})"
                return f"(var {stmt.name.lexeme} {self.print_expr(stmt.initializer)})"
            case Block():
                return self.join("block", [self.print_stmt(s) for s in stmt.statements])
            case If():
                parts = [self.print_expr(stmt.condition), self.print_stmt(stmt.then_branch)]
                if stmt.else_branch is not None:
                    parts.append(self.print_stmt(stmt.else_branch))
                return self.join("if", parts)
            case While():
                return self.join("while", [self.print_expr(stmt.condition), self.print_stmt(stmt.body)])
            case FunctionDecl():
                return self.print_function(stmt)
            case ReturnStmt():
                if stmt.value is None:
                    return "(return)"
                return self.parenthesize("return", stmt.value)
            case BreakStmt():
                return "(break)"
            case ClassDecl():
                head = f"class {stmt.name.lexeme}"
                if stmt.superclass is not None:
                    head += f" < {stmt.superclass.name.lexeme}"
                return self.join(head, [self.print_function(m) for m in stmt.methods])
        raise TypeError(f"Unknown statement type: {type(stmt).__name__}")

    def print_function(self, decl: FunctionDecl) -> str:
        params = " ".join(param.lexeme for param in decl.params)
        body = [self.print_stmt(s) for s in decl.body]
        return self.join(f"fun {decl.name.lexeme} ({params})", body)

    def print_expr(self, expr) -> str:
        match expr:
            case Literal():
                return self.print_literal(expr.value)
            case Grouping():
                return self.parenthesize("group", expr.expression)
            case Variable():
                return expr.name.lexeme
            case Assign():
                return f"(= {expr.name.lexeme} {self.print_expr(expr.value)})"
            case Unary():
                return self.parenthesize(expr.operator.lexeme, expr.right)
            case Binary() | Logical():
                return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)
            case Call():
                return self.parenthesize("call", expr.callee, *expr.arguments)
            case Get():
                return f"(. {self.print_expr(expr.object)} {expr.name.lexeme})"
            case Set():
                target = f"(. {self.print_expr(expr.object)} {expr.name.lexeme})"
                return f"(= {target} {self.print_expr(expr.value)})"
            case This():
                return "this"
            case Super():
                return f"(super {expr.method.lexeme})"
        raise TypeError(f"Invalid expression node: {expr!r}")

    @staticmethod
    def print_literal(value) -> str:
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return f'"{value}"'
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text

    def parenthesize(self, name: str, *exprs) -> str:
        return self.join(name, [self.print_expr(expr) for expr in exprs])

    @staticmethod
    def join(name: str, parts) -> str:
        if not parts:
            return f"({name})"
        return f"({name} {' '.join(parts)})"
