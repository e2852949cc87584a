"""Statement parsing utilities for Lox.

These functions operate on a `loxlang.parser.parser.Parser` instance and
handle declarations and the various statement forms in the language such
as blocks, conditionals, loops, and function and class definitions.


File: statements.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from loxlang.exceptions import ParseException
from loxlang.nodes import (
    Block,
    BreakStmt,
    ClassDecl,
    ExpressionStmt,
    FunctionDecl,
    If,
    Literal,
    Print,
    ReturnStmt,
    VarDecl,
    Variable,
    While,
)
from loxlang.tokens import TokenType

from .context import MAX_ARGUMENTS, ClassKind, FunctionKind

if TYPE_CHECKING:
    from loxlang.parser import Parser


def parse_declaration(parser: 'Parser'):
    """
    Parse a declaration or statement.

    On a syntax error the parser is synchronized to the next statement
    boundary and None is returned so parsing can continue.

    Args:
        parser: The parser instance.

    Returns:
        Stmt | None: The parsed node, or None after an error.
    """
    try:
        if parser.match(TokenType.CLASS):
            return parser.class_declaration()
        if parser.match(TokenType.FUN):
            return parser.function(FunctionKind.FUNCTION)
        if parser.match(TokenType.VAR):
            return parser.var_declaration()
        return parser.statement()
    except ParseException:
        parser.synchronize()
        return None


def parse_class_declaration(parser: 'Parser') -> ClassDecl:
    """
    Parse a class declaration.

    Syntax:
        class <identifier> ( < <identifier> )? { <method>* }

    Args:
        parser: The parser instance.

    Returns:
        ClassDecl: The class node.
    """
    name = parser.eat(TokenType.IDENTIFIER, "Expect class name.")

    superclass = None
    if parser.match(TokenType.LESS):
        superclass_name = parser.eat(TokenType.IDENTIFIER, "Expect superclass name.")
        if superclass_name.lexeme == name.lexeme:
            parser.error(superclass_name, "A class can't inherit from itself.")
        superclass = Variable(superclass_name)

    parser.eat(TokenType.LEFT_BRACE, "Expect '{' before class body.")

    enclosing = parser.class_kind
    parser.class_kind = ClassKind.SUBCLASS if superclass is not None else ClassKind.CLASS
    try:
        methods = []
        while not parser.check(TokenType.RIGHT_BRACE) and not parser.at_end():
            methods.append(parser.function(FunctionKind.METHOD))
        parser.eat(TokenType.RIGHT_BRACE, "Expect '}' after class body.")
    finally:
        parser.class_kind = enclosing

    return ClassDecl(name, superclass, tuple(methods))


def parse_function(parser: 'Parser', kind: FunctionKind) -> FunctionDecl:
    """
    Parse a function or method definition.

    Syntax:
        <identifier>(<params>) { <block> }

    A method called ``init`` is parsed as an initializer.

    Args:
        parser: The parser instance.
        kind: FunctionKind.FUNCTION or FunctionKind.METHOD.

    Returns:
        FunctionDecl: The function node.
    """
    label = "function" if kind == FunctionKind.FUNCTION else "method"
    name = parser.eat(TokenType.IDENTIFIER, f"Expect {label} name.")
    if kind == FunctionKind.METHOD and name.lexeme == "init":
        kind = FunctionKind.INITIALIZER

    parser.eat(TokenType.LEFT_PAREN, f"Expect '(' after {label} name.")
    params = []
    if not parser.check(TokenType.RIGHT_PAREN):
        while True:
            if len(params) >= MAX_ARGUMENTS:
                parser.error(parser.curr_token, f"Can't have more than {MAX_ARGUMENTS} parameters.")
            params.append(parser.eat(TokenType.IDENTIFIER, "Expect parameter name."))
            if not parser.match(TokenType.COMMA):
                break
    parser.eat(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")
    parser.eat(TokenType.LEFT_BRACE, f"Expect '{{' before {label} body.")

    enclosing_kind, enclosing_depth = parser.function_kind, parser.loop_depth
    parser.function_kind, parser.loop_depth = kind, 0
    try:
        body = parser.block()
    finally:
        parser.function_kind, parser.loop_depth = enclosing_kind, enclosing_depth

    return FunctionDecl(name, tuple(params), body)


def parse_var_declaration(parser: 'Parser') -> VarDecl:
    """
    Parse a `var` declaration.

    Syntax:
        var <identifier> ( = <expression> )? ;

    Args:
        parser: The parser instance.

    Returns:
        VarDecl: The declaration node.
    """
    name = parser.eat(TokenType.IDENTIFIER, "Expect variable name.")
    initializer = None
    if parser.match(TokenType.EQUAL):
        initializer = parser.expression()
    parser.eat(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
    return VarDecl(name, initializer)


def parse_statement(parser: 'Parser'):
    """
    Parse a single statement.

    Args:
        parser: The parser instance.

    Returns:
        Stmt: representing the AST node.
    """
    if parser.match(TokenType.FOR):
        return parser.parse_for()
    if parser.match(TokenType.IF):
        return parser.parse_if()
    if parser.match(TokenType.PRINT):
        return parser.parse_print()
    if parser.match(TokenType.RETURN):
        return parser.parse_return()
    if parser.match(TokenType.WHILE):
        return parser.parse_while()
    if parser.match(TokenType.BREAK):
        return parser.parse_break()
    if parser.match(TokenType.LEFT_BRACE):
        return Block(parser.block())
    return parser.expression_statement()


def parse_block(parser: 'Parser') -> tuple:
    """
    Parse the statements of a block up to and including the closing brace.

    Syntax:
        { <declaration>* }

    Args:
        parser: The parser instance.

    Returns:
        tuple: The statements of the block.
    """
    statements = []
    while not parser.check(TokenType.RIGHT_BRACE) and not parser.at_end():
        stmt = parser.declaration()
        if stmt is not None:
            statements.append(stmt)
    parser.eat(TokenType.RIGHT_BRACE, "Expect '}' after block.")
    return tuple(statements)


def parse_for(parser: 'Parser'):
    """
    Parse a `for` loop and desugar it into a `while` loop.

    Syntax:
        for ( <initializer>? ; <condition>? ; <increment>? ) <statement>

    The result is a block holding the initializer followed by a `while`
    whose body runs the original body and then the increment.

    Args:
        parser: The parser instance.

    Returns:
        Stmt: The desugared loop.
    """
    parser.eat(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

    if parser.match(TokenType.SEMICOLON):
        initializer = None
    elif parser.match(TokenType.VAR):
        initializer = parser.var_declaration()
    else:
        initializer = parser.expression_statement()

    condition = None
    if not parser.check(TokenType.SEMICOLON):
        condition = parser.expression()
    parser.eat(TokenType.SEMICOLON, "Expect ';' after loop condition.")

    increment = None
    if not parser.check(TokenType.RIGHT_PAREN):
        increment = parser.expression()
    parser.eat(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

    parser.loop_depth += 1
    try:
        body = parser.statement()
    finally:
        parser.loop_depth -= 1

    if increment is not None:
        body = Block((body, ExpressionStmt(increment)))
    if condition is None:
        condition = Literal(True)
    body = While(condition, body)
    if initializer is not None:
        body = Block((initializer, body))
    return body


def parse_if(parser: 'Parser') -> If:
    """
    Parse a conditional `if` statement with an optional else branch.

    Syntax:
        if ( <condition> ) <statement> ( else <statement> )?

    Args:
        parser: The parser instance.

    Returns:
        If: The conditional node.
    """
    parser.eat(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
    condition = parser.expression()
    parser.eat(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

    then_branch = parser.statement()
    else_branch = None
    if parser.match(TokenType.ELSE):
        else_branch = parser.statement()
    return If(condition, then_branch, else_branch)


def parse_print(parser: 'Parser') -> Print:
    """
    Parse a `print` statement.

    Syntax:
        print <expression> ;
    """
    value = parser.expression()
    parser.eat(TokenType.SEMICOLON, "Expect ';' after value.")
    return Print(value)


def parse_return(parser: 'Parser') -> ReturnStmt:
    """
    Parse a `return` statement.

    Syntax:
        return <expression>? ;

    Args:
        parser: The parser instance.

    Returns:
        ReturnStmt: The return node.
    """
    keyword = parser.previous
    if parser.function_kind == FunctionKind.NONE:
        parser.error(keyword, "Can't return from top-level code.")

    value = None
    if not parser.check(TokenType.SEMICOLON):
        if parser.function_kind == FunctionKind.INITIALIZER:
            parser.error(keyword, "Can't return a value from an initializer.")
        value = parser.expression()
    parser.eat(TokenType.SEMICOLON, "Expect ';' after return value.")
    return ReturnStmt(keyword, value)


def parse_while(parser: 'Parser') -> While:
    """
    Parse a `while` loop.

    Syntax:
        while ( <condition> ) <statement>
    """
    parser.eat(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
    condition = parser.expression()
    parser.eat(TokenType.RIGHT_PAREN, "Expect ')' after condition.")

    parser.loop_depth += 1
    try:
        body = parser.statement()
    finally:
        parser.loop_depth -= 1
    return While(condition, body)


def parse_break(parser: 'Parser') -> BreakStmt:
    """
    Parse a `break` control statement.

    Syntax:
        break ;
    """
    keyword = parser.previous
    if parser.loop_depth == 0:
        parser.error(keyword, "Can't use 'break' outside of a loop.")
    parser.eat(TokenType.SEMICOLON, "Expect ';' after 'break'.")
    return BreakStmt(keyword)


def parse_expression_statement(parser: 'Parser') -> ExpressionStmt:
    """
    Parse an expression evaluated for its side effects.

    Syntax:
        <expression> ;
    """
    expr = parser.expression()
    parser.eat(TokenType.SEMICOLON, "Expect ';' after expression.")
    return ExpressionStmt(expr)
