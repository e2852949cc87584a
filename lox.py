"""
Lox Language Interpreter

This is the main entry point for the Lox interpreter.

Workflow:
1. The source script is read from the file specified on the command line,
   or line by line from the interactive prompt.
2. The Lexer tokenizes the source code into meaningful tokens.
3. The Parser processes tokens into an AST following the language grammar.
4. If no scan or parse error was reported, the Interpreter walks the AST,
   evaluating expressions and executing statements.

Exit codes follow the BSD sysexits convention: 64 for usage errors, 65 for
scan/parse errors, 66 when the script cannot be found, 70 for runtime errors
and 74 when the script cannot be read.


File: lox.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
import os
import sys

from loxlang.exceptions import LoxRuntimeException
from loxlang.interpreter import Interpreter
from loxlang.lexer import tokenize
from loxlang.parser import Parser
from loxlang.printer import AstPrinter
from loxlang.reporter import ErrorReporter
from loxlang.stack import deep_recursion

EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70
EX_IOERR = 74


def print_usage(stream=None):
    """
    Print usage.
    """
    out = stream or sys.stdout
    print(file=out)
    print("Lox Language Interpreter", file=out)
    print(file=out)
    print("Usage:", file=out)
    print("    lox [script.lox]", file=out)
    print(file=out)
    print("Arguments:", file=out)
    print("    <script.lox>", file=out)
    print("        Path to a Lox source file to execute.", file=out)
    print(file=out)
    print("Example:", file=out)
    print("    lox hello.lox", file=out)
    print(file=out)
    print("Or run with no arguments to enter interactive mode (REPL).", file=out)
    print(file=out)
    print("Options:", file=out)
    print("    -h, --help", file=out)
    print("        Show this help message and exit.", file=out)
    print(file=out)
    print("Environment:", file=out)
    print("    LOXDEBUG", file=out)
    print("        When set, print the tokens and the AST before executing.", file=out)


def debug_print_tokens_ast(tokens, ast):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    print(tokens)
    print("\nAST:\n")
    with deep_recursion():
        try:
            print(AstPrinter().print_program(ast))
        except RecursionError:
            print("<AST nested too deeply to print>")
    print(" ")


def run(source: str, interpreter: Interpreter, reporter: ErrorReporter, file: str = "<script>"):
    """
    Scan, parse and execute ``source`` with ``interpreter``.

    Errors are sent to ``reporter``; check its ``had_error`` and
    ``had_runtime_error`` flags afterwards. Nothing is executed when a
    scan or parse error was reported.
    """
    tokens = tokenize(source, reporter)
    ast = Parser(tokens, reporter, file).parse()
    if reporter.had_error:
        return

    if os.environ.get("LOXDEBUG"):
        debug_print_tokens_ast(tokens, ast)

    try:
        interpreter.interpret(ast)
    except LoxRuntimeException as e:
        reporter.runtime_error(e)


def run_file(script_name: str) -> int:
    """
    Run a Lox script and return the process exit code.
    """
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except FileNotFoundError:
        print(f"Could not open file '{script_name}'.", file=sys.stderr)
        return EX_NOINPUT
    except (OSError, UnicodeDecodeError) as e:
        print(f"Could not read file '{script_name}': {e}", file=sys.stderr)
        return EX_IOERR

    reporter = ErrorReporter()
    run(code, Interpreter(), reporter, script_name)
    if reporter.had_error:
        return EX_DATAERR
    if reporter.had_runtime_error:
        return EX_SOFTWARE
    return EX_OK


def is_incomplete(source: str) -> bool:
    """
    Return True when ``source`` only fails to parse because it ended early.
    """
    quiet = ErrorReporter(echo=False)
    tokens = tokenize(source, quiet)
    Parser(tokens, quiet, "<stdin>").parse()
    return quiet.had_error and all(error.where == " at end" for error in quiet.errors)


def run_prompt():
    """
    Run the interactive REPL

    Definitions persist between inputs. Input that is unfinished, such as an
    open block, is buffered until it parses; a blank line submits it as is.
    """
    print("Lox Language Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    interpreter = Interpreter()
    reporter = ErrorReporter()
    buffer: list[str] = []
    while True:
        try:
            prompt = ">>> " if not buffer else "... "
            line = input(prompt)
            if not buffer and line.strip() in {"exit", "quit"}:
                break
            buffer.append(line)
            source = "\n".join(buffer)
            if line.strip() and is_incomplete(source):
                continue
            buffer.clear()
            run(source, interpreter, reporter, "<stdin>")
            reporter.reset()
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No arguments: enter the REPL.
    - One argument equal to ``-h`` or ``--help``: print usage and exit.
    - One argument that is not an option: treat it as the path to a script and run it.
    - Any other pattern: print usage and return 64.
    """
    if argv is None:
        argv = sys.argv
    args = argv[1:]
    if not args:
        run_prompt()
        return EX_OK
    if len(args) == 1 and args[0] in ("-h", "--help"):
        print_usage()
        return EX_OK
    if len(args) == 1 and not args[0].startswith("-"):
        return run_file(args[0])
    print_usage(sys.stderr)
    return EX_USAGE


if __name__ == "__main__":
    sys.exit(main(sys.argv))
