"""
Utility functions shared across Lox Language tests.
"""
from pathlib import Path
import sys

from loxlang.lexer import tokenize
from loxlang.parser import Parser
from loxlang.interpreter import Interpreter

# Ensure the project root is on the Python path
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))


def parse_source(source: str):
    """
    Parse source code and return the AST.
    """
    tokens = tokenize(source)
    parser = Parser(tokens, file="<test>")
    return parser.parse()


def run_source(source: str, interpreter: Interpreter | None = None) -> Interpreter:
    """
    Parse and execute source code, returning the interpreter used.
    """
    if interpreter is None:
        interpreter = Interpreter()
    interpreter.interpret(parse_source(source))
    return interpreter


def output_lines(capsys) -> list[str]:
    """
    Return the captured stdout split into lines.
    """
    return capsys.readouterr().out.splitlines()


def find_project_root(marker: str = "lox.py") -> Path:
    """Locate project root by ascending directories until marker file is found."""
    path = Path(__file__).resolve()
    for parent in path.parents:
        if (parent / marker).exists():
            return parent
    raise RuntimeError("Could not find project root")
