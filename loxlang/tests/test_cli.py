"""
Tests for the lox.py command-line entry point.
"""
import os
import subprocess
import sys

from loxlang.tests.utils import find_project_root


def run_lox(*args: str, stdin: str | None = None, env: dict | None = None) -> subprocess.CompletedProcess:
    root = find_project_root()
    return subprocess.run(
        [sys.executable, str(root / "lox.py"), *args],
        input=stdin,
        capture_output=True,
        text=True,
        check=False,
        env=env,
    )


def test_runs_script(write_script):
    result = run_lox(write_script('print "hello"; print 1 + 2;'))
    assert result.returncode == 0
    assert result.stdout.splitlines() == ["hello", "3"]
    assert result.stderr == ""


def test_static_error_exit_code(write_script):
    """
    Scan and parse errors are all reported and nothing is executed.
    """
    result = run_lox(write_script('print "never";\nvar = 1;\nprint (;\n'))
    assert result.returncode == 65
    assert result.stdout == ""
    assert result.stderr.splitlines() == [
        "[line 2] Error at '=': Expect variable name.",
        "[line 3] Error at ';': Expect expression.",
    ]


def test_runtime_error_exit_code(write_script):
    result = run_lox(write_script('print "start";\nprint -"x";\nprint "end";\n'))
    assert result.returncode == 70
    assert result.stdout.splitlines() == ["start"]
    assert result.stderr.splitlines() == ["Operand of '-' must be a number.", "[line 2]"]


def test_missing_file_exit_code(tmp_path):
    result = run_lox(str(tmp_path / "missing.lox"))
    assert result.returncode == 66
    assert "Could not open file" in result.stderr


def test_unreadable_file_exit_code(tmp_path):
    result = run_lox(str(tmp_path))
    assert result.returncode == 74


def test_usage_errors():
    result = run_lox("a.lox", "b.lox")
    assert result.returncode == 64
    assert "Usage:" in result.stderr

    result = run_lox("--bogus")
    assert result.returncode == 64


def test_help():
    result = run_lox("--help")
    assert result.returncode == 0
    assert "lox [script.lox]" in result.stdout


def test_debug_output(write_script):
    env = dict(os.environ, LOXDEBUG="1")
    result = run_lox(write_script("print 1 + 2;"), env=env)
    assert result.returncode == 0
    assert "(print (+ 1 2))" in result.stdout
    assert result.stdout.splitlines()[-1] == "3"


def test_repl_keeps_state_and_recovers_from_errors():
    """
    Definitions persist across inputs and errors do not end the session.
    """
    stdin = (
        "var a = 1;\n"
        "print b;\n"
        "fun add(x) {\n"
        "  return a + x;\n"
        "}\n"
        "print add(41);\n"
        "exit\n"
    )
    result = run_lox(stdin=stdin)
    assert result.returncode == 0
    assert "42" in result.stdout.split()
    assert "Undefined variable 'b'." in result.stderr
    assert "... " in result.stdout


def test_repl_blank_line_submits_incomplete_input():
    result = run_lox(stdin="print 1\n\nprint 2;\n")
    assert result.returncode == 0
    assert "Error at end: Expect ';' after value." in result.stderr
    assert "2" in result.stdout.split()


def test_deep_nesting_exit_code(write_script):
    """
    Nesting too deep to parse is a static error, not a crash.
    """
    depth = 1500
    result = run_lox(write_script("print " + "(" * depth + "1" + ")" * depth + ";\n"))
    assert result.returncode == 65
    assert "Expression nesting too deep." in result.stderr
    assert "Traceback" not in result.stderr


def test_long_operator_chain_exit_code(write_script):
    chain = " + ".join("1" for _ in range(20000))
    result = run_lox(write_script(f"print {chain};\n"))
    assert result.returncode == 70
    assert result.stderr.splitlines() == ["Stack overflow.", "[line 1]"]


def test_deep_recursion_exit_code(write_script):
    source = (
        "fun count(n) { if (n == 0) return 0; return 1 + count(n - 1); }\n"
        "print count(500);\n"
    )
    result = run_lox(write_script(source))
    assert result.returncode == 0
    assert result.stdout.splitlines() == ["500"]


def test_repl_survives_stack_overflow():
    depth = 1500
    stdin = (
        "print " + "(" * depth + "1" + ")" * depth + ";\n"
        "fun f() { f(); }\n"
        "f();\n"
        "print \"still here\";\n"
    )
    result = run_lox(stdin=stdin)
    assert result.returncode == 0
    assert "Expression nesting too deep." in result.stderr
    assert "Stack overflow." in result.stderr
    assert "still here" in result.stdout
