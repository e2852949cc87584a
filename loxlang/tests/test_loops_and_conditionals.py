"""
Tests for if/else, while, for and break.
"""
from loxlang.tests.utils import output_lines, run_source


def test_if_else_chains(capsys):
    source = (
        "fun grade(n) {\n"
        "    if (n > 90) return \"A\";\n"
        "    else if (n > 80) return \"B\";\n"
        "    else return \"C\";\n"
        "}\n"
        "print grade(95);\n"
        "print grade(85);\n"
        "print grade(10);\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["A", "B", "C"]


def test_dangling_else_binds_to_nearest_if(capsys):
    run_source('if (true) if (false) print "inner"; else print "else";')
    assert output_lines(capsys) == ["else"]


def test_while_loop(capsys):
    run_source("var i = 0; while (i < 3) { print i; i = i + 1; }")
    assert output_lines(capsys) == ["0", "1", "2"]


def test_for_loop(capsys):
    run_source("for (var i = 0; i < 3; i = i + 1) print i;")
    assert output_lines(capsys) == ["0", "1", "2"]


def test_for_loop_variable_is_scoped_to_loop(capsys):
    run_source('var i = "outer"; for (var i = 0; i < 1; i = i + 1) {} print i;')
    assert output_lines(capsys) == ["outer"]


def test_for_loop_with_existing_variable(capsys):
    run_source("var i; for (i = 5; i < 7; i = i + 1) {} print i;")
    assert output_lines(capsys) == ["7"]


def test_break_leaves_innermost_loop(capsys):
    source = (
        "for (var i = 0; i < 3; i = i + 1) {\n"
        "    var j = 0;\n"
        "    while (true) {\n"
        "        if (j == 2) break;\n"
        "        j = j + 1;\n"
        "    }\n"
        "    print i + j;\n"
        "}\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["2", "3", "4"]


def test_break_skips_for_increment(capsys):
    run_source("var i = 0; for (; i < 10; i = i + 1) { if (i == 4) break; } print i;")
    assert output_lines(capsys) == ["4"]


def test_fibonacci_loop(capsys):
    source = (
        "var a = 0;\n"
        "var temp;\n"
        "for (var b = 1; a < 100; b = temp + b) {\n"
        "    print a;\n"
        "    temp = a;\n"
        "    a = b;\n"
        "}\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["0", "1", "1", "2", "3", "5", "8", "13", "21", "34", "55", "89"]


def test_loop_closures_share_the_loop_variable(capsys):
    """
    The desugared for loop has one variable for all iterations.
    """
    source = (
        "var first;\n"
        "for (var i = 0; i < 3; i = i + 1) {\n"
        "    fun show() { print i; }\n"
        "    if (first == nil) first = show;\n"
        "}\n"
        "first();\n"
    )
    run_source(source)
    assert output_lines(capsys) == ["3"]
