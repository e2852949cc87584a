"""
Tests for the language server's analysis helpers.
"""
import pytest
from lsprotocol.types import DiagnosticSeverity, SymbolKind

from loxlang.server import (
    LoxLanguageServer,
    analyze,
    collect_diagnostics,
    collect_symbols,
)

URI = "file:///project/main.lox"

SOURCE = (
    "var greeting = \"hi\";\n"
    "fun add(a, b) {\n"
    "    var local = a;\n"
    "    return local + b;\n"
    "}\n"
    "class Base {}\n"
    "class Child < Base {}\n"
)


@pytest.fixture(name="server")
def fixture_server():
    server = LoxLanguageServer()
    server.indexed_workspace = True
    return server


def test_symbols_are_top_level_only():
    statements, reporter = analyze(URI, SOURCE)
    assert reporter.errors == []
    symbols = collect_symbols(URI, statements)
    assert [(s.name, s.kind, s.line, s.detail) for s in symbols] == [
        ("greeting", SymbolKind.Variable, 0, "var greeting"),
        ("add", SymbolKind.Function, 1, "fun add(a, b)"),
        ("Base", SymbolKind.Class, 5, "class Base"),
        ("Child", SymbolKind.Class, 6, "class Child < Base"),
    ]


def test_diagnostics_are_zero_based(capsys):
    _, reporter = analyze(URI, "var a = 1;\nprint a\n")
    diagnostics = collect_diagnostics(reporter)
    assert len(diagnostics) == 1
    diagnostic = diagnostics[0]
    assert diagnostic.message == "Error at end: Expect ';' after value."
    assert diagnostic.severity == DiagnosticSeverity.Error
    assert diagnostic.range.start.line == 2
    assert capsys.readouterr().err == ""


def test_partial_source_still_yields_symbols():
    statements, reporter = analyze(URI, "fun ok() {}\nvar = ;\nclass Later {}\n")
    assert reporter.had_error
    assert [s.name for s in collect_symbols(URI, statements)] == ["ok", "Later"]


def test_update_index_and_lookup(server):
    diagnostics = server.update_index(URI, SOURCE)
    assert diagnostics == []
    assert [s.name for s in server.symbols_by_uri[URI]] == ["greeting", "add", "Base", "Child"]

    sym = server.lookup("add")
    assert sym.uri == URI
    assert sym.range.start.line == 1
    assert sym.range.end.character == len("add")
    assert server.lookup("local") is None
    assert server.lookup("") is None


def test_reindexing_replaces_old_symbols(server):
    server.update_index(URI, SOURCE)
    server.update_index(URI, "fun renamed() {}\n")
    assert server.lookup("add") is None
    assert server.lookup("renamed").detail == "fun renamed()"
