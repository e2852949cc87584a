"""
Lox Language Server entry point.

This server provides basic language features for Lox source files using
`pygls`. It reuses the Lox scanner and parser to publish syntax errors as
diagnostics and to build a simple symbol index supporting definition
lookup, hover information, and document symbols.


File: server.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_CHANGE,
    DefinitionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)

from loxlang import __version__
from loxlang.lexer import tokenize
from loxlang.nodes import ClassDecl, FunctionDecl, VarDecl
from loxlang.parser import Parser
from loxlang.reporter import ErrorReporter


@dataclass
class LoxSymbol:
    """Represents a top-level symbol in a Lox file."""

    name: str
    kind: SymbolKind
    uri: str
    line: int
    detail: str

    @property
    def range(self) -> Range:
        return Range(Position(self.line, 0), Position(self.line, len(self.name)))


def analyze(uri: str, text: str):
    """
    Scan and parse ``text`` without printing anything.

    Returns:
        tuple: The parsed statements and the reporter holding every error.
    """
    reporter = ErrorReporter(echo=False)
    tokens = tokenize(text, reporter)
    statements = Parser(tokens, reporter, uri).parse()
    return statements, reporter


def collect_diagnostics(reporter: ErrorReporter) -> List[Diagnostic]:
    """Convert recorded scan and parse errors to LSP diagnostics."""
    diagnostics: List[Diagnostic] = []
    for error in reporter.errors:
        line = max(error.line - 1, 0)
        diagnostics.append(
            Diagnostic(
                range=Range(Position(line, 0), Position(line + 1, 0)),
                message=f"Error{error.where}: {error.message}",
                severity=DiagnosticSeverity.Error,
                source="lox",
            )
        )
    return diagnostics


def collect_symbols(uri: str, statements) -> List[LoxSymbol]:
    """Extract the top-level functions, classes and variables."""
    symbols: List[LoxSymbol] = []
    for node in statements:
        if isinstance(node, FunctionDecl):
            params = ", ".join(param.lexeme for param in node.params)
            detail = f"fun {node.name.lexeme}({params})"
            kind = SymbolKind.Function
        elif isinstance(node, ClassDecl):
            detail = f"class {node.name.lexeme}"
            if node.superclass is not None:
                detail += f" < {node.superclass.name.lexeme}"
            kind = SymbolKind.Class
        elif isinstance(node, VarDecl):
            detail = f"var {node.name.lexeme}"
            kind = SymbolKind.Variable
        else:
            continue
        symbols.append(LoxSymbol(node.name.lexeme, kind, uri, node.name.line - 1, detail))
    return symbols


class LoxLanguageServer(LanguageServer):
    """Language server for Lox source files."""

    def __init__(self) -> None:
        super().__init__("lox-ls", f"v{__version__}")
        self.symbols_by_uri: Dict[str, List[LoxSymbol]] = {}
        self.global_symbols: Dict[str, List[LoxSymbol]] = {}
        self.indexed_workspace = False

    def index_workspace(self) -> None:
        """Parse all `.lox` files under the current workspace."""
        root = self.workspace.root_path
        if root:
            for path in Path(root).rglob("*.lox"):
                uri = path.as_uri()
                if uri in self.symbols_by_uri:
                    continue
                try:
                    text = path.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as e:
                    self.show_message_log(f"[LSP] Failed to index {path}: {e}")
                    continue
                self.update_index(uri, text)
        self.indexed_workspace = True

    def update_index(self, uri: str, text: str) -> List[Diagnostic]:
        """Parse ``text``, update the symbol index for ``uri`` and return its diagnostics."""
        statements, reporter = analyze(uri, text)
        self.symbols_by_uri[uri] = collect_symbols(uri, statements)
        self._rebuild_global_index()
        return collect_diagnostics(reporter)

    def _rebuild_global_index(self) -> None:
        self.global_symbols.clear()
        for syms in self.symbols_by_uri.values():
            for sym in syms:
                self.global_symbols.setdefault(sym.name, []).append(sym)

    def lookup(self, word: str) -> Optional[LoxSymbol]:
        """Return the first indexed symbol named ``word``."""
        if not word:
            return None
        if not self.indexed_workspace:
            self.index_workspace()
        matches = self.global_symbols.get(word)
        if not matches:
            return None
        return matches[0]

    def refresh(self, uri: str, text: str) -> None:
        """Re-index a document and publish its diagnostics."""
        diagnostics = self.update_index(uri, text)
        self.publish_diagnostics(uri, diagnostics)


lang_server = LoxLanguageServer()


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LoxLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Index a document when it is opened."""
    ls.refresh(params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LoxLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-index a document when it changes."""
    if params.content_changes:
        ls.refresh(params.text_document.uri, params.content_changes[-1].text)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: LoxLanguageServer, params: DefinitionParams):
    """Return the definition location for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    sym = ls.lookup(doc.word_at_position(params.position))
    if sym is None:
        return None
    return Location(uri=sym.uri, range=sym.range)


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: LoxLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return hover information for the symbol under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    sym = ls.lookup(doc.word_at_position(params.position))
    if sym is None:
        return None
    contents = MarkupContent(kind=MarkupKind.PlainText, value=sym.detail)
    return Hover(contents=contents)


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: LoxLanguageServer, params: DocumentSymbolParams):
    """Return top-level symbols for the given document."""
    symbols = ls.symbols_by_uri.get(params.text_document.uri, [])
    return [
        DocumentSymbol(
            name=sym.name,
            kind=sym.kind,
            range=sym.range,
            selection_range=sym.range,
            detail=sym.detail,
        )
        for sym in symbols
    ]


def main() -> None:
    """Start the language server."""
    lang_server.start_io()


if __name__ == "__main__":
    main()
