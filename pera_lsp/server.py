from __future__ import annotations

"""
A minimal pygls-based Language Server for Pera.

Features:
- Text synchronization and document store
- Diagnostics: parser errors, unmatched parens
- Hover: builtin signatures and locally defined names
- Completion: builtins and local definitions
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
)

from pera_lsp.indexer import build_index, BUILTIN_SIGNATURES, DocumentIndex, SymbolDef


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class PeraLanguageServer(LanguageServer):
    CMD_NAME = "pera-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, "v0.1")
        self.documents: Dict[str, DocumentState] = {}


ls = PeraLanguageServer()


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    text = params.text_document.text or ""
    _update(uri, text)


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        text = ls.documents.get(uri, DocumentState("", build_index(""))).text
    _update(uri, text)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    if uri in ls.documents:
        del ls.documents[uri]
    ls.publish_diagnostics(uri, [])


def _update(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, collect_diagnostics(idx))


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def collect_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []

    if idx.paren_balance != 0:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unmatched parentheses detected",
                severity=DiagnosticSeverity.Warning,
                source="pera-ls",
            )
        )

    if idx.parse_error:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message=idx.parse_error,
                severity=DiagnosticSeverity.Error,
                source="pera-ls",
            )
        )

    return diags


# --- Hover ---
def describe(word: str, idx: DocumentIndex) -> Optional[str]:
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    sdef = idx.symbols.get(word)
    if sdef is None:
        return None
    if sdef.kind == 'function':
        sig = " ".join([word, *sdef.params])
        return f"({sig}) — function (defined at {sdef.line+1}:{sdef.col+1})"
    return f"{word} — var (defined at {sdef.line+1}:{sdef.col+1})"


@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    uri = params.text_document.uri
    state = ls.documents.get(uri)
    if not state:
        return None

    word = extract_word_at(state.text, params.position.line, params.position.character)
    if not word:
        return None

    contents = describe(word, state.index)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature("textDocument/completion")
def on_completion(params: CompletionParams) -> CompletionList:
    uri = params.text_document.uri
    state = ls.documents.get(uri)
    items: List[CompletionItem] = []
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Keyword, detail=sig))
    if state:
        for name, sdef in state.index.symbols.items():
            items.append(CompletionItem(label=name, kind=_completion_kind(sdef)))
    return CompletionList(is_incomplete=False, items=items)


def _completion_kind(sdef: SymbolDef) -> CompletionItemKind:
    return CompletionItemKind.Function if sdef.kind == 'function' else CompletionItemKind.Variable


# --- Document Symbols ---
@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    uri = params.text_document.uri
    state = ls.documents.get(uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == 'function' else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---

def extract_word_at(text: str, line_no: int, character: int) -> Optional[str]:
    lines = text.splitlines(True)
    if line_no >= len(lines):
        return None
    line = lines[line_no]
    # expand to token boundaries (anything but whitespace and parens)
    start = character
    while start > 0 and line[start - 1] not in " \t()\n\r":
        start -= 1
    end = character
    while end < len(line) and line[end] not in " \t()\n\r":
        end += 1
    word = line[start:end]
    return word if word else None


if __name__ == "__main__":
    # Run the language server over stdio
    ls.start_io()
