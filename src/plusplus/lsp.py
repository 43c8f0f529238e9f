"""Minimal LSP server for ++ — diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from plusplus import __version__
from plusplus.tokenizer import Tokenizer

server = LanguageServer(
    "plusplus-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _lsp_position(tokenizer: Tokenizer, offset: int) -> Position:
    pos = tokenizer.position(offset)
    return Position(line=pos.line - 1, character=pos.column - 1)


def collect_diagnostics(source: str, filename: str = "<string>") -> list[Diagnostic]:
    """Tokenize source and report comments and statements left open at the end."""
    diagnostics: list[Diagnostic] = []
    with Tokenizer.from_string(source, filename) as tokenizer:
        for _ in tokenizer:
            pass

        pending = tokenizer.pending
        if pending:
            diagnostics.append(
                Diagnostic(
                    range=Range(
                        start=_lsp_position(tokenizer, pending[0].start),
                        end=_lsp_position(tokenizer, pending[-1].end),
                    ),
                    message="statement is missing a terminator (';', '{' or '}')",
                    severity=DiagnosticSeverity.Warning,
                    source="plusplus",
                )
            )

        start = tokenizer.block_comment_start
        if tokenizer.in_block_comment and start is not None:
            diagnostics.append(
                Diagnostic(
                    range=Range(
                        start=_lsp_position(tokenizer, start),
                        end=_lsp_position(tokenizer, start + 2),
                    ),
                    message="unterminated block comment",
                    severity=DiagnosticSeverity.Warning,
                    source="plusplus",
                )
            )
    return diagnostics


def _validate(ls: LanguageServer, uri: str) -> None:
    """Tokenize the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    diagnostics = collect_diagnostics(doc.source, filename)
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
