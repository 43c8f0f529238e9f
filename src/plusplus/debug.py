"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from plusplus.tokenizer import Statement, Tokenizer


def dump_statement(
    tokenizer: Tokenizer, statement: Statement, *, file: TextIO = sys.stderr
) -> None:
    """Print one line per token: value, offset, line:column and type."""
    file.write("Statement\n")
    for tok in statement:
        pos = tokenizer.position(tok.start)
        file.write(f"  {tok.value!r} {tok.start} {pos.line}:{pos.column} {tok.type.name}\n")


def dump_pending(tokenizer: Tokenizer, *, file: TextIO = sys.stderr) -> None:
    """Report what was left over when the input ended."""
    if tokenizer.pending:
        file.write(f"Unterminated ({len(tokenizer.pending)} tokens)\n")
    start = tokenizer.block_comment_start
    if tokenizer.in_block_comment and start is not None:
        pos = tokenizer.position(start)
        file.write(f"Unterminated block comment at {pos.line}:{pos.column}\n")
