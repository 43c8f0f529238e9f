"""++ compiler: drives the tokenizer one statement at a time."""

from __future__ import annotations

from collections.abc import Callable

from plusplus.tokenizer import Statement, Tokenizer


class Compiler:
    """Consume every statement from a tokenizer and produce JavaScript lines.

    Translation is not implemented yet, so :meth:`compile` returns no lines.
    Statements are handed to ``on_statement`` in source order.
    """

    def __init__(
        self,
        tokenizer: Tokenizer,
        on_statement: Callable[[Statement], None] | None = None,
    ) -> None:
        self._tokenizer = tokenizer
        self._on_statement = on_statement
        self.statement_count = 0

    def compile(self) -> list[str]:
        lines: list[str] = []
        while True:
            statement, end_of_input = self._tokenizer.tokenize_next_statement()
            if end_of_input:
                return lines
            self.statement_count += 1
            if self._on_statement is not None:
                self._on_statement(statement)
