"""++ tokenizer: converts source lines into statements of positioned tokens.

A token is a run of ASCII alphanumerics and underscores, or a single
punctuation character other than underscore. Whitespace, comments, and
non-ASCII characters only separate tokens. Multi-character operators are
left for a parser to assemble from adjacent symbol tokens.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterator
from enum import Enum, auto
from pathlib import Path
from types import TracebackType

from plusplus.errors import TokenizerError
from plusplus.sources import FileLineSource, LineSource, StringLineSource
from plusplus.tokens import (
    Position,
    Token,
    TokenType,
    is_ident_char,
    is_symbol_char,
    is_terminator,
)

Statement = list[Token]


class _Mode(Enum):
    NEUTRAL = auto()  # between tokens
    IDENTIFIER = auto()  # building an identifier
    SYMBOL = auto()  # building a punctuation run
    IN_LINE_COMMENT = auto()
    IN_BLOCK_COMMENT = auto()


def _classify(ch: str) -> _Mode:
    if is_ident_char(ch):
        return _Mode.IDENTIFIER
    if is_symbol_char(ch):
        return _Mode.SYMBOL
    return _Mode.NEUTRAL


class Tokenizer:
    """Pull lines from a source and split them into statements of tokens.

    Statements end with ``;``, ``{`` or ``}``. The lexical mode, including an
    open block comment, carries over between lines and between calls.
    """

    def __init__(self, lines: LineSource, filename: str | None = None) -> None:
        self._lines = lines
        self._filename = filename if filename is not None else lines.name
        self._chunks: list[str] = []
        self._line_starts: list[int] = []
        self._line: str | None = None
        self._index = 0  # next unread character of self._line
        self._cursor = 0
        self._mode = _Mode.NEUTRAL
        self._value = ""
        self._start = 0
        self._prev_star = False
        self._block_comment_start: int | None = None
        self._statement: Statement = []
        self._eof = False

    @classmethod
    def open(cls, path: str | Path) -> Tokenizer:
        """Bind to a file on disk. Raises OpenError if it cannot be read."""
        return cls(FileLineSource(path))

    @classmethod
    def from_string(cls, text: str, filename: str = "<string>") -> Tokenizer:
        return cls(StringLineSource(text, filename))

    def __enter__(self) -> Tokenizer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __iter__(self) -> Iterator[Statement]:
        while True:
            statement, end_of_input = self.tokenize_next_statement()
            if end_of_input:
                return
            yield statement

    def close(self) -> None:
        self._lines.close()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def text(self) -> str:
        """All text read so far, one ``\\n`` after every line."""
        return "".join(self._chunks)

    @property
    def pending(self) -> tuple[Token, ...]:
        """Tokens read since the last terminator."""
        return tuple(self._statement)

    @property
    def at_eof(self) -> bool:
        return self._eof

    @property
    def in_block_comment(self) -> bool:
        return self._mode is _Mode.IN_BLOCK_COMMENT

    @property
    def block_comment_start(self) -> int | None:
        """Offset of the ``/*`` that opened the block comment still in progress."""
        return self._block_comment_start

    def position(self, offset: int) -> Position:
        """Convert an offset into the text read so far to a line/column position."""
        if offset < 0 or not self._line_starts:
            raise ValueError(f"offset {offset} is outside the text read so far")
        idx = bisect_right(self._line_starts, offset) - 1
        return Position(idx + 1, offset - self._line_starts[idx] + 1, offset)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def tokenize_next_statement(self) -> tuple[Statement, bool]:
        """Tokenize up to and including the next terminator.

        Returns ``(statement, False)`` when a terminator was found and
        ``([], True)`` once the input is exhausted; later calls keep
        returning ``([], True)`` without touching the source. The end-of-input
        result never carries tokens: anything read after the last terminator
        is available from :attr:`pending` instead.
        """
        if self._eof:
            return [], True

        self._statement = []
        try:
            while True:
                if self._line is None:
                    line = self._lines.next_line()
                    if line is None:
                        self._eof = True
                        return [], True
                    self._begin_line(line)
                if self._scan_line():
                    statement = self._statement
                    self._statement = []
                    return statement, False
                self._end_line()
        except TokenizerError:
            self._statement = []
            raise

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------

    def _begin_line(self, line: str) -> None:
        self._line_starts.append(self._cursor)
        self._chunks.append(line + "\n")
        self._line = line
        self._index = 0
        self._prev_star = False

    def _scan_line(self) -> bool:
        """Feed the rest of the current line; True if a terminator was consumed."""
        line = self._line
        if line is None:
            return False
        while self._index < len(line):
            ch = line[self._index]
            self._index += 1
            if self._feed(ch):
                return True
        return False

    def _end_line(self) -> None:
        if self._mode in (_Mode.IDENTIFIER, _Mode.SYMBOL):
            self._finalize()
        if self._mode is _Mode.IN_LINE_COMMENT:
            self._mode = _Mode.NEUTRAL
        self._cursor += 1  # newline
        self._line = None

    # ------------------------------------------------------------------
    # Characters
    # ------------------------------------------------------------------

    def _feed(self, ch: str) -> bool:
        if self._in_comment():
            self._skip_comment_char(ch)
            return False

        kind = _classify(ch)
        if is_terminator(ch):
            self._finalize()
            if self._in_comment():
                self._skip_comment_char(ch)
                return False
            self._statement.append(Token(ch, self._cursor, TokenType.SYMBOL))
            self._cursor += 1
            return True

        if kind is not _Mode.NEUTRAL and kind is self._mode:
            self._value += ch
            self._cursor += 1
            return False

        self._finalize()
        if self._in_comment():
            self._skip_comment_char(ch)
            return False
        if kind is not _Mode.NEUTRAL:
            self._mode = kind
            self._value = ch
            self._start = self._cursor
        self._cursor += 1
        return False

    def _in_comment(self) -> bool:
        return self._mode in (_Mode.IN_LINE_COMMENT, _Mode.IN_BLOCK_COMMENT)

    def _skip_comment_char(self, ch: str) -> None:
        if self._mode is _Mode.IN_BLOCK_COMMENT:
            if ch == "/" and self._prev_star:
                self._mode = _Mode.NEUTRAL
                self._block_comment_start = None
                self._prev_star = False
            else:
                self._prev_star = ch == "*"
        self._cursor += 1

    # ------------------------------------------------------------------
    # Finalization
    # ------------------------------------------------------------------

    def _finalize(self) -> None:
        """Turn the token under construction into zero or more tokens."""
        value, start, mode = self._value, self._start, self._mode
        self._value = ""
        self._mode = _Mode.NEUTRAL
        if not value:
            return
        if mode is _Mode.IDENTIFIER:
            self._statement.append(Token(value, start, TokenType.IDENTIFIER))
        else:
            self._split_symbols(value, start)

    def _split_symbols(self, run: str, start: int) -> None:
        """Strip comments from a punctuation run and emit one token per character.

        Block comments are handled first: each closed ``/*...*/`` is cut out,
        and an unclosed ``/*`` truncates the run and opens a block comment.
        A ``/*`` that is the tail of ``//*`` stops the block scan. Only then,
        if no block comment was left open, the first ``//`` in what survives
        truncates it and comments out the rest of the line.
        """
        segments: list[tuple[int, int]] = []  # surviving [lo, hi) slices of run
        pos = 0
        while True:
            block = run.find("/*", pos)
            if block == -1 or (block > pos and run[block - 1] == "/"):
                break
            segments.append((pos, block))
            close = run.find("*/", block + 2)
            if close == -1:
                for lo, hi in segments:
                    self._emit_symbols(run, start, lo, hi)
                self._mode = _Mode.IN_BLOCK_COMMENT
                self._prev_star = False
                self._block_comment_start = start + block
                return
            pos = close + 2
        segments.append((pos, len(run)))

        for lo, hi in segments:
            line = run.find("//", lo, hi)
            if line != -1:
                self._emit_symbols(run, start, lo, line)
                self._mode = _Mode.IN_LINE_COMMENT
                return
            self._emit_symbols(run, start, lo, hi)

    def _emit_symbols(self, run: str, start: int, lo: int, hi: int) -> None:
        for i in range(lo, hi):
            self._statement.append(Token(run[i], start + i, TokenType.SYMBOL))


def tokenize(source: str, filename: str = "<string>") -> list[Statement]:
    """Convenience function: tokenize source text and return its terminated statements."""
    with Tokenizer.from_string(source, filename) as tokenizer:
        return list(tokenizer)
