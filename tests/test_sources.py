"""Test line sources: in-memory text, files, and their failure modes."""

from __future__ import annotations

import errno
from pathlib import Path

import pytest

from plusplus.errors import DecodeError, OpenError, ReadError, TokenizerError
from plusplus.sources import FileLineSource, StringLineSource
from plusplus.tokenizer import Tokenizer


def _drain(source) -> list[str]:
    lines = []
    while (line := source.next_line()) is not None:
        lines.append(line)
    return lines


class TestStringLineSource:
    def test_empty(self):
        assert _drain(StringLineSource("")) == []

    def test_final_newline(self):
        assert _drain(StringLineSource("a\nb\n")) == ["a", "b"]

    def test_no_final_newline(self):
        assert _drain(StringLineSource("a\nb")) == ["a", "b"]

    def test_blank_lines_kept(self):
        assert _drain(StringLineSource("a\n\n\nb")) == ["a", "", "", "b"]

    def test_crlf(self):
        assert _drain(StringLineSource("a\r\nb\r\n")) == ["a", "b"]

    def test_end_is_sticky(self):
        src = StringLineSource("a")
        assert src.next_line() == "a"
        assert src.next_line() is None
        assert src.next_line() is None

    def test_close_stops_lines(self):
        src = StringLineSource("a\nb")
        src.close()
        assert src.next_line() is None


class TestFileLineSource:
    def test_reads_lines(self, tmp_path: Path):
        f = tmp_path / "ok.pp"
        f.write_bytes(b"a;\r\nb;\nc")
        assert _drain(FileLineSource(f)) == ["a;", "b;", "c"]

    def test_multibyte_utf8(self, tmp_path: Path):
        f = tmp_path / "utf8.pp"
        f.write_text("é x;\n", encoding="utf-8")
        with Tokenizer.open(f) as tok:
            statement, _ = tok.tokenize_next_statement()
        assert [(t.value, t.start) for t in statement] == [("x", 2), (";", 3)]

    def test_missing_file(self, tmp_path: Path):
        missing = tmp_path / "missing.pp"
        with pytest.raises(OpenError) as exc_info:
            Tokenizer.open(missing)
        assert exc_info.value.filename == str(missing)
        assert str(missing) in str(exc_info.value)

    def test_directory(self, tmp_path: Path):
        with pytest.raises(OpenError):
            Tokenizer.open(tmp_path)

    def test_open_reads_nothing(self, tmp_path: Path):
        f = tmp_path / "lazy.pp"
        f.write_text("a;\n")
        with Tokenizer.open(f) as tok:
            assert tok.text == ""
            assert tok.filename == str(f)


class TestDecodeErrors:
    def test_invalid_byte(self, tmp_path: Path):
        f = tmp_path / "bad.pp"
        f.write_bytes(b"a;\nb \xff c;\n")
        with Tokenizer.open(f) as tok:
            statement, end = tok.tokenize_next_statement()
            assert [t.value for t in statement] == ["a", ";"]
            assert end is False
            with pytest.raises(DecodeError) as exc_info:
                tok.tokenize_next_statement()
        err = exc_info.value
        assert err.line == 2
        assert err.column == 3
        assert err.filename == str(f)

    def test_partial_statement_discarded(self, tmp_path: Path):
        f = tmp_path / "bad.pp"
        f.write_bytes(b"a b\n\xc3\x28;\n")
        with Tokenizer.open(f) as tok:
            with pytest.raises(DecodeError):
                tok.tokenize_next_statement()
            assert tok.pending == ()

    def test_is_tokenizer_error(self, tmp_path: Path):
        f = tmp_path / "bad.pp"
        f.write_bytes(b"\xfe;\n")
        with Tokenizer.open(f) as tok:
            with pytest.raises(TokenizerError):
                tok.tokenize_next_statement()


class _FailingFile:
    """Binary file stand-in that serves some lines, then fails like a bad disk."""

    def __init__(self, lines: list[bytes]) -> None:
        self._lines = list(lines)
        self.closed = False

    def readline(self) -> bytes:
        if self._lines:
            return self._lines.pop(0)
        raise OSError(errno.EIO, "Input/output error")

    def close(self) -> None:
        self.closed = True


class TestReadErrors:
    def _source(self, tmp_path: Path, lines: list[bytes]) -> tuple[FileLineSource, _FailingFile]:
        f = tmp_path / "flaky.pp"
        f.write_text("")
        source = FileLineSource(f)
        source.close()
        failing = _FailingFile(lines)
        source._file = failing  # type: ignore[assignment]
        return source, failing

    def test_read_failure_is_fatal(self, tmp_path: Path):
        source, failing = self._source(tmp_path, [b"a;\n", b"b c\n"])
        tok = Tokenizer(source)
        statement, end = tok.tokenize_next_statement()
        assert [t.value for t in statement] == ["a", ";"]
        assert end is False

        with pytest.raises(ReadError) as exc_info:
            tok.tokenize_next_statement()
        assert exc_info.value.reason == "Input/output error"
        assert exc_info.value.filename == source.name
        assert tok.pending == ()
        assert failing.closed

    def test_not_retried(self, tmp_path: Path):
        source, _ = self._source(tmp_path, [])
        with pytest.raises(ReadError):
            source.next_line()
        assert source.next_line() is None
