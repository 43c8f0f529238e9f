"""Line sources feeding the tokenizer one line at a time."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO, Protocol

from plusplus.errors import DecodeError, OpenError, ReadError


class LineSource(Protocol):
    """Produces the next line of input (without its line terminator), or None at end."""

    name: str

    def next_line(self) -> str | None: ...

    def close(self) -> None: ...


def _strip_cr(line: str) -> str:
    if line.endswith("\r"):
        line = line[:-1]
    return line


class StringLineSource:
    """Serve lines from in-memory text. Lines split on LF; a trailing CR is dropped."""

    def __init__(self, text: str, name: str = "<string>") -> None:
        self.name = name
        parts = text.split("\n")
        if parts[-1] == "":
            parts.pop()
        self._lines: Iterator[str] = iter(parts)

    def next_line(self) -> str | None:
        line = next(self._lines, None)
        if line is None:
            return None
        return _strip_cr(line)

    def close(self) -> None:
        self._lines = iter(())


class FileLineSource:
    """Read a file lazily in binary mode, decoding each line as strict UTF-8."""

    def __init__(self, path: str | Path) -> None:
        self.name = str(path)
        self._line_no = 0
        try:
            self._file: BinaryIO | None = open(path, "rb")
        except OSError as exc:
            raise OpenError(self.name, exc.strerror or str(exc)) from exc

    def next_line(self) -> str | None:
        if self._file is None:
            return None
        try:
            raw = self._file.readline()
        except OSError as exc:
            self.close()
            raise ReadError(self.name, exc.strerror or str(exc)) from exc

        if not raw:
            self.close()
            return None

        self._line_no += 1
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            self.close()
            # Column counts characters in the valid prefix, 1-based
            column = len(raw[: exc.start].decode("utf-8")) + 1
            raise DecodeError(
                self.name,
                self._line_no,
                column,
                raw.decode("utf-8", errors="replace"),
                reason=f"invalid UTF-8 ({exc.reason})",
            ) from exc

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
