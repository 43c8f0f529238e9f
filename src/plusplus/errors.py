"""Error types with formatted source context."""

from __future__ import annotations


class TokenizerError(Exception):
    """Base class for fatal errors raised while reading or tokenizing a source."""

    def __init__(self, message: str, filename: str) -> None:
        self.message = message
        self.filename = filename
        super().__init__(self.format())

    def format(self) -> str:
        return f"error: {self.message}\n --> {self.filename}"


class OpenError(TokenizerError):
    """Raised when the source cannot be opened for reading."""

    def __init__(self, filename: str, reason: str) -> None:
        self.reason = reason
        super().__init__(f"failed to open {filename}: {reason}", filename)


class ReadError(TokenizerError):
    """Raised when reading from an open source fails. Never retried."""

    def __init__(self, filename: str, reason: str) -> None:
        self.reason = reason
        super().__init__(f"failed to read {filename}: {reason}", filename)


class DecodeError(TokenizerError):
    """Raised on the first line that is not valid UTF-8."""

    def __init__(
        self,
        filename: str,
        line: int,
        column: int,
        source_line: str,
        reason: str = "invalid UTF-8",
    ) -> None:
        self.line = line
        self.column = column
        self.source_line = source_line
        self.reason = reason
        super().__init__(f"{reason} on line {line}", filename)

    def format(self) -> str:
        col = self.column
        line_num = str(self.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"
        pad = " " * (col - 1)

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {self.filename}:{self.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {self.source_line}\n"
            f"{blank_gutter} {pad}^"
        )
