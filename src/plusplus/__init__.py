"""++ to JavaScript source-to-source compiler."""

from __future__ import annotations

__version__ = "0.1.0"


def compile(source: str, filename: str = "input.pp") -> list[str]:
    """Tokenize and compile ++ source, returning JavaScript lines."""
    from plusplus.compiler import Compiler
    from plusplus.tokenizer import Tokenizer

    with Tokenizer.from_string(source, filename) as tokenizer:
        return Compiler(tokenizer).compile()
