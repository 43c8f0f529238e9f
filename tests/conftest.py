"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from plusplus.tokenizer import Tokenizer, tokenize
from plusplus.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns its terminated statements."""

    def _lex(source: str) -> list[list[Token]]:
        return tokenize(source, "test.pp")

    return _lex


@pytest.fixture
def tokenizer_for():
    """Return a helper that builds an in-memory tokenizer for source."""

    def _make(source: str) -> Tokenizer:
        return Tokenizer.from_string(source, "test.pp")

    return _make


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_starts(tokens: list[Token], expected: list[int]) -> None:
    """Assert that the token start offsets match the expected list."""
    actual = [t.start for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def flatten(statements: list[list[Token]]) -> list[Token]:
    return [tok for stmt in statements for tok in stmt]
