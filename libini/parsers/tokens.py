"""Token model for the INI tokenizer.

This module defines the closed set of token kinds produced by the lexer
and the immutable Token container carrying an optional payload:
- TokenType: Enum of every kind, including the lexer-internal sentinels
- Token: Frozen (kind, value) pair with named constructors
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

TokenValue = Union[str, float, None]


class TokenType(Enum):
    """Kinds of tokens recognised by the INI lexer."""

    LBRACE = "lbrace"
    RBRACE = "rbrace"
    EQUALS = "equals"
    DOUBLE_QUOTE = "double_quote"
    SINGLE_QUOTE = "single_quote"
    SECTION = "section"
    IDENTIFIER = "identifier"
    STRING = "string"
    NUMBER = "number"

    # Lexer-internal states, never part of a token sequence
    NULL = "null"
    END_OF_FILE = "end_of_file"

    @property
    def has_payload(self) -> bool:
        """Whether tokens of this kind carry a value."""
        return self in _PAYLOAD_TYPES

    @property
    def is_quote(self) -> bool:
        """Whether this kind is one of the quote markers."""
        return self in (TokenType.DOUBLE_QUOTE, TokenType.SINGLE_QUOTE)


_PAYLOAD_TYPES = {
    TokenType.SECTION: str,
    TokenType.IDENTIFIER: str,
    TokenType.STRING: str,
    TokenType.NUMBER: float,
}

_SENTINEL_TYPES = (TokenType.NULL, TokenType.END_OF_FILE)

QUOTE_CHARS = {
    TokenType.DOUBLE_QUOTE: '"',
    TokenType.SINGLE_QUOTE: "'",
}


@dataclass(frozen=True)
class Token:
    """Immutable lexical token.

    Payload-free markers (braces, equals, quotes) have ``value`` set to None.
    Section, identifier and string tokens carry text; number tokens carry a
    float.

    Attributes:
        kind: Token kind.
        value: Token payload, if the kind carries one.
    """

    kind: TokenType
    value: TokenValue = None

    def __post_init__(self) -> None:
        if self.kind in _SENTINEL_TYPES:
            raise ValueError(f"{self.kind.name} is not an emittable token kind")

        expected = _PAYLOAD_TYPES.get(self.kind)
        if expected is None:
            if self.value is not None:
                raise ValueError(f"{self.kind.name} token does not take a payload")
            return

        if expected is float and isinstance(self.value, int) and not isinstance(self.value, bool):
            object.__setattr__(self, "value", float(self.value))
        elif not isinstance(self.value, expected):
            raise ValueError(
                f"{self.kind.name} token requires a {expected.__name__} payload, "
                f"got {type(self.value).__name__}"
            )

    @classmethod
    def lbrace(cls) -> "Token":
        return cls(TokenType.LBRACE)

    @classmethod
    def rbrace(cls) -> "Token":
        return cls(TokenType.RBRACE)

    @classmethod
    def equals(cls) -> "Token":
        return cls(TokenType.EQUALS)

    @classmethod
    def double_quote(cls) -> "Token":
        return cls(TokenType.DOUBLE_QUOTE)

    @classmethod
    def single_quote(cls) -> "Token":
        return cls(TokenType.SINGLE_QUOTE)

    @classmethod
    def section(cls, name: str) -> "Token":
        return cls(TokenType.SECTION, name)

    @classmethod
    def identifier(cls, name: str) -> "Token":
        return cls(TokenType.IDENTIFIER, name)

    @classmethod
    def string(cls, text: str) -> "Token":
        return cls(TokenType.STRING, text)

    @classmethod
    def number(cls, value: float) -> "Token":
        return cls(TokenType.NUMBER, value)

    @property
    def text(self) -> Optional[str]:
        """Payload as text, for string-valued kinds."""
        return self.value if isinstance(self.value, str) else None

    def __repr__(self) -> str:
        if self.kind.has_payload:
            return f"Token({self.kind.name}, {self.value!r})"
        return f"Token({self.kind.name})"


__all__ = [
    "QUOTE_CHARS",
    "Token",
    "TokenType",
    "TokenValue",
]
