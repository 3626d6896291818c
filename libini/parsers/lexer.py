"""Character-level tokenizer for INI documents.

The lexer is a small finite-state machine. Its state is the kind of the
previously emitted token plus the active delimiter used to stop reading
payload text. ``next_token_kind`` is the single pure transition function;
``IniLexer`` drives it over a character stream and extracts payloads.

The lexer never raises for malformed content. Unterminated section headers
and quoted values simply read to the end of the stream and are rejected
later by the tree builder.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, TextIO, Tuple, Union

from libini.parsers.base import IniSourceError
from libini.parsers.chars import (
    Predicate,
    compose,
    is_comment,
    is_eol,
    is_numeric,
    is_whitespace,
    is_whitespace_or_eol,
    make_predicate,
    negate,
    never,
)
from libini.parsers.tokens import QUOTE_CHARS, Token, TokenType

logger = logging.getLogger("libini.parsers.lexer")

SourcePath = Union[str, Path]

SECTION_START = "["
DECIMAL_POINT = "."
EQUALS_SIGN = "="


class Delimiter(Enum):
    """Stop conditions used while reading payload text."""

    NONE = "none"
    SECTION_END = "section_end"
    KEY = "key"
    DOUBLE_QUOTE = "double_quote"
    SINGLE_QUOTE = "single_quote"
    LINE = "line"

    @property
    def predicate(self) -> Predicate:
        """Character predicate implementing this delimiter."""
        return _DELIMITER_PREDICATES[self]

    def matches(self, c: str) -> bool:
        """Whether reading stops at character ``c``."""
        return self.predicate(c)

    @classmethod
    def for_quote(cls, kind: TokenType) -> "Delimiter":
        """Delimiter closing a value opened by the given quote kind."""
        if kind is TokenType.DOUBLE_QUOTE:
            return cls.DOUBLE_QUOTE
        if kind is TokenType.SINGLE_QUOTE:
            return cls.SINGLE_QUOTE
        raise ValueError(f"{kind.name} is not a quote kind")


_DELIMITER_PREDICATES = {
    Delimiter.NONE: never,
    Delimiter.SECTION_END: make_predicate("]"),
    # Keys stop at whitespace; '=' and line ends too so "key=value" splits
    Delimiter.KEY: compose(is_whitespace_or_eol, make_predicate("=")),
    Delimiter.DOUBLE_QUOTE: make_predicate('"'),
    Delimiter.SINGLE_QUOTE: make_predicate("'"),
    Delimiter.LINE: compose(is_eol, is_comment),
}


@dataclass(frozen=True)
class LexState:
    """Lexer state: previously emitted kind and the active delimiter.

    Attributes:
        kind: Kind decided by the last transition (NULL before the first).
        delimiter: Stop condition in effect for payload reads.
    """

    kind: TokenType
    delimiter: Delimiter = Delimiter.NONE

    @property
    def in_quote(self) -> bool:
        """True between an opening quote and its string payload.

        Whitespace and comment markers are content in this state, so the
        lexer must not skip them.
        """
        if not self.kind.is_quote:
            return False
        return not self.delimiter.matches(QUOTE_CHARS[self.kind])


INITIAL_STATE = LexState(TokenType.NULL, Delimiter.NONE)


def _start_of_line(lookahead: str) -> LexState:
    """Default transition: a section header or a member key."""
    if lookahead == SECTION_START:
        return LexState(TokenType.LBRACE, Delimiter.KEY)
    return LexState(TokenType.IDENTIFIER, Delimiter.KEY)


def next_token_kind(state: LexState, lookahead: Optional[str]) -> LexState:
    """Decide the kind of the next token.

    Args:
        state: Current lexer state (previous kind and active delimiter).
        lookahead: Next unconsumed character, or None at end of stream.

    Returns:
        The new state. Its ``kind`` is the token to read next and its
        ``delimiter`` the stop condition for that token's payload.
    """
    if lookahead is None:
        return LexState(TokenType.END_OF_FILE, state.delimiter)

    previous = state.kind
    delimiter = state.delimiter

    if previous is TokenType.LBRACE:
        return LexState(TokenType.SECTION, Delimiter.SECTION_END)

    if previous is TokenType.SECTION:
        return LexState(TokenType.RBRACE, Delimiter.KEY)

    if previous.is_quote:
        if not delimiter.matches(QUOTE_CHARS[previous]):
            # Opening quote: read the string up to the matching quote
            return LexState(TokenType.STRING, Delimiter.for_quote(previous))
        # Closing quote
        return _start_of_line(lookahead)

    if previous is TokenType.STRING:
        if delimiter.matches('"'):
            return LexState(TokenType.DOUBLE_QUOTE, delimiter)
        return LexState(TokenType.SINGLE_QUOTE, delimiter)

    if previous is TokenType.IDENTIFIER and delimiter is not Delimiter.LINE:
        if lookahead == EQUALS_SIGN:
            return LexState(TokenType.EQUALS, delimiter)
        # Anything else after a key is another key; the builder rejects it
        return LexState(TokenType.IDENTIFIER, Delimiter.KEY)

    if previous is TokenType.EQUALS:
        if is_numeric(lookahead):
            return LexState(TokenType.NUMBER, delimiter)
        if lookahead == "'":
            return LexState(TokenType.SINGLE_QUOTE, delimiter)
        if lookahead == '"':
            return LexState(TokenType.DOUBLE_QUOTE, delimiter)
        return LexState(TokenType.IDENTIFIER, Delimiter.LINE)

    # NULL, RBRACE, NUMBER and bare values all start a new line
    return _start_of_line(lookahead)


class CharReader:
    """One-character lookahead over a text stream, read in chunks."""

    def __init__(self, stream: TextIO, chunk_size: int = 8192) -> None:
        self._stream = stream
        self._chunk_size = chunk_size
        self._buffer = ""
        self._index = 0
        self._exhausted = False

    def peek(self) -> Optional[str]:
        """Return the next character without consuming it, None at EOF."""
        if self._index >= len(self._buffer):
            if self._exhausted:
                return None
            self._buffer = self._stream.read(self._chunk_size)
            self._index = 0
            if not self._buffer:
                self._exhausted = True
                return None
        return self._buffer[self._index]

    def advance(self) -> Optional[str]:
        """Consume and return the next character, None at EOF."""
        c = self.peek()
        if c is not None:
            self._index += 1
        return c

    def read_until(self, delimiter: Predicate) -> str:
        """Consume characters up to, not including, the first delimiter."""
        parts: List[str] = []
        while True:
            c = self.peek()
            if c is None or delimiter(c):
                return "".join(parts)
            parts.append(c)
            self._index += 1


_MARKERS = {
    TokenType.LBRACE: Token.lbrace,
    TokenType.RBRACE: Token.rbrace,
    TokenType.EQUALS: Token.equals,
    TokenType.DOUBLE_QUOTE: Token.double_quote,
    TokenType.SINGLE_QUOTE: Token.single_quote,
}


def skip_comment(reader: CharReader) -> None:
    """Consume a comment up to, not including, the end of line."""
    reader.read_until(is_eol)


def skip_ignorable(reader: CharReader) -> None:
    """Consume whitespace, line ends and comments."""
    while True:
        c = reader.peek()
        if c is None:
            return
        if is_whitespace_or_eol(c):
            reader.advance()
        elif is_comment(c):
            skip_comment(reader)
        else:
            return


def skip_whitespace(reader: CharReader) -> None:
    """Consume spaces and tabs only, staying on the current line."""
    reader.read_until(negate(is_whitespace))


def read_number(reader: CharReader) -> float:
    """Read ``digits`` or ``digits.digits`` and convert it to a float."""
    not_numeric = negate(is_numeric)
    integer_part = reader.read_until(not_numeric)
    if reader.peek() == DECIMAL_POINT:
        reader.advance()
        fraction_part = reader.read_until(not_numeric)
        return float(f"{integer_part}.{fraction_part}")
    return float(integer_part)


def read_token(reader: CharReader, state: LexState) -> Token:
    """Extract the token for a decided state from the reader.

    Args:
        reader: Character reader positioned at the token.
        state: State returned by ``next_token_kind``.

    Returns:
        Token of kind ``state.kind``.
    """
    kind = state.kind
    marker = _MARKERS.get(kind)
    if marker is not None:
        reader.advance()
        return marker()

    if kind is TokenType.NUMBER:
        return Token.number(read_number(reader))

    text = reader.read_until(state.delimiter.predicate)
    if kind is TokenType.SECTION:
        return Token.section(text)
    if kind is TokenType.STRING:
        return Token.string(text)
    if kind is TokenType.IDENTIFIER:
        if state.delimiter is Delimiter.LINE:
            text = text.rstrip(" \t")
        return Token.identifier(text)

    raise ValueError(f"cannot read a token of kind {kind.name}")


def iter_tokens(stream: TextIO) -> Iterator[Token]:
    """Yield tokens from a text stream until it is exhausted.

    Args:
        stream: Open text stream. It is read but not closed.

    Yields:
        Token objects in document order.
    """
    reader = CharReader(stream)
    state = INITIAL_STATE
    while True:
        if state.kind is TokenType.EQUALS:
            # A value must start on the line of its key
            skip_whitespace(reader)
        elif not state.in_quote:
            skip_ignorable(reader)
        state = next_token_kind(state, reader.peek())
        if state.kind is TokenType.END_OF_FILE:
            return
        yield read_token(reader, state)


def tokenize_text(text: str) -> Tuple[Token, ...]:
    """Tokenize an in-memory INI document."""
    return tuple(iter_tokens(io.StringIO(text)))


class IniLexer:
    """Tokenizer bound to a named INI file.

    The file is opened at the start of every ``tokenize`` call and closed
    before it returns, so one lexer can tokenize the same source repeatedly.

    Attributes:
        source: Path of the INI file.
        encoding: Text encoding used to decode the file.
        errors: Codec error handler name.
    """

    def __init__(
        self,
        source: SourcePath,
        encoding: str = "utf-8",
        errors: str = "strict",
    ) -> None:
        self.source = Path(source)
        self.encoding = encoding
        self.errors = errors

    def __call__(self) -> Tuple[Token, ...]:
        """Dispatch to tokenize()."""
        return self.tokenize()

    def tokenize(self) -> Tuple[Token, ...]:
        """Read the whole source and return its token sequence.

        Returns:
            Tuple of tokens in document order.

        Raises:
            IniSourceError: If the file cannot be opened or decoded.
        """
        try:
            with open(self.source, "r", encoding=self.encoding, errors=self.errors, newline="") as stream:
                tokens = tuple(iter_tokens(stream))
        except UnicodeDecodeError as e:
            raise IniSourceError(str(self.source), f"decode error: {e}") from e
        except OSError as e:
            raise IniSourceError(str(self.source), e.strerror or str(e)) from e

        logger.debug("Tokenized %s into %d tokens", self.source, len(tokens))
        return tokens

    def __repr__(self) -> str:
        return f"IniLexer(source={str(self.source)!r}, encoding={self.encoding!r})"


__all__ = [
    "CharReader",
    "Delimiter",
    "INITIAL_STATE",
    "IniLexer",
    "LexState",
    "iter_tokens",
    "next_token_kind",
    "read_number",
    "read_token",
    "skip_ignorable",
    "skip_whitespace",
    "tokenize_text",
]
