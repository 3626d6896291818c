"""Tree builder turning a token sequence into sections and members.

The builder walks an immutable token tuple with a cursor. Any token of the
wrong kind aborts the whole build with ``UnexpectedTokenError``; running
out of tokens in the middle of a section header or a member raises
``StructuralError``. No partial tree is ever returned.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from libini.model.tree import IniMember, IniParseResult, IniSection
from libini.model.values import IniValue
from libini.parsers.base import StructuralError, UnexpectedTokenError
from libini.parsers.tokens import Token, TokenType

logger = logging.getLogger("libini.parsers.builder")

# Tokens accepted directly as a member value
_DIRECT_VALUES = (TokenType.NUMBER, TokenType.STRING, TokenType.IDENTIFIER)
_VALUE_STARTS = _DIRECT_VALUES + (TokenType.DOUBLE_QUOTE, TokenType.SINGLE_QUOTE)


class TokenCursor:
    """Read position over an immutable token sequence."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens: Tuple[Token, ...] = tuple(tokens)
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._tokens) - self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def peek(self) -> Optional[Token]:
        if self.at_end():
            return None
        return self._tokens[self._pos]

    def expect(self, *kinds: TokenType, context: str = "") -> Token:
        """Consume the next token, requiring it to be one of ``kinds``.

        Raises:
            StructuralError: If the sequence is exhausted.
            UnexpectedTokenError: If the token has another kind.
        """
        token = self.peek()
        if token is None:
            names = " or ".join(kind.name for kind in kinds)
            where = f" while parsing {context}" if context else ""
            raise StructuralError(f"unexpected end of input{where}, expected {names}", self._pos)
        if token.kind not in kinds:
            raise UnexpectedTokenError(kinds, token, self._pos, context)
        self._pos += 1
        return token


class TreeBuilder:
    """Assemble sections and members from a token sequence.

    Attributes:
        strip_section_names: Drop whitespace around section names.
    """

    def __init__(self, tokens: Sequence[Token], strip_section_names: bool = False) -> None:
        self._cursor = TokenCursor(tokens)
        self.strip_section_names = strip_section_names

    def build(self) -> List[IniSection]:
        """Consume the whole sequence and return its sections.

        Returns:
            Sections in document order (possibly none).

        Raises:
            StructuralError: If the sequence does not follow the grammar.
        """
        sections: List[IniSection] = []
        while not self._cursor.at_end():
            sections.append(self._parse_section())

        logger.debug(
            "Built %d sections with %d members",
            len(sections),
            sum(len(section) for section in sections),
        )
        return sections

    def _parse_section(self) -> IniSection:
        cursor = self._cursor
        head = cursor.peek()
        if head is None or head.kind is not TokenType.LBRACE:
            raise StructuralError(f"expected section start, found {head!r}", cursor.position)

        cursor.expect(TokenType.LBRACE, context="section header")
        name = cursor.expect(TokenType.SECTION, context="section header").text or ""
        if cursor.at_end():
            raise StructuralError(f"unterminated section header {name!r}", cursor.position)
        cursor.expect(TokenType.RBRACE, context="section header")

        if self.strip_section_names:
            name = name.strip()
        if not name:
            raise StructuralError("empty section name", cursor.position - 1)

        members: List[IniMember] = []
        while not cursor.at_end() and cursor.peek().kind is not TokenType.LBRACE:
            members.append(self._parse_member(name))

        return IniSection(name, tuple(members))

    def _parse_member(self, section: str) -> IniMember:
        cursor = self._cursor
        context = f"member of section {section!r}"
        name = cursor.expect(TokenType.IDENTIFIER, context=context).text or ""
        if not name:
            raise StructuralError(f"empty member name in section {section!r}", cursor.position - 1)
        cursor.expect(TokenType.EQUALS, context=f"member {name!r}")
        return IniMember(name, self._parse_value(name))

    def _parse_value(self, name: str) -> IniValue:
        cursor = self._cursor
        context = f"value of {name!r}"
        token = cursor.expect(*_VALUE_STARTS, context=context)

        if token.kind is TokenType.NUMBER:
            return IniValue.number(token.value)  # type: ignore[arg-type]
        if token.kind is TokenType.IDENTIFIER and not token.text:
            # Bare value position held only a line end or comment
            raise StructuralError(f"missing value for {name!r}", cursor.position - 1)
        if token.kind in _DIRECT_VALUES:
            return IniValue.string(token.text or "")

        # Quoted value: opening quote, text, matching closing quote
        text = cursor.expect(TokenType.STRING, context=context).text or ""
        if cursor.at_end():
            raise StructuralError(f"unterminated quoted value for {name!r}", cursor.position)
        cursor.expect(token.kind, context=context)
        return IniValue.string(text)


def build_tree(tokens: Sequence[Token], strip_section_names: bool = False) -> IniParseResult:
    """Build a parse result from a complete token sequence."""
    builder = TreeBuilder(tokens, strip_section_names=strip_section_names)
    return IniParseResult(tuple(builder.build()))


__all__ = ["TokenCursor", "TreeBuilder", "build_tree"]
