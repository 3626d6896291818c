"""Exception hierarchy for the INI parser.

The tokenizer never raises for malformed content; every error below is
raised by the tree builder, the result accessors or the source opener.
"""

from __future__ import annotations

from typing import Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from libini.parsers.tokens import Token, TokenType


# =============================================================================
# Custom Exception Hierarchy
# =============================================================================

class IniError(Exception):
    """Base class for all errors raised by libini."""
    pass


class IniSourceError(IniError):
    """The named input source could not be opened or decoded.

    Raised with the underlying OSError/UnicodeDecodeError chained as cause.
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"cannot read INI source {source!r}: {reason}")


class StructuralError(IniError):
    """Token sequence does not follow the section/member grammar.

    Attributes:
        position: Index of the offending token, or None when unknown.
    """

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        self.position = position
        if position is not None:
            message = f"{message} (at token {position})"
        super().__init__(message)


class TypeMismatchError(IniError, TypeError):
    """A token or value container was accessed as the wrong variant."""
    pass


class UnexpectedTokenError(StructuralError, TypeMismatchError):
    """Tree builder found a token of the wrong kind.

    Attributes:
        expected: Kinds that would have been accepted.
        actual: The token that was found.
    """

    def __init__(
        self,
        expected: Iterable["TokenType"],
        actual: "Token",
        position: int,
        context: str = "",
    ) -> None:
        self.expected = tuple(expected)
        self.actual = actual
        names = " or ".join(kind.name for kind in self.expected)
        where = f" while parsing {context}" if context else ""
        super().__init__(f"expected {names}{where}, found {actual!r}", position)


class MemberNotFoundError(IniError, LookupError):
    """Requested member name does not exist.

    Attributes:
        name: The member name that was looked up.
    """

    def __init__(self, name: str, section: Optional[str] = None) -> None:
        self.name = name
        self.section = section
        if section is None:
            message = f"member {name!r} not found"
        else:
            message = f"member {name!r} not found in section {section!r}"
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])


class SectionNotFoundError(IniError, LookupError):
    """Requested section name does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"section {name!r} not found")

    def __str__(self) -> str:
        return str(self.args[0])


__all__ = [
    "IniError",
    "IniSourceError",
    "MemberNotFoundError",
    "SectionNotFoundError",
    "StructuralError",
    "TypeMismatchError",
    "UnexpectedTokenError",
]
