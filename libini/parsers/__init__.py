"""Tokenizer, tree builder and parser facade.

Only the leaf modules are re-exported here; the builder and parser depend
on ``libini.model`` and are imported from their own modules.
"""

from libini.parsers.base import (
    IniError,
    IniSourceError,
    MemberNotFoundError,
    SectionNotFoundError,
    StructuralError,
    TypeMismatchError,
    UnexpectedTokenError,
)
from libini.parsers.tokens import Token, TokenType

__all__ = [
    "IniError",
    "IniSourceError",
    "MemberNotFoundError",
    "SectionNotFoundError",
    "StructuralError",
    "Token",
    "TokenType",
    "TypeMismatchError",
    "UnexpectedTokenError",
]
