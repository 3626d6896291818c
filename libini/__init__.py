"""libini - typed INI configuration parser.

Reads ``[section]`` / ``key = value`` documents with quoted or bare
strings, numbers and ``#`` comments, and exposes them as an immutable,
queryable structure.
"""

from libini.config import ParserConfig, load_parser_config
from libini.model import (
    IniMember,
    IniParseResult,
    IniSection,
    IniValue,
    Lookup,
    LookupStatus,
    ValueKind,
)
from libini.parsers.base import (
    IniError,
    IniSourceError,
    MemberNotFoundError,
    SectionNotFoundError,
    StructuralError,
    TypeMismatchError,
    UnexpectedTokenError,
)
from libini.parsers.parser import IniParser, parse_file, parse_string
from libini.parsers.tokens import Token, TokenType

__version__ = "0.1.0"

__all__ = [
    "IniError",
    "IniMember",
    "IniParseResult",
    "IniParser",
    "IniSection",
    "IniSourceError",
    "IniValue",
    "Lookup",
    "LookupStatus",
    "MemberNotFoundError",
    "ParserConfig",
    "SectionNotFoundError",
    "StructuralError",
    "Token",
    "TokenType",
    "TypeMismatchError",
    "UnexpectedTokenError",
    "ValueKind",
    "load_parser_config",
    "parse_file",
    "parse_string",
]
