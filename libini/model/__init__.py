"""Parsed INI structure and its query API."""

from .lookup import Lookup, LookupStatus
from .tree import IniMember, IniParseResult, IniSection
from .values import IniValue, Scalar, ValueKind

__all__ = [
    "IniMember",
    "IniParseResult",
    "IniSection",
    "IniValue",
    "Lookup",
    "LookupStatus",
    "Scalar",
    "ValueKind",
]
