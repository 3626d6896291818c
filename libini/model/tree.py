"""Parsed INI structure: members, sections and the parse result.

All classes are frozen dataclasses holding tuples, so a result can be
shared across threads and compared by value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

from libini.model.lookup import Lookup
from libini.model.values import IniValue, Scalar, ValueKind
from libini.parsers.base import MemberNotFoundError, SectionNotFoundError


@dataclass(frozen=True)
class IniMember:
    """A ``name = value`` leaf inside a section.

    Attributes:
        name: Member name.
        container: Typed value container.
    """

    name: str
    container: IniValue

    @property
    def kind(self) -> ValueKind:
        return self.container.kind

    @property
    def value(self) -> Scalar:
        return self.container.value

    def get_value(self, kind: Any) -> Scalar:
        """Return the payload if it is of the requested kind.

        Raises:
            TypeMismatchError: If the member holds the other kind.
        """
        return self.container.get(kind)


@dataclass(frozen=True)
class IniSection:
    """A ``[name]`` block and its members in document order.

    Attributes:
        name: Section name as written between the brackets.
        members: Member leaves in document order.
    """

    name: str
    members: Tuple[IniMember, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[IniMember]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_member(name)

    def __getitem__(self, name: str) -> IniMember:
        member = self.find(name)
        if member is None:
            raise MemberNotFoundError(name, self.name)
        return member

    def find(self, name: str) -> Optional[IniMember]:
        """Return the first member called ``name`` or None."""
        for member in self.members:
            if member.name == name:
                return member
        return None

    def has_member(self, name: str) -> bool:
        return self.find(name) is not None

    def get_value(self, name: str, kind: Any) -> Scalar:
        """Typed value of a member of this section.

        Raises:
            MemberNotFoundError: If the section has no such member.
            TypeMismatchError: If the member holds another kind.
        """
        return self[name].get_value(kind)

    def lookup(self, name: str, kind: Any) -> Lookup:
        """Non-raising form of ``get_value``."""
        expected = ValueKind.of(kind)
        member = self.find(name)
        if member is None:
            return Lookup.not_found(name, expected, section=self.name)
        if member.kind is not expected:
            return Lookup.mismatch(name, expected, member.kind, section=self.name)
        return Lookup.found(name, expected, member.value, section=self.name)

    def to_dict(self) -> Dict[str, Scalar]:
        """Members as a mapping; the first of duplicate names wins."""
        result: Dict[str, Scalar] = {}
        for member in self.members:
            result.setdefault(member.name, member.value)
        return result


@dataclass(frozen=True)
class IniParseResult:
    """Immutable outcome of one successful parse.

    Member lookups scan sections in document order and return the first
    match, so a name defined in several sections resolves to the earliest.

    Attributes:
        sections: Section nodes in document order.
    """

    sections: Tuple[IniSection, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[IniSection]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_member(name)

    def __getitem__(self, name: str) -> IniMember:
        """Return the first member called ``name`` across all sections.

        Raises:
            MemberNotFoundError: If no section has such a member.
        """
        for section in self.sections:
            member = section.find(name)
            if member is not None:
                return member
        raise MemberNotFoundError(name)

    def has_member(self, name: str) -> bool:
        return any(section.has_member(name) for section in self.sections)

    def has_section(self, name: str) -> bool:
        return any(section.name == name for section in self.sections)

    def section(self, name: str) -> IniSection:
        """Return the first section called ``name``.

        Raises:
            SectionNotFoundError: If there is no such section.
        """
        for section in self.sections:
            if section.name == name:
                return section
        raise SectionNotFoundError(name)

    def get_value(self, name: str, kind: Any) -> Scalar:
        """Typed value of the first member called ``name``.

        Raises:
            MemberNotFoundError: If no section has such a member.
            TypeMismatchError: If the member holds another kind.
        """
        return self[name].get_value(kind)

    def get_string(self, name: str) -> str:
        return str(self.get_value(name, ValueKind.STRING))

    def get_number(self, name: str) -> float:
        return float(self.get_value(name, ValueKind.NUMBER))

    def lookup(self, name: str, kind: Any) -> Lookup:
        """Non-raising form of ``get_value``."""
        expected = ValueKind.of(kind)
        for section in self.sections:
            member = section.find(name)
            if member is None:
                continue
            if member.kind is not expected:
                return Lookup.mismatch(name, expected, member.kind, section=section.name)
            return Lookup.found(name, expected, member.value, section=section.name)
        return Lookup.not_found(name, expected)

    def to_dict(self) -> Dict[str, Dict[str, Scalar]]:
        """Nested ``{section: {member: value}}`` mapping.

        Sections sharing a name are merged in document order; the first
        value seen for a member is kept.
        """
        result: Dict[str, Dict[str, Scalar]] = {}
        for section in self.sections:
            merged = result.setdefault(section.name, {})
            for name, value in section.to_dict().items():
                merged.setdefault(name, value)
        return result


__all__ = ["IniMember", "IniParseResult", "IniSection"]
