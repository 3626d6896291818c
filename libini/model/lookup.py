"""Tagged lookup results for non-raising value access.

``Lookup`` carries either the found value or the reason it is missing,
so callers branch on ``status`` instead of catching exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from libini.model.values import Scalar, ValueKind
from libini.parsers.base import MemberNotFoundError, TypeMismatchError


class LookupStatus(Enum):
    """Outcome of a typed member lookup."""

    OK = "ok"
    TYPE_MISMATCH = "type_mismatch"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Lookup:
    """Result of a typed member lookup.

    Attributes:
        status: Outcome of the lookup.
        name: Member name that was requested.
        expected: Requested value kind.
        value: Payload when status is OK.
        actual: Kind actually held when status is TYPE_MISMATCH.
        section: Section the member was found in, or the section that was
            searched for a section-scoped NOT_FOUND.
    """

    status: LookupStatus
    name: str
    expected: ValueKind
    value: Optional[Scalar] = None
    actual: Optional[ValueKind] = None
    section: Optional[str] = None

    @classmethod
    def found(cls, name: str, expected: ValueKind, value: Scalar, section: Optional[str] = None) -> "Lookup":
        return cls(LookupStatus.OK, name, expected, value=value, actual=expected, section=section)

    @classmethod
    def mismatch(cls, name: str, expected: ValueKind, actual: ValueKind, section: Optional[str] = None) -> "Lookup":
        return cls(LookupStatus.TYPE_MISMATCH, name, expected, actual=actual, section=section)

    @classmethod
    def not_found(cls, name: str, expected: ValueKind, section: Optional[str] = None) -> "Lookup":
        return cls(LookupStatus.NOT_FOUND, name, expected, section=section)

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.OK

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> Scalar:
        """Return the value or raise the error matching the status.

        Raises:
            MemberNotFoundError: For NOT_FOUND.
            TypeMismatchError: For TYPE_MISMATCH.
        """
        if self.status is LookupStatus.NOT_FOUND:
            raise MemberNotFoundError(self.name, self.section)
        if self.status is LookupStatus.TYPE_MISMATCH:
            assert self.actual is not None
            raise TypeMismatchError(
                f"member {self.name!r} holds a {self.actual.value} value, "
                f"not {self.expected.value}"
            )
        assert self.value is not None
        return self.value

    def unwrap_or(self, default: Scalar) -> Scalar:
        """Return the value, or ``default`` for any non-OK status."""
        if self.ok:
            assert self.value is not None
            return self.value
        return default


__all__ = ["Lookup", "LookupStatus"]
