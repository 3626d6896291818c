"""Value containers for parsed INI members."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from libini.parsers.base import TypeMismatchError

Scalar = Union[str, float]


class ValueKind(Enum):
    """Concrete value kinds a member can hold."""

    STRING = "string"
    NUMBER = "number"

    @classmethod
    def of(cls, kind: Any) -> "ValueKind":
        """Normalize a kind description.

        Accepts a ValueKind, its name or value ("string", "NUMBER"), or the
        Python types ``str``, ``float`` and ``int``.

        Raises:
            ValueError: If the description names no known kind.
        """
        if isinstance(kind, cls):
            return kind
        if kind is str:
            return cls.STRING
        if kind in (float, int):
            return cls.NUMBER
        if isinstance(kind, str):
            try:
                return cls(kind.lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown value kind: {kind!r}")

    @classmethod
    def of_value(cls, value: Any) -> "ValueKind":
        """Kind of a concrete Python value."""
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cls.NUMBER
        raise TypeMismatchError(f"INI values must be str or float, got {type(value).__name__}")


@dataclass(frozen=True)
class IniValue:
    """Typed wrapper holding exactly one string or number.

    Attributes:
        kind: Which variant the container holds.
        value: The payload; a float for NUMBER, a str for STRING.
    """

    kind: ValueKind
    value: Scalar

    def __post_init__(self) -> None:
        actual = ValueKind.of_value(self.value)
        if actual is not self.kind:
            raise TypeMismatchError(
                f"{self.kind.value} container cannot hold a {actual.value} payload"
            )
        if self.kind is ValueKind.NUMBER and not isinstance(self.value, float):
            object.__setattr__(self, "value", float(self.value))

    @classmethod
    def string(cls, text: str) -> "IniValue":
        return cls(ValueKind.STRING, text)

    @classmethod
    def number(cls, value: float) -> "IniValue":
        return cls(ValueKind.NUMBER, float(value))

    def is_kind(self, kind: Any) -> bool:
        return self.kind is ValueKind.of(kind)

    def get(self, kind: Any) -> Scalar:
        """Return the payload if it is of the requested kind.

        Raises:
            TypeMismatchError: If the container holds the other variant.
        """
        requested = ValueKind.of(kind)
        if requested is not self.kind:
            raise TypeMismatchError(
                f"requested {requested.value} value but container holds {self.kind.value}"
            )
        return self.value


__all__ = ["IniValue", "Scalar", "ValueKind"]
