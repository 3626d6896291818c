"""Character classifiers shared by the lexer stages.

Every classifier is a total predicate over a single character. Larger
predicates are built with ``make_predicate`` and ``compose``.
"""

from __future__ import annotations

import operator
from typing import Callable

Predicate = Callable[[str], bool]
ComposerOp = Callable[[bool, bool], bool]


def compose(p: Predicate, q: Predicate, op: ComposerOp = operator.or_) -> Predicate:
    """Combine two predicates with a binary boolean operator.

    Args:
        p: First predicate.
        q: Second predicate.
        op: Operator applied to both results. Defaults to logical OR.

    Returns:
        Predicate evaluating ``op(p(c), q(c))``.
    """

    def composed(c: str) -> bool:
        return bool(op(p(c), q(c)))

    return composed


def negate(p: Predicate) -> Predicate:
    """Return the complement of a predicate."""

    def negated(c: str) -> bool:
        return not p(c)

    return negated


def make_predicate(*chars: str) -> Predicate:
    """Build a predicate matching any of the given literal characters.

    Args:
        *chars: One or more single characters.

    Returns:
        Predicate that is true for exactly those characters.

    Raises:
        ValueError: If no characters are given or one is not a single char.
    """
    if not chars:
        raise ValueError("make_predicate requires at least one character")
    for ch in chars:
        if len(ch) != 1:
            raise ValueError(f"Expected a single character, got {ch!r}")

    accepted = frozenset(chars)

    def matches(c: str) -> bool:
        return c in accepted

    return matches


def never(c: str) -> bool:
    """Predicate that never matches."""
    return False


def is_numeric(c: str) -> bool:
    """Check if c is an ASCII digit between 0 and 9."""
    return len(c) == 1 and "0" <= c <= "9"


is_whitespace = make_predicate(" ", "\t")

is_eol = make_predicate("\n", "\r")

is_comment = make_predicate("#")

is_whitespace_or_eol = compose(is_eol, is_whitespace)


__all__ = [
    "ComposerOp",
    "Predicate",
    "compose",
    "is_comment",
    "is_eol",
    "is_numeric",
    "is_whitespace",
    "is_whitespace_or_eol",
    "make_predicate",
    "negate",
    "never",
]
