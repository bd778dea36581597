"""Predicate tree consumed by member stores.

A tree is a single :class:`Conjunction` of :class:`FieldPredicate` leaves. Every
node is a frozen dataclass, so two trees built from the same input compare equal
and can be hashed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Tuple

# Operators a store must understand
EQ = 'eq'
NE = 'ne'
IN = 'in'
NOT_IN = 'not_in'
ILIKE = 'ilike'

LIKE_ESCAPE = '\\'


def escape_like(term: str, escape: str = LIKE_ESCAPE) -> str:
    """Escape LIKE wildcards so that ``term`` only matches itself."""
    return (
        term.replace(escape, escape + escape)
        .replace('%', escape + '%')
        .replace('_', escape + '_')
    )


@dataclass(frozen=True)
class MatchPattern:
    """Case-insensitive substring pattern.

    ``anchored`` pins the term to the start of the value; otherwise it may occur
    anywhere. The term is literal text: wildcard characters in it are escaped
    when the pattern is rendered.
    """

    term: str
    anchored: bool = False

    @classmethod
    def anchor(cls, term: str) -> 'MatchPattern':
        return cls(term=term, anchored=True)

    def to_like(self, escape: str = LIKE_ESCAPE) -> str:
        body = escape_like(self.term, escape) + '%'
        return body if self.anchored else '%' + body


@dataclass(frozen=True)
class FieldPredicate:
    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class Conjunction:
    predicates: Tuple[FieldPredicate, ...] = ()

    def __iter__(self) -> Iterator[FieldPredicate]:
        return iter(self.predicates)

    def __len__(self) -> int:
        return len(self.predicates)
