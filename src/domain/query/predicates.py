"""
Store-independent filter predicates.

A query is a list of predicates joined by logical AND. Each predicate names a
Property field by its domain attribute name; the infrastructure layer compiles
them into store-native clauses.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Union


@dataclass(frozen=True)
class SubstringMatch:
    """Case-insensitive, unanchored substring match."""

    field: str
    value: str


@dataclass(frozen=True)
class RangeMatch:
    """Inclusive range; either bound may be open."""

    field: str
    lower: Decimal | None = None
    upper: Decimal | None = None


@dataclass(frozen=True)
class Equals:
    field: str
    value: object


Predicate = Union[SubstringMatch, RangeMatch, Equals]
