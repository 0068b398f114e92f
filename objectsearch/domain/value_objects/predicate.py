"""Storage-neutral search predicate.

A predicate is a small tree: AnyOf (fields, OR) of AllOf (words, AND) of
Contains (case and diacritic insensitive substring test on one field).
Storage adapters compile the tree into their own query language.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Contains:
    """The value of field_path contains word (case and diacritic insensitive)."""

    field_path: str
    word: str


@dataclass(frozen=True)
class AllOf:
    """Every term must hold. Used per field, one term per word."""

    terms: tuple[Contains, ...]


@dataclass(frozen=True)
class AnyOf:
    """At least one clause must hold. An empty AnyOf matches nothing."""

    clauses: tuple[AllOf, ...]

    @property
    def matches_nothing(self) -> bool:
        return not self.clauses

    def field_paths(self) -> tuple[str, ...]:
        """Return the field of each clause, in clause order."""
        return tuple(c.terms[0].field_path for c in self.clauses if c.terms)
