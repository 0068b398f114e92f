"""Turns a free-text query into a search predicate over one object type."""

from __future__ import annotations

from collections.abc import Sequence

from objectsearch.domain.entities import ObjectTypeMetadata
from objectsearch.domain.value_objects import AllOf, AnyOf, Contains


def tokenize(query: str) -> list[str]:
    """Split a raw query on single spaces into trimmed, non-empty words.

    An empty or all-whitespace query yields no words.
    """
    if not query:
        return []
    words = (word.strip() for word in query.split(" "))
    return [word for word in words if word]


def build_search_predicate(
    metadata: ObjectTypeMetadata, words: Sequence[str]
) -> AnyOf:
    """Build the predicate matching records where some searchable field contains every word.

    Only public and searchable fields are considered. A type without such
    fields yields an empty AnyOf, which matches nothing.
    """
    clauses = tuple(
        AllOf(tuple(Contains(field.field_path, word) for word in words))
        for field in metadata.searchable_fields()
    )
    return AnyOf(clauses)
