"""DTOs for search results (no dependency on ORM)."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class SearchResult:
    """Paginated result of one object type.

    results holds whatever the backing query returned for the current page.
    total is the number of matches before pagination.
    """

    name: str
    results: tuple[Any, ...] = ()
    page: int = 1
    limit: int | None = None
    pages: int = 1
    total: int = 0

    def __len__(self) -> int:
        return len(self.results)


@dataclass(frozen=True, init=False)
class SearchResults:
    """Search results of several object types, keyed by object name.

    Built once from a sequence of SearchResult. A name given twice keeps the
    later result, but both totals are added to total.
    """

    total: int
    _objects: Mapping[str, SearchResult] = field(repr=False)

    def __init__(self, results: Iterable[SearchResult] = ()) -> None:
        objects: dict[str, SearchResult] = {}
        total = 0
        for result in results:
            objects[result.name] = result
            total += result.total
        object.__setattr__(self, "total", total)
        object.__setattr__(self, "_objects", MappingProxyType(objects))

    @property
    def object_names(self) -> list[str]:
        return list(self._objects)

    @property
    def objects(self) -> Mapping[str, SearchResult]:
        """Read-only mapping of object name to SearchResult."""
        return self._objects

    def has_object(self, name: str) -> bool:
        return name in self._objects

    def get_object(self, name: str) -> SearchResult | None:
        return self._objects.get(name)

    def __iter__(self) -> Iterator[SearchResult]:
        return iter(self._objects.values())

    def __len__(self) -> int:
        return len(self._objects)
