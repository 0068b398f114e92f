"""Domain value objects."""

from objectsearch.domain.value_objects.predicate import AllOf, AnyOf, Contains

__all__ = [
    "AllOf",
    "AnyOf",
    "Contains",
]
