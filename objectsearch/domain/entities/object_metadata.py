"""Object type metadata entities.

Describe which object types exist, which of their fields may be searched,
and how their permissions are configured. Immutable once the catalog is
loaded.
"""

from dataclasses import dataclass, field

from objectsearch.domain.enums import MetadataContext


@dataclass(frozen=True)
class FieldMetadata:
    """One field of an object type.

    field_path is the mapped attribute name on the backing class.
    """

    field_path: str
    public: bool = True
    searchable: bool = False

    @property
    def is_search_target(self) -> bool:
        """Return True when the field takes part in keyword search."""
        return self.public and self.searchable


@dataclass(frozen=True)
class ObjectTypeMetadata:
    """Searchable entity kind backed by a queryable class.

    Capabilities (public, searchable, translatable) are explicit flags;
    nothing is inferred from the backing class at search time.
    """

    name: str
    backing_class: type
    public: bool = True
    searchable: bool = True
    available_contexts: frozenset[MetadataContext] = field(
        default_factory=lambda: frozenset({MetadataContext.USER})
    )
    fields: tuple[FieldMetadata, ...] = ()
    translatable: bool = False

    def searchable_fields(self) -> tuple[FieldMetadata, ...]:
        """Return public and searchable fields, in declaration order."""
        return tuple(f for f in self.fields if f.is_search_target)

    def public_fields(self) -> tuple[FieldMetadata, ...]:
        return tuple(f for f in self.fields if f.public)

    def is_available_in(self, context: MetadataContext) -> bool:
        return context in self.available_contexts


@dataclass(frozen=True)
class PermissionConfig:
    """Permission configuration of a backing class.

    A master marks the class as a sub-resource of another class; such
    classes are never searched on their own.
    """

    backing_class: type
    master: type | None = None
