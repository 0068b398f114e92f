"""Metadata registry: object type metadata built from SQLAlchemy models.

Models opt in with a class attribute and per-column info::

    class Invoice(Base):
        __tablename__ = "invoice"
        __search_metadata__ = {"name": "invoice", "contexts": ["user", "organization"]}

        number: Mapped[str] = mapped_column(info={"searchable": True})
        notes: Mapped[str] = mapped_column(info={"public": False})

Recognized class keys: name, public, searchable, contexts, translatable.
Recognized column info keys: public (default True), searchable (default False).
"""

from __future__ import annotations

import importlib
import re
from collections.abc import Iterable
from typing import Any

from sqlalchemy import inspect as sa_inspect

from objectsearch.domain.entities import FieldMetadata, ObjectTypeMetadata
from objectsearch.domain.enums import MetadataContext

SEARCH_METADATA_ATTR = "__search_metadata__"

_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY_RE.sub("_", name).lower()


def metadata_from_model(model: type) -> ObjectTypeMetadata:
    """Build ObjectTypeMetadata from a mapped class and its column info."""
    config: dict[str, Any] = dict(getattr(model, SEARCH_METADATA_ATTR, {}))
    mapper = sa_inspect(model)
    fields = []
    for attr in mapper.column_attrs:
        info: dict[str, Any] = {}
        for column in attr.columns:
            info.update(getattr(column, "info", {}))
        fields.append(
            FieldMetadata(
                field_path=attr.key,
                public=bool(info.get("public", True)),
                searchable=bool(info.get("searchable", False)),
            )
        )
    contexts = config.get("contexts", [MetadataContext.USER])
    return ObjectTypeMetadata(
        name=config.get("name", _snake_case(model.__name__)),
        backing_class=model,
        public=bool(config.get("public", True)),
        searchable=bool(config.get("searchable", True)),
        available_contexts=frozenset(MetadataContext(c) for c in contexts),
        fields=tuple(fields),
        translatable=bool(config.get("translatable", False)),
    )


def import_model(path: str) -> type:
    """Import a model from "package.module:ClassName"."""
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Model path must look like 'package.module:Model', got: {path!r}")
    return getattr(importlib.import_module(module_name), attr)


class MetadataRegistry:
    """In-memory catalog of object type metadata (implements IMetadataCatalog).

    Registration order is kept; it is the order in which object types are
    searched.
    """

    def __init__(self, metadata: Iterable[ObjectTypeMetadata] = ()) -> None:
        self._by_name: dict[str, ObjectTypeMetadata] = {}
        self._by_class: dict[type, ObjectTypeMetadata] = {}
        for item in metadata:
            self.register(item)

    @classmethod
    def from_models(cls, models: Iterable[type]) -> MetadataRegistry:
        registry = cls()
        for model in models:
            registry.register_model(model)
        return registry

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> MetadataRegistry:
        """Build a registry from "package.module:Model" import paths (settings.search_models)."""
        return cls.from_models(import_model(path) for path in paths)

    def register(self, metadata: ObjectTypeMetadata) -> ObjectTypeMetadata:
        """Add metadata. Raises ValueError when its name or class is already registered."""
        if metadata.name in self._by_name:
            raise ValueError(f"Object type already registered: {metadata.name}")
        if metadata.backing_class in self._by_class:
            raise ValueError(
                f"Class already registered: {metadata.backing_class.__name__}"
            )
        self._by_name[metadata.name] = metadata
        self._by_class[metadata.backing_class] = metadata
        return metadata

    def register_model(self, model: type) -> ObjectTypeMetadata:
        return self.register(metadata_from_model(model))

    def all(self) -> list[ObjectTypeMetadata]:
        return list(self._by_name.values())

    def get(self, backing_class: type) -> ObjectTypeMetadata:
        """Return metadata of backing_class. Raises KeyError when not registered."""
        return self._by_class[backing_class]

    def get_by_name(self, name: str) -> ObjectTypeMetadata | None:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)
