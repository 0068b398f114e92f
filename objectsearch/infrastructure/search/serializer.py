"""Serializes search result items to JSON-ready dicts (public fields only)."""

from __future__ import annotations

from typing import Any

from fastapi.encoders import jsonable_encoder

from objectsearch.domain.entities import ObjectTypeMetadata
from objectsearch.infrastructure.search.translation import TRANSLATIONS_RELATIONSHIP


def serialize_item(metadata: ObjectTypeMetadata, item: Any) -> dict[str, Any]:
    """Return the public field values of item.

    For translatable types, loaded translation values override the base
    values of the same fields.
    """
    fields = metadata.public_fields()
    data = {f.field_path: getattr(item, f.field_path, None) for f in fields}
    if metadata.translatable:
        for translation in item.__dict__.get(TRANSLATIONS_RELATIONSHIP) or ():
            for f in fields:
                value = getattr(translation, f.field_path, None)
                if value is not None:
                    data[f.field_path] = value
    return jsonable_encoder(data)
