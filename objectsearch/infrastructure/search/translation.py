"""Locale-aware rewriting of queries over translatable object types.

A translatable model exposes a "translations" relationship to a model with
a "locale" column. The rewritten query outer-joins the translation row of
the request locale: translated fields are searched and sorted on the
translated value, falling back to the base column when the row or value is
missing. Only that locale's rows are eager-loaded for the returned items.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import func
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import aliased, selectinload, with_loader_criteria

from objectsearch.core.search_context import SearchRequestParams, get_search_params
from objectsearch.infrastructure.search.query import SqlAlchemySearchQuery

logger = logging.getLogger(__name__)

TRANSLATIONS_RELATIONSHIP = "translations"
HINT_LOCALE = "search.locale"


def translated_fields(translation_class: type) -> list[str]:
    """Return the value columns of a translation model (keys, foreign keys and locale excluded)."""
    fields = []
    for attr in sa_inspect(translation_class).column_attrs:
        column = attr.columns[0]
        if attr.key == "locale" or column.primary_key or column.foreign_keys:
            continue
        fields.append(attr.key)
    return fields


class LocaleQueryTranslator:
    """Implements IQueryTranslator for SQLAlchemy search queries.

    One translation row per (record, locale) is assumed.
    """

    def __init__(
        self,
        default_locale: str = "en",
        params_provider: Callable[[], SearchRequestParams] = get_search_params,
    ) -> None:
        self.default_locale = default_locale
        self.params_provider = params_provider

    def current_locale(self) -> str:
        return self.params_provider().locale or self.default_locale

    def translate(self, query: SqlAlchemySearchQuery) -> SqlAlchemySearchQuery:
        locale = self.current_locale()
        query.set_hint(HINT_LOCALE, locale)
        mapper = sa_inspect(query.metadata.backing_class)
        relationship = mapper.relationships.get(TRANSLATIONS_RELATIONSHIP)
        if relationship is None:
            logger.warning(
                "Object type %s is translatable but %s has no '%s' relationship",
                query.metadata.name,
                mapper.class_.__name__,
                TRANSLATIONS_RELATIONSHIP,
            )
            return query
        translation_class = relationship.mapper.class_
        translations: Any = getattr(query.entity, TRANSLATIONS_RELATIONSHIP)

        current = aliased(translation_class, name=f"{sa_inspect(query.entity).name}_tr")
        query.outerjoin(current, translations.of_type(current).and_(current.locale == locale))
        public = {f.field_path for f in query.metadata.public_fields()}
        for field_path in translated_fields(translation_class):
            if field_path in public:
                query.set_field_expression(
                    field_path,
                    func.coalesce(
                        getattr(current, field_path), getattr(query.entity, field_path)
                    ),
                )

        query.add_options(
            selectinload(translations),
            with_loader_criteria(translation_class, translation_class.locale == locale),
        )
        return query
