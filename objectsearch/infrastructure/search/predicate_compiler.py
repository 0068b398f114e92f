"""Compiles search predicates into SQLAlchemy criteria.

Each Contains term becomes
    unaccent(lower(field)) LIKE unaccent(lower(:pattern)) ESCAPE '\\'
with LIKE wildcards in the word escaped, so words match literally.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import String, and_, cast, false, func, literal, or_
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.sql.elements import ColumnElement

from objectsearch.domain.value_objects import AnyOf, Contains

LIKE_ESCAPE = "\\"


def escape_like(word: str) -> str:
    """Escape LIKE wildcards (% and _) and the escape character itself."""
    return (
        word.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def resolve_column(entity: Any, field_path: str) -> Any | None:
    """Return the column attribute field_path of a mapped (or aliased) entity, or None."""
    mapper = sa_inspect(entity).mapper
    if field_path not in mapper.column_attrs:
        return None
    return getattr(entity, field_path)


class SqlAlchemyPredicateCompiler:
    """Turns AnyOf/AllOf/Contains trees into SQLAlchemy boolean clauses.

    unaccent_function names the SQL function stripping diacritics
    (PostgreSQL "unaccent" extension by default); an empty name folds case
    only.
    """

    def __init__(self, unaccent_function: str = "unaccent") -> None:
        self.unaccent_function = unaccent_function

    def fold(self, expr: Any) -> ColumnElement[Any]:
        """Lower-case expr and strip its diacritics."""
        folded = func.lower(expr)
        if self.unaccent_function:
            folded = getattr(func, self.unaccent_function)(folded)
        return folded

    def compile(
        self,
        predicate: AnyOf,
        entity: Any,
        fields: Mapping[str, Any] | None = None,
    ) -> ColumnElement[bool]:
        """Return the WHERE clause for predicate over entity. An empty AnyOf compiles to FALSE.

        fields maps field paths to expressions used instead of the entity's
        columns (e.g. a translated value with the base column as fallback).
        """
        if predicate.matches_nothing:
            return false()
        return or_(
            *(
                and_(*(self._contains(entity, term, fields) for term in clause.terms))
                for clause in predicate.clauses
            )
        )

    def _contains(
        self, entity: Any, term: Contains, fields: Mapping[str, Any] | None
    ) -> ColumnElement[bool]:
        if fields and term.field_path in fields:
            column = fields[term.field_path]
        else:
            column = resolve_column(entity, term.field_path)
        if column is None:
            raise ValueError(
                f"Searchable field '{term.field_path}' is not a mapped column of "
                f"{sa_inspect(entity).mapper.class_.__name__}"
            )
        value = column if isinstance(column.expression.type, String) else cast(column, String)
        pattern = literal(f"%{escape_like(term.word)}%", String)
        return self.fold(value).like(self.fold(pattern), escape=LIKE_ESCAPE)
