"""SQLAlchemy search query (implements ISearchQuery and ISearchQueryFactory).

A query selects an aliased entity of the object type's backing class; the
alias is derived from the object name. Search predicates and ordering are
rendered only when the query runs, so a later rewrite (e.g. translation)
still applies to them.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from objectsearch.domain.entities import ObjectTypeMetadata
from objectsearch.domain.value_objects import AnyOf
from objectsearch.infrastructure.search.predicate_compiler import (
    SqlAlchemyPredicateCompiler,
    resolve_column,
)

_ALIAS_INVALID_RE = re.compile(r"[^a-z0-9_]")


def get_alias(object_name: str) -> str:
    """Return a SQL-safe alias for an object name (e.g. "sales-order" -> "sales_order")."""
    alias = _ALIAS_INVALID_RE.sub("_", object_name.lower()) or "o"
    return alias if not alias[0].isdigit() else f"o_{alias}"


class SqlAlchemySearchQuery:
    """Select over one object type, with paging state and hints."""

    def __init__(
        self,
        session: AsyncSession,
        metadata: ObjectTypeMetadata,
        compiler: SqlAlchemyPredicateCompiler,
    ) -> None:
        self.session = session
        self.metadata = metadata
        self.compiler = compiler
        self.entity: Any = aliased(
            metadata.backing_class, name=get_alias(metadata.name)
        )
        self.statement: Select[Any] = select(self.entity)
        self.max_results: int | None = None
        self.first_result = 0
        self._predicates: list[AnyOf] = []
        self._ordering: list[tuple[str, bool]] = []
        self._field_expressions: dict[str, Any] = {}
        self._options: list[Any] = []
        self._hints: dict[str, Any] = {}
        self._public_fields = frozenset(f.field_path for f in metadata.public_fields())

    def add_predicate(self, predicate: AnyOf) -> None:
        self._predicates.append(predicate)

    def where(self, *criteria: Any) -> None:
        self.statement = self.statement.where(*criteria)

    def outerjoin(self, target: Any, onclause: Any) -> None:
        self.statement = self.statement.outerjoin(target, onclause)

    def order_by_field(self, field_path: str, descending: bool = False) -> bool:
        """Order by a public field; return False (and do nothing) when it is unknown or private."""
        if self.public_column(field_path) is None:
            return False
        self._ordering.append((field_path, descending))
        return True

    def set_field_expression(self, field_path: str, expression: Any) -> None:
        """Search and sort field_path on expression instead of its column."""
        self._field_expressions[field_path] = expression

    def field_expression(self, field_path: str) -> Any | None:
        if field_path in self._field_expressions:
            return self._field_expressions[field_path]
        return resolve_column(self.entity, field_path)

    def add_options(self, *options: Any) -> None:
        """Add loader options; they apply to the page fetch only, not to the count."""
        self._options.extend(options)

    def public_column(self, field_path: str) -> Any | None:
        """Return the column of a public field, or None when unknown or not public."""
        if field_path not in self._public_fields:
            return None
        return resolve_column(self.entity, field_path)

    def get_hint(self, name: str, default: Any = None) -> Any:
        return self._hints.get(name, default)

    def set_hint(self, name: str, value: Any) -> None:
        self._hints[name] = value

    def select_statement(self, ordered: bool = True) -> Select[Any]:
        """Render the statement: criteria, search predicates and (optionally) ordering."""
        stmt = self.statement
        for predicate in self._predicates:
            stmt = stmt.where(
                self.compiler.compile(predicate, self.entity, self._field_expressions)
            )
        if ordered:
            clauses = []
            for field_path, descending in self._ordering:
                expression = self.field_expression(field_path)
                clauses.append(expression.desc() if descending else expression.asc())
            stmt = stmt.order_by(*(clauses or self._primary_key_columns()))
        return stmt

    async def count(self) -> int:
        """Count matching rows (ordering and paging ignored)."""
        subquery = self.select_statement(ordered=False).subquery()
        result = await self.session.execute(select(func.count()).select_from(subquery))
        return int(result.scalar_one())

    async def fetch_page(self) -> Sequence[Any]:
        """Load the rows of the current page.

        Without an explicit order, rows are ordered by primary key so pages
        are stable.
        """
        stmt = self.select_statement()
        if self._options:
            stmt = stmt.options(*self._options)
        if self.first_result:
            stmt = stmt.offset(self.first_result)
        if self.max_results is not None:
            stmt = stmt.limit(self.max_results)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    def _primary_key_columns(self) -> list[Any]:
        mapper = sa_inspect(self.entity).mapper
        return [
            getattr(self.entity, mapper.get_property_by_column(column).key)
            for column in mapper.primary_key
        ]


class SqlAlchemySearchQueryFactory:
    """Opens SqlAlchemySearchQuery objects on one session."""

    def __init__(
        self,
        session: AsyncSession,
        compiler: SqlAlchemyPredicateCompiler | None = None,
    ) -> None:
        self.session = session
        self.compiler = compiler or SqlAlchemyPredicateCompiler()

    def create_query(self, metadata: ObjectTypeMetadata) -> SqlAlchemySearchQuery:
        return SqlAlchemySearchQuery(self.session, metadata, self.compiler)
