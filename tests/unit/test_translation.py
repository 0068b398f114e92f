"""Tests for LocaleQueryTranslator query rewriting (PostgreSQL dialect)."""

from sqlalchemy.dialects import postgresql

from objectsearch.application.services.predicate_builder import build_search_predicate
from objectsearch.core.search_context import SearchRequestParams
from objectsearch.infrastructure.metadata import metadata_from_model
from objectsearch.infrastructure.search import (
    LocaleQueryTranslator,
    SqlAlchemyPredicateCompiler,
    SqlAlchemySearchQuery,
)
from objectsearch.infrastructure.search.translation import HINT_LOCALE, translated_fields
from tests.models import Invoice, Product, ProductTranslation


def _query(model: type) -> SqlAlchemySearchQuery:
    # Statement building only; the session is never used.
    return SqlAlchemySearchQuery(None, metadata_from_model(model), SqlAlchemyPredicateCompiler())  # type: ignore[arg-type]


def _translate(query: SqlAlchemySearchQuery, locale: str | None) -> str:
    params = SearchRequestParams(locale=locale)
    LocaleQueryTranslator("en", params_provider=lambda: params).translate(query)
    return str(query.select_statement().compile(dialect=postgresql.dialect()))


def test_translated_fields_exclude_keys_and_locale() -> None:
    assert translated_fields(ProductTranslation) == ["label"]


def test_search_matches_translated_value_with_base_fallback() -> None:
    query = _query(Product)
    query.add_predicate(build_search_predicate(query.metadata, ["bidule"]))

    sql = _translate(query, "fr")

    assert "LEFT OUTER JOIN product_translation AS product_tr" in sql
    assert "product_tr.locale = " in sql
    assert "lower(coalesce(product_tr.label, product.label))" in sql
    assert query.get_hint(HINT_LOCALE) == "fr"


def test_sort_uses_translated_value() -> None:
    query = _query(Product)
    query.order_by_field("label", descending=True)

    sql = _translate(query, "fr")

    assert "ORDER BY coalesce(product_tr.label, product.label) DESC" in sql


def test_default_locale_is_used_without_request_locale() -> None:
    query = _query(Product)

    _translate(query, None)

    assert query.get_hint(HINT_LOCALE) == "en"


def test_model_without_translations_is_left_unchanged() -> None:
    query = _query(Invoice)

    sql = _translate(query, "fr")

    assert "JOIN" not in sql
