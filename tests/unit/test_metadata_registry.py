"""Tests for MetadataRegistry and metadata built from SQLAlchemy models."""

import pytest

from objectsearch.domain.entities import ObjectTypeMetadata, PermissionConfig
from objectsearch.domain.enums import MetadataContext
from objectsearch.infrastructure.metadata import (
    MetadataRegistry,
    PermissionConfigRegistry,
    metadata_from_model,
)
from objectsearch.infrastructure.metadata.registry import import_model
from tests.models import Customer, Invoice, InvoiceLine, Product, ProductTranslation, Report


def test_metadata_from_model_reads_column_info() -> None:
    metadata = metadata_from_model(Invoice)

    assert metadata.name == "invoice"
    assert metadata.backing_class is Invoice
    assert [f.field_path for f in metadata.searchable_fields()] == ["number"]
    public = [f.field_path for f in metadata.public_fields()]
    assert "internal_ref" not in public
    assert {"id", "number", "notes", "status"} <= set(public)
    assert metadata.available_contexts == frozenset({MetadataContext.USER})


def test_metadata_from_model_reads_class_options() -> None:
    assert metadata_from_model(Report).available_contexts == frozenset(
        {MetadataContext.ORGANIZATION}
    )
    assert metadata_from_model(Customer).is_available_in(MetadataContext.USER)
    assert metadata_from_model(Product).translatable


def test_default_name_is_snake_case_class_name() -> None:
    assert metadata_from_model(ProductTranslation).name == "product_translation"


def test_registry_lookups() -> None:
    registry = MetadataRegistry.from_models([Invoice, Customer])

    assert len(registry) == 2
    assert "invoice" in registry
    assert registry.get(Customer).name == "customer"
    assert registry.get_by_name("invoice").backing_class is Invoice
    assert registry.get_by_name("ghost") is None
    assert [m.name for m in registry.all()] == ["invoice", "customer"]
    with pytest.raises(KeyError):
        registry.get(Report)


def test_registry_rejects_duplicates() -> None:
    registry = MetadataRegistry.from_models([Invoice])

    with pytest.raises(ValueError, match="already registered"):
        registry.register(ObjectTypeMetadata(name="invoice", backing_class=Customer))
    with pytest.raises(ValueError, match="already registered"):
        registry.register(ObjectTypeMetadata(name="other", backing_class=Invoice))


def test_from_paths_imports_models() -> None:
    registry = MetadataRegistry.from_paths(["tests.models:Invoice"])

    assert registry.get(Invoice).name == "invoice"


def test_import_model_rejects_malformed_path() -> None:
    with pytest.raises(ValueError, match="package.module:Model"):
        import_model("tests.models.Invoice")


def test_permission_config_registry() -> None:
    configs = PermissionConfigRegistry([PermissionConfig(InvoiceLine, master=Invoice)])

    assert configs.has_config(InvoiceLine)
    assert configs.get_config(InvoiceLine).master is Invoice
    assert not configs.has_config(Invoice)
