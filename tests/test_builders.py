"""Unit tests for template data builders (crudgen.codegen.builders)."""

from __future__ import annotations

import pytest

from crudgen.codegen.builders import (
    HandlerDataBuilder,
    ModelDataBuilder,
    RepositoryDataBuilder,
    ServiceDataBuilder,
    SnippetDataBuilder,
    TemplateDataBuilder,
    infer_scope,
    order_imports,
)
from crudgen.codegen.core.schema import FieldDefinition, GenerateOptions
from crudgen.codegen.languages.go.types import StatusFieldKind


class TestDerivedNames:
    @pytest.mark.unit
    def test_product_names(self, config, product_request):
        data = TemplateDataBuilder(config).build(product_request)
        assert data.table_name == "products"
        assert data.model_name_snake == "product"
        assert data.model_name_kebab == "product"
        assert data.create_request_name == "ProductCreateRequest"
        assert data.update_request_name == "ProductUpdateRequest"
        assert data.list_request_name == "ProductListRequest"
        assert data.response_name == "ProductResponse"
        assert data.handler_name == "ProductHandler"
        assert data.service_impl_name == "ProductServiceImpl"
        assert data.repository_impl_name == "productRepository"
        assert data.api_base_path == "/admin-api/product"
        assert data.display_name == "Product"

    @pytest.mark.unit
    def test_multi_word_model(self, config, make_request):
        data = TemplateDataBuilder(config).build(make_request(model_name="OrderCategory"))
        assert data.table_name == "order_categories"
        assert data.base_path == "/order-category"
        assert data.permission_prefix == "order_category"
        assert data.model_name_lower == "orderCategory"

    @pytest.mark.unit
    def test_explicit_table_name_wins(self, config, make_request):
        data = TemplateDataBuilder(config).build(make_request(table_name="shop_items"))
        assert data.table_name == "shop_items"


class TestFieldRenderData:
    @pytest.mark.unit
    def test_field_attributes(self, config):
        field = TemplateDataBuilder(config).build_field(
            FieldDefinition(name="Price", logical_type="decimal", comment="价格，单位元")
        )
        assert field.go_type == "float64"
        assert field.ts_type == "number"
        assert field.json_tag == "price"
        assert field.label == "价格"
        assert field.is_numeric and not field.is_integer

    @pytest.mark.unit
    def test_explicit_json_tag_and_sanitized_name(self, config):
        field = TemplateDataBuilder(config).build_field(
            FieldDefinition(name="type", logical_type="string", json_tag="kind")
        )
        assert field.name == "TypeField"
        assert field.json_tag == "kind"

    @pytest.mark.unit
    def test_status_detection(self, config, article_request):
        data = TemplateDataBuilder(config).build(article_request)
        assert data.has_status_field
        assert data.status_field.name == "Status"
        assert data.status_field.status_kind is StatusFieldKind.INT
        assert data.has_time_field
        assert data.has_validation


class TestImports:
    @pytest.mark.unit
    def test_model_without_time_field(self, config, product_request):
        data = ModelDataBuilder(config).build(product_request)
        assert data.imports == ["bico-admin/internal/shared/types"]

    @pytest.mark.unit
    def test_model_with_time_field(self, config, article_request):
        data = ModelDataBuilder(config).build(article_request)
        assert data.imports[0] == "time"

    @pytest.mark.unit
    def test_scope_drives_layer_imports(self, config, make_request):
        data = ServiceDataBuilder(config).build(make_request(package_path="internal/master"))
        assert "bico-admin/internal/master/repository" in data.imports
        repo = RepositoryDataBuilder(config).build(make_request())
        assert repo.package_name == "repository"

    @pytest.mark.unit
    def test_optimized_imports_put_stdlib_first(self, config, make_request):
        request = make_request(options=GenerateOptions(optimize_imports=True))
        data = HandlerDataBuilder(config).build(request)
        assert data.imports[0] == "strconv"
        assert data.imports[1:] == sorted(data.imports[1:])

    @pytest.mark.unit
    def test_handler_types_imports(self, config, product_request):
        context = HandlerDataBuilder(config).build_context(product_request)
        assert context["types_imports"] == ["time", "bico-admin/internal/shared/models"]

    @pytest.mark.unit
    def test_order_imports(self):
        assert order_imports(["b", "time", "b", ""], optimize=False) == ["b", "time"]
        assert order_imports(["z/pkg", "time", "context"], optimize=True) == ["context", "time", "z/pkg"]


class TestScope:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "package_path, scope",
        [("internal/admin", "admin"), ("internal/master/x", "master"), ("", "shared"), ("pkg/api", "shared")],
    )
    def test_infer_scope(self, package_path, scope):
        assert infer_scope(package_path) == scope


class TestSnippetContext:
    @pytest.mark.unit
    def test_search_fields(self, config, article_request):
        context = SnippetDataBuilder(config).build_context(article_request)
        names = [f.name for f in context["search_fields"]]
        assert names == ["Title", "Content", "Status"]
        assert context["plural_snake"] == "articles"
