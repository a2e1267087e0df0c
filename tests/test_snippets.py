"""Unit tests for snippet generators (backend and frontend).

Snippets never touch the file system; tests check ids, targets, anchors
and the rendered fragments.
"""

from __future__ import annotations

import pytest

from crudgen.codegen.builders import TemplateDataBuilder
from crudgen.codegen.core.schema import FieldDefinition
from crudgen.codegen.generators import (
    FrontendAPIGenerator,
    FrontendFormGenerator,
    FrontendPageGenerator,
    FrontendRouteGenerator,
    MigrationSnippetGenerator,
    PermissionSnippetGenerator,
    RouteSnippetGenerator,
    WireSnippetGenerator,
)
from crudgen.codegen.generators.frontend import build_form_field


def _by_id(snippets):
    return {s.id: s for s in snippets}


class TestSnippetShape:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "generator_class",
        [
            RouteSnippetGenerator,
            WireSnippetGenerator,
            MigrationSnippetGenerator,
            PermissionSnippetGenerator,
            FrontendAPIGenerator,
            FrontendPageGenerator,
            FrontendFormGenerator,
            FrontendRouteGenerator,
        ],
    )
    def test_content_ends_with_one_newline(self, config, template_engine, article_request, generator_class):
        snippets = generator_class(config, template_engine).generate_snippets(article_request)
        assert snippets
        for snippet in snippets:
            assert snippet.content.endswith("\n")
            assert not snippet.content.endswith("\n\n")
            assert snippet.target_file
            assert snippet.category

    @pytest.mark.unit
    def test_generate_wraps_snippets_in_response(self, config, template_engine, output_root, product_request):
        response = MigrationSnippetGenerator(config, template_engine).generate(product_request)
        assert response.success
        assert response.generated_files == []
        assert len(response.code_snippets) == 1
        assert list(output_root.iterdir()) == []


class TestBackendSnippets:
    @pytest.mark.unit
    def test_routes(self, config, template_engine, article_request):
        snippets = _by_id(RouteSnippetGenerator(config, template_engine).generate_snippets(article_request))

        group = snippets["route_group_article"]
        assert group.target_file == "internal/admin/routes/routes.go"
        assert group.insert_before == "\t}\n}"
        assert 'articleGroup := protectedGroup.Group("/article")' in group.content
        assert 'articleGroup.PUT("/:id/status", handlers.ArticleHandler.UpdateStatus)' in group.content

        field = snippets["route_handler_field_article"]
        assert field.insert_after == "type Handlers struct {"
        assert field.content == "\tArticleHandler *handler.ArticleHandler\n"

    @pytest.mark.unit
    def test_routes_without_status_field(self, config, template_engine, product_request):
        snippets = _by_id(RouteSnippetGenerator(config, template_engine).generate_snippets(product_request))
        assert "/status" not in snippets["route_group_product"].content

    @pytest.mark.unit
    def test_wire(self, config, template_engine, product_request):
        snippets = WireSnippetGenerator(config, template_engine).generate_snippets(product_request)
        by_id = _by_id(snippets)

        assert [s.priority for s in snippets] == [1, 2, 3, 4, 5]
        assert by_id["wire_repository_product"].content == "\trepository.NewProductRepository,\n"
        assert by_id["wire_repository_product"].insert_after == "// Repository层"
        assert by_id["wire_service_product"].content == "\tservice.NewProductService,\n"
        assert by_id["wire_handler_product"].content == "\thandler.NewProductHandler,\n"
        assert by_id["wire_handler_param_product"].insert_before == ") *routes.Handlers {"
        assert by_id["wire_handler_assign_product"].content == "\t\tProductHandler: productHandler,\n"
        assert {s.target_file for s in snippets} == {"internal/admin/provider.go"}

    @pytest.mark.unit
    def test_migration(self, config, template_engine, product_request):
        (snippet,) = MigrationSnippetGenerator(config, template_engine).generate_snippets(product_request)
        assert snippet.content == "\t\t&models.Product{},\n"
        assert snippet.insert_after == "modelList := []interface{}{"
        assert "products" in snippet.description

    @pytest.mark.unit
    def test_permission(self, config, template_engine, make_request):
        request = make_request(model_name="OrderItem", model_name_cn="订单项")
        (snippet,) = PermissionSnippetGenerator(config, template_engine).generate_snippets(request)
        assert 'Module:          "order_item"' in snippet.content
        assert 'Name:            "订单项"' in snippet.content
        assert snippet.id == "permission_order_item"


class TestFrontendSnippets:
    @pytest.mark.unit
    def test_api_client(self, config, template_engine, article_request):
        (snippet,) = FrontendAPIGenerator(config, template_engine).generate_snippets(article_request)
        assert snippet.target_file == "web/src/api/articleApi.ts"
        assert snippet.creates_file
        assert "export class ArticleService" in snippet.content
        assert "url: '/admin-api/article'" in snippet.content
        assert "static updateArticleStatus(id: number, status: number)" in snippet.content
        assert "title: string" in snippet.content
        assert "publish_date?: string" in snippet.content

    @pytest.mark.unit
    def test_page(self, config, template_engine, article_request):
        (snippet,) = FrontendPageGenerator(config, template_engine).generate_snippets(article_request)
        assert snippet.target_file == "web/src/views/article/index.vue"
        assert "import ArticleDialog from './modules/article-dialog.vue'" in snippet.content
        assert "{{ row.status === 1 ? '启用' : '禁用' }}" in snippet.content
        assert "v-auth=\"'article:create'\"" in snippet.content

    @pytest.mark.unit
    def test_form(self, config, template_engine, article_request):
        (snippet,) = FrontendFormGenerator(config, template_engine).generate_snippets(article_request)
        assert snippet.target_file == "web/src/views/article/modules/article-dialog.vue"
        assert '<ElSelect v-model="formData.status"' in snippet.content
        assert 'type="textarea"' in snippet.content
        assert 'type="date"' in snippet.content
        assert "{ required: true, message: '请输入标题', trigger: 'blur' }" in snippet.content

    @pytest.mark.unit
    def test_routes(self, config, template_engine, article_request):
        snippets = _by_id(FrontendRouteGenerator(config, template_engine).generate_snippets(article_request))

        route = snippets["frontend_route_config_article"]
        assert route.target_file == "web/src/router/routes/asyncRoutes.ts"
        assert route.priority == 1
        assert "icon: '请修改图标'" in route.content
        assert "permissions: ['article:list']" in route.content

        alias = snippets["frontend_route_alias_article"]
        assert alias.target_file == "web/src/router/routesAlias.ts"
        assert alias.priority == 2
        assert "Article = '/article'" in alias.content

    @pytest.mark.unit
    def test_route_icon_from_config(self, config, template_engine, product_request):
        config.custom["frontend_icon"] = "&#xe721;"
        snippets = FrontendRouteGenerator(config, template_engine).generate_snippets(product_request)
        assert "icon: '&#xe721;'" in snippets[0].content


class TestFormFields:
    def _field(self, config, **kwargs):
        return build_form_field(TemplateDataBuilder(config).build_field(FieldDefinition(**kwargs)))

    @pytest.mark.unit
    def test_widgets_by_type(self, config):
        assert self._field(config, name="Password", logical_type="string").widget == "password"
        assert self._field(config, name="Email", logical_type="string").widget == "email"
        assert self._field(config, name="Stock", logical_type="int").component == "el-input-number"
        assert self._field(config, name="Price", logical_type="decimal").widget == "number"
        assert self._field(config, name="CreatedAt", logical_type="datetime").widget == "datetime"
        assert self._field(config, name="BirthDate", logical_type="date").widget == "date"

    @pytest.mark.unit
    def test_status_select_options(self, config):
        spec = self._field(config, name="Status", logical_type="int", comment="状态")
        assert spec.widget == "select"
        assert spec.placeholder == "请选择状态"
        assert [o["value"] for o in spec.options] == [1, 0]

    @pytest.mark.unit
    def test_full_width_widgets(self, config):
        assert self._field(config, name="Remark", logical_type="string").col_span == 24
        assert self._field(config, name="IsHot", logical_type="bool").col_span == 24
        assert self._field(config, name="Name", logical_type="string").col_span == 12

    @pytest.mark.unit
    def test_rules(self, config):
        spec = self._field(
            config, name="Title", logical_type="string", validate="required,min=2,max=100", comment="标题"
        )
        assert spec.required
        assert spec.rules == [
            "{ required: true, message: '请输入标题', trigger: 'blur' }",
            "{ min: 2, max: 100, message: '长度在 2 到 100 个字符', trigger: 'blur' }",
        ]

    @pytest.mark.unit
    def test_email_rule(self, config):
        spec = self._field(config, name="Contact", logical_type="string", validate="email")
        assert spec.rules == ["{ type: 'email', message: '请输入正确的邮箱地址', trigger: 'blur' }"]
