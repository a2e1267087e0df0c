"""Tests for the Jinja2 template engine (crudgen.codegen.core.templates).

Tests cover:
- Naming filters used by the packaged templates
- In-memory templates shadowing packaged ones
- Missing templates and undefined variables reported as TemplateError
"""

from __future__ import annotations

import pytest

from crudgen.codegen.core.templates import TemplateEngine, TemplateError


class TestNamingFilters:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("{{ name | snake_case }}", "order_item"),
            ("{{ name | kebab_case }}", "order-item"),
            ("{{ name | lower_camel_case }}", "orderItem"),
            ("{{ name | pascal_case }}", "OrderItem"),
            ("{{ name | screaming_snake_case }}", "ORDER_ITEM"),
            ("{{ name | snake_case | plural }}", "order_items"),
            ("{{ 'category' | plural }}", "categories"),
        ],
    )
    def test_filter(self, template_engine, expression, expected):
        template_engine.add_template("filter.j2", expression)
        assert template_engine.render_template("filter.j2", {"name": "OrderItem"}) == expected

    @pytest.mark.unit
    def test_snippet_templates_derive_names_with_filters(self, template_engine):
        content = template_engine.render_template(
            "snippets/wire_handler_param.go.j2",
            {"model_name": "OrderItem", "handler_name": "OrderItemHandler"},
        )
        assert content == "\torderItemHandler *handler.OrderItemHandler,\n"


class TestLookup:
    @pytest.mark.unit
    def test_memory_template_shadows_packaged(self, template_engine):
        template_engine.add_template("snippets/migration.go.j2", "custom {{ model_name }}\n")
        assert template_engine.render_template("snippets/migration.go.j2", {"model_name": "Product"}) == "custom Product\n"

    @pytest.mark.unit
    def test_user_directory_shadows_packaged(self, tmp_path):
        (tmp_path / "snippets").mkdir()
        (tmp_path / "snippets" / "migration.go.j2").write_text("user {{ model_name }}\n", encoding="utf-8")

        engine = TemplateEngine(tmp_path)

        assert engine.render_template("snippets/migration.go.j2", {"model_name": "Product"}) == "user Product\n"
        assert engine.template_exists("model.go.j2")

    @pytest.mark.unit
    def test_missing_template(self, template_engine):
        assert not template_engine.template_exists("nope.j2")
        with pytest.raises(TemplateError) as excinfo:
            template_engine.render_template("nope.j2", {})
        assert excinfo.value.missing
        assert excinfo.value.template_name == "nope.j2"

    @pytest.mark.unit
    def test_undefined_variable_is_an_error(self, template_engine):
        template_engine.add_template("strict.j2", "{{ missing }}")
        with pytest.raises(TemplateError, match="strict.j2"):
            template_engine.render_template("strict.j2", {})
