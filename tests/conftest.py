"""Shared pytest fixtures for the crudgen test suite.

Provides reusable fixtures for:
- Temporary output roots and configuration
- In-memory history managers
- Sample generation requests
"""

from __future__ import annotations

from pathlib import Path

import pytest

from crudgen.codegen.core.config import GeneratorConfig
from crudgen.codegen.core.history import HistoryManager, InMemoryHistoryStore
from crudgen.codegen.core.schema import (
    ComponentType,
    FieldDefinition,
    GenerateOptions,
    GenerateRequest,
)
from crudgen.codegen.core.templates import TemplateEngine
from crudgen.codegen.orchestrator import CodeGenerator


# ---------------------------------------------------------------------------
# Paths & configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    """Empty project tree that generated files land in."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def config(output_root: Path) -> GeneratorConfig:
    """Configuration rooted at the temporary project tree.

    The formatter points at a binary that does not exist so no test
    depends on a local Go toolchain.
    """
    return GeneratorConfig(
        output_root=str(output_root),
        gofmt_command=["crudgen-test-missing-gofmt", "-w"],
    )


@pytest.fixture
def template_engine() -> TemplateEngine:
    return TemplateEngine()


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


@pytest.fixture
def history_manager(output_root: Path) -> HistoryManager:
    """History backed by memory, resolving paths under the project tree."""
    return HistoryManager(InMemoryHistoryStore(), output_root)


@pytest.fixture
def code_generator(config, history_manager, template_engine) -> CodeGenerator:
    return CodeGenerator(config, history_manager=history_manager, template_engine=template_engine)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


def _product_fields():
    return [
        FieldDefinition(name="Name", logical_type="string", validate="required", comment="商品名称"),
        FieldDefinition(name="Price", logical_type="decimal", comment="价格"),
    ]


@pytest.fixture
def make_request():
    """Factory for requests; defaults describe the Product module."""

    def _make(
        component_type=ComponentType.ALL,
        model_name="Product",
        fields=None,
        **kwargs,
    ) -> GenerateRequest:
        return GenerateRequest(
            component_type=component_type,
            model_name=model_name,
            fields=_product_fields() if fields is None else fields,
            **kwargs,
        )

    return _make


@pytest.fixture
def product_request(make_request) -> GenerateRequest:
    return make_request()


@pytest.fixture
def article_request(make_request) -> GenerateRequest:
    """Request exercising status, time and text fields."""
    return make_request(
        model_name="Article",
        model_name_cn="文章",
        fields=[
            FieldDefinition(name="Title", logical_type="string", validate="required,min=2,max=100", comment="标题"),
            FieldDefinition(name="Content", logical_type="text", comment="内容"),
            FieldDefinition(name="Status", logical_type="int", comment="状态（1启用，0禁用）"),
            FieldDefinition(name="PublishDate", logical_type="date", comment="发布日期"),
        ],
        options=GenerateOptions(overwrite_existing=True),
    )
