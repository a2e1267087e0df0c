"""Unit tests for request validation (crudgen.codegen.core.validator).

Tests cover:
- Valid requests
- Aggregation of independent errors
- Model name, field and table name rules
- Unknown component types
"""

from __future__ import annotations

import pytest

from crudgen.codegen.core.schema import FieldDefinition, GenerateRequest
from crudgen.codegen.core.validator import (
    MAX_FIELDS,
    ValidationError,
    Validator,
    format_validation_errors,
)


@pytest.fixture
def validator() -> Validator:
    return Validator()


def _fields_of(errors):
    return [e.field for e in errors]


class TestValidRequests:
    @pytest.mark.unit
    def test_product_request_is_valid(self, validator, product_request):
        assert validator.validate(product_request) == []

    @pytest.mark.unit
    def test_explicit_table_name(self, validator, make_request):
        assert validator.validate(make_request(table_name="shop_products_v2")) == []


class TestAggregation:
    @pytest.mark.unit
    def test_all_errors_are_reported_together(self, validator, make_request):
        request = make_request(
            model_name="product",
            fields=[
                FieldDefinition(name="Name", logical_type="string"),
                FieldDefinition(name="Name", logical_type="string"),
            ],
        )
        errors = validator.validate(request)
        assert _fields_of(errors) == ["model_name", "fields[1].name"]
        assert "uppercase" in errors[0].message
        assert "duplicate" in errors[1].message

    @pytest.mark.unit
    def test_format_validation_errors(self, validator, make_request):
        errors = validator.validate(make_request(model_name=""))
        assert format_validation_errors(errors) == ["model_name: model name must not be empty"]


class TestModelName:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name, fragment",
        [
            ("", "must not be empty"),
            ("P" * 51, "must not exceed"),
            ("Product-Item", "not a valid identifier"),
            ("1Product", "not a valid identifier"),
            ("type", "reserved word"),
            ("product", "uppercase"),
        ],
    )
    def test_invalid_names(self, validator, make_request, name, fragment):
        errors = validator.validate(make_request(model_name=name))
        assert len(errors) == 1
        assert errors[0].field == "model_name"
        assert fragment in errors[0].message


class TestFields:
    @pytest.mark.unit
    def test_fields_required(self, validator, make_request):
        errors = validator.validate(make_request(fields=[]))
        assert _fields_of(errors) == ["fields"]

    @pytest.mark.unit
    def test_too_many_fields(self, validator, make_request):
        fields = [FieldDefinition(name=f"Field{i}", logical_type="string") for i in range(MAX_FIELDS + 1)]
        errors = validator.validate(make_request(fields=fields))
        assert _fields_of(errors) == ["fields"]

    @pytest.mark.unit
    def test_field_name_and_type_errors(self, validator, make_request):
        request = make_request(
            fields=[
                FieldDefinition(name="", logical_type="string"),
                FieldDefinition(name="func", logical_type="string"),
                FieldDefinition(name="bad name", logical_type="string"),
                FieldDefinition(name="Price", logical_type=""),
            ]
        )
        errors = validator.validate(request)
        assert _fields_of(errors) == [
            "fields[0].name",
            "fields[1].name",
            "fields[2].name",
            "fields[3].type",
        ]


class TestTableAndComponent:
    @pytest.mark.unit
    def test_table_name_pattern(self, validator, make_request):
        errors = validator.validate(make_request(table_name="Products"))
        assert _fields_of(errors) == ["table_name"]

    @pytest.mark.unit
    @pytest.mark.parametrize("table_name", ["products\n", "products\r\n", " products", "shop-products"])
    def test_table_name_must_match_entirely(self, validator, make_request, table_name):
        errors = validator.validate(make_request(table_name=table_name))
        assert _fields_of(errors) == ["table_name"]

    @pytest.mark.unit
    def test_table_name_length(self, validator, make_request):
        errors = validator.validate(make_request(table_name="t" * 65))
        assert _fields_of(errors) == ["table_name"]

    @pytest.mark.unit
    def test_unknown_component_type(self, validator):
        request = GenerateRequest(component_type="widget", model_name="Product",
                                  fields=[FieldDefinition(name="Name", logical_type="string")])
        errors = validator.validate(request)
        assert _fields_of(errors) == ["component_type"]
        assert "widget" in errors[0].message

    @pytest.mark.unit
    def test_component_type_is_case_insensitive(self, validator):
        request = GenerateRequest(component_type="Model", model_name="Product",
                                  fields=[FieldDefinition(name="Name", logical_type="string")])
        assert validator.validate(request) == []


class TestValidationError:
    @pytest.mark.unit
    def test_equality_and_dict(self):
        error = ValidationError("model_name", "bad")
        assert error == ValidationError("model_name", "bad")
        assert str(error) == "model_name: bad"
        assert error.to_dict() == {"field": "model_name", "message": "bad"}
