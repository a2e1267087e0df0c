"""Tests for the crudgen command-line interface (crudgen.cli).

Tests cover:
- Inline-flag generation against a temporary project tree
- History list/show/delete through the JSON history file
- Snippet application, including idempotent re-runs
- Argument errors reported as non-zero exit codes
"""

from __future__ import annotations

import json

import pytest

from crudgen.cli import CLIError, main, parse_field_spec


def run(output_root, *args):
    return main(["--output-root", str(output_root), *args])


# ---------------------------------------------------------------------------
# Field flags
# ---------------------------------------------------------------------------


class TestParseFieldSpec:
    @pytest.mark.unit
    def test_name_type_comment(self):
        field = parse_field_spec("Price:decimal:价格")
        assert field.name == "Price"
        assert field.logical_type == "decimal"
        assert field.comment == "价格"

    @pytest.mark.unit
    def test_comment_may_contain_colons(self):
        assert parse_field_spec("Note:string:a:b").comment == "a:b"

    @pytest.mark.unit
    @pytest.mark.parametrize("spec", ["Price", ":decimal", "Price:"])
    def test_missing_parts(self, spec):
        with pytest.raises(CLIError):
            parse_field_spec(spec)


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


class TestGenerateCommand:
    @pytest.mark.unit
    def test_generate_model_from_flags(self, output_root, capsys):
        code = run(output_root, "generate", "-c", "model", "-m", "Product", "-f", "Name:string:名称")

        assert code == 0
        model = output_root / "internal/shared/models/product.go"
        assert "Name string" in model.read_text(encoding="utf-8")
        assert (output_root / "data/code-generate-history.json").exists()
        assert "Generated model for Product" in capsys.readouterr().out

    @pytest.mark.unit
    def test_generate_from_request_file(self, output_root, tmp_path, capsys):
        request_file = tmp_path / "request.json"
        request_file.write_text(
            json.dumps(
                {
                    "component_type": "routes",
                    "model_name": "Product",
                    "fields": [{"name": "Name", "type": "string"}],
                }
            ),
            encoding="utf-8",
        )

        code = run(output_root, "generate", str(request_file), "--json")

        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["success"] is True
        assert len(payload["code_snippets"]) == 2

    @pytest.mark.unit
    def test_invalid_request_exits_nonzero(self, output_root, capsys):
        code = run(output_root, "generate", "-c", "model", "-m", "product", "-f", "Name:string")

        assert code == 1
        assert "Request validation failed" in capsys.readouterr().out
        assert not (output_root / "internal").exists()

    @pytest.mark.unit
    def test_missing_model_is_an_error(self, output_root, capsys):
        assert run(output_root, "generate", "-c", "model") == 1
        assert "--model" in capsys.readouterr().out

    @pytest.mark.unit
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()


# ---------------------------------------------------------------------------
# history
# ---------------------------------------------------------------------------


class TestHistoryCommands:
    @pytest.mark.unit
    def test_list_empty(self, output_root, capsys):
        assert run(output_root, "history", "list") == 0
        assert "No generation history" in capsys.readouterr().out

    @pytest.mark.unit
    def test_list_and_show(self, output_root, capsys):
        run(output_root, "generate", "-c", "model", "-m", "Product", "-f", "Name:string")
        capsys.readouterr()

        assert run(output_root, "history", "list") == 0
        assert "Product" in capsys.readouterr().out

        assert run(output_root, "history", "show", "Product") == 0
        assert "internal/shared/models/product.go" in capsys.readouterr().out

    @pytest.mark.unit
    def test_show_unknown_module(self, output_root, capsys):
        assert run(output_root, "history", "show", "Missing") == 1
        assert "No generation history" in capsys.readouterr().out

    @pytest.mark.unit
    def test_delete_removes_files(self, output_root):
        run(output_root, "generate", "-c", "model", "-m", "Product", "-f", "Name:string")
        model = output_root / "internal/shared/models/product.go"
        assert model.exists()

        assert run(output_root, "history", "delete", "Product", "--yes") == 0
        assert not model.exists()
        assert run(output_root, "history", "delete", "Product", "--yes") == 1


# ---------------------------------------------------------------------------
# apply
# ---------------------------------------------------------------------------


class TestApplyCommand:
    ROUTES = "package router\n\nfunc Setup() {\n\tapi := r.Group(\"/api\")\n}\n"

    def _write_snippets(self, tmp_path, snippets):
        path = tmp_path / "snippets.json"
        path.write_text(json.dumps({"code_snippets": snippets}), encoding="utf-8")
        return str(path)

    @pytest.mark.unit
    def test_splice_is_idempotent(self, output_root, tmp_path):
        routes = output_root / "internal/router/routes.go"
        routes.parent.mkdir(parents=True)
        routes.write_text(self.ROUTES, encoding="utf-8")
        snippets = self._write_snippets(
            tmp_path,
            [
                {
                    "id": "route_group_product",
                    "content": "\tproductGroup := api.Group(\"/products\")",
                    "target_file": "internal/router/routes.go",
                    "insert_after": "api := r.Group(\"/api\")",
                }
            ],
        )

        assert run(output_root, "apply", snippets) == 0
        first = routes.read_text(encoding="utf-8")
        assert first.index("productGroup") > first.index("api := r.Group")

        assert run(output_root, "apply", snippets) == 0
        assert routes.read_text(encoding="utf-8") == first

    @pytest.mark.unit
    def test_dry_run_leaves_target_untouched(self, output_root, tmp_path):
        routes = output_root / "internal/router/routes.go"
        routes.parent.mkdir(parents=True)
        routes.write_text(self.ROUTES, encoding="utf-8")
        snippets = self._write_snippets(
            tmp_path,
            [
                {
                    "id": "route_group_product",
                    "content": "\tproductGroup := api.Group(\"/products\")",
                    "target_file": "internal/router/routes.go",
                    "insert_before": "^}",
                }
            ],
        )

        assert run(output_root, "apply", snippets, "--dry-run") == 0
        assert routes.read_text(encoding="utf-8") == self.ROUTES

    @pytest.mark.unit
    def test_missing_anchor_fails(self, output_root, tmp_path, capsys):
        routes = output_root / "internal/router/routes.go"
        routes.parent.mkdir(parents=True)
        routes.write_text(self.ROUTES, encoding="utf-8")
        snippets = self._write_snippets(
            tmp_path,
            [
                {
                    "id": "route_group_product",
                    "content": "x",
                    "target_file": "internal/router/routes.go",
                    "insert_after": "no such line",
                }
            ],
        )

        assert run(output_root, "apply", snippets) == 1
        assert routes.read_text(encoding="utf-8") == self.ROUTES

    @pytest.mark.unit
    def test_new_file_snippets_are_created(self, output_root, tmp_path, capsys):
        response_file = tmp_path / "response.json"
        run(output_root, "generate", "-c", "frontend_api", "-m", "Product", "-f", "Name:string", "--json")
        response_file.write_text(capsys.readouterr().out, encoding="utf-8")

        assert run(output_root, "apply", str(response_file)) == 0
        api = output_root / "web/src/api/productApi.ts"
        assert "export class ProductService" in api.read_text(encoding="utf-8")

        api.write_text("// customized\n", encoding="utf-8")
        assert run(output_root, "apply", str(response_file)) == 0
        assert api.read_text(encoding="utf-8") == "// customized\n"
