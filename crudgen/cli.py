"""
Command-line interface for crudgen.

Subcommands:
  generate   run a generation request from a JSON file or inline flags
  history    list, show, delete or clear generation history
  apply      merge snippets from a generation response into their targets
"""

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import CodeGenerator, load_config
from .codegen.core.anchors import AnchorNotFoundError, apply_snippet
from .codegen.core.config import ConfigError, GeneratorConfig, get_config_manager
from .codegen.core.generator import GenerationIOError, write_file
from .codegen.core.history import HistoryError
from .codegen.core.schema import (
    CodeSnippet,
    ComponentType,
    FieldDefinition,
    GenerateOptions,
    GenerateRequest,
    GenerateResponse,
    SchemaError,
)
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every subcommand."""
    parser = argparse.ArgumentParser(
        prog="crudgen",
        description="Generate CRUD admin modules from a model description",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  crudgen generate request.json
  crudgen generate --component all --model Product --field name:string:商品名称 --field price:decimal
  crudgen history list
  crudgen apply response.json --dry-run
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"crudgen {__version__}")
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument("--output-root", metavar="DIR", help="Project root generated paths are relative to")
    parser.add_argument("--templates-dir", metavar="DIR", help="Directory of templates overriding the packaged ones")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--log-file", metavar="FILE", help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command")

    # generate
    gen = subparsers.add_parser("generate", help="Run a generation request")
    gen.add_argument("request", nargs="?", help="Request JSON file ('-' for stdin)")
    gen.add_argument(
        "--component",
        "-c",
        choices=[c.value for c in ComponentType],
        help="Component to generate (overrides the request file)",
    )
    gen.add_argument("--model", "-m", help="Model name in PascalCase")
    gen.add_argument("--model-cn", help="Display name of the model")
    gen.add_argument(
        "--field",
        "-f",
        action="append",
        default=[],
        metavar="NAME:TYPE[:COMMENT]",
        help="Field definition; repeat for each field",
    )
    gen.add_argument("--table", help="Table name (default: pluralized snake_case model name)")
    gen.add_argument("--package-path", help="Package path, e.g. internal/admin")
    gen.add_argument("--overwrite", action="store_true", help="Replace existing files")
    gen.add_argument("--format", action="store_true", help="Run gofmt on written files")
    gen.add_argument("--optimize-imports", action="store_true", help="Group and sort generated imports")
    gen.add_argument("--json", action="store_true", help="Print the raw response as JSON")
    gen.add_argument("--show-snippets", action="store_true", help="Print snippet contents")
    gen.set_defaults(func=_handle_generate)

    # history
    hist = subparsers.add_parser("history", help="Inspect or reset generation history")
    hist_sub = hist.add_subparsers(dest="history_command")
    hist_sub.add_parser("list", help="List history records").set_defaults(func=_handle_history_list)
    show = hist_sub.add_parser("show", help="Show one module's record")
    show.add_argument("module")
    show.set_defaults(func=_handle_history_show)
    delete = hist_sub.add_parser("delete", help="Delete a module's files and record")
    delete.add_argument("module")
    delete.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    delete.set_defaults(func=_handle_history_delete)
    clear = hist_sub.add_parser("clear", help="Delete every recorded file and reset history")
    clear.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    clear.set_defaults(func=_handle_history_clear)

    # apply
    apply = subparsers.add_parser("apply", help="Merge snippets into their target files")
    apply.add_argument("snippets", help="Generation response or snippet list JSON ('-' for stdin)")
    apply.add_argument("--id", action="append", dest="ids", default=[], help="Only apply snippets with this id")
    apply.add_argument("--dry-run", action="store_true", help="Report what would change without writing")
    apply.set_defaults(func=_handle_apply)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_file)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        config = _build_config(args)
        return args.func(args, config)
    except (CLIError, ConfigError, HistoryError, SchemaError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    overrides = {
        "output_root": args.output_root,
        "templates_dir": args.templates_dir,
    }
    config = load_config(custom_config=overrides, config_file=args.config)
    for warning in get_config_manager().validate_config(config):
        logger.warning("Config: %s", warning)
    return config


def _read_json(source: str) -> Any:
    """Load JSON from a file path, or stdin for '-'."""
    try:
        if source == "-":
            return json.load(sys.stdin)
        with open(source, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise CLIError(f"Invalid JSON in {source}: {e}")
    except OSError as e:
        raise CLIError(f"Cannot read {source}: {e}")


def parse_field_spec(spec: str) -> FieldDefinition:
    """
    Parse a ``NAME:TYPE[:COMMENT]`` field flag.

    Raises:
        CLIError: If name or type is missing
    """
    parts = spec.split(":", 2)
    if len(parts) < 2 or not parts[0].strip() or not parts[1].strip():
        raise CLIError(f"Invalid field '{spec}', expected NAME:TYPE[:COMMENT]")
    comment = parts[2].strip() if len(parts) == 3 else ""
    return FieldDefinition(name=parts[0].strip(), logical_type=parts[1].strip(), comment=comment)


def build_request(args: argparse.Namespace) -> GenerateRequest:
    """Merge a request file (if any) with inline flags; flags win."""
    data: Dict[str, Any] = {}
    if args.request:
        data = _read_json(args.request)
        if not isinstance(data, dict):
            raise CLIError("Request JSON must be an object")
    elif not args.model:
        raise CLIError("Provide a request file or --model")

    request = GenerateRequest.from_dict(data)

    if args.component:
        request.component_type = ComponentType.parse(args.component)
    elif not data.get("component_type"):
        request.component_type = ComponentType.ALL
    if args.model:
        request.model_name = args.model
    if args.model_cn:
        request.model_name_cn = args.model_cn
    if args.field:
        request.fields = [parse_field_spec(spec) for spec in args.field]
    if args.table:
        request.table_name = args.table
    if args.package_path:
        request.package_path = args.package_path

    options = request.options
    request.options = GenerateOptions(
        overwrite_existing=options.overwrite_existing or args.overwrite,
        format_code=options.format_code or args.format,
        optimize_imports=options.optimize_imports or args.optimize_imports,
    )
    return request


def _handle_generate(args: argparse.Namespace, config: GeneratorConfig) -> int:
    request = build_request(args)
    logger.info("Generating %s for %s", request.component_type, request.model_name)
    response = CodeGenerator(config).generate(request)

    if args.json:
        console.print_json(json.dumps(response.to_dict(), ensure_ascii=False))
    else:
        _print_response(response, show_snippets=args.show_snippets)

    return 0 if response.success else 1


def _print_response(response: GenerateResponse, show_snippets: bool = False):
    """Render a generation response with rich formatting."""
    if response.success:
        console.print(f"[green]✓[/green] {response.message}")
    else:
        console.print(f"[red]✗[/red] {response.message}")

    if response.generated_files:
        table = Table(title="📄 Generated Files", box=box.SIMPLE, header_style="bold cyan")
        table.add_column("Path", style="green")
        for path in response.generated_files:
            table.add_row(path)
        console.print(table)

    if response.code_snippets:
        table = Table(title="🧩 Code Snippets", box=box.ROUNDED, header_style="bold cyan")
        table.add_column("ID", style="bold")
        table.add_column("Target", style="cyan")
        table.add_column("Anchor", style="dim")
        table.add_column("Description")
        for snippet in sorted(response.code_snippets, key=lambda s: (s.target_file, s.priority)):
            anchor = snippet.insert_after or snippet.insert_before or snippet.insert_point
            table.add_row(snippet.id, snippet.target_file, repr(anchor), snippet.description)
        console.print(table)

        if show_snippets:
            for snippet in response.code_snippets:
                lexer = "go" if snippet.target_file.endswith(".go") else "typescript"
                console.print(
                    Panel(
                        Syntax(snippet.content, lexer, theme="monokai"),
                        title=f"{snippet.id} → {snippet.target_file}",
                        border_style="blue",
                    )
                )

    if response.history_updated:
        console.print("[dim]History updated[/dim]")

    for error in response.errors:
        console.print(f"[red]  • {error}[/red]")


def _handle_history_list(args: argparse.Namespace, config: GeneratorConfig) -> int:
    records = CodeGenerator(config).get_history()
    if not records:
        console.print("[yellow]⚠️ No generation history[/yellow]")
        return 0

    table = Table(title="📋 Generation History", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Module", style="bold green", no_wrap=True)
    table.add_column("Package", style="cyan")
    table.add_column("Table")
    table.add_column("Components", style="blue")
    table.add_column("Files", justify="right")
    table.add_column("Generated At", style="dim")

    for record in records:
        table.add_row(
            record.module_name,
            record.package_path or "[dim]-[/dim]",
            record.table_name,
            ", ".join(record.components),
            str(len(record.generated_files)),
            record.generated_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
    console.print(table)
    return 0


def _handle_history_show(args: argparse.Namespace, config: GeneratorConfig) -> int:
    record = CodeGenerator(config).get_history_by_module(args.module)
    if record is None:
        raise CLIError(f"No generation history for module '{args.module}'")

    info = (
        f"[bold]Model:[/bold] {record.model_name}\n"
        f"[bold]Table:[/bold] {record.table_name}\n"
        f"[bold]Package:[/bold] {record.package_path or '-'}\n"
        f"[bold]Components:[/bold] {', '.join(record.components)}\n"
        f"[bold]Generated:[/bold] {record.generated_at.isoformat()} by {record.generated_by or '-'}"
    )
    console.print(Panel(info, title=f"🔧 {record.module_name}", border_style="green"))
    for path in record.generated_files:
        console.print(f"  [cyan]{path}[/cyan]")
    return 0


def _confirm(prompt: str, assume_yes: bool) -> bool:
    if assume_yes:
        return True
    return console.input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")


def _handle_history_delete(args: argparse.Namespace, config: GeneratorConfig) -> int:
    if not _confirm(f"Delete every generated file of '{args.module}'?", args.yes):
        console.print("[dim]Cancelled[/dim]")
        return 1

    deleted = CodeGenerator(config).delete_history(args.module)
    console.print(f"[green]✓[/green] Deleted {len(deleted)} file(s) of {args.module}")
    return 0


def _handle_history_clear(args: argparse.Namespace, config: GeneratorConfig) -> int:
    if not _confirm("Delete every recorded file and reset history?", args.yes):
        console.print("[dim]Cancelled[/dim]")
        return 1

    deleted = CodeGenerator(config).clear_history()
    console.print(f"[green]✓[/green] History cleared, {len(deleted)} file(s) deleted")
    return 0


def load_snippets(data: Any) -> List[CodeSnippet]:
    """Snippets from a generation response, or from a bare snippet list."""
    if isinstance(data, dict):
        data = data.get("code_snippets") or []
    if not isinstance(data, list):
        raise CLIError("Expected a generation response or a list of snippets")
    return [CodeSnippet.from_dict(item) for item in data]


def _handle_apply(args: argparse.Namespace, config: GeneratorConfig) -> int:
    snippets = load_snippets(_read_json(args.snippets))
    if args.ids:
        snippets = [s for s in snippets if s.id in args.ids]
    if not snippets:
        console.print("[yellow]⚠️ No snippets to apply[/yellow]")
        return 0

    failures = 0
    for snippet in sorted(snippets, key=lambda s: (s.target_file, s.priority)):
        target = config.output_path / snippet.target_file

        if snippet.creates_file:
            if target.exists():
                console.print(f"[dim]= {snippet.id}: {snippet.target_file} already exists[/dim]")
                continue
            content, updated = "", snippet.content
        elif not (snippet.insert_after or snippet.insert_before):
            console.print(f"[dim]- {snippet.id}: no anchor, {snippet.insert_point or 'manual step'}[/dim]")
            continue
        else:
            try:
                content = target.read_text(encoding="utf-8")
            except OSError as e:
                console.print(f"[red]✗ {snippet.id}:[/red] cannot read {snippet.target_file}: {e}")
                failures += 1
                continue

            try:
                updated = apply_snippet(content, snippet)
            except AnchorNotFoundError as e:
                console.print(f"[red]✗ {snippet.id}:[/red] {e}")
                failures += 1
                continue

        if updated == content:
            console.print(f"[dim]= {snippet.id}: already present in {snippet.target_file}[/dim]")
            continue

        if args.dry_run:
            console.print(f"[cyan]~ {snippet.id}:[/cyan] would update {snippet.target_file}")
            continue

        try:
            write_file(target, updated)
        except GenerationIOError as e:
            console.print(f"[red]✗ {snippet.id}:[/red] {e}")
            failures += 1
            continue
        console.print(f"[green]✓[/green] {snippet.id} → {snippet.target_file}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
