"""
Base generator interface for every generable component.

Defines the contract that file and snippet generators implement, the
error taxonomy they raise, and the shared write/format machinery.
"""

import os
import stat
import subprocess
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from ..languages.go.types import GoTypeMapper, get_default_type_mapper
from .config import GeneratorConfig, load_config
from .schema import CodeSnippet, ComponentType, GenerateRequest, GenerateResponse
from .templates import TemplateEngine, TemplateError, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class ConflictError(GeneratorError):
    """Target file exists and the request does not allow overwriting it."""

    def __init__(self, path: str):
        super().__init__(
            f"File '{path}' already exists; set overwrite_existing to true to replace it"
        )
        self.path = path


class RenderError(GeneratorError):
    """Template missing, malformed, or incompatible with the built data."""

    pass


class GenerationIOError(GeneratorError):
    """File-system failure, wrapped with the operation that failed."""

    def __init__(self, operation: str, path: str, cause: Exception):
        super().__init__(f"{operation} failed for '{path}': {cause}")
        self.operation = operation
        self.path = path
        self.cause = cause


class FormatError(GeneratorError):
    """Post-generation formatting failed; reported as a warning only."""

    pass


class UnsupportedComponentError(GeneratorError):
    """No registered generator can produce the requested component."""

    pass


def clean_code(code: str) -> str:
    """
    Basic text cleanup applied to every rendered file.

    Strips trailing whitespace, keeps at most two consecutive blank lines
    and ends the text with exactly one newline.
    """
    lines = code.split("\n")
    formatted_lines = []
    blank_count = 0

    for line in lines:
        stripped = line.rstrip()
        if not stripped:
            blank_count += 1
            if blank_count <= 2:
                formatted_lines.append("")
        else:
            blank_count = 0
            formatted_lines.append(stripped)

    return "\n".join(formatted_lines).strip("\n") + "\n"


def _file_mode(path: Path) -> int:
    """Permission bits for a written file: the existing file's, else 0o666 minus the umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_file(path: Path, content: str):
    """
    Write a file through a temporary sibling and an atomic rename.

    A replaced file keeps its mode; a new one gets 0o666 minus the umask.

    Raises:
        GenerationIOError: If the directory or the file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise GenerationIOError("create directory", str(path.parent), e)

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise GenerationIOError("write file", str(path), e)


@dataclass
class RenderedFile:
    """A rendered file waiting to be written."""

    path: str  # relative POSIX path under the output root
    content: str


class ComponentGenerator(ABC):
    """Abstract base class for all component generators."""

    component: ComponentType
    produces_files = False
    produces_snippets = False

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
        type_mapper: Optional[GoTypeMapper] = None,
    ):
        """
        Initialize generator.

        Args:
            config: Run configuration, loaded defaults when omitted
            template_engine: Shared engine, created from config when omitted
            type_mapper: Logical type mapper
        """
        self.config = config or load_config()
        if template_engine is None:
            templates_dir = Path(self.config.templates_dir) if self.config.templates_dir else None
            template_engine = create_template_engine(templates_dir)
        self.template_engine = template_engine
        self.type_mapper = type_mapper or get_default_type_mapper()

    def supports(self, operation: str) -> bool:
        """
        Capability check used by the orchestrator before dispatching.

        Args:
            operation: "files" or "snippets"
        """
        if operation == "files":
            return self.produces_files
        if operation == "snippets":
            return self.produces_snippets
        return False

    @abstractmethod
    def generate(self, request: GenerateRequest) -> GenerateResponse:
        """Generate the component for an already validated request."""
        pass

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template, converting template failures to RenderError.
        """
        try:
            return self.template_engine.render_template(template_name, context)
        except TemplateError as e:
            raise RenderError(f"{self.component.value}: {e}") from e


class FileGenerator(ComponentGenerator):
    """Generator that renders whole source files and writes them."""

    produces_files = True

    @abstractmethod
    def render_files(self, request: GenerateRequest) -> List[RenderedFile]:
        """
        Render every file this component owns.

        Returns:
            Rendered files with paths relative to the output root
        """
        pass

    @abstractmethod
    def output_paths(self, request: GenerateRequest) -> List[str]:
        """Deterministic relative output paths, in write order."""
        pass

    def resolve_path(self, relative: str) -> Path:
        """Absolute location of a relative output path."""
        return self.config.output_path / Path(PurePosixPath(relative))

    def check_conflict(self, request: GenerateRequest, relative: str):
        """
        Raise ConflictError when the target exists and overwriting is off.
        """
        if not request.options.overwrite_existing and self.resolve_path(relative).exists():
            raise ConflictError(relative)

    def generate_files(self, request: GenerateRequest) -> List[str]:
        """
        Check conflicts, render and write every file of the component.

        Nothing is written unless every file passes the conflict check and
        renders successfully.

        Returns:
            Relative paths of written files

        Raises:
            GeneratorError: ConflictError, RenderError or GenerationIOError
        """
        for relative in self.output_paths(request):
            self.check_conflict(request, relative)

        rendered = self.render_files(request)

        written = []
        for item in rendered:
            target = self.resolve_path(item.path)
            write_file(target, clean_code(item.content))
            written.append(item.path)
            logger.info("Generated %s", item.path)

            if request.options.format_code:
                try:
                    self.format_file(target)
                except FormatError as e:
                    logger.warning("Formatting %s failed: %s", item.path, e)

        return written

    def format_file(self, path: Path):
        """
        Run the configured external formatter over a written file.

        Raises:
            FormatError: If the formatter is missing or reports a failure
        """
        command = list(self.config.gofmt_command or [])
        if not command:
            raise FormatError("no formatter command configured")

        try:
            result = subprocess.run(
                command + [str(path)],
                capture_output=True,
                text=True,
                timeout=30,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise FormatError(f"{command[0]}: {e}")

        if result.returncode != 0:
            raise FormatError(result.stderr.strip() or f"{command[0]} exited with {result.returncode}")

    def generate(self, request: GenerateRequest) -> GenerateResponse:
        """
        Generate the component, returning failures as a structured response.
        """
        try:
            files = self.generate_files(request)
        except GeneratorError as e:
            logger.error("%s generation for %s failed: %s", self.component.value, request.model_name, e)
            return GenerateResponse.failure(
                f"Failed to generate {self.component.value} for {request.model_name}",
                [str(e)],
            )

        return GenerateResponse(
            success=True,
            generated_files=files,
            message=f"Generated {self.component.value} for {request.model_name}",
        )


class SnippetGenerator(ComponentGenerator):
    """Generator that returns code fragments for hand-maintained files."""

    produces_snippets = True

    @abstractmethod
    def generate_snippets(self, request: GenerateRequest) -> List[CodeSnippet]:
        """
        Produce the snippets of this component; never touches the file system.

        Raises:
            RenderError: If a snippet template fails
        """
        pass

    def generate(self, request: GenerateRequest) -> GenerateResponse:
        try:
            snippets = self.generate_snippets(request)
        except GeneratorError as e:
            logger.error("%s snippets for %s failed: %s", self.component.value, request.model_name, e)
            return GenerateResponse.failure(
                f"Failed to generate {self.component.value} snippets for {request.model_name}",
                [str(e)],
            )

        return GenerateResponse(
            success=True,
            code_snippets=snippets,
            message=f"Generated {len(snippets)} {self.component.value} snippet(s) for {request.model_name}",
        )
