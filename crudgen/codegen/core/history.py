"""
Generation history persistence.

History records which files each module's last generation produced so
that a later delete can remove them. The document lives in one JSON file
and is always updated read-modify-write; a module generated again
replaces its record instead of adding a second one.
"""

import json
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Iterator, List, Optional, Union

from ...logging_config import get_logger
from .generator import GenerationIOError, write_file
from .schema import (
    ComponentType,
    GenerateHistory,
    GenerateRequest,
    HistoryFile,
    SchemaError,
)

logger = get_logger(__name__)


class HistoryError(Exception):
    """Exception raised when history cannot be read, written or queried."""

    pass


class HistoryStore(ABC):
    """Backend holding the history document."""

    @abstractmethod
    def load(self) -> HistoryFile:
        """Return the stored document, an empty one if nothing is stored."""
        pass

    @abstractmethod
    def save(self, document: HistoryFile):
        """Replace the stored document."""
        pass


class JSONHistoryStore(HistoryStore):
    """History document kept in a JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> HistoryFile:
        if not self.path.exists():
            return HistoryFile()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise HistoryError(f"Invalid JSON in history file {self.path}: {e}")
        except OSError as e:
            raise HistoryError(f"Failed to read history file {self.path}: {e}")

        try:
            return HistoryFile.from_dict(data)
        except SchemaError as e:
            raise HistoryError(f"Malformed history file {self.path}: {e}")

    def save(self, document: HistoryFile):
        text = json.dumps(document.to_dict(), indent=2, ensure_ascii=False) + "\n"
        try:
            write_file(self.path, text)
        except GenerationIOError as e:
            raise HistoryError(f"Failed to write history file {self.path}: {e.cause}")


class InMemoryHistoryStore(HistoryStore):
    """History kept in process memory."""

    def __init__(self, document: Optional[HistoryFile] = None):
        self._data = (document or HistoryFile()).to_dict()

    def load(self) -> HistoryFile:
        return HistoryFile.from_dict(json.loads(json.dumps(self._data)))

    def save(self, document: HistoryFile):
        self._data = document.to_dict()


def module_name_for(request: GenerateRequest) -> str:
    """History module name of a request: its model name."""
    return request.model_name


class HistoryManager:
    """Reads and updates the generation history of a project tree."""

    def __init__(self, store: HistoryStore, base_dir: Union[str, Path] = "."):
        """
        Initialize history manager.

        Args:
            store: Backend holding the document
            base_dir: Root that recorded relative paths resolve against
        """
        self.store = store
        self.base_dir = Path(base_dir)

    def load(self) -> HistoryFile:
        return self.store.load()

    def save(self, document: HistoryFile):
        self.store.save(document)

    @contextmanager
    def transaction(self) -> Iterator[HistoryFile]:
        """
        Load the document, yield it for mutation and save it on success.

        Nothing is saved when the block raises.
        """
        document = self.load()
        yield document
        self.save(document)

    def add(
        self,
        request: GenerateRequest,
        generated_files: List[str],
        components: Optional[List[str]] = None,
        generated_by: str = "",
    ) -> GenerateHistory:
        """
        Record a generation, replacing any record with the same module
        name and package path.

        Args:
            request: The request that was generated
            generated_files: Relative paths written by the call
            components: Component names that succeeded; defaults to the
                request's component
            generated_by: Tool identification

        Returns:
            The stored record

        Raises:
            HistoryError: If the document cannot be read or written
        """
        if components is None:
            component = request.component_type
            components = [component.value if isinstance(component, ComponentType) else str(component)]

        record = GenerateHistory(
            module_name=module_name_for(request),
            model_name=request.model_name,
            table_name=request.resolved_table_name,
            package_path=request.package_path,
            components=list(components),
            generated_files=list(generated_files),
            generated_by=generated_by,
            generated_at=datetime.now(timezone.utc),
        )

        with self.transaction() as document:
            for index, existing in enumerate(document.history):
                if existing.key == record.key:
                    document.history[index] = record
                    break
            else:
                document.history.append(record)

        logger.debug("Recorded %d file(s) for module %s", len(generated_files), record.module_name)
        return record

    def get_all(self) -> List[GenerateHistory]:
        return list(self.load().history)

    def get_by_module(self, module_name: str) -> Optional[GenerateHistory]:
        """First record with this module name, None if there is none."""
        for record in self.load().history:
            if record.module_name == module_name:
                return record
        return None

    def delete_by_module(self, module_name: str) -> List[str]:
        """
        Delete a module's generated files and drop its record.

        Files already gone are skipped. Other deletion failures are logged
        and do not stop the record from being removed.

        Returns:
            Relative paths actually deleted

        Raises:
            HistoryError: If no record matches or the document cannot be saved
        """
        with self.transaction() as document:
            record = next((r for r in document.history if r.module_name == module_name), None)
            if record is None:
                raise HistoryError(f"No generation history for module '{module_name}'")

            deleted = self._remove_files(record.generated_files)
            document.history = [r for r in document.history if r is not record]

        logger.info("Deleted %d file(s) of module %s", len(deleted), module_name)
        return deleted

    def clear(self) -> List[str]:
        """
        Delete the files of every record, then reset to an empty history.

        Returns:
            Relative paths actually deleted
        """
        with self.transaction() as document:
            deleted = []
            for record in document.history:
                deleted.extend(self._remove_files(record.generated_files))
            document.history = []

        logger.info("Cleared history, deleted %d file(s)", len(deleted))
        return deleted

    def _remove_files(self, paths: List[str]) -> List[str]:
        deleted = []
        for relative in paths:
            try:
                self.resolve(relative).unlink()
                deleted.append(relative)
            except HistoryError as e:
                logger.warning("Skipping %s: %s", relative, e)
            except FileNotFoundError:
                logger.debug("Already removed: %s", relative)
            except OSError as e:
                logger.warning("Could not delete %s: %s", relative, e)
        return deleted

    def resolve(self, relative: str) -> Path:
        """
        Location of a recorded path under the output root.

        Raises:
            HistoryError: If the path escapes the output root
        """
        base = self.base_dir.resolve()
        path = (base / Path(PurePosixPath(relative))).resolve()
        try:
            path.relative_to(base)
        except ValueError:
            raise HistoryError(f"Recorded path {relative!r} is outside {self.base_dir}")
        return path


def create_history_manager(config) -> HistoryManager:
    """JSON-backed history manager for a configuration."""
    return HistoryManager(JSONHistoryStore(config.history_path), config.output_path)
