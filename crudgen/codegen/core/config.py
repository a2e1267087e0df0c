"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import copy
import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_HISTORY_FILE = "data/code-generate-history.json"


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Settings shared by every generator in one run."""

    # Root of the project tree generated paths are relative to
    output_root: str = "."

    # Optional directory whose templates shadow the packaged ones
    templates_dir: Optional[str] = None

    # History document, relative to output_root unless absolute
    history_file: str = DEFAULT_HISTORY_FILE

    # Go module path used in generated import statements
    go_module: str = "bico-admin"

    # Formatter invoked on written Go files when a request asks for it
    gofmt_command: List[str] = field(default_factory=lambda: ["gofmt", "-w"])

    # Recorded in history records
    generated_by: str = "crudgen"

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def output_path(self) -> Path:
        return Path(self.output_root)

    @property
    def history_path(self) -> Path:
        path = Path(self.history_file)
        return path if path.is_absolute() else self.output_path / path


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configuration values."""
        self._defaults = asdict(GeneratorConfig())

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Configuration overrides, applied last
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = copy.deepcopy(self._defaults)

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update({k: v for k, v in custom_config.items() if v is not None})

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            merged_custom = dict(config_args.get("custom") or {})
            merged_custom.update(custom_args)
            config_args["custom"] = merged_custom

        if isinstance(config_args.get("gofmt_command"), str):
            config_args["gofmt_command"] = config_args["gofmt_command"].split()

        return GeneratorConfig(**config_args)

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not config.output_root:
            warnings.append("output_root is empty")
        elif not config.output_path.is_dir():
            warnings.append(f"output_root does not exist yet: {config.output_root}")

        if config.templates_dir and not Path(config.templates_dir).is_dir():
            warnings.append(f"templates_dir not found: {config.templates_dir}")

        if not config.history_file.endswith(".json"):
            warnings.append(f"history_file should be a .json file: {config.history_file}")

        if not config.go_module or " " in config.go_module:
            warnings.append(f"Invalid Go module path: {config.go_module!r}")

        if not config.gofmt_command:
            warnings.append("gofmt_command is empty; format_code requests will be skipped")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file)
