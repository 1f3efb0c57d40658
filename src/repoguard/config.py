"""Configuration management for repoguard.

Handles configuration loading from multiple sources with precedence:
CLI args > environment variables > .repoguardrc > pyproject.toml > defaults
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class RepoguardConfig:
    """Configuration for a compliance engine instance.

    Immutable once constructed.

    Attributes:
        auto_fix: Apply available fixes after validation (default: False)
        verbose: Emit detailed diagnostics (default: False)
        schema_file: Optional schema override path. Reserved; no rule reads it.
    """

    auto_fix: bool = False
    verbose: bool = False
    schema_file: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        if not isinstance(self.auto_fix, bool):
            raise ValueError("auto_fix must be a boolean")

        if not isinstance(self.verbose, bool):
            raise ValueError("verbose must be a boolean")

        if self.schema_file is not None and (
            not isinstance(self.schema_file, str) or not self.schema_file
        ):
            raise ValueError("schema_file must be a non-empty string")

    def get_schema_path(self, base_path: Path | None = None) -> Path | None:
        """Get the schema override path resolved against base_path.

        Args:
            base_path: Base path to resolve from. Defaults to current directory.

        Returns:
            Path to the schema file, or None if no override is configured.
        """
        if self.schema_file is None:
            return None
        base = base_path or Path.cwd()
        return base / self.schema_file


def _get_config_field_names() -> set[str]:
    """Get the set of valid configuration field names."""
    return {f.name for f in fields(RepoguardConfig)}


def parse_bool(value: str) -> bool:
    """Parse an environment-style boolean.

    Raises:
        ValueError: If the value is not a recognized boolean spelling.
    """
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def find_config_file(filename: str = ".repoguardrc", start_dir: Path | None = None) -> Path | None:
    """Find a configuration file by traversing up the directory tree.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        config_path = current / filename
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            return None
        current = parent


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    with open(path, "rb") as f:
        result: dict[str, Any] = tomllib.load(f)
        return result


def _load_from_repoguardrc(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from a .repoguardrc file, or {} if not found."""
    config_path = find_config_file(".repoguardrc", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
    except (tomllib.TOMLDecodeError, OSError):
        return {}

    valid_fields = _get_config_field_names()
    return {k: v for k, v in data.items() if k in valid_fields}


def _load_from_pyproject(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from the pyproject.toml [tool.repoguard] section."""
    config_path = find_config_file("pyproject.toml", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
    except (tomllib.TOMLDecodeError, OSError):
        return {}

    section = data.get("tool", {}).get("repoguard", {})
    # Accept the kebab-case spelling conventional in pyproject.toml
    section = {k.replace("-", "_"): v for k, v in section.items()}
    valid_fields = _get_config_field_names()
    return {k: v for k, v in section.items() if k in valid_fields}


def _load_from_env() -> dict[str, Any]:
    """Load configuration from REPOGUARD_* environment variables.

    Raises:
        ValueError: If a boolean variable has an unrecognized value.
    """
    result: dict[str, Any] = {}

    for env_var, config_key in (
        ("REPOGUARD_AUTO_FIX", "auto_fix"),
        ("REPOGUARD_VERBOSE", "verbose"),
    ):
        value = os.environ.get(env_var)
        if value is not None:
            result[config_key] = parse_bool(value)

    schema_file = os.environ.get("REPOGUARD_SCHEMA_FILE")
    if schema_file:
        result["schema_file"] = schema_file

    return result


def _merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge configuration dictionaries; later ones take precedence."""
    result: dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if value is not None:
                result[key] = value
    return result


def load_config(
    cli_overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
) -> RepoguardConfig:
    """Load configuration with full precedence chain.

    Precedence (highest to lowest):
    1. CLI arguments (cli_overrides)
    2. Environment variables (REPOGUARD_*)
    3. .repoguardrc file
    4. pyproject.toml [tool.repoguard] section
    5. Default values

    Args:
        cli_overrides: Configuration overrides from CLI arguments.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved RepoguardConfig instance.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    valid_fields = _get_config_field_names()
    cli_config = {
        k: v for k, v in (cli_overrides or {}).items() if k in valid_fields and v is not None
    }

    merged = _merge_configs(
        _load_from_pyproject(start_dir),
        _load_from_repoguardrc(start_dir),
        _load_from_env(),
        cli_config,
    )
    return RepoguardConfig(**merged)
