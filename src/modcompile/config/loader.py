"""
Configuration file loading.

Loads ``modcompile.yaml`` and an optional ``modcompile.{env}.yaml`` overlay,
then substitutes ``${VAR}`` and ``{env}`` placeholders in string values.
"""

import os
import re
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from modcompile.exceptions import ConfigurationError

CONFIG_FILENAME = "modcompile.yaml"

# ${VAR} from the process environment, or the literal {env} placeholder
_PLACEHOLDER = re.compile(r"\$\{(?P<var>[^}]+)\}|\{env\}")


class Config:
    """Modcompile configuration container with dict-like access."""

    def __init__(self, data: dict[str, Any]):
        self.data = data
        # Convenience properties for common config sections
        self.compile = data.get("compile") or {}
        self.logging = data.get("logging") or {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        value: Any = self.data
        for k in key.split("."):
            if not isinstance(value, dict):
                return default
            value = value.get(k)
            if value is None:
                return default
        return value

    def __getitem__(self, key: str) -> Any:
        """Dict-like access: config['key'] or config['nested.key']."""
        if isinstance(key, str) and "." in key:
            return self.get(key)
        if key in self.data:
            value = self.data[key]
            if isinstance(value, dict):
                return Config(value)
            return value
        raise KeyError(f"Config key '{key}' not found")

    def __contains__(self, key: str) -> bool:
        """Check if key exists in config, with dot notation for nested keys."""
        value: Any = self.data
        for k in key.split("."):
            if not isinstance(value, dict) or k not in value:
                return False
            value = value[k]
        return True

    def __iter__(self) -> Iterator[str]:
        """Iterate over top-level keys."""
        return iter(self.data)

    def keys(self):
        return self.data.keys()

    def items(self):
        return self.data.items()

    def validate(self) -> None:
        """Validate configuration structure."""
        if not isinstance(self.data, dict):
            raise ConfigurationError(f"Configuration must be a dictionary/mapping, got {type(self.data).__name__}")

        errors = []
        for section in ("compile", "logging"):
            value = self.data.get(section)
            if value is not None and not isinstance(value, dict):
                errors.append(f"Configuration '{section}' must be a dictionary, got {type(value).__name__}")

        if errors:
            raise ConfigurationError("\n".join(errors))


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            raise ConfigurationError(
                f"Error parsing {path.name} at line {mark.line + 1}, column {mark.column + 1}:\n"
                f"  {e}\n"
                f"  File: {path}\n"
                f"  Suggestion: Check YAML syntax, ensure proper indentation and quotes"
            ) from e
        raise ConfigurationError(f"Error parsing {path.name}: {e}\n  File: {path}") from e
    except PermissionError as e:
        raise ConfigurationError(f"Permission denied reading {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration must be a dictionary/mapping, got {type(data).__name__}\n  File: {path}")
    return data


def load_config(project_path: Path | None = None, env: str | None = None, required: bool = False) -> Config:
    """
    Load modcompile configuration.

    Args:
        project_path: Directory holding modcompile.yaml (default: current directory)
        env: Environment name (dev, staging, prod); selects modcompile.{env}.yaml
        required: Raise when modcompile.yaml is missing instead of returning an empty Config

    Returns:
        Config instance with merged, resolved configuration
    """
    if project_path is None:
        project_path = Path.cwd()
    project_path = Path(project_path)

    base_config_path = project_path / CONFIG_FILENAME
    if base_config_path.exists():
        if not base_config_path.is_file():
            raise ConfigurationError(f"Configuration path is not a file: {base_config_path}")
        config_data = _read_yaml(base_config_path)
    elif required:
        raise ConfigurationError(
            f"Configuration file not found: {base_config_path}\n"
            f"  Suggestion: Create a {CONFIG_FILENAME} file in your project root"
        )
    else:
        config_data = {}

    if env:
        env_config_path = project_path / f"modcompile.{env}.yaml"
        if env_config_path.is_file():
            _merge_dict(config_data, _read_yaml(env_config_path))

    config = Config(_resolve_placeholders(config_data, env or "dev"))
    config.validate()
    return config


def _merge_dict(base: dict, override: dict):
    """Recursively merge override into base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _merge_dict(base[key], value)
        else:
            base[key] = value


def _resolve_placeholders(value: Any, env: str) -> Any:
    """Substitute ``${VAR}`` (left as is when unset) and ``{env}`` in every string of ``value``."""
    if isinstance(value, dict):
        return {k: _resolve_placeholders(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_resolve_placeholders(item, env) for item in value]
    if isinstance(value, str):
        return _PLACEHOLDER.sub(lambda m: os.getenv(m["var"], m[0]) if m["var"] else env, value)
    return value
