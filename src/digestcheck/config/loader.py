"""Config loading entry points for digestcheck."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from .models import ChecksumConfig

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for earlier interpreters
    import tomli as tomllib  # type: ignore[assignment]

ALGORITHM_ENV_VAR = "DIGESTCHECK_ALGORITHM"


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


def load_config(
    path: Path | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> ChecksumConfig:
    """Build the run configuration.

    Layers, lowest precedence first: model defaults, the optional config file
    at ``path``, the ``DIGESTCHECK_ALGORITHM`` environment variable, then
    ``overrides`` (usually the command-line flags).
    """

    merged: dict[str, Any] = {}
    if path:
        merged.update(_expect_mapping(_read_structured_file(path), path))

    env_algorithm = os.getenv(ALGORITHM_ENV_VAR)
    if env_algorithm and env_algorithm.strip():
        merged["algorithm"] = env_algorithm.strip().lower()

    if overrides:
        merged.update(overrides)

    # a lone path is accepted as a one-element list; anything else is left to pydantic
    if isinstance(merged.get("input_files"), (str, Path)):
        merged["input_files"] = (merged["input_files"],)

    try:
        return ChecksumConfig.model_validate(merged)
    except ValidationError as exc:
        source = path if path else "command line"
        raise ConfigError(f"Invalid configuration from {source}: {exc}") from exc


def _expect_mapping(payload: Any, source: Path) -> dict[str, Any]:
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ConfigError(f"Expected mapping data in {source}, got {type(payload)!r}.")
    return {str(key).replace("-", "_"): value for key, value in payload.items()}


def _read_structured_file(path: Path) -> Any:
    """Return the parsed contents of a YAML/TOML/JSON file."""

    if not path.exists():
        raise ConfigError(f"Config file {path} does not exist.")

    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc

    try:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(text) or {}
        if suffix == ".toml":
            return tomllib.loads(text)
        if suffix == ".json":
            return json.loads(text)
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Could not parse config file {path}: {exc}") from exc

    raise ConfigError(f"Unsupported config format for {path}")


__all__ = [
    "ALGORITHM_ENV_VAR",
    "ConfigError",
    "load_config",
]
