"""
Configuration loader — reads archetype.yml into an ArchetypeConfig.

It reads YAML, validates against the Pydantic schema, and anchors every
relative path at the directory holding the file.  Without a config file
the defaults apply, anchored at the current directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from archetype.core.models.config import ArchetypeConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "archetype.yml"


class ConfigError(Exception):
    """Raised when the generator configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for archetype.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to archetype.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None, search: bool = True) -> ArchetypeConfig:
    """Load and validate generator configuration.

    Args:
        path: Explicit path to archetype.yml. If None, searches upward
            (unless ``search`` is False) and falls back to defaults.
        search: Whether to look for a config file when ``path`` is None.

    Returns:
        Validated ArchetypeConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file() if search else None
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return ArchetypeConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under an "archetype" key or be flat
    if isinstance(data.get("archetype"), dict):
        data = data["archetype"]

    if "root" in data:
        raise ConfigError(f"'root' cannot be set in {path}; it is the file's directory")

    try:
        config = ArchetypeConfig.model_validate({**data, "root": path.parent.resolve()})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info(
        "Loaded config from %s (%d source root(s), output %s)",
        path,
        len(config.source_roots),
        config.output_dir,
    )
    return config
