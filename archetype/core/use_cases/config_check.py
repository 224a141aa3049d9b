"""
Config check use case — validate archetype.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from archetype.core.config.loader import ConfigError, find_config_file, load_config
from archetype.core.data import builtin_templates
from archetype.core.models.config import ArchetypeConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: ArchetypeConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "source_roots": self.config.source_roots if self.config else [],
            "template_paths": self.config.template_paths if self.config else [],
            "output_dir": self.config.output_dir if self.config else None,
            "builtin_templates": builtin_templates(),
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate configuration and report issues.

    Args:
        config_path: Optional explicit path to archetype.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        result.errors.append("No archetype.yml found.")
        return result
    result.config_path = config_path

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    # Semantic checks
    if not config.source_roots:
        result.errors.append("No source roots configured; nothing would be scanned.")

    for name, path in zip(config.source_roots, config.source_root_paths):
        if not path.is_dir():
            result.warnings.append(f"Source root does not exist: {name}")

    for name, path in zip(config.template_paths, config.template_path_list):
        if not path.is_dir():
            result.warnings.append(f"Template path does not exist: {name}")

    output = config.output_path
    for name, path in zip(config.source_roots, config.source_root_paths):
        if path == output or path.is_relative_to(output):
            result.errors.append(f"Source root '{name}' lies inside the output directory")

    dupes = {p for p in config.source_roots if config.source_roots.count(p) > 1}
    if dupes:
        result.warnings.append(f"Duplicate source roots: {', '.join(sorted(dupes))}")

    result.valid = len(result.errors) == 0
    return result
