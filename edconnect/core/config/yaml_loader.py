# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""YAML configuration file loader utilities.

Content that is edited by curriculum staff rather than developers (the
tutor system prompts) lives in YAML files under the package ``config/``
directory and is loaded through these helpers.

Example:
    >>> from edconnect.core.config.yaml_loader import get_config_directory, load_yaml
    >>> prompts = load_yaml(get_config_directory() / "tutor" / "base.yaml")
"""

from pathlib import Path
from typing import Any

import yaml


class YAMLLoadError(Exception):
    """Raised when YAML file cannot be loaded or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize YAMLLoadError.

        Args:
            path: Path to the YAML file that failed to load.
            reason: Description of why the file failed to load.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load YAML file '{path}': {reason}")


def get_config_directory() -> Path:
    """Get the ``config`` directory shipped inside the package."""
    return Path(__file__).parent.parent.parent / "config"


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a single YAML file and return its contents as a dictionary.

    Args:
        path: Path to the YAML file to load.

    Returns:
        Dictionary containing the parsed YAML contents.
        Empty dict if file is empty.

    Raises:
        YAMLLoadError: If the file doesn't exist, cannot be read,
            or contains invalid YAML.
    """
    if not path.exists():
        raise YAMLLoadError(path, "File does not exist")

    if not path.is_file():
        raise YAMLLoadError(path, "Path is not a file")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise YAMLLoadError(path, f"Cannot read file: {e}") from e

    try:
        parsed = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise YAMLLoadError(path, f"Invalid YAML syntax: {e}") from e

    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        raise YAMLLoadError(
            path, f"YAML root must be a mapping, got {type(parsed).__name__}"
        )

    return parsed


def load_yaml_directory(path: Path) -> dict[str, dict[str, Any]]:
    """Load all YAML files from a directory, keyed by file stem.

    Args:
        path: Path to the directory containing YAML files.

    Returns:
        Dictionary mapping file stems to their parsed contents.

    Raises:
        YAMLLoadError: If the path is not a directory or if any
            YAML file fails to load.
    """
    if not path.exists():
        raise YAMLLoadError(path, "Directory does not exist")

    if not path.is_dir():
        raise YAMLLoadError(path, "Path is not a directory")

    result: dict[str, dict[str, Any]] = {}

    yaml_files = sorted(path.glob("*.yaml")) + sorted(path.glob("*.yml"))

    for yaml_file in yaml_files:
        if yaml_file.is_file():
            result[yaml_file.stem] = load_yaml(yaml_file)

    return result
