# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for EdConnect.

This package provides centralized configuration management:
- Settings: Pydantic-based settings loaded from environment variables
- YAML loader: Utilities for loading YAML configuration files (tutor prompts)

Example:
    >>> from edconnect.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from edconnect.core.config.settings import (
    APISettings,
    CORSSettings,
    DatabaseSettings,
    JWTSettings,
    LLMSettings,
    RateLimitSettings,
    SeedSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from edconnect.core.config.yaml_loader import (
    YAMLLoadError,
    get_config_directory,
    load_yaml,
    load_yaml_directory,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "LLMSettings",
    "JWTSettings",
    "RateLimitSettings",
    "CORSSettings",
    "APISettings",
    "SeedSettings",
    # YAML utilities
    "load_yaml",
    "load_yaml_directory",
    "get_config_directory",
    "YAMLLoadError",
]
