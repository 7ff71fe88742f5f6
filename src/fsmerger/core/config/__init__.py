"""Configuration for fsmerger.

Layered YAML (bundled defaults → user config dir → explicit file) with
``FSMERGER_*`` environment overrides, validated against bundled JSON schemas.
"""
from __future__ import annotations

from .manager import ConfigManager, get_user_config_dir
from .manifest import load_manifest
from .overlay import OverlayConfig, clear_all_caches, get_cached_config, get_default_config
from .validation import collect_errors, validate_payload

__all__ = [
    "ConfigManager",
    "OverlayConfig",
    "clear_all_caches",
    "collect_errors",
    "get_cached_config",
    "get_default_config",
    "get_user_config_dir",
    "load_manifest",
    "validate_payload",
]
