"""Typed accessor for the settings overlay views consume."""
from __future__ import annotations

import hashlib
import os
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from fsmerger.core.host import WalkOptions

from .manager import ENV_PREFIX, ConfigManager, get_user_config_dir

_config_cache: Dict[str, Dict[str, Any]] = {}
_defaults_cache: Dict[str, Any] = {}


def _cache_key(config_path: Optional[Path]) -> str:
    # Keyed on every input load_config reads.
    env_items = sorted((k, v) for k, v in os.environ.items() if k.startswith(ENV_PREFIX))
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]
    return f"{get_user_config_dir()}|{config_path or ''}|{env_fp}"


def get_cached_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load (and cache) the validated configuration."""
    path = Path(config_path).expanduser().resolve() if config_path else None
    key = _cache_key(path)
    cached = _config_cache.get(key)
    if cached is None:
        cached = ConfigManager(path).load_config(validate=True)
        _config_cache[key] = cached
    return cached


def get_default_config() -> Dict[str, Any]:
    """Load (and cache) the bundled defaults only."""
    if not _defaults_cache:
        _defaults_cache.update(ConfigManager().load_defaults())
    return _defaults_cache


def clear_all_caches() -> None:
    _config_cache.clear()
    _defaults_cache.clear()


class OverlayConfig:
    """Settings for overlay views.

    Usage:
        cfg = OverlayConfig(config_path="fsmerger.yaml")
        cfg.walk_options()
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        *,
        config_path: Optional[Union[str, Path]] = None,
    ) -> None:
        self._config = config if config is not None else get_cached_config(config_path)

    @classmethod
    def defaults(cls) -> "OverlayConfig":
        """Bundled defaults only; user config files and FSMERGER_* are not read."""
        return cls(get_default_config())

    def _section(self, name: str) -> Dict[str, Any]:
        section = self._config.get(name)
        return section if isinstance(section, dict) else {}

    @cached_property
    def walk_directories(self) -> bool:
        return bool(self._section("walk").get("directories", True))

    @cached_property
    def follow_symlinks(self) -> bool:
        return bool(self._section("walk").get("follow_symlinks", True))

    @cached_property
    def default_ignore(self) -> Tuple[str, ...]:
        return tuple(str(p) for p in (self._section("walk").get("ignore") or []))

    @cached_property
    def log_level(self) -> str:
        return str(self._section("logging").get("level") or "WARNING").upper()

    @cached_property
    def log_file(self) -> Optional[Path]:
        raw = self._section("logging").get("file")
        return Path(raw).expanduser() if raw else None

    def walk_options(self) -> WalkOptions:
        """Default walk options for ``collect_entries``."""
        return WalkOptions(
            ignore=self.default_ignore,
            directories=self.walk_directories,
            follow_symlinks=self.follow_symlinks,
        )


__all__ = ["OverlayConfig", "clear_all_caches", "get_cached_config", "get_default_config"]
