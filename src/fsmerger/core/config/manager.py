"""
fsmerger configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import yaml

from fsmerger.core.exceptions import ConfigError
from fsmerger.core.utils import deep_merge, merge_yaml_directory, read_yaml
from fsmerger.data import get_data_path

from .validation import validate_payload

logger = logging.getLogger(__name__)

ENV_PREFIX = "FSMERGER_"


def get_user_config_dir() -> Path:
    """Return ``$XDG_CONFIG_HOME/fsmerger`` (default ``~/.config/fsmerger``)."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return base / "fsmerger"


class ConfigManager:
    """Load, merge, and validate fsmerger configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: FSMERGER_<section>__<key>
    2. Explicit config file (``config_path``, e.g. the CLI ``--config`` flag)
    3. User config: <user-config-dir>/*.yaml (alphabetical order)
    4. Bundled defaults: fsmerger.data/config/*.yaml (alphabetical order)
    """

    ARRAY_APPEND_MARKER = object()

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        *,
        user_config_dir: Optional[Path] = None,
    ) -> None:
        self.config_path = Path(config_path).expanduser() if config_path else None
        self.core_config_dir = get_data_path("config")
        self.user_config_dir = user_config_dir if user_config_dir is not None else get_user_config_dir()

    # ---------- env overrides ----------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        if value.strip().lower() in {"null", "none"}:
            return None
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[Union[str, object]]:
        segs = raw.split("__")
        processed: List[Union[str, object]] = []
        for pos, seg in enumerate(segs):
            if seg == "":
                raise ConfigError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.")
            if seg.upper() == "APPEND":
                if pos != len(segs) - 1 or pos == 0:
                    raise ConfigError(
                        f"Malformed {ENV_PREFIX}* key: APPEND must follow a list key and come last in '{raw}'."
                    )
                processed.append(self.ARRAY_APPEND_MARKER)
            else:
                processed.append(seg.lower())
        return processed

    def iter_env_overrides(self) -> Iterator[Tuple[List[Union[str, object]], Any]]:
        for key in sorted(os.environ):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                raise ConfigError(f"Malformed {ENV_PREFIX}* key")
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[Union[str, object]], value: Any) -> None:
        cur: Any = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> Dict[str, Any]:
        result = dict(cfg)
        for path, value in self.iter_env_overrides():
            if path[-1] is self.ARRAY_APPEND_MARKER:
                target = path[:-1]
                existing = self._get_nested(result, target)
                items = list(existing) if isinstance(existing, list) else []
                items.extend(value if isinstance(value, list) else [value])
                self._set_nested(result, target, items)
            else:
                self._set_nested(result, path, value)
        return result

    def _get_nested(self, cfg: Dict[str, Any], path: List[Union[str, object]]) -> Any:
        cur: Any = cfg
        for part in path:
            if not isinstance(cur, dict):
                return None
            cur = cur.get(part)
        return cur

    # ---------- loading ----------

    def _load_file(self, path: Path) -> Dict[str, Any]:
        data = read_yaml(path, default={}, raise_on_error=True)
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: top-level YAML must be a mapping", context={"path": str(path)})
        return data

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Merge every layer and return the resulting config dict.

        Raises:
            ConfigError: unreadable/invalid YAML or a schema violation.
        """
        try:
            cfg = merge_yaml_directory({}, self.core_config_dir)
            cfg = merge_yaml_directory(cfg, self.user_config_dir)
            if self.config_path is not None:
                cfg = deep_merge(cfg, self._load_file(self.config_path))
        except ConfigError:
            raise
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to load configuration: {exc}") from exc

        cfg = self.apply_env_overrides(cfg)
        if validate:
            validate_payload(cfg, "config.schema", source="merged configuration")
        logger.debug("Loaded configuration (user dir %s, file %s)", self.user_config_dir, self.config_path)
        return cfg

    def load_defaults(self) -> Dict[str, Any]:
        """Return the bundled defaults alone, ignoring user files and env overrides."""
        cfg = merge_yaml_directory({}, self.core_config_dir)
        validate_payload(cfg, "config.schema", source="bundled defaults")
        return cfg

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key, e.g. ``walk.directories``."""
        cur: Any = self.load_config(validate=False)
        for part in key.split("."):
            if not isinstance(cur, dict) or part not in cur:
                return default
            cur = cur[part]
        return cur


__all__ = ["ConfigManager", "ENV_PREFIX", "get_user_config_dir"]
