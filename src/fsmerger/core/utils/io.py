"""YAML reading helpers for config layers and overlay manifests."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from .merge import deep_merge


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read a YAML file.

    Returns ``default`` when the file is missing, empty or invalid, unless
    ``raise_on_error`` is True.

    Examples:
        >>> cfg = read_yaml(Path("config.yaml"), default={})
        >>> assert isinstance(cfg, dict)
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def iter_yaml_files(dir_path: Path) -> List[Path]:
    """Return ``*.yaml``/``*.yml`` files in ``dir_path`` in deterministic order.

    When both ``<name>.yaml`` and ``<name>.yml`` exist only ``.yaml`` is returned.
    """
    d = Path(dir_path)
    if not d.is_dir():
        return []
    yml_files = {p.stem: p for p in d.glob("*.yml")}
    yaml_files = {p.stem: p for p in d.glob("*.yaml")}

    out: List[Path] = []
    for stem in sorted(set(yml_files) | set(yaml_files)):
        out.append(yaml_files.get(stem) or yml_files[stem])
    return out


def merge_yaml_directory(base: Dict[str, Any], directory: Path) -> Dict[str, Any]:
    """Merge every YAML file of ``directory`` into ``base``. Invalid YAML raises."""
    cfg: Dict[str, Any] = dict(base)
    for path in iter_yaml_files(directory):
        data = read_yaml(path, default={}, raise_on_error=True)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: top-level YAML must be a mapping")
        cfg = deep_merge(cfg, data)
    return cfg


__all__ = ["iter_yaml_files", "merge_yaml_directory", "read_yaml"]
