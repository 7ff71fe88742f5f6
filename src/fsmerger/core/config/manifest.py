"""Overlay manifests: YAML files declaring the roots of a view.

Example::

    roots:
      - lib                      # plain path
      - root: vendor/dirA        # explicit descriptor
        prefix: vendor
      - [nested/a, nested/b]     # sub-overlay, reachable via FSMerger.at()

Relative roots are resolved against the manifest's directory. Roots are
listed lowest priority first.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Union

import yaml

from fsmerger.core.exceptions import ConfigError
from fsmerger.core.roots import ExplicitDescriptor
from fsmerger.core.utils import read_yaml

from .validation import validate_payload

logger = logging.getLogger(__name__)


def _anchor(raw: str, base_dir: Path) -> str:
    p = Path(raw).expanduser()
    if not p.is_absolute():
        p = base_dir / p
    return str(p)


def _convert(item: Any, base_dir: Path) -> Any:
    if isinstance(item, str):
        return _anchor(item, base_dir)
    if isinstance(item, list):
        return [_convert(child, base_dir) for child in item]
    return ExplicitDescriptor(root=_anchor(item["root"], base_dir), prefix=item.get("prefix"))


def load_manifest(path: Union[str, Path]) -> List[Any]:
    """Read and validate a manifest, returning root inputs for :class:`FSMerger`.

    Raises:
        ConfigError: missing/invalid YAML or a schema violation.
    """
    manifest_path = Path(path).expanduser().resolve()
    try:
        data = read_yaml(manifest_path, default=None, raise_on_error=True)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(
            f"Cannot read overlay manifest {manifest_path}: {exc}",
            context={"path": str(manifest_path)},
        ) from exc

    validate_payload(data, "manifest.schema", source=str(manifest_path))
    roots = [_convert(item, manifest_path.parent) for item in data["roots"]]
    logger.debug("Loaded %d roots from manifest %s", len(roots), manifest_path)
    return roots


__all__ = ["load_manifest"]
