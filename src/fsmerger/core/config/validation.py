"""JSON Schema validation for configuration and overlay manifests.

Schemas are stored as YAML files under ``fsmerger/data/schemas/`` and
validated with ``jsonschema`` (Draft 2020-12).
"""
from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from fsmerger.core.exceptions import ConfigError
from fsmerger.data import read_yaml


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema; ``.yaml`` is appended when no extension is given."""
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"
    schema = read_yaml("schemas", schema_name)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def collect_errors(payload: Any, schema_name: str) -> List[str]:
    """Return readable validation errors (empty when ``payload`` is valid)."""
    validator = Draft202012Validator(load_schema(schema_name))
    errors: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path]):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    return errors


def validate_payload(payload: Any, schema_name: str, *, source: str = "") -> None:
    """Validate ``payload`` against ``schema_name``.

    Raises:
        ConfigError: listing every violation.
    """
    errors = collect_errors(payload, schema_name)
    if errors:
        where = f" in {source}" if source else ""
        raise ConfigError(
            f"Validation failed against schema '{schema_name}'{where}:\n"
            + "\n".join(f"- {e}" for e in errors),
            context={"schema": schema_name, "source": source, "errors": errors},
        )


__all__ = ["collect_errors", "load_schema", "validate_payload"]
