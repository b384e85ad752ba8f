"""Load an OpenAPI document into plain dicts.

Reads JSON (or YAML, by file suffix) and exposes paths, component schemas
and $ref resolution. The returned document is never mutated by the generator.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .errors import SpecLoadError, SpecReferenceError

_YAML_SUFFIXES = {".yaml", ".yml"}
_SCHEMA_REF_PREFIX = "#/components/schemas/"


def load_spec(path: str | Path) -> dict[str, Any]:
    """Load the OpenAPI document from disk."""
    spec_file = Path(path)
    try:
        with open(spec_file, encoding="utf-8") as f:
            if spec_file.suffix.lower() in _YAML_SUFFIXES:
                spec = yaml.safe_load(f)
            else:
                spec = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise SpecLoadError(spec_file, e) from e

    if not isinstance(spec, dict):
        raise SpecLoadError(spec_file, TypeError("top level is not a mapping"))
    return spec


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths") or {}


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the spec."""
    return (spec.get("components") or {}).get("schemas") or {}


def ref_name(ref: str) -> str:
    """Return the model name a $ref points at.

    '#/components/schemas/Pet' -> 'Pet'. Other pointers yield their last segment.
    """
    if ref.startswith(_SCHEMA_REF_PREFIX):
        return ref[len(_SCHEMA_REF_PREFIX):]
    return ref.rsplit("/", 1)[-1]


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a $ref pointer in the spec."""
    parts = ref.lstrip("#/").split("/")
    node: Any = spec
    for part in parts:
        if not isinstance(node, dict) or part not in node:
            raise SpecReferenceError(ref)
        node = node[part]
    return node
