"""
Configuration Loader (``tracebit_config.loader``).

Responsibility
--------------
Loads a YAML deployment file and parses it into the frozen dataclasses
of ``tracebit_config.schema``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Document or section that is not a mapping  -> ``ValueError``.
* Wrong value types, empty identities, sentinel admin or a negative
  genesis height  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from tracebit_config.schema import (
    CaseWorkflowConfig,
    DeploymentConfig,
    EntityRegistryConfig,
)
from tracebit_kernel.domain.registry import DEFAULT_SENTINEL_ADDRESS


def load_yaml_file(path: Path) -> Any:
    """
    Load a single YAML file and return its top-level value.

    An empty file yields ``{}``; callers check the shape.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _mapping(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be a mapping, got {type(value).__name__}")
    return value


def _identity(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"'{key}' must be a non-empty string, got {value!r}")
    return value


def _identities(data: dict[str, Any], key: str) -> tuple[str, ...]:
    values = data.get(key) or []
    if not isinstance(values, list):
        raise ValueError(f"'{key}' must be a list, got {type(values).__name__}")
    for value in values:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"'{key}' entries must be non-empty strings, got {value!r}")
    # Preserve order, drop duplicates
    return tuple(dict.fromkeys(values))


def parse_case_workflow(data: dict[str, Any]) -> CaseWorkflowConfig:
    """Parse the ``case_workflow`` section."""
    data = _mapping(data, "'case_workflow'")
    return CaseWorkflowConfig(
        admin=_identity(data, "admin"),
        reporters=_identities(data, "reporters"),
        reviewers=_identities(data, "reviewers"),
    )


def parse_entity_registry(data: dict[str, Any]) -> EntityRegistryConfig:
    """Parse the ``entity_registry`` section.

    ``sentinel_address`` defaults to ``DEFAULT_SENTINEL_ADDRESS`` and
    ``genesis_block_height`` to 0.
    """
    data = _mapping(data, "'entity_registry'")
    sentinel = data.get("sentinel_address", DEFAULT_SENTINEL_ADDRESS)
    if not isinstance(sentinel, str) or not sentinel.strip():
        raise ValueError(f"'sentinel_address' must be a non-empty string, got {sentinel!r}")

    genesis = data.get("genesis_block_height", 0)
    if isinstance(genesis, bool) or not isinstance(genesis, int):
        raise ValueError(f"'genesis_block_height' must be an integer, got {genesis!r}")
    if genesis < 0:
        raise ValueError(f"'genesis_block_height' cannot be negative, got {genesis}")

    admin = _identity(data, "admin")
    if admin == sentinel:
        raise ValueError("Registry admin cannot be the sentinel address")

    return EntityRegistryConfig(
        admin=admin,
        sentinel_address=sentinel,
        genesis_block_height=genesis,
    )


def parse_deployment(data: dict[str, Any]) -> DeploymentConfig:
    """Parse a whole deployment document and stamp its checksum."""
    data = _mapping(data, "Deployment document")
    return DeploymentConfig(
        case_workflow=parse_case_workflow(data["case_workflow"]),
        entity_registry=parse_entity_registry(data["entity_registry"]),
        checksum=compute_checksum(data),
    )


def load_deployment(path: Path) -> DeploymentConfig:
    """Load and parse a YAML deployment file."""
    return parse_deployment(load_yaml_file(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Returns a hex-encoded SHA-256 hash string.
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
