"""
Deployment configuration schema.

Defines the human-authored source artifact for a tracebit deployment.
YAML files are parsed into these types by the loader and turned into
fresh kernel stores by the bridges.
"""

from __future__ import annotations

from dataclasses import dataclass

from tracebit_kernel.domain.registry import DEFAULT_SENTINEL_ADDRESS


@dataclass(frozen=True)
class CaseWorkflowConfig:
    """Initial admin and role sets of a case workflow deployment."""

    admin: str
    reporters: tuple[str, ...] = ()
    reviewers: tuple[str, ...] = ()


@dataclass(frozen=True)
class EntityRegistryConfig:
    """Initial admin, sentinel and clock origin of an entity registry."""

    admin: str
    sentinel_address: str = DEFAULT_SENTINEL_ADDRESS
    genesis_block_height: int = 0


@dataclass(frozen=True)
class DeploymentConfig:
    """Both workflows of one deployment, plus its source checksum."""

    case_workflow: CaseWorkflowConfig
    entity_registry: EntityRegistryConfig
    checksum: str = ""
