"""
tracebit_config -- single public entrypoint for deployment configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  Returns a frozen ``DeploymentConfig``;
    ``tracebit_config.bridges`` turns it into kernel stores.

Architecture position:
    Configuration -- sits above ``tracebit_kernel``.  The kernel MUST
    NEVER import from ``tracebit_config``.

Failure modes:
    - ``FileNotFoundError`` -- the deployment file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``KeyError`` / ``ValueError`` -- schema violations.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``TRACEBIT_CONFIG_TRACE`` log entry with the source path and checksum.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tracebit_config.loader import load_deployment
from tracebit_config.schema import (
    CaseWorkflowConfig,
    DeploymentConfig,
    EntityRegistryConfig,
)

_logger = logging.getLogger("tracebit_kernel.config")

_DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(path: Path | str | None = None) -> DeploymentConfig:
    """The ONLY public configuration entrypoint.

    Args:
        path: Deployment YAML file. Defaults to the bundled
            ``tracebit_config/sets/default.yaml``.

    Returns:
        DeploymentConfig with its source checksum populated.
    """
    source = Path(path) if path is not None else _DEFAULT_CONFIG_PATH
    config = load_deployment(source)

    _logger.info(
        "TRACEBIT_CONFIG_TRACE",
        extra={
            "trace_type": "TRACEBIT_CONFIG_TRACE",
            "config_path": str(source),
            "checksum": config.checksum,
            "case_admin": config.case_workflow.admin,
            "reporter_count": len(config.case_workflow.reporters),
            "reviewer_count": len(config.case_workflow.reviewers),
            "registry_admin": config.entity_registry.admin,
            "sentinel_address": config.entity_registry.sentinel_address,
        },
    )
    return config


__all__ = [
    "CaseWorkflowConfig",
    "DeploymentConfig",
    "EntityRegistryConfig",
    "get_active_config",
]
