"""
Config -> Kernel Bridges.

Functions that turn a ``DeploymentConfig`` into fresh kernel stores.
These live in tracebit_config (the producer) because the kernel must
NEVER import tracebit_config.

Usage:
    from tracebit_config.bridges import build_case_store, build_registry_store

    config = get_active_config()
    cases = CaseWorkflowService(build_case_store(config))
    registry = EntityRegistryService(build_registry_store(config))
"""

from __future__ import annotations

from tracebit_config.schema import DeploymentConfig
from tracebit_kernel.domain.block_clock import BlockClock, CounterBlockClock
from tracebit_kernel.domain.cases import CaseStore
from tracebit_kernel.domain.registry import RegistryStore


def build_case_store(config: DeploymentConfig) -> CaseStore:
    """A new, empty case store seeded with the configured roles."""
    section = config.case_workflow
    return CaseStore(
        admin=section.admin,
        reporters=set(section.reporters),
        reviewers=set(section.reviewers),
    )


def build_registry_store(
    config: DeploymentConfig,
    clock: BlockClock | None = None,
) -> RegistryStore:
    """A new, empty registry store.

    Without an explicit ``clock`` a ``CounterBlockClock`` starting at the
    configured genesis height is used.
    """
    section = config.entity_registry
    return RegistryStore(
        admin=section.admin,
        clock=clock or CounterBlockClock(section.genesis_block_height),
        sentinel_address=section.sentinel_address,
    )
