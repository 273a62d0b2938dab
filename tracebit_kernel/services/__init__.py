"""Tracebit services -- the only code that mutates a store."""

from tracebit_kernel.services.case_workflow_service import CaseWorkflowService
from tracebit_kernel.services.entity_registry_service import EntityRegistryService

__all__ = [
    "CaseWorkflowService",
    "EntityRegistryService",
]
