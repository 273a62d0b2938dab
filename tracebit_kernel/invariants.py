"""
Kernel Invariants Contract.

These invariants are structural law for both workflows.  No deployment
configuration may switch them off.

This module exists solely to declare them explicitly.  Enforcement lives
in CaseWorkflowService, EntityRegistryService and the domain types.
"""

from enum import Enum, unique


@unique
class KernelInvariant(str, Enum):
    """Non-configurable invariants enforced by the kernel."""

    STATUS_MONOTONICITY = "status_monotonicity"
    """A case moves REPORTED -> UNDER_REVIEW -> {VERIFIED | REJECTED} and
    never regresses. Enforced by CASE_TRANSITIONS."""

    REVIEWER_BINDING = "reviewer_binding"
    """reviewed_by is set iff status is not REPORTED, and is written once
    by mark_under_review."""

    CASE_ID_SEQUENCE = "case_id_sequence"
    """Case ids start at 1 and advance by exactly one per accepted
    submission. Rejected submissions consume no id."""

    ATOMIC_REJECTION = "atomic_rejection"
    """A rejected operation leaves its store unchanged. Every guard runs
    before the first mutation."""

    ENTITY_PROVENANCE = "entity_provenance"
    """entity_type and added_by of a registry entry never change after
    creation."""

    SENTINEL_REJECTION = "sentinel_rejection"
    """The sentinel address is never a registered wallet nor the registry
    admin."""

    ADMIN_SINGLETON = "admin_singleton"
    """Each store has exactly one admin, replaced only by transfer_admin."""


ALL_KERNEL_INVARIANTS: frozenset[KernelInvariant] = frozenset(KernelInvariant)

# The kernel package may not import from these packages.
# Enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "tracebit_config",
)
