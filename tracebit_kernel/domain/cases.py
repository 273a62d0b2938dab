"""
Case domain types (``tracebit_kernel.domain.cases``).

Responsibility
--------------
Pure value objects for the case reporting workflow: the case lifecycle
state machine, the immutable ``Case`` record, and the ``CaseStore``
that owns all workflow state.

Architecture position
---------------------
**Kernel domain layer** -- ZERO I/O.  Mutation happens only in
``tracebit_kernel.services.case_workflow_service``.

Invariants enforced
-------------------
* Lifecycle -- ``CASE_TRANSITIONS`` defines the only valid status
  transitions.  Terminal states have no outgoing edges, so a status
  never regresses and never skips ``UNDER_REVIEW``.
* Reviewer binding -- ``reviewed_by`` is set iff status is not
  ``REPORTED``, and never changes once set.
* Id sequence -- ids start at 1, are allocated from ``next_case_id``
  and are never reused.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class CaseStatus(str, Enum):
    """Case lifecycle states."""

    REPORTED = "reported"
    UNDER_REVIEW = "under_review"
    VERIFIED = "verified"
    REJECTED = "rejected"


CASE_TRANSITIONS: dict[CaseStatus, frozenset[CaseStatus]] = {
    CaseStatus.REPORTED: frozenset({CaseStatus.UNDER_REVIEW}),
    CaseStatus.UNDER_REVIEW: frozenset({
        CaseStatus.VERIFIED,
        CaseStatus.REJECTED,
    }),
    CaseStatus.VERIFIED: frozenset(),
    CaseStatus.REJECTED: frozenset(),
}

TERMINAL_CASE_STATUSES: frozenset[CaseStatus] = frozenset({
    CaseStatus.VERIFIED,
    CaseStatus.REJECTED,
})

# Statuses a reviewer may pass to finalize a case.
FINAL_CASE_STATUSES: frozenset[CaseStatus] = TERMINAL_CASE_STATUSES


def can_transition(current: CaseStatus, target: CaseStatus) -> bool:
    """Return True if ``current -> target`` is a legal lifecycle edge."""
    return target in CASE_TRANSITIONS[current]


@dataclass(frozen=True)
class Case:
    """A reported case. Immutable; updates replace the whole record."""

    case_id: int
    metadata: str
    status: CaseStatus
    reported_by: str
    reviewed_by: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_CASE_STATUSES


@dataclass
class CaseStore:
    """
    Authoritative state of one case workflow deployment.

    Contract:
        Constructed explicitly and passed to the service that mutates it.
        Independent instances never share role sets or case maps.
    """

    admin: str
    reporters: set[str] = field(default_factory=set)
    reviewers: set[str] = field(default_factory=set)
    cases: dict[int, Case] = field(default_factory=dict)
    next_case_id: int = 1

    def __post_init__(self) -> None:
        # Copy so that caller-held collections cannot alias store state.
        self.reporters = set(self.reporters)
        self.reviewers = set(self.reviewers)
        self.cases = dict(self.cases)
        if self.next_case_id < 1:
            raise ValueError(f"next_case_id must be >= 1, got {self.next_case_id}")
