"""
CaseWorkflowService -- case reporting and review lifecycle.

Responsibility:
    Applies guarded operations to a ``CaseStore``: reporters submit and
    edit cases, reviewers move them through review to a final verdict,
    and the admin maintains the role sets.

Architecture position:
    Kernel > Services -- imperative shell over the pure domain types in
    ``tracebit_kernel.domain.cases``.

Invariants enforced:
    - Status monotonicity: every transition is checked against
      ``CASE_TRANSITIONS``; terminal statuses accept nothing.
    - Reviewer binding: ``reviewed_by`` is written once, by
      ``mark_under_review``.
    - Id sequence: ``next_case_id`` moves exactly once per accepted
      submission.
    - Atomic rejection: every guard runs before any mutation, so a
      failed Result leaves the store unchanged.

Failure modes:
    Returned, not raised -- see ``CaseErrorCode``.

Audit relevance:
    Accepted mutations log at INFO with case_id and the new status.
    Rejections log ``case_operation_rejected`` at WARNING with the code.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from tracebit_kernel.domain.authorization import is_admin, is_reporter, is_reviewer
from tracebit_kernel.domain.cases import (
    FINAL_CASE_STATUSES,
    Case,
    CaseStatus,
    CaseStore,
    can_transition,
)
from tracebit_kernel.domain.error_codes import CaseErrorCode
from tracebit_kernel.domain.result import Result
from tracebit_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.case_workflow")


class CaseWorkflowService:
    """
    Service for the case reporting workflow.

    Contract:
        Every public mutator takes the calling identity first and returns
        a ``Result``.  Calls are assumed to be applied one at a time.
    """

    def __init__(self, store: CaseStore):
        self.store = store

    # =========================================================================
    # Reporter operations
    # =========================================================================

    def submit_case(self, sender: str, metadata: str) -> Result[int]:
        """
        Submit a new case and return its id.

        Postconditions:
            - New case has status REPORTED, ``reported_by == sender`` and
              no reviewer.
            - ``next_case_id`` is incremented by one.
        """
        with LogContext.bind(actor_id=sender, operation="submit_case"):
            if not is_reporter(self.store, sender):
                return self._reject(CaseErrorCode.NOT_REPORTER)
            if not metadata:
                return self._reject(CaseErrorCode.EMPTY_METADATA)

            case_id = self.store.next_case_id
            self.store.cases[case_id] = Case(
                case_id=case_id,
                metadata=metadata,
                status=CaseStatus.REPORTED,
                reported_by=sender,
            )
            self.store.next_case_id = case_id + 1

            logger.info("case_submitted", extra={"case_id": case_id})
            return Result.ok(case_id)

    def update_case(self, sender: str, case_id: int, new_metadata: str) -> Result[bool]:
        """
        Replace a case's metadata while it is still REPORTED.

        Only the original reporter may edit; role membership is not
        re-checked, so a reporter removed from the set can still edit
        cases they filed.
        """
        with LogContext.bind(actor_id=sender, operation="update_case"):
            existing = self.store.cases.get(case_id)
            if existing is None:
                return self._reject(CaseErrorCode.CASE_NOT_FOUND, case_id=case_id)
            if existing.reported_by != sender:
                return self._reject(CaseErrorCode.NOT_OWNER, case_id=case_id)
            if existing.status != CaseStatus.REPORTED:
                return self._reject(CaseErrorCode.ALREADY_REVIEWED, case_id=case_id)

            self.store.cases[case_id] = replace(existing, metadata=new_metadata)

            logger.info("case_updated", extra={"case_id": case_id})
            return Result.ok(True)

    # =========================================================================
    # Reviewer operations
    # =========================================================================

    def mark_under_review(self, sender: str, case_id: int) -> Result[bool]:
        """Move a REPORTED case to UNDER_REVIEW and bind ``sender`` as reviewer."""
        with LogContext.bind(actor_id=sender, operation="mark_under_review"):
            if not is_reviewer(self.store, sender):
                return self._reject(CaseErrorCode.NOT_REVIEWER, case_id=case_id)
            existing = self.store.cases.get(case_id)
            if existing is None:
                return self._reject(CaseErrorCode.CASE_NOT_FOUND, case_id=case_id)
            if not can_transition(existing.status, CaseStatus.UNDER_REVIEW):
                return self._reject(
                    CaseErrorCode.INVALID_STATE,
                    case_id=case_id,
                    status=existing.status,
                )

            self.store.cases[case_id] = replace(
                existing,
                status=CaseStatus.UNDER_REVIEW,
                reviewed_by=sender,
            )

            logger.info(
                "case_review_started",
                extra={"case_id": case_id, "status": CaseStatus.UNDER_REVIEW},
            )
            return Result.ok(True)

    def finalize_case(
        self, sender: str, case_id: int, final_status: CaseStatus | Any
    ) -> Result[bool]:
        """
        Close an UNDER_REVIEW case as VERIFIED or REJECTED.

        ``reviewed_by`` is left as set by ``mark_under_review``; any
        reviewer may finalize, not only the one who started the review.
        """
        with LogContext.bind(actor_id=sender, operation="finalize_case"):
            if not is_reviewer(self.store, sender):
                return self._reject(CaseErrorCode.NOT_REVIEWER, case_id=case_id)
            if not _is_final_status(final_status):
                return self._reject(
                    CaseErrorCode.INVALID_FINAL_STATUS,
                    case_id=case_id,
                    requested_status=repr(final_status),
                )
            existing = self.store.cases.get(case_id)
            if existing is None:
                return self._reject(CaseErrorCode.CASE_NOT_FOUND, case_id=case_id)

            target = final_status
            if not can_transition(existing.status, target):
                return self._reject(
                    CaseErrorCode.INVALID_STATE,
                    case_id=case_id,
                    status=existing.status,
                )

            self.store.cases[case_id] = replace(existing, status=target)

            logger.info(
                "case_finalized",
                extra={"case_id": case_id, "status": target},
            )
            return Result.ok(True)

    # =========================================================================
    # Admin operations
    # =========================================================================

    def transfer_admin(self, sender: str, new_admin: str) -> Result[bool]:
        """Replace the admin identity. ``new_admin`` is not validated here."""
        with LogContext.bind(actor_id=sender, operation="transfer_admin"):
            if not is_admin(self.store, sender):
                return self._reject(CaseErrorCode.NOT_ADMIN)

            self.store.admin = new_admin

            logger.info(
                "admin_transferred",
                extra={"previous_admin": sender, "new_admin": new_admin},
            )
            return Result.ok(True)

    def add_reporter(self, sender: str, identity: str) -> Result[bool]:
        return self._update_role_set(sender, identity, "reporters", grant=True)

    def remove_reporter(self, sender: str, identity: str) -> Result[bool]:
        return self._update_role_set(sender, identity, "reporters", grant=False)

    def add_reviewer(self, sender: str, identity: str) -> Result[bool]:
        return self._update_role_set(sender, identity, "reviewers", grant=True)

    def remove_reviewer(self, sender: str, identity: str) -> Result[bool]:
        return self._update_role_set(sender, identity, "reviewers", grant=False)

    def _update_role_set(
        self, sender: str, identity: str, role_set: str, *, grant: bool
    ) -> Result[bool]:
        # Granting a held role or revoking an absent one is an accepted no-op.
        verb = "add" if grant else "remove"
        role = role_set[:-1]
        with LogContext.bind(actor_id=sender, operation=f"{verb}_{role}"):
            if not is_admin(self.store, sender):
                return self._reject(CaseErrorCode.NOT_ADMIN, identity=identity)

            members: set[str] = getattr(self.store, role_set)
            if grant:
                members.add(identity)
            else:
                members.discard(identity)

            logger.info(
                f"{role}_{'granted' if grant else 'revoked'}",
                extra={"identity": identity},
            )
            return Result.ok(True)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_case(self, case_id: int) -> Result[Case]:
        """Public read of a single case."""
        existing = self.store.cases.get(case_id)
        if existing is None:
            return Result.fail(CaseErrorCode.CASE_NOT_FOUND)
        return Result.ok(existing)

    def list_cases(self, status: CaseStatus | None = None) -> list[Case]:
        """All cases in ascending id order, optionally filtered by status."""
        return [
            case
            for case_id, case in sorted(self.store.cases.items())
            if status is None or case.status == status
        ]

    # =========================================================================
    # Internal
    # =========================================================================

    @staticmethod
    def _reject(code: CaseErrorCode, **fields: Any) -> Result[Any]:
        logger.warning(
            "case_operation_rejected",
            extra={"error_code": code, **fields},
        )
        return Result.fail(code)


def _is_final_status(value: Any) -> bool:
    # Enum members only; str-valued lookalikes such as "verified" are refused.
    return isinstance(value, CaseStatus) and value in FINAL_CASE_STATUSES
