"""
Typed Exception Hierarchy for the Tracebit Kernel.

===============================================================================
ERRORS ARE VALUES FIRST
===============================================================================

Every kernel operation returns a ``Result``.  A guard violation is a
failed Result carrying an error code, never a raised exception, and it
leaves the store untouched.

These exceptions exist for host-side callers that prefer raising:

    case_id = service.submit_case(sender, metadata).unwrap(caller=sender)

``Result.unwrap()`` raises the exception class registered for the code.
Each class carries:
  1. A ``code`` class attribute -- the same enum member the Result held.
  2. Structured attributes (caller, case_id, wallet, ...) when supplied.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    TracebitError (base)
    |
    +-- CaseWorkflowError
    |   +-- CaseNotAdminError
    |   +-- NotReporterError
    |   +-- NotReviewerError
    |   +-- EmptyMetadataError
    |   +-- CaseNotFoundError
    |   +-- InvalidCaseStateError
    |   +-- InvalidFinalStatusError
    |   +-- NotCaseOwnerError
    |   +-- CaseAlreadyReviewedError
    |
    +-- EntityRegistryError
        +-- RegistryNotAdminError
        +-- EntityAlreadyExistsError
        +-- EntityNotFoundError
        +-- InvalidAddressError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Returned
----------------|-----------------------------|-----------------------------------------
Case workflow   | ERR-NOT-ADMIN               | Caller is not the case store admin
                | ERR-NOT-REPORTER            | Caller is not in the reporter set
                | ERR-NOT-REVIEWER            | Caller is not in the reviewer set
                | ERR-EMPTY-METADATA          | Submitted metadata is empty
                | ERR-CASE-NOT-FOUND          | Case id does not exist
                | ERR-INVALID-STATE           | Transition not allowed from status
                | ERR-INVALID-FINAL-STATUS    | Final status not Verified/Rejected
                | ERR-NOT-OWNER               | Caller did not report the case
                | ERR-ALREADY-REVIEWED        | Case left Reported; edits closed
----------------|-----------------------------|-----------------------------------------
Entity registry | 100                         | Caller is not the registry admin
                | 101                         | Wallet already registered
                | 102                         | Wallet not registered
                | 104                         | Wallet/admin is the sentinel address

===============================================================================
"""

from __future__ import annotations

from typing import Any

from tracebit_kernel.domain.error_codes import CaseErrorCode, RegistryErrorCode


class TracebitError(Exception):
    """
    Base exception for all tracebit kernel errors.

    All subclasses must have a ``code`` class attribute holding the
    error-code enum member they represent.
    """

    code: Any = "TRACEBIT_ERROR"

    def __init__(self, message: str | None = None, **context: Any):
        for key, value in context.items():
            setattr(self, key, value)
        super().__init__(message or self._default_message(context))

    def _default_message(self, context: dict[str, Any]) -> str:
        detail = ", ".join(f"{k}={v!r}" for k, v in sorted(context.items()))
        code = getattr(self.code, "value", self.code)
        return f"{code}: {detail}" if detail else str(code)


# Case workflow exceptions


class CaseWorkflowError(TracebitError):
    """Base exception for case workflow rejections."""

    code: Any = "CASE_WORKFLOW_ERROR"


class CaseNotAdminError(CaseWorkflowError):
    """Caller is not the case store admin."""

    code = CaseErrorCode.NOT_ADMIN


class NotReporterError(CaseWorkflowError):
    """Caller is not an authorized reporter."""

    code = CaseErrorCode.NOT_REPORTER


class NotReviewerError(CaseWorkflowError):
    """Caller is not an authorized reviewer."""

    code = CaseErrorCode.NOT_REVIEWER


class EmptyMetadataError(CaseWorkflowError):
    """Case metadata must be non-empty."""

    code = CaseErrorCode.EMPTY_METADATA


class CaseNotFoundError(CaseWorkflowError):
    """Case with given id was not found."""

    code = CaseErrorCode.CASE_NOT_FOUND


class InvalidCaseStateError(CaseWorkflowError):
    """Requested transition is not allowed from the case's current status."""

    code = CaseErrorCode.INVALID_STATE


class InvalidFinalStatusError(CaseWorkflowError):
    """Final status must be Verified or Rejected."""

    code = CaseErrorCode.INVALID_FINAL_STATUS


class NotCaseOwnerError(CaseWorkflowError):
    """Only the original reporter may edit a case."""

    code = CaseErrorCode.NOT_OWNER


class CaseAlreadyReviewedError(CaseWorkflowError):
    """Case has left Reported status and can no longer be edited."""

    code = CaseErrorCode.ALREADY_REVIEWED


# Entity registry exceptions


class EntityRegistryError(TracebitError):
    """Base exception for entity registry rejections."""

    code: Any = "ENTITY_REGISTRY_ERROR"


class RegistryNotAdminError(EntityRegistryError):
    """Caller is not the registry admin."""

    code = RegistryErrorCode.NOT_ADMIN


class EntityAlreadyExistsError(EntityRegistryError):
    """Wallet is already registered."""

    code = RegistryErrorCode.ALREADY_EXISTS


class EntityNotFoundError(EntityRegistryError):
    """Wallet is not registered."""

    code = RegistryErrorCode.NOT_FOUND


class InvalidAddressError(EntityRegistryError):
    """The sentinel (burn) address is not an acceptable target."""

    code = RegistryErrorCode.INVALID_ADDRESS


_EXCEPTIONS_BY_CODE: dict[CaseErrorCode | RegistryErrorCode, type[TracebitError]] = {
    cls.code: cls
    for cls in (
        CaseNotAdminError,
        NotReporterError,
        NotReviewerError,
        EmptyMetadataError,
        CaseNotFoundError,
        InvalidCaseStateError,
        InvalidFinalStatusError,
        NotCaseOwnerError,
        CaseAlreadyReviewedError,
        RegistryNotAdminError,
        EntityAlreadyExistsError,
        EntityNotFoundError,
        InvalidAddressError,
    )
}


def exception_for(
    code: CaseErrorCode | RegistryErrorCode, **context: Any
) -> TracebitError:
    """Build the typed exception registered for ``code``.

    Raises:
        KeyError: If ``code`` has no registered exception class.
    """
    return _EXCEPTIONS_BY_CODE[code](**context)
