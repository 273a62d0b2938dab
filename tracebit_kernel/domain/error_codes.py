"""
Error codes (``tracebit_kernel.domain.error_codes``).

Error codes are part of the externally observable contract.  Callers
branch on them, so a value must never change once published.

* ``CaseErrorCode`` -- named codes of the case reporting workflow.
* ``RegistryErrorCode`` -- numeric codes of the entity registry.
  Code 103 is intentionally unassigned.
"""

from enum import Enum, IntEnum, unique


@unique
class CaseErrorCode(str, Enum):
    """Named rejection codes for the case workflow."""

    NOT_ADMIN = "ERR-NOT-ADMIN"
    NOT_REPORTER = "ERR-NOT-REPORTER"
    NOT_REVIEWER = "ERR-NOT-REVIEWER"
    EMPTY_METADATA = "ERR-EMPTY-METADATA"
    CASE_NOT_FOUND = "ERR-CASE-NOT-FOUND"
    INVALID_STATE = "ERR-INVALID-STATE"
    INVALID_FINAL_STATUS = "ERR-INVALID-FINAL-STATUS"
    NOT_OWNER = "ERR-NOT-OWNER"
    ALREADY_REVIEWED = "ERR-ALREADY-REVIEWED"


@unique
class RegistryErrorCode(IntEnum):
    """Numeric rejection codes for the entity registry."""

    NOT_ADMIN = 100
    ALREADY_EXISTS = 101
    NOT_FOUND = 102
    INVALID_ADDRESS = 104
