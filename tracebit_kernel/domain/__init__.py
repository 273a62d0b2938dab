"""
Tracebit domain layer -- pure value objects and stores.  ZERO I/O.

Nothing in this package logs, reads configuration, or touches a clock
other than through an injected ``BlockClock``.
"""

from tracebit_kernel.domain.authorization import is_admin, is_reporter, is_reviewer
from tracebit_kernel.domain.block_clock import (
    BlockClock,
    CounterBlockClock,
    SequentialBlockClock,
)
from tracebit_kernel.domain.cases import (
    CASE_TRANSITIONS,
    FINAL_CASE_STATUSES,
    TERMINAL_CASE_STATUSES,
    Case,
    CaseStatus,
    CaseStore,
)
from tracebit_kernel.domain.error_codes import CaseErrorCode, RegistryErrorCode
from tracebit_kernel.domain.registry import (
    DEFAULT_SENTINEL_ADDRESS,
    Entity,
    RegistryStore,
)
from tracebit_kernel.domain.result import Result

__all__ = [
    "BlockClock",
    "CASE_TRANSITIONS",
    "Case",
    "CaseErrorCode",
    "CaseStatus",
    "CaseStore",
    "CounterBlockClock",
    "DEFAULT_SENTINEL_ADDRESS",
    "Entity",
    "FINAL_CASE_STATUSES",
    "RegistryErrorCode",
    "RegistryStore",
    "Result",
    "SequentialBlockClock",
    "TERMINAL_CASE_STATUSES",
    "is_admin",
    "is_reporter",
    "is_reviewer",
]
