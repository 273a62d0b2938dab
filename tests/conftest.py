"""
Pytest fixtures for the tracebit test suite.

Provides:
- Fresh, independent case and registry stores per test
- A deterministic block clock starting at height 100
- A JSON log capture stream wired into tracebit_kernel logging
"""

import json
import logging
from io import StringIO

import pytest

from tracebit_kernel.domain.block_clock import CounterBlockClock
from tracebit_kernel.domain.cases import CaseStore
from tracebit_kernel.domain.registry import RegistryStore
from tracebit_kernel.logging_config import (
    LogContext,
    configure_logging,
    reset_logging,
)
from tracebit_kernel.services.case_workflow_service import CaseWorkflowService
from tracebit_kernel.services.entity_registry_service import EntityRegistryService

CASE_ADMIN = "admin.test"
REPORTER = "reporter.test"
REVIEWER = "reviewer.test"
OUTSIDER = "outsider.test"

REGISTRY_ADMIN = "ST1ADMIN"
WALLET_1 = "ST2ABC123"
WALLET_2 = "ST3XYZ456"
SENTINEL = "SP000000000000000000002Q6VF78"


@pytest.fixture
def case_store() -> CaseStore:
    return CaseStore(
        admin=CASE_ADMIN,
        reporters={REPORTER},
        reviewers={REVIEWER},
    )


@pytest.fixture
def case_service(case_store) -> CaseWorkflowService:
    return CaseWorkflowService(case_store)


@pytest.fixture
def block_clock() -> CounterBlockClock:
    return CounterBlockClock(100)


@pytest.fixture
def registry_store(block_clock) -> RegistryStore:
    return RegistryStore(admin=REGISTRY_ADMIN, clock=block_clock)


@pytest.fixture
def registry_service(registry_store) -> EntityRegistryService:
    return EntityRegistryService(registry_store)


class LogCapture:
    """Collects JSON log lines emitted under tracebit_kernel."""

    def __init__(self, stream: StringIO):
        self._stream = stream

    def records(self) -> list[dict]:
        lines = self._stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    def messages(self) -> list[str]:
        return [record["message"] for record in self.records()]


@pytest.fixture
def log_capture():
    """Route tracebit_kernel logs (DEBUG and up) into a parseable stream."""
    reset_logging()
    LogContext.clear()
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    configure_logging(handler=handler, level=logging.DEBUG)
    yield LogCapture(stream)
    LogContext.clear()
    reset_logging()
