"""
Authorization predicates.

Each gated operation evaluates exactly one of these before any mutation.
The kernel does not resolve identities; the caller string is supplied by
the execution environment and compared verbatim.
"""

from __future__ import annotations

from typing import Protocol


class _HasAdmin(Protocol):
    admin: str


class _HasRoleSets(_HasAdmin, Protocol):
    reporters: set[str]
    reviewers: set[str]


def is_admin(store: _HasAdmin, caller: str) -> bool:
    """True iff ``caller`` is the store's singleton admin."""
    return caller == store.admin


def is_reporter(store: _HasRoleSets, caller: str) -> bool:
    return caller in store.reporters


def is_reviewer(store: _HasRoleSets, caller: str) -> bool:
    return caller in store.reviewers
