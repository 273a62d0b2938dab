"""
Entity registry domain types (``tracebit_kernel.domain.registry``).

A guarded keyed directory of flagged wallets.  Not a status machine:
entries are added, updated in place (by replacement) and removed, all
through an admin-only write path in
``tracebit_kernel.services.entity_registry_service``.

Invariants enforced
-------------------
* Provenance -- ``entity_type`` and ``added_by`` never change after
  the entry is created.
* Sentinel rejection -- the store's ``sentinel_address`` is never a
  registered wallet and never the admin.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tracebit_kernel.domain.block_clock import BlockClock, CounterBlockClock

# Burn address of the ledger the registry was first deployed on.
DEFAULT_SENTINEL_ADDRESS = "SP000000000000000000002Q6VF78"


@dataclass(frozen=True)
class Entity:
    """A flagged wallet entry.

    ``risk_score`` is stored as supplied; range checks belong to the
    caller.  ``timestamp`` is the block height at creation or last update.
    """

    entity_type: str
    risk_score: int | float
    metadata: str
    added_by: str
    timestamp: int


@dataclass
class RegistryStore:
    """Authoritative state of one entity registry deployment."""

    admin: str
    clock: BlockClock = field(default_factory=CounterBlockClock)
    entities: dict[str, Entity] = field(default_factory=dict)
    sentinel_address: str = DEFAULT_SENTINEL_ADDRESS

    def __post_init__(self) -> None:
        self.entities = dict(self.entities)
        if self.admin == self.sentinel_address:
            raise ValueError("Registry admin cannot be the sentinel address")
        if self.sentinel_address in self.entities:
            raise ValueError("Sentinel address cannot be a registered wallet")

    def is_sentinel(self, address: str) -> bool:
        return address == self.sentinel_address
