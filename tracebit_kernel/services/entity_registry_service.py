"""
EntityRegistryService -- admin-maintained directory of flagged wallets.

Responsibility:
    Applies guarded CRUD operations to a ``RegistryStore``.  Writes are
    admin-only; reads are public.  Entries are timestamped with the
    block height read from the store's injected ``BlockClock``.

Architecture position:
    Kernel > Services -- imperative shell over
    ``tracebit_kernel.domain.registry``.

Invariants enforced:
    - Provenance: ``update_entity`` preserves ``entity_type`` and
      ``added_by``.
    - Sentinel rejection: the sentinel address is refused as a wallet
      and as a new admin.
    - Atomic rejection: guards run before mutation.

Failure modes:
    Returned, not raised -- see ``RegistryErrorCode`` (100, 101, 102, 104).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from tracebit_kernel.domain.authorization import is_admin
from tracebit_kernel.domain.error_codes import RegistryErrorCode
from tracebit_kernel.domain.registry import Entity, RegistryStore
from tracebit_kernel.domain.result import Result
from tracebit_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.entity_registry")


class EntityRegistryService:
    """Service for the entity registry."""

    def __init__(self, store: RegistryStore):
        self.store = store

    # =========================================================================
    # Admin writes
    # =========================================================================

    def add_entity(
        self,
        caller: str,
        wallet: str,
        entity_type: str,
        risk_score: int | float,
        metadata: str,
    ) -> Result[bool]:
        """Register ``wallet``. A second add for the same wallet is refused."""
        with LogContext.bind(actor_id=caller, operation="add_entity"):
            if not is_admin(self.store, caller):
                return self._reject(RegistryErrorCode.NOT_ADMIN, wallet=wallet)
            if self.store.is_sentinel(wallet):
                return self._reject(RegistryErrorCode.INVALID_ADDRESS, wallet=wallet)
            if wallet in self.store.entities:
                return self._reject(RegistryErrorCode.ALREADY_EXISTS, wallet=wallet)

            height = self.store.clock.height()
            self.store.entities[wallet] = Entity(
                entity_type=entity_type,
                risk_score=risk_score,
                metadata=metadata,
                added_by=caller,
                timestamp=height,
            )

            logger.info(
                "entity_added",
                extra={
                    "wallet": wallet,
                    "entity_type": entity_type,
                    "risk_score": risk_score,
                    "block_height": height,
                },
            )
            return Result.ok(True)

    def update_entity(
        self,
        caller: str,
        wallet: str,
        risk_score: int | float,
        metadata: str,
    ) -> Result[bool]:
        """Replace risk score and metadata; refresh the timestamp."""
        with LogContext.bind(actor_id=caller, operation="update_entity"):
            if not is_admin(self.store, caller):
                return self._reject(RegistryErrorCode.NOT_ADMIN, wallet=wallet)
            existing = self.store.entities.get(wallet)
            if existing is None:
                return self._reject(RegistryErrorCode.NOT_FOUND, wallet=wallet)

            height = self.store.clock.height()
            self.store.entities[wallet] = replace(
                existing,
                risk_score=risk_score,
                metadata=metadata,
                timestamp=height,
            )

            logger.info(
                "entity_updated",
                extra={
                    "wallet": wallet,
                    "risk_score": risk_score,
                    "previous_risk_score": existing.risk_score,
                    "block_height": height,
                },
            )
            return Result.ok(True)

    def remove_entity(self, caller: str, wallet: str) -> Result[bool]:
        with LogContext.bind(actor_id=caller, operation="remove_entity"):
            if not is_admin(self.store, caller):
                return self._reject(RegistryErrorCode.NOT_ADMIN, wallet=wallet)
            if wallet not in self.store.entities:
                return self._reject(RegistryErrorCode.NOT_FOUND, wallet=wallet)

            del self.store.entities[wallet]

            logger.info("entity_removed", extra={"wallet": wallet})
            return Result.ok(True)

    def transfer_admin(self, caller: str, new_admin: str) -> Result[bool]:
        """Hand the registry to ``new_admin``. The sentinel address is refused."""
        with LogContext.bind(actor_id=caller, operation="transfer_admin"):
            if not is_admin(self.store, caller):
                return self._reject(RegistryErrorCode.NOT_ADMIN)
            if self.store.is_sentinel(new_admin):
                return self._reject(RegistryErrorCode.INVALID_ADDRESS, new_admin=new_admin)

            self.store.admin = new_admin

            logger.info(
                "admin_transferred",
                extra={"previous_admin": caller, "new_admin": new_admin},
            )
            return Result.ok(True)

    # =========================================================================
    # Ledger clock
    # =========================================================================

    def increment_block(self) -> int:
        """Advance the block height by one and return the new height."""
        height = self.store.clock.advance(1)
        logger.info("block_advanced", extra={"block_height": height})
        return height

    def block_height(self) -> int:
        """Current block height. Reading it does not consume a replayed value."""
        return self.store.clock.peek()

    # =========================================================================
    # Public reads
    # =========================================================================

    def get_entity(self, wallet: str) -> Result[Entity]:
        entity = self.store.entities.get(wallet)
        if entity is None:
            return Result.fail(RegistryErrorCode.NOT_FOUND)
        return Result.ok(entity)

    def has_entity(self, wallet: str) -> bool:
        return wallet in self.store.entities

    def get_admin(self) -> str:
        return self.store.admin

    @staticmethod
    def _reject(code: RegistryErrorCode, **fields: Any) -> Result[Any]:
        logger.warning(
            "registry_operation_rejected",
            extra={"error_code": int(code), "error_name": code.name, **fields},
        )
        return Result.fail(code)
