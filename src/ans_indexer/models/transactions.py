"""Upstream transaction models, as served by the Aptos node REST API."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TransactionKind(str, Enum):
    """Discriminant of an Aptos transaction (the REST `type` field)."""

    USER = "user_transaction"
    GENESIS = "genesis_transaction"
    BLOCK_METADATA = "block_metadata_transaction"
    STATE_CHECKPOINT = "state_checkpoint_transaction"
    BLOCK_EPILOGUE = "block_epilogue_transaction"
    VALIDATOR = "validator_transaction"
    PENDING = "pending_transaction"
    UNKNOWN = "unknown"

    @classmethod
    def from_wire(cls, value: str | None) -> TransactionKind:
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


def normalize_address(addr: str) -> str:
    """Canonical short form of an account address: lowercase, 0x, no leading zeros.

    "0x0001" and "0x1" normalize to the same value.
    """
    a = addr.strip().lower()
    if a.startswith("0x"):
        a = a[2:]
    a = a.lstrip("0")
    return "0x" + (a or "0")


@dataclass(frozen=True)
class MoveStructTag:
    """`<address>::<module>::<name>` descriptor of a Move struct type."""

    address: str
    module: str
    name: str

    @property
    def qualified_name(self) -> str:
        return f"{self.module}::{self.name}"

    @classmethod
    def parse(cls, type_str: str) -> MoveStructTag | None:
        """Parse a Move type string; returns None if it is not a struct type.

        Generic parameters are dropped: "0x1::coin::CoinStore<0x1::aptos_coin::AptosCoin>"
        parses as (0x1, coin, CoinStore).
        """
        base = type_str.split("<", 1)[0].strip()
        parts = base.split("::")
        if len(parts) != 3 or not all(parts):
            return None
        address, module, name = parts
        if not address.lower().startswith("0x"):
            return None
        return cls(address=address, module=module, name=name)


@dataclass(frozen=True)
class ContractEvent:
    """One event emitted during transaction execution."""

    type_tag: str  # e.g. "0x867e...::domains::RegisterNameEventV1"
    data: Any  # raw JSON payload

    @property
    def struct_tag(self) -> MoveStructTag | None:
        return MoveStructTag.parse(self.type_tag)


@dataclass(frozen=True)
class Transaction:
    """A committed transaction and its ordered events."""

    kind: TransactionKind
    version: int
    events: tuple[ContractEvent, ...] = field(default_factory=tuple)
    hash: str | None = None

    @property
    def is_user_transaction(self) -> bool:
        return self.kind is TransactionKind.USER


def parse_transaction(raw: dict[str, Any]) -> Transaction:
    """Build a Transaction from its REST JSON representation.

    Raises ValueError if the transaction carries no version (pending
    transactions have none).
    """
    version = raw.get("version")
    if version is None:
        raise ValueError(f"transaction {raw.get('hash')} has no version")
    events = tuple(
        ContractEvent(type_tag=str(ev.get("type", "")), data=ev.get("data"))
        for ev in raw.get("events") or []
    )
    return Transaction(
        kind=TransactionKind.from_wire(raw.get("type")),
        version=int(version),
        events=events,
        hash=raw.get("hash"),
    )
