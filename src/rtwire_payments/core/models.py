"""
Typed views of the objects carried in envelope payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple

__all__ = [
    "TRANSFER",
    "DEBIT",
    "CREDIT",
    "PENDING",
    "Account",
    "Address",
    "Fee",
    "Hook",
    "Transaction",
    "TransactionEvent",
]

TRANSFER = "transfer"
DEBIT = "debit"
CREDIT = "credit"

PENDING = "pending"


def _parse_timestamp(raw: Any) -> Optional[datetime]:
    if not raw:
        return None
    if isinstance(raw, datetime):
        return raw
    return datetime.fromisoformat(str(raw).replace("Z", "+00:00"))


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class Account:
    id: int
    balance: int = 0

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Account":
        return cls(id=int(payload["id"]), balance=int(payload.get("balance") or 0))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "balance": self.balance}


@dataclass(frozen=True)
class Address:
    """A deposit address bound to a single account."""

    address: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Address":
        # The service has emitted both spellings of the key.
        raw = payload.get("address", payload.get("Address"))
        if raw is None:
            raise KeyError("address")
        return cls(address=str(raw))


@dataclass(frozen=True)
class Fee:
    fee_per_byte: int
    block_height: int

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Fee":
        return cls(
            fee_per_byte=int(payload.get("feePerByte") or 0),
            block_height=int(payload.get("blockHeight") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"feePerByte": self.fee_per_byte, "blockHeight": self.block_height}


@dataclass(frozen=True)
class Hook:
    url: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Hook":
        return cls(url=str(payload["url"]))

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url}


@dataclass(frozen=True)
class Transaction:
    """
    A settled (or pending) movement of funds.

    ``type`` is one of :data:`TRANSFER`, :data:`DEBIT` or :data:`CREDIT`.
    Freshly issued transaction IDs come back as transactions where only ``id``
    is meaningful.
    """

    id: int
    type: str = ""
    from_account_id: int = 0
    to_account_id: int = 0
    from_account_balance: int = 0
    to_account_balance: int = 0
    from_account_tx_id: int = 0
    to_account_tx_id: int = 0
    value: int = 0
    created: Optional[datetime] = None
    tx_hashes: Tuple[str, ...] = field(default_factory=tuple)
    tx_out_index: int = 0

    @classmethod
    def _fields_from_payload(cls, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "id": int(payload["id"]),
            "type": payload.get("type") or "",
            "from_account_id": int(payload.get("fromAccountID") or 0),
            "to_account_id": int(payload.get("toAccountID") or 0),
            "from_account_balance": int(payload.get("fromAccountBalance") or 0),
            "to_account_balance": int(payload.get("toAccountBalance") or 0),
            "from_account_tx_id": int(payload.get("fromAccountTxID") or 0),
            "to_account_tx_id": int(payload.get("toAccountTxID") or 0),
            "value": int(payload.get("value") or 0),
            "created": _parse_timestamp(payload.get("created")),
            "tx_hashes": tuple(payload.get("txHashes") or ()),
            "tx_out_index": int(payload.get("txOutIndex") or 0),
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Transaction":
        return cls(**cls._fields_from_payload(payload))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "fromAccountID": self.from_account_id,
            "toAccountID": self.to_account_id,
            "fromAccountBalance": self.from_account_balance,
            "toAccountBalance": self.to_account_balance,
            "fromAccountTxID": self.from_account_tx_id,
            "toAccountTxID": self.to_account_tx_id,
            "value": self.value,
            "created": _format_timestamp(self.created),
            "txHashes": list(self.tx_hashes),
            "txOutIndex": self.tx_out_index,
        }


@dataclass(frozen=True)
class TransactionEvent(Transaction):
    """
    A transaction pushed to a registered hook.

    ``status`` is empty once the funds are credited and :data:`PENDING` while
    the service has seen the transaction but not yet released it.
    """

    status: str = ""

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TransactionEvent":
        fields = cls._fields_from_payload(payload)
        return cls(status=payload.get("status") or "", **fields)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["status"] = self.status
        return data
