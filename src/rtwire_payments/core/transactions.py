"""
Transaction ID issuance and money movement.

Transaction IDs are issued ahead of time so a caller can persist one before
attempting a transfer or debit. Resubmitting with the same ID after a crash is
safe: the service accepts an ID once and rejects any reuse with
:class:`TxIDUsed`. These helpers never retry and never swap in a fresh ID.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import requests

from .config import ClientConfig
from .envelope import call, decode_items, expect_count, expect_one, request_target
from .errors import InsufficientFunds, TxIDUsed
from .models import Transaction

__all__ = [
    "create_transaction_ids",
    "debit",
    "get_transaction",
    "transfer",
]

_SUBMISSION_ERRORS = (InsufficientFunds, TxIDUsed)


def _check_value(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"value must be a positive integer, got {value!r}")
    return value


def create_transaction_ids(
    session: requests.Session, config: ClientConfig, n: int = 1
) -> List[int]:
    """
    Issue ``n`` fresh transaction IDs in server order.

    Each ID can be consumed by exactly one :func:`transfer` or :func:`debit`.
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise ValueError(f"n must be a positive integer, got {n!r}")

    path = "transactions/"
    target = request_target(config, "POST", path)
    _, payload = call(session, config, "POST", path, body={"n": n})
    stubs = decode_items(payload, Transaction.from_payload, target=target)
    expect_count(stubs, n, "transaction ids", target=target, payload=payload)
    return [stub.id for stub in stubs]


def get_transaction(
    session: requests.Session, config: ClientConfig, tx_id: int
) -> Transaction:
    path = f"transactions/{int(tx_id)}"
    target = request_target(config, "GET", path)
    _, payload = call(session, config, "GET", path)
    transactions = decode_items(payload, Transaction.from_payload, target=target)
    return expect_one(transactions, "transaction", target=target, payload=payload)


def _submit(
    session: requests.Session, config: ClientConfig, body: Dict[str, Any]
) -> None:
    call(session, config, "PUT", "transactions/", body=body, allowed=_SUBMISSION_ERRORS)


def transfer(
    session: requests.Session,
    config: ClientConfig,
    tx_id: int,
    from_account_id: int,
    to_account_id: int,
    value: int,
) -> None:
    """
    Move ``value`` (smallest currency unit) between two accounts.

    Raises :class:`InsufficientFunds` when the sender cannot cover ``value``
    and :class:`TxIDUsed` when ``tx_id`` has already been consumed.
    """
    body = {
        "id": int(tx_id),
        "fromAccountID": int(from_account_id),
        "toAccountID": int(to_account_id),
        "value": _check_value(value),
    }
    logging.info(
        "Submitting transfer %s: %s from account %s to account %s",
        tx_id,
        value,
        from_account_id,
        to_account_id,
    )
    _submit(session, config, body)


def debit(
    session: requests.Session,
    config: ClientConfig,
    tx_id: int,
    from_account_id: int,
    to_address: str,
    value: int,
) -> None:
    """
    Withdraw ``value`` from an account to the external address ``to_address``.

    Same error contract as :func:`transfer`.
    """
    if not to_address:
        raise ValueError("to_address must not be empty")
    body = {
        "id": int(tx_id),
        "fromAccountID": int(from_account_id),
        "toAddress": to_address,
        "value": _check_value(value),
    }
    logging.info(
        "Submitting debit %s: %s from account %s to %s",
        tx_id,
        value,
        from_account_id,
        to_address,
    )
    _submit(session, config, body)
