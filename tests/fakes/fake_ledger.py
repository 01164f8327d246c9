"""
In-memory stand-in for the RTWire service.

``FakeLedgerSession`` is a :class:`requests.Session` whose ``request`` method
answers from local state using the same envelope protocol as the real
service, so the client can be exercised end to end without a network.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit

import requests

BASE_URL = "https://ledger.test/v1/mainnet"


@dataclass
class RecordedCall:
    method: str
    url: str
    params: Optional[Dict[str, str]]
    json: Any
    headers: Dict[str, str]
    auth: Any
    timeout: Any


@dataclass
class Delivery:
    url: str
    headers: Dict[str, str]
    body: bytes


def make_response(status: int, body: Any = None, *, raw: Optional[bytes] = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = b""
    return response


def envelope(object_type: str, payload: Any, next_cursor: str = "") -> Dict[str, Any]:
    return {"type": object_type, "next": next_cursor, "payload": payload}


def error_envelope(message: str) -> Dict[str, Any]:
    return envelope("error", [{"message": message}])


@dataclass
class FakeLedger:
    accounts: Dict[int, int] = field(default_factory=dict)
    addresses: Dict[str, int] = field(default_factory=dict)
    issued_ids: Dict[int, bool] = field(default_factory=dict)
    transactions: Dict[int, Dict[str, Any]] = field(default_factory=dict)
    account_txns: Dict[int, List[int]] = field(default_factory=dict)
    hooks: List[str] = field(default_factory=list)
    deliveries: List[Delivery] = field(default_factory=list)
    _next_account: int = 1
    _next_tx: int = 1000

    def _new_tx_id(self) -> int:
        self._next_tx += 1
        return self._next_tx

    def _record(self, tx: Dict[str, Any], status: str = "") -> None:
        self.transactions[tx["id"]] = tx
        for account_id in (tx["fromAccountID"], tx["toAccountID"]):
            if account_id:
                self.account_txns.setdefault(account_id, []).append(tx["id"])
        if tx["type"] == "credit" and self.hooks:
            event = dict(tx, status=status)
            body = json.dumps(envelope("transactions", [event])).encode("utf-8")
            for url in self.hooks:
                self.deliveries.append(
                    Delivery(url, {"Content-Type": "application/json"}, body)
                )

    def _tx(self, tx_id: int, tx_type: str, from_id: int, to_id: int, value: int) -> Dict[str, Any]:
        return {
            "id": tx_id,
            "type": tx_type,
            "fromAccountID": from_id,
            "toAccountID": to_id,
            "fromAccountBalance": self.accounts.get(from_id, 0),
            "toAccountBalance": self.accounts.get(to_id, 0),
            "fromAccountTxID": 0,
            "toAccountTxID": 0,
            "value": value,
            "created": datetime(2017, 5, 1, 12, 0, tzinfo=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "txHashes": [],
            "txOutIndex": 0,
        }

    def credit(self, address: str, value: int, *, pending: bool = False) -> int:
        """Simulate an external deposit to ``address``."""
        account_id = self.addresses[address]
        if not pending:
            self.accounts[account_id] += value
        tx = self._tx(self._new_tx_id(), "credit", 0, account_id, value)
        tx["txHashes"] = ["f4184fc596403b9d638783cf57adfe4c75c605f6356fbc91338530e9831e9e16"]
        tx["pending"] = pending
        self._record(tx, status="pending" if pending else "")
        return tx["id"]

    def handle(self, method: str, path: str, params: Dict[str, str], body: Any) -> requests.Response:
        parts = [p for p in path.split("/") if p]

        if parts == ["accounts"] and method == "POST":
            account_id = self._next_account
            self._next_account += 1
            self.accounts[account_id] = 0
            return make_response(201, envelope("accounts", [{"id": account_id, "balance": 0}]))

        if parts == ["accounts"] and method == "GET":
            return self._list_accounts(params)

        if len(parts) == 2 and parts[0] == "accounts" and method == "GET":
            account_id = int(parts[1])
            if account_id not in self.accounts:
                return make_response(404, error_envelope("account not found"))
            return make_response(
                200,
                envelope("accounts", [{"id": account_id, "balance": self.accounts[account_id]}]),
            )

        if len(parts) == 3 and parts[0] == "accounts" and parts[2] == "addresses" and method == "POST":
            account_id = int(parts[1])
            if account_id not in self.accounts:
                return make_response(404, error_envelope("account not found"))
            address = f"1Fake{account_id:04d}{len(self.addresses):04d}"
            self.addresses[address] = account_id
            return make_response(201, envelope("addresses", [{"address": address}]))

        if len(parts) == 3 and parts[0] == "accounts" and parts[2] == "transactions" and method == "GET":
            account_id = int(parts[1])
            txns = [self.transactions[i] for i in self.account_txns.get(account_id, [])]
            want_pending = params.get("status") == "pending"
            txns = [t for t in txns if bool(t.get("pending")) == want_pending]
            return make_response(200, envelope("transactions", [self._public(t) for t in txns]))

        if parts == ["transactions"] and method == "POST":
            n = int(body["n"])
            ids = [self._new_tx_id() for _ in range(n)]
            for tx_id in ids:
                self.issued_ids[tx_id] = False
            return make_response(201, envelope("transactions", [{"id": i} for i in ids]))

        if parts == ["transactions"] and method == "PUT":
            return self._submit(body)

        if len(parts) == 2 and parts[0] == "transactions" and method == "GET":
            tx = self.transactions.get(int(parts[1]))
            if tx is None:
                return make_response(404, error_envelope("transaction not found"))
            return make_response(200, envelope("transactions", [self._public(tx)]))

        if parts == ["fees"] and method == "GET":
            return make_response(
                200,
                envelope("fees", [{"feePerByte": 120, "blockHeight": 470000}]),
            )

        if parts == ["hooks"] and method == "POST":
            url = body["url"]
            if url in self.hooks:
                return make_response(409, error_envelope("hook exists"))
            self.hooks.append(url)
            return make_response(201)

        if parts == ["hooks"] and method == "GET":
            return make_response(200, envelope("hooks", [{"url": u} for u in self.hooks]))

        if len(parts) == 2 and parts[0] == "hooks" and method == "DELETE":
            url = base64.urlsafe_b64decode(parts[1].encode("ascii")).decode("utf-8")
            if url in self.hooks:
                self.hooks.remove(url)
            return make_response(204)

        return make_response(404, error_envelope("not found"))

    @staticmethod
    def _public(tx: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in tx.items() if k != "pending"}

    def _list_accounts(self, params: Dict[str, str]) -> requests.Response:
        ids = sorted(self.accounts)
        start = int(params.get("next") or 0)
        size = int(params.get("limit") or 100)
        page = [i for i in ids if i >= start][:size]
        remaining = [i for i in ids if page and i > page[-1]]
        cursor = str(remaining[0]) if remaining else ""
        payload = [{"id": i, "balance": self.accounts[i]} for i in page]
        return make_response(200, envelope("accounts", payload, cursor))

    def _submit(self, body: Dict[str, Any]) -> requests.Response:
        tx_id = int(body["id"])
        if tx_id not in self.issued_ids:
            return make_response(400, error_envelope("invalid transaction id"))
        if self.issued_ids[tx_id]:
            # The service reports reuse under a 2xx status.
            return make_response(200, error_envelope("TxID used"))
        value = int(body["value"])
        from_id = int(body["fromAccountID"])
        to_id = int(body.get("toAccountID", 0))
        if from_id not in self.accounts or (to_id and to_id not in self.accounts):
            return make_response(404, error_envelope("account not found"))
        if self.accounts[from_id] < value:
            return make_response(400, error_envelope("insufficient funds"))

        self.issued_ids[tx_id] = True
        self.accounts[from_id] -= value
        if to_id:
            self.accounts[to_id] += value
            tx = self._tx(tx_id, "transfer", from_id, to_id, value)
        else:
            tx = self._tx(tx_id, "debit", from_id, 0, value)
        self._record(tx)
        return make_response(200)


class FakeLedgerSession(requests.Session):
    def __init__(self, ledger: Optional[FakeLedger] = None, base_url: str = BASE_URL) -> None:
        super().__init__()
        self.ledger = ledger or FakeLedger()
        self.base_path = urlsplit(base_url).path
        self.calls: List[RecordedCall] = []

    def request(self, method, url, params=None, json=None, headers=None, auth=None, timeout=None, **kwargs):  # type: ignore[override]
        self.calls.append(
            RecordedCall(method, url, params, json, dict(headers or {}), auth, timeout)
        )
        path = urlsplit(url).path
        if not path.startswith(self.base_path):
            return make_response(404, error_envelope("unknown network"))
        return self.ledger.handle(method, path[len(self.base_path):], dict(params or {}), json)


class StaticSession(requests.Session):
    """Session that answers every request with the queued responses in order."""

    def __init__(self, *responses: requests.Response) -> None:
        super().__init__()
        self.responses: List[requests.Response] = list(responses)
        self.calls: List[Tuple[str, str, Dict[str, Any]]] = []

    def request(self, method, url, **kwargs):  # type: ignore[override]
        self.calls.append((method, url, kwargs))
        return self.responses.pop(0)


class FailingSession(requests.Session):
    def request(self, method, url, **kwargs):  # type: ignore[override]
        raise requests.ConnectionError(f"cannot reach {url}")
