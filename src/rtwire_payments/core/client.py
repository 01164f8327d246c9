"""
Client facade over the RTWire HTTP endpoints.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Tuple

import requests

from . import resources, transactions
from .config import ClientConfig
from .models import Account, Fee, Hook, Transaction
from .options import QueryOption

__all__ = ["LedgerClient", "RTWireClient"]


class LedgerClient(Protocol):
    """
    Operations offered by the ledger service.

    Application code should depend on this protocol so that test doubles can
    stand in for :class:`RTWireClient`.
    """

    def create_account(self) -> Account: ...

    def account(self, account_id: int) -> Account: ...

    def accounts(self, *options: QueryOption) -> Tuple[str, List[Account]]: ...

    def create_address(self, account_id: int) -> str: ...

    def create_transaction_ids(self, n: int = 1) -> List[int]: ...

    def transaction(self, tx_id: int) -> Transaction: ...

    def account_transactions(
        self, account_id: int, *options: QueryOption
    ) -> Tuple[str, List[Transaction]]: ...

    def transfer(
        self, tx_id: int, from_account_id: int, to_account_id: int, value: int
    ) -> None: ...

    def debit(
        self, tx_id: int, from_account_id: int, to_address: str, value: int
    ) -> None: ...

    def fees(self) -> List[Fee]: ...

    def create_hook(self, url: str) -> None: ...

    def hooks(self) -> List[Hook]: ...

    def delete_hook(self, url: str) -> None: ...


class RTWireClient:
    """
    :class:`LedgerClient` bound to a :class:`requests.Session`.

    Every method is a single round trip with no client-side state, so one
    instance can be shared between threads as long as the session can.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def create_account(self) -> Account:
        return resources.create_account(self.session, self.config)

    def account(self, account_id: int) -> Account:
        return resources.get_account(self.session, self.config, account_id)

    def accounts(self, *options: QueryOption) -> Tuple[str, List[Account]]:
        return resources.list_accounts(self.session, self.config, *options)

    def create_address(self, account_id: int) -> str:
        return resources.create_address(self.session, self.config, account_id)

    def create_transaction_ids(self, n: int = 1) -> List[int]:
        return transactions.create_transaction_ids(self.session, self.config, n)

    def transaction(self, tx_id: int) -> Transaction:
        return transactions.get_transaction(self.session, self.config, tx_id)

    def account_transactions(
        self, account_id: int, *options: QueryOption
    ) -> Tuple[str, List[Transaction]]:
        return resources.list_account_transactions(
            self.session, self.config, account_id, *options
        )

    def transfer(
        self, tx_id: int, from_account_id: int, to_account_id: int, value: int
    ) -> None:
        transactions.transfer(
            self.session, self.config, tx_id, from_account_id, to_account_id, value
        )

    def debit(
        self, tx_id: int, from_account_id: int, to_address: str, value: int
    ) -> None:
        transactions.debit(
            self.session, self.config, tx_id, from_account_id, to_address, value
        )

    def fees(self) -> List[Fee]:
        return resources.list_fees(self.session, self.config)

    def create_hook(self, url: str) -> None:
        resources.create_hook(self.session, self.config, url)

    def hooks(self) -> List[Hook]:
        return resources.list_hooks(self.session, self.config)

    def delete_hook(self, url: str) -> None:
        resources.delete_hook(self.session, self.config, url)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "RTWireClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
