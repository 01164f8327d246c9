"""Shared fixtures for the rtwire_payments tests."""

import pytest

from fakes.fake_ledger import BASE_URL, FakeLedger, FakeLedgerSession
from rtwire_payments import ClientConfig, RTWireClient


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL, user="user", password="pass", timeout_seconds=5)


@pytest.fixture
def ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def session(ledger: FakeLedger) -> FakeLedgerSession:
    return FakeLedgerSession(ledger)


@pytest.fixture
def client(config: ClientConfig, session: FakeLedgerSession) -> RTWireClient:
    return RTWireClient(config, session=session)


@pytest.fixture
def funded_account(client: RTWireClient, ledger: FakeLedger):
    """An account holding 10 units credited through its deposit address."""
    account = client.create_account()
    address = client.create_address(account.id)
    ledger.credit(address, 10)
    return account
