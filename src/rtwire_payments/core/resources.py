"""
Account, address, fee and hook operations.

Each helper performs exactly one request through :func:`envelope.call` and
decodes the payload into the matching model.
"""

from __future__ import annotations

import base64
import logging
from typing import List, Tuple

import requests

from .config import ClientConfig
from .envelope import call, decode_items, expect_one, request_target
from .errors import HookExists
from .models import Account, Address, Fee, Hook, Transaction
from .options import QueryOption, build_query

__all__ = [
    "create_account",
    "create_address",
    "create_hook",
    "delete_hook",
    "encode_hook_url",
    "get_account",
    "list_account_transactions",
    "list_accounts",
    "list_fees",
    "list_hooks",
]


def encode_hook_url(url: str) -> str:
    """Hooks are addressed by their URL in padded URL-safe base64."""
    return base64.urlsafe_b64encode(url.encode("utf-8")).decode("ascii")


def create_account(session: requests.Session, config: ClientConfig) -> Account:
    path = "accounts/"
    target = request_target(config, "POST", path)
    _, payload = call(session, config, "POST", path)
    accounts = decode_items(payload, Account.from_payload, target=target)
    account = expect_one(accounts, "account", target=target, payload=payload)
    logging.info("Created account %s", account.id)
    return account


def get_account(
    session: requests.Session, config: ClientConfig, account_id: int
) -> Account:
    path = f"accounts/{int(account_id)}"
    target = request_target(config, "GET", path)
    _, payload = call(session, config, "GET", path)
    accounts = decode_items(payload, Account.from_payload, target=target)
    return expect_one(accounts, "account", target=target, payload=payload)


def list_accounts(
    session: requests.Session,
    config: ClientConfig,
    *options: QueryOption,
) -> Tuple[str, List[Account]]:
    """
    Return ``(cursor, accounts)``.

    Pass the cursor back with :func:`options.next_page` to fetch the following
    page; an empty cursor means there are no more accounts.
    """
    path = "accounts/"
    target = request_target(config, "GET", path)
    cursor, payload = call(session, config, "GET", path, params=build_query(options))
    return cursor, decode_items(payload, Account.from_payload, target=target)


def create_address(
    session: requests.Session, config: ClientConfig, account_id: int
) -> str:
    """
    Create a deposit address for ``account_id``.

    Any funds sent to the returned address credit that account.
    """
    path = f"accounts/{int(account_id)}/addresses/"
    target = request_target(config, "POST", path)
    _, payload = call(session, config, "POST", path)
    addresses = decode_items(payload, Address.from_payload, target=target)
    return expect_one(addresses, "address", target=target, payload=payload).address


def list_account_transactions(
    session: requests.Session,
    config: ClientConfig,
    account_id: int,
    *options: QueryOption,
) -> Tuple[str, List[Transaction]]:
    path = f"accounts/{int(account_id)}/transactions/"
    target = request_target(config, "GET", path)
    cursor, payload = call(session, config, "GET", path, params=build_query(options))
    return cursor, decode_items(payload, Transaction.from_payload, target=target)


def list_fees(session: requests.Session, config: ClientConfig) -> List[Fee]:
    path = "fees/"
    target = request_target(config, "GET", path)
    _, payload = call(session, config, "GET", path)
    return decode_items(payload, Fee.from_payload, target=target)


def list_hooks(session: requests.Session, config: ClientConfig) -> List[Hook]:
    path = "hooks/"
    target = request_target(config, "GET", path)
    _, payload = call(session, config, "GET", path)
    return decode_items(payload, Hook.from_payload, target=target)


def create_hook(session: requests.Session, config: ClientConfig, url: str) -> None:
    """
    Register ``url`` to receive transaction events.

    The service may call the URL several times for the same transaction.
    Raises :class:`HookExists` when the URL is already registered.
    """
    logging.info("Registering hook %s", url)
    call(session, config, "POST", "hooks/", body={"url": url}, allowed=(HookExists,))


def delete_hook(session: requests.Session, config: ClientConfig, url: str) -> None:
    logging.info("Deleting hook %s", url)
    call(session, config, "DELETE", f"hooks/{encode_hook_url(url)}")
