"""
Command-line interface for exercising the RTWire client.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple

import requests

from .api import create_client
from .core.client import RTWireClient
from .core.config import ConfigError, load_client_config
from .core.errors import HookExists, RTWireError
from .core.options import QueryOption, limit, next_page, pending


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _emit(data: Any) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))


def _list_options(args: argparse.Namespace) -> list[QueryOption]:
    options = []
    if args.limit is not None:
        options.append(limit(args.limit))
    if args.next:
        options.append(next_page(args.next))
    if getattr(args, "pending", False):
        options.append(pending())
    return options


def _add_list_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--limit", type=int, help="Maximum number of results")
    parser.add_argument("--next", help="Cursor returned by a previous call")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rtwire-payments",
        description="Call the RTWire ledger endpoints",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing RTWIRE_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("create-account", help="Create a new account")

    account = commands.add_parser("account", help="Show one account")
    account.add_argument("account_id", type=int)

    accounts = commands.add_parser("accounts", help="List accounts")
    _add_list_arguments(accounts)

    address = commands.add_parser("create-address", help="Create a deposit address")
    address.add_argument("account_id", type=int)

    txns = commands.add_parser("transactions", help="List an account's transactions")
    txns.add_argument("account_id", type=int)
    _add_list_arguments(txns)
    txns.add_argument(
        "--pending",
        action="store_true",
        help="Only list transactions that are not yet credited",
    )

    txids = commands.add_parser("create-txids", help="Issue fresh transaction IDs")
    txids.add_argument("n", type=int, nargs="?", default=1)

    txn = commands.add_parser("transaction", help="Show one transaction")
    txn.add_argument("tx_id", type=int)

    transfer = commands.add_parser("transfer", help="Move funds between accounts")
    transfer.add_argument("tx_id", type=int)
    transfer.add_argument("from_account_id", type=int)
    transfer.add_argument("to_account_id", type=int)
    transfer.add_argument("value", type=int)

    debit = commands.add_parser("debit", help="Withdraw funds to an address")
    debit.add_argument("tx_id", type=int)
    debit.add_argument("from_account_id", type=int)
    debit.add_argument("to_address")
    debit.add_argument("value", type=int)

    commands.add_parser("fees", help="Show current miner fee estimates")
    commands.add_parser("hooks", help="List registered hooks")

    create_hook = commands.add_parser("create-hook", help="Register a hook URL")
    create_hook.add_argument("url")

    delete_hook = commands.add_parser("delete-hook", help="Remove a hook URL")
    delete_hook.add_argument("url")

    return parser


def _create_hook(client: RTWireClient, args: argparse.Namespace) -> None:
    try:
        client.create_hook(args.url)
    except HookExists:
        logging.warning("Hook %s is already registered", args.url)


def _page(result: Tuple[str, list]) -> Dict[str, Any]:
    cursor, items = result
    return {"next": cursor, "items": [item.to_dict() for item in items]}


_COMMANDS: Dict[str, Callable[[RTWireClient, argparse.Namespace], Any]] = {
    "create-account": lambda c, a: c.create_account().to_dict(),
    "account": lambda c, a: c.account(a.account_id).to_dict(),
    "accounts": lambda c, a: _page(c.accounts(*_list_options(a))),
    "create-address": lambda c, a: {"address": c.create_address(a.account_id)},
    "transactions": lambda c, a: _page(
        c.account_transactions(a.account_id, *_list_options(a))
    ),
    "create-txids": lambda c, a: c.create_transaction_ids(a.n),
    "transaction": lambda c, a: c.transaction(a.tx_id).to_dict(),
    "transfer": lambda c, a: c.transfer(
        a.tx_id, a.from_account_id, a.to_account_id, a.value
    ),
    "debit": lambda c, a: c.debit(a.tx_id, a.from_account_id, a.to_address, a.value),
    "fees": lambda c, a: [fee.to_dict() for fee in c.fees()],
    "hooks": lambda c, a: [hook.to_dict() for hook in c.hooks()],
    "create-hook": _create_hook,
    "delete-hook": lambda c, a: c.delete_hook(a.url),
}


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    session: Optional[requests.Session] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_client_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_client(config=config, session=session or requests.Session())
    try:
        result = _COMMANDS[args.command](client, args)
    except (RTWireError, ValueError) as exc:
        logging.error("%s failed: %s", args.command, exc)
        return 1

    if result is not None:
        _emit(result)
    return 0


def main() -> None:
    sys.exit(run_cli())
