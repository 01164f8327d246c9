"""
Minimal script that moves funds between two accounts using the public API.

The transaction ID is written to ``--state-file`` before the transfer is
submitted, so rerunning the script after a failure resubmits the same ID
instead of risking a second transfer.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rtwire_payments import (
    ConfigError,
    InsufficientFunds,
    RTWireError,
    TxIDUsed,
    create_client,
    load_client_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Transfer funds with RTWire")
    parser.add_argument("from_account_id", type=int)
    parser.add_argument("to_account_id", type=int)
    parser.add_argument("value", type=int)
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing RTWIRE_* settings",
    )
    parser.add_argument(
        "--state-file",
        default="transfer.txid",
        help="Where the pending transaction ID is kept between runs",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_client_config(env_file=args.env_file)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_client(config=config)
    state = Path(args.state_file)

    try:
        if state.exists():
            tx_id = int(state.read_text().strip())
            logging.info("Resuming with transaction ID %s", tx_id)
        else:
            (tx_id,) = client.create_transaction_ids(1)
            state.write_text(str(tx_id))

        try:
            client.transfer(tx_id, args.from_account_id, args.to_account_id, args.value)
        except TxIDUsed:
            logging.info("Transaction %s was already submitted", tx_id)
        except InsufficientFunds:
            logging.error("Account %s cannot cover %s", args.from_account_id, args.value)
            return 1

        transaction = client.transaction(tx_id)
    except RTWireError as exc:
        logging.error("Transfer failed: %s", exc)
        return 1

    state.unlink(missing_ok=True)
    logging.info(
        "Transaction %s settled: %s moved, sender balance now %s",
        transaction.id,
        transaction.value,
        transaction.from_account_balance,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
