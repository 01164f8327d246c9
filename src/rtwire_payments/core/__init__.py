"""
Core primitives for talking to the RTWire ledger service.
"""

from .client import LedgerClient, RTWireClient
from .config import (
    MAINNET,
    MAINNET_URL,
    TESTNET3,
    TESTNET3_URL,
    ClientConfig,
    ClientParameters,
    ConfigError,
    load_client_config,
)
from .environment import ClientEnvironment, build_environment
from .envelope import Envelope, decode_response
from .errors import (
    ContentTypeError,
    DomainError,
    HookExists,
    InsufficientFunds,
    InvariantViolation,
    ProtocolError,
    RTWireError,
    TransportError,
    TxIDUsed,
    UnknownObjectType,
)
from .models import (
    CREDIT,
    DEBIT,
    PENDING,
    TRANSFER,
    Account,
    Fee,
    Hook,
    Transaction,
    TransactionEvent,
)
from .options import QueryOption, iter_pages, limit, next_page, pending
from .webhooks import parse_transaction_events, unmarshal

__all__ = [
    "CREDIT",
    "DEBIT",
    "MAINNET",
    "MAINNET_URL",
    "PENDING",
    "TESTNET3",
    "TESTNET3_URL",
    "TRANSFER",
    "Account",
    "ClientConfig",
    "ClientEnvironment",
    "ClientParameters",
    "ConfigError",
    "ContentTypeError",
    "DomainError",
    "Envelope",
    "Fee",
    "Hook",
    "HookExists",
    "InsufficientFunds",
    "InvariantViolation",
    "LedgerClient",
    "ProtocolError",
    "QueryOption",
    "RTWireClient",
    "RTWireError",
    "Transaction",
    "TransactionEvent",
    "TransportError",
    "TxIDUsed",
    "UnknownObjectType",
    "build_environment",
    "decode_response",
    "iter_pages",
    "limit",
    "load_client_config",
    "next_page",
    "parse_transaction_events",
    "pending",
    "unmarshal",
]
