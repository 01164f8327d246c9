"""
Python client for the RTWire ledger service.

The most useful pieces are re-exported here so integrators can
``from rtwire_payments import ...`` without navigating the package.
"""

from .api import create_client
from .core import (
    CREDIT,
    DEBIT,
    MAINNET,
    MAINNET_URL,
    PENDING,
    TESTNET3,
    TESTNET3_URL,
    TRANSFER,
    Account,
    ClientConfig,
    ClientEnvironment,
    ClientParameters,
    ConfigError,
    ContentTypeError,
    DomainError,
    Envelope,
    Fee,
    Hook,
    HookExists,
    InsufficientFunds,
    InvariantViolation,
    LedgerClient,
    ProtocolError,
    QueryOption,
    RTWireClient,
    RTWireError,
    Transaction,
    TransactionEvent,
    TransportError,
    TxIDUsed,
    UnknownObjectType,
    build_environment,
    decode_response,
    iter_pages,
    limit,
    load_client_config,
    next_page,
    parse_transaction_events,
    pending,
    unmarshal,
)

__all__ = (
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
    "create_client",
    "decode_response",
    "iter_pages",
    "limit",
    "load_client_config",
    "next_page",
    "parse_transaction_events",
    "pending",
    "unmarshal",
)
