"""
Exception hierarchy raised by the RTWire client.

Every failure a caller can see derives from :class:`RTWireError`. Domain
errors reported by the service are mapped onto dedicated subclasses so callers
can branch with ``except InsufficientFunds`` instead of comparing messages.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Type

__all__ = [
    "RTWireError",
    "TransportError",
    "ProtocolError",
    "InvariantViolation",
    "DomainError",
    "InsufficientFunds",
    "TxIDUsed",
    "HookExists",
    "UnknownObjectType",
    "ContentTypeError",
    "classify_domain_error",
]


class RTWireError(Exception):
    """Base class for every error raised by this package."""


class TransportError(RTWireError):
    """The request never produced a response (connection, DNS, timeout)."""


class ProtocolError(RTWireError):
    """The service answered with something that is not a valid envelope."""

    def __init__(
        self,
        message: str,
        *,
        target: Optional[str] = None,
        body: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.target = target
        self.body = body
        self.status_code = status_code

    def __str__(self) -> str:
        message = super().__str__()
        if self.target:
            message = f"{self.target}: {message}"
        if self.body:
            message = f"{message}: {self.body}"
        return message


class InvariantViolation(ProtocolError):
    """A decoded payload broke an operation's cardinality contract."""


class DomainError(RTWireError):
    """A well-formed ``error`` envelope returned by the service."""

    kind: Optional[str] = None

    def __init__(self, message: str, *, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class InsufficientFunds(DomainError):
    """The sending account cannot cover a transfer or debit."""

    kind = "insufficient_funds"


class TxIDUsed(DomainError):
    """The transaction ID has already been consumed by another submission."""

    kind = "txid_used"


class HookExists(DomainError):
    """A web hook with the same URL is already registered."""

    kind = "hook_exists"


class UnknownObjectType(RTWireError):
    def __init__(self, object_type: str) -> None:
        super().__init__(f"unknown object type {object_type!r}")
        self.object_type = object_type


class ContentTypeError(RTWireError):
    def __init__(self, content_type: Optional[str]) -> None:
        super().__init__(f"incorrect content type {content_type!r}")
        self.content_type = content_type


# Messages are matched case-insensitively; codes take precedence when present.
_MESSAGE_KINDS: Dict[str, Type[DomainError]] = {
    "insufficient funds": InsufficientFunds,
    "txid used": TxIDUsed,
    "hook exists": HookExists,
}

_CODE_KINDS: Dict[str, Type[DomainError]] = {
    cls.kind: cls for cls in (InsufficientFunds, TxIDUsed, HookExists) if cls.kind
}


def classify_domain_error(
    message: str,
    code: Optional[str] = None,
    *,
    allowed: Iterable[Type[DomainError]] = (),
) -> DomainError:
    """
    Build the most specific :class:`DomainError` for a service error.

    Only the subclasses listed in ``allowed`` are considered, because the same
    message can mean different things on different endpoints. Anything else is
    returned as a plain :class:`DomainError` carrying the service's message.
    """
    allowed = tuple(allowed)
    candidate: Optional[Type[DomainError]] = None
    if code:
        candidate = _CODE_KINDS.get(code.strip().lower())
    if candidate is None:
        candidate = _MESSAGE_KINDS.get(message.strip().lower())
    if candidate is not None and candidate in allowed:
        return candidate(message, code=code)
    return DomainError(message, code=code)
