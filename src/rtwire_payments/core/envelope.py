"""
Request dispatch and decoding of the ``{type, next, payload}`` envelope.

Every response from the service is wrapped in an envelope. Success or failure
is decided by the envelope's ``type`` and not by the HTTP status, because the
service reports some domain errors under 2xx responses.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Iterable,
    List,
    Mapping,
    NoReturn,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

import requests

from .config import ClientConfig
from .errors import (
    DomainError,
    InvariantViolation,
    ProtocolError,
    TransportError,
    classify_domain_error,
)

__all__ = [
    "ERROR_TYPE",
    "TRANSACTIONS_TYPE",
    "Envelope",
    "call",
    "decode_items",
    "decode_response",
    "expect_count",
    "expect_one",
    "request_target",
]

ERROR_TYPE = "error"
TRANSACTIONS_TYPE = "transactions"

T = TypeVar("T")


@dataclass(frozen=True)
class Envelope:
    type: str
    next: str
    payload: Any

    @classmethod
    def from_json(cls, raw: bytes | str, *, require_type: bool = True) -> "Envelope":
        """
        Parse an envelope.

        Invalid JSON raises :class:`json.JSONDecodeError`; valid JSON with the
        wrong shape raises :class:`ProtocolError`. With ``require_type=False`` a
        missing or null ``type`` becomes the empty tag instead.
        """
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ProtocolError("envelope is not a JSON object")
        object_type = data.get("type")
        if object_type is None and not require_type:
            object_type = ""
        if not isinstance(object_type, str):
            raise ProtocolError("envelope has no type")
        return cls(
            type=object_type,
            next=data.get("next") or "",
            payload=data.get("payload"),
        )


def _raise_domain_error(
    envelope: Envelope,
    target: str,
    allowed: Iterable[Type[DomainError]],
) -> NoReturn:
    payload = envelope.payload
    if not isinstance(payload, list) or not payload or not isinstance(payload[0], dict):
        raise ProtocolError(
            "malformed error payload", target=target, body=json.dumps(payload)
        )
    first = payload[0]
    message = first.get("message", first.get("Message"))
    if not isinstance(message, str):
        raise ProtocolError(
            "error payload has no message", target=target, body=json.dumps(payload)
        )
    code = first.get("code")
    raise classify_domain_error(
        message, code if isinstance(code, str) else None, allowed=allowed
    )


def decode_response(
    response: requests.Response,
    *,
    target: str,
    allowed: Iterable[Type[DomainError]] = (),
) -> Tuple[str, Any]:
    """
    Turn a completed HTTP exchange into ``(cursor, payload)``.

    An empty 2xx body means the call succeeded without a payload and yields
    ``("", None)``. ``allowed`` lists the distinguished :class:`DomainError`
    subclasses the calling operation recognises.
    """
    body = response.content or b""
    if not body and 200 <= response.status_code < 300:
        return "", None

    try:
        envelope = Envelope.from_json(body)
    except (ValueError, ProtocolError) as exc:
        raise ProtocolError(
            f"invalid envelope ({exc})",
            target=target,
            body=body.decode("utf-8", errors="replace"),
            status_code=response.status_code,
        ) from exc

    if envelope.type == ERROR_TYPE:
        _raise_domain_error(envelope, target, allowed)
    return envelope.next, envelope.payload


def request_target(config: ClientConfig, method: str, path: str) -> str:
    """The ``"METHOD url"`` label attached to errors about a request."""
    return f"{method} {config.endpoint(path)}"


def call(
    session: requests.Session,
    config: ClientConfig,
    method: str,
    path: str,
    *,
    params: Optional[Mapping[str, str]] = None,
    body: Optional[Mapping[str, Any]] = None,
    allowed: Iterable[Type[DomainError]] = (),
) -> Tuple[str, Any]:
    url = config.endpoint(path)
    target = request_target(config, method, path)
    headers = {"Accept": "application/json"}
    logging.debug("Dispatching %s", target)
    try:
        response = session.request(
            method,
            url,
            params=dict(params) if params else None,
            json=body,
            headers=headers,
            auth=config.auth,
            timeout=config.timeout_seconds,
        )
    except requests.RequestException as exc:
        raise TransportError(f"{target}: {exc}") from exc

    logging.debug("%s responded with %s", target, response.status_code)
    return decode_response(response, target=target, allowed=allowed)


def decode_items(
    payload: Any,
    factory: Callable[[Mapping[str, Any]], T],
    *,
    target: str,
) -> List[T]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ProtocolError(
            "expected a list payload", target=target, body=json.dumps(payload)
        )
    items: List[T] = []
    for raw in payload:
        if not isinstance(raw, dict):
            raise ProtocolError(
                "expected an object in payload", target=target, body=json.dumps(raw)
            )
        try:
            items.append(factory(raw))
        except (KeyError, TypeError, ValueError) as exc:
            raise ProtocolError(
                f"cannot decode payload item ({exc!r})",
                target=target,
                body=json.dumps(raw),
            ) from exc
    return items


def expect_count(
    items: List[T], n: int, kind: str, *, target: str, payload: Any
) -> List[T]:
    if len(items) != n:
        raise InvariantViolation(
            f"expected {n} {kind}, got {len(items)}",
            target=target,
            body=json.dumps(payload),
        )
    return items


def expect_one(items: List[T], kind: str, *, target: str, payload: Any) -> T:
    return expect_count(items, 1, kind, target=target, payload=payload)[0]
