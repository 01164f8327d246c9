"""
Parsing of the transaction events the service pushes to registered hooks.

The parser does not authenticate the sender. Restricting who can reach the
hook endpoint is left to the application serving it.
"""

from __future__ import annotations

from typing import Any, List, Optional

from .envelope import TRANSACTIONS_TYPE, Envelope, decode_items
from .errors import ContentTypeError, UnknownObjectType
from .models import TransactionEvent

__all__ = ["JSON_MEDIA_TYPE", "parse_transaction_events", "unmarshal"]

JSON_MEDIA_TYPE = "application/json"


def _media_type(content_type: Optional[str]) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def parse_transaction_events(
    body: bytes | str,
    *,
    content_type: Optional[str],
) -> List[TransactionEvent]:
    """
    Decode one hook delivery into its events, preserving their order.

    The order is not guaranteed to match settlement order; match events on
    their transaction ID. JSON errors from the body propagate unchanged. A
    missing or null ``type`` is reported as the empty unknown tag.
    """
    if _media_type(content_type) != JSON_MEDIA_TYPE:
        raise ContentTypeError(content_type)

    envelope = Envelope.from_json(body, require_type=False)
    if envelope.type != TRANSACTIONS_TYPE:
        raise UnknownObjectType(envelope.type)
    return decode_items(
        envelope.payload, TransactionEvent.from_payload, target="hook event"
    )


def _request_body(request: Any) -> bytes | str:
    body = getattr(request, "body", None)
    if body is None:
        get_data = getattr(request, "get_data", None)
        body = get_data() if callable(get_data) else getattr(request, "data", None)
    if body is None:
        raise TypeError(f"cannot read a body from {type(request).__name__}")
    return body


def unmarshal(request: Any) -> List[TransactionEvent]:
    """
    Parse a hook delivery from a framework request object.

    Works with anything exposing ``headers`` plus ``body`` (Django,
    :class:`requests.PreparedRequest`) or ``get_data()``/``data`` (Flask).
    """
    content_type = request.headers.get("Content-Type")
    if _media_type(content_type) != JSON_MEDIA_TYPE:
        raise ContentTypeError(content_type)
    return parse_transaction_events(_request_body(request), content_type=content_type)
