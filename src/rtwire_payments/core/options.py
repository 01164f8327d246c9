"""
Query options for the list endpoints and cursor-following helpers.

Options are plain values. They are merged into the request's query string in
the order given, so a later option replaces an earlier one with the same key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Sequence, Tuple, TypeVar

from .models import PENDING

__all__ = [
    "QueryOption",
    "build_query",
    "iter_pages",
    "limit",
    "next_page",
    "pending",
]

T = TypeVar("T")


@dataclass(frozen=True)
class QueryOption:
    key: str
    value: str

    def apply(self, params: Dict[str, str]) -> Dict[str, str]:
        merged = dict(params)
        merged[self.key] = self.value
        return merged


def limit(n: int) -> QueryOption:
    """Cap the number of results returned by one list call."""
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise ValueError(f"limit must be a positive integer, got {n!r}")
    return QueryOption("limit", str(n))


def next_page(cursor: str) -> QueryOption:
    """Resume a listing from the cursor returned by the previous call."""
    return QueryOption("next", cursor)


def pending() -> QueryOption:
    """Only list transactions that are seen but not yet credited."""
    return QueryOption("status", PENDING)


def build_query(options: Iterable[QueryOption]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for option in options:
        params = option.apply(params)
    return params


def iter_pages(
    fetch: Callable[..., Tuple[str, List[T]]],
    *options: QueryOption,
) -> Iterator[T]:
    """
    Yield every item of a paginated listing.

    ``fetch`` is a list operation such as ``client.accounts`` or
    ``functools.partial(client.account_transactions, account_id)``. Paging
    stops when the service returns an empty cursor.
    """
    base: Sequence[QueryOption] = tuple(o for o in options if o.key != "next")
    cursor = next((o.value for o in reversed(options) if o.key == "next"), "")
    while True:
        page_options = list(base)
        if cursor:
            page_options.append(next_page(cursor))
        cursor, items = fetch(*page_options)
        yield from items
        if not cursor:
            return
