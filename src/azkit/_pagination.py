"""ARM pagination helper."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from azkit._transport import send


def _iter_pages(url: str, headers: Mapping[str, str]) -> Iterator[list[dict]]:
    """Yield the ``value`` list of every page of an ARM list endpoint."""
    next_url: str | None = url
    while next_url:
        data = send("GET", next_url, headers=headers).json()
        yield data.get("value", [])
        next_url = data.get("nextLink")


def _paginate(url: str, headers: Mapping[str, str]) -> list[dict]:
    """Fetch all pages from an ARM list endpoint and return the merged values."""
    items: list[dict] = []
    for page in _iter_pages(url, headers):
        items.extend(page)
    return items
