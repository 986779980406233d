from collections.abc import Mapping
from typing import Any

import httpx


def fetch_view_stats(
    days: int,
    base_url: str,
    timeout: float = 15.0,
) -> list[dict[str, object]]:
    """Fetch the trailing daily view counts from the link-keeping service."""

    response = httpx.get(
        f"{base_url.rstrip('/')}/stats/views",
        params={"days": days},
        headers={
            "Accept": "application/json",
            "User-Agent": "viewmap",
        },
        timeout=timeout,
    )
    response.raise_for_status()

    payload: Any = response.json()
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ValueError("View stats response is invalid")

    items: list[dict[str, object]] = []
    for item in payload:
        if not isinstance(item, Mapping):
            raise ValueError("View stats entry is invalid")
        items.append({"date": item.get("date"), "count": item.get("count")})

    return items
