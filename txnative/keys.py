"""Stable lookup keys for source strings.

Keys are shared with the offline extraction tooling that builds the catalog
served by the CDS, so the algorithm must never change: the md5 hex digest of
``"<source>:<context>"`` where context items are joined with ``":"``.
"""

from __future__ import annotations

from hashlib import md5
from typing import Iterable


def explode_context(context: str | Iterable[str] | None) -> list[str]:
    """Normalize a comma separated string (or iterable) into context items."""

    if not context:
        return []
    items = context.split(",") if isinstance(context, str) else list(context)
    return [item.strip() for item in items if item and item.strip()]


def generate_key(string: str, context: str | Iterable[str] | None = None) -> str:
    joined = ":".join(explode_context(context))
    return md5(f"{string}:{joined}".encode("utf-8")).hexdigest()


__all__ = ["explode_context", "generate_key"]
