"""Utility helpers shared across the browser."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional, Sequence


def as_text(value: Any) -> str:
    """Return `value` if it is a string, otherwise ""."""
    return value if isinstance(value, str) else ""


def summarize_tags(tags: Sequence[str], shown: int = 2) -> str:
    """Join the first `shown` tags and append "+N" for the rest."""
    if not tags:
        return ""
    label = ", ".join(tags[:shown])
    if len(tags) > shown:
        label += f" +{len(tags) - shown}"
    return label


def parse_date_posted(created_at: Any) -> Optional[str]:
    """Normalize various created_at formats to YYYY-MM-DD."""
    if created_at is None or isinstance(created_at, bool):
        return None

    if isinstance(created_at, str):
        created_at = created_at.strip()
        if not created_at:
            return None
        # Best effort for ISO-like strings; fall back to leading 10 chars.
        try:
            return datetime.fromisoformat(created_at.replace("Z", "+00:00")).date().isoformat()
        except ValueError:
            return created_at[:10] if len(created_at) >= 10 else None

    if isinstance(created_at, (int, float)):
        ts = float(created_at)
        # Arbeitnow may return epoch in ms; convert if so.
        if ts > 1e12:
            ts /= 1000.0
        try:
            return datetime.fromtimestamp(ts, tz=timezone.utc).date().isoformat()
        except (OverflowError, OSError, ValueError):
            return None

    return None
