"""Location vocabulary for the location filter."""

from __future__ import annotations

from typing import Iterable, List

from .models import JobRecord
from .utils import as_text


def derive_locations(records: Iterable[JobRecord]) -> List[str]:
    """Return the distinct, trimmed, non-blank locations in ascending order."""
    locations = {as_text(r.location).strip() for r in records}
    locations.discard("")
    return sorted(locations)
