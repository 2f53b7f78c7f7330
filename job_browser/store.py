"""Accumulated job records for one browsing session.

Records from successive pages are appended in arrival order. The slug is the
merge key: the first record seen for a slug wins and later duplicates are
dropped, never overwriting what is already there.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, List, Sequence, Set, Tuple

from pydantic import ValidationError

from .errors import JobNotFoundError, MalformedResponseError
from .models import JobRecord

logger = logging.getLogger(__name__)


def _has_slug(record: JobRecord) -> bool:
    return bool((record.slug or "").strip())


def parse_page(payload: Any) -> List[JobRecord]:
    """Turn a raw page payload into job records.

    The payload as a whole must be an object with a ``data`` array, otherwise the
    page is rejected with MalformedResponseError. Individual entries that are not
    objects, fail validation or carry no slug are skipped.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
        raise MalformedResponseError("page payload is not an object with a 'data' array")

    records: List[JobRecord] = []
    skipped = 0
    for item in payload["data"]:
        if not isinstance(item, dict):
            skipped += 1
            continue
        try:
            record = JobRecord.model_validate(item)
        except ValidationError:
            skipped += 1
            continue
        if not _has_slug(record):
            skipped += 1
            continue
        records.append(record)

    if skipped:
        logger.debug("Skipped %d malformed job entries", skipped)
    return records


def merge(existing: Sequence[JobRecord], incoming: Iterable[JobRecord]) -> List[JobRecord]:
    """Append records from `incoming` whose slug is not yet in `existing`."""
    seen: Set[str] = {r.slug for r in existing if r.slug}
    out: List[JobRecord] = list(existing)
    for record in incoming:
        if not _has_slug(record) or record.slug in seen:
            continue
        seen.add(record.slug)  # type: ignore[arg-type]
        out.append(record)
    return out


class JobStore:
    """Append-only, slug-deduplicated list of job records."""

    def __init__(self, records: Iterable[JobRecord] = ()) -> None:
        self._records: Tuple[JobRecord, ...] = tuple(merge([], records))

    @property
    def records(self) -> Tuple[JobRecord, ...]:
        """Immutable snapshot of the current records, in arrival order."""
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[JobRecord]:
        return iter(self._records)

    def slugs(self) -> List[str]:
        return [r.slug for r in self._records if r.slug]

    def merge_page(self, payload: Any) -> int:
        """Merge one raw page payload and return how many records were added.

        A malformed payload raises before anything is changed.
        """
        incoming = parse_page(payload)
        before = len(self._records)
        self._records = tuple(merge(self._records, incoming))
        return len(self._records) - before

    def get(self, slug: str) -> JobRecord:
        for record in self._records:
            if record.slug == slug:
                return record
        raise JobNotFoundError(slug)
