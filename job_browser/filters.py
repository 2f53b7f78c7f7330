"""Filtering of the job store into the view shown to the user."""

from __future__ import annotations

from typing import Iterable, List

from .models import FilterCriteria, JobRecord
from .utils import as_text


def matches(record: JobRecord, search_term: str = "", location: str = "", remote_only: bool = False) -> bool:
    """Check one record against the three filter inputs.

    The search term is trimmed and matched case-insensitively against the title
    and company name. The location must equal the record's location verbatim,
    as it appears in the location vocabulary.
    """
    term = search_term.strip().lower()
    if term:
        title = as_text(record.title).lower()
        company = as_text(record.company_name).lower()
        if term not in title and term not in company:
            return False

    if location and as_text(record.location) != location:
        return False

    if remote_only and not record.remote:
        return False

    return True


def apply_filters(
    records: Iterable[JobRecord],
    search_term: str = "",
    location: str = "",
    remote_only: bool = False,
) -> List[JobRecord]:
    """Return the matching records, preserving their order."""
    return [r for r in records if matches(r, search_term, location, remote_only)]


def apply_criteria(records: Iterable[JobRecord], criteria: FilterCriteria) -> List[JobRecord]:
    return apply_filters(records, criteria.search_term, criteria.location, criteria.remote_only)


__all__ = ["FilterCriteria", "apply_criteria", "apply_filters", "matches"]
