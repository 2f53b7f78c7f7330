"""Display projections of job records.

These carry the placeholder and label rules of the job list and the details
panel so a UI only has to lay them out. `JobDetail.description` is the raw
upstream HTML and must be sanitized by whatever renders it.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .models import JobRecord
from .utils import as_text, parse_date_posted, summarize_tags

UNTITLED = "Untitled role"
UNKNOWN_COMPANY = "Unknown company"
NO_LOCATION = "Location not specified"
NOT_FOUND = "Job not found."


class JobCard(BaseModel):
    """One entry of the job list."""

    slug: str
    title: str
    company: str
    location: str
    remote: bool = False
    job_types_label: str = ""
    tags_label: str = ""
    posted_on: Optional[str] = None

    @classmethod
    def from_record(cls, record: JobRecord) -> "JobCard":
        return cls(
            slug=as_text(record.slug),
            title=as_text(record.title) or UNTITLED,
            company=as_text(record.company_name) or UNKNOWN_COMPANY,
            location=as_text(record.location) or NO_LOCATION,
            remote=record.remote,
            job_types_label=", ".join(record.job_types),
            tags_label=summarize_tags(record.tags),
            posted_on=parse_date_posted(record.created_at),
        )


class JobDetail(BaseModel):
    """Content of the details panel for one slug."""

    slug: str
    found: bool = True
    message: Optional[str] = None

    title: str = ""
    company: str = ""
    location_line: str = ""
    remote: bool = False
    job_types: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    description: str = Field(default="", description="Untrusted upstream HTML.")
    action_url: str = ""
    posted_on: Optional[str] = None

    @classmethod
    def from_record(cls, record: JobRecord) -> "JobDetail":
        location = as_text(record.location) or NO_LOCATION
        if record.remote:
            location += " · Remote"
        return cls(
            slug=as_text(record.slug),
            title=as_text(record.title) or UNTITLED,
            company=as_text(record.company_name) or UNKNOWN_COMPANY,
            location_line=location,
            remote=record.remote,
            job_types=list(record.job_types),
            tags=list(record.tags),
            description=as_text(record.description),
            action_url=record.action_url,
            posted_on=parse_date_posted(record.created_at),
        )

    @classmethod
    def not_found(cls, slug: str) -> "JobDetail":
        return cls(slug=slug, found=False, message=NOT_FOUND)
