"""Data models for the job browser.

Job records are kept close to the upstream payload: the browser only relies on a
handful of named fields and carries everything else through untouched (pydantic
`extra="allow"`). Missing or oddly typed optional fields are coerced here so the
rest of the pipeline can treat them as plain strings, lists and booleans.

This file uses Pydantic v2.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JobRecord(BaseModel):
    """One job posting as returned by the job board API.

    `description` is untrusted HTML straight from the upstream source. Nothing in
    this package sanitizes it; whoever renders it must.
    """

    model_config = ConfigDict(extra="allow")

    slug: Optional[str] = Field(default=None, description="Unique id within a session; merge key.")
    title: Optional[str] = None
    company_name: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    remote: bool = False
    job_types: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[Union[str, int, float]] = Field(
        default=None,
        description="Posting time as provided upstream (ISO string or epoch seconds/ms).",
    )
    url: Optional[str] = None
    apply_url: Optional[str] = None

    @field_validator("remote", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("job_types", "tags", mode="before")
    @classmethod
    def _string_list(cls, value: Any) -> List[str]:
        if not isinstance(value, list):
            return []
        return [v for v in value if isinstance(v, str)]

    @field_validator("slug", "title", "company_name", "location", "description", mode="before")
    @classmethod
    def _number_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def action_url(self) -> str:
        """Link used for the "Apply / View Job" action, or "" when there is none."""
        return self.url or self.apply_url or ""


class FilterCriteria(BaseModel):
    """The three user-controlled filter inputs."""

    search_term: str = ""
    location: str = ""
    remote_only: bool = False

    @property
    def is_default(self) -> bool:
        return not self.search_term and not self.location and not self.remote_only


class PipelineState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


class StatusKind(str, Enum):
    INFO = "info"
    ERROR = "error"


class StatusMessage(BaseModel):
    text: str
    kind: StatusKind = StatusKind.INFO


class BrowserSnapshot(BaseModel):
    """Everything a presentation layer needs to draw the current screen."""

    jobs: List[JobRecord] = Field(default_factory=list, description="Filtered view, in store order.")
    locations: List[str] = Field(default_factory=list, description="Location vocabulary.")
    state: PipelineState = PipelineState.IDLE
    status: Optional[StatusMessage] = None
    criteria: FilterCriteria = Field(default_factory=FilterCriteria)
    current_page: int = 1
    is_loading: bool = False
    total_loaded: int = 0
    empty_message: Optional[str] = None
