"""Error taxonomy for the browsing pipeline."""

from __future__ import annotations


class JobBrowserError(Exception):
    """Base class for all job browser errors."""


class FetchError(JobBrowserError):
    """A page could not be retrieved or understood.

    `user_message` is the text shown to the user in the status line.
    """

    user_message = "Failed to load jobs."


class RequestTimeoutError(FetchError):
    user_message = "Request timed out. Please try again."


class HttpStatusError(FetchError):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP error {status_code}")
        self.status_code = status_code

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return f"Failed to load jobs: HTTP error {self.status_code}"


class MalformedResponseError(FetchError):
    user_message = "Unexpected response format from API."


class NetworkError(FetchError):
    @property
    def user_message(self) -> str:  # type: ignore[override]
        return f"Failed to load jobs: {self}"


class CorruptCacheError(JobBrowserError):
    """A cached page could not be decoded; the entry must be dropped."""

    def __init__(self, page: int, reason: str = "") -> None:
        super().__init__(f"cached page {page} is corrupt" + (f": {reason}" if reason else ""))
        self.page = page


class JobNotFoundError(JobBrowserError, LookupError):
    def __init__(self, slug: str) -> None:
        super().__init__(f"job not found: {slug!r}")
        self.slug = slug
