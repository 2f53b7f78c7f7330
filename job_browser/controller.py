"""Fetch-cache-merge-filter pipeline.

`BrowserController` owns all session state (job store, page counter, loading flag,
filter inputs) and exposes it through explicit commands. A UI binds its own
events to those commands and redraws from `snapshot()` or from the snapshots
pushed to subscribed listeners.

Only one page load runs at a time. The loading flag is checked and set before the
first await, so a second request issued while a load is in progress is dropped
rather than queued.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

from .cache import JsonFileStore, MemoryStore, PageCache
from .errors import CorruptCacheError, FetchError, JobNotFoundError
from .filters import apply_criteria
from .models import BrowserSnapshot, FilterCriteria, JobRecord, PipelineState, StatusKind, StatusMessage
from .settings import Settings
from .sources import ArbeitnowSource, PageSource
from .store import JobStore
from .views import JobCard, JobDetail
from .vocabulary import derive_locations

logger = logging.getLogger(__name__)

Listener = Callable[[BrowserSnapshot], None]

NO_JOBS_LOADED = "No jobs loaded yet."
NO_JOBS_MATCH = "No jobs match your filters."


class BrowserController:
    """Single owner of the browsing session."""

    def __init__(self, source: PageSource, cache: PageCache) -> None:
        self.source = source
        self.cache = cache
        self.store = JobStore()

        self._current_page = 1
        self._loading = False
        self._state = PipelineState.IDLE
        self._status: Optional[StatusMessage] = None
        self._criteria = FilterCriteria()
        self._locations: List[str] = []
        self._view: List[JobRecord] = []
        self._listeners: List[Listener] = []

    @classmethod
    def from_settings(
        cls,
        config: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> "BrowserController":
        """Build a controller wired to the Arbeitnow API."""
        config = config or Settings()
        store = JsonFileStore(config.cache_file) if config.cache_file else MemoryStore()
        cache = PageCache(store, namespace=config.cache_namespace)
        source = ArbeitnowSource(
            cache,
            base_url=config.api_base,
            timeout_s=config.request_timeout_s,
            max_retries=config.max_retries,
            backoff_s=config.backoff_s,
            client=client,
        )
        return cls(source, cache)

    # ----------------------------
    # Read side
    # ----------------------------

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def status(self) -> Optional[StatusMessage]:
        return self._status

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def locations(self) -> List[str]:
        return list(self._locations)

    @property
    def jobs(self) -> List[JobRecord]:
        """The current filtered view."""
        return list(self._view)

    def cards(self) -> List[JobCard]:
        return [JobCard.from_record(r) for r in self._view]

    def empty_message(self) -> Optional[str]:
        if not len(self.store):
            return NO_JOBS_LOADED
        if not self._view:
            return NO_JOBS_MATCH
        return None

    def snapshot(self) -> BrowserSnapshot:
        return BrowserSnapshot(
            jobs=list(self._view),
            locations=list(self._locations),
            state=self._state,
            status=self._status,
            criteria=self._criteria,
            current_page=self._current_page,
            is_loading=self._loading,
            total_loaded=len(self.store),
            empty_message=self.empty_message(),
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener` for snapshots; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    # ----------------------------
    # Page loading
    # ----------------------------

    async def start(self) -> bool:
        """Load the first page."""
        return await self.load_page(self._current_page)

    async def request_next_page(self) -> bool:
        """Advance the page counter and load that page.

        Ignored while this controller is loading or its source has a request in
        flight, so the counter never skips a page.
        """
        if self._loading or self.source.in_flight:
            logger.debug("Next page requested while loading; ignored")
            return False
        self._current_page += 1
        return await self.load_page(self._current_page)

    async def retry(self) -> bool:
        """Load the current page again, e.g. after an error."""
        return await self.load_page(self._current_page)

    async def load_page(self, page: int) -> bool:
        """Run one fetch-merge cycle for `page`.

        Returns True when the page was merged, False when the request was dropped
        or failed. Fetch failures never escape; they leave the controller in the
        error state with a user-facing status message and the job store as it was.
        """
        if self._loading:
            logger.debug("Load of page %s dropped: another load is in progress", page)
            return False

        previous_state, previous_status = self._state, self._status
        self._loading = True
        self._state = PipelineState.LOADING
        self._status = StatusMessage(text=f"Loading jobs (page {page})...")
        self._emit()

        try:
            payload, from_cache = await self._load_payload(page)
            if payload is None:
                self._state = previous_state
                self._status = previous_status
                return False
            added = self.store.merge_page(payload)
        except FetchError as exc:
            logger.warning("Loading page %s failed: %s", page, exc)
            self._state = PipelineState.ERROR
            self._status = StatusMessage(text=exc.user_message, kind=StatusKind.ERROR)
            return False
        except Exception:
            self._state = PipelineState.ERROR
            self._status = StatusMessage(text="Failed to load jobs.", kind=StatusKind.ERROR)
            raise
        finally:
            self._loading = False
            if self._state is not PipelineState.LOADING:
                self._emit()

        self._refresh_vocabulary()
        self._refilter()
        self._state = PipelineState.IDLE
        if from_cache:
            self._status = None
        else:
            self._status = StatusMessage(text=f"Loaded {len(payload['data'])} jobs from page {page}.")
        logger.info(
            "Page %s merged from %s: %d new, %d total",
            page,
            "cache" if from_cache else "network",
            added,
            len(self.store),
        )
        self._emit()
        return True

    async def _load_payload(self, page: int) -> Tuple[Optional[Dict[str, Any]], bool]:
        try:
            cached = self.cache.get(page)
        except CorruptCacheError as exc:
            logger.warning("%s; dropping it and refetching", exc)
            self.cache.invalidate(page)
            cached = None

        if cached is not None:
            logger.debug("Page %s served from cache", page)
            return cached, True

        return await self.source.fetch(page), False

    def _refresh_vocabulary(self) -> None:
        self._locations = derive_locations(self.store)
        if self._criteria.location and self._criteria.location not in self._locations:
            logger.debug("Location filter %r no longer available; cleared", self._criteria.location)
            self._criteria = self._criteria.model_copy(update={"location": ""})

    def _refilter(self) -> None:
        self._view = apply_criteria(self.store.records, self._criteria)

    # ----------------------------
    # Filter commands
    # ----------------------------

    def _update_criteria(self, **changes: Any) -> List[JobRecord]:
        self._criteria = self._criteria.model_copy(update=changes)
        self._refilter()
        self._emit()
        return self.jobs

    def set_search_term(self, term: str) -> List[JobRecord]:
        return self._update_criteria(search_term=term or "")

    def set_location_filter(self, location: str) -> List[JobRecord]:
        return self._update_criteria(location=location or "")

    def set_remote_only(self, remote_only: bool) -> List[JobRecord]:
        return self._update_criteria(remote_only=bool(remote_only))

    def clear_filters(self) -> List[JobRecord]:
        self._criteria = FilterCriteria()
        self._refilter()
        self._emit()
        return self.jobs

    # ----------------------------
    # Details
    # ----------------------------

    def open_details(self, slug: str) -> JobDetail:
        try:
            record = self.store.get(slug)
        except JobNotFoundError:
            logger.debug("Details requested for unknown slug %r", slug)
            return JobDetail.not_found(slug)
        return JobDetail.from_record(record)
