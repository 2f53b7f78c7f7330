"""Base classes for paginated source connectors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class PageSource(ABC):
    """Abstract base class for a paginated job source.

    Implementations fetch one page per call, store successful payloads in their
    page cache and refuse to start a second request while one is in flight.
    """

    name: str

    @property
    @abstractmethod
    def in_flight(self) -> bool:
        """True while a request is outstanding."""
        raise NotImplementedError

    @abstractmethod
    async def fetch(self, page: int) -> Optional[Dict[str, Any]]:
        """Fetch one page and return its raw payload.

        Returns None without doing anything when another fetch is in flight.
        Raises a FetchError subclass on failure.
        """
        raise NotImplementedError
