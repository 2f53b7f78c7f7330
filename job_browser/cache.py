"""Page cache.

Raw page payloads are kept exactly as the API returned them, keyed by page
number. On the storage side each entry lives under a string key
``"<namespace>_jobs_page_<N>"`` holding JSON text, so any simple key/value string
store can back the cache. There is no eviction and no expiry: an entry only goes
away when it turns out to be unreadable.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import CorruptCacheError

logger = logging.getLogger(__name__)

Payload = Dict[str, Any]


class MemoryStore:
    """Key/value string store that lives as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class JsonFileStore(MemoryStore):
    """Key/value string store persisted as a single JSON object on disk.

    The file is rewritten atomically on every mutation. A missing or unreadable
    file simply starts an empty store.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()
        super().__init__(self._read())

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable cache file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(self._data, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self.path)

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        self._write()

    def delete(self, key: str) -> None:
        if key in self:
            super().delete(key)
            self._write()


class PageCache:
    """Typed mapping from page number to raw page payload."""

    def __init__(self, store: Optional[MemoryStore] = None, namespace: str = "arbeitnow") -> None:
        self.store = store if store is not None else MemoryStore()
        self.namespace = namespace

    def cache_key(self, page: int) -> str:
        return f"{self.namespace}_jobs_page_{page}"

    def get(self, page: int) -> Optional[Payload]:
        """Return the cached payload for `page`, or None on a miss.

        Raises CorruptCacheError when an entry exists but is not a JSON object
        with a ``data`` array. The entry is left in place; dropping it is the
        caller's decision.
        """
        raw = self.store.get(self.cache_key(page))
        if raw is None:
            return None
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            raise CorruptCacheError(page, str(exc)) from exc
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            raise CorruptCacheError(page, "unexpected payload shape")
        return payload

    def put(self, page: int, payload: Payload) -> None:
        self.store.set(self.cache_key(page), json.dumps(payload, ensure_ascii=False))

    def invalidate(self, page: int) -> None:
        logger.debug("Invalidating cached page %s", page)
        self.store.delete(self.cache_key(page))

    def __contains__(self, page: object) -> bool:
        return isinstance(page, int) and self.cache_key(page) in self.store
