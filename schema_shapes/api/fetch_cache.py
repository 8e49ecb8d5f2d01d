"""Thread-safe document cache shared across classification calls."""
import logging
import threading
from typing import Any, Dict, Mapping

from schema_shapes.errors import DocumentFetchError

from .document_fetcher import DocumentFetcher

logger = logging.getLogger(__name__)


class CachingDocumentFetcher(DocumentFetcher):
    """
    Wraps a fetcher and remembers every document it returned

    Each location has its own lock, so a slow download only blocks callers
    waiting for that same location. Failed fetches are not remembered, and
    neither is the lock of a location whose fetch failed.
    """

    def __init__(self, fetcher: DocumentFetcher):
        self.fetcher = fetcher
        self._documents: Dict[str, Mapping[str, Any]] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def fetch(self, location: str) -> Mapping[str, Any]:
        with self._registry_lock:
            if location in self._documents:
                logger.debug(f"Document cache hit: {location}")
                return self._documents[location]
            lock = self._locks.setdefault(location, threading.Lock())

        with lock:
            # Another thread may have filled the entry while we waited
            with self._registry_lock:
                if location in self._documents:
                    return self._documents[location]

            try:
                document = self.fetcher.fetch(location)
            except DocumentFetchError:
                with self._registry_lock:
                    if self._locks.get(location) is lock:
                        del self._locks[location]
                raise

            with self._registry_lock:
                self._documents[location] = document
            return document

    def __contains__(self, location: str) -> bool:
        with self._registry_lock:
            return location in self._documents

    def clear(self) -> None:
        """Drop every cached document; fetches in flight keep their locks"""
        with self._registry_lock:
            self._documents.clear()

    def close(self) -> None:
        self.fetcher.close()
