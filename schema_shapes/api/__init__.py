"""Document fetchers for referenced schema documents."""

from .document_fetcher import (
    DefaultDocumentFetcher,
    DocumentFetcher,
    FileDocumentFetcher,
    HttpDocumentFetcher,
    InMemoryDocumentFetcher,
)
from .fetch_cache import CachingDocumentFetcher

__all__ = [
    "DocumentFetcher",
    "FileDocumentFetcher",
    "HttpDocumentFetcher",
    "DefaultDocumentFetcher",
    "InMemoryDocumentFetcher",
    "CachingDocumentFetcher",
]
