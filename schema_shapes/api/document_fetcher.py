"""
Document Fetchers - Load schema documents referenced by $ref pointers.

Supports:
- Local JSON/YAML files (plain paths or file:// URLs)
- Remote documents over HTTP(S)
- In-memory documents (fixtures, pre-loaded specs)
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from urllib.parse import unquote, urlparse

import requests
import yaml
from requests.auth import HTTPBasicAuth

from config import FetchConfig, app_config
from schema_shapes.errors import DocumentFetchError

logger = logging.getLogger(__name__)


def _ensure_mapping(location: str, document: Any) -> Mapping[str, Any]:
    if not isinstance(document, Mapping):
        raise DocumentFetchError(
            location, f"expected a JSON/YAML object, got {type(document).__name__}"
        )
    return document


class DocumentFetcher(ABC):
    """Abstract base class for document fetchers."""

    @abstractmethod
    def fetch(self, location: str) -> Mapping[str, Any]:
        """
        Retrieve and parse the document at a location.

        Args:
            location: Canonical absolute location (file path or URL)

        Returns:
            Parsed root document

        Raises:
            DocumentFetchError: If the document cannot be read or parsed
        """
        pass

    def close(self) -> None:
        """Release connections held by the fetcher."""

    @staticmethod
    def is_remote(location: str) -> bool:
        """Check if a location must be fetched over HTTP."""
        return urlparse(location).scheme in ("http", "https")


class FileDocumentFetcher(DocumentFetcher):
    """Reads JSON or YAML documents from the local filesystem."""

    def fetch(self, location: str) -> Mapping[str, Any]:
        path = self._to_path(location)
        logger.debug(f"Reading schema document: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise DocumentFetchError(location, str(e)) from e

        try:
            if path.suffix.lower() == ".json":
                document = json.loads(content)
            else:
                # YAML is a superset of JSON
                document = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise DocumentFetchError(location, f"invalid document: {e}") from e

        return _ensure_mapping(location, document)

    @staticmethod
    def _to_path(location: str) -> Path:
        parsed = urlparse(location)
        if parsed.scheme == "file":
            return Path(unquote(parsed.path))
        return Path(location)


class HttpDocumentFetcher(DocumentFetcher):
    """
    Downloads documents over HTTP(S)

    Usage:
    ```python
    fetcher = HttpDocumentFetcher(credentials=("user", "secret"), timeout=10)
    document = fetcher.fetch("https://example.com/schemas/pet.json")
    ```
    """

    def __init__(
        self,
        credentials: Optional[tuple] = None,
        timeout: int = 30,
        headers: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize HTTP fetcher

        Args:
            credentials: Tuple of (username, password) for Basic Auth
            timeout: HTTP request timeout in seconds
            headers: Extra request headers
            session: Pre-configured session to reuse
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json, application/yaml;q=0.9"})
        if headers:
            self.session.headers.update(headers)
        if credentials:
            username, password = credentials
            self.session.auth = HTTPBasicAuth(username, password)

    @classmethod
    def from_config(cls, config: FetchConfig) -> "HttpDocumentFetcher":
        """Create a fetcher from application config."""
        credentials = (config.username, config.password) if config.username else None
        return cls(
            credentials=credentials,
            timeout=config.timeout,
            headers={"User-Agent": config.user_agent},
        )

    def fetch(self, location: str) -> Mapping[str, Any]:
        logger.debug(f"Fetching schema document: {location}")
        try:
            response = self.session.get(location, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise DocumentFetchError(location, str(e)) from e

        content_type = response.headers.get("Content-Type", "")
        try:
            if "yaml" in content_type:
                document = yaml.safe_load(response.text)
            else:
                document = response.json()
        except (ValueError, yaml.YAMLError) as e:
            # json.JSONDecodeError and requests' JSONDecodeError are ValueErrors
            raise DocumentFetchError(location, f"invalid document: {e}") from e

        logger.info(f"Fetched schema document from {location}")
        return _ensure_mapping(location, document)

    def close(self) -> None:
        self.session.close()


class DefaultDocumentFetcher(DocumentFetcher):
    """Routes remote locations to HTTP and everything else to the filesystem."""

    def __init__(
        self,
        http: Optional[HttpDocumentFetcher] = None,
        files: Optional[FileDocumentFetcher] = None,
    ):
        self.http = http or HttpDocumentFetcher.from_config(app_config.fetch)
        self.files = files or FileDocumentFetcher()

    def fetch(self, location: str) -> Mapping[str, Any]:
        if self.is_remote(location):
            return self.http.fetch(location)
        return self.files.fetch(location)

    def close(self) -> None:
        self.http.close()
        self.files.close()


class InMemoryDocumentFetcher(DocumentFetcher):
    """Serves fixed documents keyed by location."""

    def __init__(self, documents: Optional[Dict[str, Mapping[str, Any]]] = None):
        self.documents = dict(documents or {})
        self.fetch_counts: Dict[str, int] = {}

    def add(self, location: str, document: Mapping[str, Any]) -> None:
        self.documents[location] = document

    def fetch(self, location: str) -> Mapping[str, Any]:
        self.fetch_counts[location] = self.fetch_counts.get(location, 0) + 1
        if location not in self.documents:
            raise DocumentFetchError(location, "no such document")
        return _ensure_mapping(location, self.documents[location])
