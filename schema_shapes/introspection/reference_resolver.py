"""
Reference Resolver - Dereferences $ref pointers across documents.

Supports:
- Same-document pointers (#/definitions/Pet, #/components/schemas/Pet)
- Relative local documents (common.yaml#/Pet)
- Remote documents (https://example.com/schemas.json#/Pet)
- Chained pointers, with cycle detection
- One fetch per external document per classification call
"""

import logging
import os
import re
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional, Set, Tuple
from urllib.parse import unquote, urldefrag, urljoin, urlparse

from schema_shapes.api.document_fetcher import DefaultDocumentFetcher, DocumentFetcher
from schema_shapes.errors import (
    CircularReferenceError,
    DocumentFetchError,
    SchemaClassificationError,
    UnresolvedReferenceError,
)
from schema_shapes.schema.models import SchemaNode

logger = logging.getLogger(__name__)

URL_SCHEMES = ("http", "https", "file")

# (document location, JSON pointer path); location None is the root document
VisitKey = Tuple[Optional[str], str]

# RFC 6901 array index: no sign, no leading zeros, ASCII digits only
ARRAY_INDEX = re.compile(r"0|[1-9][0-9]*")


def _is_url(location: str) -> bool:
    return urlparse(location).scheme in URL_SCHEMES


def canonical_location(location: str) -> str:
    """Absolute form of a location, used as the document cache key"""
    location, _ = urldefrag(location)
    parsed = urlparse(location)
    if parsed.scheme in ("http", "https"):
        return location
    if parsed.scheme == "file":
        return os.path.abspath(unquote(parsed.path))
    return os.path.abspath(location)


def join_location(base: Optional[str], reference: str) -> str:
    """Resolve a document reference against the location of the referring document"""
    if _is_url(reference):
        return canonical_location(reference)
    if base and _is_url(base):
        return canonical_location(urljoin(base, reference))
    base_dir = os.path.dirname(base) if base else os.getcwd()
    return canonical_location(os.path.join(base_dir, reference))


def _decode_segment(segment: str) -> str:
    return segment.replace("~1", "/").replace("~0", "~")


class ResolutionContext:
    """
    State for one top-level classification call

    Owns the root document, the base location, the documents fetched so far
    and the (location, path) pairs currently being resolved.
    """

    def __init__(
        self,
        root: Optional[Mapping[str, Any]] = None,
        base_location: Optional[str] = None,
        fetcher: Optional[DocumentFetcher] = None,
    ):
        self.root = root
        self.base_location = canonical_location(base_location) if base_location else None
        self._fetcher = fetcher
        self._owns_fetcher = fetcher is None
        self.documents: dict = {}
        self.visited: Set[VisitKey] = set()

        if root is not None and self.base_location:
            self.documents[self.base_location] = root

    @property
    def fetcher(self) -> DocumentFetcher:
        if self._fetcher is None:
            self._fetcher = DefaultDocumentFetcher()
        return self._fetcher

    def close(self) -> None:
        """Close the default fetcher if this context created one"""
        if self._owns_fetcher and self._fetcher is not None:
            self._fetcher.close()
            self._fetcher = None

    def release(self, chain: List[VisitKey]) -> None:
        """Take a finished resolution chain off the visited stack"""
        for key in chain:
            self.visited.discard(key)


class ReferenceResolver:
    """
    Resolves $ref pointers to concrete schema nodes

    Usage:
    ```python
    context = ResolutionContext(root=spec, base_location="specs/petstore.yaml")
    resolver = ReferenceResolver()
    with resolver.resolving(SchemaNode(pointer="#/definitions/Pet"), context) as pet:
        print(pet.properties.keys())
    ```
    """

    def resolve(self, node: SchemaNode, context: ResolutionContext) -> SchemaNode:
        """
        Follow a pointer (and any pointer it leads to) to a concrete node

        Args:
            node: Schema node, possibly holding a $ref
            context: Resolution state of the current call

        Returns:
            First node reached that is not a pointer

        Raises:
            UnresolvedReferenceError: If a target or its document is missing
            CircularReferenceError: If the chain revisits a location
        """
        concrete, chain = self._follow(node, context)
        context.release(chain)
        return concrete

    @contextmanager
    def resolving(self, node: SchemaNode, context: ResolutionContext) -> Iterator[SchemaNode]:
        """
        Resolve a node and keep its chain on the visited stack while in use

        Nested pointers reached from inside the block that lead back into the
        chain are reported as circular.
        """
        concrete, chain = self._follow(node, context)
        try:
            yield concrete
        finally:
            context.release(chain)

    def _follow(self, node: SchemaNode, context: ResolutionContext) -> Tuple[SchemaNode, List[VisitKey]]:
        chain: List[VisitKey] = []
        try:
            while node.is_pointer:
                pointer = node.pointer
                location, path = self._parse_pointer(pointer, node.location or context.base_location)
                key = (location, path)
                if key in context.visited:
                    logger.warning(f"Circular reference detected: {pointer}")
                    raise CircularReferenceError(pointer, location, path)

                context.visited.add(key)
                chain.append(key)

                document = self._load_document(pointer, location, path, context)
                target = self._walk(document, pointer, location, path)
                logger.debug(f"Resolved {pointer} -> {location or '<root>'}#{path}")
                node = SchemaNode.from_dict(target, location)
        except SchemaClassificationError:
            context.release(chain)
            raise

        return node, chain

    @staticmethod
    def _parse_pointer(pointer: str, current: Optional[str]) -> VisitKey:
        """Split a $ref into (canonical document location, JSON pointer path)"""
        document_part, _, fragment = pointer.partition("#")
        location = join_location(current, document_part) if document_part else current
        return location, unquote(fragment)

    def _load_document(
        self,
        pointer: str,
        location: Optional[str],
        path: str,
        context: ResolutionContext,
    ) -> Mapping[str, Any]:
        if location is None or location == context.base_location:
            if context.root is not None:
                return context.root
            if location is None:
                logger.warning(f"No root document to resolve {pointer}")
                raise UnresolvedReferenceError(pointer, location, path, "no root document")

        if location in context.documents:
            logger.debug(f"Using cached document: {location}")
            return context.documents[location]

        try:
            document = context.fetcher.fetch(location)
        except DocumentFetchError as e:
            logger.warning(f"Failed to fetch {location} for {pointer}: {e}")
            raise UnresolvedReferenceError(pointer, location, path, str(e)) from e

        context.documents[location] = document
        return document

    @staticmethod
    def _walk(document: Any, pointer: str, location: Optional[str], path: str) -> Mapping[str, Any]:
        """Navigate a document using an RFC 6901 JSON pointer"""
        if path and not path.startswith("/"):
            raise UnresolvedReferenceError(pointer, location, path, "not a JSON pointer")

        current = document
        segments = path.split("/")[1:] if path else []

        for raw_segment in segments:
            segment = _decode_segment(raw_segment)
            if isinstance(current, Mapping) and segment in current:
                current = current[segment]
            elif isinstance(current, list) and ARRAY_INDEX.fullmatch(segment) and int(segment) < len(current):
                current = current[int(segment)]
            else:
                logger.warning(f"Unresolved reference {pointer}: '{segment}' not found")
                raise UnresolvedReferenceError(pointer, location, path, f"'{segment}' not found")

        if not isinstance(current, Mapping):
            raise UnresolvedReferenceError(
                pointer, location, path, f"target is a {type(current).__name__}, not a schema"
            )
        return current
