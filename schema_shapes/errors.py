"""Error types raised while resolving and classifying schemas."""
from typing import Optional


class SchemaClassificationError(Exception):
    """Base class for every classification failure."""


class InvalidInputError(SchemaClassificationError):
    """The schema handed to the classifier is missing or not a schema."""


class DocumentFetchError(SchemaClassificationError):
    """A document could not be read, downloaded or parsed."""

    def __init__(self, location: str, message: str):
        self.location = location
        super().__init__(f"Could not fetch {location}: {message}")


class _PointerError(SchemaClassificationError):
    def __init__(self, pointer: str, location: Optional[str], path: str, message: str):
        self.pointer = pointer
        self.location = location
        self.path = path
        where = f"{location or '<root>'}#{path}"
        super().__init__(f"{message}: $ref '{pointer}' ({where})")


class UnresolvedReferenceError(_PointerError):
    """A $ref target does not exist or its document could not be fetched."""

    def __init__(self, pointer: str, location: Optional[str], path: str, reason: str = ""):
        message = "Unresolved reference"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(pointer, location, path, message)


class CircularReferenceError(_PointerError):
    """A $ref chain came back to a location already being resolved."""

    def __init__(self, pointer: str, location: Optional[str], path: str):
        super().__init__(pointer, location, path, "Circular reference")
