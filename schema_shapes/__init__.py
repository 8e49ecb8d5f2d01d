"""Classify API schema nodes into canonical shapes."""

from .errors import (
    CircularReferenceError,
    DocumentFetchError,
    InvalidInputError,
    SchemaClassificationError,
    UnresolvedReferenceError,
)
from .introspection import ReferenceResolver, ResolutionContext, SchemaClassifier, analyze_schema
from .schema.models import ClassificationResult, SchemaNode

__version__ = "0.1.0"

__all__ = [
    "analyze_schema",
    "SchemaClassifier",
    "ReferenceResolver",
    "ResolutionContext",
    "SchemaNode",
    "ClassificationResult",
    "SchemaClassificationError",
    "InvalidInputError",
    "UnresolvedReferenceError",
    "CircularReferenceError",
    "DocumentFetchError",
]
