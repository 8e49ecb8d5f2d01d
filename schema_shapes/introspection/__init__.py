"""
Schema Introspection Module

Decides the canonical shape of a schema node.
Supports:
- Known type / array / tuple / map / extended object / base type detection
- $ref resolution across documents (local files, HTTP)
- Cycle detection on pointer chains
"""

from .known_types import KNOWN_TYPE_FORMATS, is_known_type_format, register_known_type
from .reference_resolver import ReferenceResolver, ResolutionContext
from .schema_classifier import SchemaClassifier, analyze_schema

__all__ = [
    "SchemaClassifier",
    "analyze_schema",
    "ReferenceResolver",
    "ResolutionContext",
    "KNOWN_TYPE_FORMATS",
    "is_known_type_format",
    "register_known_type",
]
